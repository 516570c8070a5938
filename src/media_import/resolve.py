from __future__ import annotations
import asyncio
from pathlib import Path
from typing import Any, Iterable

import aiohttp

from src.config.settings import MediaImportSettings
from src.media_import.application.workflows.resolve_media import MediaResolver, ResolverConfig
from src.media_import.domain.models import MediaRecord
from src.media_import.infrastructure.inline_decoder import InlineDecoder
from src.media_import.infrastructure.local_upload import LocalUploadService
from src.media_import.infrastructure.registry_sqlite import SQLiteMediaRegistry
from src.media_import.infrastructure.remote_fetcher import RemoteFetcher


async def find_or_import_file_async(
    reference: Any,
    user: Any = None,
    *,
    allowed_file_types: Iterable[str] | None = None,
    db_path: str | Path | None = None,
    upload_dir: str | Path | None = None,
    settings: MediaImportSettings | None = None,
) -> MediaRecord | None:
    settings = settings or MediaImportSettings.from_env()
    registry = SQLiteMediaRegistry(db_path or settings.db_path)
    upload_service = LocalUploadService(registry, upload_dir or settings.upload_dir)
    timeout = (
        aiohttp.ClientTimeout(total=settings.fetch_timeout_seconds)
        if settings.fetch_timeout_seconds is not None
        else None
    )
    try:
        async with aiohttp.ClientSession() as session:
            resolver = MediaResolver(
                registry=registry,
                upload_service=upload_service,
                fetcher=RemoteFetcher(session, timeout=timeout),
                inline_decoder=InlineDecoder(),
                config=_build_resolver_config(settings),
            )
            return await resolver.resolve(reference, user, allowed_file_types)
    finally:
        registry.close()


def find_or_import_file(
    reference: Any,
    user: Any = None,
    *,
    allowed_file_types: Iterable[str] | None = None,
    db_path: str | Path | None = None,
    upload_dir: str | Path | None = None,
    settings: MediaImportSettings | None = None,
) -> MediaRecord | None:
    return asyncio.run(
        find_or_import_file_async(
            reference,
            user,
            allowed_file_types=allowed_file_types,
            db_path=db_path,
            upload_dir=upload_dir,
            settings=settings,
        )
    )


def _build_resolver_config(settings: MediaImportSettings) -> ResolverConfig:
    return ResolverConfig(
        allowed_file_types=settings.allowed_file_types,
        staging_prefix=settings.staging_prefix,
        staging_root=settings.staging_root,
    )
