from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

from src.config.logger_config import logger
from src.config.settings import DEFAULT_ALLOWED_FILE_TYPES, DEFAULT_STAGING_PREFIX
from src.media_import.application.ports import (
    InlineDecoderPort,
    MediaRegistryPort,
    RemoteFetcherPort,
    UploadServicePort,
)
from src.media_import.domain.errors import InvalidUrl
from src.media_import.domain.models import (
    FileInfo,
    Fingerprint,
    InlinePayloadReference,
    MediaLookupReference,
    MediaRecord,
    ResolutionResult,
    ResolutionStatus,
)
from src.media_import.domain.rules import (
    fingerprint_url,
    is_extension_allowed,
    parse_reference,
    validate_file_categories,
)
from src.media_import.infrastructure.staging import staging_directory


@dataclass(frozen=True)
class ResolverConfig:
    allowed_file_types: tuple[str, ...] = DEFAULT_ALLOWED_FILE_TYPES
    staging_prefix: str = DEFAULT_STAGING_PREFIX
    staging_root: Path | None = None


class MediaResolver:
    """Resolves a media reference to one stored record, importing it when unknown.

    Lookup order is id, hash, name. When all miss and a url is present, the url
    fingerprint is checked against the allowed file types and looked up again by
    its derived hash and name before the remote file is fetched and registered.

    Two concurrent calls importing the same new url can both miss the lookup and
    create two records; nothing here serializes them.
    """

    def __init__(
        self,
        registry: MediaRegistryPort,
        upload_service: UploadServicePort,
        fetcher: RemoteFetcherPort,
        inline_decoder: InlineDecoderPort,
        config: ResolverConfig | None = None,
    ) -> None:
        self.registry = registry
        self.upload_service = upload_service
        self.fetcher = fetcher
        self.inline_decoder = inline_decoder
        self.config = config or ResolverConfig()
        validate_file_categories(self.config.allowed_file_types)

    async def resolve(
        self,
        reference: Any,
        user: Any,
        allowed_file_types: Iterable[str] | None = None,
    ) -> MediaRecord | None:
        result = await self.resolve_with_outcome(reference, user, allowed_file_types)
        return result.record

    async def resolve_with_outcome(
        self,
        reference: Any,
        user: Any,
        allowed_file_types: Iterable[str] | None = None,
    ) -> ResolutionResult:
        allowed = (
            validate_file_categories(allowed_file_types)
            if allowed_file_types is not None
            else self.config.allowed_file_types
        )
        descriptor = parse_reference(reference)

        if isinstance(descriptor, InlinePayloadReference):
            record = await self._import_inline(descriptor, user)
            return ResolutionResult(status=ResolutionStatus.IMPORTED, record=record)

        lookup = descriptor if isinstance(descriptor, MediaLookupReference) else descriptor.to_lookup()

        record = await self._find_record(lookup)
        if record is not None:
            return self._accept_found(record, allowed)

        if not lookup.url:
            return ResolutionResult(status=ResolutionStatus.NOT_FOUND)

        fingerprint = self._check_url(lookup.url, allowed)
        if fingerprint is None:
            return ResolutionResult(status=ResolutionStatus.REJECTED)

        record = await self._find_record(MediaLookupReference(hash=fingerprint.hash, name=fingerprint.name))
        if record is not None:
            return self._accept_found(record, allowed)

        record = await self._import_from_url(lookup, user)
        return ResolutionResult(status=ResolutionStatus.IMPORTED, record=record)

    async def _find_record(self, lookup: MediaLookupReference) -> MediaRecord | None:
        # Registry ids start at 1; an id of 0 counts as absent.
        if lookup.id:
            record = await self.registry.find_one(lookup.id)
            if record is not None:
                logger.debug("Media found by id {}", lookup.id)
                return record
        if lookup.hash:
            record = await self._find_first("hash", lookup.hash)
            if record is not None:
                return record
        if lookup.name:
            record = await self._find_first("name", lookup.name)
            if record is not None:
                return record
        return None

    async def _find_first(self, field: str, value: str) -> MediaRecord | None:
        records = await self.registry.find_many({field: value}, limit=1)
        if not records:
            return None
        logger.debug("Media found by {} '{}'", field, value)
        return records[0]

    def _accept_found(self, record: MediaRecord, allowed: tuple[str, ...]) -> ResolutionResult:
        if not is_extension_allowed(record.extension, allowed):
            logger.warning(
                "Media {} has extension '{}' outside allowed types {}",
                record.id,
                record.extension,
                list(allowed),
            )
            return ResolutionResult(status=ResolutionStatus.REJECTED)
        return ResolutionResult(status=ResolutionStatus.FOUND, record=record)

    def _check_url(self, url: str, allowed: tuple[str, ...]) -> Fingerprint | None:
        try:
            fingerprint = fingerprint_url(url)
        except InvalidUrl as exc:
            logger.error("Skipping media url: {}", exc)
            return None

        if not is_extension_allowed(fingerprint.extension, allowed):
            logger.warning(
                "Media url {} has extension '{}' outside allowed types {}",
                url,
                fingerprint.extension,
                list(allowed),
            )
            return None
        return fingerprint

    async def _import_from_url(self, lookup: MediaLookupReference, user: Any) -> MediaRecord:
        with staging_directory(self.config.staging_prefix, self.config.staging_root) as workdir:
            try:
                staged = await self.fetcher.fetch(lookup.url, workdir)
                record = await self.upload_service.upload(
                    staged,
                    FileInfo(
                        name=lookup.name or staged.name,
                        alternative_text=lookup.alternative_text or "",
                        caption=lookup.caption or "",
                    ),
                    user,
                )
                if lookup.id:
                    record = await self.registry.update_id(record.id, lookup.id)
            except Exception as exc:
                logger.error("Importing media from {} failed: {}", lookup.url, exc)
                raise

        logger.info("Imported media {} from {}", record.id, lookup.url)
        return record

    async def _import_inline(self, reference: InlinePayloadReference, user: Any) -> MediaRecord:
        # Inline payloads are never deduplicated and never keep a caller id.
        with staging_directory(self.config.staging_prefix, self.config.staging_root) as workdir:
            try:
                staged = self.inline_decoder.decode(reference, workdir)
                record = await self.upload_service.upload(staged, FileInfo(name=staged.name), user)
            except Exception as exc:
                logger.error("Importing inline {} payload failed: {}", reference.mime_type, exc)
                raise

        logger.info("Imported inline media {} as {}", record.id, record.name)
        return record
