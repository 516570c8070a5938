"""Infrastructure adapters for media import."""

from src.media_import.infrastructure.inline_decoder import InlineDecoder
from src.media_import.infrastructure.local_upload import LocalUploadService
from src.media_import.infrastructure.registry_sqlite import SQLiteMediaRegistry
from src.media_import.infrastructure.remote_fetcher import RemoteFetcher
from src.media_import.infrastructure.staging import staging_directory

__all__ = [
    "InlineDecoder",
    "LocalUploadService",
    "RemoteFetcher",
    "SQLiteMediaRegistry",
    "staging_directory",
]
