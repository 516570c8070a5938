"""Media import package."""

from src.media_import.domain.models import MediaRecord, ResolutionResult, ResolutionStatus
from src.media_import.resolve import find_or_import_file, find_or_import_file_async

__all__ = [
    "find_or_import_file",
    "find_or_import_file_async",
    "MediaRecord",
    "ResolutionResult",
    "ResolutionStatus",
]
