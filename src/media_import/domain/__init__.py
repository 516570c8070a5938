"""Domain models and deterministic rules for media import."""

from src.media_import.domain.errors import (
    FetchFailed,
    InvalidInputFormat,
    InvalidUrl,
    MediaImportError,
    UnknownFileCategory,
)
from src.media_import.domain.models import (
    FileInfo,
    Fingerprint,
    InlinePayloadReference,
    MediaIdReference,
    MediaLookupReference,
    MediaRecord,
    MediaUrlReference,
    ReferenceDescriptor,
    ResolutionResult,
    ResolutionStatus,
    StagedFile,
)
from src.media_import.domain.rules import (
    fingerprint_url,
    is_extension_allowed,
    is_inline_payload,
    parse_reference,
    validate_file_categories,
)

__all__ = [
    "FetchFailed",
    "FileInfo",
    "Fingerprint",
    "fingerprint_url",
    "InlinePayloadReference",
    "InvalidInputFormat",
    "InvalidUrl",
    "is_extension_allowed",
    "is_inline_payload",
    "MediaIdReference",
    "MediaImportError",
    "MediaLookupReference",
    "MediaRecord",
    "MediaUrlReference",
    "parse_reference",
    "ReferenceDescriptor",
    "ResolutionResult",
    "ResolutionStatus",
    "StagedFile",
    "UnknownFileCategory",
    "validate_file_categories",
]
