from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Union


@dataclass(frozen=True)
class MediaLookupReference:
    id: int | None = None
    hash: str | None = None
    name: str | None = None
    url: str | None = None
    alternative_text: str | None = None
    caption: str | None = None


@dataclass(frozen=True)
class MediaIdReference:
    id: int

    def to_lookup(self) -> MediaLookupReference:
        return MediaLookupReference(id=self.id)


@dataclass(frozen=True)
class MediaUrlReference:
    url: str

    def to_lookup(self) -> MediaLookupReference:
        return MediaLookupReference(url=self.url)


@dataclass(frozen=True)
class InlinePayloadReference:
    mime_type: str
    payload: str


ReferenceDescriptor = Union[MediaIdReference, MediaUrlReference, MediaLookupReference, InlinePayloadReference]


@dataclass(frozen=True)
class Fingerprint:
    hash: str
    name: str
    extension: str


@dataclass(frozen=True)
class StagedFile:
    name: str
    mime_type: str
    size_bytes: int
    local_path: Path


@dataclass(frozen=True)
class FileInfo:
    name: str
    alternative_text: str = ""
    caption: str = ""


@dataclass(frozen=True)
class MediaRecord:
    id: int
    hash: str
    name: str
    ext: str
    mime: str
    size: int
    url: str
    alternative_text: str = ""
    caption: str = ""
    created_by: str | None = None

    @property
    def extension(self) -> str:
        return self.ext.lstrip(".").lower()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "hash": self.hash,
            "name": self.name,
            "ext": self.ext,
            "mime": self.mime,
            "size": self.size,
            "url": self.url,
            "alternative_text": self.alternative_text,
            "caption": self.caption,
            "created_by": self.created_by,
        }


class ResolutionStatus(str, Enum):
    FOUND = "found"
    IMPORTED = "imported"
    REJECTED = "rejected"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class ResolutionResult:
    status: ResolutionStatus
    record: MediaRecord | None = None
