from pathlib import Path
from typing import Any, Mapping, Protocol, Sequence, runtime_checkable

from src.media_import.domain.models import FileInfo, InlinePayloadReference, MediaRecord, StagedFile


@runtime_checkable
class MediaRegistryPort(Protocol):
    async def find_one(self, record_id: int) -> MediaRecord | None: ...
    """Return the record with this id, if any."""

    async def find_many(self, filters: Mapping[str, Any], limit: int) -> Sequence[MediaRecord]: ...
    """Return up to `limit` records whose fields equal `filters`."""

    async def create(self, payload: Mapping[str, Any], user: Any) -> MediaRecord: ...

    async def update_id(self, record_id: int, new_id: int) -> MediaRecord: ...


@runtime_checkable
class UploadServicePort(Protocol):
    async def upload(self, staged: StagedFile, file_info: FileInfo, user: Any) -> MediaRecord: ...
    """Persist a staged file and register it; the user is passed through untouched."""


@runtime_checkable
class RemoteFetcherPort(Protocol):
    async def fetch(self, url: str, workdir: Path) -> StagedFile: ...


@runtime_checkable
class InlineDecoderPort(Protocol):
    def decode(self, reference: InlinePayloadReference, workdir: Path) -> StagedFile: ...
