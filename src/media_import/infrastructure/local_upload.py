import shutil
import uuid
from pathlib import Path
from typing import Any

from src.config.logger_config import logger
from src.media_import.application.ports import MediaRegistryPort
from src.media_import.domain.models import FileInfo, MediaRecord, StagedFile
from src.media_import.domain.rules import sanitize_filename


class LocalUploadService:
    """Copies staged files into a local upload directory and registers them."""

    def __init__(self, registry: MediaRegistryPort, upload_dir: str | Path) -> None:
        self.registry = registry
        self.upload_dir = Path(upload_dir)
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    async def upload(self, staged: StagedFile, file_info: FileInfo, user: Any) -> MediaRecord:
        source_name = Path(staged.name)
        ext = source_name.suffix.lower()
        file_hash = f"{sanitize_filename(source_name.stem)}_{uuid.uuid4().hex[:10]}"
        target = self.upload_dir / f"{file_hash}{ext}"
        shutil.copyfile(staged.local_path, target)

        try:
            record = await self.registry.create(
                {
                    "hash": file_hash,
                    "name": file_info.name,
                    "ext": ext,
                    "mime": staged.mime_type,
                    "size": staged.size_bytes,
                    "url": str(target),
                    "alternative_text": file_info.alternative_text,
                    "caption": file_info.caption,
                },
                user,
            )
        except Exception:
            target.unlink(missing_ok=True)
            raise

        logger.info("Stored {} as {} (id {})", file_info.name, target.name, record.id)
        return record
