# Runtime configuration for media import, read from the environment / .env

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_ALLOWED_FILE_TYPES = ("any",)
DEFAULT_STAGING_PREFIX = "media-import-"
DEFAULT_DB_PATH = Path("artifacts/media/media_registry.db")
DEFAULT_UPLOAD_DIR = Path("artifacts/media/uploads")


@dataclass(frozen=True)
class MediaImportSettings:
    allowed_file_types: tuple[str, ...] = DEFAULT_ALLOWED_FILE_TYPES
    staging_prefix: str = DEFAULT_STAGING_PREFIX
    staging_root: Path | None = None
    db_path: Path = DEFAULT_DB_PATH
    upload_dir: Path = DEFAULT_UPLOAD_DIR
    fetch_timeout_seconds: float | None = None

    @classmethod
    def from_env(cls) -> "MediaImportSettings":
        allowed = tuple(
            part.strip().lower()
            for part in os.getenv("MEDIA_IMPORT_ALLOWED_FILE_TYPES", ",".join(DEFAULT_ALLOWED_FILE_TYPES)).split(",")
            if part.strip()
        )
        staging_root = os.getenv("MEDIA_IMPORT_STAGING_ROOT", "").strip()
        timeout = os.getenv("MEDIA_IMPORT_FETCH_TIMEOUT", "").strip()
        return cls(
            allowed_file_types=allowed or DEFAULT_ALLOWED_FILE_TYPES,
            staging_prefix=os.getenv("MEDIA_IMPORT_STAGING_PREFIX", DEFAULT_STAGING_PREFIX),
            staging_root=Path(staging_root) if staging_root else None,
            db_path=Path(os.getenv("MEDIA_IMPORT_DB_PATH", str(DEFAULT_DB_PATH))),
            upload_dir=Path(os.getenv("MEDIA_IMPORT_UPLOAD_DIR", str(DEFAULT_UPLOAD_DIR))),
            fetch_timeout_seconds=float(timeout) if timeout else None,
        )
