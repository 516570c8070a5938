import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from src.config.logger_config import logger
from src.config.settings import DEFAULT_STAGING_PREFIX


@contextmanager
def staging_directory(prefix: str = DEFAULT_STAGING_PREFIX, root: str | Path | None = None) -> Iterator[Path]:
    """Create a unique temp directory and remove it, with its content, on exit."""
    tmp_path = Path(tempfile.mkdtemp(prefix=prefix, dir=root))
    try:
        yield tmp_path
    finally:
        shutil.rmtree(tmp_path, ignore_errors=True)
        logger.debug("Removed staging directory {}", str(tmp_path))


def write_staged_bytes(workdir: Path, filename: str, content: bytes) -> Path:
    file_path = workdir / filename
    file_path.write_bytes(content)
    return file_path
