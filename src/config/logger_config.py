import os
from pathlib import Path

from loguru import logger

log_dir = Path("logs")
log_file = log_dir / "media_import_{time}.log"

logger.remove()
logger.add(
    log_file,
    rotation="256 MB",
    retention="10 days",
    compression="zip",
    encoding="utf-8",
    level=os.getenv("MEDIA_IMPORT_LOG_LEVEL", "DEBUG"),
    enqueue=True,
)
