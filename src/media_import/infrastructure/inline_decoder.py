import base64
import binascii
import time
from pathlib import Path
from typing import Callable

from src.config.logger_config import logger
from src.media_import.domain.errors import InvalidInputFormat
from src.media_import.domain.models import InlinePayloadReference, StagedFile
from src.media_import.domain.rules import make_inline_filename
from src.media_import.infrastructure.staging import write_staged_bytes


class InlineDecoder:
    """Decodes `data:<mime>;base64,<payload>` references into staged files."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self.clock = clock

    def decode(self, reference: InlinePayloadReference, workdir: Path) -> StagedFile:
        filename = make_inline_filename(reference.mime_type, int(self.clock() * 1000))
        try:
            content = base64.b64decode(reference.payload, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise InvalidInputFormat("Invalid base64 payload") from exc

        file_path = write_staged_bytes(workdir, filename, content)
        logger.debug("Decoded inline payload into {} ({} bytes)", str(file_path), len(content))
        return StagedFile(
            name=filename,
            mime_type=reference.mime_type,
            size_bytes=len(content),
            local_path=file_path,
        )
