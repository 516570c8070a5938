from pathlib import Path

import aiohttp

from src.config.logger_config import logger
from src.media_import.domain.errors import FetchFailed
from src.media_import.domain.models import StagedFile
from src.media_import.domain.rules import fingerprint_url, sanitize_filename
from src.media_import.infrastructure.staging import write_staged_bytes


class RemoteFetcher:
    def __init__(
        self,
        session: aiohttp.ClientSession,
        timeout: aiohttp.ClientTimeout | None = None,
    ) -> None:
        self.session = session
        self.timeout = timeout

    async def fetch(self, url: str, workdir: Path) -> StagedFile:
        # InvalidUrl is raised as-is: the request cannot be built at all.
        fingerprint = fingerprint_url(url)
        try:
            request_kwargs = {"timeout": self.timeout} if self.timeout is not None else {}
            async with self.session.get(url, **request_kwargs) as resp:
                if resp.status >= 400:
                    raise aiohttp.ClientResponseError(
                        resp.request_info,
                        resp.history,
                        status=resp.status,
                        message=f"HTTP {resp.status}",
                    )
                content_type = self._parse_content_type(resp.headers.get("Content-Type"))
                content_length = self._parse_content_length(resp.headers.get("Content-Length"))
                body = await resp.read()

            file_path = write_staged_bytes(workdir, sanitize_filename(fingerprint.name), body)
        except Exception as exc:
            logger.error("Fetching {} failed: {}", url, exc)
            raise FetchFailed(url, exc) from exc

        logger.debug("Fetched {} ({} bytes declared) into {}", url, content_length, str(file_path))
        return StagedFile(
            name=fingerprint.name,
            mime_type=content_type,
            size_bytes=content_length,
            local_path=file_path,
        )

    @staticmethod
    def _parse_content_type(value: str | None) -> str:
        return (value or "").split(";")[0].strip()

    @staticmethod
    def _parse_content_length(value: str | None) -> int:
        try:
            return int(value or "0")
        except (TypeError, ValueError):
            return 0
