# Path: plugin_downloader/engine/protocol_handlers.py
"""
Protocol Handlers

HTTP/HTTPS handler shared by URL probing, registry calls and
archive downloads.

Architecture:
- Async HTTP client (aiohttp) with a lazily created session
- HEAD probes returning the raw status
- JSON GET returning (body, status)
- Single-attempt streaming GET (retries live in RetryManager)
- Secrets in query strings never reach the logs
"""

import asyncio
import json
import time
from pathlib import Path
from typing import Any, Optional

import aiohttp

from plugin_downloader.core.logger import get_logger
from plugin_downloader.core.config_loader import ConfigLoader, get_config
from plugin_downloader.constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_TIMEOUT,
    DEFAULT_CONNECT_TIMEOUT,
    HTTP_OK,
    HTTP_NOT_FOUND,
    LOG_INPUT,
    LOG_PROCESS,
    LOG_OUTPUT,
)
from plugin_downloader.engine.constants import (
    ACCEPT_ANY,
    DEFAULT_USER_AGENT,
    HEADER_ACCEPT,
    HEADER_USER_AGENT,
    MAX_CONCURRENT_CONNECTIONS,
)
from plugin_downloader.engine.errors import (
    HTTPStatusError,
    PluginNotFoundError,
    StorageError,
    TransportError,
)
from plugin_downloader.engine.redaction import redact_text, redact_url
from plugin_downloader.engine.result import DownloadResult
from plugin_downloader.engine.stream_handler import StreamHandler

logger = get_logger(__name__, 'engine')


class HTTPHandler:
    """
    HTTP/HTTPS handler with streaming downloads.

    Example:
        async with HTTPHandler() as handler:
            status = await handler.head_status(url)
            result = await handler.download(url, Path('.loki/plugins/aws.zip'))
    """

    def __init__(
        self,
        config: Optional[ConfigLoader] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize HTTP handler.

        Args:
            config: Optional ConfigLoader instance
            session: Optional externally owned session (not closed by close())
        """
        self.config = config if config else get_config()

        self.chunk_size = self.config.get('chunk_size', DEFAULT_CHUNK_SIZE)
        self.timeout = self.config.get('request_timeout', DEFAULT_TIMEOUT)
        self.connect_timeout = self.config.get('connect_timeout', DEFAULT_CONNECT_TIMEOUT)
        self.show_progress = self.config.get('show_progress', True)

        self._session = session
        self._owns_session = session is None

    def _build_headers(self, custom_headers: Optional[dict[str, str]] = None) -> dict[str, str]:
        """
        Build HTTP request headers.

        Args:
            custom_headers: Optional headers overriding the defaults

        Returns:
            Dictionary of headers
        """
        headers = {
            HEADER_USER_AGENT: DEFAULT_USER_AGENT,
            HEADER_ACCEPT: ACCEPT_ANY,
        }

        if custom_headers:
            headers.update(custom_headers)

        return headers

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(limit=MAX_CONCURRENT_CONNECTIONS)
            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=aiohttp.ClientTimeout(
                    total=self.timeout,
                    connect=self.connect_timeout
                )
            )
            self._owns_session = True

        return self._session

    async def head_status(self, url: str) -> int:
        """
        Probe a URL without transferring its body.

        Redirects are followed, release assets live behind one.

        Args:
            url: URL to probe

        Returns:
            Final HTTP status code

        Raises:
            TransportError: Request could not be built or sent
        """
        logger.debug(f"{LOG_PROCESS} HEAD {redact_url(url)}")

        try:
            session = await self._get_session()
            async with session.head(url, headers=self._build_headers(), allow_redirects=True) as response:
                return response.status

        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise TransportError(
                f"failed to get url {redact_url(url)}: {redact_text(str(e), url)}",
                url=url,
                step='resolve',
            ) from e

    async def get_json(
        self,
        url: str,
        headers: Optional[dict[str, str]] = None
    ) -> tuple[Optional[Any], int]:
        """
        GET a JSON document.

        The body is only decoded for a 200 response. An undecodable
        body yields None with the real status.

        Args:
            url: URL to fetch
            headers: Extra request headers

        Returns:
            Tuple of (decoded body or None, HTTP status)

        Raises:
            TransportError: Request could not be built or sent
        """
        try:
            session = await self._get_session()
            async with session.get(url, headers=self._build_headers(headers)) as response:
                if response.status != HTTP_OK:
                    return None, response.status

                try:
                    data = await response.json(content_type=None)
                except (json.JSONDecodeError, UnicodeDecodeError) as e:
                    logger.warning(f"Invalid JSON from {redact_url(url)}: {redact_text(str(e), url)}")
                    data = None

                return data, response.status

        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise TransportError(
                f"failed to get url {redact_url(url)}: {redact_text(str(e), url)}",
                url=url,
                step='resolve',
            ) from e

    async def download(self, url: str, output_path: Path) -> DownloadResult:
        """
        Download a URL to a local file, one attempt.

        Args:
            url: Source URL
            output_path: Destination path (truncated before writing)

        Returns:
            DownloadResult with size and SHA-256

        Raises:
            PluginNotFoundError: Server answered 404 (never retried)
            HTTPStatusError: Any other non-200 status (retryable)
            TransportError: Connection or read failure
            StorageError: Output file could not be written
        """
        display_url = redact_url(url)
        logger.info(f"{LOG_INPUT} Downloading {display_url}")

        start_time = time.time()

        try:
            session = await self._get_session()

            async with session.get(url, headers=self._build_headers()) as response:
                if response.status == HTTP_NOT_FOUND:
                    raise PluginNotFoundError("not found", url=url, step='download')

                if response.status != HTTP_OK:
                    logger.warning(
                        f"Failed downloading {display_url} with status code {response.status}"
                    )
                    raise HTTPStatusError(response.status, url=url, step='download')

                total_size = response.content_length
                if total_size:
                    logger.info(f"{LOG_PROCESS} File size: {total_size} bytes")

                stream_handler = StreamHandler(show_progress=self.show_progress)
                bytes_written, checksum = await stream_handler.stream_to_file(
                    response_stream=response.content.iter_chunked(self.chunk_size),
                    output_path=output_path,
                    total_size=total_size
                )

        # Connection failures and timeouts are terminal (not retryable); only status errors retry
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(
                f"failed to get url {display_url}: {redact_text(str(e), url)}",
                url=url,
                step='download',
            ) from e

        except OSError as e:
            raise StorageError(
                f"failed to copy body to file {output_path}: {e}", url=url, step='download'
            ) from e

        result = DownloadResult(
            url=url,
            file_path=output_path,
            checksum=checksum,
            file_size=bytes_written,
            duration=time.time() - start_time,
        )

        logger.info(
            f"{LOG_OUTPUT} Download complete: {bytes_written} bytes "
            f"in {result.duration:.2f}s "
            f"({result.download_speed_mbps:.2f} MB/s)"
        )

        return result

    async def close(self):
        """Close HTTP session if this handler created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()


__all__ = ['HTTPHandler', 'redact_url']
