# Path: plugin_downloader/engine/archive_downloader.py
"""
Archive Downloader

Downloads a plugin archive with retry.
Separated from the coordinator for better modularity.
"""

import time
from pathlib import Path
from typing import Optional

from plugin_downloader.core.logger import get_logger
from plugin_downloader.core.config_loader import ConfigLoader, get_config
from plugin_downloader.engine.protocol_handlers import HTTPHandler
from plugin_downloader.engine.redaction import redact_url
from plugin_downloader.engine.retry_manager import RetryManager
from plugin_downloader.engine.result import DownloadResult
from plugin_downloader.constants import LOG_PROCESS, LOG_OUTPUT

logger = get_logger(__name__, 'engine')


class ArchiveDownloader:
    """
    Fetches an archive to a local path and returns its digest.

    Handles:
    - Retrying transient status failures (fixed delay)
    - Propagating not-found without retrying
    - Counting attempts for the result
    """

    def __init__(
        self,
        http_handler: HTTPHandler,
        retry_manager: RetryManager,
        config: Optional[ConfigLoader] = None
    ):
        """
        Initialize archive downloader.

        Args:
            http_handler: HTTP download handler
            retry_manager: Retry manager for transient failures
            config: Configuration loader
        """
        self.http_handler = http_handler
        self.retry_manager = retry_manager
        self.config = config if config else get_config()

    async def fetch(self, url: str, output_path: Path) -> DownloadResult:
        """
        Download an archive.

        Args:
            url: Source URL
            output_path: Archive destination

        Returns:
            DownloadResult of the successful attempt

        Raises:
            PluginNotFoundError: 404, after a single attempt
            DownloadFailedError: Retryable failures exhausted the budget
            TransportError / StorageError: Non-retryable failures
        """
        logger.info(f"{LOG_PROCESS} Downloading to: {output_path.name}")

        attempts = 0
        start_time = time.time()

        async def download_once() -> DownloadResult:
            nonlocal attempts
            attempts += 1
            return await self.http_handler.download(url=url, output_path=output_path)

        result = await self.retry_manager.retry_async(download_once, url=url)

        result.attempts = attempts
        result.duration = time.time() - start_time

        logger.info(
            f"{LOG_OUTPUT} Archive ready: {output_path.name} from {redact_url(url)} "
            f"({attempts} attempt{'s' if attempts != 1 else ''})"
        )

        return result


__all__ = ['ArchiveDownloader']
