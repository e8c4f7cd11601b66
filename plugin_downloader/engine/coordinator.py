# Path: plugin_downloader/engine/coordinator.py
"""
Plugin Download Coordinator

Main workflow orchestrator for plugin installs.
Coordinates: resolve → download → verify → extract.

Two entry points share one skeleton:
- download_from_github: public release assets, probed by convention
- download_from_hub: registry-issued signed locations with checksum

Architecture:
- Idempotent: an existing binary short-circuits everything
- Component errors propagate with identity, URL and step attached
- Registry status policy applied here only (FailureHandler)
- Optional caller deadline per install
"""

import asyncio
import time
from pathlib import Path
from typing import Awaitable, Callable, Optional, Union

from plugin_downloader.core.logger import get_logger
from plugin_downloader.core.config_loader import ConfigLoader, get_config
from plugin_downloader.constants import (
    DEFAULT_API_BASE_URL,
    DEFAULT_GITHUB_BASE_URL,
    DIRECTORY_MODE,
    LOG_INPUT,
    LOG_PROCESS,
    LOG_OUTPUT,
)
from plugin_downloader.engine.archive_downloader import ArchiveDownloader
from plugin_downloader.engine.errors import (
    HubResponseError,
    PluginDownloadError,
    StorageError,
)
from plugin_downloader.engine.extraction import (
    PluginArchiveExtractor,
    github_entry_name,
    hub_entry_name,
)
from plugin_downloader.engine.failure_handler import FailureHandler
from plugin_downloader.engine.hub_client import HubAssetResolver
from plugin_downloader.engine.models import (
    DownloadTarget,
    HubDownloadOptions,
    PluginIdentity,
)
from plugin_downloader.engine.platform_target import PlatformTarget
from plugin_downloader.engine.protocol_handlers import HTTPHandler
from plugin_downloader.engine.result import InstallResult
from plugin_downloader.engine.retry_manager import RetryManager, RetryPolicy
from plugin_downloader.engine.url_resolver import CandidateURLResolver
from plugin_downloader.engine.validator import ChecksumValidator
from plugin_downloader.specs.plugin_kind import PluginKind

logger = get_logger(__name__, 'engine')


class PluginDownloadCoordinator:
    """
    Coordinates complete plugin install workflow.

    Workflow (both origins):
    1. Return immediately if the binary already exists
    2. Create the destination directory
    3. Resolve the archive location
    4. Download the archive next to the binary ('<path>.zip')
    5. Verify the checksum when one is published
    6. Extract the platform binary to the final path

    Concurrent installs to the same path are not serialized here;
    callers must not target one path from two tasks at once.

    Example:
        async with PluginDownloadCoordinator() as coordinator:
            await coordinator.download_from_github(
                '.loki/plugins/source/loki/hackernews/v1.1.4/plugin',
                'loki', 'hackernews', 'v1.1.4', PluginKind.SOURCE,
            )
    """

    def __init__(
        self,
        config: Optional[ConfigLoader] = None,
        platform_target: Optional[PlatformTarget] = None,
        http_handler: Optional[HTTPHandler] = None,
        retry_policy: Optional[RetryPolicy] = None
    ):
        """
        Initialize download coordinator.

        Args:
            config: Optional ConfigLoader instance
            platform_target: Target platform (running platform if None)
            http_handler: Optional shared HTTP handler
            retry_policy: Download retry policy (from config if None)
        """
        self.config = config if config else get_config()
        self.platform_target = platform_target if platform_target else PlatformTarget.current()

        self.github_base_url = self.config.get('github_base_url', DEFAULT_GITHUB_BASE_URL)
        self.keep_archive = self.config.get('keep_archive', False)

        # Initialize core components
        self.http_handler = http_handler if http_handler else HTTPHandler(self.config)
        self.retry_manager = RetryManager(policy=retry_policy, config=self.config)
        self.archive_downloader = ArchiveDownloader(
            http_handler=self.http_handler,
            retry_manager=self.retry_manager,
            config=self.config
        )

        # Resolvers
        self.url_resolver = CandidateURLResolver(
            http_handler=self.http_handler,
            base_url=self.github_base_url,
            platform_target=self.platform_target
        )
        self.hub_resolver = HubAssetResolver(
            http_handler=self.http_handler,
            base_url=self.config.get('api_base_url', DEFAULT_API_BASE_URL),
            platform_target=self.platform_target
        )

        self.extractor = PluginArchiveExtractor(self.config)
        self.validator = ChecksumValidator()
        self.failure_handler = FailureHandler()

    async def download_from_github(
        self,
        local_path: Union[str, Path],
        org: str,
        name: str,
        version: str,
        kind: PluginKind,
        timeout: Optional[float] = None
    ) -> InstallResult:
        """
        Install a plugin published as a GitHub release asset.

        Args:
            local_path: Final binary path
            org: GitHub organization
            name: Plugin name
            version: Version tag
            kind: Plugin kind
            timeout: Optional deadline in seconds for the whole install

        Returns:
            InstallResult (skipped=True when the binary already existed)

        Raises:
            PluginDownloadError: Any failing step, identity attached
            asyncio.TimeoutError: Deadline exceeded
        """
        identity = PluginIdentity(organization=org, name=name, version=version, kind=kind)
        target = DownloadTarget.for_path(local_path)

        async def install(result: InstallResult) -> None:
            url = await self.url_resolver.resolve(org, name, version, kind)
            result.url = url

            result.download_result = await self.archive_downloader.fetch(url, target.archive_path)

            entry_name = github_entry_name(
                url, org, name, self.platform_target, base_url=self.github_base_url
            )
            result.extraction_result = self.extractor.extract(
                target.archive_path, entry_name, target.local_path
            )

        return await self._run(identity, target, install, timeout)

    async def download_from_hub(
        self,
        options: HubDownloadOptions,
        timeout: Optional[float] = None
    ) -> InstallResult:
        """
        Install a plugin through the Hub registry.

        Args:
            options: Registry download request
            timeout: Optional deadline in seconds for the whole install

        Returns:
            InstallResult (skipped=True when the binary already existed)

        Raises:
            UnauthorizedError / PluginVersionNotFoundError /
            RateLimitedError / UnexpectedStatusError: Registry refused
            HubResponseError: Registry answered 200 without a location
            IntegrityMismatchError: Digest differs from published checksum
            PluginDownloadError: Any other failing step
            asyncio.TimeoutError: Deadline exceeded
        """
        identity = options.identity
        target = DownloadTarget.for_path(options.local_path)

        async def install(result: InstallResult) -> None:
            asset, status = await self.hub_resolver.resolve(options)
            self.failure_handler.check_hub_status(
                status, identity, url=self.hub_resolver.asset_url(options)
            )

            if asset is None:
                raise HubResponseError(
                    f"failed to get plugin url for {identity}: missing json response",
                    step='resolve',
                )
            if not asset.location:
                raise HubResponseError(
                    "failed to get plugin url: empty location from response",
                    step='resolve',
                )
            result.url = asset.location

            result.download_result = await self.archive_downloader.fetch(
                asset.location, target.archive_path
            )

            result.validation_result = self.validator.verify(
                expected=asset.checksum,
                actual=result.download_result.checksum,
                url=asset.location,
            )

            entry_name = hub_entry_name(options.plugin_name, options.plugin_version, self.platform_target)
            result.extraction_result = self.extractor.extract(
                target.archive_path, entry_name, target.local_path
            )

        return await self._run(identity, target, install, timeout)

    async def _run(
        self,
        identity: PluginIdentity,
        target: DownloadTarget,
        install: Callable[[InstallResult], Awaitable[None]],
        timeout: Optional[float]
    ) -> InstallResult:
        """Shared skeleton: idempotency check, directory, install steps."""
        logger.info(f"{LOG_INPUT} Installing {identity} to {target.local_path}")

        start_time = time.time()
        result = InstallResult(local_path=target.local_path)

        if target.local_path.exists():
            result.skipped = True
            logger.info(f"{LOG_OUTPUT} Already installed: {target.local_path}")
            return result

        try:
            self._ensure_directory(target.directory)

            if timeout is not None:
                await asyncio.wait_for(install(result), timeout)
            else:
                await install(result)

        except PluginDownloadError as e:
            self.failure_handler.handle_failure(e, identity)
            raise

        if not self.keep_archive:
            target.archive_path.unlink(missing_ok=True)

        result.total_duration = time.time() - start_time

        logger.info(
            f"{LOG_OUTPUT} Installed {identity} at {target.local_path} "
            f"in {result.total_duration:.1f}s"
        )

        return result

    def _ensure_directory(self, directory: Path) -> None:
        """Create the destination directory tree."""
        logger.debug(f"{LOG_PROCESS} Ensuring directory {directory}")
        try:
            directory.mkdir(mode=DIRECTORY_MODE, parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(
                f"failed to create plugin directory {directory}: {e}", step='prepare'
            ) from e

    async def close(self):
        """Close coordinator and cleanup resources."""
        logger.debug("Closing plugin download coordinator")
        await self.http_handler.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


__all__ = ['PluginDownloadCoordinator']
