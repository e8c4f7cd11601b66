# Path: plugin_downloader/engine/url_resolver.py
"""
Candidate URL Resolver

Finds the GitHub release asset of a plugin.

Plugins were published under several repository layouts over time,
so the location is found by probing an ordered list of candidates
built from URL_CONVENTIONS.

Probe policy:
- 200: use this URL, stop probing
- 404: try the next candidate
- anything else (or a transport failure): abort, no fall-through
"""

from typing import Optional

from plugin_downloader.core.logger import get_logger
from plugin_downloader.constants import (
    DEFAULT_GITHUB_BASE_URL,
    HTTP_OK,
    HTTP_NOT_FOUND,
    LOG_INPUT,
    LOG_PROCESS,
    LOG_OUTPUT,
)
from plugin_downloader.engine.constants import URL_CONVENTIONS
from plugin_downloader.engine.errors import HTTPStatusError, PluginNotFoundError
from plugin_downloader.engine.models import PluginIdentity
from plugin_downloader.engine.platform_target import PlatformTarget
from plugin_downloader.engine.protocol_handlers import HTTPHandler
from plugin_downloader.engine.redaction import redact_url
from plugin_downloader.specs.plugin_kind import PluginKind

logger = get_logger(__name__, 'engine')


class CandidateURLResolver:
    """
    Resolves the archive URL of a GitHub-published plugin.

    Example:
        resolver = CandidateURLResolver(http_handler)
        url = await resolver.resolve('loki', 'hackernews', 'v1.1.4', PluginKind.SOURCE)
    """

    def __init__(
        self,
        http_handler: HTTPHandler,
        base_url: str = DEFAULT_GITHUB_BASE_URL,
        platform_target: Optional[PlatformTarget] = None,
        conventions: Optional[list[dict]] = None
    ):
        """
        Initialize resolver.

        Args:
            http_handler: Handler used for HEAD probes
            base_url: Code hosting base URL
            platform_target: Target platform (running platform if None)
            conventions: Ordered URL conventions (URL_CONVENTIONS if None)
        """
        self.http_handler = http_handler
        self.base_url = base_url.rstrip('/')
        self.platform_target = platform_target if platform_target else PlatformTarget.current()
        self.conventions = conventions if conventions is not None else URL_CONVENTIONS

    def candidate_urls(self, identity: PluginIdentity) -> list[str]:
        """
        Build candidate URLs in probing order.

        Args:
            identity: Plugin to locate

        Returns:
            Ordered list of URLs
        """
        urls = []
        for convention in self.conventions:
            owner = convention.get('owner')
            if owner is not None and owner != identity.organization:
                continue

            urls.append(convention['template'].format(
                base=self.base_url,
                org=identity.organization,
                kind=identity.kind.value,
                name=identity.name,
                version=identity.version,
                os=self.platform_target.os,
                arch=self.platform_target.arch,
            ))

        return urls

    async def resolve(self, org: str, name: str, version: str, kind: PluginKind) -> str:
        """
        Resolve the archive URL of a plugin.

        Args:
            org: GitHub organization
            name: Plugin name
            version: Version tag
            kind: Plugin kind

        Returns:
            First candidate URL that answered 200

        Raises:
            PluginNotFoundError: Every candidate answered 404
            HTTPStatusError: A candidate answered another non-200 status
            TransportError: A probe could not be sent
        """
        identity = PluginIdentity(organization=org, name=name, version=version, kind=kind)
        logger.info(f"{LOG_INPUT} Resolving {identity}")

        return await self.probe_candidates(self.candidate_urls(identity), identity)

    async def probe_candidates(self, urls: list[str], identity: PluginIdentity) -> str:
        """
        Probe URLs in order.

        Args:
            urls: Candidate URLs, first tried first
            identity: Plugin being resolved, for error messages

        Returns:
            First URL that answered 200
        """
        for url in urls:
            status = await self.http_handler.head_status(url)

            if status == HTTP_NOT_FOUND:
                logger.debug(f"{LOG_PROCESS} Not found: {redact_url(url)}")
                continue

            if status != HTTP_OK:
                logger.error(f"Failed probing {redact_url(url)} with status code {status}")
                raise HTTPStatusError(status, url=url, step='resolve')

            logger.info(f"{LOG_OUTPUT} Resolved {identity} to {redact_url(url)}")
            return url

        raise PluginNotFoundError(
            f"failed to find plugin {identity.organization}/{identity.name} version {identity.version}",
            step='resolve',
        )


__all__ = ['CandidateURLResolver']
