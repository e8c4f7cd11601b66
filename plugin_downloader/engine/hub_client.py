# Path: plugin_downloader/engine/hub_client.py
"""
Hub Asset Resolver

Client for the registry endpoint that hands out signed plugin
download locations.

Returns the raw status with the parsed asset. Status policy
(401/404/429/...) belongs to the coordinator.
"""

from typing import Optional
from urllib.parse import quote

from plugin_downloader.core.logger import get_logger
from plugin_downloader.constants import (
    DEFAULT_API_BASE_URL,
    HTTP_OK,
    LOG_INPUT,
    LOG_OUTPUT,
)
from plugin_downloader.engine.constants import (
    ACCEPT_JSON,
    HEADER_ACCEPT,
    HEADER_AUTHORIZATION,
    HUB_ASSET_PATH,
    HUB_TEAM_ASSET_PATH,
)
from plugin_downloader.engine.models import HubDownloadOptions, PluginAsset
from plugin_downloader.engine.platform_target import PlatformTarget
from plugin_downloader.engine.protocol_handlers import HTTPHandler

logger = get_logger(__name__, 'hub')


def _segment(value: str) -> str:
    return quote(value, safe='')


class HubAssetResolver:
    """
    Resolves plugin assets through the Hub registry API.

    Example:
        resolver = HubAssetResolver(http_handler, base_url=config['api_base_url'])
        asset, status = await resolver.resolve(options)
    """

    def __init__(
        self,
        http_handler: HTTPHandler,
        base_url: str = DEFAULT_API_BASE_URL,
        platform_target: Optional[PlatformTarget] = None
    ):
        """
        Initialize resolver.

        Args:
            http_handler: Handler used for the API call
            base_url: Registry API base URL
            platform_target: Target platform (running platform if None)
        """
        self.http_handler = http_handler
        self.base_url = base_url.rstrip('/')
        self.platform_target = platform_target if platform_target else PlatformTarget.current()

    def asset_url(self, options: HubDownloadOptions) -> str:
        """
        Build the asset endpoint URL.

        The team-scoped endpoint is used when the caller acts as a team.
        """
        values = {
            'plugin_team': _segment(options.plugin_team),
            'plugin_kind': _segment(options.plugin_kind.value),
            'plugin_name': _segment(options.plugin_name),
            'plugin_version': _segment(options.plugin_version),
            'target': _segment(self.platform_target.target),
        }

        if options.team_name:
            path = HUB_TEAM_ASSET_PATH.format(team_name=_segment(options.team_name), **values)
        else:
            path = HUB_ASSET_PATH.format(**values)

        return self.base_url + path

    def _build_headers(self, options: HubDownloadOptions) -> dict[str, str]:
        headers = {HEADER_ACCEPT: ACCEPT_JSON}
        if options.auth_token:
            headers[HEADER_AUTHORIZATION] = f"Bearer {options.auth_token}"
        return headers

    async def resolve(self, options: HubDownloadOptions) -> tuple[Optional[PluginAsset], int]:
        """
        Ask the registry where to download a plugin from.

        Args:
            options: Download request

        Returns:
            Tuple of (asset or None, HTTP status). The asset is only
            present for a 200 response with a JSON object body.

        Raises:
            TransportError: Registry could not be reached (not retried)
        """
        url = self.asset_url(options)
        logger.info(f"{LOG_INPUT} Requesting asset for {options.identity} ({self.platform_target.target})")

        data, status = await self.http_handler.get_json(url, headers=self._build_headers(options))

        asset = PluginAsset.from_json(data) if status == HTTP_OK else None

        logger.info(f"{LOG_OUTPUT} Registry answered {status}")
        return asset, status


__all__ = ['HubAssetResolver']
