# Path: plugin_downloader/__init__.py
"""
Loki Plugin Downloader

Installs managed plugin binaries from GitHub releases or the Hub
registry into a local plugin directory.

Example:
    from plugin_downloader import download_plugin_from_github, PluginKind

    await download_plugin_from_github(
        '.loki/plugins/source/loki/hackernews/v1.1.4/plugin',
        'loki', 'hackernews', 'v1.1.4', PluginKind.SOURCE,
    )
"""

from pathlib import Path
from typing import Optional, Union

from plugin_downloader.constants import DEFAULT_DOWNLOAD_DIR, RETRY_ATTEMPTS, RETRY_WAIT_TIME
from plugin_downloader.core.config_loader import ConfigLoader, api_base_url
from plugin_downloader.engine import (
    PluginDownloadCoordinator,
    PluginDownloadError,
    PluginNotFoundError,
    IntegrityMismatchError,
    HubDownloadOptions,
    InstallResult,
    PlatformTarget,
    with_binary_suffix,
)
from plugin_downloader.specs import PluginKind, PKMode

__version__ = '1.0.0'


async def download_plugin_from_github(
    local_path: Union[str, Path],
    org: str,
    name: str,
    version: str,
    kind: PluginKind,
    config: Optional[ConfigLoader] = None,
    timeout: Optional[float] = None
) -> InstallResult:
    """
    Install a GitHub-released plugin with a short-lived coordinator.

    Returns immediately when local_path already exists.
    """
    async with PluginDownloadCoordinator(config=config) as coordinator:
        return await coordinator.download_from_github(
            local_path, org, name, version, kind, timeout=timeout
        )


async def download_plugin_from_hub(
    options: HubDownloadOptions,
    config: Optional[ConfigLoader] = None,
    timeout: Optional[float] = None
) -> InstallResult:
    """Install a Hub-registered plugin with a short-lived coordinator."""
    async with PluginDownloadCoordinator(config=config) as coordinator:
        return await coordinator.download_from_hub(options, timeout=timeout)


__all__ = [
    '__version__',
    'DEFAULT_DOWNLOAD_DIR',
    'RETRY_ATTEMPTS',
    'RETRY_WAIT_TIME',
    'ConfigLoader',
    'api_base_url',
    'PluginDownloadCoordinator',
    'PluginDownloadError',
    'PluginNotFoundError',
    'IntegrityMismatchError',
    'HubDownloadOptions',
    'InstallResult',
    'PlatformTarget',
    'PluginKind',
    'PKMode',
    'download_plugin_from_github',
    'download_plugin_from_hub',
    'with_binary_suffix',
]
