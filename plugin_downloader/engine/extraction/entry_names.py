# Path: plugin_downloader/engine/extraction/entry_names.py
"""
Archive Entry Names

Which archive member holds the platform binary.

- Hub archives: fixed 'plugin-<name>-<version>-<os>-<arch>'
- GitHub archives: derived from the URL convention that matched,
  with '.exe' appended on Windows
"""

from plugin_downloader.constants import DEFAULT_GITHUB_BASE_URL
from plugin_downloader.engine.errors import UnrecognizedOriginError
from plugin_downloader.engine.extraction.constants import (
    GITHUB_ARCHIVE_LAYOUTS,
    HUB_ENTRY_TEMPLATE,
)
from plugin_downloader.engine.platform_target import PlatformTarget


def hub_entry_name(name: str, version: str, platform_target: PlatformTarget) -> str:
    """
    Entry name inside a Hub archive.

    Example:
        hub_entry_name('aws', 'v22.18.0', PlatformTarget('linux', 'amd64'))
        # 'plugin-aws-v22.18.0-linux-amd64'
    """
    return HUB_ENTRY_TEMPLATE.format(
        name=name,
        version=version,
        os=platform_target.os,
        arch=platform_target.arch,
    )


def github_entry_name(
    url: str,
    org: str,
    name: str,
    platform_target: PlatformTarget,
    base_url: str = DEFAULT_GITHUB_BASE_URL
) -> str:
    """
    Entry name inside a GitHub release archive.

    Args:
        url: Archive URL returned by the candidate resolver
        org: GitHub organization
        name: Plugin name
        platform_target: Target platform
        base_url: Code hosting base URL the URL was built from

    Returns:
        Entry path, suffixed on Windows

    Raises:
        UnrecognizedOriginError: URL matches no known convention
    """
    base_url = base_url.rstrip('/')

    for prefix_template, entry_template in GITHUB_ARCHIVE_LAYOUTS:
        prefix = prefix_template.format(base=base_url, org=org)
        if url.startswith(prefix):
            return platform_target.with_binary_suffix(entry_template.format(name=name))

    raise UnrecognizedOriginError(url)


__all__ = ['hub_entry_name', 'github_entry_name']
