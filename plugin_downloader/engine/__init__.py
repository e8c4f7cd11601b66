# Path: plugin_downloader/engine/__init__.py
"""
Plugin Download Engine

Resolve, download, verify and extract plugin binaries.

Use PluginDownloadCoordinator for complete installs.
"""

from plugin_downloader.engine.coordinator import PluginDownloadCoordinator
from plugin_downloader.engine.errors import (
    PluginDownloadError,
    PluginNotFoundError,
    TransportError,
    HTTPStatusError,
    DownloadFailedError,
    HubStatusError,
    UnauthorizedError,
    RateLimitedError,
    UnexpectedStatusError,
    PluginVersionNotFoundError,
    HubResponseError,
    IntegrityMismatchError,
    ArchiveLayoutError,
    EntryNotFoundError,
    UnrecognizedOriginError,
    StorageError,
)
from plugin_downloader.engine.models import (
    PluginIdentity,
    HubDownloadOptions,
    PluginAsset,
    DownloadTarget,
)
from plugin_downloader.engine.platform_target import PlatformTarget, with_binary_suffix
from plugin_downloader.engine.result import (
    DownloadResult,
    ExtractionResult,
    ValidationResult,
    InstallResult,
)

__all__ = [
    'PluginDownloadCoordinator',
    'PluginDownloadError',
    'PluginNotFoundError',
    'TransportError',
    'HTTPStatusError',
    'DownloadFailedError',
    'HubStatusError',
    'UnauthorizedError',
    'RateLimitedError',
    'UnexpectedStatusError',
    'PluginVersionNotFoundError',
    'HubResponseError',
    'IntegrityMismatchError',
    'ArchiveLayoutError',
    'EntryNotFoundError',
    'UnrecognizedOriginError',
    'StorageError',
    'PluginIdentity',
    'HubDownloadOptions',
    'PluginAsset',
    'DownloadTarget',
    'PlatformTarget',
    'with_binary_suffix',
    'DownloadResult',
    'ExtractionResult',
    'ValidationResult',
    'InstallResult',
]
