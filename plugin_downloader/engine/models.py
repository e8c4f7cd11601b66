# Path: plugin_downloader/engine/models.py
"""
Plugin Download Models

Immutable inputs and intermediate values of a plugin download.

Architecture:
- PluginIdentity: who/what/which version is being installed
- HubDownloadOptions: registry download request
- PluginAsset: registry answer (signed location + checksum)
- DownloadTarget: final binary path and its sibling archive path
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from plugin_downloader.constants import ARCHIVE_EXTENSION
from plugin_downloader.specs.plugin_kind import PluginKind


@dataclass(frozen=True)
class PluginIdentity:
    """
    Identity of a plugin release.

    Attributes:
        organization: GitHub organization or Hub team owning the plugin
        name: Plugin name (e.g. 'aws')
        version: Version tag (e.g. 'v22.18.0')
        kind: Source or destination
    """
    organization: str
    name: str
    version: str
    kind: PluginKind

    def __str__(self) -> str:
        return f"{self.kind} {self.organization}/{self.name}@{self.version}"


@dataclass(frozen=True)
class HubDownloadOptions:
    """
    Registry download request.

    Attributes:
        local_path: Final binary path
        plugin_team: Team that publishes the plugin
        plugin_kind: Plugin kind
        plugin_name: Plugin name
        plugin_version: Version tag
        auth_token: Optional bearer token
        team_name: Optional team the caller acts as (team-scoped endpoint)
    """
    local_path: Path
    plugin_team: str
    plugin_kind: PluginKind
    plugin_name: str
    plugin_version: str
    auth_token: str = ''
    team_name: str = ''

    @property
    def identity(self) -> PluginIdentity:
        return PluginIdentity(
            organization=self.plugin_team,
            name=self.plugin_name,
            version=self.plugin_version,
            kind=self.plugin_kind,
        )


@dataclass(frozen=True)
class PluginAsset:
    """
    Signed download location returned by the registry.

    An empty checksum means the registry published none; verification
    is then skipped with a warning, never reported as passed.
    """
    location: str
    checksum: str = ''

    @classmethod
    def from_json(cls, data: object) -> Optional['PluginAsset']:
        """Build from a decoded JSON body, None when the body is not an object."""
        if not isinstance(data, dict):
            return None
        return cls(
            location=str(data.get('location') or ''),
            checksum=str(data.get('checksum') or ''),
        )


@dataclass(frozen=True)
class DownloadTarget:
    """
    Local paths of a plugin install.

    The archive always sits next to the binary as '<binary>.zip'.
    """
    local_path: Path

    @classmethod
    def for_path(cls, local_path: Union[str, Path]) -> 'DownloadTarget':
        return cls(local_path=Path(local_path))

    @property
    def archive_path(self) -> Path:
        return self.local_path.with_name(self.local_path.name + ARCHIVE_EXTENSION)

    @property
    def directory(self) -> Path:
        return self.local_path.parent


__all__ = [
    'PluginIdentity',
    'HubDownloadOptions',
    'PluginAsset',
    'DownloadTarget',
]
