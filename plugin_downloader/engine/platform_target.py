# Path: plugin_downloader/engine/platform_target.py
"""
Platform Target

Operating system / architecture pair used in release asset names,
archive entry names and registry target strings. Names follow the
Go toolchain convention the plugins are built with (linux, darwin,
windows / amd64, arm64).
"""

import platform
from dataclasses import dataclass
from typing import Optional


OS_NAMES: dict[str, str] = {
    'linux': 'linux',
    'darwin': 'darwin',
    'windows': 'windows',
    'win32': 'windows',
    'freebsd': 'freebsd',
}

ARCH_NAMES: dict[str, str] = {
    'x86_64': 'amd64',
    'amd64': 'amd64',
    'aarch64': 'arm64',
    'arm64': 'arm64',
    'i386': '386',
    'i686': '386',
    'x86': '386',
    'armv7l': 'arm',
    'armv6l': 'arm',
}

WINDOWS_BINARY_SUFFIX = '.exe'


@dataclass(frozen=True)
class PlatformTarget:
    """
    Target platform for a plugin binary.

    Attributes:
        os: Operating system name (e.g. 'linux')
        arch: Architecture name (e.g. 'amd64')
    """
    os: str
    arch: str

    @classmethod
    def current(cls) -> 'PlatformTarget':
        """
        Detect the running platform.

        Raises:
            ValueError: If the OS or architecture is not supported
        """
        system = platform.system().lower()
        machine = platform.machine().lower()

        if system not in OS_NAMES:
            raise ValueError(f"Unsupported operating system: {system}")
        if machine not in ARCH_NAMES:
            raise ValueError(f"Unsupported architecture: {machine}")

        return cls(os=OS_NAMES[system], arch=ARCH_NAMES[machine])

    @property
    def target(self) -> str:
        """Registry target string, '<os>_<arch>'."""
        return f"{self.os}_{self.arch}"

    @property
    def is_windows(self) -> bool:
        return self.os == 'windows'

    def with_binary_suffix(self, file_path: str) -> str:
        """Append the executable suffix on Windows-class targets only."""
        if self.is_windows:
            return file_path + WINDOWS_BINARY_SUFFIX
        return file_path


def with_binary_suffix(file_path: str, target: Optional[PlatformTarget] = None) -> str:
    """
    Append the platform executable suffix to a path.

    Args:
        file_path: Binary path without suffix
        target: Platform to use (running platform if None)

    Returns:
        Path with '.exe' appended on Windows, unchanged elsewhere
    """
    target = target if target else PlatformTarget.current()
    return target.with_binary_suffix(file_path)


__all__ = ['PlatformTarget', 'with_binary_suffix']
