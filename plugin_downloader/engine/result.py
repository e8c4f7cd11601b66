# Path: plugin_downloader/engine/result.py
"""
Download Result Objects

Type-safe, structured results for plugin download operations.

Architecture:
- DownloadResult: Single archive download (with digest)
- ExtractionResult: Single binary extraction
- ValidationResult: Checksum verification outcome
- InstallResult: Complete resolve+download+verify+extract workflow
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from plugin_downloader.engine.redaction import redact_url


@dataclass
class DownloadResult:
    """
    Result of a single archive download.

    Attributes:
        url: Source URL
        file_path: Where the archive was written
        checksum: Lowercase hex SHA-256 of the written bytes
        file_size: Bytes written by the successful attempt
        attempts: Attempts performed, successful one included
        duration: Download duration in seconds
    """
    url: str
    file_path: Path
    checksum: str
    file_size: int = 0
    attempts: int = 1
    duration: float = 0.0
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def download_speed_mbps(self) -> float:
        """Calculate download speed in MB/s."""
        if self.duration > 0 and self.file_size > 0:
            mb = self.file_size / (1024 * 1024)
            return mb / self.duration
        return 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for display; the URL is redacted."""
        return {
            'url': redact_url(self.url),
            'file_path': str(self.file_path),
            'checksum': self.checksum,
            'file_size': self.file_size,
            'attempts': self.attempts,
            'duration': self.duration,
            'download_speed_mbps': self.download_speed_mbps,
            'timestamp': self.timestamp.isoformat(),
        }


@dataclass
class ExtractionResult:
    """
    Result of extracting the platform binary.

    Attributes:
        archive_path: Archive the entry was read from
        entry_name: Archive entry that was copied
        destination: Final binary path
        bytes_written: Size of the written binary
    """
    archive_path: Path
    entry_name: str
    destination: Path
    bytes_written: int = 0
    duration: float = 0.0
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        return {
            'archive_path': str(self.archive_path),
            'entry_name': self.entry_name,
            'destination': str(self.destination),
            'bytes_written': self.bytes_written,
            'duration': self.duration,
            'timestamp': self.timestamp.isoformat(),
        }


@dataclass
class ValidationResult:
    """
    Result of checksum verification.

    `verified` is True only when a published checksum matched.
    A skipped check leaves it False and records a warning.
    """
    verified: bool
    expected: str = ''
    actual: str = ''
    warnings: list[str] = field(default_factory=list)

    @property
    def skipped(self) -> bool:
        return not self.expected

    def add_warning(self, message: str):
        """Add non-critical warning."""
        self.warnings.append(message)


@dataclass
class InstallResult:
    """
    Complete result of a plugin install.

    Attributes:
        local_path: Final binary path
        skipped: True when the binary already existed (no network I/O)
        url: Archive URL that was downloaded
        download_result: Download step result
        validation_result: Checksum step result
        extraction_result: Extraction step result
        total_duration: Wall time of the whole operation
    """
    local_path: Path
    skipped: bool = False
    url: Optional[str] = None
    download_result: Optional[DownloadResult] = None
    validation_result: Optional[ValidationResult] = None
    extraction_result: Optional[ExtractionResult] = None
    total_duration: float = 0.0
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def checksum_verified(self) -> bool:
        return bool(self.validation_result and self.validation_result.verified)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for display (CLI --json); URLs are redacted."""
        return {
            'local_path': str(self.local_path),
            'skipped': self.skipped,
            'url': redact_url(self.url) if self.url else None,
            'download_result': self.download_result.to_dict() if self.download_result else None,
            'checksum_verified': self.checksum_verified,
            'warnings': self.validation_result.warnings if self.validation_result else [],
            'extraction_result': self.extraction_result.to_dict() if self.extraction_result else None,
            'total_duration': self.total_duration,
            'timestamp': self.timestamp.isoformat(),
        }


__all__ = [
    'DownloadResult',
    'ExtractionResult',
    'ValidationResult',
    'InstallResult',
]
