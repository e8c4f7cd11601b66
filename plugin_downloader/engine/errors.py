# Path: plugin_downloader/engine/errors.py
"""
Plugin Download Errors

Structured error kinds raised by engine components.

Each error carries a `retryable` flag consumed by the retry manager,
so retry decisions never depend on message text. Context (URL,
plugin identity, step) is attached where the error is raised.
Messages only ever show redacted URLs; the raw URL stays on `.url`.
"""

from typing import Optional

from plugin_downloader.engine.redaction import redact_url


class PluginDownloadError(Exception):
    """
    Base class for plugin download failures.

    Attributes:
        retryable: Whether the failing step may succeed if repeated
        url: URL involved in the failure, if any
        step: Pipeline step name (resolve, download, verify, extract, ...)
        identity: Plugin being installed, attached by the coordinator
    """
    retryable: bool = False

    def __init__(self, message: str, url: Optional[str] = None, step: Optional[str] = None):
        super().__init__(message)
        self.url = url
        self.step = step
        self.identity = None


class PluginNotFoundError(PluginDownloadError):
    """Remote artifact does not exist for this identity/platform."""


class TransportError(PluginDownloadError):
    """Request could not be built or the remote end could not be reached."""


class HTTPStatusError(TransportError):
    """Non-success, non-404 response. The only retryable kind."""
    retryable = True

    def __init__(self, status: int, url: Optional[str] = None, step: Optional[str] = None):
        super().__init__(f"unexpected status code {status}", url=url, step=step)
        self.status = status


class DownloadFailedError(PluginDownloadError):
    """Retry budget exhausted; wraps the last underlying cause."""

    def __init__(self, url: str, attempts: int, last_error: BaseException):
        super().__init__(
            f"failed downloading URL {redact_url(url)!r} after {attempts} attempts: {last_error}",
            url=url,
            step='download',
        )
        self.attempts = attempts
        self.last_error = last_error


class HubStatusError(PluginDownloadError):
    """Registry answered with a status that stops the download."""

    def __init__(self, message: str, status: int, url: Optional[str] = None):
        super().__init__(message, url=url, step='resolve')
        self.status = status


class UnauthorizedError(HubStatusError):
    """Registry rejected the credentials (401)."""


class RateLimitedError(HubStatusError):
    """Registry rate limit hit (429)."""


class UnexpectedStatusError(HubStatusError):
    """Any registry status without a dedicated classification."""


class PluginVersionNotFoundError(PluginNotFoundError, HubStatusError):
    """Registry has no such version visible to the caller (404)."""


class HubResponseError(PluginDownloadError):
    """Registry returned 200 without a usable asset."""


class IntegrityMismatchError(PluginDownloadError):
    """Computed digest differs from the published checksum."""

    def __init__(self, expected: str, actual: str, url: Optional[str] = None):
        super().__init__(
            f"checksum mismatch: expected {expected}, got {actual}",
            url=url,
            step='verify',
        )
        self.expected = expected
        self.actual = actual


class ArchiveLayoutError(PluginDownloadError):
    """Archive does not follow a known packaging convention."""


class EntryNotFoundError(ArchiveLayoutError):
    """Expected platform binary is absent from the archive."""

    def __init__(self, entry_name: str, archive_path: str):
        super().__init__(
            f"failed to open plugin archive entry {entry_name} in {archive_path}",
            step='extract',
        )
        self.entry_name = entry_name
        self.archive_path = archive_path


class UnrecognizedOriginError(ArchiveLayoutError):
    """Download URL matches none of the known publishing conventions."""

    def __init__(self, url: str):
        super().__init__(f"unknown GitHub {redact_url(url)}", url=url, step='extract')


class StorageError(PluginDownloadError):
    """Local filesystem failure (directories, archive or binary files)."""


__all__ = [
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
]
