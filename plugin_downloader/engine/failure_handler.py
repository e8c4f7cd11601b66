# Path: plugin_downloader/engine/failure_handler.py
"""
Failure Handler

Centralized failure classification and error reporting.

Architecture:
- HUB_STATUS_POLICY: registry status code -> error kind + guidance
- Identity attached to every error leaving the coordinator
- Structured error logging
"""

from typing import Optional

from plugin_downloader.core.logger import get_logger
from plugin_downloader.constants import (
    HTTP_OK,
    HTTP_UNAUTHORIZED,
    HTTP_NOT_FOUND,
    HTTP_TOO_MANY_REQUESTS,
    LOG_OUTPUT,
)
from plugin_downloader.engine.errors import (
    HubStatusError,
    PluginDownloadError,
    PluginVersionNotFoundError,
    RateLimitedError,
    UnauthorizedError,
    UnexpectedStatusError,
)
from plugin_downloader.engine.models import PluginIdentity

logger = get_logger(__name__, 'engine')


# Status -> (error kind, message). None means proceed.
HUB_STATUS_POLICY: dict[int, Optional[tuple[type[HubStatusError], str]]] = {
    HTTP_OK: None,
    HTTP_UNAUTHORIZED: (
        UnauthorizedError,
        "unauthorized. Try logging in via `loki login`",
    ),
    HTTP_NOT_FOUND: (
        PluginVersionNotFoundError,
        "failed to download plugin {identity}: plugin version not found. "
        "If you're trying to use a private plugin you'll need to run `loki login` first",
    ),
    HTTP_TOO_MANY_REQUESTS: (
        RateLimitedError,
        "too many download requests. Try logging in via `loki login` to increase rate limits",
    ),
}

DEFAULT_STATUS_POLICY: tuple[type[HubStatusError], str] = (
    UnexpectedStatusError,
    "failed to download plugin {identity}: unexpected status code {status}",
)


class FailureHandler:
    """
    Classifies registry answers and reports failures.

    Responsibilities:
    - Translate registry status codes into actionable errors
    - Attach the plugin identity to errors
    - Log structured error information

    Example:
        handler = FailureHandler()
        handler.check_hub_status(status, identity, url)   # raises unless 200

        try:
            ...
        except PluginDownloadError as e:
            handler.handle_failure(e, identity)
            raise
    """

    def __init__(self, policy: Optional[dict] = None):
        """
        Initialize failure handler.

        Args:
            policy: Status policy table (HUB_STATUS_POLICY if None)
        """
        self.policy = policy if policy is not None else HUB_STATUS_POLICY

    def classify_hub_status(
        self,
        status: int,
        identity: PluginIdentity,
        url: Optional[str] = None
    ) -> Optional[HubStatusError]:
        """
        Map a registry status to an error.

        Args:
            status: HTTP status returned by the registry
            identity: Plugin being installed
            url: Registry URL

        Returns:
            Error to raise, or None when the status allows proceeding
        """
        if status in self.policy:
            entry = self.policy[status]
            if entry is None:
                return None
        else:
            entry = DEFAULT_STATUS_POLICY

        error_class, template = entry
        error = error_class(template.format(identity=identity, status=status), status=status, url=url)
        error.identity = identity
        return error

    def check_hub_status(
        self,
        status: int,
        identity: PluginIdentity,
        url: Optional[str] = None
    ) -> None:
        """Raise the classified error for a non-proceeding status."""
        error = self.classify_hub_status(status, identity, url)
        if error is not None:
            raise error

    def handle_failure(self, error: PluginDownloadError, identity: PluginIdentity) -> None:
        """
        Attach identity to an error and log it.

        Args:
            error: Error about to propagate to the caller
            identity: Plugin being installed
        """
        if error.identity is None:
            error.identity = identity

        logger.error(
            f"{LOG_OUTPUT} Failed to install {identity}: "
            f"step={error.step or 'unknown'} "
            f"kind={type(error).__name__} "
            f"error={error}"
        )


__all__ = ['FailureHandler', 'HUB_STATUS_POLICY', 'DEFAULT_STATUS_POLICY']
