# Path: plugin_downloader/engine/retry_manager.py
"""
Retry Manager

Fixed-delay retry for transient download failures.

Architecture:
- RetryPolicy: attempts, fixed delay, retryable predicate
- Retry decision from the structured error kind, never message text
- tenacity drives the loop
- Exhausted retries wrapped with the URL and last cause
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception,
    stop_after_attempt,
    wait_fixed,
)

from plugin_downloader.core.logger import get_logger
from plugin_downloader.core.config_loader import ConfigLoader, get_config
from plugin_downloader.constants import (
    RETRY_ATTEMPTS,
    RETRY_WAIT_TIME,
    LOG_PROCESS,
)
from plugin_downloader.engine.errors import DownloadFailedError, PluginDownloadError

logger = get_logger(__name__, 'engine')

T = TypeVar('T')


def is_retryable_error(error: BaseException) -> bool:
    """
    Determine if error is retryable.

    Only errors classified as retryable (non-2xx, non-404 responses)
    qualify. Not-found, integrity and local I/O errors never do.
    """
    return isinstance(error, PluginDownloadError) and error.retryable


@dataclass
class RetryPolicy:
    """
    Retry policy for the download step.

    Attributes:
        attempts: Total attempts, first one included
        delay: Fixed delay between attempts in seconds
        retryable: Predicate deciding whether an error is retried
    """
    attempts: int = RETRY_ATTEMPTS
    delay: float = RETRY_WAIT_TIME
    retryable: Callable[[BaseException], bool] = is_retryable_error

    @classmethod
    def from_config(cls, config: ConfigLoader) -> 'RetryPolicy':
        return cls(
            attempts=max(1, config.get('retry_attempts', RETRY_ATTEMPTS)),
            delay=max(0.0, config.get('retry_delay', RETRY_WAIT_TIME)),
        )


class RetryManager:
    """
    Runs an async operation under a RetryPolicy.

    Example:
        manager = RetryManager(RetryPolicy(attempts=5, delay=1.0))
        result = await manager.retry_async(download_once, url=url)
    """

    def __init__(
        self,
        policy: Optional[RetryPolicy] = None,
        config: Optional[ConfigLoader] = None
    ):
        """
        Initialize retry manager.

        Args:
            policy: Retry policy (built from config if None)
            config: Optional ConfigLoader instance
        """
        self.config = config if config else get_config()
        self.policy = policy if policy else RetryPolicy.from_config(self.config)

    def _log_retry(self, retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            f"{LOG_PROCESS} Attempt {retry_state.attempt_number}/{self.policy.attempts} "
            f"failed: {error}. Retrying in {self.policy.delay:.1f}s..."
        )

    async def retry_async(
        self,
        func: Callable[[], Awaitable[T]],
        url: str
    ) -> T:
        """
        Execute async function with retry logic.

        Args:
            func: Zero-argument coroutine function performing one attempt
            url: URL being fetched, for error context

        Returns:
            Result of the first successful attempt

        Raises:
            DownloadFailedError: Retryable failures exhausted the budget
            PluginDownloadError: Non-retryable failure, propagated as-is
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.policy.attempts),
            wait=wait_fixed(self.policy.delay),
            retry=retry_if_exception(self.policy.retryable),
            before_sleep=self._log_retry,
        )

        try:
            return await retrying(func)
        except RetryError as e:
            last_error = e.last_attempt.exception()
            logger.error(f"All retries exhausted after {e.last_attempt.attempt_number} attempts")
            raise DownloadFailedError(url, e.last_attempt.attempt_number, last_error) from last_error


__all__ = ['RetryPolicy', 'RetryManager', 'is_retryable_error']
