# Path: plugin_downloader/engine/validator.py
"""
Checksum Validator

Integrity check of a downloaded archive against the checksum the
registry published.

- Published checksum, equal digest: verified
- Published checksum, different digest: IntegrityMismatchError
- No published checksum: warning, never reported as verified
"""

from typing import Optional

from plugin_downloader.core.logger import get_logger
from plugin_downloader.constants import LOG_OUTPUT
from plugin_downloader.engine.errors import IntegrityMismatchError
from plugin_downloader.engine.result import ValidationResult

logger = get_logger(__name__, 'engine')


class ChecksumValidator:
    """
    Compares a computed digest with a published checksum.

    Comparison is exact (case-sensitive); digests are produced as
    lowercase hex.

    Example:
        validator = ChecksumValidator()
        result = validator.verify(expected=asset.checksum, actual=download.checksum)
        if not result.verified:
            print(result.warnings)
    """

    def verify(self, expected: str, actual: str, url: Optional[str] = None) -> ValidationResult:
        """
        Verify a digest.

        Args:
            expected: Published checksum ('' when none was published)
            actual: Digest of the downloaded bytes
            url: Download URL, for error context

        Returns:
            ValidationResult

        Raises:
            IntegrityMismatchError: Checksum published and different
        """
        result = ValidationResult(verified=False, expected=expected, actual=actual)

        if not expected:
            message = f"Warning - checksum not verified: {actual}"
            logger.warning(message)
            result.add_warning(message)
            return result

        if expected != actual:
            logger.error(f"{LOG_OUTPUT} Checksum mismatch: expected {expected}, got {actual}")
            raise IntegrityMismatchError(expected, actual, url=url)

        result.verified = True
        logger.info(f"{LOG_OUTPUT} Checksum verified: {actual}")
        return result


__all__ = ['ChecksumValidator']
