# Path: plugin_downloader/engine/extraction/archive_handler.py
"""
Archive Handler

Extracts the single platform binary from a plugin archive.

Architecture:
- ZIP opened as a random-access index, only one entry is read
- Destination created with the executable bit, stale content truncated
- A failed copy never leaves a partial binary at the final path
"""

import os
import shutil
import time
import zipfile
import zlib
from pathlib import Path
from typing import Optional

from plugin_downloader.core.logger import get_logger
from plugin_downloader.core.config_loader import ConfigLoader, get_config
from plugin_downloader.constants import (
    BINARY_MODE,
    LOG_INPUT,
    LOG_OUTPUT,
)
from plugin_downloader.engine.errors import (
    ArchiveLayoutError,
    EntryNotFoundError,
    StorageError,
)
from plugin_downloader.engine.extraction.constants import (
    COPY_BUFFER_SIZE,
    ZIP_READ_MODE,
)
from plugin_downloader.engine.result import ExtractionResult

logger = get_logger(__name__, 'extraction')


class PluginArchiveExtractor:
    """
    Copies one named entry of a ZIP archive to a file.

    Example:
        extractor = PluginArchiveExtractor()
        result = extractor.extract(
            archive_path=Path('.loki/plugins/aws.zip'),
            entry_name='plugin-aws-v22.18.0-linux-amd64',
            destination=Path('.loki/plugins/aws'),
        )
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        """
        Initialize extractor.

        Args:
            config: Optional ConfigLoader instance
        """
        self.config = config if config else get_config()

    def extract(
        self,
        archive_path: Path,
        entry_name: str,
        destination: Path
    ) -> ExtractionResult:
        """
        Extract a single entry.

        Args:
            archive_path: Path to ZIP file
            entry_name: Member to copy
            destination: Output path (created 0o744, truncated)

        Returns:
            ExtractionResult with bytes written

        Raises:
            ArchiveLayoutError: Archive cannot be read
            EntryNotFoundError: Member absent
            StorageError: Destination cannot be written
        """
        logger.info(f"{LOG_INPUT} Extracting {entry_name} from {archive_path.name}")

        start_time = time.time()

        try:
            archive = zipfile.ZipFile(archive_path, ZIP_READ_MODE)
        except (zipfile.BadZipFile, OSError) as e:
            raise ArchiveLayoutError(
                f"failed to open plugin archive {archive_path}: {e}", step='extract'
            ) from e

        with archive:
            try:
                info = archive.getinfo(entry_name)
            except KeyError as e:
                raise EntryNotFoundError(entry_name, str(archive_path)) from e

            bytes_written = self._copy_entry(archive, info, destination)

        result = ExtractionResult(
            archive_path=archive_path,
            entry_name=entry_name,
            destination=destination,
            bytes_written=bytes_written,
            duration=time.time() - start_time,
        )

        logger.info(
            f"{LOG_OUTPUT} Extraction complete: {bytes_written} bytes "
            f"written to {destination} in {result.duration:.2f}s"
        )

        return result

    def _copy_entry(self, archive: zipfile.ZipFile, info: zipfile.ZipInfo, destination: Path) -> int:
        """Copy one member byte-for-byte, removing the destination on failure."""
        completed = False

        try:
            fd = os.open(destination, os.O_RDWR | os.O_CREAT | os.O_TRUNC, BINARY_MODE)
            with os.fdopen(fd, 'wb') as out, archive.open(info) as source:
                shutil.copyfileobj(source, out, COPY_BUFFER_SIZE)
                bytes_written = out.tell()

            # umask and pre-existing files both bypass the open() mode
            os.chmod(destination, BINARY_MODE)
            completed = True

        except (zipfile.BadZipFile, zlib.error) as e:
            raise ArchiveLayoutError(
                f"corrupt archive entry {info.filename}: {e}", step='extract'
            ) from e

        except OSError as e:
            raise StorageError(
                f"failed to write plugin binary {destination}: {e}", step='extract'
            ) from e

        finally:
            if not completed:
                Path(destination).unlink(missing_ok=True)

        return bytes_written


__all__ = ['PluginArchiveExtractor']
