# Path: plugin_downloader/engine/stream_handler.py
"""
Stream Handler

One-pass streaming of a response body to disk.

Architecture:
- FanOutWriter dispatches every chunk to N sinks
- FileSink: async file I/O (aiofiles)
- DigestSink: running SHA-256 of the written bytes
- ProgressSink: rich progress bar (spinner when size is unknown)
- Cancellation removes the partial file so it is never mistaken
  for a complete archive
"""

import asyncio
import hashlib
from pathlib import Path
from typing import AsyncIterator, Optional, Protocol

import aiofiles
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeRemainingColumn,
    TransferSpeedColumn,
)

from plugin_downloader.core.logger import get_logger
from plugin_downloader.constants import LOG_PROCESS
from plugin_downloader.engine.constants import (
    PROGRESS_DESCRIPTION,
    PROGRESS_REFRESH_PER_SECOND,
)

logger = get_logger(__name__, 'engine')


class ChunkSink(Protocol):
    """Anything a FanOutWriter can dispatch chunks to."""

    async def write(self, chunk: bytes) -> None:
        ...


class FileSink:
    """Writes chunks to an open aiofiles handle."""

    def __init__(self, handle):
        self._handle = handle

    async def write(self, chunk: bytes) -> None:
        await self._handle.write(chunk)


class DigestSink:
    """Feeds chunks to a hashlib digest."""

    def __init__(self, algorithm: str = 'sha256'):
        self._digest = hashlib.new(algorithm)

    async def write(self, chunk: bytes) -> None:
        self._digest.update(chunk)

    def hexdigest(self) -> str:
        """Lowercase hex digest of everything written so far."""
        return self._digest.hexdigest()


class ProgressSink:
    """
    Advances a rich progress task.

    With a known total a bar with ETA is shown; without one the meter
    degrades to a spinner with transferred bytes and speed.

    Example:
        with ProgressSink(total=1024, enabled=True) as progress:
            await progress.write(chunk)
    """

    def __init__(
        self,
        total: Optional[int] = None,
        description: str = PROGRESS_DESCRIPTION,
        enabled: bool = True
    ):
        if total:
            columns = (
                TextColumn('{task.description}'),
                BarColumn(),
                DownloadColumn(),
                TransferSpeedColumn(),
                TimeRemainingColumn(),
            )
        else:
            columns = (
                SpinnerColumn(),
                TextColumn('{task.description}'),
                DownloadColumn(),
                TransferSpeedColumn(),
            )

        self._progress = Progress(
            *columns,
            refresh_per_second=PROGRESS_REFRESH_PER_SECOND,
            disable=not enabled,
        )
        self._task: TaskID = self._progress.add_task(description, total=total or None)

    def __enter__(self) -> 'ProgressSink':
        self._progress.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._progress.stop()

    async def write(self, chunk: bytes) -> None:
        self._progress.update(self._task, advance=len(chunk))


class FanOutWriter:
    """
    Dispatches each write to every sink, in order.

    Example:
        digest = DigestSink()
        writer = FanOutWriter(FileSink(f), digest)
        await writer.write(b'data')
    """

    def __init__(self, *sinks: ChunkSink):
        self.sinks = sinks
        self.bytes_written = 0

    async def write(self, chunk: bytes) -> int:
        for sink in self.sinks:
            await sink.write(chunk)
        self.bytes_written += len(chunk)
        return len(chunk)


class StreamHandler:
    """
    Streams a response body to a file while hashing it.

    Every call starts from an empty file and a fresh digest, so a
    retried download never carries bytes of an earlier attempt.

    Example:
        handler = StreamHandler(show_progress=False)
        size, checksum = await handler.stream_to_file(
            response.content.iter_chunked(32768),
            Path('.loki/plugins/aws.zip'),
            total_size=response.content_length,
        )
    """

    def __init__(self, show_progress: bool = True):
        """
        Initialize stream handler.

        Args:
            show_progress: Render a progress bar while streaming
        """
        self.show_progress = show_progress
        self.bytes_written = 0
        self.chunks_written = 0

    async def stream_to_file(
        self,
        response_stream: AsyncIterator[bytes],
        output_path: Path,
        total_size: Optional[int] = None
    ) -> tuple[int, str]:
        """
        Stream response to file.

        Args:
            response_stream: Async iterator of byte chunks
            output_path: Path where file will be written (truncated)
            total_size: Declared content length, if any

        Returns:
            Tuple of (bytes written, lowercase hex SHA-256)

        Raises:
            asyncio.CancelledError: Re-raised after removing the partial file
        """
        self.bytes_written = 0
        self.chunks_written = 0
        digest = DigestSink()

        try:
            async with aiofiles.open(output_path, 'wb') as f:
                with ProgressSink(total=total_size, enabled=self.show_progress) as progress:
                    writer = FanOutWriter(FileSink(f), digest, progress)
                    async for chunk in response_stream:
                        if chunk:
                            await writer.write(chunk)
                            self.chunks_written += 1
                    self.bytes_written = writer.bytes_written

        except asyncio.CancelledError:
            logger.warning(f"{LOG_PROCESS} Download cancelled, removing partial file {output_path.name}")
            output_path.unlink(missing_ok=True)
            raise

        logger.debug(
            f"{LOG_PROCESS} Stream complete: {self.bytes_written} bytes "
            f"in {self.chunks_written} chunks"
        )

        return self.bytes_written, digest.hexdigest()


__all__ = [
    'ChunkSink',
    'FileSink',
    'DigestSink',
    'ProgressSink',
    'FanOutWriter',
    'StreamHandler',
]
