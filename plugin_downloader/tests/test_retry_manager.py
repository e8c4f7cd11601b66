# Path: plugin_downloader/tests/test_retry_manager.py
"""
Retry Manager and Archive Downloader Tests

Fixed-delay retries of transient status failures, single attempt for
not-found, wrapped error once the budget is spent.
"""

import pytest
from aiohttp.test_utils import unused_port

from plugin_downloader.engine.archive_downloader import ArchiveDownloader
from plugin_downloader.engine.errors import (
    DownloadFailedError,
    HTTPStatusError,
    IntegrityMismatchError,
    PluginNotFoundError,
    TransportError,
)
from plugin_downloader.engine.retry_manager import (
    RetryManager,
    RetryPolicy,
    is_retryable_error,
)
from plugin_downloader.tests.fixtures import Reply, build_zip, sha256_hex


def test_only_status_errors_are_retryable():
    assert is_retryable_error(HTTPStatusError(503))
    assert not is_retryable_error(PluginNotFoundError("not found"))
    assert not is_retryable_error(TransportError("connection refused"))
    assert not is_retryable_error(IntegrityMismatchError('a', 'b'))
    assert not is_retryable_error(ValueError("boom"))


def test_policy_from_config(config):
    policy = RetryPolicy.from_config(config)
    assert policy.attempts == 5
    assert policy.delay == 0


async def test_retry_async_recovers_after_transient_failures(config):
    calls = []

    async def flaky():
        calls.append(1)
        if len(calls) < 3:
            raise HTTPStatusError(502, url='http://example.invalid/a.zip')
        return 'ok'

    manager = RetryManager(RetryPolicy(attempts=5, delay=0), config=config)
    assert await manager.retry_async(flaky, url='http://example.invalid/a.zip') == 'ok'
    assert len(calls) == 3


async def test_retry_async_propagates_non_retryable_immediately(config):
    calls = []

    async def unreachable():
        calls.append(1)
        raise TransportError("connection refused")

    manager = RetryManager(RetryPolicy(attempts=5, delay=0), config=config)
    with pytest.raises(TransportError):
        await manager.retry_async(unreachable, url='http://example.invalid/a.zip')
    assert len(calls) == 1


async def test_download_succeeds_on_third_attempt(remote, remote_config, http_handler, tmp_path):
    data = build_zip({'entry': b'payload'})
    url = remote.add('/archive.zip', Reply(503), Reply(503), Reply(200, body=data))

    downloader = ArchiveDownloader(http_handler, RetryManager(config=remote_config), remote_config)
    result = await downloader.fetch(url, tmp_path / 'plugin.zip')

    assert result.attempts == 3
    assert len(remote.requests_for('/archive.zip')) == 3
    assert result.file_size == len(data)
    assert result.checksum == sha256_hex(data)
    assert (tmp_path / 'plugin.zip').read_bytes() == data


async def test_not_found_is_not_retried(remote, remote_config, http_handler, tmp_path):
    url = remote.add('/archive.zip', Reply(404))

    downloader = ArchiveDownloader(http_handler, RetryManager(config=remote_config), remote_config)
    with pytest.raises(PluginNotFoundError):
        await downloader.fetch(url, tmp_path / 'plugin.zip')

    assert len(remote.requests_for('/archive.zip')) == 1


async def test_exhausted_retries_wrap_last_error(remote, remote_config, http_handler, tmp_path):
    url = remote.add('/archive.zip', Reply(500))

    manager = RetryManager(RetryPolicy(attempts=3, delay=0), config=remote_config)
    downloader = ArchiveDownloader(http_handler, manager, remote_config)

    with pytest.raises(DownloadFailedError) as exc_info:
        await downloader.fetch(url, tmp_path / 'plugin.zip')

    error = exc_info.value
    assert error.attempts == 3
    assert isinstance(error.last_error, HTTPStatusError)
    assert error.last_error.status == 500
    assert url in str(error)
    assert len(remote.requests_for('/archive.zip')) == 3


async def test_retry_restarts_file_from_empty(remote, remote_config, http_handler, tmp_path):
    data = b'complete archive bytes'
    url = remote.add('/archive.zip', Reply(503, body=b'error page body'), Reply(200, body=data))
    output = tmp_path / 'plugin.zip'
    output.write_bytes(b'stale bytes from an earlier run that are longer than the archive')

    downloader = ArchiveDownloader(http_handler, RetryManager(config=remote_config), remote_config)
    result = await downloader.fetch(url, output)

    assert output.read_bytes() == data
    assert result.checksum == sha256_hex(data)


async def test_connection_failure_is_terminal(remote_config, http_handler, tmp_path):
    url = f'http://127.0.0.1:{unused_port()}/archive.zip'
    attempts = []

    async def download_once():
        attempts.append(1)
        return await http_handler.download(url, tmp_path / 'plugin.zip')

    manager = RetryManager(RetryPolicy(attempts=5, delay=0), config=remote_config)
    with pytest.raises(TransportError) as exc_info:
        await manager.retry_async(download_once, url=url)

    assert not exc_info.value.retryable
    assert exc_info.value.step == 'download'
    assert len(attempts) == 1
