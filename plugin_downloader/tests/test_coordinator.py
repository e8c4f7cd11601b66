# Path: plugin_downloader/tests/test_coordinator.py
"""
Plugin Download Coordinator Tests

End-to-end installs against an in-process remote:
1. GitHub release assets (per-repository and monorepo layouts)
2. Hub registry assets with checksum verification
3. Registry status classification and local failures
"""

import asyncio
import stat

import pytest
import pytest_asyncio

from plugin_downloader import download_plugin_from_github
from plugin_downloader.core.config_loader import ConfigLoader
from plugin_downloader.engine.coordinator import PluginDownloadCoordinator
from plugin_downloader.engine.errors import (
    EntryNotFoundError,
    HubResponseError,
    IntegrityMismatchError,
    PluginNotFoundError,
    PluginVersionNotFoundError,
    RateLimitedError,
    StorageError,
    UnauthorizedError,
    UnexpectedStatusError,
)
from plugin_downloader.engine.models import HubDownloadOptions, PluginIdentity
from plugin_downloader.engine.platform_target import PlatformTarget
from plugin_downloader.specs.plugin_kind import PluginKind
from plugin_downloader.tests.fixtures import (
    PLUGIN_BINARY,
    Reply,
    build_zip,
    corrupt_one_byte,
    sha256_hex,
)

HACKERNEWS_PATH = (
    '/loki/loki-source-hackernews/releases/download/v1.1.4/'
    'loki-source-hackernews_linux_amd64.zip'
)
AWS_ASSET_PATH = '/plugins/loki/source/aws/versions/v22.18.0/assets/linux_amd64'
AWS_ARCHIVE_PATH = '/cdn/plugin-aws-v22.18.0-linux-amd64.zip'
AWS_ENTRY = 'plugin-aws-v22.18.0-linux-amd64'


@pytest_asyncio.fixture
async def coordinator(remote_config, linux_amd64):
    coordinator = PluginDownloadCoordinator(config=remote_config, platform_target=linux_amd64)
    yield coordinator
    await coordinator.close()


def hub_options(tmp_path, **overrides) -> HubDownloadOptions:
    values = dict(
        local_path=tmp_path / 'plugins' / 'source' / 'loki' / 'aws' / 'v22.18.0' / 'plugin',
        plugin_team='loki',
        plugin_kind=PluginKind.SOURCE,
        plugin_name='aws',
        plugin_version='v22.18.0',
    )
    values.update(overrides)
    return HubDownloadOptions(**values)


def serve_hub_plugin(remote, archive: bytes, checksum: str) -> None:
    location = remote.add(AWS_ARCHIVE_PATH, Reply(200, body=archive))
    remote.add(AWS_ASSET_PATH, Reply(json={'location': location, 'checksum': checksum}))


# ============================================================================
# GITHUB
# ============================================================================

async def test_github_hackernews_install(remote, coordinator, tmp_path):
    remote.add(HACKERNEWS_PATH, Reply(200, body=build_zip({'loki-source-hackernews': PLUGIN_BINARY})))
    local_path = tmp_path / 'plugins' / 'source' / 'loki' / 'hackernews' / 'v1.1.4' / 'plugin'

    result = await coordinator.download_from_github(
        local_path, 'loki', 'hackernews', 'v1.1.4', PluginKind.SOURCE
    )

    assert not result.skipped
    assert result.url == remote.base_url + HACKERNEWS_PATH
    assert result.extraction_result.entry_name == 'loki-source-hackernews'
    assert local_path.read_bytes() == PLUGIN_BINARY
    assert stat.S_IMODE(local_path.stat().st_mode) == 0o744
    assert stat.S_IMODE(local_path.parent.stat().st_mode) & 0o700 == 0o700
    assert not local_path.with_name('plugin.zip').exists()
    assert result.validation_result is None


async def test_github_install_is_idempotent(remote, coordinator, tmp_path):
    remote.add(HACKERNEWS_PATH, Reply(200, body=build_zip({'loki-source-hackernews': PLUGIN_BINARY})))
    local_path = tmp_path / 'plugin'

    await coordinator.download_from_github(local_path, 'loki', 'hackernews', 'v1.1.4', PluginKind.SOURCE)
    requests_after_first = len(remote.requests)

    second = await coordinator.download_from_github(
        local_path, 'loki', 'hackernews', 'v1.1.4', PluginKind.SOURCE
    )

    assert second.skipped
    assert len(remote.requests) == requests_after_first
    assert len(remote.requests_for(HACKERNEWS_PATH, method='GET')) == 1
    assert local_path.read_bytes() == PLUGIN_BINARY


async def test_existing_binary_means_no_network(remote, coordinator, tmp_path):
    local_path = tmp_path / 'plugin'
    local_path.write_bytes(b'already here')

    result = await coordinator.download_from_github(
        local_path, 'loki', 'hackernews', 'v1.1.4', PluginKind.SOURCE
    )

    assert result.skipped
    assert remote.requests == []
    assert local_path.read_bytes() == b'already here'


async def test_github_monorepo_install(remote, coordinator, tmp_path):
    remote.add(
        '/pixis/loki/releases/download/plugins-destination-postgresql-v2.0.0/'
        'postgresql_linux_amd64.zip',
        Reply(200, body=build_zip({'plugins/destination/postgresql': PLUGIN_BINARY})),
    )
    local_path = tmp_path / 'plugin'

    result = await coordinator.download_from_github(
        local_path, 'pixis', 'postgresql', 'v2.0.0', PluginKind.DESTINATION
    )

    assert result.extraction_result.entry_name == 'plugins/destination/postgresql'
    assert local_path.read_bytes() == PLUGIN_BINARY
    # per-repository candidate probed first and answered 404
    assert remote.requests[0].path.startswith('/pixis/loki-destination-postgresql/')


async def test_github_not_found_carries_identity(remote, coordinator, tmp_path):
    local_path = tmp_path / 'plugin'

    with pytest.raises(PluginNotFoundError) as exc_info:
        await coordinator.download_from_github(local_path, 'loki', 'ghost', 'v1.0.0', PluginKind.SOURCE)

    assert exc_info.value.identity == PluginIdentity('loki', 'ghost', 'v1.0.0', PluginKind.SOURCE)
    assert not local_path.exists()


async def test_github_archive_without_expected_entry(remote, coordinator, tmp_path):
    remote.add(HACKERNEWS_PATH, Reply(200, body=build_zip({'something-else': PLUGIN_BINARY})))
    local_path = tmp_path / 'plugin'

    with pytest.raises(EntryNotFoundError):
        await coordinator.download_from_github(local_path, 'loki', 'hackernews', 'v1.1.4', PluginKind.SOURCE)

    assert not local_path.exists()
    # archive left behind for diagnostics
    assert (tmp_path / 'plugin.zip').exists()


async def test_keep_archive(remote, remote_config, linux_amd64, tmp_path):
    remote.add(HACKERNEWS_PATH, Reply(200, body=build_zip({'loki-source-hackernews': PLUGIN_BINARY})))
    config = ConfigLoader(overrides={**dict(remote_config.items()), 'keep_archive': True})

    async with PluginDownloadCoordinator(config=config, platform_target=linux_amd64) as coordinator:
        await coordinator.download_from_github(
            tmp_path / 'plugin', 'loki', 'hackernews', 'v1.1.4', PluginKind.SOURCE
        )

    assert (tmp_path / 'plugin.zip').exists()


async def test_destination_directory_failure(remote, coordinator, tmp_path):
    blocker = tmp_path / 'blocker'
    blocker.write_bytes(b'')

    with pytest.raises(StorageError):
        await coordinator.download_from_github(
            blocker / 'nested' / 'plugin', 'loki', 'hackernews', 'v1.1.4', PluginKind.SOURCE
        )

    assert remote.requests == []


async def test_module_level_helper(remote, remote_config, tmp_path):
    target = PlatformTarget.current()
    remote.add(
        f'/loki/loki-source-hackernews/releases/download/v1.1.4/'
        f'loki-source-hackernews_{target.os}_{target.arch}.zip',
        Reply(200, body=build_zip({target.with_binary_suffix('loki-source-hackernews'): PLUGIN_BINARY})),
    )
    local_path = tmp_path / 'plugin'

    result = await download_plugin_from_github(
        local_path, 'loki', 'hackernews', 'v1.1.4', PluginKind.SOURCE, config=remote_config
    )

    assert result.local_path == local_path
    assert local_path.read_bytes() == PLUGIN_BINARY


# ============================================================================
# HUB
# ============================================================================

async def test_hub_install_with_verified_checksum(remote, coordinator, tmp_path):
    archive = build_zip({AWS_ENTRY: PLUGIN_BINARY})
    serve_hub_plugin(remote, archive, sha256_hex(archive))
    options = hub_options(tmp_path)

    result = await coordinator.download_from_hub(options)

    assert result.checksum_verified
    assert result.download_result.checksum == sha256_hex(archive)
    assert options.local_path.read_bytes() == PLUGIN_BINARY
    assert stat.S_IMODE(options.local_path.stat().st_mode) == 0o744


async def test_hub_single_byte_corruption(remote, coordinator, tmp_path):
    archive = build_zip({AWS_ENTRY: PLUGIN_BINARY})
    tampered = corrupt_one_byte(archive, offset=len(archive) // 2)
    remote.add(AWS_ARCHIVE_PATH, Reply(200, body=tampered))
    remote.add(AWS_ASSET_PATH, Reply(json={
        'location': remote.base_url + AWS_ARCHIVE_PATH,
        'checksum': sha256_hex(archive),
    }))
    options = hub_options(tmp_path)

    with pytest.raises(IntegrityMismatchError) as exc_info:
        await coordinator.download_from_hub(options)

    assert exc_info.value.expected == sha256_hex(archive)
    assert exc_info.value.actual == sha256_hex(tampered)
    assert exc_info.value.identity == options.identity
    assert not options.local_path.exists()


async def test_hub_missing_checksum_installs_with_warning(remote, coordinator, tmp_path):
    archive = build_zip({AWS_ENTRY: PLUGIN_BINARY})
    serve_hub_plugin(remote, archive, '')
    options = hub_options(tmp_path)

    result = await coordinator.download_from_hub(options)

    assert not result.checksum_verified
    assert result.validation_result.warnings == [
        f'Warning - checksum not verified: {sha256_hex(archive)}'
    ]
    assert options.local_path.read_bytes() == PLUGIN_BINARY


async def test_hub_team_endpoint_and_token(remote, coordinator, tmp_path):
    archive = build_zip({AWS_ENTRY: PLUGIN_BINARY})
    location = remote.add(AWS_ARCHIVE_PATH, Reply(200, body=archive))
    team_path = '/teams/acme' + AWS_ASSET_PATH
    remote.add(team_path, Reply(json={'location': location, 'checksum': sha256_hex(archive)}))

    await coordinator.download_from_hub(hub_options(tmp_path, auth_token='tok', team_name='acme'))

    request = remote.requests_for(team_path)[0]
    assert request.headers['Authorization'] == 'Bearer tok'


@pytest.mark.parametrize('status, error_class', [
    (401, UnauthorizedError),
    (404, PluginVersionNotFoundError),
    (429, RateLimitedError),
    (503, UnexpectedStatusError),
])
async def test_hub_status_classification(remote, coordinator, tmp_path, status, error_class):
    remote.add(AWS_ASSET_PATH, Reply(status, json={'message': 'refused'}))
    options = hub_options(tmp_path)

    with pytest.raises(error_class) as exc_info:
        await coordinator.download_from_hub(options)

    assert exc_info.value.status == status
    assert exc_info.value.identity == options.identity
    assert remote.requests_for(AWS_ARCHIVE_PATH) == []


async def test_hub_not_found_is_not_found(remote, coordinator, tmp_path):
    remote.add(AWS_ASSET_PATH, Reply(404, json={}))

    with pytest.raises(PluginNotFoundError):
        await coordinator.download_from_hub(hub_options(tmp_path))


@pytest.mark.parametrize('reply', [
    Reply(200, json={'location': '', 'checksum': 'abc'}),
    Reply(200, json=['not', 'an', 'object']),
    Reply(200, body=b'not json'),
])
async def test_hub_unusable_answer(remote, coordinator, tmp_path, reply):
    remote.add(AWS_ASSET_PATH, reply)

    with pytest.raises(HubResponseError):
        await coordinator.download_from_hub(hub_options(tmp_path))


async def test_deadline(remote, coordinator, tmp_path):
    remote.add(AWS_ASSET_PATH, Reply(json={'location': 'http://unused.invalid/'}, delay=1.0))
    options = hub_options(tmp_path)

    with pytest.raises(asyncio.TimeoutError):
        await coordinator.download_from_hub(options, timeout=0.05)

    assert not options.local_path.exists()


async def test_hub_signed_location_is_redacted_in_result(remote, coordinator, tmp_path):
    archive = build_zip({AWS_ENTRY: PLUGIN_BINARY})
    location = remote.add(AWS_ARCHIVE_PATH, Reply(200, body=archive)) + '?X-Amz-Signature=SECRET'
    remote.add(AWS_ASSET_PATH, Reply(json={'location': location, 'checksum': sha256_hex(archive)}))

    result = await coordinator.download_from_hub(hub_options(tmp_path))

    assert result.url == location
    data = result.to_dict()
    assert 'SECRET' not in str(data)
    assert data['url'] == remote.base_url + AWS_ARCHIVE_PATH
    assert data['extraction_result']['entry_name'] == AWS_ENTRY
