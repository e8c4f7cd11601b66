# Path: plugin_downloader/tests/test_entry_names.py
"""Archive Entry Name Tests"""

import pytest

from plugin_downloader.engine.errors import UnrecognizedOriginError
from plugin_downloader.engine.extraction.entry_names import github_entry_name, hub_entry_name
from plugin_downloader.engine.platform_target import PlatformTarget, with_binary_suffix

BASE = 'https://github.com'


def test_hub_entry_name(linux_amd64):
    assert hub_entry_name('aws', 'v22.18.0', linux_amd64) == 'plugin-aws-v22.18.0-linux-amd64'


def test_hub_entry_name_has_no_windows_suffix():
    target = PlatformTarget(os='windows', arch='amd64')
    assert hub_entry_name('aws', 'v22.18.0', target) == 'plugin-aws-v22.18.0-windows-amd64'


@pytest.mark.parametrize('url, org, name, expected', [
    (
        f'{BASE}/loki/loki-source-hackernews/releases/download/v1.1.4/'
        'loki-source-hackernews_linux_amd64.zip',
        'loki', 'hackernews', 'loki-source-hackernews',
    ),
    (
        f'{BASE}/acme/loki-destination-s3/releases/download/v1.0.0/loki-destination-s3_linux_amd64.zip',
        'acme', 's3', 'loki-destination-s3',
    ),
    (
        f'{BASE}/pixis/loki/releases/download/plugins-source-postgresql-v2.0.0/'
        'postgresql_linux_amd64.zip',
        'pixis', 'postgresql', 'plugins/source/postgresql',
    ),
    (
        f'{BASE}/pixis/loki/releases/download/plugins-destination-bigquery-v3.1.0/'
        'bigquery_linux_amd64.zip',
        'pixis', 'bigquery', 'plugins/destination/bigquery',
    ),
])
def test_github_entry_name(linux_amd64, url, org, name, expected):
    assert github_entry_name(url, org, name, linux_amd64, base_url=BASE) == expected


def test_github_entry_name_windows_suffix():
    target = PlatformTarget(os='windows', arch='amd64')
    url = f'{BASE}/loki/loki-source-hackernews/releases/download/v1.1.4/loki-source-hackernews_windows_amd64.zip'
    assert github_entry_name(url, 'loki', 'hackernews', target, base_url=BASE) == 'loki-source-hackernews.exe'


def test_github_entry_name_custom_base(linux_amd64):
    url = 'http://mirror.local:8080/loki/loki-source-hn/releases/download/v1/loki-source-hn_linux_amd64.zip'
    assert github_entry_name(url, 'loki', 'hn', linux_amd64, base_url='http://mirror.local:8080/') == 'loki-source-hn'


def test_github_entry_name_unknown_origin(linux_amd64):
    url = 'https://example.com/loki/hackernews.zip'
    with pytest.raises(UnrecognizedOriginError) as exc_info:
        github_entry_name(url, 'loki', 'hackernews', linux_amd64, base_url=BASE)
    assert str(exc_info.value) == f'unknown GitHub {url}'


def test_with_binary_suffix():
    assert with_binary_suffix('/opt/plugin', PlatformTarget('windows', 'arm64')) == '/opt/plugin.exe'
    assert with_binary_suffix('/opt/plugin', PlatformTarget('linux', 'arm64')) == '/opt/plugin'
    assert with_binary_suffix('/opt/plugin', PlatformTarget('darwin', 'arm64')) == '/opt/plugin'


def test_current_platform_uses_go_names(monkeypatch):
    monkeypatch.setattr('platform.system', lambda: 'Linux')
    monkeypatch.setattr('platform.machine', lambda: 'x86_64')
    target = PlatformTarget.current()
    assert target == PlatformTarget('linux', 'amd64')
    assert target.target == 'linux_amd64'


def test_current_platform_unsupported(monkeypatch):
    monkeypatch.setattr('platform.system', lambda: 'Plan9')
    with pytest.raises(ValueError):
        PlatformTarget.current()
