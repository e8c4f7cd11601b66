# Path: plugin_downloader/tests/conftest.py
"""Shared pytest fixtures."""

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from plugin_downloader.core.config_loader import ConfigLoader
from plugin_downloader.engine.platform_target import PlatformTarget
from plugin_downloader.engine.protocol_handlers import HTTPHandler
from plugin_downloader.tests.fixtures import FakeRemote

TEST_OVERRIDES = {
    'retry_attempts': 5,
    'retry_delay': 0,
    'show_progress': False,
    'keep_archive': False,
    'log_dir': None,
}


@pytest.fixture
def config():
    return ConfigLoader(overrides=TEST_OVERRIDES)


@pytest.fixture
def linux_amd64():
    return PlatformTarget(os='linux', arch='amd64')


@pytest_asyncio.fixture
async def remote():
    fake = FakeRemote()
    app = web.Application()
    app.router.add_route('*', '/{tail:.*}', fake.handle)

    server = TestServer(app)
    await server.start_server()
    fake.base_url = f"http://{server.host}:{server.port}"

    yield fake

    await server.close()


@pytest_asyncio.fixture
async def remote_config(remote):
    return ConfigLoader(overrides={
        **TEST_OVERRIDES,
        'api_base_url': remote.base_url,
        'github_base_url': remote.base_url,
    })


@pytest_asyncio.fixture
async def http_handler(remote_config):
    handler = HTTPHandler(remote_config)
    yield handler
    await handler.close()
