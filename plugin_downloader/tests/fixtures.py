# Path: plugin_downloader/tests/fixtures.py
"""
Test Fixtures for the Plugin Downloader

Builders for plugin archives and a scripted in-process HTTP remote
standing in for GitHub release hosting and the Hub registry.
"""

import asyncio
import hashlib
import io
import zipfile
from dataclasses import dataclass, field
from typing import Any, Optional

from aiohttp import web


@dataclass
class Reply:
    """One scripted response."""
    status: int = 200
    body: bytes = b''
    json: Optional[Any] = None
    delay: float = 0.0


@dataclass
class RecordedRequest:
    method: str
    path: str
    headers: dict[str, str] = field(default_factory=dict)


class FakeRemote:
    """
    Scripted HTTP remote.

    Each path holds a queue of replies consumed in order; the last one
    repeats. Unknown paths answer 404. Every request is recorded.

    Example:
        remote.add('/archive.zip', Reply(503), Reply(200, body=data))
    """

    def __init__(self):
        self.routes: dict[str, list[Reply]] = {}
        self.requests: list[RecordedRequest] = []
        self.base_url = ''

    def add(self, path: str, *replies: Reply) -> str:
        """Script replies for a path, returning its absolute URL."""
        self.routes[path] = list(replies)
        return self.base_url + path

    def requests_for(self, path: str, method: Optional[str] = None) -> list[RecordedRequest]:
        return [
            r for r in self.requests
            if r.path == path and (method is None or r.method == method)
        ]

    async def handle(self, request: web.Request) -> web.StreamResponse:
        self.requests.append(RecordedRequest(
            method=request.method,
            path=request.path,
            headers=dict(request.headers),
        ))

        replies = self.routes.get(request.path)
        if not replies:
            return web.Response(status=404)

        reply = replies.pop(0) if len(replies) > 1 else replies[0]

        if reply.delay:
            await asyncio.sleep(reply.delay)

        if reply.json is not None:
            return web.json_response(reply.json, status=reply.status)

        body = b'' if request.method == 'HEAD' else reply.body
        return web.Response(status=reply.status, body=body)


def build_zip(entries: dict[str, bytes], compression: int = zipfile.ZIP_DEFLATED) -> bytes:
    """Build a ZIP archive in memory."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w', compression) as archive:
        for name, data in entries.items():
            archive.writestr(name, data)
    return buffer.getvalue()


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def corrupt_one_byte(data: bytes, offset: int = 0) -> bytes:
    """Flip every bit of the byte at offset."""
    mutable = bytearray(data)
    mutable[offset] ^= 0xFF
    return bytes(mutable)


PLUGIN_BINARY = b'\x7fELF' + b'plugin-binary-payload' * 64
