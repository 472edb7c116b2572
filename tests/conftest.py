"""
Pytest configuration and fixtures for compression tests.
"""
import gzip
import zlib
from typing import Dict, List, Optional

import pytest
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse, Response, StreamingResponse
from fastapi.testclient import TestClient
from starlette.datastructures import MutableHeaders
from starlette.requests import Request

from httpcompression import CompressionMiddleware
from httpcompression.events import EventEmitter
from httpcompression.utils.bytes import to_bytes


class FakeTransport(EventEmitter):
    """In-memory response transport recording everything written to it."""

    def __init__(self, headers: Optional[Dict[str, str]] = None):
        super().__init__()
        self.headers = MutableHeaders(headers=headers or {})
        self.headers_sent = False
        self.head_count = 0
        self.headers_at_commit: Dict[str, str] = {}
        self.chunks: List[bytes] = []
        self.end_calls = 0
        self.writable = True

    def write_head(self):
        if self.headers_sent:
            return
        self.headers_sent = True
        self.head_count += 1
        self.headers_at_commit = dict(self.headers)

    def write(self, chunk, encoding='utf-8'):
        if not self.headers_sent:
            self.write_head()
        self.chunks.append(to_bytes(chunk, encoding))
        return self.writable

    def end(self, chunk=None, encoding='utf-8'):
        if not self.headers_sent:
            self.write_head()
        if chunk is not None:
            self.chunks.append(to_bytes(chunk, encoding))
        self.end_calls += 1

    @property
    def body(self) -> bytes:
        return b"".join(self.chunks)


def make_request(method: str = "GET", accept_encoding: Optional[str] = "gzip, deflate") -> Request:
    """Build a starlette Request with the given method and Accept-Encoding."""
    headers = []
    if accept_encoding is not None:
        headers.append((b"accept-encoding", accept_encoding.encode("latin-1")))
    return Request({
        "type": "http",
        "method": method,
        "path": "/",
        "query_string": b"",
        "headers": headers,
    })


def decompress(data: bytes, encoding: str) -> bytes:
    if encoding == "gzip":
        return gzip.decompress(data)
    if encoding == "deflate":
        return zlib.decompress(data)
    return data


@pytest.fixture
def transport() -> FakeTransport:
    """A transport for a compressible text response."""
    return FakeTransport({"Content-Type": "text/plain; charset=utf-8"})


@pytest.fixture
def transport_factory():
    """Build transports with arbitrary response headers."""
    return FakeTransport


@pytest.fixture
def request_factory():
    return make_request


@pytest.fixture
def decode():
    return decompress


# End-to-end application

BIG_TEXT = "Hello, compression! " * 100


@pytest.fixture
def big_text() -> str:
    return BIG_TEXT


def build_app(**options) -> FastAPI:
    app = FastAPI()
    app.add_middleware(CompressionMiddleware, **options)

    @app.get("/text")
    async def text():
        return PlainTextResponse(BIG_TEXT)

    @app.get("/small")
    async def small():
        return PlainTextResponse("tiny")

    @app.get("/json")
    async def json_items():
        return {"items": [{"id": i, "name": f"item-{i}"} for i in range(200)]}

    @app.get("/image")
    async def image():
        return Response(b"\x89PNG" + b"\x00" * 4096, media_type="image/png")

    @app.get("/encoded")
    async def encoded():
        return Response(
            b"x" * 4096,
            media_type="text/plain",
            headers={"Content-Encoding": "x-custom"},
        )

    @app.get("/stream")
    async def stream():
        async def generate():
            for part in ("a", "b", "c"):
                yield part

        return StreamingResponse(generate(), media_type="text/plain")

    @app.api_route("/head", methods=["GET", "HEAD"])
    async def head():
        return PlainTextResponse(BIG_TEXT)

    return app


@pytest.fixture
def app_factory():
    """Build test applications with custom compression options."""
    return build_app


@pytest.fixture
def app() -> FastAPI:
    """Create a test FastAPI application with compression enabled."""
    return build_app()


@pytest.fixture
def client(app) -> TestClient:
    """Create a test client for the FastAPI app."""
    return TestClient(app)
