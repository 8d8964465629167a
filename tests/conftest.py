"""
Pytest configuration and fixtures for rexec SDK tests.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Callable

import httpx
import pytest

from rexec.client import RexecClient
from rexec.config import reset_settings
from rexec.transport.remote import RemoteTransport

TEST_BASE_URL = "https://rexec.test"
TEST_TOKEN = "test-token"


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep REXEC_* variables from the host out of every test."""
    for name in ("REXEC_HOST", "REXEC_TOKEN", "REXEC_REQUEST_TIMEOUT", "REXEC_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


# ============================================================================
# WebSocket Fakes
# ============================================================================


class FakeConnection:
    """
    In-memory stand-in for a websockets ClientConnection.

    Inbound items are queued with feed(); each may be bytes, str, a
    websockets Frame, or an exception instance to raise from recv().
    """

    def __init__(self, *inbound: Any) -> None:
        self.sent: list[bytes | str] = []
        self.close_calls = 0
        self.send_error: BaseException | None = None
        self.close_error: BaseException | None = None
        self.recv_calls = 0
        self._inbound: asyncio.Queue[Any] = asyncio.Queue()
        for item in inbound:
            self.feed(item)

    def feed(self, item: Any) -> None:
        self._inbound.put_nowait(item)

    async def recv(self) -> Any:
        self.recv_calls += 1
        item = await self._inbound.get()
        if isinstance(item, BaseException):
            raise item
        return item

    async def send(self, message: bytes | str) -> None:
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(message)

    async def close(self) -> None:
        self.close_calls += 1
        if self.close_error is not None:
            raise self.close_error


@pytest.fixture
def fake_connection() -> FakeConnection:
    return FakeConnection()


@pytest.fixture
def make_connection() -> type[FakeConnection]:
    """FakeConnection factory; positional args are queued as inbound items."""
    return FakeConnection


# ============================================================================
# HTTP Mocks
# ============================================================================


class RecordingHandler:
    """httpx.MockTransport handler that records requests and replays responses."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: list[httpx.Response | Callable[[httpx.Request], httpx.Response]] = []

    def add(self, status_code: int = 200, json_data: Any = None, content: bytes | None = None) -> None:
        if content is None and json_data is not None:
            content = json.dumps(json_data).encode()
        self._responses.append(httpx.Response(status_code, content=content or b""))

    def raise_error(self, error: Exception) -> None:
        def _raise(request: httpx.Request) -> httpx.Response:
            raise error

        self._responses.append(_raise)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self._responses.pop(0) if self._responses else httpx.Response(200)
        if callable(response):
            return response(request)
        return response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def http_handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def transport(http_handler) -> RemoteTransport:
    """RemoteTransport backed by httpx.MockTransport."""
    return RemoteTransport(
        TEST_BASE_URL,
        token=TEST_TOKEN,
        http_transport=httpx.MockTransport(http_handler),
    )


@pytest.fixture
async def client(http_handler):
    """RexecClient backed by httpx.MockTransport."""
    async with RexecClient(
        TEST_BASE_URL,
        token=TEST_TOKEN,
        http_transport=httpx.MockTransport(http_handler),
    ) as c:
        yield c


# ============================================================================
# Test Data Fixtures
# ============================================================================


@pytest.fixture
def sample_container() -> dict[str, Any]:
    """Container as returned by the API."""
    return {
        "id": "c0ffee123456789",
        "name": "mydev",
        "image": "ubuntu:24.04",
        "status": "running",
        "created_at": "2025-01-15T10:00:00Z",
        "started_at": "2025-01-15T10:00:05Z",
        "labels": {"team": "infra"},
        "environment": {"LANG": "C.UTF-8"},
    }


@pytest.fixture
def sample_files() -> list[dict[str, Any]]:
    """Directory listing as returned by the API."""
    return [
        {
            "name": "etc",
            "path": "/etc",
            "size": 4096,
            "mode": "drwxr-xr-x",
            "mod_time": "2025-01-15T10:00:00Z",
            "is_dir": True,
        },
        {
            "name": "hello.txt",
            "path": "/hello.txt",
            "size": 12,
            "mode": "-rw-r--r--",
            "mod_time": "2025-01-15T10:01:00Z",
            "is_dir": False,
        },
    ]
