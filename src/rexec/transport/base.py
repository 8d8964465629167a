"""
Base transport: authentication and endpoint derivation.

Holds the REST base URL and bearer token, and derives the WebSocket
endpoint for a given path from the REST base URL.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

import httpx

from rexec.exceptions import ConnectionError

# REST scheme -> WebSocket scheme
WS_SCHEMES = {
    "http": "ws",
    "https": "wss",
}


class TransportState(str, Enum):
    """Transport lifecycle state."""

    IDLE = "idle"
    READY = "ready"
    CLOSED = "closed"


def websocket_url(base_url: str, path: str) -> str:
    """
    Derive a WebSocket URL from a REST base URL.

    Maps http to ws and https to wss, keeps host and explicit port, and
    replaces the path. Default ports are not written out.

    Args:
        base_url: REST base URL (e.g. "https://host:8443").
        path: Absolute path (e.g. "/ws/terminal/abc").

    Returns:
        WebSocket URL (e.g. "wss://host:8443/ws/terminal/abc").

    Raises:
        ConnectionError: If the base URL is malformed, has an unsupported
            scheme, or has no host.
    """
    try:
        url = httpx.URL(base_url)
    except (httpx.InvalidURL, TypeError) as e:
        raise ConnectionError(f"Invalid base URL {base_url!r}: {e}", cause=e) from e

    scheme = WS_SCHEMES.get(url.scheme)
    if scheme is None:
        raise ConnectionError(
            f"Unsupported URL scheme {url.scheme!r} in {base_url!r} (expected http or https)"
        )

    host = url.host
    if not host:
        raise ConnectionError(f"Invalid host in base URL {base_url!r}")
    if ":" in host:
        host = f"[{host}]"

    port = f":{url.port}" if url.port is not None else ""
    return f"{scheme}://{host}{port}{path}"


class BaseTransport(ABC):
    """
    Abstract transport.

    Subclasses perform the actual REST and WebSocket I/O; this class only
    knows how to authenticate and where endpoints live.
    """

    def __init__(self, base_url: str, token: str) -> None:
        if not token:
            raise ValueError("API token required")
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._state = TransportState.IDLE

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def state(self) -> TransportState:
        return self._state

    @property
    def auth_headers(self) -> dict[str, str]:
        """Bearer authorization header attached to every request."""
        return {"Authorization": f"Bearer {self._token}"}

    @property
    def default_headers(self) -> dict[str, str]:
        """Headers for REST requests."""
        return {**self.auth_headers, "Accept": "application/json"}

    def ws_url(self, path: str) -> str:
        """WebSocket URL for a path on this transport's host."""
        return websocket_url(self._base_url, path)

    @abstractmethod
    async def connect_websocket(self, path: str) -> Any:
        """Open an authenticated WebSocket to path."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release transport resources."""
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} base_url={self._base_url!r} state={self._state.value}>"
