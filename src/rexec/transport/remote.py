"""
Remote transport over HTTPS and WebSocket.

REST calls go through a shared httpx.AsyncClient; terminal sessions open
a WebSocket with the websockets client. Both carry the bearer token.
"""

from __future__ import annotations

from typing import Any

import httpx
from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import InvalidStatus, WebSocketException

from rexec.config import get_settings
from rexec.exceptions import (
    ApiError,
    ConnectionError,
    SerializationError,
    TransportError,
)
from rexec.logging import get_logger
from rexec.transport.base import BaseTransport, TransportState

logger = get_logger(__name__)

UNKNOWN_ERROR = "Unknown error"


def error_message(response: httpx.Response) -> str:
    """Extract the "error" field from a JSON error body, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return UNKNOWN_ERROR
    if isinstance(body, dict):
        message = body.get("error")
        if isinstance(message, str) and message:
            return message
    return UNKNOWN_ERROR


class RemoteTransport(BaseTransport):
    """
    Transport for a remote rexec instance.

    Example:
        >>> transport = RemoteTransport("https://rexec.example.com", token="tok")
        >>> containers = await transport.request("GET", "/api/containers")
        >>> ws = await transport.connect_websocket("/ws/terminal/abc")

    Args:
        base_url: REST base URL.
        token: API token.
        timeout: Overall REST request timeout in seconds.
        http_transport: Optional httpx transport (e.g. httpx.MockTransport).
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(base_url, token)
        self._timeout = timeout if timeout is not None else get_settings().request_timeout
        self._http_transport = http_transport
        self._client: httpx.AsyncClient | None = None

    @property
    def timeout(self) -> float:
        return self._timeout

    def _get_client(self) -> httpx.AsyncClient:
        """Lazily create the shared HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=self.default_headers,
                timeout=self._timeout,
                transport=self._http_transport,
            )
            self._state = TransportState.READY
        return self._client

    # =========================================================================
    # REST
    # =========================================================================

    async def _send(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """Send a request and translate non-2xx responses into ApiError."""
        client = self._get_client()
        try:
            response = await client.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            logger.debug("%s %s failed: %s", method, path, e)
            raise TransportError(f"{method} {path} failed: {e}", cause=e) from e

        logger.debug("%s %s -> %d", method, path, response.status_code)
        if not response.is_success:
            raise ApiError(response.status_code, error_message(response))
        return response

    async def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """
        Make a request and return the parsed JSON body.

        Raises:
            ApiError: Non-2xx response.
            TransportError: Network failure or timeout.
            SerializationError: Success body is not valid JSON.
        """
        response = await self._send(method, path, params=params, json=json)
        try:
            return response.json()
        except ValueError as e:
            raise SerializationError(
                f"Invalid JSON in response to {method} {path}", cause=e
            ) from e

    async def request_empty(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> None:
        """Make a request whose response body is ignored."""
        await self._send(method, path, params=params, json=json)

    async def request_bytes(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> bytes:
        """Make a request and return the raw response body."""
        response = await self._send(method, path, params=params)
        return response.content

    # =========================================================================
    # WebSocket
    # =========================================================================

    async def connect_websocket(self, path: str) -> ClientConnection:
        """
        Open an authenticated WebSocket.

        The websockets client supplies Host, Connection: Upgrade,
        Upgrade: websocket, Sec-WebSocket-Version: 13 and a fresh
        Sec-WebSocket-Key; the bearer header is added here.

        Raises:
            ConnectionError: URL, handshake or network failure.
        """
        url = self.ws_url(path)
        logger.debug("Opening WebSocket %s", url)
        try:
            return await connect(
                url,
                additional_headers=self.auth_headers,
                max_size=None,
            )
        except InvalidStatus as e:
            status = e.response.status_code
            raise ConnectionError(
                f"WebSocket handshake rejected by {url}: HTTP {status}",
                status_code=status,
                cause=e,
            ) from e
        except (WebSocketException, OSError, TimeoutError) as e:
            raise ConnectionError(f"Failed to connect to {url}: {e}", cause=e) from e

    async def close(self) -> None:
        """Close the shared HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        self._state = TransportState.CLOSED
