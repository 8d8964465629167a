"""
Terminal streaming session.

Wraps one WebSocket connection to a container's interactive terminal.
Application data travels as binary frames in both directions; the only
text frame the client sends is the resize control message.
"""

from __future__ import annotations

import asyncio
from typing import Any

from websockets.exceptions import ConnectionClosed, WebSocketException
from websockets.frames import Frame, Opcode

from rexec.exceptions import TerminalClosedError, TransportError
from rexec.logging import get_logger
from rexec.models.terminal import encode_resize
from rexec.streaming.base import SessionMetrics, SessionState

logger = get_logger(__name__)

PAYLOAD_TYPES = (bytes, bytearray, memoryview)


class TerminalSession:
    """
    Live terminal connection to a container.

    Created by TerminalService.connect(); the constructor only wraps an
    already-open connection, which makes it easy to drive with a fake
    connection in tests.

    State is OPEN until close(), a peer close frame, or a transport error,
    then CLOSED for good. Every operation on a CLOSED session raises
    TerminalClosedError without touching the connection.

    Reads are serialized with each other, and so are writes, resizes and
    close. A read in one task may run alongside a write in another.

    Usage:
        >>> async with client.terminal.session("abc123") as term:
        ...     await term.write_text("ls -la\\n")
        ...     async for chunk in term:
        ...         print(chunk.decode(errors="replace"), end="")
    """

    def __init__(self, connection: Any, container_id: str | None = None) -> None:
        """
        Initialize terminal session.

        Args:
            connection: Open WebSocket connection (recv/send/close coroutines).
            container_id: Container the session is attached to.
        """
        self._ws = connection
        self._container_id = container_id
        self._state = SessionState.OPEN

        # Exclusive access, one guard per direction
        self._send_lock = asyncio.Lock()
        self._recv_lock = asyncio.Lock()

        self._metrics = SessionMetrics()

    @property
    def container_id(self) -> str | None:
        return self._container_id

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_closed(self) -> bool:
        """True once the session has closed. Never blocks."""
        return self._state is SessionState.CLOSED

    @property
    def metrics(self) -> SessionMetrics:
        return self._metrics

    def _ensure_open(self) -> None:
        if self._state is SessionState.CLOSED:
            raise TerminalClosedError()

    def _mark_closed(self, reason: str) -> None:
        if self._state is not SessionState.CLOSED:
            self._state = SessionState.CLOSED
            logger.debug("Terminal %s closed: %s", self._container_id, reason)

    def _transport_error(self, action: str, error: BaseException) -> TransportError:
        self._mark_closed(f"{action} failed")
        self._metrics.record_error()
        logger.warning("Terminal %s %s failed: %s", self._container_id, action, error)
        return TransportError(f"Terminal {action} failed: {error}", cause=error)

    # =========================================================================
    # Output
    # =========================================================================

    async def _send(self, frame: bytes | str) -> None:
        """Send one frame under the send guard."""
        self._ensure_open()
        async with self._send_lock:
            self._ensure_open()
            try:
                await self._ws.send(frame)
            except (ConnectionClosed, OSError) as e:
                raise self._transport_error("write", e) from e
        size = len(frame.encode("utf-8")) if isinstance(frame, str) else len(frame)
        self._metrics.record_sent(size)

    async def write(self, data: bytes) -> None:
        """
        Send bytes to the terminal as one binary frame.

        Raises:
            TerminalClosedError: Session already closed.
            TransportError: Connection lost; the session is now closed.
        """
        if not isinstance(data, PAYLOAD_TYPES):
            raise TypeError(f"data must be bytes, not {type(data).__name__}")
        await self._send(bytes(data))

    async def write_text(self, text: str) -> None:
        """Send a string to the terminal, UTF-8 encoded, as a binary frame."""
        await self.write(text.encode("utf-8"))

    async def resize(self, cols: int, rows: int) -> None:
        """
        Tell the remote terminal its viewport size.

        Sent as a JSON text frame; no acknowledgement is awaited.

        Raises:
            TerminalClosedError: Session already closed.
            SerializationError: cols/rows outside 0..65535.
            TransportError: Connection lost; the session is now closed.
        """
        self._ensure_open()
        await self._send(encode_resize(cols, rows))

    # =========================================================================
    # Input
    # =========================================================================

    async def read(self) -> bytes | None:
        """
        Wait for the next payload frame.

        Binary and text frames are both returned as bytes. Ping, pong and
        other control frames are skipped.

        Returns:
            Payload bytes, or None once the peer has closed the connection.

        Raises:
            TerminalClosedError: Session already closed.
            TransportError: Connection failed; the session is now closed.
        """
        self._ensure_open()
        async with self._recv_lock:
            self._ensure_open()
            while True:
                try:
                    message = await self._ws.recv()
                except ConnectionClosed as e:
                    if self._state is SessionState.CLOSED or e.rcvd is not None:
                        self._mark_closed("peer closed")
                        return None
                    raise self._transport_error("read", e) from e
                except OSError as e:
                    if self._state is SessionState.CLOSED:
                        return None
                    raise self._transport_error("read", e) from e

                if isinstance(message, PAYLOAD_TYPES):
                    data = bytes(message)
                elif isinstance(message, str):
                    data = message.encode("utf-8")
                elif isinstance(message, Frame):
                    if message.opcode is Opcode.CLOSE:
                        self._mark_closed("peer closed")
                        return None
                    if message.opcode not in (Opcode.BINARY, Opcode.TEXT, Opcode.CONT):
                        self._metrics.record_skipped()
                        continue
                    data = bytes(message.data)
                else:
                    self._metrics.record_skipped()
                    continue

                self._metrics.record_received(len(data))
                return data

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def close(self) -> None:
        """
        Close the session. Safe to call more than once.

        The session is marked closed before the close handshake starts, so
        operations issued meanwhile fail fast.

        Raises:
            TransportError: The close handshake failed. The session stays closed.
        """
        if self._state is SessionState.CLOSED:
            return
        self._mark_closed("client close")

        async with self._send_lock:
            try:
                await self._ws.close()
            except (WebSocketException, OSError) as e:
                self._metrics.record_error()
                raise TransportError(f"Terminal close failed: {e}", cause=e) from e

    async def __aenter__(self) -> TerminalSession:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def __aiter__(self) -> TerminalSession:
        return self

    async def __anext__(self) -> bytes:
        data = await self.read()
        if data is None:
            raise StopAsyncIteration
        return data

    def __repr__(self) -> str:
        return f"<TerminalSession container_id={self._container_id!r} state={self._state.value}>"
