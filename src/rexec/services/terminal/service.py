"""
Terminal service: opens terminal sessions to containers.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from rexec.config import get_settings
from rexec.logging import get_logger
from rexec.models.terminal import U16_MAX
from rexec.services.base import BaseService, require_id
from rexec.streaming.terminal import TerminalSession

logger = get_logger(__name__)

TERMINAL_PATH = "/ws/terminal/{container_id}"


def terminal_path(container_id: str) -> str:
    """WebSocket path for a container's terminal."""
    return TERMINAL_PATH.format(container_id=container_id)


def _check_dimension(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= U16_MAX:
        raise ValueError(f"{name} must be an integer between 1 and {U16_MAX}, got {value!r}")
    return value


class TerminalService(BaseService):
    """
    Terminal session factory.

    Example:
        >>> term = await client.terminal.connect("abc123", cols=120, rows=40)
        >>> await term.write(b"uname -a\\n")
        >>> print((await term.read()).decode())
        >>> await term.close()
    """

    async def connect(
        self,
        container_id: str,
        cols: int | None = None,
        rows: int | None = None,
    ) -> TerminalSession:
        """
        Open a terminal session to a container.

        The initial viewport size is sent before the session is returned.

        Args:
            container_id: Container ID.
            cols: Terminal width, defaults to settings.default_cols (80).
            rows: Terminal height, defaults to settings.default_rows (24).

        Returns:
            Open TerminalSession.

        Raises:
            ValueError: Empty container_id or out-of-range dimensions.
            ConnectionError: URL, handshake or network failure.
            TransportError: Initial resize could not be sent.

        The connection is closed if the initial resize fails or is cancelled.
        """
        settings = get_settings()
        require_id(container_id)
        cols = _check_dimension("cols", settings.default_cols if cols is None else cols)
        rows = _check_dimension("rows", settings.default_rows if rows is None else rows)

        ws = await self._transport.connect_websocket(terminal_path(container_id))
        session = TerminalSession(ws, container_id=container_id)
        logger.info("Connected to terminal %s (%dx%d)", container_id, cols, rows)

        try:
            await session.resize(cols, rows)
        except BaseException:
            await ws.close()
            raise
        return session

    @asynccontextmanager
    async def session(
        self,
        container_id: str,
        cols: int | None = None,
        rows: int | None = None,
    ) -> AsyncIterator[TerminalSession]:
        """
        Connect and close automatically.

        Example:
            >>> async with client.terminal.session("abc123") as term:
            ...     await term.write_text("exit\\n")
        """
        term = await self.connect(container_id, cols=cols, rows=rows)
        try:
            yield term
        finally:
            await term.close()
