"""
Tests for TerminalService.
"""

from __future__ import annotations

import asyncio
import json
from unittest.mock import AsyncMock, patch

import pytest
from websockets.datastructures import Headers
from websockets.exceptions import InvalidStatus
from websockets.http11 import Response

from rexec.config import configure_settings
from rexec.exceptions import ConnectionError, TransportError
from rexec.services.terminal import TerminalService, terminal_path
from rexec.streaming.base import SessionState
from rexec.transport.remote import RemoteTransport

CONNECT = "rexec.transport.remote.connect"
TEST_TOKEN = "test-token"


@pytest.fixture
def service(transport) -> TerminalService:
    return TerminalService(transport)


class TestTerminalPath:
    """Test path formatting."""

    def test_terminal_path(self):
        assert terminal_path("abc123") == "/ws/terminal/abc123"


class TestConnect:
    """Test session factory."""

    async def test_connect_url_and_auth(self, service, fake_connection):
        with patch(CONNECT, AsyncMock(return_value=fake_connection)) as mock_connect:
            session = await service.connect("abc123", cols=120, rows=40)

        url = mock_connect.call_args.args[0]
        headers = mock_connect.call_args.kwargs["additional_headers"]
        assert url == "wss://rexec.test/ws/terminal/abc123"
        assert headers == {"Authorization": f"Bearer {TEST_TOKEN}"}
        assert session.state == SessionState.OPEN
        assert session.container_id == "abc123"

    async def test_initial_resize_is_first_frame(self, service, fake_connection):
        with patch(CONNECT, AsyncMock(return_value=fake_connection)):
            await service.connect("abc123", cols=120, rows=40)

        assert len(fake_connection.sent) == 1
        assert json.loads(fake_connection.sent[0]) == {
            "type": "resize",
            "cols": 120,
            "rows": 40,
        }

    async def test_default_dimensions(self, service, fake_connection):
        with patch(CONNECT, AsyncMock(return_value=fake_connection)):
            await service.connect("abc123")

        assert fake_connection.sent == ['{"type":"resize","cols":80,"rows":24}']

    async def test_dimensions_from_settings(self, service, fake_connection):
        configure_settings(default_cols=200, default_rows=50)
        with patch(CONNECT, AsyncMock(return_value=fake_connection)):
            await service.connect("abc123")

        assert fake_connection.sent == ['{"type":"resize","cols":200,"rows":50}']

    async def test_plain_http_uses_ws(self, fake_connection):
        transport = RemoteTransport("http://localhost:8080", token=TEST_TOKEN)
        with patch(CONNECT, AsyncMock(return_value=fake_connection)) as mock_connect:
            await TerminalService(transport).connect("xyz")

        assert mock_connect.call_args.args[0] == "ws://localhost:8080/ws/terminal/xyz"

    @pytest.mark.parametrize("container_id", ["", "   "])
    async def test_empty_container_id(self, service, container_id):
        with patch(CONNECT, AsyncMock()) as mock_connect:
            with pytest.raises(ValueError):
                await service.connect(container_id)
        mock_connect.assert_not_called()

    @pytest.mark.parametrize(
        "cols,rows",
        [(0, 24), (80, 0), (65536, 24), (80, -1), (True, 24), ("80", 24)],
    )
    async def test_invalid_dimensions(self, service, cols, rows):
        with patch(CONNECT, AsyncMock()) as mock_connect:
            with pytest.raises(ValueError):
                await service.connect("abc123", cols=cols, rows=rows)
        mock_connect.assert_not_called()

    async def test_max_dimensions_accepted(self, service, fake_connection):
        with patch(CONNECT, AsyncMock(return_value=fake_connection)):
            await service.connect("abc123", cols=65535, rows=65535)

        assert fake_connection.sent == ['{"type":"resize","cols":65535,"rows":65535}']


class TestConnectFailures:
    """Test handshake and network failures."""

    async def test_handshake_rejected(self, service):
        rejected = InvalidStatus(Response(403, "Forbidden", Headers()))
        with patch(CONNECT, AsyncMock(side_effect=rejected)):
            with pytest.raises(ConnectionError) as exc_info:
                await service.connect("abc123")

        assert exc_info.value.status_code == 403
        assert "403" in str(exc_info.value)

    async def test_network_failure(self, service):
        with patch(CONNECT, AsyncMock(side_effect=OSError("connection refused"))):
            with pytest.raises(ConnectionError) as exc_info:
                await service.connect("abc123")

        assert exc_info.value.status_code is None
        assert "connection refused" in str(exc_info.value)

    async def test_timeout(self, service):
        with patch(CONNECT, AsyncMock(side_effect=TimeoutError())):
            with pytest.raises(ConnectionError):
                await service.connect("abc123")

    async def test_unsupported_scheme(self, fake_connection):
        transport = RemoteTransport("ftp://rexec.test", token=TEST_TOKEN)
        with patch(CONNECT, AsyncMock(return_value=fake_connection)) as mock_connect:
            with pytest.raises(ConnectionError):
                await TerminalService(transport).connect("abc123")
        mock_connect.assert_not_called()

    async def test_initial_resize_failure_closes_connection(self, service, fake_connection):
        fake_connection.send_error = OSError("broken pipe")
        with patch(CONNECT, AsyncMock(return_value=fake_connection)):
            with pytest.raises(TransportError):
                await service.connect("abc123")

        assert fake_connection.close_calls == 1

    async def test_cancelled_initial_resize_closes_connection(self, service, make_connection):
        entered = asyncio.Event()

        class StalledConnection(make_connection):
            async def send(self, message):
                entered.set()
                await asyncio.Event().wait()

        conn = StalledConnection()
        with patch(CONNECT, AsyncMock(return_value=conn)):
            task = asyncio.create_task(service.connect("abc123"))
            await entered.wait()
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        assert conn.close_calls == 1
        assert conn.sent == []


class TestSessionContext:
    """Test the session() context manager."""

    async def test_session_closes_on_exit(self, service, fake_connection):
        with patch(CONNECT, AsyncMock(return_value=fake_connection)):
            async with service.session("abc123") as term:
                await term.write(b"exit\n")

        assert term.is_closed
        assert fake_connection.close_calls == 1

    async def test_session_closes_on_error(self, service, fake_connection):
        with patch(CONNECT, AsyncMock(return_value=fake_connection)):
            with pytest.raises(RuntimeError):
                async with service.session("abc123") as term:
                    raise RuntimeError("boom")

        assert term.is_closed
        assert fake_connection.close_calls == 1

    async def test_client_terminal_property(self, client, fake_connection):
        with patch(CONNECT, AsyncMock(return_value=fake_connection)) as mock_connect:
            async with client.terminal.session("abc123", cols=100, rows=30):
                pass

        assert mock_connect.call_args.args[0] == "wss://rexec.test/ws/terminal/abc123"
        assert fake_connection.sent == ['{"type":"resize","cols":100,"rows":30}']
