"""
rexec API client.

Single entry point for containers, files and terminal sessions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rexec.config import get_settings
from rexec.transport.remote import RemoteTransport

if TYPE_CHECKING:
    import httpx

    from rexec.services.containers import ContainersService
    from rexec.services.files import FilesService
    from rexec.services.terminal import TerminalService


class RexecClient:
    """
    Async client for a rexec instance.

    Service namespaces are created lazily and share one transport.

    Example:
        >>> async with RexecClient("https://rexec.example.com", token="tok") as client:
        ...     container = await client.containers.create(image="ubuntu:24.04")
        ...     async with client.terminal.session(container.id) as term:
        ...         await term.write_text("echo hello\\n")
        ...         print((await term.read()).decode())

        >>> # From REXEC_HOST / REXEC_TOKEN
        >>> async with RexecClient() as client:
        ...     containers = await client.containers.list()
    """

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize rexec client.

        Args:
            base_url: Base URL of the rexec instance (or set REXEC_HOST).
            token: API token (or set REXEC_TOKEN).
            timeout: REST request timeout in seconds.
            http_transport: Optional httpx transport, mainly for tests.

        Raises:
            ValueError: If no token is available.
        """
        settings = get_settings()
        token = token or settings.token
        if not token:
            raise ValueError(
                "API token required. Pass token or set REXEC_TOKEN environment variable."
            )

        self._transport = RemoteTransport(
            base_url or settings.host,
            token=token,
            timeout=timeout,
            http_transport=http_transport,
        )

        self._containers: ContainersService | None = None
        self._files: FilesService | None = None
        self._terminal: TerminalService | None = None

    @classmethod
    def from_transport(cls, transport: RemoteTransport) -> RexecClient:
        """Create a client around an existing transport."""
        client = cls.__new__(cls)
        client._transport = transport
        client._containers = None
        client._files = None
        client._terminal = None
        return client

    @property
    def transport(self) -> RemoteTransport:
        return self._transport

    @property
    def base_url(self) -> str:
        return self._transport.base_url

    @property
    def containers(self) -> ContainersService:
        """Container lifecycle operations."""
        if self._containers is None:
            from rexec.services.containers import ContainersService

            self._containers = ContainersService(self._transport)
        return self._containers

    @property
    def files(self) -> FilesService:
        """File operations inside containers."""
        if self._files is None:
            from rexec.services.files import FilesService

            self._files = FilesService(self._transport)
        return self._files

    @property
    def terminal(self) -> TerminalService:
        """Terminal sessions."""
        if self._terminal is None:
            from rexec.services.terminal import TerminalService

            self._terminal = TerminalService(self._transport)
        return self._terminal

    async def __aenter__(self) -> RexecClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client. Open terminal sessions are not affected."""
        await self._transport.close()

    def __repr__(self) -> str:
        return f"<RexecClient base_url={self.base_url!r}>"


__all__ = ["RexecClient"]
