"""
rexec Python SDK - Terminal as a Service.

Manage containers, work with their files and stream interactive terminals.

Usage:
    >>> from rexec import RexecClient
    >>>
    >>> async with RexecClient("https://rexec.example.com", token="tok") as client:
    ...     container = await client.containers.create(image="ubuntu:24.04")
    ...     async with client.terminal.session(container.id) as term:
    ...         await term.write_text("uname -a\\n")
    ...         print((await term.read()).decode())
"""

from rexec.client import RexecClient
from rexec.config import SDKSettings, configure_settings, get_settings
from rexec.exceptions import (
    ApiError,
    ConnectionError,
    RexecError,
    SerializationError,
    TerminalClosedError,
    TransportError,
)
from rexec.models import (
    Container,
    ContainerStatus,
    CreateContainerRequest,
    FileInfo,
    ResizeMessage,
)
from rexec.streaming import SessionState, TerminalSession

__version__ = "1.0.0"

__all__ = [
    "RexecClient",
    "TerminalSession",
    "SessionState",
    # Models
    "Container",
    "ContainerStatus",
    "CreateContainerRequest",
    "FileInfo",
    "ResizeMessage",
    # Config
    "SDKSettings",
    "configure_settings",
    "get_settings",
    # Errors
    "RexecError",
    "ApiError",
    "ConnectionError",
    "SerializationError",
    "TerminalClosedError",
    "TransportError",
]
