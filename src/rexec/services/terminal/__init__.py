"""
Terminal service for rexec SDK.

Opens WebSocket terminal sessions to containers.

Streaming:
    >>> async with client.terminal.session("abc123", cols=120, rows=40) as term:
    ...     await term.write(b"ls -la\\n")
    ...     print((await term.read()).decode())

Interactive:
    >>> from rexec.services.terminal.tui import interactive_shell
    >>> await interactive_shell(client, "abc123")
"""

from rexec.services.terminal.service import TerminalService, terminal_path

__all__ = [
    "TerminalService",
    "terminal_path",
]
