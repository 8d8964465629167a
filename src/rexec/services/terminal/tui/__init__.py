"""
Interactive terminal support.

Usage:
    >>> from rexec.services.terminal.tui import interactive_shell
    >>> async with RexecClient() as client:
    ...     await interactive_shell(client, "abc123")
"""

from rexec.services.terminal.tui.modes import LocalTerminal, get_terminal_size, is_tty
from rexec.services.terminal.tui.shell import ESCAPE_BYTE, interactive_shell

__all__ = [
    "interactive_shell",
    "ESCAPE_BYTE",
    "LocalTerminal",
    "get_terminal_size",
    "is_tty",
]
