"""
Local TTY control for the interactive shell.

Unix only: raw mode goes through termios, window changes arrive as SIGWINCH
on the running event loop.
"""

from __future__ import annotations

import asyncio
import os
import signal
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator

from rexec.config import get_settings
from rexec.logging import get_logger

logger = get_logger(__name__)

ResizeCallback = Callable[[int, int], None]


def is_supported() -> bool:
    """Raw mode and SIGWINCH need a Unix host."""
    return sys.platform != "win32"


def is_tty() -> bool:
    """Check if stdin is a TTY."""
    return sys.stdin.isatty()


def get_terminal_size() -> tuple[int, int]:
    """
    Local viewport as (cols, rows).

    Falls back to the configured session size when stdout is not a terminal.
    """
    try:
        size = os.get_terminal_size()
    except OSError:
        settings = get_settings()
        return settings.default_cols, settings.default_rows
    return size.columns, size.lines


@dataclass
class LocalTerminal:
    """
    The local TTY an interactive shell is attached to.

    Remembers the termios attributes replaced by enter_raw() so restore()
    can put them back, and whether a SIGWINCH watcher is installed.
    """

    fd: int
    saved_attrs: list[Any] | None = None
    watching_resize: bool = False

    @classmethod
    def from_stdin(cls) -> LocalTerminal:
        return cls(fd=sys.stdin.fileno())

    @property
    def is_raw(self) -> bool:
        return self.saved_attrs is not None

    def enter_raw(self) -> bool:
        """
        Switch to raw mode: no line buffering, no echo, no signal keys.

        Ctrl+C and Ctrl+Z are delivered as bytes and travel to the remote
        shell like any other keystroke.

        Returns:
            True if the terminal is now raw.
        """
        if self.is_raw:
            return True
        if not is_supported() or not os.isatty(self.fd):
            return False

        import termios
        import tty

        try:
            attrs = termios.tcgetattr(self.fd)
            tty.setraw(self.fd)
        except (OSError, termios.error) as e:
            logger.debug("Raw mode unavailable on fd %d: %s", self.fd, e)
            return False

        self.saved_attrs = attrs
        return True

    def restore(self) -> bool:
        """
        Put back the attributes saved by enter_raw().

        Returns:
            True if attributes were restored, False if not in raw mode.
        """
        if self.saved_attrs is None:
            return False

        import termios

        attrs, self.saved_attrs = self.saved_attrs, None
        try:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, attrs)
        except (OSError, termios.error) as e:
            logger.debug("Could not restore fd %d: %s", self.fd, e)
            return False
        return True

    @contextmanager
    def raw(self) -> Iterator[bool]:
        """
        Raw mode for the duration of the block.

        Yields whether raw mode took effect; the terminal is restored on exit
        either way.
        """
        try:
            yield self.enter_raw()
        finally:
            self.restore()

    # =========================================================================
    # Window size
    # =========================================================================

    def watch_resize(self, loop: asyncio.AbstractEventLoop, callback: ResizeCallback) -> bool:
        """
        Call callback(cols, rows) on the loop whenever the window changes.

        Returns:
            True if the watcher was installed.
        """
        if not is_supported():
            return False

        def on_winch() -> None:
            cols, rows = get_terminal_size()
            callback(cols, rows)

        try:
            loop.add_signal_handler(signal.SIGWINCH, on_winch)
        except (NotImplementedError, RuntimeError, ValueError) as e:
            logger.debug("SIGWINCH watcher not installed: %s", e)
            return False

        self.watching_resize = True
        return True

    def unwatch_resize(self, loop: asyncio.AbstractEventLoop) -> None:
        """Remove the watcher installed by watch_resize()."""
        if not self.watching_resize:
            return
        loop.remove_signal_handler(signal.SIGWINCH)
        self.watching_resize = False
