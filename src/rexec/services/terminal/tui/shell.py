"""
Interactive shell passthrough.

Connects local stdin/stdout to a container terminal in raw mode:
- keystrokes are sent as binary frames
- terminal output is written to stdout as it arrives
- local SIGWINCH is forwarded as a resize message
- Ctrl+] disconnects
"""

from __future__ import annotations

import asyncio
import os
import sys
from typing import TYPE_CHECKING

from rich.console import Console

from rexec.exceptions import RexecError
from rexec.logging import get_logger
from rexec.services.terminal.tui.modes import LocalTerminal, get_terminal_size, is_tty

if TYPE_CHECKING:
    from rexec.client import RexecClient
    from rexec.streaming.terminal import TerminalSession

logger = get_logger(__name__)
console = Console(stderr=True)

# Ctrl+]
ESCAPE_BYTE = b"\x1d"
STDIN_CHUNK = 1024


async def interactive_shell(client: RexecClient, container_id: str) -> int:
    """
    Attach the local terminal to a container's shell.

    Args:
        client: Connected RexecClient.
        container_id: Container to attach to.

    Returns:
        Exit code (0 on clean disconnect, 1 on error).
    """
    if not is_tty():
        console.print("[red]Error:[/] connect requires an interactive terminal (TTY)")
        return 1

    local = LocalTerminal.from_stdin()
    cols, rows = get_terminal_size()
    with console.status(f"[cyan]Connecting to [bold]{container_id}[/bold]...[/]"):
        term = await client.terminal.connect(container_id, cols=cols, rows=rows)

    console.print("[green]Connected.[/] Press [bold]Ctrl+][/] to disconnect.")

    try:
        return await _run_terminal_loop(term, local)
    finally:
        local.restore()
        await term.close()
        console.print("\n[dim]Disconnected.[/]")


async def _pump_output(term: TerminalSession) -> None:
    """Copy terminal output to stdout until the peer closes."""
    async for chunk in term:
        sys.stdout.buffer.write(chunk)
        sys.stdout.buffer.flush()


async def _pump_input(term: TerminalSession, fd: int) -> None:
    """Copy stdin to the terminal until EOF or the escape byte."""
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue[bytes] = asyncio.Queue()

    def on_readable() -> None:
        try:
            data = os.read(fd, STDIN_CHUNK)
        except OSError:
            data = b""
        queue.put_nowait(data)

    loop.add_reader(fd, on_readable)
    try:
        while True:
            data = await queue.get()
            if not data:
                return
            if ESCAPE_BYTE in data:
                before = data.split(ESCAPE_BYTE, 1)[0]
                if before:
                    await term.write(before)
                return
            await term.write(data)
    finally:
        loop.remove_reader(fd)


async def _run_terminal_loop(term: TerminalSession, local: LocalTerminal) -> int:
    """
    Run output and input pumps until either finishes.

    Returns:
        Exit code.
    """
    loop = asyncio.get_running_loop()

    if not local.enter_raw():
        console.print("[yellow]Warning:[/] Could not enter raw mode")

    resizes: set[asyncio.Task[None]] = set()

    def on_resize(cols: int, rows: int) -> None:
        task = loop.create_task(_forward_resize(term, cols, rows))
        resizes.add(task)
        task.add_done_callback(resizes.discard)

    local.watch_resize(loop, on_resize)

    output_task = asyncio.create_task(_pump_output(term), name="rexec-terminal-output")
    input_task = asyncio.create_task(_pump_input(term, local.fd), name="rexec-terminal-input")
    try:
        done, pending = await asyncio.wait(
            {output_task, input_task}, return_when=asyncio.FIRST_COMPLETED
        )
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

        for task in done:
            error = task.exception()
            if error is not None:
                local.restore()
                console.print(f"\n[red]Error:[/] {error}")
                return 1
        return 0
    finally:
        local.unwatch_resize(loop)


async def _forward_resize(term: TerminalSession, cols: int, rows: int) -> None:
    if term.is_closed:
        return
    try:
        await term.resize(cols, rows)
    except RexecError as e:
        logger.debug("Resize to %dx%d not sent: %s", cols, rows, e)
