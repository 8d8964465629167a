"""
rexec command-line interface.

Usage:
    rexec ls
    rexec create --image ubuntu:24.04 --name mydev
    rexec connect abc123
    rexec files ls abc123 /root
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable

import click
from rich.console import Console
from rich.table import Table

from rexec import __version__
from rexec.client import RexecClient
from rexec.exceptions import RexecError
from rexec.logging import setup_logging

console = Console()
err_console = Console(stderr=True)

STATUS_STYLES = {
    "running": "green",
    "stopped": "yellow",
    "exited": "yellow",
    "creating": "cyan",
    "error": "red",
}


def get_token(ctx: click.Context) -> str:
    """Get API token from context or exit with a hint."""
    token = ctx.obj.get("token") if ctx.obj else None
    if not token:
        err_console.print("[red]Error:[/red] Set REXEC_TOKEN environment variable or pass --token")
        raise SystemExit(1)
    return token


def run_with_client(
    ctx: click.Context,
    action: Callable[[RexecClient], Awaitable[Any]],
) -> Any:
    """Run an async action with a client, turning SDK errors into exit code 1."""
    token = get_token(ctx)
    host = ctx.obj.get("host")

    async def _run() -> Any:
        async with RexecClient(host, token=token) as client:
            return await action(client)

    try:
        return asyncio.run(_run())
    except RexecError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)


def parse_pairs(values: tuple[str, ...], option: str) -> dict[str, str]:
    """Parse KEY=VALUE options."""
    pairs: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {item!r}", param_hint=option)
        pairs[key] = value
    return pairs


@click.group()
@click.option("--host", envvar="REXEC_HOST", help="rexec instance URL")
@click.option("--token", envvar="REXEC_TOKEN", help="rexec API token")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.version_option(version=__version__, prog_name="rexec")
@click.pass_context
def main(ctx: click.Context, host: str | None, token: str | None, verbose: bool) -> None:
    """rexec - Terminal as a Service command-line interface."""
    ctx.ensure_object(dict)
    ctx.obj["host"] = host
    ctx.obj["token"] = token
    if verbose:
        setup_logging("DEBUG")


# =============================================================================
# Containers
# =============================================================================


@main.command("ls")
@click.pass_context
def list_containers(ctx: click.Context) -> None:
    """List all terminals."""
    containers = run_with_client(ctx, lambda client: client.containers.list())

    if not containers:
        console.print("[dim]No terminals found.[/dim]")
        console.print("Create one with: [cyan]rexec create --image ubuntu:24.04[/cyan]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", width=12)
    table.add_column("Name", width=20)
    table.add_column("Image", width=20)
    table.add_column("Status", width=10)

    for c in containers:
        style = STATUS_STYLES.get(c.status, "dim")
        table.add_row(c.id[:12], c.name, c.image, f"[{style}]{c.status}[/{style}]")

    console.print(table)


@main.command()
@click.option("--image", "-i", required=True, help="Image to run")
@click.option("--name", "-n", help="Container name")
@click.option("--env", "-e", "env", multiple=True, help="Environment variable KEY=VALUE")
@click.option("--label", "-l", "label", multiple=True, help="Label KEY=VALUE")
@click.pass_context
def create(
    ctx: click.Context,
    image: str,
    name: str | None,
    env: tuple[str, ...],
    label: tuple[str, ...],
) -> None:
    """Create a new terminal."""
    environment = parse_pairs(env, "--env")
    labels = parse_pairs(label, "--label")
    container = run_with_client(
        ctx,
        lambda client: client.containers.create(
            image=image, name=name, environment=environment, labels=labels
        ),
    )
    console.print(f"[green]Created[/green] {container.name} [dim]({container.id})[/dim]")


@main.command()
@click.argument("container_id")
@click.pass_context
def start(ctx: click.Context, container_id: str) -> None:
    """Start a stopped terminal."""
    run_with_client(ctx, lambda client: client.containers.start(container_id))
    console.print(f"[green]Started[/green] {container_id}")


@main.command()
@click.argument("container_id")
@click.pass_context
def stop(ctx: click.Context, container_id: str) -> None:
    """Stop a running terminal."""
    run_with_client(ctx, lambda client: client.containers.stop(container_id))
    console.print(f"[yellow]Stopped[/yellow] {container_id}")


@main.command("rm")
@click.argument("container_id")
@click.pass_context
def remove(ctx: click.Context, container_id: str) -> None:
    """Delete a terminal."""
    run_with_client(ctx, lambda client: client.containers.delete(container_id))
    console.print(f"[red]Deleted[/red] {container_id}")


# =============================================================================
# Interactive Terminal
# =============================================================================


@main.command()
@click.argument("container_id")
@click.pass_context
def connect(ctx: click.Context, container_id: str) -> None:
    """Connect to a terminal (interactive shell).

    Press Ctrl+] to disconnect.
    """
    from rexec.services.terminal.tui import interactive_shell

    code = run_with_client(ctx, lambda client: interactive_shell(client, container_id))
    raise SystemExit(code)


# =============================================================================
# Files
# =============================================================================


@main.group()
def files() -> None:
    """File operations inside a terminal."""
    pass


@files.command("ls")
@click.argument("container_id")
@click.argument("path", default="/")
@click.pass_context
def files_list(ctx: click.Context, container_id: str, path: str) -> None:
    """List a directory."""
    entries = run_with_client(ctx, lambda client: client.files.list(container_id, path))

    table = Table(show_header=True, header_style="bold")
    table.add_column("Mode", width=11)
    table.add_column("Size", justify="right", width=10)
    table.add_column("Modified", width=20)
    table.add_column("Name")

    for entry in entries:
        name = f"[blue]{entry.name}/[/blue]" if entry.is_dir else entry.name
        table.add_row(entry.mode, f"{entry.size:,}", entry.mod_time, name)

    console.print(table)


@files.command("get")
@click.argument("container_id")
@click.argument("path")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write to file instead of stdout")
@click.pass_context
def files_get(ctx: click.Context, container_id: str, path: str, output: str | None) -> None:
    """Download a file."""
    if output:
        target = run_with_client(
            ctx, lambda client: client.files.save(container_id, path, Path(output))
        )
        err_console.print(f"[green]Saved[/green] {target}")
        return

    data = run_with_client(ctx, lambda client: client.files.download(container_id, path))
    sys.stdout.buffer.write(data)
    sys.stdout.buffer.flush()


@files.command("mkdir")
@click.argument("container_id")
@click.argument("path")
@click.pass_context
def files_mkdir(ctx: click.Context, container_id: str, path: str) -> None:
    """Create a directory."""
    run_with_client(ctx, lambda client: client.files.mkdir(container_id, path))
    console.print(f"[green]Created[/green] {path}")


@files.command("rm")
@click.argument("container_id")
@click.argument("path")
@click.pass_context
def files_remove(ctx: click.Context, container_id: str, path: str) -> None:
    """Delete a file or directory."""
    run_with_client(ctx, lambda client: client.files.delete(container_id, path))
    console.print(f"[red]Deleted[/red] {path}")


if __name__ == "__main__":
    main()
