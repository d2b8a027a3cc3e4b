"""CLI handling for pexplorer.

This module provides the command-line interface for pexplorer, handling
argument parsing via click, logging configuration, and dispatching each
subcommand either in-process or to a running daemon.

Filesystem subcommands work on their own. Clipboard subcommands need the
daemon, since the clipboard only lives as long as the process holding it.

Usage:
    pexplorer --socket PATH serve [--no-mirror]
    pexplorer [--socket PATH] ls DIR
    pexplorer --socket PATH copy PATH... | --content FILE | --text TEXT
    pexplorer --socket PATH cut PATH...
    pexplorer --socket PATH paste DIR
"""

import asyncio
import os
import sys
from typing import Any

import click

from pexplorer.constants import SOCKET_ENVVAR
from pexplorer.main_logging import configure_logging
from pexplorer.main_options import MutuallyExclusiveOption


def _abs(path: str) -> str:
    """Make path absolute without resolving symlinks; the daemon's cwd differs."""
    return os.path.abspath(path)


def _execute(command: str, args: dict[str, Any]) -> Any:
    """Run a command locally or on the daemon and return its result.

    Exits with status 1 after printing the error if the command fails.
    """
    from pexplorer.app_state import create_app_state
    from pexplorer.commands import CLIPBOARD_COMMANDS, dispatch

    socket_path = click.get_current_context().find_root().obj["socket"]
    if socket_path is None:
        if command in CLIPBOARD_COMMANDS:
            raise click.UsageError(
                f"Clipboard commands need a running daemon: pass --socket or set {SOCKET_ENVVAR}"
            )
        result = dispatch(create_app_state(mirror=False), command, args)
    else:
        result = _send_to_daemon(socket_path, command, args)

    if not result.ok:
        click.echo(f"Error: {result.error}", err=True)
        sys.exit(1)
    return result.result


def _send_to_daemon(socket_path: str, command: str, args: dict[str, Any]):
    from pexplorer.client import send_request
    from pexplorer.protocol import ProtocolError

    try:
        return asyncio.run(send_request(socket_path, command, args))
    except (ProtocolError, ConnectionError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.option(
    "--socket",
    "socket_path",
    envvar=SOCKET_ENVVAR,
    type=click.Path(),
    default=None,
    help=f"Daemon Unix domain socket path (or ${SOCKET_ENVVAR})",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Enable DEBUG-level logging",
)
@click.pass_context
def main(ctx: click.Context, socket_path: str | None, verbose: bool) -> None:
    """File operations and a shared copy/cut/paste clipboard for a file explorer."""
    configure_logging(verbose)
    ctx.obj = {"socket": _abs(socket_path) if socket_path else None}


@main.command()
@click.option(
    "--no-mirror",
    is_flag=True,
    help="Do not mirror staged text to the X11 clipboard",
)
@click.pass_context
def serve(ctx: click.Context, no_mirror: bool) -> None:
    """Run the daemon holding the clipboard."""
    from pexplorer.app_state import create_app_state
    from pexplorer.server import run_server
    from pexplorer.server_socket import SocketInUseError

    socket_path = ctx.obj["socket"]
    if socket_path is None:
        raise click.UsageError(f"serve needs --socket or {SOCKET_ENVVAR}")

    try:
        asyncio.run(run_server(socket_path, create_app_state(mirror=not no_mirror)))
    except SocketInUseError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command("ls")
@click.argument("path", type=click.Path())
def ls_command(path: str) -> None:
    """List a directory as JSON."""
    click.echo(_execute("open_directory", {"path": _abs(path)}))


@main.command("cat")
@click.argument("path", type=click.Path())
def cat_command(path: str) -> None:
    """Print a text file."""
    click.echo(_execute("open_file", {"path": _abs(path)}), nl=False)


@main.command("touch")
@click.argument("folder", type=click.Path())
@click.argument("name")
def touch_command(folder: str, name: str) -> None:
    """Create an empty file NAME inside FOLDER."""
    _execute("create_file", {"folder_path_abs": _abs(folder), "file_name": name})


@main.command("mkdir")
@click.argument("folder", type=click.Path())
@click.argument("name")
def mkdir_command(folder: str, name: str) -> None:
    """Create a directory NAME inside FOLDER."""
    _execute("create_directory", {"folder_path_abs": _abs(folder), "folder_name": name})


@main.command("mv")
@click.argument("old_path", type=click.Path())
@click.argument("new_path", type=click.Path())
def mv_command(old_path: str, new_path: str) -> None:
    """Rename a file or directory."""
    _execute("rename", {"old_path": _abs(old_path), "new_path": _abs(new_path)})


@main.command("trash")
@click.argument("path", type=click.Path())
def trash_command(path: str) -> None:
    """Move a file or directory to the trash."""
    _execute("move_to_trash", {"path": _abs(path)})


@main.command("cp")
@click.argument("source", type=click.Path())
@click.argument("destination", type=click.Path())
def cp_command(source: str, destination: str) -> None:
    """Copy a file or directory to a new path."""
    size = _execute(
        "copy_file_or_dir",
        {"source_path": _abs(source), "destination_path": _abs(destination)},
    )
    click.echo(f"Copied {size} bytes")


@main.command("zip")
@click.argument("sources", nargs=-1, required=True, type=click.Path())
@click.option("--dest", type=click.Path(), help="Archive path (required for several sources)")
def zip_command(sources: tuple[str, ...], dest: str | None) -> None:
    """Pack files and directories into a zip archive."""
    _execute("zip", {
        "source_paths": [_abs(s) for s in sources],
        "destination_path": _abs(dest) if dest else None,
    })


@main.command("unzip")
@click.argument("archives", nargs=-1, required=True, type=click.Path())
@click.option("--dest", type=click.Path(), help="Extraction directory (required for several archives)")
def unzip_command(archives: tuple[str, ...], dest: str | None) -> None:
    """Extract zip archives."""
    _execute("unzip", {
        "zip_paths": [_abs(a) for a in archives],
        "destination_path": _abs(dest) if dest else None,
    })


@main.command("copy")
@click.argument("paths", nargs=-1, type=click.Path())
@click.option(
    "--content",
    type=click.Path(),
    cls=MutuallyExclusiveOption,
    exclusive_with=["text"],
    help="Stage the bytes of FILE instead of the file itself",
)
@click.option(
    "--text",
    cls=MutuallyExclusiveOption,
    exclusive_with=["content"],
    help="Stage TEXT",
)
def copy_command(paths: tuple[str, ...], content: str | None, text: str | None) -> None:
    """Stage files or folders (or raw content) for copying."""
    if (content is not None or text is not None) and paths:
        raise click.UsageError("PATHS cannot be combined with --content or --text")
    if text is not None:
        _execute("copy_text", {"text": text})
    elif content is not None:
        _execute("copy_file_content", {"path": _abs(content)})
    elif len(paths) == 1:
        _execute("copy_to_clipboard", {"path": _abs(paths[0])})
    elif paths:
        _execute("copy_multiple_items", {"paths": [_abs(p) for p in paths]})
    else:
        raise click.UsageError("Nothing to copy: give PATHS, --content or --text")


@main.command("cut")
@click.argument("paths", nargs=-1, required=True, type=click.Path())
def cut_command(paths: tuple[str, ...]) -> None:
    """Stage files or folders for moving."""
    if len(paths) == 1:
        _execute("cut", {"path": _abs(paths[0])})
    else:
        _execute("cut_multiple_items", {"paths": [_abs(p) for p in paths]})


@main.command("paste")
@click.argument("destination", type=click.Path())
def paste_command(destination: str) -> None:
    """Paste the staged clipboard content into DESTINATION."""
    _execute("paste_from_clipboard", {"destination_path": _abs(destination)})


@main.command("status")
def status_command() -> None:
    """Show what the clipboard holds."""
    status = _execute("clipboard_status", {})
    if not status["has_content"]:
        click.echo("Clipboard is empty")
    elif status["operation"] == "none":
        click.echo("Clipboard holds content, next paste copies it")
    else:
        click.echo(f"Clipboard staged for {status['operation']}")
