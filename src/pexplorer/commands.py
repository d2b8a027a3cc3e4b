#!/usr/bin/env python3
"""Command surface of the file-management layer.

Every operation the file explorer front end can request is a named command
taking keyword arguments. dispatch() runs one command against the
application state and always returns a CommandResult; failures become
human-readable error strings instead of exceptions.

Clipboard commands check that their paths exist before staging.
paste_from_clipboard reports validation failures and an empty clipboard
as they are; other paste failures get the paste prefix.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pexplorer.app_state import AppState
from pexplorer.archive import unzip_paths, zip_paths
from pexplorer.clipboard import (
    paste,
    stage_content,
    stage_cut,
    stage_cut_multiple,
    stage_multiple,
    stage_path,
    stage_text,
)
from pexplorer.command_result import CommandResult
from pexplorer.errors import (
    EmptyClipboardError,
    FileOperationError,
    PexplorerError,
    ValidationError,
)
from pexplorer.fs_listing import list_directory, open_file
from pexplorer.fs_ops import (
    copy_file_or_dir,
    create_directory,
    create_file,
    move_to_trash,
    rename,
)

logger = logging.getLogger(__name__)


def _require_exists(path: str) -> None:
    if not Path(path).exists():
        raise ValidationError(f"Path does not exist: {path}")


def _open_file(app: AppState, path: str) -> str:
    return open_file(path)


def _open_directory(app: AppState, path: str) -> str:
    return list_directory(path).to_json()


def _create_file(app: AppState, folder_path_abs: str, file_name: str) -> None:
    create_file(folder_path_abs, file_name)


def _create_directory(app: AppState, folder_path_abs: str, folder_name: str) -> None:
    create_directory(folder_path_abs, folder_name)


def _rename(app: AppState, old_path: str, new_path: str) -> None:
    rename(old_path, new_path)


def _move_to_trash(app: AppState, path: str) -> None:
    move_to_trash(path)


def _copy_file_or_dir(app: AppState, source_path: str, destination_path: str) -> int:
    return copy_file_or_dir(source_path, destination_path)


def _zip(
    app: AppState, source_paths: list[str], destination_path: str | None = None
) -> None:
    zip_paths(source_paths, destination_path)


def _unzip(
    app: AppState, zip_paths: list[str], destination_path: str | None = None
) -> None:
    unzip_paths(zip_paths, destination_path)


def _copy_to_clipboard(app: AppState, path: str) -> None:
    _require_exists(path)
    stage_path(app.clipboard, path)


def _copy_file_content(app: AppState, path: str) -> None:
    _require_exists(path)
    stage_content(app.clipboard, path)


def _copy_text(app: AppState, text: str) -> None:
    stage_text(app.clipboard, text)


def _copy_multiple_items(app: AppState, paths: list[str]) -> None:
    for path in paths:
        _require_exists(path)
    stage_multiple(app.clipboard, paths)


def _cut(app: AppState, path: str) -> None:
    _require_exists(path)
    stage_cut(app.clipboard, path)


def _cut_multiple_items(app: AppState, paths: list[str]) -> None:
    for path in paths:
        _require_exists(path)
    stage_cut_multiple(app.clipboard, paths)


def _paste_from_clipboard(app: AppState, destination_path: str) -> None:
    try:
        paste(app.clipboard, destination_path)
    except (ValidationError, EmptyClipboardError):
        raise
    except (PexplorerError, OSError) as e:
        raise FileOperationError(f"Failed to paste clipboard content: {e}") from e


def _clipboard_status(app: AppState) -> dict[str, Any]:
    return {
        "has_content": app.clipboard.has_content(),
        "operation": app.clipboard.current_operation().value,
    }


COMMANDS: dict[str, Callable[..., Any]] = {
    "open_file": _open_file,
    "open_directory": _open_directory,
    "create_file": _create_file,
    "create_directory": _create_directory,
    "rename": _rename,
    "move_to_trash": _move_to_trash,
    "copy_file_or_dir": _copy_file_or_dir,
    "zip": _zip,
    "unzip": _unzip,
    "copy_to_clipboard": _copy_to_clipboard,
    "copy_file_content": _copy_file_content,
    "copy_text": _copy_text,
    "copy_multiple_items": _copy_multiple_items,
    "cut": _cut,
    "cut_multiple_items": _cut_multiple_items,
    "paste_from_clipboard": _paste_from_clipboard,
    "clipboard_status": _clipboard_status,
}

# Commands that read or change the clipboard. They only make sense against
# a long-lived AppState, i.e. through the daemon.
CLIPBOARD_COMMANDS: frozenset[str] = frozenset({
    "copy_to_clipboard",
    "copy_file_content",
    "copy_text",
    "copy_multiple_items",
    "cut",
    "cut_multiple_items",
    "paste_from_clipboard",
    "clipboard_status",
})


def dispatch(
    app: AppState, command: str, args: dict[str, Any] | None = None
) -> CommandResult:
    """Run one command and capture its outcome.

    Args:
        app: The application state.
        command: Command name, a key of COMMANDS.
        args: Keyword arguments for the command.

    Returns:
        Success with the command's return value, or failure with a
        human-readable message.
    """
    args = args or {}
    handler = COMMANDS.get(command)
    if handler is None:
        logger.error("Unknown command: %s", command)
        return CommandResult.failure(f"Unknown command: {command}")

    try:
        inspect.signature(handler).bind(app, **args)
    except TypeError as e:
        logger.error("Invalid arguments for %s: %s", command, e)
        return CommandResult.failure(f"Invalid arguments for {command}: {e}")

    logger.debug("Running command %s with %s", command, args)
    try:
        result = handler(app, **args)
    except PexplorerError as e:
        logger.error("Command %s failed: %s", command, e)
        return CommandResult.failure(str(e))
    except OSError as e:
        logger.error("Command %s failed: %s", command, e)
        return CommandResult.failure(f"Failed to {command.replace('_', ' ')}: {e}")
    return CommandResult.success(result)
