#!/usr/bin/env python3
"""Single-shot filesystem operations.

Each function validates its operands before touching the filesystem and
raises ValidationError naming the offending path. Failures of the
underlying call are wrapped in FileOperationError with context.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from send2trash import send2trash

from pexplorer.copy_tree import copy_file, is_inside
from pexplorer.errors import FileOperationError, ValidationError

logger = logging.getLogger(__name__)


def _require_directory(path: Path, label: str = "Directory") -> None:
    if not path.exists():
        raise ValidationError(f"{label} does not exist: {path}")
    if not path.is_dir():
        raise ValidationError(f"Path is not a directory: {path}")


def create_file(folder_path_abs: str | os.PathLike[str], file_name: str) -> Path:
    """Create an empty file inside an existing folder.

    Parent directories are not created and an existing file is never
    truncated.

    Returns:
        Path of the new file.
    """
    folder = Path(folder_path_abs)
    _require_directory(folder)
    file_path = folder / file_name
    if file_path.exists():
        raise ValidationError(f"File already exists: {file_path}")

    try:
        file_path.touch(exist_ok=False)
    except OSError as e:
        raise FileOperationError(f"File could not be created: {e}") from e
    logger.info("Created file %s", file_path)
    return file_path


def create_directory(folder_path_abs: str | os.PathLike[str], folder_name: str) -> Path:
    """Create a directory inside an existing folder.

    Returns:
        Path of the new directory.
    """
    parent = Path(folder_path_abs)
    _require_directory(parent, "Parent directory")
    dir_path = parent / folder_name

    try:
        dir_path.mkdir()
    except OSError as e:
        raise FileOperationError(f"Failed to create directory: {e}") from e
    logger.info("Created directory %s", dir_path)
    return dir_path


def rename(old_path: str | os.PathLike[str], new_path: str | os.PathLike[str]) -> None:
    """Rename a file or directory. The new path must not exist yet."""
    old, new = Path(old_path), Path(new_path)
    if not old.exists():
        raise ValidationError(f"File does not exist: {old}")
    if new.exists():
        raise ValidationError(f"New path already exists: {new}")

    try:
        old.rename(new)
    except OSError as e:
        raise FileOperationError(f"Failed to rename: {e}") from e
    logger.info("Renamed %s to %s", old, new)


def move_to_trash(path: str | os.PathLike[str]) -> None:
    """Move a file or directory to the desktop trash."""
    try:
        send2trash(os.fspath(path))
    except OSError as e:
        raise FileOperationError(
            f"Failed to move file or directory to trash: {e}"
        ) from e
    logger.info("Moved %s to trash", path)


def copy_file_or_dir(
    source_path: str | os.PathLike[str], destination_path: str | os.PathLike[str]
) -> int:
    """Copy a file, or a directory recursively, to a new path.

    Entries that are neither files nor directories are skipped. A directory
    is never copied into itself or its own subtree.

    Returns:
        Total size in bytes of the files copied.
    """
    source, destination = Path(source_path), Path(destination_path)
    if not source.exists():
        raise ValidationError(f"Source path does not exist: {source}")
    if destination.exists():
        raise ValidationError(f"Destination path already exists: {destination}")
    if source.is_dir() and is_inside(destination, source):
        raise ValidationError(
            f"Cannot copy a directory into itself: {source} -> {destination}"
        )

    total = _copy_any(source, destination)
    logger.info("Copied %s to %s (%d bytes)", source, destination, total)
    return total


def _copy_any(source: Path, destination: Path) -> int:
    if not source.is_dir():
        try:
            return copy_file(source, destination)
        except OSError as e:
            raise FileOperationError(f"Failed to copy file '{source}': {e}") from e

    try:
        children = sorted(source.iterdir())
    except OSError as e:
        raise FileOperationError(f"Failed to read source directory: {e}") from e
    try:
        destination.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileOperationError(f"Failed to create destination directory: {e}") from e

    total = 0
    for entry in children:
        if entry.is_file() or entry.is_dir():
            total += _copy_any(entry, destination / entry.name)
    return total
