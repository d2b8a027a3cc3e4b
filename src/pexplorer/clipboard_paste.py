#!/usr/bin/env python3
"""Clipboard paste (commit) algorithm.

paste() applies the staged content to a destination directory. It reads
content and operation once and keeps them frozen for the whole paste, and
holds the state lock throughout, including all filesystem I/O. Concurrent
pastes therefore run one after the other.

Per content kind:
- SingleFile / SingleFolder: move (CUT) or copy into destination/<name>
- TextPayload: write clipboard_content.txt, whatever the operation
- BinaryPayload: write clipboard_content.bin, whatever the operation
- MultipleItems: each path classified now, then moved or copied in order
- Empty: EmptyClipboardError

A folder is never pasted into itself or its own subtree, and a move never
replaces an existing entry; both are ValidationErrors raised before any
I/O for that item.

A multi-item paste stops at the first failing item. Items already moved or
copied stay where they are; later items are not touched.

After a successful CUT paste the operation is reset to NONE while the
content is kept, so pasting again copies the same paths.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, assert_never

from pexplorer.clipboard_content import (
    BinaryPayload,
    ClipboardOperation,
    Empty,
    MultipleItems,
    SingleFile,
    SingleFolder,
    TextPayload,
)
from pexplorer.constants import PASTED_BINARY_NAME, PASTED_TEXT_NAME
from pexplorer.copy_tree import copy_dir_recursive, copy_file, is_inside
from pexplorer.errors import EmptyClipboardError, InvalidSourcePathError, ValidationError

if TYPE_CHECKING:
    from pexplorer.clipboard_state import ClipboardState

logger = logging.getLogger(__name__)


def paste(state: ClipboardState, destination_dir: str | os.PathLike[str]) -> None:
    """Apply the staged clipboard content to a destination directory.

    Args:
        state: The clipboard state.
        destination_dir: Existing directory to paste into.

    Raises:
        ValidationError: If destination_dir is missing or not a directory,
            a folder would land inside itself, a move target already
            exists, or a batch item has disappeared since staging.
        EmptyClipboardError: If nothing is staged.
        InvalidSourcePathError: If a single staged path has no name.
        OSError: On the first failing move, copy or write.
    """
    destination = Path(destination_dir)
    logger.info("Pasting to location: %s", destination)

    if not destination.exists():
        raise ValidationError(f"Destination path does not exist: {destination}")
    if not destination.is_dir():
        raise ValidationError(f"Destination path is not a directory: {destination}")

    with state.lock:
        content = state.content
        operation = state.operation

        match content:
            case Empty():
                logger.error("Nothing to paste: clipboard is empty")
                raise EmptyClipboardError("Clipboard is empty")
            case SingleFile(path=source) | SingleFolder(path=source):
                if not _has_name(source):
                    logger.error("Invalid source path for paste operation: %s", source)
                    raise InvalidSourcePathError(f"Invalid source path: {source}")
                _place(source, destination / source.name, operation,
                    is_dir=isinstance(content, SingleFolder))
            case TextPayload(text=text):
                _write_payload(destination / PASTED_TEXT_NAME, text.encode("utf-8"))
            case BinaryPayload(data=data):
                _write_payload(destination / PASTED_BINARY_NAME, data)
            case MultipleItems(paths=paths):
                _paste_items(paths, destination, operation)
            case _:
                assert_never(content)

        if operation is ClipboardOperation.CUT:
            state.operation = ClipboardOperation.NONE
            logger.info("Cut operation completed, clipboard operation reset")

    logger.info("Paste operation completed successfully")


def _paste_items(
    paths: tuple[Path, ...], destination: Path, operation: ClipboardOperation
) -> None:
    logger.info("Pasting multiple items (%d items)", len(paths))
    for path in paths:
        if not _has_name(path):
            logger.error("Invalid source path, skipping: %s", path)
            continue
        if path.is_file():
            is_dir = False
        elif path.is_dir():
            is_dir = True
        elif not path.exists():
            logger.error("Source path no longer exists: %s", path)
            raise ValidationError(f"Source path does not exist: {path}")
        else:
            logger.error("Source path is neither a file nor a directory: %s", path)
            raise ValidationError(f"Source path is neither a file nor a directory: {path}")
        _place(path, destination / path.name, operation, is_dir=is_dir)


def _place(
    source: Path, target: Path, operation: ClipboardOperation, is_dir: bool
) -> None:
    """Move (CUT) or copy one file or folder to target.

    Nothing is touched when target lies inside source, or when a move
    would replace something already at target.
    """
    kind = "folder" if is_dir else "file"
    if is_dir and is_inside(target, source):
        logger.error("Cannot paste folder %s into itself: %s", source, target)
        raise ValidationError(f"Cannot paste folder into itself: {source} -> {target}")
    if operation is ClipboardOperation.CUT and (target.exists() or target.is_symlink()):
        logger.error("Refusing to move %s over existing %s", source, target)
        raise ValidationError(f"Destination already exists: {target}")
    try:
        if operation is ClipboardOperation.CUT:
            logger.info("Moving %s to: %s", kind, target)
            source.rename(target)
        elif is_dir:
            logger.info("Copying folder to: %s", target)
            copy_dir_recursive(source, target)
        else:
            logger.info("Copying file to: %s", target)
            copy_file(source, target)
    except OSError as e:
        logger.error("Failed to paste %s %s: %s", kind, source, e)
        raise


def _write_payload(target: Path, data: bytes) -> None:
    logger.info("Pasting raw content to file: %s", target)
    try:
        target.write_bytes(data)
    except OSError as e:
        logger.error("Failed to write content to file %s: %s", target, e)
        raise


def _has_name(path: Path) -> bool:
    return path.name not in ("", ".", "..")
