#!/usr/bin/env python3
"""Clipboard staging operations.

Staging records what a later paste should do without touching any
destination. Every function here holds the state lock for its whole
duration and sets content and operation together. On failure the state is
left exactly as it was.

Text and single paths are also mirrored to the X11 CLIPBOARD selection when
a mirror is available. Mirror failures are logged and never raised.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from pexplorer.clipboard_content import (
    BinaryPayload,
    ClipboardOperation,
    MultipleItems,
    SingleFile,
    SingleFolder,
    TextPayload,
)
from pexplorer.errors import ValidationError

if TYPE_CHECKING:
    from pexplorer.clipboard_state import ClipboardState

logger = logging.getLogger(__name__)


def stage_path(state: ClipboardState, path: str | os.PathLike[str]) -> None:
    """Stage a file or folder for copying.

    Args:
        state: The clipboard state.
        path: An existing file or directory.

    Raises:
        ValidationError: If path does not exist or is neither a regular
            file nor a directory.
    """
    _stage_single(state, Path(path), ClipboardOperation.COPY)


def stage_cut(state: ClipboardState, path: str | os.PathLike[str]) -> None:
    """Stage a file or folder for moving.

    Args:
        state: The clipboard state.
        path: An existing file or directory.

    Raises:
        ValidationError: If path does not exist or is neither a regular
            file nor a directory.
    """
    _stage_single(state, Path(path), ClipboardOperation.CUT)


def stage_content(state: ClipboardState, path: str | os.PathLike[str]) -> None:
    """Stage the bytes of a file rather than the file itself.

    Valid UTF-8 is staged as text (and mirrored), anything else as binary.

    Args:
        state: The clipboard state.
        path: An existing regular file.

    Raises:
        ValidationError: If path is not a regular file.
        OSError: If the file cannot be read.
    """
    path = Path(path)
    logger.info("Copying file content from: %s", path)
    with state.lock:
        if not path.is_file():
            logger.error("Failed to copy file content: not a file: %s", path)
            raise ValidationError(f"Not a file: {path}")

        try:
            data = path.read_bytes()
        except OSError as e:
            logger.error("Failed to read file content: %s", e)
            raise

        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError:
            state.content = BinaryPayload(data)
            logger.info("Copied binary content to clipboard")
        else:
            _mirror_text(state, text)
            state.content = TextPayload(text)
            logger.info("Copied text content to clipboard")
        state.operation = ClipboardOperation.COPY


def stage_text(state: ClipboardState, text: str) -> None:
    """Stage raw text for pasting as a file."""
    logger.info("Copying text to clipboard")
    with state.lock:
        _mirror_text(state, text)
        state.content = TextPayload(text)
        state.operation = ClipboardOperation.COPY


def stage_multiple(
    state: ClipboardState, paths: Sequence[str | os.PathLike[str]]
) -> None:
    """Stage a batch of files and folders for copying.

    The caller is expected to have checked that every path exists. An empty
    batch is ignored with a warning.
    """
    _stage_batch(state, paths, ClipboardOperation.COPY)


def stage_cut_multiple(
    state: ClipboardState, paths: Sequence[str | os.PathLike[str]]
) -> None:
    """Stage a batch of files and folders for moving.

    The caller is expected to have checked that every path exists. An empty
    batch is ignored with a warning.
    """
    _stage_batch(state, paths, ClipboardOperation.CUT)


def _stage_single(
    state: ClipboardState, path: Path, operation: ClipboardOperation
) -> None:
    logger.info("Staging %s of path: %s", operation.value, path)
    with state.lock:
        if path.is_file():
            content: SingleFile | SingleFolder = SingleFile(path)
        elif path.is_dir():
            content = SingleFolder(path)
        elif not path.exists():
            logger.error("Path does not exist: %s", path)
            raise ValidationError(f"Path does not exist: {path}")
        else:
            logger.error("Path is neither a file nor a directory: %s", path)
            raise ValidationError(f"Path is neither a file nor a directory: {path}")

        _mirror_text(state, str(path))
        state.content = content
        state.operation = operation
    logger.info("Staged %s for %s", type(content).__name__, operation.value)


def _stage_batch(
    state: ClipboardState,
    paths: Sequence[str | os.PathLike[str]],
    operation: ClipboardOperation,
) -> None:
    if not paths:
        logger.warning("Attempted to %s empty items list", operation.value)
        return

    logger.info("Staging %s of multiple items (%d items)", operation.value, len(paths))
    items = tuple(Path(p) for p in paths)
    with state.lock:
        state.content = MultipleItems(items)
        state.operation = operation


def _mirror_text(state: ClipboardState, text: str) -> None:
    """Offer text on the system clipboard. Caller must hold state.lock."""
    if state.system_clipboard is None:
        return
    try:
        state.system_clipboard.set_text(text)
    except Exception as e:
        logger.error("Failed to set text in system clipboard: %s", e)
