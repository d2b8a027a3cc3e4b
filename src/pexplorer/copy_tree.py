#!/usr/bin/env python3
"""File and directory tree copying for paste.

Copies never overwrite: a target file that already exists fails the copy
with FileExistsError, which propagates to the caller unchanged.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from pexplorer.errors import ValidationError

logger = logging.getLogger(__name__)


def copy_file(source: Path, destination: Path) -> int:
    """Copy one file byte for byte, keeping its permission bits.

    Args:
        source: File to copy.
        destination: Path of the new file. Must not exist.

    Returns:
        Number of bytes copied.

    Raises:
        FileExistsError: If destination already exists.
        OSError: On any other read or write failure.
    """
    with open(source, "rb") as src, open(destination, "xb") as dst:
        shutil.copyfileobj(src, dst)
        size = dst.tell()
    shutil.copymode(source, destination)
    return size


def copy_dir_recursive(source: Path, destination: Path) -> None:
    """Copy a directory tree depth-first, preserving its relative layout.

    The destination directory is created if absent (parents are not).
    Existing destination directories are merged into; existing files are
    not replaced. Entries that are neither files nor directories are
    skipped.

    Args:
        source: Directory to copy.
        destination: Directory to copy into.

    Raises:
        ValidationError: If destination is source or lies below it.
        OSError: On the first failing directory creation or file copy.
    """
    logger.info("Recursively copying directory from %s to %s", source, destination)

    if is_inside(destination, source):
        logger.error("Cannot copy %s into itself: %s", source, destination)
        raise ValidationError(f"Cannot copy a directory into itself: {source} -> {destination}")

    entries = sorted(source.iterdir())
    if not destination.exists():
        try:
            destination.mkdir()
        except OSError as e:
            logger.error("Failed to create destination directory %s: %s", destination, e)
            raise

    for entry in entries:
        target = destination / entry.name
        if entry.is_dir():
            copy_dir_recursive(entry, target)
        elif not entry.is_file():
            logger.warning("Skipping special file %s", entry)
        else:
            try:
                copy_file(entry, target)
            except OSError as e:
                logger.error("Failed to copy file %s to %s: %s", entry, target, e)
                raise

    logger.debug("Directory copy of %s completed", source)


def is_inside(target: Path, source: Path) -> bool:
    """Return True if target is source itself or anywhere below it."""
    return target.resolve().is_relative_to(source.resolve())
