#!/usr/bin/env python3
"""Zip archive creation and extraction.

Naming rules:
- zip: one source and no destination gives <source>.zip next to it;
  several sources need an explicit destination archive path.
- unzip: one archive and no destination extracts into a sibling directory
  named after the archive stem; otherwise each archive is extracted into
  destination/<stem>.

All operands are validated before the first archive is written or read.
"""

from __future__ import annotations

import logging
import os
import zipfile
from collections.abc import Sequence
from pathlib import Path

from pexplorer.errors import ArchiveError, FileOperationError, ValidationError

logger = logging.getLogger(__name__)


def zip_paths(
    source_paths: Sequence[str | os.PathLike[str]],
    destination_path: str | os.PathLike[str] | None = None,
) -> Path:
    """Pack files and directories into one deflated zip archive.

    Files are stored under their own name, directory contents under
    <dirname>/<relative path>.

    Returns:
        Path of the archive written.
    """
    if not source_paths:
        raise ValidationError("No source paths provided")

    sources = [Path(p) for p in source_paths]
    if destination_path is None and len(sources) > 1:
        raise ValidationError("Destination path required for multiple sources")
    for source in sources:
        if not source.exists():
            raise ValidationError(f"Source path does not exist: {source}")
        if not source.name:
            raise ValidationError(f"Invalid source name: {source}")

    if destination_path is None:
        zip_path = sources[0].with_suffix(".zip")
    else:
        zip_path = Path(destination_path)

    try:
        with zipfile.ZipFile(zip_path, "w", zipfile.ZIP_DEFLATED) as archive:
            for source in sources:
                _add_to_archive(archive, source)
    except OSError as e:
        raise FileOperationError(f"Failed to create zip file: {e}") from e

    logger.info("Created archive %s from %d source(s)", zip_path, len(sources))
    return zip_path


def _add_to_archive(archive: zipfile.ZipFile, source: Path) -> None:
    if source.is_file():
        archive.write(source, source.name)
        return
    for root, dirs, files in os.walk(source):
        dirs.sort()
        for name in sorted(files):
            path = Path(root) / name
            relative = path.relative_to(source).as_posix()
            archive.write(path, f"{source.name}/{relative}")


def unzip_paths(
    zip_paths: Sequence[str | os.PathLike[str]],
    destination_path: str | os.PathLike[str] | None = None,
) -> list[Path]:
    """Extract one or more zip archives.

    Returns:
        The extraction directory of each archive, in order.
    """
    if not zip_paths:
        raise ValidationError("No zip files provided")

    archives = [Path(p) for p in zip_paths]
    if destination_path is None and len(archives) > 1:
        raise ValidationError("Destination path required for multiple zip files")
    for archive_path in archives:
        if not archive_path.exists():
            raise ValidationError(f"Zip file does not exist: {archive_path}")

    extracted = []
    for archive_path in archives:
        if destination_path is None:
            extract_path = archive_path.with_suffix("")
        else:
            extract_path = Path(destination_path) / archive_path.stem
        _extract(archive_path, extract_path)
        extracted.append(extract_path)
    return extracted


def _extract(archive_path: Path, extract_path: Path) -> None:
    try:
        extract_path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileOperationError(f"Failed to create extraction directory: {e}") from e

    try:
        with zipfile.ZipFile(archive_path) as archive:
            archive.extractall(extract_path)
    except zipfile.BadZipFile as e:
        raise ArchiveError(f"Failed to read zip archive {archive_path}: {e}") from e
    except OSError as e:
        raise FileOperationError(f"Failed to extract {archive_path}: {e}") from e
    logger.info("Extracted %s into %s", archive_path, extract_path)
