#!/usr/bin/env python3
"""Reading files and listing directories.

list_directory() returns the structured listing the file explorer shows:
directories and files of one folder, each with permissions, size and
timestamps. Symlinks are classified by their target and flagged.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path

from pexplorer.errors import FileOperationError, ValidationError
from pexplorer.fs_metadata import (
    count_children,
    created_time,
    directory_size,
    format_timestamp,
    permission_number,
    permission_string,
)

logger = logging.getLogger(__name__)


@dataclass
class DirectoryEntry:
    """A directory inside a listing."""

    name: str
    path: str
    is_symlink: bool
    access_rights_as_string: str
    access_rights_as_number: int
    size_in_bytes: int
    sub_file_count: int
    sub_dir_count: int
    created: str
    last_modified: str
    accessed: str


@dataclass
class FileEntry:
    """A regular file inside a listing."""

    name: str
    path: str
    is_symlink: bool
    access_rights_as_string: str
    access_rights_as_number: int
    size_in_bytes: int
    created: str
    last_modified: str
    accessed: str


@dataclass
class Entries:
    """Directories and files of one folder, each sorted by name."""

    directories: list[DirectoryEntry] = field(default_factory=list)
    files: list[FileEntry] = field(default_factory=list)

    def to_json(self) -> str:
        return json.dumps(asdict(self))


def open_file(path: str | os.PathLike[str]) -> str:
    """Return the contents of a UTF-8 text file.

    Raises:
        ValidationError: If path does not exist or is not a file.
        FileOperationError: If the file cannot be read or decoded.
    """
    path = Path(path)
    if not path.exists():
        raise ValidationError(f"File does not exist: {path}")
    if not path.is_file():
        raise ValidationError(f"Path is not a file: {path}")

    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileOperationError(f"Failed to read file: {e}") from e


def list_directory(path: str | os.PathLike[str]) -> Entries:
    """List the directories and files directly inside path.

    Entries that are neither (sockets, fifos, broken symlinks) are left out.

    Raises:
        ValidationError: If path does not exist or is not a directory.
        FileOperationError: If the directory or an entry cannot be read.
    """
    path = Path(path)
    if not path.exists():
        raise ValidationError(f"Directory does not exist: {path}")
    if not path.is_dir():
        raise ValidationError(f"Path is not a directory: {path}")

    entries = Entries()
    try:
        with os.scandir(path) as it:
            children = sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise FileOperationError(f"Failed to read directory: {e}") from e

    for child in children:
        try:
            is_dir = child.is_dir()
            is_file = child.is_file()
            if not (is_dir or is_file):
                continue
            st = child.stat()
            is_symlink = child.is_symlink()
        except OSError as e:
            raise FileOperationError(f"Failed to get metadata: {e}") from e

        if is_dir:
            sub_files, sub_dirs = count_children(Path(child.path))
            entries.directories.append(DirectoryEntry(
                name=child.name,
                path=child.path,
                is_symlink=is_symlink,
                access_rights_as_string=permission_string(st.st_mode),
                access_rights_as_number=permission_number(st.st_mode),
                size_in_bytes=directory_size(Path(child.path)),
                sub_file_count=sub_files,
                sub_dir_count=sub_dirs,
                created=format_timestamp(created_time(st)),
                last_modified=format_timestamp(st.st_mtime),
                accessed=format_timestamp(st.st_atime),
            ))
        else:
            entries.files.append(FileEntry(
                name=child.name,
                path=child.path,
                is_symlink=is_symlink,
                access_rights_as_string=permission_string(st.st_mode),
                access_rights_as_number=permission_number(st.st_mode),
                size_in_bytes=st.st_size,
                created=format_timestamp(created_time(st)),
                last_modified=format_timestamp(st.st_mtime),
                accessed=format_timestamp(st.st_atime),
            ))

    logger.debug("Listed %s: %d directories, %d files",
        path, len(entries.directories), len(entries.files))
    return entries
