"""Metadata helpers for directory listings."""

from __future__ import annotations

import os
import stat
import time
from pathlib import Path

TIME_FORMAT: str = "%Y-%m-%d %H:%M:%S"


def permission_string(mode: int) -> str:
    """Return an ls-style permission string such as 'drwxr-xr-x'."""
    return stat.filemode(mode)


def permission_number(mode: int) -> int:
    """Return the permission bits as their octal digits, e.g. 0o755 -> 755."""
    return int(oct(stat.S_IMODE(mode) & 0o777)[2:])


def format_timestamp(timestamp: float) -> str:
    """Format an epoch timestamp in local time."""
    return time.strftime(TIME_FORMAT, time.localtime(timestamp))


def created_time(st: os.stat_result) -> float:
    """Return the creation time where the platform records one.

    Falls back to st_ctime, which is the inode change time on Linux.
    """
    return getattr(st, "st_birthtime", st.st_ctime)


def directory_size(path: Path) -> int:
    """Return the total size in bytes of all files below path.

    Entries that cannot be read are skipped. Symlinks are not followed.
    """
    total = 0
    for root, _dirs, files in os.walk(path, onerror=lambda _e: None):
        for name in files:
            try:
                total += os.lstat(os.path.join(root, name)).st_size
            except OSError:
                continue
    return total


def count_children(path: Path) -> tuple[int, int]:
    """Return (file_count, dir_count) of the immediate children of path.

    Unreadable directories count as empty.
    """
    files = dirs = 0
    try:
        with os.scandir(path) as entries:
            for entry in entries:
                if entry.is_dir():
                    dirs += 1
                elif entry.is_file():
                    files += 1
    except OSError:
        return 0, 0
    return files, dirs
