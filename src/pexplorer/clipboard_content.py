#!/usr/bin/env python3
"""Clipboard operation tag and staged content kinds.

The staged content is a closed union: every consumer matches on it with a
final ``assert_never`` so that a new kind cannot be added without touching
each consumer.

- Empty: nothing staged
- SingleFile / SingleFolder: one path, classified at stage time
- TextPayload / BinaryPayload: raw content with no source path
- MultipleItems: a batch of paths, classified again at paste time
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path
from typing import TypeAlias


class ClipboardOperation(enum.Enum):
    """Whether a paste duplicates (COPY) or relocates (CUT) its sources."""

    NONE = "none"
    COPY = "copy"
    CUT = "cut"


@dataclass(frozen=True)
class Empty:
    """Nothing staged."""


@dataclass(frozen=True)
class SingleFile:
    """A path that referenced a regular file when it was staged."""

    path: Path


@dataclass(frozen=True)
class SingleFolder:
    """A path that referenced a directory when it was staged."""

    path: Path


@dataclass(frozen=True)
class TextPayload:
    """Raw text, decoupled from any filesystem path."""

    text: str


@dataclass(frozen=True)
class BinaryPayload:
    """Raw non-text bytes, decoupled from any filesystem path."""

    data: bytes


@dataclass(frozen=True)
class MultipleItems:
    """A batch of file and folder paths.

    Attributes:
        paths: Staged paths in paste order. Whether each is a file or a
            folder is decided when pasting, not when staging.
    """

    paths: tuple[Path, ...]


ClipboardContent: TypeAlias = (
    Empty | SingleFile | SingleFolder | TextPayload | BinaryPayload | MultipleItems
)

EMPTY = Empty()
