#!/usr/bin/env python3
"""Exception classes for pexplorer.

Every failure that crosses the command surface is one of these (or a raw
OSError from the filesystem), and is turned into a human-readable error
string by the command layer. ProtocolError lives in the protocol module.
"""


class PexplorerError(Exception):
    """Base exception for pexplorer operations."""


class ValidationError(PexplorerError):
    """Raised when an operand is rejected before any I/O is attempted.

    Covers missing sources, pre-existing destinations, destinations that
    are not directories and empty operand lists. The message names the
    failing path.
    """


class EmptyClipboardError(PexplorerError):
    """Raised when pasting while nothing has been staged."""


class InvalidSourcePathError(PexplorerError):
    """Raised when a staged path has no final component to paste under."""


class FileOperationError(PexplorerError):
    """Raised when an underlying filesystem call fails, with context."""


class ArchiveError(PexplorerError):
    """Raised when an archive cannot be created or read."""


class SystemClipboardError(PexplorerError):
    """Raised when the X11 clipboard mirror cannot take ownership."""
