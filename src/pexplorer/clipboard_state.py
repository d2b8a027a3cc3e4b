#!/usr/bin/env python3
"""Clipboard coordinator state.

This module provides the ClipboardState dataclass holding the single staged
clipboard slot. Content, operation and the system clipboard handle are all
guarded by one lock; stage and paste functions hold it for their whole
duration, so content and operation are never observed out of step.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pexplorer.clipboard_content import (
    EMPTY,
    ClipboardContent,
    ClipboardOperation,
    Empty,
)

if TYPE_CHECKING:
    from pexplorer.system_clipboard import SystemClipboard


@dataclass
class ClipboardState:
    """Staged clipboard content and pending operation.

    Attributes:
        content: The staged content, Empty until something is staged.
        operation: The pending operation, NONE until something is staged
            and again after a successful cut-paste.
        system_clipboard: X11 text mirror, or None when unavailable.
        lock: Guards every field above. Held across paste I/O.
    """

    content: ClipboardContent = EMPTY
    operation: ClipboardOperation = ClipboardOperation.NONE
    system_clipboard: SystemClipboard | None = None
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def has_content(self) -> bool:
        """Return True if anything is staged."""
        with self.lock:
            return not isinstance(self.content, Empty)

    def current_operation(self) -> ClipboardOperation:
        """Return a snapshot of the pending operation."""
        with self.lock:
            return self.operation
