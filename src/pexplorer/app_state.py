#!/usr/bin/env python3
"""Application state container.

AppState is created once at startup and passed by reference to every
command handler. It owns the one ClipboardState of the process; nothing in
pexplorer keeps clipboard state in a module-level global.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pexplorer.clipboard_state import ClipboardState
from pexplorer.system_clipboard import open_system_clipboard

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    """State shared by all command handlers.

    Attributes:
        clipboard: The clipboard coordinator state.
    """

    clipboard: ClipboardState = field(default_factory=ClipboardState)


def create_app_state(mirror: bool = True) -> AppState:
    """Create the application state.

    Args:
        mirror: If True, try to open the X11 clipboard mirror. Failure to
            open it is logged and mirroring is disabled.
    """
    system_clipboard = open_system_clipboard() if mirror else None
    logger.info("Creating clipboard state (system mirror %s)",
        "enabled" if system_clipboard is not None else "disabled")
    return AppState(clipboard=ClipboardState(system_clipboard=system_clipboard))
