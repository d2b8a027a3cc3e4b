#!/usr/bin/env python3
"""Best-effort X11 mirror of staged clipboard text.

When text or a path is staged, it is also offered on the X11 CLIPBOARD
selection so other applications can paste it. The mirror is optional: if
there is no display, the coordinator simply runs without one.

The module handles:
- Opening the X11 display without exiting when it is unavailable
- Creating a hidden window to own the CLIPBOARD selection
- Taking ownership with a real server timestamp
- Serving SelectionRequest events from the daemon's event loop
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pexplorer.errors import SystemClipboardError
from pexplorer.system_clipboard_requests import handle_selection_request

if TYPE_CHECKING:
    from Xlib.display import Display
    from Xlib.protocol.rq import Event
    from Xlib.xobject.drawable import Window

logger = logging.getLogger(__name__)


@dataclass
class SystemClipboard:
    """Owner of the X11 CLIPBOARD selection for mirrored text.

    Attributes:
        display: The X11 display connection.
        window: Hidden window that owns the selection.
        clipboard_atom: Cached CLIPBOARD atom.
        content: UTF-8 bytes currently offered, empty when not owning.
        acquisition_time: X server timestamp of the last ownership
            acquisition, or None.
        deferred_events: Events read while waiting for a timestamp, served
            on the next serve_pending_requests() call.
        lock: Serializes all use of the display connection. Writes come
            from worker threads, serving from the event loop thread.
    """

    display: Display
    window: Window
    clipboard_atom: int
    content: bytes = b""
    acquisition_time: int | None = None
    deferred_events: list[Event] = field(default_factory=list)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def fileno(self) -> int:
        """Return the display connection fd, for loop.add_reader()."""
        return self.display.fileno()

    def set_text(self, text: str) -> None:
        """Offer text on the CLIPBOARD selection.

        Args:
            text: The text to mirror.

        Raises:
            SystemClipboardError: If ownership could not be acquired.
        """
        with self.lock:
            timestamp = get_server_timestamp(
                self.display, self.window, self.deferred_events
            )
            self.window.set_selection_owner(self.clipboard_atom, timestamp)
            self.display.flush()

            owner = self.display.get_selection_owner(self.clipboard_atom)
            if owner != self.window:
                self.content = b""
                self.acquisition_time = None
                raise SystemClipboardError("Failed to acquire CLIPBOARD ownership")

            self.content = text.encode("utf-8")
            self.acquisition_time = timestamp
            logger.debug("Mirrored %d bytes to CLIPBOARD", len(self.content))

    def serve_pending_requests(self) -> int:
        """Answer selection events already pending, without blocking.

        Returns:
            Number of SelectionRequest events answered.
        """
        from Xlib import X

        handled = 0
        with self.lock:
            events = list(self.deferred_events)
            self.deferred_events.clear()
            while self.display.pending_events() > 0:
                events.append(self.display.next_event())

            for event in events:
                if event.type == X.SelectionRequest:
                    handle_selection_request(
                        self.display, event, self.content, self.acquisition_time
                    )
                    handled += 1
                elif event.type == X.SelectionClear:
                    logger.debug("Lost CLIPBOARD ownership")
                    self.content = b""
                    self.acquisition_time = None
        return handled


def open_system_clipboard() -> SystemClipboard | None:
    """Open the X11 mirror, or return None when X11 is unavailable.

    Unlike a hard requirement on X11, a missing display only disables
    mirroring; the failure is logged as a warning.

    Returns:
        A SystemClipboard, or None if DISPLAY is unset or unreachable.
    """
    display_name = os.environ.get("DISPLAY")
    if not display_name:
        logger.warning("DISPLAY is not set, system clipboard mirroring disabled")
        return None

    try:
        from Xlib.display import Display as XDisplay

        display = XDisplay(display_name)
        window = create_hidden_window(display)
        clipboard_atom = display.intern_atom("CLIPBOARD")
    except Exception as e:
        logger.warning("Failed to initialize system clipboard: %s", e)
        return None

    return SystemClipboard(display=display, window=window, clipboard_atom=clipboard_atom)


def create_hidden_window(display: Display) -> Window:
    """Create a 1x1 unmapped window for clipboard ownership.

    Args:
        display: The X11 display connection.

    Returns:
        A Window that receives PropertyNotify events.
    """
    from Xlib import X

    screen = display.screen()
    return screen.root.create_window(
        0, 0, 1, 1, 0, screen.root_depth, event_mask=X.PropertyChangeMask,
    )


def get_server_timestamp(
    display: Display,
    window: Window,
    deferred_events: list[Event],
) -> int:
    """Query the X server's current timestamp.

    Changes a dummy property on the window and waits for the resulting
    PropertyNotify, whose time field is the server's current time. Other
    events read while waiting are appended to deferred_events.

    Args:
        display: The X11 display connection.
        window: The window to change a property on.
        deferred_events: List to collect other events during the wait.

    Returns:
        The X server's current timestamp.
    """
    from Xlib import X, Xatom

    prop_atom = display.intern_atom("PEXPLORER_TIMESTAMP")
    window.change_property(prop_atom, Xatom.INTEGER, 32, [0])
    display.flush()

    while True:
        event = display.next_event()
        if event.type == X.PropertyNotify:
            return event.time
        deferred_events.append(event)
