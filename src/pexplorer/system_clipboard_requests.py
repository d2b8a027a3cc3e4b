"""X11 selection request handling for the clipboard mirror.

When the mirror owns the CLIPBOARD selection, other applications ask it for
the content with SelectionRequest events. This module answers them.

Supported targets:
- TARGETS: list of supported targets
- UTF8_STRING and STRING: the mirrored text
- TIMESTAMP: the ownership acquisition time, when known

Anything else, and text too large for a single property write, is refused
with property=None. Incremental (INCR) transfers are not implemented.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from Xlib.display import Display
    from Xlib.protocol.event import SelectionRequest

logger = logging.getLogger(__name__)

# Fraction of the server's maximum request size used for one property write.
PROPERTY_SIZE_MARGIN: float = 0.9


def get_max_property_size(display: "Display") -> int:
    """Return the largest content size served with a single change_property.

    Args:
        display: The X11 display connection.

    Returns:
        Maximum safe property size in bytes.
    """
    # max_request_length is in 4-byte units
    max_bytes = display.info.max_request_length * 4  # type: ignore[attr-defined]
    return int(max_bytes * PROPERTY_SIZE_MARGIN)


def handle_selection_request(
    display: "Display",
    event: "SelectionRequest",
    content: bytes,
    acquisition_time: int | None,
) -> None:
    """Respond to a SelectionRequest for the mirrored text.

    Args:
        display: The X11 display connection.
        event: The SelectionRequest event.
        content: The UTF-8 text bytes to serve.
        acquisition_time: X server timestamp of ownership acquisition, or
            None if unknown.
    """
    from Xlib import X, Xatom

    targets_atom = display.intern_atom("TARGETS")
    utf8_atom = display.intern_atom("UTF8_STRING")
    timestamp_atom = display.intern_atom("TIMESTAMP")
    logger.debug("SelectionRequest target=%s prop=%s content_len=%s",
        event.target, event.property, len(content))

    if event.target == targets_atom:
        targets = [targets_atom, utf8_atom, Xatom.STRING, timestamp_atom]
        event.requestor.change_property(event.property, Xatom.ATOM, 32, targets)
    elif event.target in (utf8_atom, Xatom.STRING):
        if len(content) > get_max_property_size(display):
            logger.warning("Refusing %d byte selection request, too large", len(content))
            event.property = X.NONE
        else:
            event.requestor.change_property(event.property, event.target, 8, content)
    elif event.target == timestamp_atom and acquisition_time is not None:
        event.requestor.change_property(
            event.property, Xatom.INTEGER, 32, [acquisition_time]
        )
    else:
        event.property = X.NONE

    send_selection_notify(event, display)


def send_selection_notify(event: "SelectionRequest", display: "Display") -> None:
    """Send the SelectionNotify reply for a handled or refused request."""
    from Xlib.protocol.event import SelectionNotify as SelectionNotifyEvent

    event.requestor.send_event(
        SelectionNotifyEvent(
            time=event.time,
            requestor=event.requestor.id,
            selection=event.selection,
            target=event.target,
            property=event.property,
        ),
        event_mask=0,
    )
    display.flush()
