#!/usr/bin/env python3
"""Daemon mode implementation for pexplorer.

The daemon owns the application state, in particular the clipboard, for as
long as it runs, so that a copy staged by one CLI call can be pasted by the
next. It:
- Opens the X11 clipboard mirror if a display is available
- Listens on a Unix domain socket and serves any number of clients
- Answers X11 selection requests for mirrored text from the event loop
- Exits cleanly on SIGINT/SIGTERM, removing its socket file

Usage:
    pexplorer --socket /path/to/socket serve
"""

from __future__ import annotations

import asyncio
import logging
import signal

from pexplorer.app_state import AppState, create_app_state
from pexplorer.server_handler import handle_client
from pexplorer.server_socket import (
    cleanup_socket,
    prepare_socket_path,
    print_startup_message,
)

logger = logging.getLogger(__name__)


async def run_server(socket_path: str, app: AppState | None = None) -> None:
    """Run the daemon until SIGINT or SIGTERM, then remove the socket file.

    Args:
        socket_path: Path to the Unix domain socket to listen on.
        app: Application state to serve. Created (with the X11 mirror, if
            available) when None.

    Raises:
        SocketInUseError: If another daemon already serves socket_path.
    """
    prepare_socket_path(socket_path)
    if app is None:
        app = create_app_state()

    shutdown_requested = asyncio.Event()
    loop = asyncio.get_running_loop()
    loop.add_signal_handler(signal.SIGINT, shutdown_requested.set)
    loop.add_signal_handler(signal.SIGTERM, shutdown_requested.set)

    try:
        await serve(socket_path, app, shutdown_requested)
    finally:
        cleanup_socket(socket_path)


async def serve(
    socket_path: str, app: AppState, shutdown_requested: asyncio.Event
) -> None:
    """Serve clients on socket_path until shutdown_requested is set.

    Args:
        socket_path: Path to the Unix domain socket to listen on.
        app: The application state shared by all connections.
        shutdown_requested: Event signaling graceful shutdown.
    """
    loop = asyncio.get_running_loop()
    mirror = app.clipboard.system_clipboard
    if mirror is not None:
        loop.add_reader(mirror.fileno(), _serve_selection_requests, app)

    server = await asyncio.start_unix_server(
        lambda r, w: handle_client(app, r, w),
        path=socket_path,
    )
    print_startup_message(socket_path)
    try:
        async with server:
            await shutdown_requested.wait()
            logger.debug("Shutdown requested")
    finally:
        if mirror is not None:
            loop.remove_reader(mirror.fileno())


def _serve_selection_requests(app: AppState) -> None:
    """Answer pending X11 selection requests for the mirrored text."""
    mirror = app.clipboard.system_clipboard
    if mirror is None:
        return
    try:
        mirror.serve_pending_requests()
    except Exception as e:
        logger.error("Failed to serve system clipboard requests: %s", e)
