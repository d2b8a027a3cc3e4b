#!/usr/bin/env python3
"""Daemon socket utilities for pexplorer.

This module provides utility functions for managing the Unix domain socket
the daemon listens on:
- Refusing to start over a live daemon, clearing stale socket files
- Printing the startup message
- Socket cleanup on shutdown
"""

from __future__ import annotations

import os
import socket
import sys
from pathlib import Path

from pexplorer.constants import SOCKET_ENVVAR
from pexplorer.errors import PexplorerError


class SocketInUseError(PexplorerError):
    """Raised when another daemon is already serving the socket path."""


def prepare_socket_path(socket_path: str) -> None:
    """Make socket_path ready to bind.

    Creates the parent directory if needed. If a socket file is already
    there, probes it: a refused connection means it is stale and it is
    removed; an accepted one means a daemon is running.

    Args:
        socket_path: Path to the Unix domain socket file.

    Raises:
        SocketInUseError: If a live daemon answers on socket_path, or the
            path cannot be probed.
    """
    Path(socket_path).parent.mkdir(parents=True, exist_ok=True)
    if not os.path.exists(socket_path):
        return

    probe = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    try:
        probe.connect(socket_path)
    except ConnectionRefusedError:
        os.unlink(socket_path)
        return
    except OSError as e:
        raise SocketInUseError(f"Cannot access socket {socket_path}: {e}") from e
    finally:
        probe.close()
    raise SocketInUseError(f"Socket already in use by active daemon: {socket_path}")


def print_startup_message(socket_path: str) -> None:
    """Print daemon startup message to stderr.

    Args:
        socket_path: Path to the Unix domain socket.
    """
    print(f"Listening on {socket_path}", file=sys.stderr)
    print(f"Point clients at it with: export {SOCKET_ENVVAR}={socket_path}",
        file=sys.stderr)


def cleanup_socket(socket_path: str) -> None:
    """Remove the socket file if it is still there.

    Args:
        socket_path: Path to the Unix domain socket file to remove.
    """
    try:
        os.unlink(socket_path)
    except FileNotFoundError:
        pass
