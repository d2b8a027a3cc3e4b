#!/usr/bin/env python3
"""Daemon connection with retry for pexplorer clients.

A daemon that was just started may not be listening yet, so connecting is
retried with exponential backoff using tenacity, for a bounded number of
attempts. Only the connection is retried; commands are never re-sent.
"""

from __future__ import annotations

import asyncio
import logging

from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from pexplorer.constants import CONNECT_ATTEMPTS, INITIAL_WAIT, MAX_WAIT, WAIT_MULTIPLIER

logger = logging.getLogger(__name__)


async def connect_to_daemon(
    socket_path: str,
) -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
    """Connect to the pexplorer daemon via Unix domain socket.

    Args:
        socket_path: Path to the Unix domain socket.

    Returns:
        Tuple of (StreamReader, StreamWriter) for the connection.

    Raises:
        ConnectionError: If connection fails (socket not found, refused, etc).
    """
    try:
        return await asyncio.open_unix_connection(socket_path)
    except OSError as e:
        raise ConnectionError(f"Failed to connect to {socket_path}: {e}") from e


@retry(
    wait=wait_exponential(
        multiplier=WAIT_MULTIPLIER,
        min=INITIAL_WAIT,
        max=MAX_WAIT,
    ),
    retry=retry_if_exception_type((ConnectionError, OSError)),
    stop=stop_after_attempt(CONNECT_ATTEMPTS),
    reraise=True,
)
async def connect_with_retry(
    socket_path: str,
) -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
    """Connect to the daemon, retrying failed attempts with backoff.

    Args:
        socket_path: Path to the Unix domain socket.

    Returns:
        Tuple of (StreamReader, StreamWriter) for the connection.

    Raises:
        ConnectionError: If every attempt fails.
    """
    logger.debug("Connecting to daemon at %s", socket_path)
    try:
        return await connect_to_daemon(socket_path)
    except ConnectionError:
        logger.warning("Connection to %s failed, will retry", socket_path)
        raise
