#!/usr/bin/env python3
"""Daemon client connection handler.

Each connection carries a sequence of requests, answered in order, until
the client sends goodbye or closes the stream. Commands run in a worker
thread so the event loop keeps serving other connections (and X11
selection requests) while a long paste holds the clipboard lock.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from pexplorer.commands import dispatch
from pexplorer.command_result import CommandResult
from pexplorer.protocol import (
    ProtocolError,
    decode_request,
    encode_response,
    is_goodbye,
    read_netstring,
)

if TYPE_CHECKING:
    from pexplorer.app_state import AppState

logger = logging.getLogger(__name__)


async def handle_client(
    app: AppState,
    reader: asyncio.StreamReader,
    writer: asyncio.StreamWriter,
) -> None:
    """Serve requests from one client connection.

    A malformed request gets an error response and the connection stays
    open; a framing error or lost connection ends it.

    Args:
        app: The application state shared by all connections.
        reader: The asyncio StreamReader for the socket connection.
        writer: The asyncio StreamWriter for the socket connection.
    """
    logger.debug("Client connected")
    try:
        while True:
            data = await read_netstring(reader)
            if is_goodbye(data):
                logger.debug("Client said goodbye")
                break
            response = await _run_request(app, data)
            writer.write(encode_response(response))
            await writer.drain()
    except ProtocolError as e:
        if not reader.at_eof():
            logger.error("Protocol error: %s", e)
        else:
            logger.debug("Client disconnected")
    except ConnectionError as e:
        logger.error("Connection error: %s", e)
    finally:
        writer.close()
        try:
            await writer.wait_closed()
        except ConnectionError:
            pass


async def _run_request(app: AppState, data: bytes) -> CommandResult:
    try:
        command, args = decode_request(data)
    except ProtocolError as e:
        logger.warning("Rejected malformed request: %s", e)
        return CommandResult.failure(f"Malformed request: {e}")
    logger.info("Request %s", command)
    return await asyncio.to_thread(dispatch, app, command, args)
