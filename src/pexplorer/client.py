#!/usr/bin/env python3
"""Client side of the pexplorer daemon protocol.

send_request() runs one command on the daemon: it connects (see
client_retry.py), sends the request, waits for the response, says goodbye
and closes the connection.
"""

from __future__ import annotations

import logging
from typing import Any

from pexplorer.client_retry import connect_with_retry
from pexplorer.command_result import CommandResult
from pexplorer.protocol import decode_response, encode_request, read_netstring, send_goodbye

logger = logging.getLogger(__name__)


async def send_request(
    socket_path: str, command: str, args: dict[str, Any] | None = None
) -> CommandResult:
    """Run one command on the daemon and return its result.

    Args:
        socket_path: Path to the daemon's Unix domain socket.
        command: Command name.
        args: Keyword arguments for the command.

    Returns:
        The command's result as reported by the daemon.

    Raises:
        ConnectionError: If the daemon cannot be reached.
        ProtocolError: If the daemon's reply is malformed or missing.
    """
    reader, writer = await connect_with_retry(socket_path)
    try:
        writer.write(encode_request(command, args))
        await writer.drain()
        response = decode_response(await read_netstring(reader))
        logger.debug("Command %s returned ok=%s", command, response.ok)
        await send_goodbye(writer)
        return response
    finally:
        writer.close()
        await writer.wait_closed()
