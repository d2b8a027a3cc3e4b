#!/usr/bin/env python3
"""
Netstring-framed JSON messages between the CLI and the daemon.

Netstrings provide a simple, reliable framing format for a stream
connection. Format: <length>:<content>, where length is ASCII decimal
digits, followed by a colon, the raw content bytes, and a trailing comma.

Example: "12:Hello world!," encodes the 12-byte string "Hello world!".

Each frame carries one UTF-8 JSON object:
- request: {"command": "<name>", "args": {...}}
- response: {"ok": true, "result": ...} or {"ok": false, "error": "..."}

The empty netstring "0:," is a goodbye sent before closing a connection.
"""
import asyncio
import json
from typing import Any

from pexplorer.command_result import CommandResult

# Maximum size of one message in bytes (10 MB).
# Prevents memory exhaustion from extremely large messages.
MAX_CONTENT_SIZE: int = 10485760

# Maximum digits in the length field (8 digits allows up to 99999999 bytes).
# Enforced during parsing to prevent denial of service from huge length values.
MAX_LENGTH_DIGITS: int = 8

# Goodbye message: empty netstring signaling clean shutdown.
GOODBYE_MESSAGE: bytes = b"0:,"

# Timeout for goodbye message drain in seconds.
GOODBYE_DRAIN_TIMEOUT: float = 2.0


class ProtocolError(Exception):
    """
    Exception raised for protocol-level errors.

    Raised when netstring parsing fails due to invalid format, size
    violations, connection issues, or when a frame is not a valid message.
    """

    pass


def encode_netstring(data: bytes) -> bytes:
    """
    Encode raw bytes as a netstring.

    Args:
        data: Raw content bytes to encode.

    Returns:
        Netstring-encoded bytes in format "<length>:<content>,".
    """
    length = len(data)
    return f"{length}:".encode("ascii") + data + b","


async def read_netstring(reader: asyncio.StreamReader) -> bytes:
    """
    Read and decode a netstring from an async stream.

    Args:
        reader: asyncio StreamReader to read from.

    Returns:
        Decoded content bytes.

    Raises:
        ProtocolError: On invalid format, size violation, or connection closed.
    """
    length_bytes = b""
    while len(length_bytes) < MAX_LENGTH_DIGITS + 1:
        byte = await reader.read(1)
        if not byte:
            raise ProtocolError("Connection closed while reading length field")
        if byte == b":":
            break
        if not byte.isdigit():
            raise ProtocolError(f"Invalid character in length field: {byte!r}")
        length_bytes += byte
    else:
        raise ProtocolError("Length field exceeds maximum digits")
    if not length_bytes:
        raise ProtocolError("Empty length field")
    length = int(length_bytes.decode("ascii"))
    if length > MAX_CONTENT_SIZE:
        raise ProtocolError(f"Content size {length} exceeds limit {MAX_CONTENT_SIZE}")
    try:
        content = await reader.readexactly(length)
    except asyncio.IncompleteReadError as e:
        raise ProtocolError(f"Connection closed after {e.partial!r} bytes") from e
    comma = await reader.read(1)
    if comma != b",":
        raise ProtocolError(f"Expected comma terminator, got {comma!r}")
    return content


def _decode_object(data: bytes) -> dict[str, Any]:
    try:
        message = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise ProtocolError(f"Invalid JSON message: {e}") from e
    if not isinstance(message, dict):
        raise ProtocolError("Message must be a JSON object")
    return message


def encode_request(command: str, args: dict[str, Any] | None = None) -> bytes:
    """Encode a command request as a netstring frame."""
    body = json.dumps({"command": command, "args": args or {}})
    return encode_netstring(body.encode("utf-8"))


def decode_request(data: bytes) -> tuple[str, dict[str, Any]]:
    """
    Decode the content of a request frame.

    Returns:
        Tuple of (command, args).

    Raises:
        ProtocolError: If the content is not a well-formed request.
    """
    message = _decode_object(data)
    command = message.get("command")
    args = message.get("args", {})
    if not isinstance(command, str):
        raise ProtocolError("Request is missing a command name")
    if not isinstance(args, dict):
        raise ProtocolError("Request args must be a JSON object")
    return command, args


def encode_response(response: CommandResult) -> bytes:
    """Encode a command result as a netstring frame."""
    body = json.dumps(response.to_dict())
    return encode_netstring(body.encode("utf-8"))


def decode_response(data: bytes) -> CommandResult:
    """
    Decode the content of a response frame.

    Raises:
        ProtocolError: If the content is not a well-formed response.
    """
    message = _decode_object(data)
    ok = message.get("ok")
    if ok is True:
        return CommandResult.success(message.get("result"))
    if ok is False and isinstance(message.get("error"), str):
        return CommandResult.failure(message["error"])
    raise ProtocolError("Response must carry ok=true or ok=false with an error")


async def send_goodbye(writer: asyncio.StreamWriter) -> None:
    """
    Send goodbye message to signal clean shutdown.

    Errors are silently ignored since the connection may already be dead.

    Args:
        writer: asyncio StreamWriter to send goodbye on.
    """
    try:
        writer.write(GOODBYE_MESSAGE)
        await asyncio.wait_for(writer.drain(), timeout=GOODBYE_DRAIN_TIMEOUT)
    except (OSError, asyncio.TimeoutError):
        pass


def is_goodbye(content: bytes) -> bool:
    """
    Check if content is a goodbye message (empty bytes).

    Args:
        content: Decoded netstring content to check.

    Returns:
        True if content is empty bytes, False otherwise.
    """
    return content == b""
