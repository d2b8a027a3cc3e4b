#!/usr/bin/env python3
"""Tunable constants for pexplorer.

These cover the names of files created when pasting raw content and the
client's reconnection behavior when talking to the daemon.
"""

# File written into the destination when pasting staged text.
PASTED_TEXT_NAME: str = "clipboard_content.txt"

# File written into the destination when pasting staged binary content.
PASTED_BINARY_NAME: str = "clipboard_content.bin"

# Environment variable consulted for the daemon socket path.
SOCKET_ENVVAR: str = "PEXPLORER_SOCKET"

# Retry parameters for exponential backoff when connecting to the daemon.
# Initial delay between connection attempts in seconds.
INITIAL_WAIT: float = 0.1

# Maximum delay between connection attempts in seconds.
MAX_WAIT: float = 2.0

# Multiplier for exponential backoff (delay = initial * multiplier^attempt).
WAIT_MULTIPLIER: float = 2.0

# Connection attempts before giving up on the daemon.
CONNECT_ATTEMPTS: int = 5
