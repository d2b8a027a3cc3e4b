#!/usr/bin/env python3
"""Tests for daemon mode implementation."""
import asyncio
import logging
import os
import signal
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from pexplorer.app_state import AppState, create_app_state
from pexplorer.clipboard_state import ClipboardState
from pexplorer.server import _serve_selection_requests, run_server, serve


def test_serve_selection_requests_without_mirror(app_state: AppState) -> None:
    """Test nothing happens when no mirror is configured."""
    _serve_selection_requests(app_state)


def test_serve_selection_requests_logs_failure(caplog: pytest.LogCaptureFixture) -> None:
    """Test a failing mirror is logged and does not escape the loop callback."""
    mirror = MagicMock()
    mirror.serve_pending_requests.side_effect = RuntimeError("display gone")
    app = AppState(clipboard=ClipboardState(system_clipboard=mirror))

    with caplog.at_level(logging.ERROR, logger="pexplorer.server"):
        _serve_selection_requests(app)

    assert "Failed to serve system clipboard requests" in caplog.text


def test_create_app_state_without_mirror() -> None:
    """Test mirror=False never touches X11."""
    with patch("pexplorer.app_state.open_system_clipboard") as opener:
        app = create_app_state(mirror=False)
    opener.assert_not_called()
    assert app.clipboard.system_clipboard is None


@pytest.mark.asyncio
async def test_serve_registers_mirror_reader(temp_socket_path: Path) -> None:
    """Test the mirror's fd is watched while serving and released after."""
    mirror = MagicMock()
    mirror.fileno.return_value = 99
    app = AppState(clipboard=ClipboardState(system_clipboard=mirror))
    shutdown_requested = asyncio.Event()
    loop = asyncio.get_running_loop()

    with patch.object(loop, "add_reader") as add_reader, \
        patch.object(loop, "remove_reader") as remove_reader:
        task = asyncio.create_task(serve(str(temp_socket_path), app, shutdown_requested))
        await asyncio.sleep(0.05)
        add_reader.assert_called_once_with(99, _serve_selection_requests, app)
        shutdown_requested.set()
        await asyncio.wait_for(task, timeout=5)
        remove_reader.assert_called_once_with(99)


@pytest.mark.asyncio
async def test_run_server_removes_socket_on_sigterm(
    temp_socket_path: Path, app_state: AppState
) -> None:
    """Test SIGTERM ends run_server and the socket file is cleaned up."""
    socket_path = str(temp_socket_path)
    task = asyncio.create_task(run_server(socket_path, app_state))
    for _ in range(200):
        if temp_socket_path.exists():
            break
        await asyncio.sleep(0.01)
    assert temp_socket_path.exists()

    os.kill(os.getpid(), signal.SIGTERM)
    await asyncio.wait_for(task, timeout=5)

    assert not temp_socket_path.exists()
    loop = asyncio.get_running_loop()
    loop.remove_signal_handler(signal.SIGINT)
    loop.remove_signal_handler(signal.SIGTERM)
