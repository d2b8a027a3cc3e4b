#!/usr/bin/env python3
"""Pytest fixtures for pexplorer tests.

Provides fixtures for clipboard and application state, a small source tree
to copy and move around, and temporary socket paths.
"""

import shutil
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from pexplorer.app_state import AppState
from pexplorer.clipboard_state import ClipboardState


@pytest.fixture
def clipboard_state() -> ClipboardState:
    """Create a fresh ClipboardState without a system clipboard mirror."""
    return ClipboardState()


@pytest.fixture
def app_state(clipboard_state: ClipboardState) -> AppState:
    """Create an AppState around the test's clipboard state."""
    return AppState(clipboard=clipboard_state)


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """Create src/{a.txt, sub/b.txt} and return the src directory."""
    src = tmp_path / "src"
    (src / "sub").mkdir(parents=True)
    (src / "a.txt").write_bytes(b"alpha\n")
    (src / "sub" / "b.txt").write_bytes(b"bravo\n")
    return src


@pytest.fixture
def dest_dir(tmp_path: Path) -> Path:
    """Create an empty destination directory."""
    dest = tmp_path / "dest"
    dest.mkdir()
    return dest


@pytest.fixture
def temp_socket_path() -> Generator[Path, None, None]:
    """Provide a short temporary path for Unix domain socket testing.

    Kept under the system temp dir because socket paths are limited to
    about 100 bytes.
    """
    socket_dir = Path(tempfile.mkdtemp(prefix="pexp-"))
    yield socket_dir / "test.sock"
    shutil.rmtree(socket_dir, ignore_errors=True)
