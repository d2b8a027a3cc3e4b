#!/usr/bin/env python3
"""
Unit tests for ClipboardState queries and the content kinds.
"""
from pathlib import Path

import pytest

from pexplorer.clipboard_content import (
    EMPTY,
    ClipboardOperation,
    Empty,
    MultipleItems,
    SingleFile,
    TextPayload,
)
from pexplorer.clipboard_state import ClipboardState


def test_initial_state_is_empty_with_no_operation() -> None:
    """Test a new state holds Empty and NONE."""
    state = ClipboardState()
    assert isinstance(state.content, Empty)
    assert state.operation is ClipboardOperation.NONE
    assert state.system_clipboard is None


def test_has_content_false_when_empty() -> None:
    """Test has_content is False for Empty."""
    assert ClipboardState().has_content() is False


@pytest.mark.parametrize(
    "content",
    [
        SingleFile(Path("/tmp/x")),
        TextPayload(""),
        MultipleItems((Path("/a"), Path("/b"))),
    ],
)
def test_has_content_true_for_any_staged_kind(content) -> None:
    """Test has_content is True for every non-Empty kind, even empty text."""
    state = ClipboardState(content=content, operation=ClipboardOperation.COPY)
    assert state.has_content() is True


def test_current_operation_returns_snapshot() -> None:
    """Test current_operation returns the operation field."""
    state = ClipboardState(content=TextPayload("x"), operation=ClipboardOperation.CUT)
    assert state.current_operation() is ClipboardOperation.CUT


def test_queries_release_lock() -> None:
    """Test the queries do not leave the lock held."""
    state = ClipboardState()
    state.has_content()
    state.current_operation()
    assert state.lock.acquire(blocking=False)
    state.lock.release()


def test_content_kinds_are_frozen() -> None:
    """Test staged content values cannot be mutated in place."""
    content = TextPayload("hello")
    with pytest.raises(AttributeError):
        content.text = "changed"  # type: ignore[misc]


def test_empty_singleton_equals_new_empty() -> None:
    """Test EMPTY compares equal to any Empty instance."""
    assert EMPTY == Empty()
