#!/usr/bin/env python3
"""Clipboard coordinator.

This module re-exports the clipboard components from submodules for
convenient imports. The actual implementations are in:
- clipboard_content: ClipboardOperation and the content kinds
- clipboard_state: ClipboardState with has_content, current_operation
- clipboard_stage: stage_path, stage_cut, stage_content, stage_text,
  stage_multiple, stage_cut_multiple
- clipboard_paste: paste
"""

from pexplorer.clipboard_content import ClipboardContent, ClipboardOperation
from pexplorer.clipboard_paste import paste
from pexplorer.clipboard_stage import (
    stage_content,
    stage_cut,
    stage_cut_multiple,
    stage_multiple,
    stage_path,
    stage_text,
)
from pexplorer.clipboard_state import ClipboardState

__all__ = [
    "ClipboardContent",
    "ClipboardOperation",
    "ClipboardState",
    "paste",
    "stage_content",
    "stage_cut",
    "stage_cut_multiple",
    "stage_multiple",
    "stage_path",
    "stage_text",
]
