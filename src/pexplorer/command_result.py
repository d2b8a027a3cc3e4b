#!/usr/bin/env python3
"""Result value returned by every command.

A command either succeeds with a JSON-serializable result or fails with a
human-readable error string. No structured error codes are exposed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one command.

    Attributes:
        ok: True on success.
        result: The success value (None for commands with no output).
        error: The error message when ok is False.
    """

    ok: bool
    result: Any = None
    error: str | None = None

    @classmethod
    def success(cls, result: Any = None) -> CommandResult:
        return cls(ok=True, result=result)

    @classmethod
    def failure(cls, error: str) -> CommandResult:
        return cls(ok=False, error=error)

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            return {"ok": True, "result": self.result}
        return {"ok": False, "error": self.error}
