"""
Exceptions raised by filtertree.

Editing operations are total over well-formed trees and in-range paths. Anything
outside that domain is a caller contract violation and fails fast with one of
the errors below instead of producing a best-effort tree.

Every error carries a stable `error_type` and optional structured `details`, so
callers (the CLI among them) can report failures without inspecting messages.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, ClassVar


class FilterTreeError(Exception):
    """Base class for all filtertree errors."""

    error_type: ClassVar[str] = "validation_error"

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint

    def __str__(self) -> str:
        return self.message

    @property
    def details(self) -> dict[str, Any] | None:
        return None


class InvalidPathError(FilterTreeError):
    """A path or operand index does not address the current tree."""

    error_type = "invalid_path"

    def __init__(
        self,
        message: str,
        *,
        path: Sequence[int] | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.path = list(path) if path is not None else None

    def __str__(self) -> str:
        if self.path is not None:
            return f"{self.message} (path: {self.path})"
        return self.message

    @property
    def details(self) -> dict[str, Any] | None:
        return {"path": self.path} if self.path is not None else None


class InvalidClauseError(FilterTreeError):
    """A value is not a well-formed clause for the requested operation."""

    error_type = "invalid_clause"

    def __init__(self, message: str, *, value: Any = None, hint: str | None = None) -> None:
        super().__init__(message, hint=hint)
        self.value = value
