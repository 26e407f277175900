from __future__ import annotations

from typing import Any

from filtertree.exceptions import FilterTreeError


class UsageError(FilterTreeError):
    """Command input that cannot be turned into a filter expression."""

    error_type = "usage_error"

    def __init__(
        self,
        message: str,
        *,
        argument: str | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.argument = argument

    @property
    def details(self) -> dict[str, Any] | None:
        return {"argument": self.argument} if self.argument is not None else None
