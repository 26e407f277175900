from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from typing import Any, Literal

from filtertree.policies import FlattenPolicy, Policies

from .errors import UsageError
from .render import RenderSettings

OutputFormat = Literal["table", "json"]


@dataclass
class CLIContext:
    """Per-invocation state shared by the group and its commands."""

    output: OutputFormat
    quiet: bool
    verbosity: int
    flatten: FlattenPolicy = FlattenPolicy.TOGGLE_ONLY

    _stdin_cache: str | None = field(default=None, repr=False)

    @property
    def policies(self) -> Policies:
        return Policies(flatten=self.flatten)

    @property
    def render_settings(self) -> RenderSettings:
        return RenderSettings(output=self.output, quiet=self.quiet, verbosity=self.verbosity)

    def read_stdin(self) -> str:
        # Several arguments may name '-'; stdin can only be consumed once.
        if self._stdin_cache is None:
            self._stdin_cache = sys.stdin.read()
        return self._stdin_cache

    def load_json(self, raw: str, *, name: str) -> Any:
        text = self.read_stdin() if raw == "-" else raw
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise UsageError(
                f"Invalid JSON for {name}: {e}",
                argument=name,
                hint="Quote the JSON for your shell, or pass '-' to read it from stdin.",
            ) from None
