from __future__ import annotations

from typing import Any

from filtertree.clauses import parse_clause, parse_filter

from ..context import CLIContext


def load_filter(ctx: CLIContext, raw: str) -> Any:
    """Load and validate the current expression; `null` and `[]` mean no filter."""
    value = ctx.load_json(raw, name="FILTER")
    parse_filter(value)
    return value


def load_clause(ctx: CLIContext, raw: str, *, name: str = "CLAUSE") -> Any:
    value = ctx.load_json(raw, name=name)
    parse_clause(value)
    return value
