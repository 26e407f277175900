from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from typing import Any

from rich.console import Console, Group
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from filtertree.clauses import Clause, Compound, Predicate, SegmentRef, parse_filter

from .results import CommandResult, ErrorInfo

_ERROR_TITLES = {
    "usage_error": "Usage error",
    "invalid_path": "Invalid path",
    "invalid_clause": "Invalid clause",
    "validation_error": "Validation error",
}


@dataclass(frozen=True, slots=True)
class RenderSettings:
    output: str
    verbosity: int = 0
    quiet: bool = False


def _dumps(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def _clause_label(clause: Clause) -> Text:
    if isinstance(clause, Compound):
        return Text(clause.connective.upper(), style="bold cyan")
    if isinstance(clause, SegmentRef):
        label = Text("segment ", style="magenta")
        label.append(_dumps(clause.segment_id))
    else:
        assert isinstance(clause, Predicate)
        label = Text(clause.kind, style="bold")
        for argument in clause.arguments:
            label.append(" ")
            label.append(_dumps(argument), style="red" if argument is None else "")
    if clause.options:
        label.append(f"  {_dumps(clause.options)}", style="dim")
    return label


def filter_tree(clause: Clause | None) -> Tree:
    """Build a rich tree for a parsed expression, labelling each node with its path."""
    if clause is None:
        return Tree(Text("(no filter)", style="dim"))

    def _add(node: Tree | None, clause: Clause, path: list[int]) -> Tree:
        label = Text(f"[{'.'.join(str(i) for i in path)}] ", style="dim")
        label.append_text(_clause_label(clause))
        branch = Tree(label) if node is None else node.add(label)
        if isinstance(clause, Compound):
            for index, operand in enumerate(clause.operands, start=1):
                _add(branch, operand, [*path, index])
        return branch

    return _add(None, clause, [])


def _count_incomplete(clause: Clause | None) -> int:
    if clause is None:
        return 0
    return sum(
        1 for node in clause.walk() if isinstance(node, Predicate) and not node.is_complete
    )


def _render_human_data(data: Any) -> Any:
    if not isinstance(data, dict):
        return Text(_dumps(data))

    if "filter" in data:
        clause = parse_filter(data["filter"])
        parts: list[Any] = [filter_tree(clause)]
        incomplete = _count_incomplete(clause)
        if incomplete:
            noun = "clause" if incomplete == 1 else "clauses"
            parts.append(Text(f"{incomplete} {noun} with unset arguments", style="yellow"))
        parts.append(Text(_dumps(data["filter"]), style="dim"))
        return Group(*parts)

    if "paths" in data:
        table = Table(show_header=True, header_style="bold")
        table.add_column("path")
        table.add_column("clause")
        if not data["paths"]:
            table.add_row("", "No filters")
        for row in data["paths"]:
            table.add_row(".".join(str(i) for i in row["path"]), Text(_dumps(row["clause"])))
        return table

    if "filters" in data:
        table = Table(show_header=True, header_style="bold")
        table.add_column("#")
        table.add_column("filter")
        if not data["filters"]:
            table.add_row("", "No filters")
        for index, clause in enumerate(data["filters"], start=1):
            table.add_row(str(index), Text(_dumps(clause)))
        return table

    if "canAdd" in data:
        return Text("yes" if data["canAdd"] else "no", style="bold")

    if "options" in data:
        return Text(_dumps(data["options"]))

    return Text(_dumps(data))


def _render_error(error: ErrorInfo, settings: RenderSettings) -> None:
    stderr = Console(file=sys.stderr, force_terminal=False)
    title = _ERROR_TITLES.get(error.type, "Error")
    stderr.print(f"{title}: {error.message}", markup=False)
    if settings.quiet:
        return
    if error.hint:
        stderr.print(f"Hint: {error.hint}", markup=False)
    if error.details and settings.verbosity >= 1:
        stderr.print(_dumps(error.details), markup=False)


def render_result(result: CommandResult, *, settings: RenderSettings) -> None:
    """Write `result` as a JSON envelope, or as a tree/table on stdout and errors on stderr."""
    if settings.output == "json":
        sys.stdout.write(_dumps(result.model_dump(by_alias=True, mode="json")) + "\n")
    elif result.error is not None:
        _render_error(result.error, settings)
    else:
        Console(file=sys.stdout, force_terminal=False).print(_render_human_data(result.data))
