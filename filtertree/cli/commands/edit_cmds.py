from __future__ import annotations

import click

from filtertree import filters
from filtertree.exceptions import InvalidClauseError
from filtertree.nested import get_nested

from ..context import CLIContext
from ..errors import UsageError
from ..options import filter_command, path_option
from ..runner import CommandOutput, run_command
from ._loading import load_clause, load_filter


@filter_command("add")
@click.argument("clause_json", metavar="CLAUSE")
def add_cmd(ctx: CLIContext, filter_json: str, clause_json: str) -> None:
    """Append CLAUSE to the expression."""

    def body() -> CommandOutput:
        current = load_filter(ctx, filter_json)
        clause = load_clause(ctx, clause_json)
        warnings: tuple[str, ...] = ()
        if not filters.can_add_filter(current):
            warnings = ("The last filter has unset arguments.",)
        added = filters.add_filter(current, clause, policies=ctx.policies)
        return CommandOutput(data={"filter": added}, warnings=warnings)

    run_command(ctx, "add", body)


@filter_command("update")
@click.argument("clause_json", metavar="CLAUSE")
@path_option
def update_cmd(ctx: CLIContext, filter_json: str, clause_json: str, path: list[int]) -> None:
    """Replace the clause at --path with CLAUSE."""

    def body() -> CommandOutput:
        current = load_filter(ctx, filter_json)
        clause = load_clause(ctx, clause_json)
        updated = filters.update_filter(current, path, clause, policies=ctx.policies)
        return CommandOutput(data={"filter": updated})

    run_command(ctx, "update", body)


@filter_command("remove")
@path_option
def remove_cmd(ctx: CLIContext, filter_json: str, path: list[int]) -> None:
    """Remove the clause at --path."""

    def body() -> CommandOutput:
        current = load_filter(ctx, filter_json)
        return CommandOutput(
            data={"filter": filters.remove_filter(current, path, policies=ctx.policies)}
        )

    run_command(ctx, "remove", body)


@filter_command("toggle")
@click.argument("operand_index", type=int)
@path_option
def toggle_cmd(ctx: CLIContext, filter_json: str, operand_index: int, path: list[int]) -> None:
    """Flip AND/OR between operands OPERAND_INDEX and OPERAND_INDEX+1 of the clause at --path."""

    def body() -> CommandOutput:
        current = load_filter(ctx, filter_json)
        toggled = filters.toggle_compound_filter_operator(
            current, operand_index, path, policies=ctx.policies
        )
        return CommandOutput(data={"filter": toggled})

    run_command(ctx, "toggle", body)


@filter_command("clear", filter_required=False)
def clear_cmd(ctx: CLIContext, filter_json: str) -> None:
    """Drop every filter."""

    def body() -> CommandOutput:
        return CommandOutput(data={"filter": filters.clear_filters(load_filter(ctx, filter_json))})

    run_command(ctx, "clear", body)


@filter_command("options")
@path_option
@click.option(
    "--set",
    "options_json",
    type=str,
    default=None,
    help="Replace the options of the clause with this JSON object ('{}' removes them).",
)
def options_cmd(
    ctx: CLIContext, filter_json: str, path: list[int], options_json: str | None
) -> None:
    """Show or replace the options of the simple clause at --path."""

    def body() -> CommandOutput:
        current = load_filter(ctx, filter_json)
        if current is None or current == []:
            raise UsageError("There is no filter to read options from.", argument="FILTER")
        clause = get_nested(current, path)
        if filters.is_compound_filter(clause):
            raise InvalidClauseError("Compound clauses carry no options", value=clause)

        if options_json is None:
            return CommandOutput(data={"options": filters.get_filter_options(clause)})

        options = ctx.load_json(options_json, name="--set")
        if not isinstance(options, dict):
            raise UsageError("--set must be a JSON object.", argument="--set")
        updated_clause = filters.set_filter_options(clause, options)
        updated = filters.update_filter(current, path, updated_clause, policies=ctx.policies)
        return CommandOutput(data={"filter": updated})

    run_command(ctx, "options", body)
