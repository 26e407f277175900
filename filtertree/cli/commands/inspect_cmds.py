from __future__ import annotations

from filtertree import filters
from filtertree.nested import iter_filter_paths

from ..context import CLIContext
from ..options import filter_command
from ..runner import CommandOutput, run_command
from ._loading import load_filter


@filter_command("show")
def show_cmd(ctx: CLIContext, filter_json: str) -> None:
    """Render the expression as a tree, labelling every clause with its path."""

    def body() -> CommandOutput:
        return CommandOutput(data={"filter": load_filter(ctx, filter_json)})

    run_command(ctx, "show", body)


@filter_command("list")
def list_cmd(ctx: CLIContext, filter_json: str) -> None:
    """List the top-level filters being combined."""

    def body() -> CommandOutput:
        return CommandOutput(data={"filters": filters.get_filters(load_filter(ctx, filter_json))})

    run_command(ctx, "list", body)


@filter_command("paths")
def paths_cmd(ctx: CLIContext, filter_json: str) -> None:
    """List every clause together with the path that addresses it."""

    def body() -> CommandOutput:
        current = load_filter(ctx, filter_json)
        rows = [{"path": path, "clause": clause} for path, clause in iter_filter_paths(current)]
        return CommandOutput(data={"paths": rows})

    run_command(ctx, "paths", body)


@filter_command("can-add", filter_required=False)
def can_add_cmd(ctx: CLIContext, filter_json: str) -> None:
    """Report whether another filter may be added (exit code 1 when not)."""

    def body() -> CommandOutput:
        can_add = filters.can_add_filter(load_filter(ctx, filter_json))
        return CommandOutput(data={"canAdd": can_add}, exit_code=0 if can_add else 1)

    run_command(ctx, "can-add", body)
