from __future__ import annotations

import click
import rich_click

import filtertree
from filtertree.policies import FlattenPolicy

from .context import CLIContext
from .logging import configure_logging, restore_logging


@click.group(
    name="filtertree",
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
    cls=rich_click.RichGroup,
)
@click.option(
    "--output",
    type=click.Choice(["table", "json"]),
    default="table",
)
@click.option("--json", "json_flag", is_flag=True, help="Alias for --output json.")
@click.option("-q", "--quiet", is_flag=True, help="Suppress non-essential stderr output.")
@click.option("-v", "verbose", count=True, help="Increase verbosity (-v, -vv).")
@click.option(
    "--flatten",
    type=click.Choice([policy.value for policy in FlattenPolicy]),
    default=FlattenPolicy.TOGGLE_ONLY.value,
    show_default=True,
    envvar="FILTERTREE_FLATTEN",
    help="Where same-connective nesting is flattened.",
)
@click.version_option(version=filtertree.__version__, prog_name="filtertree")
@click.pass_context
def cli(
    click_ctx: click.Context,
    *,
    output: str,
    json_flag: bool,
    quiet: bool,
    verbose: int,
    flatten: str,
) -> None:
    if click_ctx.invoked_subcommand is None:
        click.echo(click_ctx.get_help())
        raise click.exceptions.Exit(0)

    out = "json" if json_flag else output
    click_ctx.obj = CLIContext(
        output=out,  # type: ignore[arg-type]
        quiet=quiet,
        verbosity=verbose,
        flatten=FlattenPolicy(flatten),
    )

    previous_logging = configure_logging(verbosity=verbose)
    click_ctx.call_on_close(lambda: restore_logging(previous_logging))


# Register commands
from .commands.edit_cmds import add_cmd as _add_cmd  # noqa: E402
from .commands.edit_cmds import clear_cmd as _clear_cmd  # noqa: E402
from .commands.edit_cmds import options_cmd as _options_cmd  # noqa: E402
from .commands.edit_cmds import remove_cmd as _remove_cmd  # noqa: E402
from .commands.edit_cmds import toggle_cmd as _toggle_cmd  # noqa: E402
from .commands.edit_cmds import update_cmd as _update_cmd  # noqa: E402
from .commands.inspect_cmds import can_add_cmd as _can_add_cmd  # noqa: E402
from .commands.inspect_cmds import list_cmd as _list_cmd  # noqa: E402
from .commands.inspect_cmds import paths_cmd as _paths_cmd  # noqa: E402
from .commands.inspect_cmds import show_cmd as _show_cmd  # noqa: E402

cli.add_command(_show_cmd)
cli.add_command(_list_cmd)
cli.add_command(_paths_cmd)
cli.add_command(_can_add_cmd)
cli.add_command(_add_cmd)
cli.add_command(_update_cmd)
cli.add_command(_remove_cmd)
cli.add_command(_toggle_cmd)
cli.add_command(_clear_cmd)
cli.add_command(_options_cmd)
