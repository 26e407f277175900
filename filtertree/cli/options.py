from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import click
import rich_click

from .context import CLIContext

F = TypeVar("F", bound=Callable[..., object])

_FILTER_EPILOG = "FILTER is the current expression as JSON, or '-' to read it from stdin."


def _override_output(ctx: click.Context, param: click.Parameter, value: Any) -> None:
    # Subcommand flags win over the group's --output/--json.
    if not value:
        return
    cli_ctx = ctx.find_object(CLIContext)
    if cli_ctx is not None:
        cli_ctx.output = "json" if param.name == "json" else value


def filter_command(name: str, *, filter_required: bool = True) -> Callable[[F], click.Command]:
    """Declare a command that reads the FILTER expression.

    The decorated function receives the `CLIContext` first and the raw FILTER
    text as `filter_json`. When `filter_required` is false, FILTER defaults to
    `null`. Every command also accepts `--output`/`--json` after its arguments.
    """

    def decorator(fn: F) -> click.Command:
        wrapped: Any = click.pass_obj(fn)
        wrapped = click.option(
            "--json",
            is_flag=True,
            expose_value=False,
            callback=_override_output,
            help="Alias for --output json.",
        )(wrapped)
        wrapped = click.option(
            "--output",
            type=click.Choice(["table", "json"]),
            expose_value=False,
            callback=_override_output,
            help="Override the output format for this command.",
        )(wrapped)
        wrapped = click.argument(
            "filter_json",
            metavar="FILTER",
            required=filter_required,
            default=None if filter_required else "null",
        )(wrapped)
        return click.command(name=name, cls=rich_click.RichCommand, epilog=_FILTER_EPILOG)(wrapped)

    return decorator


def _parse_path(value: str) -> list[int]:
    """Parse a dotted path such as "2.1"; an empty string is the root."""
    value = value.strip()
    if not value:
        return []
    parts: list[int] = []
    for part in value.split("."):
        try:
            parts.append(int(part))
        except ValueError:
            raise click.BadParameter(f"Path segment {part!r} is not an integer") from None
    return parts


def _path_callback(_ctx: click.Context, _param: click.Parameter, value: str) -> list[int]:
    return _parse_path(value)


def path_option(fn: F) -> F:
    return click.option(
        "--path",
        "path",
        type=str,
        default="",
        show_default=False,
        callback=_path_callback,
        help="Dotted path of the clause, e.g. 2.1 (empty for the root).",
    )(fn)
