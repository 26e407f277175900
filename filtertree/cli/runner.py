"""Run one command body and report its outcome as a `CommandResult`.

A body returns a `CommandOutput`. A `FilterTreeError` raised by the body becomes
a failed result with exit code 2; any other exception is a bug and propagates.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, NoReturn

import click

from filtertree.exceptions import FilterTreeError

from .context import CLIContext
from .render import render_result
from .results import CommandMeta, CommandResult, ErrorInfo

logger = logging.getLogger("filtertree.cli")

ERROR_EXIT_CODE = 2

# Fallback hints for errors raised by the library, which knows nothing of the CLI.
_HINTS = {
    "invalid_path": "Run `filtertree paths FILTER` to list the paths of the current expression.",
}


@dataclass(frozen=True, slots=True)
class CommandOutput:
    data: dict[str, Any]
    exit_code: int = 0
    warnings: tuple[str, ...] = ()


CommandBody = Callable[[], CommandOutput]


def error_info(exc: FilterTreeError) -> ErrorInfo:
    return ErrorInfo(
        type=exc.error_type,
        message=exc.message,
        hint=exc.hint or _HINTS.get(exc.error_type),
        details=exc.details,
    )


def _meta(ctx: CLIContext, started: float) -> CommandMeta:
    elapsed_ms = int((time.perf_counter() - started) * 1000)
    return CommandMeta(duration_ms=elapsed_ms, flatten=ctx.flatten.value)


def run_command(ctx: CLIContext, command: str, body: CommandBody) -> NoReturn:
    started = time.perf_counter()
    try:
        output = body()
    except FilterTreeError as exc:
        logger.debug(f"{command} failed with {exc.error_type}: {exc}")
        result = CommandResult(
            ok=False, command=command, meta=_meta(ctx, started), error=error_info(exc)
        )
        exit_code = ERROR_EXIT_CODE
    else:
        result = CommandResult(
            ok=True,
            command=command,
            data=output.data,
            warnings=list(output.warnings),
            meta=_meta(ctx, started),
        )
        exit_code = output.exit_code

    render_result(result, settings=ctx.render_settings)
    # JSON output carries warnings in the envelope; table output logs them to stderr.
    if ctx.output == "table" and not ctx.quiet:
        for warning in result.warnings:
            logger.warning(warning)
    raise click.exceptions.Exit(exit_code)
