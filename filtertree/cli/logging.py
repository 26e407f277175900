"""Logging setup for the CLI.

The library modules only create loggers; handlers are installed here, on the
root logger, for the lifetime of a CLI invocation.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass

from rich.console import Console
from rich.logging import RichHandler


@dataclass(frozen=True, slots=True)
class _LoggingState:
    level: int
    handlers: list[logging.Handler]


def _level_for_verbosity(verbosity: int) -> int:
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(*, verbosity: int) -> _LoggingState:
    """Route log records to stderr through rich; returns the state to restore."""
    root = logging.getLogger()
    previous = _LoggingState(level=root.level, handlers=list(root.handlers))

    handler = RichHandler(
        console=Console(file=sys.stderr, force_terminal=False),
        show_time=verbosity >= 2,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    root.handlers = [handler]
    root.setLevel(_level_for_verbosity(verbosity))
    return previous


def restore_logging(state: _LoggingState) -> None:
    root = logging.getLogger()
    for handler in root.handlers:
        if handler not in state.handlers:
            handler.close()
    root.handlers = state.handlers
    root.setLevel(state.level)
