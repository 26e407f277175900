"""Command-line interface for editing filter expressions.

Install with the package and run `filtertree --help`.
"""

from __future__ import annotations

from .main import cli

__all__ = ["cli"]
