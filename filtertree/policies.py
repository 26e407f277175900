"""
Edit policies (cross-cutting behavioral controls).

Policies are passed to the editing operations in `filtertree.filters` as the
`policies=` keyword and apply to the whole edit, including the consolidation
pass that follows it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FlattenPolicy(Enum):
    """Where same-connective nesting such as `["and", A, ["and", B, C]]` is flattened."""

    TOGGLE_ONLY = "toggle-only"
    ALWAYS = "always"


@dataclass(frozen=True, slots=True)
class Policies:
    """Policy bundle applied to a single edit."""

    flatten: FlattenPolicy = FlattenPolicy.TOGGLE_ONLY


DEFAULT_POLICIES = Policies()
