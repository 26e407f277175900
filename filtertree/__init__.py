"""
filtertree - editing algebra for boolean filter expressions.

Filter expressions are nested tagged lists such as
`["and", ["=", ["field-id", 1], 5], ["segment", 7]]`. This package builds, edits
and normalizes them for interactive filter editors.
"""

from __future__ import annotations

from .clauses import Clause, Compound, Predicate, SegmentRef, parse_clause, parse_filter
from .exceptions import FilterTreeError, InvalidClauseError, InvalidPathError
from .filters import (
    add_filter,
    can_add_filter,
    clear_filters,
    consolidate,
    get_filter_options,
    get_filters,
    has_filter_options,
    is_compound_filter,
    is_field_filter,
    is_segment_filter,
    remove_filter,
    set_filter_options,
    toggle_compound_filter_operator,
    update_filter,
)
from .nested import get_nested, iter_filter_paths, remove_nested, update_nested
from .policies import FlattenPolicy, Policies

__version__ = "0.1.0"

__all__ = [
    # Editing
    "add_filter",
    "update_filter",
    "remove_filter",
    "clear_filters",
    "toggle_compound_filter_operator",
    "consolidate",
    "can_add_filter",
    # Listing and classification
    "get_filters",
    "is_compound_filter",
    "is_segment_filter",
    "is_field_filter",
    # Options
    "has_filter_options",
    "get_filter_options",
    "set_filter_options",
    # Paths
    "get_nested",
    "update_nested",
    "remove_nested",
    "iter_filter_paths",
    # Typed view
    "Clause",
    "Compound",
    "Predicate",
    "SegmentRef",
    "parse_clause",
    "parse_filter",
    # Policies
    "FlattenPolicy",
    "Policies",
    # Errors
    "FilterTreeError",
    "InvalidClauseError",
    "InvalidPathError",
    "__version__",
]
