"""
Filter-tree editing algebra.

A filter expression is either absent (`None`), a single clause, or a compound
clause combining clauses under a connective:

    ["=", ["field-id", 1], "Active"]
    ["and", ["=", ["field-id", 1], "Active"], ["segment", 7]]
    ["or", ["and", A, B], C]

Every operation returns a new value and leaves its inputs untouched. Sub-clauses
that an edit does not touch are shared by reference between the old and the new
tree, so callers can compare by identity to detect what changed.

Example:
    from filtertree import add_filter, toggle_compound_filter_operator

    expr = add_filter(None, ["=", ["field-id", 1], "Active"])
    expr = add_filter(expr, ["segment", 7])
    expr = add_filter(expr, [">", ["field-id", 2], 10])
    # ["and", A, B, C] -> ["and", ["or", A, B], C]
    expr = toggle_compound_filter_operator(expr, 0, [])
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Literal

from .exceptions import InvalidClauseError, InvalidPathError
from .nested import get_nested, no_null_values, remove_nested, update_nested
from .policies import DEFAULT_POLICIES, FlattenPolicy, Policies

logger = logging.getLogger(__name__)

Connective = Literal["and", "or"]

# Plain tree values; a clause is a list whose first element is its tag.
FilterClause = list[Any]
FilterOptions = dict[str, Any]

AND: Connective = "and"
OR: Connective = "or"


# =============================================================================
# Classification
# =============================================================================


def is_compound_filter(filter: Any) -> bool:
    """True for a clause tagged with a connective."""
    return isinstance(filter, list) and len(filter) > 0 and filter[0] in (AND, OR)


def is_segment_filter(filter: Any) -> bool:
    """True for a reference to a saved segment, `["segment", id]`."""
    return isinstance(filter, list) and len(filter) > 0 and filter[0] == "segment"


def is_field_filter(filter: Any) -> bool:
    return not is_segment_filter(filter) and not is_compound_filter(filter)


def has_filter_options(filter: Sequence[Any]) -> bool:
    """True when the last element of `filter` is an options mapping.

    Options are told apart from arguments structurally: they are the only
    argument position that may hold a dict. Lists are always sub-clauses or
    argument values.
    """
    if not filter:
        return False
    last = filter[-1]
    return last is not None and isinstance(last, dict)


def _operator(filter: FilterClause) -> Connective:
    return filter[0]


def _args(filter: FilterClause) -> list[Any]:
    return filter[1:]


def _opposite(connective: Connective) -> Connective:
    return OR if connective == AND else AND


def _policies(policies: Policies | None) -> Policies:
    return policies if policies is not None else DEFAULT_POLICIES


# =============================================================================
# Listing and consolidation
# =============================================================================


def get_filters(filter: FilterClause | None) -> list[Any]:
    """Return the canonical list of top-level filters being combined.

    Examples:
        get_filters(None) -> []
        get_filters(A) -> [A]
        get_filters(["and", A, B]) -> [A, B]
    """
    if not filter:
        return []
    if is_compound_filter(filter):
        return _args(filter)
    return [filter]


def _flatten_operands(connective: Connective, operands: list[Any]) -> list[Any]:
    """Splice operands of same-connective children into their parent."""
    flattened: list[Any] = []
    for operand in operands:
        if is_compound_filter(operand) and _operator(operand) == connective:
            flattened.extend(_args(operand))
        else:
            flattened.append(operand)
    return flattened


def consolidate(filter: Any, *, policies: Policies | None = None) -> Any:
    """Normalize a clause after a structural edit.

    - A simple clause wrapped in a one-element list is unwrapped.
    - A compound clause left with a single operand collapses to that operand.
    - Compound clauses with several operands keep their connective and have
      every operand consolidated, so collapses propagate outward.
    - Empty lists and compounds without operands become `None`.

    With `FlattenPolicy.ALWAYS`, same-connective children are also spliced
    into their parent. Returns the input object itself when nothing changed.
    """
    if not isinstance(filter, list):
        return filter

    if not is_compound_filter(filter):
        if len(filter) == 0:
            return None
        if len(filter) == 1:
            return consolidate(filter[0], policies=policies)
        return filter

    original = _args(filter)
    consolidated = (consolidate(operand, policies=policies) for operand in original)
    operands = [operand for operand in consolidated if operand is not None]
    if _policies(policies).flatten is FlattenPolicy.ALWAYS:
        operands = _flatten_operands(_operator(filter), operands)

    if not operands:
        return None
    if len(operands) == 1:
        return operands[0]
    if len(operands) == len(original) and all(a is b for a, b in zip(operands, original)):
        return filter
    return [_operator(filter), *operands]


# =============================================================================
# Editing operations
# =============================================================================


def add_filter(
    filter: FilterClause | None,
    new_filter: FilterClause,
    *,
    policies: Policies | None = None,
) -> FilterClause:
    """Append `new_filter` to the expression.

    A lone predicate needs no connective; adding a second one wraps both in
    `"and"`. Compound expressions keep their connective.
    """
    if not filter:
        logger.debug(f"add_filter: starting expression with {new_filter!r}")
        return new_filter

    if is_compound_filter(filter):
        result = [_operator(filter), *_args(filter), new_filter]
    else:
        result = [AND, filter, new_filter]

    if _policies(policies).flatten is FlattenPolicy.ALWAYS:
        result = [_operator(result), *_flatten_operands(_operator(result), _args(result))]
    logger.debug(f"add_filter: expression now has {len(result) - 1} filters")
    return result


def update_filter(
    filter: FilterClause | None,
    index: Sequence[int],
    updated_filter: Any,
    *,
    policies: Policies | None = None,
) -> Any:
    """Replace the clause at path `index` with `updated_filter`.

    An absent expression is returned unchanged. A single-predicate expression
    has only one location, so it is replaced wholesale and `index` is ignored.
    """
    if not filter:
        return filter
    if not is_compound_filter(filter):
        return updated_filter
    logger.debug(f"update_filter: replacing clause at {list(index)}")
    return consolidate(update_nested(filter, index, updated_filter), policies=policies)


def remove_filter(
    filter: FilterClause | None,
    index: Sequence[int],
    *,
    policies: Policies | None = None,
) -> Any:
    """Delete the clause at path `index`.

    Removing the only predicate, or removing through an empty path, clears
    filtering entirely and returns `None`.
    """
    if not filter:
        return filter
    if not is_compound_filter(filter) or not index:
        logger.debug("remove_filter: removing the whole expression")
        return None
    logger.debug(f"remove_filter: removing clause at {list(index)}")
    return consolidate(remove_nested(filter, index), policies=policies)


def clear_filters(filter: FilterClause | None) -> None:
    """Drop every filter. The previous expression is ignored."""
    return None


def _absorb(operand: Any, connective: Connective) -> list[Any]:
    """Operands to splice for `operand` when merging under `connective`."""
    if is_compound_filter(operand) and _operator(operand) == connective:
        return _args(operand)
    return [operand]


def toggle_compound_filter_operator(
    filter: FilterClause,
    operator_index: int,
    nested_clause_index: Sequence[int],
    *,
    policies: Policies | None = None,
) -> Any:
    """Flip the connective between two adjacent operands of a compound clause.

    `nested_clause_index` locates the compound clause; `operator_index` picks
    the pair of operands at positions `operator_index` and `operator_index + 1`
    (counted from the first operand). The pair is regrouped under the opposite
    connective:

        ["and", A, B, C], 0, []  -> ["and", ["or", A, B], C]
        ["and", A, B], 0, []     -> ["or", A, B]

    Operands that already use the new connective are spliced in rather than
    nested. When the clause has no other operands and its parent already uses
    the new connective, the pair is spliced into the parent instead, so an
    editor never shows `["or", A, ["or", B, C]]`.
    """
    path = list(nested_clause_index)

    to_toggle = get_nested(filter, path)
    parent = get_nested(filter, path[:-1]) if path else None

    if not is_compound_filter(to_toggle):
        raise InvalidClauseError(
            f"Cannot toggle the operator of a non-compound clause at {path}", value=to_toggle
        )

    operands = _args(to_toggle)
    if operator_index < 0 or operator_index + 1 >= len(operands):
        raise InvalidPathError(
            f"Operator index {operator_index} is out of range for {len(operands)} operands",
            path=path,
        )

    new_operator = _opposite(_operator(to_toggle))
    lhs = _absorb(operands[operator_index], new_operator)
    rhs = _absorb(operands[operator_index + 1], new_operator)
    merged = [new_operator, *lhs, *rhs]
    logger.debug(
        f"toggle_compound_filter_operator: {_operator(to_toggle)} -> {new_operator} "
        f"at {path}, operand {operator_index}"
    )

    if len(operands) > 2:
        new_filter = [
            _operator(to_toggle),
            *operands[:operator_index],
            merged,
            *operands[operator_index + 2 :],
        ]
        return update_filter(filter, path, new_filter, policies=policies)

    if is_compound_filter(parent) and _operator(parent) == new_operator:
        # The regrouped clause would repeat its parent's connective; expand it in place.
        index_to_expand = path[-1]
        expanded = [
            *parent[:index_to_expand],
            *lhs,
            *rhs,
            *parent[index_to_expand + 1 :],
        ]
        return update_filter(filter, path[:-1], expanded, policies=policies)

    return update_filter(filter, path, merged, policies=policies)


# =============================================================================
# Options and misc
# =============================================================================


def can_add_filter(filter: FilterClause | None) -> bool:
    """False while the last filter still has an unset (`None`) argument."""
    filters = get_filters(filter)
    if filters:
        return no_null_values(filters[-1])
    return True


def get_filter_options(filter: Sequence[Any]) -> FilterOptions:
    if has_filter_options(filter):
        return filter[-1]
    return {}


def set_filter_options(filter: FilterClause, options: Mapping[str, Any]) -> FilterClause:
    """Return `filter` carrying `options` as its trailing element.

    Existing options are replaced. Empty options are never stored.
    """
    result = filter[:-1] if has_filter_options(filter) else filter
    if len(options) > 0:
        result = [*result, options if isinstance(options, dict) else dict(options)]
    return result
