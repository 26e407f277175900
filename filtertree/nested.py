"""Path-based access to nested filter clauses.

A path is a sequence of raw list positions. Position 0 of a compound clause is
its connective and is never descended into. All writers return new lists and
share every untouched sub-clause with the input tree.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any

from .exceptions import InvalidPathError

_CONNECTIVES = ("and", "or")


def _child(node: Any, index: int, path: Sequence[int]) -> Any:
    """Return `node[index]`, failing fast when the step is not addressable."""
    if not isinstance(node, list):
        raise InvalidPathError(f"Cannot descend into non-clause value {node!r}", path=path)
    if index < 0 or index >= len(node):
        raise InvalidPathError(
            f"Index {index} out of range for clause of length {len(node)}", path=path
        )
    if index == 0 and node[0] in _CONNECTIVES:
        raise InvalidPathError("Index 0 of a compound clause is its connective", path=path)
    return node[index]


def get_nested(tree: Any, path: Sequence[int]) -> Any:
    """Return the sub-clause at `path`.

    Examples:
        get_nested(["and", A, ["or", B, C]], [2, 1]) -> B
        get_nested(A, []) -> A
    """
    node = tree
    for index in path:
        node = _child(node, index, path)
    return node


def update_nested(tree: Any, path: Sequence[int], value: Any) -> Any:
    """Return a copy of `tree` with the node at `path` replaced by `value`."""

    def _update(node: Any, depth: int) -> Any:
        if depth == len(path):
            return value
        index = path[depth]
        child = _child(node, index, path)
        return [*node[:index], _update(child, depth + 1), *node[index + 1 :]]

    return _update(tree, 0)


def remove_nested(tree: Any, path: Sequence[int]) -> Any:
    """Return a copy of `tree` with the node at `path` deleted."""
    if not path:
        raise InvalidPathError("Cannot remove the root through an empty path", path=path)

    def _remove(node: Any, depth: int) -> Any:
        index = path[depth]
        child = _child(node, index, path)
        if depth == len(path) - 1:
            return [*node[:index], *node[index + 1 :]]
        return [*node[:index], _remove(child, depth + 1), *node[index + 1 :]]

    return _remove(tree, 0)


def iter_filter_paths(filter: Any) -> Iterator[tuple[list[int], Any]]:
    """Walk a filter expression depth-first.

    Yields `(path, clause)` for the root and for every clause nested under a
    compound clause. Arguments of simple clauses are not visited. The paths are
    the coordinates the editing operations accept.
    """
    if filter is None or filter == []:
        return

    def _walk(node: Any, path: list[int]) -> Iterator[tuple[list[int], Any]]:
        yield path, node
        if isinstance(node, list) and node and node[0] in _CONNECTIVES:
            for index in range(1, len(node)):
                yield from _walk(node[index], [*path, index])

    yield from _walk(filter, [])


def no_null_values(clause: Sequence[Any]) -> bool:
    """True when no position of `clause` holds `None`."""
    return all(item is not None for item in clause)
