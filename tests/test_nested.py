"""Tests for path-based access to nested clauses."""

from __future__ import annotations

import pytest

from filtertree.exceptions import InvalidPathError
from filtertree.nested import (
    get_nested,
    iter_filter_paths,
    no_null_values,
    remove_nested,
    update_nested,
)

A = ["=", ["field-id", 1], "Active"]
B = ["segment", 7]
C = [">", ["field-id", 2], 10]
TREE = ["and", A, ["or", B, C]]


class TestGetNested:
    def test_empty_path_is_root(self) -> None:
        assert get_nested(TREE, []) is TREE

    def test_top_level(self) -> None:
        assert get_nested(TREE, [1]) is A

    def test_nested(self) -> None:
        assert get_nested(TREE, [2, 2]) is C

    def test_out_of_range(self) -> None:
        with pytest.raises(InvalidPathError) as excinfo:
            get_nested(TREE, [2, 5])
        assert excinfo.value.path == [2, 5]

    def test_negative_index(self) -> None:
        with pytest.raises(InvalidPathError):
            get_nested(TREE, [-1])

    def test_connective_is_not_addressable(self) -> None:
        with pytest.raises(InvalidPathError):
            get_nested(TREE, [2, 0])

    def test_descending_into_non_clause(self) -> None:
        with pytest.raises(InvalidPathError):
            get_nested(TREE, [1, 2, 0])


class TestUpdateNested:
    def test_empty_path_returns_value(self) -> None:
        assert update_nested(TREE, [], B) is B

    def test_replaces_and_shares_siblings(self) -> None:
        result = update_nested(TREE, [2, 1], A)
        assert result == ["and", A, ["or", A, C]]
        assert result[1] is TREE[1]
        assert result[2][2] is C
        assert TREE == ["and", A, ["or", B, C]]

    def test_predicate_argument_is_addressable(self) -> None:
        assert update_nested(TREE, [1, 2], "Inactive") == [
            "and",
            ["=", ["field-id", 1], "Inactive"],
            ["or", B, C],
        ]


class TestRemoveNested:
    def test_removes_top_level(self) -> None:
        assert remove_nested(TREE, [1]) == ["and", ["or", B, C]]

    def test_removes_nested(self) -> None:
        result = remove_nested(TREE, [2, 1])
        assert result == ["and", A, ["or", C]]
        assert result[1] is A

    def test_empty_path(self) -> None:
        with pytest.raises(InvalidPathError):
            remove_nested(TREE, [])


def test_iter_filter_paths_depth_first() -> None:
    assert list(iter_filter_paths(TREE)) == [
        ([], TREE),
        ([1], A),
        ([2], ["or", B, C]),
        ([2, 1], B),
        ([2, 2], C),
    ]


def test_iter_filter_paths_single_predicate() -> None:
    assert list(iter_filter_paths(A)) == [([], A)]


def test_iter_filter_paths_absent() -> None:
    assert list(iter_filter_paths(None)) == []
    assert list(iter_filter_paths([])) == []


def test_iter_filter_paths_address_their_clause() -> None:
    for path, clause in iter_filter_paths(TREE):
        assert get_nested(TREE, path) is clause


def test_no_null_values() -> None:
    assert no_null_values(A)
    assert not no_null_values(["=", ["field-id", 1], None])
    assert no_null_values([])
