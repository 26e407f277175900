from __future__ import annotations

import pytest

from filtertree.cli.errors import UsageError
from filtertree.cli.runner import error_info
from filtertree.exceptions import FilterTreeError, InvalidClauseError, InvalidPathError
from filtertree.filters import toggle_compound_filter_operator
from filtertree.nested import get_nested


def test_invalid_path_error_carries_path_details() -> None:
    with pytest.raises(InvalidPathError) as excinfo:
        get_nested(["and", ["segment", 1], ["segment", 2]], [5])
    exc = excinfo.value
    assert exc.error_type == "invalid_path"
    assert exc.details == {"path": [5]}
    assert "(path: [5])" in str(exc)


def test_invalid_clause_error_has_no_details() -> None:
    with pytest.raises(InvalidClauseError) as excinfo:
        toggle_compound_filter_operator(["segment", 1], 0, [])
    assert excinfo.value.error_type == "invalid_clause"
    assert excinfo.value.details is None


def test_base_error_is_a_validation_error() -> None:
    exc = FilterTreeError("bad", hint="try again")
    assert exc.error_type == "validation_error"
    assert exc.hint == "try again"
    assert str(exc) == "bad"


def test_usage_error_is_a_filtertree_error() -> None:
    exc = UsageError("Invalid JSON for FILTER", argument="FILTER")
    assert isinstance(exc, FilterTreeError)
    assert exc.error_type == "usage_error"
    assert exc.details == {"argument": "FILTER"}
    assert UsageError("no argument").details is None


def test_error_info_adds_cli_hint_for_path_errors() -> None:
    info = error_info(InvalidPathError("Index 5 out of range", path=[5]))
    assert info.type == "invalid_path"
    assert info.message == "Index 5 out of range"
    assert info.hint is not None and "filtertree paths" in info.hint
    assert info.details == {"path": [5]}


def test_error_info_prefers_explicit_hint() -> None:
    info = error_info(UsageError("Invalid JSON", argument="--set", hint="Quote it."))
    assert info.hint == "Quote it."
    assert info.details == {"argument": "--set"}
