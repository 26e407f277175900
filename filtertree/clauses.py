"""
Typed view of filter clauses.

The editing operations in `filtertree.filters` work on plain nested lists because
that is the shape editors and query objects exchange. This module gives the same
tree an explicit sum type for code that wants to inspect it without sniffing list
positions:

    parse_clause(["and", ["=", ["field-id", 1], 5], ["segment", 7]])
    # Compound(connective="and", operands=(
    #     Predicate(kind="=", arguments=(["field-id", 1], 5), options=None),
    #     SegmentRef(segment_id=7, options=None),
    # ))

`to_value()` converts back; `parse_clause(x).to_value() == x` for any
well-formed clause `x`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from .exceptions import InvalidClauseError
from .filters import (
    Connective,
    get_filter_options,
    has_filter_options,
    is_compound_filter,
    is_segment_filter,
)


class Clause(ABC):
    """Base class for typed clauses."""

    @abstractmethod
    def to_value(self) -> list[Any]:
        """Convert the clause back to its plain list form."""
        ...

    def walk(self) -> Iterator[Clause]:
        """Yield this clause and every clause nested under it, depth-first."""
        yield self


@dataclass(frozen=True)
class Compound(Clause):
    """Clauses combined under `"and"` / `"or"`."""

    connective: Connective
    operands: tuple[Clause, ...]

    def to_value(self) -> list[Any]:
        return [self.connective, *(operand.to_value() for operand in self.operands)]

    def walk(self) -> Iterator[Clause]:
        yield self
        for operand in self.operands:
            yield from operand.walk()


@dataclass(frozen=True)
class Predicate(Clause):
    """A field predicate such as `["=", ["field-id", 1], 5]`."""

    kind: str
    arguments: tuple[Any, ...] = ()
    options: dict[str, Any] | None = None

    def to_value(self) -> list[Any]:
        value = [self.kind, *self.arguments]
        if self.options is not None:
            value.append(self.options)
        return value

    @property
    def is_complete(self) -> bool:
        """False while an argument is still unset."""
        return all(argument is not None for argument in self.arguments)


@dataclass(frozen=True)
class SegmentRef(Clause):
    """A reference to a saved segment, `["segment", id]`."""

    segment_id: Any
    options: dict[str, Any] | None = None

    def to_value(self) -> list[Any]:
        value = ["segment", self.segment_id]
        if self.options is not None:
            value.append(self.options)
        return value


def parse_clause(value: Any) -> Clause:
    """
    Parse a plain clause into its typed form.

    Raises:
        InvalidClauseError: If `value` is not a well-formed clause
    """
    if not isinstance(value, list):
        raise InvalidClauseError(f"Clause must be a list, got {type(value).__name__}", value=value)
    if not value:
        raise InvalidClauseError("Clause must not be empty", value=value)

    if is_compound_filter(value):
        if len(value) < 2:
            raise InvalidClauseError(
                f"Compound clause '{value[0]}' needs at least one operand", value=value
            )
        return Compound(
            connective=value[0],
            operands=tuple(parse_clause(operand) for operand in value[1:]),
        )

    options = get_filter_options(value) if has_filter_options(value) else None
    arguments = value[1:-1] if options is not None else value[1:]

    if is_segment_filter(value):
        if len(arguments) != 1:
            raise InvalidClauseError("Segment reference needs exactly one identifier", value=value)
        return SegmentRef(segment_id=arguments[0], options=options)

    if not isinstance(value[0], str):
        raise InvalidClauseError(
            f"Predicate kind must be a string, got {type(value[0]).__name__}", value=value
        )
    return Predicate(kind=value[0], arguments=tuple(arguments), options=options)


def parse_filter(value: Any) -> Clause | None:
    """Parse a whole filter expression; `None` and `[]` mean no filter."""
    if value is None or value == []:
        return None
    return parse_clause(value)
