"""AST nodes for query language."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import StrEnum


class OperatorKind(StrEnum):
    """Comparison operators, valued by their SOQL spelling."""

    EQ = "="
    NE = "!="
    GT = ">"
    LT = "<"
    GTE = ">="
    LTE = "<="
    LIKE = "LIKE"
    IN = "IN"
    NOT_IN = "NOT IN"


class SortDirection(StrEnum):
    """Ordering direction for ORDER BY items."""

    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True, slots=True)
class Literal:
    """Base literal value type."""


@dataclass(frozen=True, slots=True)
class StringLiteral(Literal):
    """String literal value.

    `escaped_wildcards` holds the offsets in `value` of backslashes that escape
    a LIKE wildcard (`\\%`, `\\_`) rather than standing for themselves.
    """

    value: str
    escaped_wildcards: frozenset[int] = frozenset()


@dataclass(frozen=True, slots=True)
class NumberLiteral(Literal):
    """Numeric literal value."""

    value: int | Decimal


@dataclass(frozen=True, slots=True)
class BoolLiteral(Literal):
    """Boolean literal value."""

    value: bool


@dataclass(frozen=True, slots=True)
class NullLiteral(Literal):
    """Null literal value."""


@dataclass(frozen=True, slots=True)
class DateLiteral(Literal):
    """Date or date-time literal value."""

    value: date


@dataclass(frozen=True, slots=True)
class ListLiteral(Literal):
    """Parenthesized list of literals, used with IN and NOT IN."""

    items: tuple[Literal, ...]


@dataclass(frozen=True, slots=True)
class Predicate:
    """Base WHERE clause expression type."""


@dataclass(frozen=True, slots=True)
class Comparison(Predicate):
    """Comparison of a field against a literal."""

    field: str
    operator: OperatorKind
    value: Literal
    position: int | None = dataclasses.field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class And(Predicate):
    """Conjunction of two predicates."""

    left: Predicate
    right: Predicate


@dataclass(frozen=True, slots=True)
class Or(Predicate):
    """Disjunction of two predicates."""

    left: Predicate
    right: Predicate


@dataclass(frozen=True, slots=True)
class Not(Predicate):
    """Negated predicate."""

    inner: Predicate


@dataclass(frozen=True, slots=True)
class OrderItem:
    """One ORDER BY entry."""

    field: str
    direction: SortDirection = SortDirection.ASC


@dataclass(frozen=True, slots=True)
class Query:
    """Parsed query.

    An empty `fields` tuple selects the default field set and an empty
    `order_by` tuple means no ORDER BY clause.
    """

    object_name: str
    fields: tuple[str, ...] = ()
    filter: Predicate | None = None
    order_by: tuple[OrderItem, ...] = ()
    limit: int | Decimal | None = None
    open_record: bool = False
    limit_position: int | None = dataclasses.field(default=None, compare=False)


def literal_kind(literal: Literal) -> str:
    """Return the user-facing kind name of a literal."""
    match literal:
        case StringLiteral():
            return "string"
        case NumberLiteral():
            return "number"
        case BoolLiteral():
            return "boolean"
        case NullLiteral():
            return "null"
        case DateLiteral():
            return "date"
        case ListLiteral():
            return "list"
    raise TypeError(f"Unknown literal: {literal!r}")
