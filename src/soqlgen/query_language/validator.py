"""Semantic checks for parsed queries."""

from __future__ import annotations

import re

from soqlgen.query_language.ast import (
    And,
    BoolLiteral,
    Comparison,
    DateLiteral,
    ListLiteral,
    Literal,
    Not,
    NullLiteral,
    NumberLiteral,
    OperatorKind,
    Or,
    OrderItem,
    Predicate,
    Query,
    StringLiteral,
    literal_kind,
)
from soqlgen.query_language.errors import (
    InvalidFieldNameError,
    InvalidLimitError,
    TypeMismatchError,
)


IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

_SCALARS: tuple[type[Literal], ...] = (StringLiteral, NumberLiteral, BoolLiteral, DateLiteral)

COMPATIBLE_LITERALS: dict[OperatorKind, tuple[type[Literal], ...]] = {
    OperatorKind.EQ: (*_SCALARS, NullLiteral),
    OperatorKind.NE: (*_SCALARS, NullLiteral),
    OperatorKind.GT: (StringLiteral, NumberLiteral, DateLiteral),
    OperatorKind.LT: (StringLiteral, NumberLiteral, DateLiteral),
    OperatorKind.GTE: (StringLiteral, NumberLiteral, DateLiteral),
    OperatorKind.LTE: (StringLiteral, NumberLiteral, DateLiteral),
    OperatorKind.LIKE: (StringLiteral,),
    OperatorKind.IN: (ListLiteral,),
    OperatorKind.NOT_IN: (ListLiteral,),
}


def is_identifier(name: str) -> bool:
    """Return whether name is a plain identifier."""
    return IDENTIFIER_PATTERN.fullmatch(name) is not None


def _check_name(name: str, position: int | None = None) -> str:
    if not is_identifier(name):
        raise InvalidFieldNameError(name, position)
    return name


def _check_literal(comparison: Comparison) -> None:
    """Enforce operator/literal compatibility for one comparison."""
    value = comparison.value
    if not isinstance(value, COMPATIBLE_LITERALS[comparison.operator]):
        raise TypeMismatchError(comparison.operator, literal_kind(value), comparison.position)

    if isinstance(value, ListLiteral):
        if not value.items:
            raise TypeMismatchError(comparison.operator, "empty list", comparison.position)
        for item in value.items:
            if not isinstance(item, _SCALARS):
                raise TypeMismatchError(
                    comparison.operator, f"list of {literal_kind(item)}", comparison.position
                )


def _validate_predicate(predicate: Predicate) -> Predicate:
    """Check a predicate tree and rebuild it node by node."""
    match predicate:
        case Comparison(field=field, operator=operator, value=value, position=position):
            _check_name(field, position)
            _check_literal(predicate)
            return Comparison(field, operator, value, position=position)
        case And(left=left, right=right):
            return And(_validate_predicate(left), _validate_predicate(right))
        case Or(left=left, right=right):
            return Or(_validate_predicate(left), _validate_predicate(right))
        case Not(inner=inner):
            return Not(_validate_predicate(inner))
    raise TypeError(f"Unknown predicate: {predicate!r}")


def _check_limit(query: Query) -> None:
    limit = query.limit
    if limit is None:
        return
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise InvalidLimitError(limit, query.limit_position)


def validate(query: Query) -> Query:
    """Validate a parsed query and return a new, checked copy.

    Names keep the casing they were written in. Field existence is not checked.

    Raises:
        InvalidFieldNameError: If the object or any field is not an identifier
        TypeMismatchError: If an operator is applied to an incompatible literal
        InvalidLimitError: If limit is not a positive integer
    """
    object_name = _check_name(query.object_name)
    fields = tuple(_check_name(name) for name in query.fields)
    order_by = tuple(
        OrderItem(_check_name(item.field), item.direction) for item in query.order_by
    )
    predicate = _validate_predicate(query.filter) if query.filter is not None else None
    _check_limit(query)

    return Query(
        object_name=object_name,
        fields=fields,
        filter=predicate,
        order_by=order_by,
        limit=query.limit,
        open_record=query.open_record,
        limit_position=query.limit_position,
    )
