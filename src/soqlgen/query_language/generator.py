"""SOQL text generation from query ASTs."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timedelta
from decimal import Decimal

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
    Or,
    Predicate,
    Query,
    StringLiteral,
)


DEFAULT_FIELDS: tuple[str, ...] = ("Id",)

_STRING_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def escape_string(value: str, escaped_wildcards: frozenset[int] = frozenset()) -> str:
    """Escape a string for use inside a single-quoted SOQL literal.

    Backslashes at `escaped_wildcards` offsets are LIKE escapes and pass
    through unchanged; every other backslash is doubled.
    """
    return "".join(
        char if index in escaped_wildcards else _STRING_ESCAPES.get(char, char)
        for index, char in enumerate(value)
    )


def _render_datetime(value: datetime) -> str:
    offset = value.utcoffset()
    if offset is None or offset == timedelta(0):
        return value.strftime("%Y-%m-%dT%H:%M:%SZ")
    return value.isoformat(timespec="seconds")


def render_literal(literal: Literal) -> str:
    """Render a literal in SOQL syntax."""
    match literal:
        case StringLiteral(value=value, escaped_wildcards=escaped_wildcards):
            return f"'{escape_string(value, escaped_wildcards)}'"
        case BoolLiteral(value=value):
            return "true" if value else "false"
        case NumberLiteral(value=value):
            return str(value)
        case NullLiteral():
            return "NULL"
        case DateLiteral(value=datetime() as value):
            return _render_datetime(value)
        case DateLiteral(value=value):
            return value.isoformat()
        case ListLiteral(items=items):
            return "(" + ", ".join(render_literal(item) for item in items) + ")"
    raise TypeError(f"Unknown literal: {literal!r}")


def _render_operand(child: Predicate, parent: type[Predicate]) -> str:
    """Render a boolean operand, wrapping it only when it mixes AND and OR."""
    text = render_predicate(child)
    if isinstance(child, And | Or) and not isinstance(child, parent):
        return f"({text})"
    return text


def render_predicate(predicate: Predicate) -> str:
    """Render a predicate tree as a SOQL condition expression."""
    match predicate:
        case Comparison(field=field, operator=operator, value=value):
            return f"{field} {operator} {render_literal(value)}"
        case And(left=left, right=right):
            return f"{_render_operand(left, And)} AND {_render_operand(right, And)}"
        case Or(left=left, right=right):
            return f"{_render_operand(left, Or)} OR {_render_operand(right, Or)}"
        case Not(inner=inner):
            return f"NOT ({render_predicate(inner)})"
    raise TypeError(f"Unknown predicate: {predicate!r}")


def effective_limit(query: Query) -> int | Decimal | None:
    """Return the row limit the generated statement applies."""
    # open() only replaces the limit; WHERE and ORDER BY are still emitted.
    if query.open_record:
        return 1
    return query.limit


def generate(query: Query, default_fields: Sequence[str] = DEFAULT_FIELDS) -> str:
    """Generate SOQL text for a validated query.

    Args:
        query: Query AST that already passed validation
        default_fields: Fields selected when the query names none

    Returns:
        SOQL statement with clauses in SELECT, FROM, WHERE, ORDER BY, LIMIT order
    """
    fields = query.fields or tuple(default_fields)
    clauses = [f"SELECT {', '.join(fields)}", f"FROM {query.object_name}"]

    if query.filter is not None:
        clauses.append(f"WHERE {render_predicate(query.filter)}")

    if query.order_by:
        items = ", ".join(f"{item.field} {item.direction}" for item in query.order_by)
        clauses.append(f"ORDER BY {items}")

    limit = effective_limit(query)
    if limit is not None:
        clauses.append(f"LIMIT {limit}")

    return " ".join(clauses)
