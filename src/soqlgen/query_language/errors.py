"""Errors for query language lexing, parsing and validation."""

from __future__ import annotations

from collections.abc import Iterable


class QueryLanguageError(Exception):
    """Base exception for query language failures."""

    title = "Invalid query"

    def __init__(self, message: str, position: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.position = position


class LexError(QueryLanguageError):
    """Raised when query text contains a character no token can start with."""

    title = "Invalid query syntax"

    def __init__(self, position: int, unexpected_char: str, reason: str | None = None) -> None:
        message = reason or f"Unexpected character {unexpected_char!r}"
        super().__init__(f"{message} at position {position}", position)
        self.unexpected_char = unexpected_char


class QueryParseError(QueryLanguageError):
    """Raised when the token stream does not match the query grammar."""

    title = "Invalid query syntax"


def _describe_expected(expected: Iterable[str]) -> str:
    names = sorted(set(expected))
    if not names:
        return "nothing"
    if len(names) == 1:
        return names[0]
    return "one of " + ", ".join(names)


class UnexpectedTokenError(QueryParseError):
    """Raised when a token does not fit the grammar at its position."""

    def __init__(self, expected: Iterable[str], found: str, position: int) -> None:
        self.expected = tuple(sorted(set(expected)))
        self.found = found
        super().__init__(
            f"Expected {_describe_expected(self.expected)} but found {found!r} "
            f"at position {position}",
            position,
        )


class UnterminatedExpressionError(QueryParseError):
    """Raised when input ends in the middle of a construct."""

    def __init__(self, expected: Iterable[str], position: int) -> None:
        self.expected = tuple(sorted(set(expected)))
        super().__init__(
            f"Unexpected end of query, expected {_describe_expected(self.expected)}",
            position,
        )


class DuplicateModifierError(QueryParseError):
    """Raised when a chain calls the same method twice."""

    def __init__(self, name: str, position: int | None = None) -> None:
        self.name = name
        super().__init__(f"Method `{name}` is used more than once", position)


class QueryValidationError(QueryLanguageError):
    """Raised when a well-formed query is semantically invalid."""


class InvalidLimitError(QueryValidationError):
    """Raised when limit is not a positive integer."""

    def __init__(self, value: object, position: int | None = None) -> None:
        self.value = value
        super().__init__(f"Limit must be a positive integer, got {value}", position)


class TypeMismatchError(QueryValidationError):
    """Raised when an operator is used with an incompatible literal."""

    def __init__(self, operator: str, literal_kind: str, position: int | None = None) -> None:
        self.operator = operator
        self.literal_kind = literal_kind
        super().__init__(f"Operator {operator} cannot be used with a {literal_kind} value", position)


class InvalidFieldNameError(QueryValidationError):
    """Raised when an object or field name is not a valid identifier."""

    def __init__(self, name: str, position: int | None = None) -> None:
        self.name = name
        super().__init__(f"Invalid field name: {name!r}", position)


def _line_and_column(text: str, position: int) -> tuple[int, int]:
    """Resolve 0-based line and column of a character offset."""
    prefix = text[:position]
    line = prefix.count("\n")
    column = position - (prefix.rfind("\n") + 1)
    return (line, column)


def format_error(text: str, exc: QueryLanguageError) -> str:
    """Build error message with a pointer under the offending character."""
    header = f"{exc.title}: {exc.message}"
    if exc.position is None:
        return header

    line_number, column_number = _line_and_column(text, exc.position)
    query_lines = text.split("\n")
    error_line = query_lines[line_number] if line_number < len(query_lines) else ""
    pointer = " " * column_number + "^"
    return f"{header}\n\n{error_line}\n{pointer}"
