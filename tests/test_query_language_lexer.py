"""Tests for query language lexer."""

from __future__ import annotations

from datetime import UTC, date, datetime
from decimal import Decimal

import pytest

from soqlgen.query_language import LexError, Token, TokenKind, tokenize
from soqlgen.query_language.ast import OperatorKind
from soqlgen.query_language.lexer import decode_string


def _kinds(text: str) -> list[TokenKind]:
    return [token.kind for token in tokenize(text)]


def _values(text: str) -> list[object]:
    return [token.value for token in tokenize(text)][:-1]


def test_tokenize_simple_where_query() -> None:
    """Lexer should produce positioned tokens ending with EOF."""
    tokens = list(tokenize("Account.where(Name = 'Test')"))

    assert tokens == [
        Token(TokenKind.IDENTIFIER, "Account", 0, "Account"),
        Token(TokenKind.DOT, ".", 7, "."),
        Token(TokenKind.IDENTIFIER, "where", 8, "where"),
        Token(TokenKind.LPAREN, "(", 13, "("),
        Token(TokenKind.IDENTIFIER, "Name", 14, "Name"),
        Token(TokenKind.OPERATOR, "=", 19, OperatorKind.EQ),
        Token(TokenKind.STRING, "'Test'", 21, "Test"),
        Token(TokenKind.RPAREN, ")", 27, ")"),
        Token(TokenKind.EOF, "", 28),
    ]


def test_tokenize_empty_input_yields_only_eof() -> None:
    """Empty input should produce a single EOF token."""
    assert list(tokenize("")) == [Token(TokenKind.EOF, "", 0)]


def test_tokenize_skips_whitespace_and_newlines() -> None:
    """Whitespace between tokens should be ignored."""
    tokens = list(tokenize("  Account\n\t.limit( 5 ) "))

    assert [token.text for token in tokens] == ["Account", ".", "limit", "(", "5", ")", ""]
    assert tokens[0].position == 2
    assert tokens[-1].position == 23


@pytest.mark.parametrize(
    ("text", "operator"),
    [
        ("a>=1", OperatorKind.GTE),
        ("a<=1", OperatorKind.LTE),
        ("a!=1", OperatorKind.NE),
        ("a>1", OperatorKind.GT),
        ("a<1", OperatorKind.LT),
        ("a=1", OperatorKind.EQ),
    ],
)
def test_tokenize_operators_use_longest_match(text: str, operator: OperatorKind) -> None:
    """Multi-character operators should win over their one-character prefixes."""
    tokens = list(tokenize(text))

    assert len(tokens) == 4
    assert tokens[1].kind is TokenKind.OPERATOR
    assert tokens[1].value is operator


def test_tokenize_keywords_are_case_insensitive() -> None:
    """Keywords should be recognized in any case and normalized to lower case."""
    tokens = list(tokenize("AND or Not IN Like ASC desc TRUE False NULL"))[:-1]

    assert all(token.kind is TokenKind.KEYWORD for token in tokens)
    assert [token.value for token in tokens] == [
        "and",
        "or",
        "not",
        "in",
        "like",
        "asc",
        "desc",
        "true",
        "false",
        "null",
    ]


def test_tokenize_method_names_are_identifiers() -> None:
    """Chain method names should stay identifiers so fields may share them."""
    assert _kinds("where select orderBy limit open") == [TokenKind.IDENTIFIER] * 5 + [
        TokenKind.EOF
    ]


def test_tokenize_identifier_with_digits_and_underscores() -> None:
    """Custom object names with digits and underscores should lex as one identifier."""
    tokens = list(tokenize("Produc2__c"))

    assert tokens[0] == Token(TokenKind.IDENTIFIER, "Produc2__c", 0, "Produc2__c")


@pytest.mark.parametrize(
    ("text", "value"),
    [
        ("42", 42),
        ("-7", -7),
        ("3.25", Decimal("3.25")),
        ("-0.50", Decimal("-0.50")),
    ],
)
def test_tokenize_numbers(text: str, value: object) -> None:
    """Numbers should accept an optional minus sign and decimal part."""
    tokens = list(tokenize(text))

    assert tokens[0].kind is TokenKind.NUMBER
    assert tokens[0].value == value


@pytest.mark.parametrize(
    ("text", "value"),
    [
        ("'Test'", "Test"),
        ('"Test"', "Test"),
        ("'O\\'Brien'", "O'Brien"),
        ('"O\'Brien"', "O'Brien"),
        ('"say \\"hi\\""', 'say "hi"'),
        ("'a\\\\b'", "a\\b"),
        ("'line\\nbreak'", "line\nbreak"),
        ("'50\\%'", "50\\%"),
        ("''", ""),
    ],
)
def test_tokenize_string_literals(text: str, value: str) -> None:
    """String literals should decode backslash escapes and keep LIKE escapes."""
    tokens = list(tokenize(text))

    assert tokens[0].kind is TokenKind.STRING
    assert tokens[0].text == text
    assert tokens[0].value == value


@pytest.mark.parametrize(
    ("lexeme", "expected"),
    [
        ("'C:\\%'", ("C:\\%", frozenset({2}))),
        ("'C:\\\\%'", ("C:\\%", frozenset())),
        ("'a\\\\\\_b'", ("a\\\\_b", frozenset({2}))),
        ("'\\n\\%'", ("\n\\%", frozenset({1}))),
        ("'100%'", ("100%", frozenset())),
    ],
)
def test_decode_string_marks_like_escapes(
    lexeme: str, expected: tuple[str, frozenset[int]]
) -> None:
    """Only backslashes written as LIKE escapes should be marked."""
    assert decode_string(lexeme) == expected


def test_tokenize_date_and_datetime_literals() -> None:
    """Date literals should decode to date and datetime values."""
    assert _values("2024-01-15 2024-01-15T10:30:00Z") == [
        date(2024, 1, 15),
        datetime(2024, 1, 15, 10, 30, tzinfo=UTC),
    ]
    assert _kinds("2024-01-15") == [TokenKind.DATE, TokenKind.EOF]


def test_tokenize_invalid_calendar_date_fails() -> None:
    """Dates that do not exist should be rejected."""
    with pytest.raises(LexError) as exc_info:
        list(tokenize("A = 2024-02-30"))

    assert exc_info.value.position == 4
    assert "Invalid date literal" in str(exc_info.value)


def test_tokenize_unexpected_character_reports_position() -> None:
    """Unknown characters should fail with their position."""
    with pytest.raises(LexError) as exc_info:
        list(tokenize("Account.where(Name = 'x' $)"))

    assert exc_info.value.position == 25
    assert exc_info.value.unexpected_char == "$"


def test_tokenize_lone_minus_fails() -> None:
    """A minus sign not followed by digits is not a token."""
    with pytest.raises(LexError) as exc_info:
        list(tokenize("A = -"))

    assert exc_info.value.position == 4
    assert exc_info.value.unexpected_char == "-"


def test_tokenize_unterminated_string_points_at_quote() -> None:
    """Unterminated strings should be reported at the opening quote."""
    with pytest.raises(LexError) as exc_info:
        list(tokenize("Account.where(Name = 'abc"))

    assert exc_info.value.position == 21
    assert "Unterminated string literal" in str(exc_info.value)


def test_tokenize_is_lazy() -> None:
    """Errors past the consumed prefix should not be raised."""
    tokens = tokenize("Account $")

    assert next(tokens).text == "Account"
    with pytest.raises(LexError):
        next(tokens)


def test_tokenize_is_restartable_per_input() -> None:
    """Each call should start a fresh token stream."""
    first = list(tokenize("Account.limit(1)"))
    second = list(tokenize("Account.limit(1)"))

    assert first == second
