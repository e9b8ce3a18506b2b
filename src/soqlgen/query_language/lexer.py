"""Lexer for query language expressions."""

from __future__ import annotations

import re
from collections.abc import Iterator
from datetime import date, datetime
from decimal import Decimal

from parsy import ParseError, Parser, alt, regex, string

from soqlgen.query_language.ast import OperatorKind
from soqlgen.query_language.errors import LexError
from soqlgen.query_language.tokens import KEYWORDS, Token, TokenKind


_ESCAPES = {"'": "'", '"': '"', "\\": "\\", "n": "\n", "r": "\r", "t": "\t"}
_ESCAPE_PATTERN = re.compile(r"\\(.)", re.DOTALL)
_WILDCARDS = "%_"


def _token(kind: TokenKind, parser: Parser) -> Parser:
    """Tag lexemes produced by parser with a token kind."""
    return parser.map(lambda lexeme: (kind, lexeme))


_WHITESPACE = regex(r"\s*")

# Longer operators first so `>=` never lexes as `>` followed by `=`.
_OPERATOR = string("!=") | string(">=") | string("<=") | string("=") | string(">") | string("<")

_TOKEN = alt(
    _token(
        TokenKind.DATE,
        regex(r"\d{4}-\d{2}-\d{2}(?:T\d{2}:\d{2}:\d{2}(?:Z|[+-]\d{2}:\d{2})?)?(?![\w:])"),
    ),
    _token(TokenKind.NUMBER, regex(r"-?\d+(?:\.\d+)?")),
    _token(TokenKind.STRING, regex(r"'(?:[^'\\]|\\.)*'|\"(?:[^\"\\]|\\.)*\"", flags=re.DOTALL)),
    _token(TokenKind.IDENTIFIER, regex(r"[A-Za-z_][A-Za-z0-9_]*")),
    _token(TokenKind.OPERATOR, _OPERATOR),
    _token(TokenKind.DOT, string(".")),
    _token(TokenKind.COMMA, string(",")),
    _token(TokenKind.LPAREN, string("(")),
    _token(TokenKind.RPAREN, string(")")),
)


def decode_string(lexeme: str) -> tuple[str, frozenset[int]]:
    """Decode a quoted string lexeme.

    LIKE escapes (`\\%`, `\\_`) and unknown escapes are kept verbatim. The
    returned offsets mark the backslashes that came from LIKE escapes, so they
    stay distinguishable from an escaped backslash followed by a wildcard.
    """
    body = lexeme[1:-1]
    parts: list[str] = []
    wildcards: set[int] = set()
    length = 0
    last = 0
    for match in _ESCAPE_PATTERN.finditer(body):
        parts.append(body[last : match.start()])
        length += match.start() - last
        char = match.group(1)
        if char in _WILDCARDS:
            wildcards.add(length)
            decoded = match.group(0)
        else:
            decoded = _ESCAPES.get(char, match.group(0))
        parts.append(decoded)
        length += len(decoded)
        last = match.end()
    parts.append(body[last:])
    return ("".join(parts), frozenset(wildcards))


def _decode_number(lexeme: str) -> int | Decimal:
    if "." in lexeme:
        return Decimal(lexeme)
    return int(lexeme)


def _decode_date(lexeme: str, position: int) -> date:
    try:
        if "T" in lexeme:
            return datetime.fromisoformat(lexeme)
        return date.fromisoformat(lexeme)
    except ValueError as exc:
        raise LexError(position, lexeme[0], f"Invalid date literal {lexeme!r}") from exc


def _make_token(kind: TokenKind, lexeme: str, position: int) -> Token:
    """Build token with decoded value for its kind."""
    match kind:
        case TokenKind.IDENTIFIER if lexeme.lower() in KEYWORDS:
            return Token(TokenKind.KEYWORD, lexeme, position, lexeme.lower())
        case TokenKind.STRING:
            return Token(kind, lexeme, position, decode_string(lexeme)[0])
        case TokenKind.NUMBER:
            return Token(kind, lexeme, position, _decode_number(lexeme))
        case TokenKind.DATE:
            return Token(kind, lexeme, position, _decode_date(lexeme, position))
        case TokenKind.OPERATOR:
            return Token(kind, lexeme, position, OperatorKind(lexeme))
    return Token(kind, lexeme, position, lexeme)


def _lex_error(text: str, position: int) -> LexError:
    char = text[position]
    if char in "'\"":
        return LexError(position, char, "Unterminated string literal")
    return LexError(position, char)


def tokenize(text: str) -> Iterator[Token]:
    """Lazily split query text into tokens.

    The stream always ends with a single EOF token. Errors are raised only
    when the offending character is reached, so consumers that stop early
    never see them.

    Raises:
        LexError: If a character cannot start any token
    """
    position = 0
    while True:
        whitespace, _rest = _WHITESPACE.parse_partial(text[position:])
        position += len(whitespace)
        if position >= len(text):
            yield Token(TokenKind.EOF, "", len(text))
            return

        try:
            (kind, lexeme), _rest = _TOKEN.parse_partial(text[position:])
        except ParseError as exc:
            raise _lex_error(text, position) from exc

        yield _make_token(kind, lexeme, position)
        position += len(lexeme)
