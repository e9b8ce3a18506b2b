"""Token types produced by the query lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class TokenKind(StrEnum):
    """Kinds of lexical tokens."""

    IDENTIFIER = "identifier"
    KEYWORD = "keyword"
    DOT = "'.'"
    COMMA = "','"
    LPAREN = "'('"
    RPAREN = "')'"
    OPERATOR = "operator"
    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    EOF = "end of query"


KEYWORDS = frozenset({"and", "or", "not", "in", "like", "asc", "desc", "true", "false", "null"})


@dataclass(frozen=True, slots=True)
class Token:
    """One lexical token with its source offset.

    `text` is the lexeme exactly as written; `value` holds the decoded payload
    (string contents, number, date, operator kind or lower-cased keyword).
    """

    kind: TokenKind
    text: str
    position: int
    value: object = None

    def is_keyword(self, name: str) -> bool:
        """Return whether token is the given keyword."""
        return self.kind is TokenKind.KEYWORD and self.value == name
