"""Public API for query language lexer/parser/validator/generator."""

from soqlgen.query_language.compiler import (
    CompiledQuery,
    compile_query,
    compile_query_text,
    translate,
)
from soqlgen.query_language.errors import (
    DuplicateModifierError,
    InvalidFieldNameError,
    InvalidLimitError,
    LexError,
    QueryLanguageError,
    QueryParseError,
    QueryValidationError,
    TypeMismatchError,
    UnexpectedTokenError,
    UnterminatedExpressionError,
    format_error,
)
from soqlgen.query_language.generator import DEFAULT_FIELDS, generate
from soqlgen.query_language.lexer import tokenize
from soqlgen.query_language.parser import parse, parse_query
from soqlgen.query_language.tokens import Token, TokenKind
from soqlgen.query_language.validator import validate


__all__ = [
    "DEFAULT_FIELDS",
    "CompiledQuery",
    "DuplicateModifierError",
    "InvalidFieldNameError",
    "InvalidLimitError",
    "LexError",
    "QueryLanguageError",
    "QueryParseError",
    "QueryValidationError",
    "Token",
    "TokenKind",
    "TypeMismatchError",
    "UnexpectedTokenError",
    "UnterminatedExpressionError",
    "compile_query",
    "compile_query_text",
    "format_error",
    "generate",
    "parse",
    "parse_query",
    "tokenize",
    "translate",
    "validate",
]
