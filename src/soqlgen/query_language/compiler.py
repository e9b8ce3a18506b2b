"""Compiler entrypoints for query language."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from soqlgen.query_language.ast import Query
from soqlgen.query_language.generator import DEFAULT_FIELDS, effective_limit, generate
from soqlgen.query_language.lexer import tokenize
from soqlgen.query_language.parser import parse
from soqlgen.query_language.validator import validate


logger = logging.getLogger("soqlgen")


@dataclass(frozen=True, slots=True)
class CompiledQuery:
    """Query text together with its validated AST and generated SOQL."""

    text: str
    query: Query
    soql: str

    @property
    def open_record(self) -> bool:
        """Whether the first matching record should be opened."""
        return self.query.open_record

    @property
    def limit(self) -> int | Decimal | None:
        """Row limit applied by the generated SOQL."""
        return effective_limit(self.query)


def compile_query(
    text: str, query: Query, default_fields: Sequence[str] = DEFAULT_FIELDS
) -> CompiledQuery:
    """Validate an already parsed query and generate its SOQL."""
    validated = validate(query)
    soql = generate(validated, default_fields)
    logger.info("Generated query: %s", soql)
    return CompiledQuery(text, validated, soql)


def compile_query_text(text: str, default_fields: Sequence[str] = DEFAULT_FIELDS) -> CompiledQuery:
    """Lex, parse, validate and generate SOQL for query text.

    Raises:
        QueryLanguageError: From the first stage that fails
    """
    return compile_query(text, parse(tokenize(text)), default_fields)


def translate(text: str, default_fields: Sequence[str] = DEFAULT_FIELDS) -> str:
    """Translate query text into a SOQL statement."""
    return compile_query_text(text, default_fields).soql
