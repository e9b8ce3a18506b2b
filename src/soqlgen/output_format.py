"""Output format abstraction and format-specific renderers."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from rich.console import Console
from rich.syntax import Syntax

from soqlgen.query_language import CompiledQuery


DEFAULT_OUTPUT_THEME = "github-dark"


class OutputFormat(StrEnum):
    """Supported output formats."""

    SOQL = "soql"
    JSON = "json"


_SYNTAX_LANGUAGES: dict[str, str] = {
    OutputFormat.SOQL: "sql",
    OutputFormat.JSON: "json",
}


class OutputFormatError(Exception):
    """Raised when an output format cannot be used."""


@dataclass(frozen=True)
class OutputOperation:
    """One prepared output operation."""

    kind: str
    text: str | None = None
    renderable: object | None = None


@dataclass(frozen=True)
class PreparedOutput:
    """Prepared output operations ready for console rendering."""

    operations: tuple[OutputOperation, ...]


class QueryOutputFormatter(Protocol):
    """Formatter interface for translated queries."""

    def prepare(
        self, compiled: CompiledQuery, color_enabled: bool, out_theme: str
    ) -> PreparedOutput:
        """Prepare one translated query for rendering."""
        ...


def _normalize_syntax_theme(out_theme: str) -> str:
    """Return a valid theme name for syntax rendering."""
    normalized_theme = out_theme.strip()
    if normalized_theme:
        return normalized_theme
    return DEFAULT_OUTPUT_THEME


def _prepare_output(
    text: str,
    color_enabled: bool,
    output_format: OutputFormat,
    out_theme: str,
) -> PreparedOutput:
    """Prepare output with syntax highlighting when color is enabled."""
    if color_enabled:
        return PreparedOutput(
            operations=(
                OutputOperation(
                    kind="console_print",
                    renderable=Syntax(
                        text,
                        _SYNTAX_LANGUAGES[output_format],
                        theme=_normalize_syntax_theme(out_theme),
                        line_numbers=False,
                        word_wrap=True,
                    ),
                ),
            )
        )
    return PreparedOutput(operations=(OutputOperation(kind="plain_write", text=text),))


def json_output_payload(compiled: CompiledQuery) -> dict[str, object]:
    """Build JSON payload describing one translated query."""
    query = compiled.query
    return {
        "query": compiled.text,
        "soql": compiled.soql,
        "object": query.object_name,
        "fields": list(query.fields),
        "limit": compiled.limit,
        "open_record": compiled.open_record,
    }


class SoqlOutputFormatter:
    """Plain SOQL output formatter."""

    def prepare(
        self, compiled: CompiledQuery, color_enabled: bool, out_theme: str
    ) -> PreparedOutput:
        return _prepare_output(compiled.soql, color_enabled, OutputFormat.SOQL, out_theme)


class JsonOutputFormatter:
    """JSON output formatter."""

    def prepare(
        self, compiled: CompiledQuery, color_enabled: bool, out_theme: str
    ) -> PreparedOutput:
        text = json.dumps(json_output_payload(compiled), ensure_ascii=True)
        return _prepare_output(text, color_enabled, OutputFormat.JSON, out_theme)


_SOQL_FORMATTER = SoqlOutputFormatter()
_JSON_FORMATTER = JsonOutputFormatter()


def get_query_formatter(output_format: str) -> QueryOutputFormatter:
    """Return formatter for selected output format.

    Raises:
        OutputFormatError: If the format is not supported
    """
    normalized_output = output_format.strip().lower()
    if normalized_output == OutputFormat.SOQL:
        return _SOQL_FORMATTER
    if normalized_output == OutputFormat.JSON:
        return _JSON_FORMATTER
    supported = ", ".join(str(value) for value in OutputFormat)
    raise OutputFormatError(f"Unsupported output format: {output_format}. Supported: {supported}")


def _write_plain_output(console: Console, text: str) -> None:
    """Write plain output directly to console stream."""
    console.file.write(f"{text}\n")
    console.file.flush()


def print_prepared_output(console: Console, prepared_output: PreparedOutput) -> None:
    """Print already prepared output operations."""
    for operation in prepared_output.operations:
        if operation.kind == "plain_write":
            if operation.text is not None:
                _write_plain_output(console, operation.text)
            continue
        if operation.renderable is not None:
            console.print(operation.renderable)
