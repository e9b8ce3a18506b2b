"""Translate command turning query expressions into SOQL."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import click
import typer

from soqlgen import config as config_module
from soqlgen.output_format import (
    DEFAULT_OUTPUT_THEME,
    OutputFormat,
    OutputFormatError,
    get_query_formatter,
    print_prepared_output,
)
from soqlgen.query_language import (
    DEFAULT_FIELDS,
    QueryLanguageError,
    compile_query_text,
    format_error,
)
from soqlgen.query_language.validator import is_identifier
from soqlgen.tui import build_console, print_ast, print_error, setup_output


logger = logging.getLogger("soqlgen")


@dataclass
class TranslateArgs:
    """Arguments for the translate command."""

    queries: list[str] | None
    file: str | None
    default_fields: list[str] | None
    color_flag: bool | None
    out: str
    out_theme: str
    show_ast: bool


def _read_query_file(filepath: str) -> list[str]:
    """Read one query per line, skipping blank lines and `#` comments.

    Raises:
        typer.BadParameter: If file cannot be read
    """
    try:
        with open(filepath, encoding="utf-8") as f:
            lines = [line.strip() for line in f]
    except FileNotFoundError as err:
        raise typer.BadParameter(f"Query file '{filepath}' not found") from err
    except PermissionError as err:
        raise typer.BadParameter(f"Permission denied for '{filepath}'") from err
    except UnicodeDecodeError as err:
        raise typer.BadParameter(f"Query file '{filepath}' is not valid UTF-8") from err
    except OSError as err:
        raise typer.BadParameter(f"Cannot read query file '{filepath}': {err.strerror}") from err
    return [line for line in lines if line and not line.startswith("#")]


def collect_queries(args: TranslateArgs) -> list[str]:
    """Collect queries from arguments and the optional query file."""
    queries = list(args.queries or [])
    if args.file is not None:
        queries.extend(_read_query_file(args.file))
    if not queries:
        raise click.UsageError("Provide at least one QUERY or --file")
    return queries


def resolve_default_fields(args: TranslateArgs) -> tuple[str, ...]:
    """Return the default field set, checking user supplied names."""
    if not args.default_fields:
        return DEFAULT_FIELDS
    for name in args.default_fields:
        if not is_identifier(name):
            raise typer.BadParameter(f"Invalid default field name: {name!r}")
    return tuple(args.default_fields)


def run_translate(args: TranslateArgs) -> None:
    """Run the translate command."""
    color_enabled = setup_output(args)
    console = build_console(color_enabled)
    error_console = build_console(color_enabled, stderr=True)
    try:
        formatter = get_query_formatter(args.out)
    except OutputFormatError as exc:
        raise click.UsageError(str(exc)) from exc

    queries = collect_queries(args)
    default_fields = resolve_default_fields(args)
    batch = len(queries) > 1 or args.file is not None
    logger.info("Translating %d quer%s", len(queries), "y" if len(queries) == 1 else "ies")

    failures = 0
    for text in queries:
        try:
            compiled = compile_query_text(text, default_fields)
        except QueryLanguageError as exc:
            message = format_error(text, exc)
            if not batch:
                raise click.UsageError(message) from exc
            failures += 1
            print_error(error_console, message, color_enabled)
            continue

        if args.show_ast:
            print_ast(console, compiled.query)
        print_prepared_output(console, formatter.prepare(compiled, color_enabled, args.out_theme))

    if failures:
        logger.info("%d of %d queries failed", failures, len(queries))
        raise typer.Exit(code=1)


def register(app: typer.Typer) -> None:
    """Register the translate command."""

    @app.command("translate")
    def translate_command(  # noqa: PLR0913
        queries: list[str] | None = typer.Argument(  # noqa: B008
            None, metavar="QUERY", help="Query expressions such as Account.where(Name = 'Acme')"
        ),
        file: str | None = typer.Option(
            None,
            "--file",
            "-f",
            metavar="FILE",
            help="File with one query per line (blank lines and # comments are skipped)",
        ),
        default_fields: list[str] | None = typer.Option(  # noqa: B008
            None,
            "--default-field",
            metavar="NAME",
            help="Field selected when a query has no select() (repeatable, default: Id)",
        ),
        color_flag: bool | None = typer.Option(
            None,
            "--color/--no-color",
            help="Force colored output",
        ),
        out: str = typer.Option(
            OutputFormat.SOQL,
            "--out",
            help="Output format: soql or json",
        ),
        out_theme: str = typer.Option(
            DEFAULT_OUTPUT_THEME,
            "--out-theme",
            help="Syntax theme for highlighted output",
        ),
        show_ast: bool = typer.Option(
            False,
            "--show-ast",
            help="Also print the validated query AST",
        ),
    ) -> None:
        """Translate query expressions into SOQL statements."""
        args = TranslateArgs(
            queries=queries,
            file=file,
            default_fields=default_fields,
            color_flag=color_flag,
            out=out,
            out_theme=out_theme,
            show_ast=show_ast,
        )
        config_module.apply_config_defaults(args)
        config_module.log_applied_config_defaults("translate")
        config_module.log_command_arguments(args, "translate")
        run_translate(args)

