"""Tokens command listing the lexical tokens of a query expression."""

from __future__ import annotations

from dataclasses import dataclass

import click
import typer
from rich.table import Table
from rich.text import Text

from soqlgen import config as config_module
from soqlgen.query_language import LexError, Token, TokenKind, format_error, tokenize
from soqlgen.tui import build_console, setup_output


@dataclass
class TokensArgs:
    """Arguments for the tokens command."""

    query: str
    color_flag: bool | None


def _token_value(token: Token) -> str:
    if token.kind is TokenKind.EOF:
        return ""
    return str(token.value)


def build_token_table(tokens: list[Token]) -> Table:
    """Build a table with one row per token."""
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("POS", justify="right")
    table.add_column("KIND")
    table.add_column("TEXT")
    table.add_column("VALUE")
    for token in tokens:
        table.add_row(
            str(token.position), token.kind.name, Text(token.text), Text(_token_value(token))
        )
    return table


def run_tokens(args: TokensArgs) -> None:
    """Run the tokens command."""
    color_enabled = setup_output(args)
    console = build_console(color_enabled)
    try:
        tokens = list(tokenize(args.query))
    except LexError as exc:
        raise click.UsageError(format_error(args.query, exc)) from exc
    console.print(build_token_table(tokens))


def register(app: typer.Typer) -> None:
    """Register the tokens command."""

    @app.command("tokens")
    def tokens_command(
        query: str = typer.Argument(..., metavar="QUERY", help="Query expression to tokenize"),
        color_flag: bool | None = typer.Option(
            None,
            "--color/--no-color",
            help="Force colored output",
        ),
    ) -> None:
        """Show the tokens of a query expression."""
        args = TokensArgs(query=query, color_flag=color_flag)
        config_module.log_applied_config_defaults("tokens")
        config_module.log_command_arguments(args, "tokens")
        run_tokens(args)
