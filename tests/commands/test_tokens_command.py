"""Tests for tokens command."""

from __future__ import annotations

import click
import pytest
from rich.console import Console
from typer.testing import CliRunner

from soqlgen.cli import app
from soqlgen.commands.tokens import TokensArgs, build_token_table, run_tokens
from soqlgen.query_language import tokenize


def test_build_token_table_has_one_row_per_token() -> None:
    """Token table should list every token including EOF."""
    table = build_token_table(list(tokenize("Account.limit(5)")))

    assert table.row_count == 7
    assert [column.header for column in table.columns] == ["POS", "KIND", "TEXT", "VALUE"]


def test_build_token_table_renders_kinds_and_values() -> None:
    """Rendered table should show kind names, lexemes and decoded values."""
    console = Console(width=120, no_color=True, force_terminal=False)
    with console.capture() as capture:
        console.print(build_token_table(list(tokenize("Case.where(Subject = 'O\\'Brien')"))))
    output = capture.get()

    assert "IDENTIFIER" in output
    assert "OPERATOR" in output
    assert "'O\\'Brien'" in output
    assert "O'Brien" in output
    assert "EOF" in output


def test_run_tokens_prints_table(capsys: pytest.CaptureFixture[str]) -> None:
    """run_tokens should print the token table."""
    run_tokens(TokensArgs(query="Account.where(Id in (1, 2))", color_flag=False))

    output = capsys.readouterr().out
    assert "KEYWORD" in output
    assert "NUMBER" in output
    assert "LPAREN" in output


def test_run_tokens_lex_error_raises_usage_error() -> None:
    """Lex errors should be reported with a pointer."""
    with pytest.raises(click.UsageError) as exc_info:
        run_tokens(TokensArgs(query="Account $", color_flag=False))

    assert exc_info.value.message == (
        "Invalid query syntax: Unexpected character '$' at position 8\n\n"
        "Account $\n" + " " * 8 + "^"
    )


def test_tokens_command_via_runner() -> None:
    """CLI tokens should list tokens without parsing the query."""
    runner = CliRunner()

    result = runner.invoke(app, ["tokens", "--no-color", "Account.where("])

    assert result.exit_code == 0
    assert "IDENTIFIER" in result.stdout
    assert "EOF" in result.stdout
