"""Tests for tui output helpers."""

from __future__ import annotations

from types import SimpleNamespace

import pytest
from rich.console import Console

from soqlgen.query_language import parse_query
from soqlgen.tui import build_console, colorize_error, print_ast, print_error, setup_output


ERROR = "Invalid query: Limit must be a positive integer, got 0\n\nAccount.limit(0)\n              ^"


def test_setup_output_uses_flag() -> None:
    """setup_output should honor an explicit color flag."""
    assert setup_output(SimpleNamespace(color_flag=True)) is True
    assert setup_output(SimpleNamespace(color_flag=False)) is False


def test_build_console_without_color() -> None:
    """Consoles without color should not force a terminal."""
    console = build_console(False)

    assert console.no_color is True
    assert console.is_terminal is False


def test_build_console_stderr() -> None:
    """Error consoles should write to stderr."""
    assert build_console(False, stderr=True).stderr is True


def test_colorize_error_disabled_returns_message() -> None:
    """Without color the message should be unchanged."""
    assert colorize_error(ERROR, False) == ERROR


def test_colorize_error_styles_header_and_pointer() -> None:
    """Header should be red and the pointer line yellow."""
    colored = colorize_error(ERROR, True).split("\n")

    assert colored[0].startswith("[bold red]Invalid query:")
    assert colored[1] == ""
    assert colored[2] == "[dim white]Account.limit(0)[/]"
    assert colored[3] == "[bold yellow]" + " " * 14 + "^[/]"


def test_colorize_error_header_only() -> None:
    """Messages without a pointer should only style the header."""
    assert colorize_error("Invalid query: x", True) == "[bold red]Invalid query: x[/]"


def test_print_error_plain(capsys: pytest.CaptureFixture[str]) -> None:
    """print_error should print plain text when color is disabled."""
    print_error(build_console(False), "Invalid query: [x]", False)

    assert capsys.readouterr().out == "Invalid query: [x]\n"


def test_print_ast_shows_query_fields() -> None:
    """print_ast should pretty print every query attribute."""
    console = Console(width=100, no_color=True)
    with console.capture() as capture:
        print_ast(console, parse_query("Account.select(Name).limit(2)"))
    output = capture.get()

    assert "object_name='Account'" in output
    assert "'Name'" in output
    assert "limit=2" in output
