"""Tests for soqlgen.color utilities."""

from __future__ import annotations

import sys

import pytest

from soqlgen import color


def test_should_use_color_respects_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    """Explicit color flag should override TTY detection."""
    monkeypatch.setattr(sys.stdout, "isatty", lambda: False)

    assert color.should_use_color(True) is True
    assert color.should_use_color(False) is False


def test_should_use_color_uses_tty(monkeypatch: pytest.MonkeyPatch) -> None:
    """When flag is None, use TTY detection."""
    monkeypatch.setattr(sys.stdout, "isatty", lambda: True)

    assert color.should_use_color(None) is True


def test_colorize_noop_when_disabled() -> None:
    """colorize should return original text when disabled."""
    assert color.colorize("hello", "green", False) == "hello"


def test_colorize_wraps_when_enabled() -> None:
    """colorize should wrap text with markup when enabled."""
    assert color.colorize("hello", "green", True) == "[green]hello[/]"


def test_colorize_escapes_markup() -> None:
    """Query text containing brackets should not be read as markup."""
    assert color.colorize("[x]", "green", True) == "[green]\\[x][/]"


def test_error_styles() -> None:
    """Error helpers should use their dedicated styles."""
    assert color.error_red("bad", True) == "[bold red]bad[/]"
    assert color.pointer_yellow("^", True) == "[bold yellow]^[/]"
    assert color.dim_white("line", True) == "[dim white]line[/]"
    assert color.error_red("bad", False) == "bad"
