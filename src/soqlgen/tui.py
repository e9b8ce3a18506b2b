"""Terminal output helpers for the soqlgen CLI."""

from __future__ import annotations

from typing import Protocol

from rich.console import Console
from rich.pretty import Pretty

from soqlgen.color import dim_white, error_red, pointer_yellow, should_use_color
from soqlgen.query_language.ast import Query


class ColorArgs(Protocol):
    """Arguments carrying the --color/--no-color flag."""

    color_flag: bool | None


def setup_output(args: ColorArgs) -> bool:
    """Resolve whether colored output is enabled for a command."""
    return should_use_color(args.color_flag)


def build_console(color_enabled: bool, stderr: bool = False) -> Console:
    """Build rich console honoring the color setting."""
    return Console(
        stderr=stderr,
        force_terminal=color_enabled,
        no_color=not color_enabled,
        highlight=False,
        soft_wrap=True,
    )


def colorize_error(message: str, color_enabled: bool) -> str:
    """Color a formatted query error: header in red, pointer line in yellow."""
    lines = message.split("\n")
    colored = [error_red(lines[0], color_enabled)]
    if len(lines) > 1:
        colored.extend(dim_white(line, color_enabled) if line else "" for line in lines[1:-1])
        colored.append(pointer_yellow(lines[-1], color_enabled))
    return "\n".join(colored)


def print_error(console: Console, message: str, color_enabled: bool) -> None:
    """Print a formatted query error."""
    console.print(colorize_error(message, color_enabled), markup=color_enabled)


def print_ast(console: Console, query: Query) -> None:
    """Pretty-print a query AST."""
    console.print(Pretty(query, expand_all=True))
