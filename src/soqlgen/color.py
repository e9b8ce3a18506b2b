"""Color support for CLI output using Rich markup."""

import sys

from rich.markup import escape


def should_use_color(color_flag: bool | None) -> bool:
    """Determine if color should be used based on flag and TTY detection.

    Args:
        color_flag: Explicit color preference (True/False) or None for auto-detect

    Returns:
        True if colors should be used, False otherwise
    """
    if color_flag is None:
        return sys.stdout.isatty()
    return color_flag


def colorize(text: str, style: str, enabled: bool) -> str:
    """Apply Rich markup style to text if enabled.

    Args:
        text: Text to colorize
        style: Rich style string (e.g., "green", "bold white")
        enabled: Whether coloring is enabled

    Returns:
        Styled text if enabled, original text otherwise
    """
    if not enabled:
        return text
    return f"[{style}]{escape(text)}[/]"


def error_red(text: str, enabled: bool) -> str:
    """Apply bold red color used for error headers."""
    return colorize(text, "bold red", enabled)


def pointer_yellow(text: str, enabled: bool) -> str:
    """Apply yellow color used for the error pointer line."""
    return colorize(text, "bold yellow", enabled)


def dim_white(text: str, enabled: bool) -> str:
    """Apply dim white color to text."""
    return colorize(text, "dim white", enabled)
