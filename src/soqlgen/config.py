"""Configuration handling for the soqlgen CLI."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TypeGuard

import typer

from soqlgen.output_format import OutputFormat
from soqlgen.query_language.validator import is_identifier


DEFAULT_CONFIG_NAME = ".soqlgen.json"

COMMAND_OPTION_NAMES = {
    "color_flag",
    "out",
    "out_theme",
    "show_ast",
    "verbose",
}


CONFIG_APPEND_DEFAULTS: dict[str, list[str]] = {}
CONFIG_DEFAULTS: dict[str, object] = {}


DEST_TO_OPTION_NAME: dict[str, str] = {
    "color_flag": "--color/--no-color",
    "config": "--config",
    "default_fields": "--default-field",
    "out": "--out",
    "out_theme": "--out-theme",
    "show_ast": "--show-ast",
    "verbose": "--verbose",
}


logger = logging.getLogger("soqlgen")


@dataclass
class ConfigOptions:
    """Config option mapping metadata."""

    bool_options: dict[str, str]
    str_options: dict[str, str]
    list_options: dict[str, str]


CONFIG_OPTIONS = ConfigOptions(
    bool_options={"--verbose": "verbose", "--show-ast": "show_ast"},
    str_options={"--out": "out", "--out-theme": "out_theme"},
    list_options={"--default-field": "default_fields"},
)


@dataclass
class LoadedCliConfig:
    """Fully parsed CLI config payload."""

    defaults: dict[str, object]
    append_defaults: dict[str, list[str]]


def load_config(filepath: str) -> tuple[dict[str, object], bool]:
    """Load config from JSON file.

    Args:
        filepath: Path to config file

    Returns:
        Tuple of (config dict, malformed flag)
    """
    try:
        with open(filepath, encoding="utf-8") as f:
            config = json.load(f)
    except FileNotFoundError:
        return ({}, False)
    except OSError:
        return ({}, True)
    except json.JSONDecodeError:
        return ({}, True)

    if not isinstance(config, dict):
        return ({}, True)

    return (config, False)


def is_string_list(value: object) -> TypeGuard[list[str]]:
    """Check if value is list[str]."""
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def parse_color_defaults(config: dict[str, object]) -> tuple[dict[str, object], bool]:
    """Parse color-related config defaults."""
    defaults: dict[str, object] = {}
    color_value = config.get("--color")
    no_color_value = config.get("--no-color")

    if "--color" in config and not isinstance(color_value, bool):
        return ({}, False)
    if "--no-color" in config and not isinstance(no_color_value, bool):
        return ({}, False)
    if color_value is True and no_color_value is True:
        return ({}, False)

    if color_value is True:
        defaults["color_flag"] = True
    if no_color_value is True:
        defaults["color_flag"] = False

    return (defaults, True)


def validate_str_option(key: str, value: object) -> str | None:
    """Validate string option value."""
    if not isinstance(value, str):
        return None
    if key == "--out" and value.strip().lower() not in {str(item) for item in OutputFormat}:
        return None
    return value


def validate_list_option(key: str, value: object) -> list[str] | None:
    """Validate list option value."""
    if not is_string_list(value):
        return None
    if key == "--default-field" and not all(is_identifier(item) for item in value):
        return None
    return value


def apply_config_entry(
    key: str,
    value: object,
    defaults: dict[str, object],
    append_defaults: dict[str, list[str]],
) -> bool:
    """Apply one config entry, returning False when it is invalid."""
    if key in {"--color", "--no-color"}:
        return True

    if key in CONFIG_OPTIONS.bool_options:
        if not isinstance(value, bool):
            return False
        defaults[CONFIG_OPTIONS.bool_options[key]] = value
        return True

    if key in CONFIG_OPTIONS.str_options:
        str_value = validate_str_option(key, value)
        if str_value is None:
            return False
        defaults[CONFIG_OPTIONS.str_options[key]] = str_value
        return True

    if key in CONFIG_OPTIONS.list_options:
        list_value = validate_list_option(key, value)
        if list_value is None:
            return False
        append_defaults[CONFIG_OPTIONS.list_options[key]] = list_value
        return True

    return False


def build_config_defaults(
    config: dict[str, object],
) -> tuple[dict[str, object], dict[str, list[str]]] | None:
    """Build defaults from a config object, or None when it is malformed."""
    color_defaults, color_valid = parse_color_defaults(config)
    if not color_valid:
        return None

    defaults: dict[str, object] = dict(color_defaults)
    append_defaults: dict[str, list[str]] = {}
    for key, value in config.items():
        if not apply_config_entry(key, value, defaults, append_defaults):
            return None

    return (defaults, append_defaults)


def parse_config_argument(argv: list[str]) -> str:
    """Parse only the --config argument from argv."""
    for idx, arg in enumerate(argv[1:], start=1):
        if arg == "--config" and idx + 1 < len(argv):
            return argv[idx + 1]
        if arg.startswith("--config="):
            return arg.split("=", 1)[1]
    return DEFAULT_CONFIG_NAME


def load_cli_config(argv: list[str]) -> LoadedCliConfig:
    """Load config defaults from the configured file path.

    Raises:
        typer.BadParameter: If the config file is malformed
    """
    config_name = parse_config_argument(argv)
    config_path = Path(config_name)
    if not config_path.is_absolute():
        config_path = Path.cwd() / config_name
    config, load_error = load_config(str(config_path))

    if load_error:
        raise typer.BadParameter("Malformed config")

    config_defaults = build_config_defaults(config)
    if config_defaults is None:
        raise typer.BadParameter("Malformed config")

    defaults, append_defaults = config_defaults
    filtered_defaults = {
        key: value for key, value in defaults.items() if key in COMMAND_OPTION_NAMES
    }
    return LoadedCliConfig(defaults=filtered_defaults, append_defaults=append_defaults)


def build_default_map(defaults: dict[str, object]) -> dict[str, dict[str, object]]:
    """Build Click default_map for Typer commands."""
    tokens_defaults = {key: value for key, value in defaults.items() if key == "color_flag"}
    return {
        "translate": dict(defaults),
        "tokens": tokens_defaults,
    }


def _format_log_entry(name: str, value: object) -> str:
    """Format one name/value pair for logging."""
    return f"{name}={value!r}"


def log_applied_config_defaults(command_name: str) -> None:
    """Log config defaults loaded from config file."""
    if not logger.isEnabledFor(logging.INFO):
        return

    entries: list[str] = []
    for dest, value in sorted({**CONFIG_DEFAULTS, **CONFIG_APPEND_DEFAULTS}.items()):
        option_name = DEST_TO_OPTION_NAME.get(dest)
        if option_name is None:
            continue
        entries.append(_format_log_entry(option_name, value))

    if entries:
        logger.info("Config defaults applied (%s): %s", command_name, ", ".join(entries))


def log_command_arguments(args: object, command_name: str) -> None:
    """Log all final argument values used to run a command."""
    if not logger.isEnabledFor(logging.INFO):
        return

    try:
        arg_items = vars(args).items()
    except TypeError:
        return

    entries = [
        _format_log_entry(arg_name, arg_value)
        for arg_name, arg_value in sorted(arg_items, key=lambda item: item[0])
    ]
    logger.info("Command arguments (%s): %s", command_name, ", ".join(entries))


def apply_config_defaults(args: object) -> None:
    """Apply config-provided defaults for list options left unset."""
    for dest, values in CONFIG_APPEND_DEFAULTS.items():
        if not hasattr(args, dest):
            continue
        if getattr(args, dest, None) is None:
            setattr(args, dest, list(values))
