#!/usr/bin/env python
"""CLI interface for soqlgen - query expression to SOQL translation."""

from __future__ import annotations

import sys

import typer

from soqlgen import config, logging_config
from soqlgen.commands import tokens, translate


app = typer.Typer(
    help="Translate Object.method(...) query expressions into SOQL.",
    no_args_is_help=True,
)


DEFAULT_VERBOSE: dict[str, bool] = {"value": False}


def _resolve_verbose(verbose: bool | None) -> bool:
    if verbose is None:
        return DEFAULT_VERBOSE["value"]
    return verbose


@app.callback()
def main_callback(
    verbose: bool | None = typer.Option(
        None,
        "--verbose",
        "-v",
        help="Enable verbose logging output",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Log parsed query ASTs",
    ),
    config_name: str = typer.Option(
        config.DEFAULT_CONFIG_NAME,
        "--config",
        metavar="FILE",
        help="Config file name to load from current directory",
    ),
) -> None:
    """Global CLI options."""
    del config_name
    if verbose is None and not debug and not DEFAULT_VERBOSE["value"]:
        return
    logging_config.configure_logging(_resolve_verbose(verbose), debug)


translate.register(app)
tokens.register(app)


def main() -> None:
    """Main CLI entry point."""
    loaded_config = config.load_cli_config(sys.argv)
    defaults = dict(loaded_config.defaults)
    DEFAULT_VERBOSE["value"] = bool(defaults.pop("verbose", False))
    config.CONFIG_APPEND_DEFAULTS.clear()
    config.CONFIG_APPEND_DEFAULTS.update(loaded_config.append_defaults)
    config.CONFIG_DEFAULTS.clear()
    config.CONFIG_DEFAULTS.update(defaults)

    command = typer.main.get_command(app)
    default_map = config.build_default_map(defaults) if defaults else None
    command.main(
        args=sys.argv[1:],
        prog_name="soqlgen",
        standalone_mode=True,
        default_map=default_map,
    )


if __name__ == "__main__":
    main()
