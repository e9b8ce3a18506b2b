"""Shared fixtures for soqlgen tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from soqlgen import cli, config


@pytest.fixture(autouse=True)
def reset_cli_state() -> Iterator[None]:
    """Restore logger and config globals touched by CLI entrypoints."""
    yield
    logger = logging.getLogger("soqlgen")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    config.CONFIG_DEFAULTS.clear()
    config.CONFIG_APPEND_DEFAULTS.clear()
    cli.DEFAULT_VERBOSE["value"] = False
