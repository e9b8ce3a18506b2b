"""Logging configuration for the soqlgen CLI."""

from __future__ import annotations

import logging
import sys


LOGGER_NAME = "soqlgen"


def configure_logging(verbose: bool, debug: bool = False) -> None:
    """Configure logging output based on verbosity.

    Args:
        verbose: Whether to enable INFO logging to stdout
        debug: Whether to also log parsed ASTs at DEBUG level
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.propagate = False

    if not verbose and not debug:
        logger.setLevel(logging.WARNING)
        logger.handlers.clear()
        return

    level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(level)
    handler = next(
        (item for item in logger.handlers if isinstance(item, logging.StreamHandler)), None
    )
    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    handler.setLevel(level)
