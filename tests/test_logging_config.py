"""Tests for logging configuration."""

from __future__ import annotations

import logging

from soqlgen.logging_config import LOGGER_NAME, configure_logging


def test_configure_logging_quiet() -> None:
    """Non-verbose logging should only pass warnings and keep no handlers."""
    configure_logging(False)
    logger = logging.getLogger(LOGGER_NAME)

    assert logger.level == logging.WARNING
    assert logger.handlers == []
    assert logger.propagate is False


def test_configure_logging_verbose() -> None:
    """Verbose logging should add one stdout handler at INFO."""
    configure_logging(True)
    logger = logging.getLogger(LOGGER_NAME)

    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert logger.handlers[0].level == logging.INFO


def test_configure_logging_debug() -> None:
    """Debug logging should lower the level to DEBUG."""
    configure_logging(False, debug=True)

    assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG


def test_configure_logging_reuses_handler() -> None:
    """Repeated configuration should not stack handlers."""
    configure_logging(True)
    configure_logging(True, debug=True)
    logger = logging.getLogger(LOGGER_NAME)

    assert len(logger.handlers) == 1
    assert logger.handlers[0].level == logging.DEBUG
