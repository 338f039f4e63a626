"""Tests for logging configuration."""

import logging

from naijafit.app_logging import configure_logging


def test_configure_logging_installs_one_handler() -> None:
    logger = logging.getLogger("naijafit")
    logger.handlers.clear()

    configure_logging()
    configure_logging()

    assert len(logger.handlers) == 1
    assert logger.propagate is False


def test_configure_logging_accepts_level_names() -> None:
    logger = logging.getLogger("naijafit")

    configure_logging("debug")
    assert logger.level == logging.DEBUG

    configure_logging(logging.WARNING)
    assert logger.level == logging.WARNING

    configure_logging()
    assert logger.level == logging.INFO
