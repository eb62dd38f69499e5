"""Unit tests for CLI logging setup."""

import logging
from collections.abc import Iterator

import pytest
from apathy.core.log import setup_logging
from rich.logging import RichHandler


@pytest.fixture(autouse=True)
def reset_logger() -> Iterator[None]:
    """Restore the apathy logger after each test."""
    logger = logging.getLogger("apathy")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def test_installs_rich_handler() -> None:
    """setup_logging attaches a single RichHandler."""
    setup_logging("INFO")

    logger = logging.getLogger("apathy")
    assert logger.level == logging.INFO
    assert sum(isinstance(h, RichHandler) for h in logger.handlers) == 1


def test_repeated_setup_updates_level() -> None:
    """Calling setup_logging again changes the level without adding handlers."""
    setup_logging("INFO")
    setup_logging("debug")

    logger = logging.getLogger("apathy")
    assert logger.level == logging.DEBUG
    assert sum(isinstance(h, RichHandler) for h in logger.handlers) == 1
