"""Logging setup for the apathy CLI.

Library modules only create module-level loggers; handlers are installed
here, once, by the command-line entry point.
"""

import logging

from rich.logging import RichHandler

from apathy.utils.formatting import err_console

LOG_FORMAT = "%(name)s: %(message)s"


def setup_logging(level: str = "WARNING") -> None:
    """Attach a Rich stderr handler to the ``apathy`` logger.

    Calling this again only updates the level; no second handler is added.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR).
    """
    logger = logging.getLogger("apathy")
    logger.setLevel(level.upper())

    if any(isinstance(h, RichHandler) for h in logger.handlers):
        return

    handler = RichHandler(console=err_console, show_path=False, show_time=False)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
