"""Logging setup for command-line and desktop entry points."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "artanalyst"


def configure_logging(level: str | int = "WARNING", console: Console | None = None) -> logging.Logger:
    """Route the ``artanalyst`` logger through a Rich handler.

    Args:
        level: Log level name or number
        console: Console to write to (defaults to stderr)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level if isinstance(level, int) else level.upper())

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger
