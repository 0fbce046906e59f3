"""Logging setup shared by the CLI and the API."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "pj_regime_analyzer"


def configure_logging(level: str = "INFO", console: Console | None = None) -> logging.Logger:
    """Attach a Rich handler to the package logger.

    Calling it again only updates the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=console,
            show_path=False,
            rich_tracebacks=True,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
