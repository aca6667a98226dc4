"""Logging configuration for pruner."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str = "WARNING") -> None:
    """Configure the ``pruner`` logger.

    Records go to stderr since stdout carries the prompts. Calling this again
    replaces the handler instead of adding a second one.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logger = logging.getLogger("pruner")
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers.clear()

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
    )
    console_handler.setLevel(getattr(logging, level.upper()))
    logger.addHandler(console_handler)

    # Don't propagate to root logger
    logger.propagate = False
