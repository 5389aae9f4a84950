"""Logging setup for the ``rvn`` logger hierarchy.

Modules log through ``logging.getLogger(__name__)``; nothing is shown
until :func:`configure_logging` attaches a Rich handler on stderr.
WARNING and above by default, everything under ``--trace``.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "rvn"

# Handler installed by the last configure_logging() call
_handler: logging.Handler | None = None


def configure_logging(trace: bool = False) -> logging.Logger:
    """Install (or replace) the stderr handler and return the package logger."""
    global _handler

    logger = logging.getLogger(LOGGER_NAME)
    level = logging.DEBUG if trace else logging.WARNING
    logger.setLevel(level)

    if _handler is not None:
        logger.removeHandler(_handler)

    _handler = RichHandler(
        console=Console(stderr=True),
        level=level,
        show_time=trace,
        show_path=trace,
        rich_tracebacks=True,
        markup=False,
    )
    logger.addHandler(_handler)
    return logger
