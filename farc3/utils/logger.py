"""Logging utilities for the solver and its command-line front end."""

from __future__ import annotations

import logging
from typing import Optional

PACKAGE_LOGGER = "farc3"
_HANDLER_NAME = "farc3-console"


def configure_logging(level: int = logging.WARNING) -> None:
    """Print the package's records to stderr at ``level``.

    Only the ``farc3`` logger is touched, and calling this again replaces
    the handler from the previous call. The engine logs search steps at
    DEBUG only.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    ))
    logger.addHandler(handler)
    logger.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name or PACKAGE_LOGGER)
