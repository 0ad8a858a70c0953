"""Logging setup shared by the API server and scripts."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_NAME = "team_tracker"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single console handler to the package logger.

    Calling this more than once only updates the level.
    """
    logger = logging.getLogger("team_tracker")
    logger.setLevel(level.upper())

    if not any(handler.get_name() == _HANDLER_NAME for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    return logger
