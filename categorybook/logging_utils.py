"""Mini README: Application-wide logging helpers for categorybook.

Structure:
    * get_logger - factory returning module loggers with baseline configuration.
    * configure_root_logger - installs the handler once and applies explicit levels.

Usage:
    Modules import ``get_logger`` and keep a module level ``LOGGER``. Storage
    failures are reported through these loggers, which act as the diagnostic
    channel for the data store. Configuration runs once per process so reloads
    during development never stack duplicate handlers.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False


def configure_root_logger(level: Optional[Union[int, str]] = None) -> None:
    """Configure the root logger with a readable, timestamped formatter.

    The handler is installed once; an explicit ``level`` is applied on every call.
    """

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    if level is not None:
        root_logger.setLevel(level.upper() if isinstance(level, str) else level)
    if _LOGGER_INITIALISED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    if level is None:
        root_logger.setLevel(logging.INFO)
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
