"""Logging utilities."""

from __future__ import annotations

import logging
import sys
from typing import Optional

_DEFAULT_LEVEL = logging.WARNING

_loggers: dict[str, logging.Logger] = {}
_handlers: dict[str, logging.Handler] = {}


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create a logger under the `sqalgebra` namespace.

    Loggers are cached so that each one is given a single handler.

    Args:
        name: Logger name, typically `__name__` of the calling module.

    Returns:
        Configured logger.
    """
    if name is None:
        name = "sqalgebra"
    if name != "sqalgebra" and not name.startswith("sqalgebra."):
        name = f"sqalgebra.{name}"

    if name in _loggers:
        return _loggers[name]

    logger = logging.getLogger(name)
    logger.setLevel(_DEFAULT_LEVEL)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_DEFAULT_LEVEL)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False

    _loggers[name] = logger
    _handlers[name] = handler
    return logger


def set_log_level(level: int | str) -> None:
    """Set the level of every logger created by `get_logger`.

    Args:
        level: Logging level, either as an integer or as a name such as `"DEBUG"`.
    """
    if isinstance(level, str):
        value = logging.getLevelName(level.upper())
        if not isinstance(value, int):
            raise ValueError(f"Unknown logging level {level!r}.")
        level = value

    global _DEFAULT_LEVEL
    _DEFAULT_LEVEL = level

    for name, logger in _loggers.items():
        logger.setLevel(level)
        _handlers[name].setLevel(level)
