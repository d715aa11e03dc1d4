"""Logging utilities for swoop.

Only the package logger ``swoop`` owns a handler (stderr). Module loggers
are its children and hand their records up to it, so one call to
:func:`set_log_level` governs the whole package and an application can
attach its own handler in a single place. The starting level comes from
``SWOOP_LOG_LEVEL`` (see :mod:`swoop.config`), WARNING by default.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from .config import log_level_from_env

PACKAGE_LOGGER = "swoop"

_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def _coerce_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def _package_logger() -> logging.Logger:
    logger = logging.getLogger(PACKAGE_LOGGER)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(_coerce_level(log_level_from_env()))
        logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the swoop logger for ``name``.

    Args:
        name: Usually ``__name__``. Names outside the package are nested
            under ``swoop.``; None gives the package logger itself.

    Example:
        >>> from swoop.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("starting search")
    """
    package = _package_logger()
    if name is None or name == PACKAGE_LOGGER:
        return package
    if not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def set_log_level(level: int | str) -> None:
    """Set the threshold for every swoop logger.

    Args:
        level: ``logging.DEBUG`` and friends, or a level name such as
            ``"debug"``. Unknown names fall back to WARNING.
    """
    _package_logger().setLevel(_coerce_level(level))


__all__ = ["PACKAGE_LOGGER", "get_logger", "set_log_level"]
