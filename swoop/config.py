"""Runtime switches for swoop, read from the environment.

``SWOOP_DEBUG`` turns on per-iteration tracing in the search engines.
``SWOOP_LOG_LEVEL`` sets the starting level of the package logger.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator

DEBUG_ENV_VAR = "SWOOP_DEBUG"
LOG_LEVEL_ENV_VAR = "SWOOP_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"

_TRUTHY = ("1", "true", "yes", "on")


def _env_flag(name: str) -> bool:
    return os.getenv(name, "0").strip().lower() in _TRUTHY


_debug_enabled: bool = _env_flag(DEBUG_ENV_VAR)


def log_level_from_env() -> str:
    """Level name from ``SWOOP_LOG_LEVEL``, or WARNING when unset or blank."""
    return os.getenv(LOG_LEVEL_ENV_VAR, "").strip().upper() or DEFAULT_LOG_LEVEL


def is_debug_enabled() -> bool:
    """
    Return whether iteration tracing is currently enabled.

    Returns
    -------
    bool
        True if debug mode is enabled, False otherwise.
    """
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """
    Globally enable or disable iteration tracing.

    Parameters
    ----------
    enabled:
        Whether to enable debug mode.
    """
    global _debug_enabled
    _debug_enabled = bool(enabled)


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Temporarily enable or disable iteration tracing.

    Example
    -------
    >>> with debug_context(True):
    ...     pass
    """
    global _debug_enabled
    prev = _debug_enabled
    _debug_enabled = bool(enabled)
    try:
        yield
    finally:
        _debug_enabled = prev


__all__ = [
    "DEBUG_ENV_VAR",
    "DEFAULT_LOG_LEVEL",
    "LOG_LEVEL_ENV_VAR",
    "debug_context",
    "is_debug_enabled",
    "log_level_from_env",
    "set_debug_enabled",
]
