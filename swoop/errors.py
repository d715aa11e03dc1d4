"""Exceptions raised by swoop optimizers.

Every failure derives from :class:`SwoopError`, so callers can catch the whole
family at once or single out one kind by type.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .minimise_scalar.core import OptimisationResult


class SwoopError(Exception):
    """Base class for all swoop failures."""


class InvalidArgument(SwoopError, ValueError):
    """An argument was rejected before any objective evaluation."""


class InvalidBracket(InvalidArgument):
    """The search interval is malformed, empty, reversed or not finite."""

    def __init__(self, bracket: object, reason: str) -> None:
        self.bracket = bracket
        super().__init__(f"Invalid bracket {bracket!r}: {reason}")


class InvalidIterationBudget(InvalidArgument):
    """The iteration budget is not a positive integer."""

    def __init__(self, max_iterations: object) -> None:
        self.max_iterations = max_iterations
        super().__init__(
            f"max_iterations must be a positive integer, got {max_iterations!r}"
        )


class InvalidTolerance(InvalidArgument):
    """A convergence tolerance is negative or not finite."""

    def __init__(self, xtol: float) -> None:
        self.xtol = xtol
        super().__init__(f"Tolerance must be a non-negative finite number, got {xtol!r}")


class DidNotConverge(SwoopError):
    """The search stopped before its convergence test passed.

    ``best_so_far`` holds the best point seen, so a caller can accept the
    approximate answer or retry with a larger budget.
    """

    def __init__(self, best_so_far: OptimisationResult, reason: str) -> None:
        self.best_so_far = best_so_far
        self.reason = reason
        super().__init__(
            f"{reason} (best x={best_so_far.argmin!r}, "
            f"f(x)={best_so_far.minimum_value!r}, "
            f"iterations={best_so_far.iterations})"
        )


class BracketNotFound(SwoopError):
    """Downhill bracketing gave up without enclosing a minimum."""


class SearchCancelled(SwoopError):
    """The awaiting task was cancelled while the search was running."""


__all__ = [
    "BracketNotFound",
    "DidNotConverge",
    "InvalidArgument",
    "InvalidBracket",
    "InvalidIterationBudget",
    "InvalidTolerance",
    "SearchCancelled",
    "SwoopError",
]
