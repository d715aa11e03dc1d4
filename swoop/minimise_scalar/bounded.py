"""Bounded scalar minimisation driver."""

from __future__ import annotations

import math
import threading
from typing import Any, Optional

from ..concurrency import run_in_worker
from ..logging import get_logger
from .brent import brent_search
from .core import (
    CountingEvaluator,
    Objective,
    OptimisationResult,
    SearchOutcome,
    validate_bracket,
    validate_budget,
)
from .golden import golden_section_search

logger = get_logger(__name__)


def bounded_sync(
    objective: Objective,
    bracket: Any,
    max_iterations: int,
    cancel_event: Optional[threading.Event] = None,
) -> OptimisationResult:
    """Minimise ``objective`` over the closed interval ``bracket``.

    Brent's method is the primary strategy. If it met a non-finite
    objective value and then ran out of budget or settled on a non-finite
    best value, golden-section search spends the iterations Brent left over
    on the same bracket and the better point is kept. Both searches share
    the budget, and the reported ``iterations`` and ``nfev`` cover both.

    Parameters
    ----------
    objective:
        Object with ``evaluate(x) -> float``, or a plain callable.
    bracket:
        ``(lower, upper)`` with ``lower < upper``, both finite.
    max_iterations:
        Positive iteration budget.

    Raises
    ------
    InvalidBracket
        If the bracket is malformed, empty, reversed or not finite.
    InvalidIterationBudget
        If ``max_iterations`` is not a positive integer.
    DidNotConverge
        If the budget runs out first, or the best value is not finite.
        ``best_so_far`` holds the best point found.
    """
    lower, upper = validate_bracket(bracket)
    max_iterations = validate_budget(max_iterations)

    f = CountingEvaluator(objective)
    outcome = brent_search(f, lower, upper, max_iterations, cancel_event=cancel_event)
    remaining = max_iterations - outcome.result.iterations
    if outcome.ill_conditioned and remaining > 0 and not (
        outcome.converged and math.isfinite(outcome.result.minimum_value)
    ):
        logger.debug(
            "Non-finite objective values on [%r, %r], retrying with golden-section "
            "for %d iterations",
            lower,
            upper,
            remaining,
        )
        fallback = golden_section_search(
            f, lower, upper, remaining, cancel_event=cancel_event
        )
        outcome = _combine(outcome, fallback)
    return outcome.result_or_raise()


def _combine(first: SearchOutcome, second: SearchOutcome) -> SearchOutcome:
    """Keep the better point of two consecutive searches, with summed counts."""
    best = second if second.result.minimum_value < first.result.minimum_value else first
    result = OptimisationResult(
        best.result.argmin,
        best.result.minimum_value,
        first.result.iterations + second.result.iterations,
        first.result.nfev + second.result.nfev,
    )
    return SearchOutcome(result, best.converged, first.ill_conditioned or second.ill_conditioned)


async def bounded(
    objective: Objective,
    bracket: Any,
    max_iterations: int,
) -> OptimisationResult:
    """Bounded univariate minimisation, awaited off the event loop.

    Example
    -------
    >>> import asyncio
    >>> from swoop.minimise_scalar import bounded
    >>> res = asyncio.run(bounded(lambda x: 3 * x**2 + 4 * x + 50, (-10, 10), 500))
    >>> round(res.argmin, 4)
    -0.6667
    """
    return await run_in_worker(bounded_sync, objective, bracket, max_iterations)


__all__ = ["bounded", "bounded_sync"]
