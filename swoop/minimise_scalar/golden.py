"""Golden-section search."""

from __future__ import annotations

import threading
from dataclasses import replace
from typing import Optional, Sequence

from ..concurrency import check_cancelled, run_in_worker
from ..config import is_debug_enabled
from ..logging import get_logger
from .bracket import resolve_bracket
from .core import (
    GOLDEN_MEAN,
    MIN_TOL,
    SQRT_EPS,
    XATOL,
    CountingEvaluator,
    Objective,
    OptimisationResult,
    SearchOutcome,
    validate_budget,
    validate_xtol,
)

logger = get_logger(__name__)


def golden_section_search(
    objective: Objective,
    lower: float,
    upper: float,
    max_iterations: int,
    rel_tol: float = SQRT_EPS,
    abs_tol: float = XATOL / 3.0,
    cancel_event: Optional[threading.Event] = None,
    x0: Optional[float] = None,
) -> SearchOutcome:
    """Shrink ``[lower, upper]`` around a local minimum by the golden ratio.

    Two interior probes ``x1 < x2`` sit at the golden-mean fractions of the
    interval. When an interior start ``x0`` is given it becomes one of the
    probes and the other goes into the larger side, a golden-mean fraction
    away from it. Each iteration drops the part beyond the worse probe and
    reuses the better one, so only one new evaluation is needed per
    iteration. When both probes tie, the right part is dropped.

    The search stops once the interval is no wider than
    ``rel_tol * (|x1| + |x2|) + abs_tol`` or after ``max_iterations``
    iterations, in which case the outcome is marked as not converged.
    Only a local minimum is guaranteed if the objective is not unimodal on
    the interval.
    """
    f = CountingEvaluator.wrap(objective)
    start = f.nfev
    a, b = float(lower), float(upper)
    if a > b:
        a, b = b, a
    if a == b:
        fa = f(a)
        return SearchOutcome(OptimisationResult(a, fa, 0, f.nfev - start), True, f.non_finite)

    if x0 is None or not a < x0 < b:
        x1 = a + GOLDEN_MEAN * (b - a)
        x2 = b - GOLDEN_MEAN * (b - a)
    elif b - x0 > x0 - a:
        x1 = float(x0)
        x2 = x1 + GOLDEN_MEAN * (b - x1)
    else:
        x2 = float(x0)
        x1 = x2 - GOLDEN_MEAN * (x2 - a)
    f1 = f(x1)
    f2 = f(x2)
    nit = 0
    converged = False
    trace = is_debug_enabled()

    while True:
        if b - a <= rel_tol * (abs(x1) + abs(x2)) + abs_tol:
            converged = True
            break
        if nit >= max_iterations:
            break
        check_cancelled(cancel_event)
        if f1 <= f2:
            b = x2
            x2, f2 = x1, f1
            x1 = x2 - GOLDEN_MEAN * (x2 - a)
            f1 = f(x1)
        else:
            a = x1
            x1, f1 = x2, f2
            x2 = x1 + GOLDEN_MEAN * (b - x1)
            f2 = f(x2)
        nit += 1
        if trace:
            logger.debug("golden iter=%d bracket=[%r, %r] f1=%r f2=%r", nit, a, b, f1, f2)

    if f1 <= f2:
        xmin, fmin = x1, f1
    else:
        xmin, fmin = x2, f2
    logger.debug(
        "golden finished: x=%r f=%r nit=%d nfev=%d converged=%s",
        xmin,
        fmin,
        nit,
        f.nfev - start,
        converged,
    )
    return SearchOutcome(
        OptimisationResult(xmin, fmin, nit, f.nfev - start), converged, f.non_finite
    )


def golden_sync(
    objective: Objective,
    xtol: Optional[float] = None,
    max_iterations: int = 500,
    bracket: Optional[Sequence[float]] = None,
    cancel_event: Optional[threading.Event] = None,
) -> OptimisationResult:
    """Minimise ``objective`` without bounds using golden-section search.

    A bracket ``(xa, xb, xc)`` is found first. The section search runs on
    the outer points, with ``xb`` as one of the two starting probes.

    The stopping test is relative, as in the textbook method, but with a
    default of ``sqrt(machine epsilon)`` rather than machine epsilon and an
    absolute floor of ``1e-11``. Without the floor a minimum at exactly
    zero could never meet a purely relative test and would always exhaust
    the budget; below ``sqrt(eps)`` the objective values cannot separate the
    probes anyway. Pass ``xtol`` to tighten the relative part.

    Parameters
    ----------
    objective:
        Objective to minimise.
    xtol:
        Relative tolerance on the final interval width. Defaults to
        ``sqrt(machine epsilon)``.
    max_iterations:
        Iteration budget for the section search.
    bracket:
        Either two starting points for the downhill bracket search or a
        ready ``(xa, xb, xc)`` triple. Defaults to ``(0, 1)``.

    Raises
    ------
    InvalidTolerance
        If ``xtol`` is negative.
    BracketNotFound
        If no bracket around a minimum could be found.
    DidNotConverge
        If the budget runs out before the interval is small enough.
    """
    rel_tol = SQRT_EPS if xtol is None else validate_xtol(xtol)
    max_iterations = validate_budget(max_iterations)
    found = resolve_bracket(objective, bracket)
    lower, upper = sorted((found.xa, found.xc))
    outcome = golden_section_search(
        objective,
        lower,
        upper,
        max_iterations,
        rel_tol=rel_tol,
        abs_tol=MIN_TOL,
        cancel_event=cancel_event,
        x0=found.xb,
    )
    outcome = replace(
        outcome,
        result=replace(outcome.result, nfev=outcome.result.nfev + found.nfev),
    )
    return outcome.result_or_raise()


async def golden(
    objective: Objective,
    xtol: Optional[float] = None,
    max_iterations: int = 500,
    bracket: Optional[Sequence[float]] = None,
) -> OptimisationResult:
    """Awaitable :func:`golden_sync`, run on a worker thread."""
    return await run_in_worker(
        golden_sync, objective, xtol, max_iterations, bracket
    )


__all__ = ["golden", "golden_section_search", "golden_sync"]
