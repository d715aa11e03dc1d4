"""Brent's method: parabolic interpolation with golden-section fallback.

References
----------
R. P. Brent, *Algorithms for Minimization without Derivatives*, 1973, ch. 5.
SciPy's ``fminbound`` and ``brent`` follow the same scheme.
"""

from __future__ import annotations

import threading
from dataclasses import replace
from typing import Optional, Sequence

from ..concurrency import check_cancelled, run_in_worker
from ..config import is_debug_enabled
from ..logging import get_logger
from .bracket import resolve_bracket
from .core import (
    BRENT_XTOL,
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


def brent_search(
    objective: Objective,
    lower: float,
    upper: float,
    max_iterations: int,
    x0: Optional[float] = None,
    rel_tol: float = SQRT_EPS,
    abs_tol: float = XATOL / 3.0,
    cancel_event: Optional[threading.Event] = None,
) -> SearchOutcome:
    """Locate a local minimum inside ``[lower, upper]``.

    The search keeps the best point ``x``, the second best ``w`` and the
    previous second best ``v``. Each iteration tries the vertex of the
    parabola through them and falls back to a golden-section step into the
    larger side of the bracket when that vertex is outside the bracket, too
    close to its ends, or not shrinking fast enough. Probes are never closer
    than ``tol1 = rel_tol * |x| + abs_tol`` to ``x``.

    Parameters
    ----------
    objective:
        Objective to minimise.
    lower, upper:
        Bracket. The bracket is narrowed on local copies only.
    max_iterations:
        Maximum number of iterations, one new evaluation each.
    x0:
        Starting point. Defaults to the golden-mean point of the bracket.
    rel_tol, abs_tol:
        Relative and absolute parts of the point tolerance.
    cancel_event:
        Polled once per iteration; the search is abandoned once it is set.
    """
    f = CountingEvaluator.wrap(objective)
    start = f.nfev
    a, b = float(lower), float(upper)
    if a > b:
        a, b = b, a
    if a == b:
        fa = f(a)
        return SearchOutcome(OptimisationResult(a, fa, 0, f.nfev - start), True, f.non_finite)

    x = a + GOLDEN_MEAN * (b - a) if x0 is None else float(x0)
    w = v = x
    fx = f(x)
    fw = fv = fx
    d = 0.0  # step taken on this iteration
    e = 0.0  # step taken on the one before
    nit = 0
    converged = False
    trace = is_debug_enabled()

    while True:
        xm = 0.5 * (a + b)
        tol1 = rel_tol * abs(x) + abs_tol
        tol2 = 2.0 * tol1
        if abs(x - xm) <= tol2 - 0.5 * (b - a):
            converged = True
            break
        if nit >= max_iterations:
            break
        check_cancelled(cancel_event)

        golden = True
        if abs(e) > tol1:
            r = (x - w) * (fx - fv)
            q = (x - v) * (fx - fw)
            p = (x - v) * q - (x - w) * r
            q = 2.0 * (q - r)
            if q > 0.0:
                p = -p
            q = abs(q)
            e_prev = e
            e = d
            if abs(p) < abs(0.5 * q * e_prev) and q * (a - x) < p < q * (b - x):
                d = p / q
                u = x + d
                if (u - a) < tol2 or (b - u) < tol2:
                    d = tol1 if xm >= x else -tol1
                golden = False

        if golden:
            e = (a - x) if x >= xm else (b - x)
            d = GOLDEN_MEAN * e

        if abs(d) >= tol1:
            u = x + d
        else:
            u = x + tol1 if d >= 0.0 else x - tol1
        fu = f(u)
        nit += 1

        if fu <= fx:
            if u >= x:
                a = x
            else:
                b = x
            v, fv = w, fw
            w, fw = x, fx
            x, fx = u, fu
        else:
            if u < x:
                a = u
            else:
                b = u
            if fu <= fw or w == x:
                v, fv = w, fw
                w, fw = u, fu
            elif fu <= fv or v == x or v == w:
                v, fv = u, fu

        if trace:
            logger.debug(
                "brent iter=%d step=%s x=%r f(x)=%r bracket=[%r, %r]",
                nit,
                "golden" if golden else "parabolic",
                x,
                fx,
                a,
                b,
            )

    logger.debug(
        "brent finished: x=%r f=%r nit=%d nfev=%d converged=%s",
        x,
        fx,
        nit,
        f.nfev - start,
        converged,
    )
    return SearchOutcome(OptimisationResult(x, fx, nit, f.nfev - start), converged, f.non_finite)


def brent_sync(
    objective: Objective,
    xtol: Optional[float] = None,
    max_iterations: int = 500,
    bracket: Optional[Sequence[float]] = None,
    cancel_event: Optional[threading.Event] = None,
) -> OptimisationResult:
    """Minimise ``objective`` without bounds using Brent's method.

    A bracket is found first (see :func:`swoop.minimise_scalar.bracket`),
    then Brent's method runs from its middle point with relative tolerance
    ``xtol`` (default ``1.48e-8``) and an absolute floor of ``1e-11``.

    Raises
    ------
    InvalidTolerance
        If ``xtol`` is negative.
    BracketNotFound
        If no bracket around a minimum could be found.
    DidNotConverge
        If the budget runs out first.
    """
    rel_tol = BRENT_XTOL if xtol is None else validate_xtol(xtol)
    max_iterations = validate_budget(max_iterations)
    found = resolve_bracket(objective, bracket)
    lower, upper = sorted((found.xa, found.xc))
    outcome = brent_search(
        objective,
        lower,
        upper,
        max_iterations,
        x0=found.xb,
        rel_tol=rel_tol,
        abs_tol=MIN_TOL,
        cancel_event=cancel_event,
    )
    outcome = replace(
        outcome,
        result=replace(outcome.result, nfev=outcome.result.nfev + found.nfev),
    )
    return outcome.result_or_raise()


async def brent(
    objective: Objective,
    xtol: Optional[float] = None,
    max_iterations: int = 500,
    bracket: Optional[Sequence[float]] = None,
) -> OptimisationResult:
    """Awaitable :func:`brent_sync`, run on a worker thread."""
    return await run_in_worker(brent_sync, objective, xtol, max_iterations, bracket)


__all__ = ["brent", "brent_search", "brent_sync"]
