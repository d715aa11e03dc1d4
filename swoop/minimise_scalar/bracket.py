"""Downhill bracketing of a scalar minimum."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ..errors import BracketNotFound, InvalidBracket
from ..logging import get_logger
from .core import (
    BRACKET_GROW_LIMIT,
    BRACKET_MAXITER,
    GOLDEN_RATIO,
    CountingEvaluator,
    Objective,
)

logger = get_logger(__name__)

_VERY_SMALL = 1e-21


@dataclass(frozen=True)
class BracketResult:
    """Three points with ``f(xb)`` below ``f(xa)`` and not above ``f(xc)``."""

    xa: float
    xb: float
    xc: float
    fa: float
    fb: float
    fc: float
    nfev: int


def bracket(
    objective: Objective,
    xa: float = 0.0,
    xb: float = 1.0,
    grow_limit: float = BRACKET_GROW_LIMIT,
    max_iterations: int = BRACKET_MAXITER,
) -> BracketResult:
    """Walk downhill from ``xa``, ``xb`` until a minimum is enclosed.

    The step grows by the golden ratio, with parabolic extrapolation capped
    at ``grow_limit`` times the current step. The returned points may lie
    outside ``[xa, xb]`` and are not necessarily sorted.

    Raises
    ------
    BracketNotFound
        If the walk takes more than ``max_iterations`` steps, e.g. for an
        objective that decreases without bound.
    """
    f = CountingEvaluator(objective)
    xa, xb = float(xa), float(xb)
    fa = f(xa)
    fb = f(xb)
    if fa < fb:
        xa, xb = xb, xa
        fa, fb = fb, fa
    xc = xb + GOLDEN_RATIO * (xb - xa)
    fc = f(xc)
    it = 0

    while fc < fb:
        tmp1 = (xb - xa) * (fb - fc)
        tmp2 = (xb - xc) * (fb - fa)
        val = tmp2 - tmp1
        denom = 2.0 * _VERY_SMALL if abs(val) < _VERY_SMALL else 2.0 * val
        w = xb - ((xb - xc) * tmp2 - (xb - xa) * tmp1) / denom
        wlim = xb + grow_limit * (xc - xb)
        if it > max_iterations:
            raise BracketNotFound(
                f"No bracket found after {max_iterations} iterations "
                f"(last points {xa!r}, {xb!r}, {xc!r})"
            )
        it += 1

        if (w - xc) * (xb - w) > 0.0:
            fw = f(w)
            if fw < fc:
                xa, xb = xb, w
                fa, fb = fb, fw
                break
            elif fw > fb:
                xc, fc = w, fw
                break
            w = xc + GOLDEN_RATIO * (xc - xb)
            fw = f(w)
        elif (w - wlim) * (wlim - xc) >= 0.0:
            w = wlim
            fw = f(w)
        elif (w - wlim) * (xc - w) > 0.0:
            fw = f(w)
            if fw < fc:
                xb, xc, w = xc, w, w + GOLDEN_RATIO * (w - xc)
                fb, fc = fc, fw
                fw = f(w)
        else:
            w = xc + GOLDEN_RATIO * (xc - xb)
            fw = f(w)
        xa, xb, xc = xb, xc, w
        fa, fb, fc = fb, fc, fw

    logger.debug("bracket found (%r, %r, %r) after %d evaluations", xa, xb, xc, f.nfev)
    return BracketResult(xa, xb, xc, fa, fb, fc, f.nfev)


def resolve_bracket(
    objective: Objective, points: Optional[Sequence[float]]
) -> BracketResult:
    """Turn the ``bracket`` argument of the unbounded searches into a triple.

    ``None`` and two points start a downhill search. Three points are used
    as they are once the middle one is checked to lie strictly between the
    outer two and to have the lowest value.
    """
    if points is None:
        return bracket(objective)
    try:
        values = [float(p) for p in points]
    except (TypeError, ValueError) as exc:
        raise InvalidBracket(points, "expected two or three numbers") from exc
    if len(values) == 2:
        return bracket(objective, values[0], values[1])
    if len(values) == 3:
        xa, xb, xc = values
        if not (xa < xb < xc or xc < xb < xa):
            raise InvalidBracket(points, "the middle point must lie between the outer two")
        f = CountingEvaluator(objective)
        fa, fb, fc = f(xa), f(xb), f(xc)
        if not (fb < fa and fb < fc):
            raise InvalidBracket(points, "f(xb) must be below both f(xa) and f(xc)")
        return BracketResult(xa, xb, xc, fa, fb, fc, f.nfev)
    raise InvalidBracket(points, "expected two or three numbers")


__all__ = ["BracketResult", "bracket", "resolve_bracket"]
