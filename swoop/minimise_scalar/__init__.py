"""Scalar univariate minimisation.

Example
-------
>>> import asyncio
>>> from swoop.minimise_scalar import bounded
>>> class Quadratic:
...     def __init__(self, a, b, c):
...         self.a, self.b, self.c = a, b, c
...     def evaluate(self, x):
...         return self.a * x**2 + self.b * x + self.c
>>> res = asyncio.run(bounded(Quadratic(3.0, 4.0, 50.0), (-10.0, 10.0), 500))
>>> round(res.minimum_value, 6)
48.666667
"""

from .bounded import bounded, bounded_sync
from .bracket import BracketResult, bracket
from .brent import brent, brent_search, brent_sync
from .core import (
    BRENT_XTOL,
    GOLDEN_MEAN,
    MIN_TOL,
    SQRT_EPS,
    XATOL,
    Objective,
    OptimisationResult,
    ScalarObjectiveFunction,
    SearchOutcome,
    as_objective,
    negate,
)
from .golden import golden, golden_section_search, golden_sync

__all__ = [
    "BRENT_XTOL",
    "BracketResult",
    "GOLDEN_MEAN",
    "MIN_TOL",
    "Objective",
    "OptimisationResult",
    "SQRT_EPS",
    "ScalarObjectiveFunction",
    "SearchOutcome",
    "XATOL",
    "as_objective",
    "bounded",
    "bounded_sync",
    "bracket",
    "brent",
    "brent_search",
    "brent_sync",
    "golden",
    "golden_section_search",
    "golden_sync",
    "negate",
]
