"""Core interfaces shared across scalar minimisation algorithms."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Protocol, Union, runtime_checkable

import numpy as np

from ..errors import (
    DidNotConverge,
    InvalidBracket,
    InvalidIterationBudget,
    InvalidTolerance,
)
from ..logging import get_logger

logger = get_logger(__name__)

EPS = float(np.finfo(float).eps)
SQRT_EPS = float(np.sqrt(EPS))

# Golden ratio complement, (3 - sqrt(5)) / 2
GOLDEN_MEAN = 0.5 * (3.0 - math.sqrt(5.0))
# Golden ratio, used to grow a bracket downhill
GOLDEN_RATIO = 0.5 * (1.0 + math.sqrt(5.0))

XATOL = 1e-5
BRENT_XTOL = 1.48e-8
MIN_TOL = 1e-11

BRACKET_GROW_LIMIT = 110.0
BRACKET_MAXITER = 1000


@runtime_checkable
class ScalarObjectiveFunction(Protocol):
    """Anything that can be evaluated at a real number."""

    def evaluate(self, x: float) -> float:
        ...


Objective = Union[ScalarObjectiveFunction, Callable[[float], float]]


class _CallableObjective:
    __slots__ = ("fun",)

    def __init__(self, fun: Callable[[float], float]) -> None:
        self.fun = fun

    def evaluate(self, x: float) -> float:
        return self.fun(x)

    def __repr__(self) -> str:
        return f"_CallableObjective({self.fun!r})"


class _NegatedObjective:
    __slots__ = ("inner",)

    def __init__(self, inner: ScalarObjectiveFunction) -> None:
        self.inner = inner

    def evaluate(self, x: float) -> float:
        return -self.inner.evaluate(x)


def as_objective(obj: Objective) -> ScalarObjectiveFunction:
    """Return ``obj`` as something with an ``evaluate`` method.

    Objects that already expose ``evaluate`` are returned as they are; plain
    callables are wrapped.
    """
    if isinstance(obj, ScalarObjectiveFunction):
        return obj
    if callable(obj):
        return _CallableObjective(obj)
    raise TypeError(
        f"objective must define evaluate(x) or be callable, got {type(obj).__name__}"
    )


def negate(obj: Objective) -> ScalarObjectiveFunction:
    """Flip the sign of an objective so minimising it maximises ``obj``.

    The ``minimum_value`` of a result obtained this way is the negated
    maximum.
    """
    return _NegatedObjective(as_objective(obj))


@dataclass(frozen=True)
class OptimisationResult:
    """Located minimum of a scalar objective.

    Attributes
    ----------
    argmin:
        Point with the lowest objective value found.
    minimum_value:
        Objective value at ``argmin``.
    iterations:
        Number of search iterations consumed.
    nfev:
        Number of objective evaluations.
    """

    argmin: float
    minimum_value: float
    iterations: int
    nfev: int


@dataclass(frozen=True)
class SearchOutcome:
    """What a search engine hands back to its caller."""

    result: OptimisationResult
    converged: bool
    ill_conditioned: bool = False

    def result_or_raise(self) -> OptimisationResult:
        """Return the result, or raise ``DidNotConverge`` carrying it."""
        if not self.converged:
            raise DidNotConverge(self.result, "Maximum number of iterations exceeded")
        if not math.isfinite(self.result.minimum_value):
            raise DidNotConverge(self.result, "Objective value at the best point is not finite")
        return self.result


class CountingEvaluator:
    """Evaluate an objective while counting calls and ordering NaN last.

    NaN is returned as ``+inf`` so it never compares better than a real
    value. The first non-finite value is reported once as a warning. Searches
    run one after another on the same objective may share an evaluator; each
    reports the calls it made as a difference of ``nfev``.
    """

    def __init__(self, objective: Objective) -> None:
        self._objective = as_objective(objective)
        self.nfev = 0
        self.non_finite = False

    @classmethod
    def wrap(cls, objective: Objective) -> "CountingEvaluator":
        """Return ``objective`` itself if it already counts, else a new evaluator."""
        return objective if isinstance(objective, cls) else cls(objective)

    def __call__(self, x: float) -> float:
        value = float(self._objective.evaluate(x))
        self.nfev += 1
        if not np.isfinite(value):
            if not self.non_finite:
                logger.warning("Objective returned %r at x=%r", value, x)
            self.non_finite = True
            if np.isnan(value):
                return math.inf
        return value


def validate_bracket(bracket: Any) -> tuple[float, float]:
    """Return ``bracket`` as a ``(lower, upper)`` pair of floats."""
    try:
        lower, upper = bracket
        lower, upper = float(lower), float(upper)
    except (TypeError, ValueError) as exc:
        raise InvalidBracket(bracket, "expected a (lower, upper) pair of numbers") from exc
    if not (math.isfinite(lower) and math.isfinite(upper)):
        raise InvalidBracket(bracket, "bounds must be finite")
    if not lower < upper:
        raise InvalidBracket(bracket, "the lower bound must be below the upper bound")
    return lower, upper


def validate_budget(max_iterations: Any) -> int:
    """Return ``max_iterations`` as a positive ``int``."""
    if isinstance(max_iterations, bool) or not isinstance(
        max_iterations, (int, np.integer)
    ):
        raise InvalidIterationBudget(max_iterations)
    if max_iterations <= 0:
        raise InvalidIterationBudget(max_iterations)
    return int(max_iterations)


def validate_xtol(xtol: float) -> float:
    """Return ``xtol`` as a non-negative finite float."""
    try:
        value = float(xtol)
    except (TypeError, ValueError) as exc:
        raise InvalidTolerance(xtol) from exc
    if not math.isfinite(value) or value < 0.0:
        raise InvalidTolerance(xtol)
    return value


__all__ = [
    "BRACKET_GROW_LIMIT",
    "BRACKET_MAXITER",
    "BRENT_XTOL",
    "CountingEvaluator",
    "EPS",
    "GOLDEN_MEAN",
    "GOLDEN_RATIO",
    "MIN_TOL",
    "Objective",
    "OptimisationResult",
    "SQRT_EPS",
    "ScalarObjectiveFunction",
    "SearchOutcome",
    "XATOL",
    "as_objective",
    "negate",
    "validate_bracket",
    "validate_budget",
    "validate_xtol",
]
