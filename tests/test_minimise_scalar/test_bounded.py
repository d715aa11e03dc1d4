import asyncio
import math

import pytest

from swoop import negate
from swoop.errors import (
    DidNotConverge,
    InvalidBracket,
    InvalidIterationBudget,
    SwoopError,
)
from swoop.minimise_scalar.bounded import bounded, bounded_sync


def test_readme_quadratic(readme_quadratic):
    result = bounded_sync(readme_quadratic, (-10.0, 10.0), 500)
    assert result.argmin == pytest.approx(-2.0 / 3.0, abs=1e-5)
    assert result.minimum_value == pytest.approx(readme_quadratic.evaluate(-2.0 / 3.0), abs=1e-9)
    assert result.minimum_value == pytest.approx(48.666666666666664, abs=1e-9)


def test_shifted_parabola(shifted_parabola):
    result = bounded_sync(shifted_parabola, (-10.0, 10.0), 100)
    assert result.argmin == pytest.approx(2.0, abs=1e-5)
    assert result.minimum_value == pytest.approx(0.0, abs=1e-9)
    assert 0 < result.iterations <= 100


@pytest.mark.parametrize(
    "fun, lower, upper",
    [
        (lambda x: x, 0.0, 1.0),
        (lambda x: -x, 0.0, 1.0),
        (math.cos, 0.0, 10.0),
        (lambda x: x * math.sin(5.0 * x), -3.0, 3.0),
        (lambda x: (x - 100.0) ** 2, -1.0, 1.0),
        (lambda x: abs(x - 0.3), -1e3, 1e3),
    ],
)
def test_argmin_stays_inside_bracket(fun, lower, upper):
    result = bounded_sync(fun, (lower, upper), 500)
    assert lower <= result.argmin <= upper
    assert result.minimum_value == fun(result.argmin)


def test_minimum_on_the_boundary():
    result = bounded_sync(lambda x: x, (0.0, 1.0), 500)
    assert result.argmin == pytest.approx(0.0, abs=1e-4)


def test_repeated_calls_are_identical(readme_quadratic):
    first = bounded_sync(readme_quadratic, (-10.0, 10.0), 500)
    second = bounded_sync(readme_quadratic, (-10.0, 10.0), 500)
    assert first == second


@pytest.mark.parametrize(
    "bracket",
    [(5.0, 5.0), (10.0, -10.0), (math.nan, 1.0), (-math.inf, 0.0), (0.0, math.inf)],
)
def test_invalid_bracket_is_rejected_before_evaluating(readme_quadratic, bracket):
    with pytest.raises(InvalidBracket):
        bounded_sync(readme_quadratic, bracket, 100)
    assert readme_quadratic.calls == 0


def test_zero_budget_is_rejected_before_evaluating(readme_quadratic):
    with pytest.raises(InvalidIterationBudget):
        bounded_sync(readme_quadratic, (-10.0, 10.0), 0)
    assert readme_quadratic.calls == 0


def test_exhausted_budget_reports_best_so_far():
    with pytest.raises(DidNotConverge) as excinfo:
        bounded_sync(lambda x: (x - 500.0) ** 2, (-1000.0, 1000.0), 1)
    best = excinfo.value.best_so_far
    assert -1000.0 <= best.argmin <= 1000.0
    assert best.iterations == 1
    assert best.minimum_value == (best.argmin - 500.0) ** 2


def test_best_value_never_increases_with_budget(quartic):
    values = []
    iterations = []
    for budget in range(1, 40):
        try:
            result = bounded_sync(quartic, (0.0, 3.0), budget)
        except DidNotConverge as exc:
            result = exc.best_so_far
        values.append(result.minimum_value)
        iterations.append(result.iterations)
    assert all(later <= earlier for earlier, later in zip(values, values[1:]))
    assert all(later >= earlier for earlier, later in zip(iterations, iterations[1:]))
    assert values[-1] == pytest.approx(-9.914949590828147, abs=1e-8)


def test_nan_region_falls_back_and_still_converges():
    def partly_undefined(x):
        return math.nan if x < 0.0 else (x - 1.0) ** 2

    result = bounded_sync(partly_undefined, (-5.0, 5.0), 500)
    assert result.argmin == pytest.approx(1.0, abs=1e-4)
    assert math.isfinite(result.minimum_value)


def test_objective_undefined_everywhere_does_not_converge():
    with pytest.raises(DidNotConverge) as excinfo:
        bounded_sync(lambda x: math.nan, (-1.0, 1.0), 50)
    assert excinfo.value.best_so_far.minimum_value == math.inf


class PartlyUndefined:
    """(x - 1)^2 for x >= 0, NaN below, counting every call."""

    def __init__(self):
        self.calls = 0

    def evaluate(self, x):
        self.calls += 1
        return math.nan if x < 0.0 else (x - 1.0) ** 2


@pytest.mark.parametrize("max_iterations", [1, 5, 50, 500])
def test_nan_region_counts_every_call_within_budget(max_iterations):
    objective = PartlyUndefined()
    try:
        result = bounded_sync(objective, (-5.0, 5.0), max_iterations)
    except DidNotConverge as exc:
        result = exc.best_so_far
    assert objective.calls == result.nfev
    assert result.iterations <= max_iterations


def test_finite_brent_answer_is_not_searched_again():
    objective = PartlyUndefined()
    result = bounded_sync(objective, (-5.0, 5.0), 500)
    assert result.nfev == result.iterations + 1
    assert objective.calls == result.nfev


def test_fallback_shares_the_budget():
    calls = []

    def undefined(x):
        calls.append(x)
        return math.nan

    with pytest.raises(DidNotConverge) as excinfo:
        bounded_sync(undefined, (-1.0, 1.0), 100)
    best = excinfo.value.best_so_far
    assert best.iterations <= 100
    assert len(calls) == best.nfev
    # golden-section adds two starting evaluations on top of Brent's one
    assert best.nfev == best.iterations + 3


def test_maximise_by_negating():
    result = bounded_sync(negate(lambda x: -((x - 1.0) ** 2) + 4.0), (-5.0, 5.0), 500)
    assert result.argmin == pytest.approx(1.0, abs=1e-5)
    assert -result.minimum_value == pytest.approx(4.0, abs=1e-9)


def test_awaitable_matches_sync(readme_quadratic):
    expected = bounded_sync(readme_quadratic, (-10.0, 10.0), 500)
    assert asyncio.run(bounded(readme_quadratic, (-10.0, 10.0), 500)) == expected


def test_awaitable_propagates_errors(readme_quadratic):
    with pytest.raises(InvalidBracket):
        asyncio.run(bounded(readme_quadratic, (5.0, 5.0), 500))
    with pytest.raises(SwoopError):
        asyncio.run(bounded(readme_quadratic, (-10.0, 10.0), 0))
