"""Shared fixtures for swoop tests.

Provides the objectives used across the scalar minimisation suites and
resets global switches between tests.
"""

import logging
from io import StringIO

import pytest

from swoop.config import set_debug_enabled
from swoop.logging import get_logger, set_log_level


class QuadraticFunction:
    """f(x) = a x^2 + b x + c, exposing the ``evaluate`` capability."""

    def __init__(self, a: float, b: float, c: float) -> None:
        self.a = a
        self.b = b
        self.c = c
        self.calls = 0

    def evaluate(self, x: float) -> float:
        self.calls += 1
        return self.a * x**2 + self.b * x + self.c


@pytest.fixture
def readme_quadratic() -> QuadraticFunction:
    """3x^2 + 4x + 50, minimum at x = -2/3."""
    return QuadraticFunction(3.0, 4.0, 50.0)


@pytest.fixture
def shifted_parabola():
    """(x - 2)^2 as a plain callable."""
    return lambda x: (x - 2.0) ** 2


@pytest.fixture
def quartic():
    """(x - 2) x (x + 2)^2, local minimum near x = 1.2808."""
    return lambda x: (x - 2.0) * x * (x + 2.0) ** 2


@pytest.fixture(autouse=True)
def reset_debug_mode():
    """Leave debug mode off after every test."""
    yield
    set_debug_enabled(False)


@pytest.fixture
def swoop_log():
    """Collect everything swoop logs at DEBUG and above into a string buffer."""
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    package = get_logger()
    package.addHandler(handler)
    set_log_level(logging.DEBUG)
    yield stream
    package.removeHandler(handler)
    set_log_level(logging.WARNING)
