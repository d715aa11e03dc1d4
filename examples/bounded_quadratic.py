"""
Example: bounded scalar minimisation with swoop

Minimises f(x) = 3x^2 + 4x + 50 on [-10, 10] (minimum at x = -2/3), then
maximises a downward parabola by negating it, and finally runs several
searches concurrently on one event loop.
"""

import asyncio

from swoop import DidNotConverge, bounded, negate


class QuadraticFunction:
    """f(x) = a x^2 + b x + c."""

    def __init__(self, a: float, b: float, c: float) -> None:
        self.a = a
        self.b = b
        self.c = c

    def evaluate(self, x: float) -> float:
        return self.a * x**2 + self.b * x + self.c


async def example_minimise():
    print("=" * 60)
    print("Example 1: Minimise 3x^2 + 4x + 50 on [-10, 10]")
    print("=" * 60)
    result = await bounded(QuadraticFunction(3.0, 4.0, 50.0), (-10.0, 10.0), 500)
    print(f"argmin: {result.argmin:.6f}")
    print(f"minimum value: {result.minimum_value:.6f}")
    print(f"iterations: {result.iterations}")
    print()


async def example_maximise():
    print("=" * 60)
    print("Example 2: Maximise -(x - 1)^2 + 4 on [-5, 5]")
    print("=" * 60)
    result = await bounded(negate(QuadraticFunction(-1.0, 2.0, 3.0)), (-5.0, 5.0), 500)
    print(f"argmax: {result.argmin:.6f}")
    print(f"maximum value: {-result.minimum_value:.6f}")
    print()


async def example_concurrent():
    print("=" * 60)
    print("Example 3: Concurrent searches with a tight budget")
    print("=" * 60)
    shifts = [-3.0, 0.5, 7.0]
    outcomes = await asyncio.gather(
        *(bounded(lambda x, s=s: (x - s) ** 2, (-10.0, 10.0), 100) for s in shifts),
        bounded(lambda x: (x - 500.0) ** 2, (-1000.0, 1000.0), 1),
        return_exceptions=True,
    )
    for outcome in outcomes:
        if isinstance(outcome, DidNotConverge):
            best = outcome.best_so_far
            print(f"did not converge, best so far x={best.argmin:.3f}")
        else:
            print(f"argmin: {outcome.argmin:.6f}")
    print()


async def main():
    await example_minimise()
    await example_maximise()
    await example_concurrent()
    print("All examples finished")


if __name__ == "__main__":
    asyncio.run(main())
