"""Tests for running searches off the event loop."""

import asyncio
import threading
import time

import pytest

from swoop.concurrency import check_cancelled, run_in_worker
from swoop.errors import SearchCancelled
from swoop.minimise_scalar import bounded, bounded_sync


def test_check_cancelled():
    check_cancelled(None)
    event = threading.Event()
    check_cancelled(event)
    event.set()
    with pytest.raises(SearchCancelled):
        check_cancelled(event)


def test_run_in_worker_passes_event_and_arguments():
    def work(a, b=0, cancel_event=None):
        return a + b, isinstance(cancel_event, threading.Event), threading.current_thread()

    total, got_event, thread = asyncio.run(run_in_worker(work, 1, b=2))
    assert total == 3
    assert got_event
    assert thread is not threading.main_thread()


def test_run_in_worker_propagates_exceptions():
    def fail(cancel_event=None):
        raise KeyError("boom")

    with pytest.raises(KeyError):
        asyncio.run(run_in_worker(fail))


def test_concurrent_searches_are_independent():
    shifts = [-3.0, 0.5, 2.0, 7.5]

    async def scenario():
        return await asyncio.gather(
            *(bounded(lambda x, s=s: (x - s) ** 2, (-10.0, 10.0), 200) for s in shifts)
        )

    results = asyncio.run(scenario())
    for shift, result in zip(shifts, results):
        assert result.argmin == pytest.approx(shift, abs=1e-5)
        assert result == bounded_sync(lambda x, s=shift: (x - s) ** 2, (-10.0, 10.0), 200)


def test_event_loop_keeps_running_during_search():
    def slow_parabola(x):
        time.sleep(0.002)
        return (x - 2.0) ** 2

    async def scenario():
        ticks = 0
        search = asyncio.ensure_future(bounded(slow_parabola, (-10.0, 10.0), 200))
        while not search.done():
            ticks += 1
            await asyncio.sleep(0.001)
        return ticks, search.result()

    ticks, result = asyncio.run(scenario())
    assert ticks > 1
    assert result.argmin == pytest.approx(2.0, abs=1e-5)


def test_cancelled_search_stops_evaluating():
    calls = []

    def slow_line(x):
        calls.append(x)
        time.sleep(0.02)
        return x

    async def scenario():
        task = asyncio.ensure_future(bounded(slow_line, (0.0, 1e9), 100_000))
        await asyncio.sleep(0.1)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        await asyncio.sleep(0.1)
        settled = len(calls)
        await asyncio.sleep(0.1)
        return settled, len(calls)

    settled, final = asyncio.run(scenario())
    assert settled == final
    assert 0 < final < 50
