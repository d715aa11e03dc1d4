"""Bridge synchronous searches into asyncio.

The search engines are plain CPU-bound loops. ``run_in_worker`` moves one of
them onto the event loop's default thread pool so the loop keeps running
other tasks, and several searches can be in flight at once.

Cancellation is cooperative: every call gets its own ``threading.Event``,
which is set when the awaiting task is cancelled. The engines poll it once
per iteration through :func:`check_cancelled` and abandon their state.
"""

from __future__ import annotations

import asyncio
import threading
from typing import Any, Callable, Optional, TypeVar

from .errors import SearchCancelled

T = TypeVar("T")


def check_cancelled(cancel_event: Optional[threading.Event]) -> None:
    """Raise ``SearchCancelled`` if ``cancel_event`` has been set."""
    if cancel_event is not None and cancel_event.is_set():
        raise SearchCancelled("search cancelled by its caller")


async def run_in_worker(func: Callable[..., T], /, *args: Any, **kwargs: Any) -> T:
    """Run ``func(*args, cancel_event=..., **kwargs)`` on a worker thread.

    ``func`` must accept a ``cancel_event`` keyword. Exceptions raised by
    ``func`` reach the awaiting caller unchanged.
    """
    cancel_event = threading.Event()
    try:
        return await asyncio.to_thread(func, *args, cancel_event=cancel_event, **kwargs)
    except asyncio.CancelledError:
        cancel_event.set()
        raise


__all__ = ["check_cancelled", "run_in_worker"]
