"""Cancellable timed callbacks.

The retrigger loop suspends between ticks through a Scheduler. Live
sessions use AsyncioScheduler (loop.call_later); tests and offline
bouncing use ManualScheduler, a virtual clock advanced explicitly.
Delays are in seconds.
"""

import asyncio
import heapq
import itertools
import logging
from collections.abc import Callable
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class CancelHandle(Protocol):
    """Handle to a scheduled callback."""

    def cancel(self) -> None:
        """Prevent the callback from running. Idempotent."""
        ...

    def cancelled(self) -> bool:
        ...


@runtime_checkable
class Scheduler(Protocol):
    """Source of cancellable timed callbacks on a single timeline."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> CancelHandle:
        """Run `callback` once after `delay` seconds."""
        ...

    def now(self) -> float:
        """Current time on this scheduler's clock, in seconds."""
        ...


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        """
        Args:
            loop: Event loop to schedule on (defaults to the running loop)
        """
        self._loop = loop or asyncio.get_running_loop()

    def schedule(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self._loop.call_later(delay, callback)

    def now(self) -> float:
        return self._loop.time()


class ManualHandle:
    """CancelHandle for ManualScheduler."""

    __slots__ = ("due", "callback", "_cancelled")

    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else "pending"
        return f"<ManualHandle due={self.due:.3f} {state}>"


class ManualScheduler:
    """
    Deterministic virtual clock.

    Nothing runs until advance() is called; callbacks then fire in due-time
    order (ties in scheduling order), with now() set to each callback's due
    time, including callbacks scheduled by callbacks during the advance.
    """

    def __init__(self, start: float = 0.0):
        self._now = start
        self._queue: list[tuple[float, int, ManualHandle]] = []
        self._counter = itertools.count()

    def schedule(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(self._now + max(0.0, delay), callback)
        heapq.heappush(self._queue, (handle.due, next(self._counter), handle))
        return handle

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> int:
        """
        Move the clock forward, running every callback that falls due.

        Args:
            seconds: How far to move the clock

        Returns:
            Number of callbacks that ran

        Raises:
            ValueError: If `seconds` is negative
        """
        if seconds < 0:
            raise ValueError(f"Cannot move the clock backwards ({seconds}s)")
        target = self._now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            if handle.cancelled():
                continue
            self._now = due
            handle.callback()
            fired += 1
        self._now = target
        return fired

    def advance_to(self, when: float) -> int:
        """Advance to an absolute time on this clock."""
        return self.advance(max(0.0, when - self._now))

    def next_due(self) -> float | None:
        """Due time of the earliest pending callback, or None if nothing is pending."""
        while self._queue and self._queue[0][2].cancelled():
            heapq.heappop(self._queue)
        return self._queue[0][0] if self._queue else None

    def pending(self) -> int:
        """Number of callbacks still waiting to fire."""
        return sum(1 for _, _, handle in self._queue if not handle.cancelled())
