"""Deferred callbacks for the single-threaded event model.

Everything in the engine runs on one logical thread. The only suspension
points are callbacks scheduled to run later: the debounced coverage
evaluation and the completion effect's own timing. Both go through the
Scheduler protocol so the same code runs against a live asyncio loop or
a virtual clock.
"""

import asyncio
import heapq
import itertools
from collections.abc import Callable
from typing import Protocol


class Cancellable(Protocol):
    """Handle returned by a scheduler."""

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Runs callbacks after a delay on the caller's thread."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable: ...


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(delay, callback)


class ScheduledCall:
    """A callback queued on a ManualScheduler."""

    __slots__ = ("callback", "cancelled", "due")

    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler driven by a virtual clock.

    Time only moves when ``advance`` or ``run_all`` is called. Due callbacks
    run in due-time order, and in scheduling order for equal times.
    Callbacks may schedule further callbacks; those run too if they fall
    due within the advanced window.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._queue: list[tuple[float, int, ScheduledCall]] = []
        self._counter = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        """Number of queued, non-cancelled callbacks."""
        return sum(1 for _, _, call in self._queue if not call.cancelled)

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(self._now + max(0.0, delay), callback)
        heapq.heappush(self._queue, (call.due, next(self._counter), call))
        return call

    def advance(self, seconds: float) -> int:
        """Move the clock forward, running everything that falls due.

        Returns:
            Number of callbacks run
        """
        return self.advance_to(self._now + seconds)

    def advance_to(self, when: float) -> int:
        """Move the clock to an absolute time, running due callbacks."""
        ran = 0
        while self._queue and self._queue[0][0] <= when:
            due, _, call = heapq.heappop(self._queue)
            if call.cancelled:
                continue
            self._now = max(self._now, due)
            call.callback()
            ran += 1
        self._now = max(self._now, when)
        return ran

    def run_all(self, limit: int = 10_000) -> int:
        """Run queued callbacks until the queue is empty.

        Raises:
            RuntimeError: If more than ``limit`` callbacks run
        """
        ran = 0
        while self._queue:
            due, _, call = heapq.heappop(self._queue)
            if call.cancelled:
                continue
            self._now = max(self._now, due)
            call.callback()
            ran += 1
            if ran > limit:
                raise RuntimeError("Scheduler did not settle")
        return ran
