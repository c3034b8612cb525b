"""
Deferred-callback schedulers for autoplay.

Autoplay is the only asynchronous boundary of the playback engine: after a
step is shown, the next advance fires after a delay. Sessions never touch a
clock directly; they ask a :class:`Scheduler` for a cancellable
:class:`TimerHandle` and keep at most one of them alive.

Implementations
---------------
- :class:`ThreadingScheduler`: wall-clock timers on daemon threads. Used by
  the CLI and the HTTP service.
- :class:`ManualScheduler`: a virtual clock driven explicitly via
  ``advance(ms)`` / ``run_next()`` / ``run_all()``. Deterministic; used by
  tests and by hosts that own their own event loop.
"""

from __future__ import annotations

import heapq
import itertools
import threading
from collections.abc import Callable
from typing import Protocol

Callback = Callable[[], None]


class TimerHandle(Protocol):
    """Ownership handle for one scheduled callback."""

    @property
    def cancelled(self) -> bool: ...

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything able to run ``callback`` once after ``delay_ms`` milliseconds."""

    def schedule(self, delay_ms: float, callback: Callback) -> TimerHandle: ...


# --------------------------------------------------------------------------- #
# Wall clock
# --------------------------------------------------------------------------- #


class ThreadTimerHandle:
    """Handle wrapping a :class:`threading.Timer`."""

    __slots__ = ("_timer", "_cancelled")

    def __init__(self, timer: threading.Timer) -> None:
        self._timer = timer
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True
        self._timer.cancel()


class ThreadingScheduler:
    """Run callbacks on daemon ``threading.Timer`` threads."""

    def schedule(self, delay_ms: float, callback: Callback) -> ThreadTimerHandle:
        timer = threading.Timer(max(delay_ms, 0.0) / 1000.0, callback)
        timer.daemon = True
        timer.start()
        return ThreadTimerHandle(timer)


# --------------------------------------------------------------------------- #
# Virtual clock
# --------------------------------------------------------------------------- #


class ManualTimer:
    """A pending entry of :class:`ManualScheduler`.

    ``callback`` stays reachable after cancellation so tests can force a
    stale fire and check that it has no effect.
    """

    __slots__ = ("due_ms", "callback", "_cancelled", "_fired")

    def __init__(self, due_ms: float, callback: Callback) -> None:
        self.due_ms = due_ms
        self.callback = callback
        self._cancelled = False
        self._fired = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def fired(self) -> bool:
        return self._fired

    def cancel(self) -> None:
        self._cancelled = True

    def fire(self) -> None:
        self._fired = True
        self.callback()


class ManualScheduler:
    """
    Deterministic scheduler over a virtual millisecond clock.

    Nothing runs until the owner moves the clock. Callbacks due at the same
    instant fire in scheduling order; callbacks scheduled while firing are
    picked up by the same ``advance`` call if they fall due within it.
    """

    def __init__(self) -> None:
        self.now_ms: float = 0.0
        self._queue: list[tuple[float, int, ManualTimer]] = []
        self._seq = itertools.count()
        self.history: list[ManualTimer] = []

    def schedule(self, delay_ms: float, callback: Callback) -> ManualTimer:
        timer = ManualTimer(self.now_ms + max(delay_ms, 0.0), callback)
        heapq.heappush(self._queue, (timer.due_ms, next(self._seq), timer))
        self.history.append(timer)
        return timer

    @property
    def pending(self) -> list[ManualTimer]:
        """Live (not cancelled, not fired) timers in due order."""
        return [t for _, _, t in sorted(self._queue) if not t.cancelled and not t.fired]

    def _pop_live(self) -> ManualTimer | None:
        while self._queue:
            _, _, timer = heapq.heappop(self._queue)
            if not timer.cancelled:
                return timer
        return None

    def run_next(self) -> bool:
        """Jump the clock to the next live timer and fire it. False if idle."""
        timer = self._pop_live()
        if timer is None:
            return False
        self.now_ms = max(self.now_ms, timer.due_ms)
        timer.fire()
        return True

    def advance(self, ms: float) -> int:
        """Move the clock forward by ``ms`` and fire everything due. Returns count."""
        target = self.now_ms + ms
        fired = 0
        while self._queue:
            due, _, timer = self._queue[0]
            if due > target:
                break
            heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self.now_ms = due
            timer.fire()
            fired += 1
        self.now_ms = target
        return fired

    def run_all(self, limit: int = 100_000) -> int:
        """Fire timers until none remain. ``limit`` guards runaway loops."""
        fired = 0
        while fired < limit and self.run_next():
            fired += 1
        return fired


__all__ = [
    "Callback",
    "ManualScheduler",
    "ManualTimer",
    "Scheduler",
    "ThreadTimerHandle",
    "ThreadingScheduler",
    "TimerHandle",
]
