"""
Playback session: the state machine that drives one trace.

A session owns exactly one :class:`~algoplay.core.trace.Trace`, a position
inside it, a play/pause flag and a speed multiplier. Autoplay is implemented
as a chain of single deferred advances obtained from a
:class:`~algoplay.core.playback.scheduler.Scheduler`; the session holds at
most one pending handle at a time.

State machine
-------------
    Idle-At(i) x {playing, paused}, 0 <= i <= end

    reseed(x)      -> Idle-At(0), paused          (trace replaced wholesale)
    play()         -> playing; from Idle-At(end) restarts at 0
    pause()        -> paused
    step_forward() -> Idle-At(i+1), paused        (no-op at end)
    step_backward()-> Idle-At(i-1), paused        (no-op at 0)
    reset()        -> Idle-At(0), paused
    <advance>      -> Idle-At(i+1); paused once i+1 == end

Cancellation
------------
Every transition that stops autoplay or moves the position directly cancels
the pending handle before applying its own effect. Each scheduled advance
also carries a generation token; an advance whose token is no longer current,
or which fires while paused, does nothing. This makes a stale callback
unobservable even if a scheduler delivers it after ``cancel()``.

Threading
---------
Transitions are serialized by a re-entrant lock so that a wall-clock
scheduler firing on another thread cannot interleave with a user transition.
The session is still meant to be driven by one logical caller.
"""

from __future__ import annotations

import math
import threading
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from algoplay.core.settings import get_logger, load_settings
from algoplay.core.trace.snapshot import Snapshot
from algoplay.core.trace.trace import Trace, TraceGenerator, materialize

from .scheduler import Scheduler, ThreadingScheduler, TimerHandle
from .sink import PresentationSink, StepFrame

T = TypeVar("T")

logger = get_logger("algoplay.playback")


@dataclass(frozen=True, slots=True)
class PlaybackState(Generic[T]):
    """Consistent view of a session, captured under its lock."""

    frame: StepFrame[T]
    is_playing: bool
    speed_multiplier: float
    delay_ms: float

    @property
    def position(self) -> int:
        return self.frame.index


def _valid_speed(multiplier: Any) -> bool:
    return (
        isinstance(multiplier, int | float)
        and not isinstance(multiplier, bool)
        and math.isfinite(multiplier)
        and multiplier > 0
    )


class PlaybackSession(Generic[T]):
    """
    Interactive controller over the trace of one algorithm run.

    Parameters
    ----------
    generator : TraceGenerator
        Pure function turning an input into a sequence of snapshots. Called
        exactly once per ``reseed`` (and once on construction).
    initial_input : Any
        First input handed to ``generator``.
    scheduler : Scheduler | None
        Source of autoplay timers; defaults to :class:`ThreadingScheduler`.
    sink : PresentationSink | None
        Receives a :class:`StepFrame` on every committed position change.
    base_delay_ms : float | None
        Delay between autoplay steps at 1x; defaults to settings.
    speed_multiplier : float
        Initial speed; invalid values fall back to 1.0.
    """

    def __init__(
        self,
        generator: TraceGenerator,
        initial_input: Any,
        *,
        scheduler: Scheduler | None = None,
        sink: PresentationSink | None = None,
        base_delay_ms: float | None = None,
        speed_multiplier: float = 1.0,
    ) -> None:
        self._generator = generator
        self._scheduler: Scheduler = scheduler if scheduler is not None else ThreadingScheduler()
        self._sink = sink
        self._base_delay_ms = (
            base_delay_ms if base_delay_ms is not None else load_settings().base_delay_ms
        )
        if not _valid_speed(speed_multiplier):
            logger.warning("Invalid initial speed %r; using 1.0", speed_multiplier)
            speed_multiplier = 1.0
        self._speed = float(speed_multiplier)

        self._lock = threading.RLock()
        self._pending: TimerHandle | None = None
        self._generation = 0
        self._is_playing = False
        self._position = 0
        self._input: Any = None
        self._trace: Trace[T]
        self.reseed(initial_input)

    # ------------------------------- Observation ----------------------------

    @property
    def trace(self) -> Trace[T]:
        return self._trace

    @property
    def position(self) -> int:
        return self._position

    @property
    def is_playing(self) -> bool:
        return self._is_playing

    @property
    def speed_multiplier(self) -> float:
        return self._speed

    @property
    def total_steps(self) -> int:
        return len(self._trace)

    @property
    def base_delay_ms(self) -> float:
        return self._base_delay_ms

    @property
    def delay_ms(self) -> float:
        """Delay the next scheduled advance will use."""
        return self._base_delay_ms / self._speed

    @property
    def initial_input(self) -> Any:
        """The input the current trace was generated from."""
        return self._input

    @property
    def current(self) -> Snapshot[T]:
        with self._lock:
            return self._trace[self._position]

    @property
    def frame(self) -> StepFrame[T]:
        with self._lock:
            index = self._position
            return StepFrame(self._trace[index], index, len(self._trace))

    def state(self) -> PlaybackState[T]:
        """Position, play flag and speed read together, so they always agree."""
        with self._lock:
            return PlaybackState(self.frame, self._is_playing, self._speed, self.delay_ms)

    @property
    def at_start(self) -> bool:
        return self._position == 0

    @property
    def at_end(self) -> bool:
        with self._lock:
            return self._position == self._trace.end_index

    @property
    def has_pending_advance(self) -> bool:
        return self._pending is not None

    # ------------------------------- Transitions ----------------------------

    def reseed(self, new_input: Any) -> None:
        """Regenerate the trace from ``new_input`` and rewind to step 0, paused."""
        with self._lock:
            self._cancel_pending()
            self._is_playing = False
            trace = materialize(self._generator, new_input)
            self._trace = trace
            self._input = new_input
            logger.debug("reseed: %d steps", len(trace))
            self._commit(0, force=True)

    def play(self) -> None:
        """Start autoplay; restarts from step 0 when already at the end."""
        with self._lock:
            if self._is_playing:
                return
            if self.at_end:
                self._commit(0)
            if self._trace.end_index == 0:
                logger.debug("play: single-step trace, nothing to advance")
                return
            self._is_playing = True
            logger.debug("play: from %d at %.2fx", self._position, self._speed)
            self._schedule_advance()

    def pause(self) -> None:
        """Stop autoplay. Idempotent."""
        with self._lock:
            self._cancel_pending()
            if self._is_playing:
                logger.debug("pause: at %d", self._position)
            self._is_playing = False

    def step_forward(self) -> None:
        """Move one step forward, interrupting autoplay. No-op at the end."""
        with self._lock:
            if self._position >= self._trace.end_index:
                return
            self._cancel_pending()
            self._is_playing = False
            self._commit(self._position + 1)

    def step_backward(self) -> None:
        """Move one step back, interrupting autoplay. No-op at step 0."""
        with self._lock:
            if self._position <= 0:
                return
            self._cancel_pending()
            self._is_playing = False
            self._commit(self._position - 1)

    def reset(self) -> None:
        """Stop autoplay and rewind to step 0. Idempotent."""
        with self._lock:
            self._cancel_pending()
            self._is_playing = False
            self._commit(0)

    def set_speed(self, multiplier: float) -> None:
        """
        Change the autoplay speed.

        An already pending advance keeps its delay; the next one scheduled
        uses the new multiplier. Non-positive or non-finite values are ignored.
        """
        with self._lock:
            if not _valid_speed(multiplier):
                logger.warning("Ignoring invalid speed multiplier %r", multiplier)
                return
            self._speed = float(multiplier)

    def close(self) -> None:
        """Cancel any pending advance; the session stays readable."""
        self.pause()

    def __enter__(self) -> PlaybackSession[T]:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # ------------------------------- Internals ------------------------------

    def _commit(self, index: int, *, force: bool = False) -> None:
        """Single point where the position changes and the sink is notified."""
        if index == self._position and not force:
            return
        self._position = index
        if self._sink is not None:
            self._sink(StepFrame(self._trace[index], index, len(self._trace)))

    def _cancel_pending(self) -> None:
        self._generation += 1
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _schedule_advance(self) -> None:
        self._cancel_pending()
        token = self._generation
        self._pending = self._scheduler.schedule(self.delay_ms, lambda: self._advance(token))

    def _advance(self, token: int) -> None:
        with self._lock:
            if token != self._generation or not self._is_playing:
                return
            self._pending = None
            if self._position < self._trace.end_index:
                self._commit(self._position + 1)
            if self._position >= self._trace.end_index:
                self._is_playing = False
                logger.debug("autoplay finished at %d", self._position)
                return
            self._schedule_advance()

    def __repr__(self) -> str:
        state = "playing" if self._is_playing else "paused"
        return (
            f"PlaybackSession(position={self._position}, total_steps={len(self._trace)}, "
            f"{state}, speed={self._speed})"
        )


__all__ = ["PlaybackSession", "PlaybackState"]
