"""Playback engine: session state machine, schedulers and the sink boundary."""

from __future__ import annotations

from .scheduler import ManualScheduler, ManualTimer, Scheduler, ThreadingScheduler, TimerHandle
from .session import PlaybackSession, PlaybackState
from .sink import PresentationSink, RecordingSink, StepFrame

__all__ = [
    "ManualScheduler",
    "ManualTimer",
    "PlaybackSession",
    "PlaybackState",
    "PresentationSink",
    "RecordingSink",
    "Scheduler",
    "StepFrame",
    "ThreadingScheduler",
    "TimerHandle",
]
