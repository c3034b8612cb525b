"""Presentation sink boundary: what a session hands to whoever renders it."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from algoplay.core.trace.snapshot import Snapshot

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class StepFrame(Generic[T]):
    """
    One committed playback position.

    Attributes
    ----------
    snapshot : Snapshot[T]
        The step now on display.
    index : int
        0-based position of ``snapshot`` in the trace.
    total_steps : int
        Length of the trace.
    """

    snapshot: Snapshot[T]
    index: int
    total_steps: int

    @property
    def is_first(self) -> bool:
        return self.index == 0

    @property
    def is_last(self) -> bool:
        return self.index == self.total_steps - 1

    def label(self) -> str:
        """1-based "Step i / n" label used by the terminal and HTTP views."""
        return f"Step {self.index + 1} / {self.total_steps}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "total_steps": self.total_steps,
            "snapshot": self.snapshot.to_dict(),
        }


PresentationSink = Callable[[StepFrame[Any]], None]


class RecordingSink:
    """Sink that keeps every frame it receives, in delivery order."""

    def __init__(self) -> None:
        self.frames: list[StepFrame[Any]] = []

    def __call__(self, frame: StepFrame[Any]) -> None:
        self.frames.append(frame)

    @property
    def indices(self) -> list[int]:
        return [f.index for f in self.frames]

    @property
    def latest(self) -> StepFrame[Any] | None:
        return self.frames[-1] if self.frames else None

    def clear(self) -> None:
        self.frames.clear()


__all__ = ["PresentationSink", "RecordingSink", "StepFrame"]
