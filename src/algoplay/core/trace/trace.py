"""
Materialized execution traces.

A :class:`Trace` is the ordered, finite, never-empty sequence of snapshots a
trace generator produced for one input. It is built once, eagerly, and never
changes afterwards; a playback session owns exactly one trace at a time.

This module also provides:

- ``TraceGenerator``: the callable contract every demonstration satisfies.
- :class:`TraceRecorder`: append-only helper generators use to record steps.
- :func:`materialize`: run a generator once and wrap its output as a Trace.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import Any, Generic, TypeVar, overload

from algoplay.core.settings import get_logger

from .snapshot import Snapshot

T = TypeVar("T")

TraceGenerator = Callable[[Any], Iterable[Snapshot[Any]]]

NO_DATA_DESCRIPTION = "No data available for this visualization."

logger = get_logger("algoplay.trace")


class Trace(Sequence[Snapshot[T]], Generic[T]):
    """
    Immutable, 0-indexed sequence of snapshots with ``len(trace) >= 1``.

    An empty input is a generator contract violation; it is replaced by a
    single synthetic "no data" snapshot so that playback always has a valid
    position to sit on.
    """

    __slots__ = ("_steps",)

    def __init__(self, steps: Iterable[Snapshot[T]] = ()) -> None:
        items = tuple(steps)
        for i, step in enumerate(items):
            if not isinstance(step, Snapshot):
                raise TypeError(f"trace step {i} is {type(step).__name__}, expected Snapshot")
        if not items:
            logger.warning("Trace generator produced no steps; substituting a no-data step")
            items = (
                Snapshot(data=None, description=NO_DATA_DESCRIPTION, annotations={"error": "empty-trace"}),
            )
        self._steps: tuple[Snapshot[T], ...] = items

    @classmethod
    def failure(cls, message: str, **annotations: Any) -> Trace[Any]:
        """
        Build the single-step trace a generator returns for invalid input.

        Parameters
        ----------
        message : str
            Human-readable explanation, used as the step description.
        annotations : Any
            Extra fields (e.g. ``expected="{'array': [int, ...]}"``).
        """
        return cls([Snapshot(data=None, description=message, annotations={"error": "invalid-input", **annotations})])

    # ---------------------------- Sequence API ------------------------------

    def __len__(self) -> int:
        return len(self._steps)

    @overload
    def __getitem__(self, index: int) -> Snapshot[T]: ...
    @overload
    def __getitem__(self, index: slice) -> tuple[Snapshot[T], ...]: ...

    def __getitem__(self, index: int | slice) -> Snapshot[T] | tuple[Snapshot[T], ...]:
        return self._steps[index]

    def __iter__(self) -> Iterator[Snapshot[T]]:
        return iter(self._steps)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Trace):
            return self._steps == other._steps
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Trace(steps={len(self._steps)})"

    # ---------------------------- Helpers -----------------------------------

    @property
    def first(self) -> Snapshot[T]:
        return self._steps[0]

    @property
    def last(self) -> Snapshot[T]:
        return self._steps[-1]

    @property
    def end_index(self) -> int:
        """Index of the terminal step (``len - 1``)."""
        return len(self._steps) - 1

    @property
    def is_failure(self) -> bool:
        """True when the trace is a single error/no-data step."""
        return len(self._steps) == 1 and self._steps[0].is_error

    def to_list(self) -> list[dict[str, Any]]:
        """Return every step as a JSON-safe dict."""
        return [s.to_dict() for s in self._steps]


class TraceRecorder(Generic[T]):
    """
    Append-only step recorder used inside trace generators.

    Each ``record`` call builds a new frozen :class:`Snapshot`, so passing the
    same working list on every call is safe.
    """

    __slots__ = ("_steps",)

    def __init__(self) -> None:
        self._steps: list[Snapshot[T]] = []

    def record(
        self,
        data: T,
        description: str,
        *,
        code: str | None = None,
        complexity: str | None = None,
        **extra: Any,
    ) -> Snapshot[T]:
        """Append a step and return it. ``None`` annotations are dropped."""
        annotations = {"code": code, "complexity": complexity, **extra}
        snap = Snapshot(
            data=data,
            description=description,
            annotations={k: v for k, v in annotations.items() if v is not None},
        )
        self._steps.append(snap)
        return snap

    def __len__(self) -> int:
        return len(self._steps)

    def build(self) -> Trace[T]:
        """Return the recorded steps as a :class:`Trace`."""
        return Trace(self._steps)


def materialize(generator: TraceGenerator, initial_input: Any) -> Trace[Any]:
    """
    Invoke ``generator`` exactly once and return its output as a Trace.

    Exceptions raised by the generator are programming errors and propagate.
    """
    output = generator(initial_input)
    if isinstance(output, Trace):
        return output
    return Trace(output)


__all__ = [
    "NO_DATA_DESCRIPTION",
    "Trace",
    "TraceGenerator",
    "TraceRecorder",
    "materialize",
]
