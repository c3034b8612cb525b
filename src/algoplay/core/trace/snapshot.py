"""
Snapshot definition.

A snapshot is the immutable record of one point in an algorithm's execution:
the algorithm-specific payload, a human-readable description of what just
happened, and free-form annotations (highlighted pseudo-code line, complexity
note, ...). The payload is opaque to the playback engine.

Design Notes
------------
- **Immutability**: ``frozen=True`` plus a structural freeze of ``data`` and
  ``annotations`` on construction. Lists become tuples, dicts become read-only
  mappings, sets become frozensets. A generator that keeps mutating one
  working buffer and passes it to every step therefore records distinct,
  stable states instead of aliases of the same storage.
- **Serialization**: ``to_dict()`` thaws the frozen containers back into
  JSON-friendly lists and dicts for the CLI and the HTTP layer.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping, Set
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Generic, TypeVar

T = TypeVar("T")

_SCALARS = (type(None), bool, int, float, complex, str, bytes)


def freeze(value: Any) -> Any:
    """
    Return a deep, read-only copy of ``value``.

    Strategies:
    - Scalars (None, bool, numbers, str, bytes) -> returned as-is.
    - Mappings -> ``MappingProxyType`` over a fresh dict of frozen values.
    - list/tuple -> tuple of frozen values (named tuples keep their type).
    - set/frozenset -> frozenset.
    - anything else -> ``copy.deepcopy(value)``.
    """
    if isinstance(value, _SCALARS):
        return value
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, tuple) and hasattr(value, "_fields"):
        return type(value)(*(freeze(v) for v in value))
    if isinstance(value, list | tuple):
        return tuple(freeze(v) for v in value)
    if isinstance(value, Set):
        return frozenset(value)
    return copy.deepcopy(value)


def thaw(value: Any) -> Any:
    """Return a JSON-friendly, mutable copy of a frozen value."""
    if isinstance(value, Mapping):
        return {str(k): thaw(v) for k, v in value.items()}
    if isinstance(value, tuple) and hasattr(value, "_asdict"):
        return {k: thaw(v) for k, v in value._asdict().items()}
    if isinstance(value, list | tuple):
        return [thaw(v) for v in value]
    if isinstance(value, Set):
        return sorted((thaw(v) for v in value), key=repr)
    return value


@dataclass(frozen=True, slots=True)
class Snapshot(Generic[T]):
    """
    Immutable record of one execution step.

    Attributes
    ----------
    data : T
        Algorithm-specific payload (array contents, DP table, graph state).
        Frozen on construction.
    description : str
        Narration of what happened at this step.
    annotations : Mapping[str, Any]
        Auxiliary fields passed through unmodified by the engine. The bundled
        generators use ``code``, ``complexity``, ``state`` and ``error``.
    """

    data: T
    description: str = ""
    annotations: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", freeze(self.data))
        object.__setattr__(self, "annotations", freeze(self.annotations))

    @property
    def code_highlight(self) -> str | None:
        """The highlighted pseudo-code fragment, if any."""
        return self.annotations.get("code")

    @property
    def complexity_info(self) -> str | None:
        """The complexity note for this step, if any."""
        return self.annotations.get("complexity")

    @property
    def is_error(self) -> bool:
        """True for synthetic error/no-data snapshots."""
        return "error" in self.annotations

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-safe dict view of the snapshot."""
        return {
            "data": thaw(self.data),
            "description": self.description,
            "annotations": thaw(self.annotations),
        }


__all__ = ["Snapshot", "freeze", "thaw"]
