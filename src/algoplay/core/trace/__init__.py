"""Trace model: immutable snapshots and the traces built from them."""

from __future__ import annotations

from .snapshot import Snapshot, freeze, thaw
from .trace import NO_DATA_DESCRIPTION, Trace, TraceGenerator, TraceRecorder, materialize

__all__ = [
    "NO_DATA_DESCRIPTION",
    "Snapshot",
    "Trace",
    "TraceGenerator",
    "TraceRecorder",
    "freeze",
    "materialize",
    "thaw",
]
