"""Unit tests for snapshots, traces and the step recorder."""

from __future__ import annotations

from collections import namedtuple
from typing import Any

import pytest

from algoplay.core.trace import (
    NO_DATA_DESCRIPTION,
    Snapshot,
    Trace,
    TraceRecorder,
    freeze,
    materialize,
    thaw,
)

Edge = namedtuple("Edge", ["src", "dst"])


def test_snapshot_freezes_nested_payload() -> None:
    payload = {"array": [3, 1, 2], "meta": {"tags": {"a", "b"}}, "edge": Edge("A", "B")}
    snap = Snapshot(payload, "initial")

    assert snap.data["array"] == (3, 1, 2)
    assert snap.data["meta"]["tags"] == frozenset({"a", "b"})
    assert isinstance(snap.data["edge"], Edge)
    with pytest.raises(TypeError):
        snap.data["array"] = (0,)  # type: ignore[index]


def test_snapshot_is_isolated_from_working_buffer() -> None:
    """Mutating the generator's buffer after recording must not alter the step."""
    working = [5, 4, 3]
    rec: TraceRecorder[list[int]] = TraceRecorder()
    rec.record(working, "before")
    working[0], working[2] = working[2], working[0]
    rec.record(working, "after")
    trace = rec.build()

    assert trace[0].data == (5, 4, 3)
    assert trace[1].data == (3, 4, 5)


def test_snapshot_attributes_are_read_only() -> None:
    snap = Snapshot([1], "x")
    with pytest.raises(AttributeError):
        snap.description = "changed"  # type: ignore[misc]


def test_snapshot_annotation_accessors() -> None:
    snap = Snapshot([1], "x", {"code": "swap(a, b)", "complexity": "O(n^2)"})
    assert snap.code_highlight == "swap(a, b)"
    assert snap.complexity_info == "O(n^2)"
    assert snap.is_error is False
    assert Snapshot(None, "y").code_highlight is None


def test_snapshot_to_dict_is_json_friendly() -> None:
    snap = Snapshot({"array": [1, 2], "visited": {"B", "A"}}, "step", {"state": "compare"})
    assert snap.to_dict() == {
        "data": {"array": [1, 2], "visited": ["A", "B"]},
        "description": "step",
        "annotations": {"state": "compare"},
    }


def test_freeze_and_thaw_of_scalars_are_identity() -> None:
    for value in (None, True, 3, 2.5, "s"):
        assert freeze(value) == value
        assert thaw(value) == value


def test_trace_is_an_immutable_sequence() -> None:
    trace = Trace([Snapshot(1, "a"), Snapshot(2, "b"), Snapshot(3, "c")])
    assert len(trace) == 3
    assert trace.first.description == "a"
    assert trace.last.description == "c"
    assert trace.end_index == 2
    assert [s.data for s in trace] == [1, 2, 3]
    assert isinstance(trace[0:2], tuple)
    assert not hasattr(trace, "append")


def test_trace_rejects_non_snapshot_items() -> None:
    with pytest.raises(TypeError):
        Trace([Snapshot(1, "ok"), {"data": 2}])  # type: ignore[list-item]


def test_empty_trace_becomes_single_no_data_step() -> None:
    trace: Trace[Any] = Trace([])
    assert len(trace) == 1
    assert trace[0].description == NO_DATA_DESCRIPTION
    assert trace[0].annotations["error"] == "empty-trace"
    assert trace.is_failure


def test_failure_trace_carries_message_and_annotations() -> None:
    trace = Trace.failure("Error: bad input", expected="list")
    assert len(trace) == 1
    assert trace[0].description == "Error: bad input"
    assert trace[0].annotations == {"error": "invalid-input", "expected": "list"}
    assert trace.is_failure


def test_trace_equality_is_structural() -> None:
    a = Trace([Snapshot([1, 2], "x", {"k": [1]})])
    b = Trace([Snapshot([1, 2], "x", {"k": [1]})])
    c = Trace([Snapshot([2, 1], "x")])
    assert a == b
    assert a != c
    assert a != [Snapshot([1, 2], "x")]


def test_recorder_drops_none_annotations() -> None:
    rec: TraceRecorder[Any] = TraceRecorder()
    snap = rec.record([1], "step", code="if a > b", complexity=None, state="compare")
    assert dict(snap.annotations) == {"code": "if a > b", "state": "compare"}
    assert len(rec) == 1


def test_materialize_calls_generator_once() -> None:
    calls: list[Any] = []

    def gen(x: Any) -> list[Snapshot[Any]]:
        calls.append(x)
        return [Snapshot(x, "only")]

    trace = materialize(gen, 7)
    assert calls == [7]
    assert isinstance(trace, Trace)
    assert trace[0].data == 7


def test_materialize_accepts_lazy_generators() -> None:
    def gen(n: int):  # type: ignore[no-untyped-def]
        for i in range(n):
            yield Snapshot(i, f"step {i}")

    assert len(materialize(gen, 4)) == 4
    assert len(materialize(gen, 0)) == 1
