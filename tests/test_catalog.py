"""Tests for the algorithm catalog and session factory."""

from __future__ import annotations

import pytest

from algoplay.algorithms import all_algorithms, categories, create_session, lookup
from algoplay.core.playback import ManualScheduler, RecordingSink

EXPECTED_IDS = {
    "bubble-sort",
    "insertion-sort",
    "selection-sort",
    "linear-search",
    "binary-search",
    "naive-pattern",
    "kmp",
    "fibonacci",
    "knapsack",
    "bfs",
}


def test_catalog_lists_every_demonstration_once() -> None:
    ids = [e.id for e in all_algorithms()]
    assert len(ids) == len(set(ids))
    assert set(ids) == EXPECTED_IDS


def test_categories_group_entries() -> None:
    grouped = categories()
    assert list(grouped) == ["sorting", "searching", "strings", "dynamic-programming", "graphs"]
    assert [e.id for e in grouped["sorting"]] == ["bubble-sort", "insertion-sort", "selection-sort"]


def test_lookup_unknown_id_is_err() -> None:
    found = lookup("quick-sort")
    assert found.is_err()
    assert "Unknown algorithm 'quick-sort'" in found.unwrap_err()
    assert "bubble-sort" in found.unwrap_err()


@pytest.mark.parametrize("entry", all_algorithms(), ids=lambda e: e.id)
@pytest.mark.parametrize("seed", [0, 1, 7, 42])
def test_sample_inputs_produce_valid_traces(entry, seed: int) -> None:  # type: ignore[no-untyped-def]
    trace = entry.trace(entry.sample_input(seed))
    assert len(trace) > 1
    assert not trace.is_failure


@pytest.mark.parametrize("entry", all_algorithms(), ids=lambda e: e.id)
def test_sample_input_is_deterministic_for_a_seed(entry) -> None:  # type: ignore[no-untyped-def]
    assert entry.sample_input(3) == entry.sample_input(3)


def test_sample_size_override() -> None:
    entry = lookup("bubble-sort").unwrap()
    assert len(entry.sample_input(1, size=4)["array"]) == 4


def test_create_session_with_explicit_input() -> None:
    sink = RecordingSink()
    created = create_session(
        "bubble-sort",
        {"array": [2, 1]},
        scheduler=ManualScheduler(),
        sink=sink,
        base_delay_ms=100,
    )
    session = created.unwrap()
    assert session.position == 0
    assert session.is_playing is False
    assert session.initial_input == {"array": [2, 1]}
    assert sink.indices == [0]


def test_create_session_draws_sample_when_input_missing() -> None:
    a = create_session("fibonacci", scheduler=ManualScheduler(), seed=5).unwrap()
    b = create_session("fibonacci", scheduler=ManualScheduler(), seed=5).unwrap()
    assert a.initial_input == b.initial_input
    assert a.trace == b.trace


def test_create_session_unknown_id() -> None:
    assert create_session("nope", scheduler=ManualScheduler()).is_err()


@pytest.mark.parametrize("entry", all_algorithms(), ids=lambda e: e.id)
def test_default_inputs_produce_valid_traces(entry) -> None:  # type: ignore[no-untyped-def]
    assert entry.default_input is not None
    trace = entry.trace(entry.default_input)
    assert len(trace) > 1
    assert not trace.is_failure


def test_default_knapsack_solution() -> None:
    entry = lookup("knapsack").unwrap()
    assert entry.trace(entry.default_input).last.description == (
        "Knapsack solved! Maximum value: 34. Selected items: Laptop, Camera, Jacket."
    )
