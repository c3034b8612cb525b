"""Behavioral tests for the bundled trace generators.

Each generator must:
- end on a step whose payload shows the correct result,
- return a single error step (never raise) for malformed input,
- be pure: same input, equal trace; the caller's input is never mutated.
"""

from __future__ import annotations

import copy
from typing import Any

import pytest

from algoplay.algorithms.dynamic import MAX_FIBONACCI_N, fibonacci, knapsack
from algoplay.algorithms.graphs import MAX_GRAPH_NODES, breadth_first_search
from algoplay.algorithms.searching import binary_search, linear_search
from algoplay.algorithms.sorting import bubble_sort, insertion_sort, selection_sort
from algoplay.algorithms.strings import kmp_search, naive_pattern_search
from algoplay.algorithms.validation import MAX_ARRAY_LENGTH, MAX_TEXT_LENGTH
from algoplay.core.trace import Trace

SORTS = [bubble_sort, insertion_sort, selection_sort]


def _all_matches(text: str, pattern: str) -> list[int]:
    return [i for i in range(len(text) - len(pattern) + 1) if text.startswith(pattern, i)]


# ------------------------------- Sorting ------------------------------------


@pytest.mark.parametrize("sort", SORTS)
@pytest.mark.parametrize(
    "array",
    [[], [7], [3, 1, 2], [5, 4, 3, 2, 1], [1, 2, 3, 4], [2, 2, 1, 1], [64, 34, 25, 12, 22, 11, 90]],
)
def test_sorts_end_sorted(sort: Any, array: list[int]) -> None:
    trace = sort({"array": array})
    assert not trace.is_failure
    assert list(trace.first.data["array"]) == array
    final = trace.last.data
    assert list(final["array"]) == sorted(array)
    assert list(final["sorted"]) == list(range(len(array)))
    assert all(step.description for step in trace)


def test_bubble_sort_step_sequence_for_small_input() -> None:
    trace = bubble_sort({"array": [3, 1, 2]})
    states = [step.data["array"] for step in trace]
    assert states[0] == (3, 1, 2)
    assert (1, 3, 2) in states
    assert len(trace) == 11
    assert trace.last.description.startswith("Bubble sort complete")


def test_bubble_sort_exits_early_on_sorted_input() -> None:
    trace = bubble_sort({"array": [1, 2, 3, 4, 5]})
    passes = [s for s in trace if s.description.startswith("Starting pass")]
    assert len(passes) == 1


@pytest.mark.parametrize("sort", SORTS)
@pytest.mark.parametrize(
    "bad",
    [None, [3, 1, 2], {"array": "nope"}, {"array": [1, "x"]}, {"array": [True, 2]}, {}],
)
def test_sorts_reject_malformed_input_without_raising(sort: Any, bad: Any) -> None:
    trace = sort(bad)
    assert len(trace) == 1
    assert trace[0].description.startswith("Error")
    assert trace[0].annotations["error"] == "invalid-input"


@pytest.mark.parametrize("sort", SORTS)
def test_sorts_are_pure(sort: Any) -> None:
    payload = {"array": [9, 4, 7, 1]}
    before = copy.deepcopy(payload)
    assert sort(payload) == sort(payload)
    assert payload == before


# ------------------------------- Searching ----------------------------------


def test_linear_search_found() -> None:
    trace = linear_search({"array": [4, 8, 15, 16], "target": 15})
    assert trace.last.data["found"] == 2
    assert "Found 15 at position 2" in trace.last.description
    assert len(trace) == 4


def test_linear_search_not_found() -> None:
    trace = linear_search({"array": [4, 8], "target": 5})
    assert trace.last.data["found"] is None
    assert "not present" in trace.last.description


def test_binary_search_found() -> None:
    trace = binary_search({"array": [1, 3, 5, 7, 9, 11, 13], "target": 11})
    assert trace.last.data["found"] == 5
    assert "Found target 11 at position 5" in trace.last.description


def test_binary_search_missing_target() -> None:
    trace = binary_search({"array": [1, 3, 5], "target": 4})
    assert trace.last.data["found"] is None
    assert "not in the array" in trace.last.description


def test_binary_search_on_empty_array() -> None:
    trace = binary_search({"array": [], "target": 1})
    assert not trace.is_failure
    assert "not in the array" in trace.last.description


def test_binary_search_rejects_unsorted_input() -> None:
    trace = binary_search({"array": [3, 1, 2], "target": 1})
    assert len(trace) == 1
    assert trace[0].description == "Error: binary search requires a sorted array."


@pytest.mark.parametrize("search", [linear_search, binary_search])
def test_searches_need_integer_target(search: Any) -> None:
    trace = search({"array": [1, 2], "target": "2"})
    assert trace.is_failure


# ------------------------------- Strings ------------------------------------


@pytest.mark.parametrize(
    ("text", "pattern"),
    [
        ("ABABDABACDABABCABAB", "ABABCABAB"),
        ("AABAACAADAABAABA", "AABA"),
        ("AAAAA", "AA"),
        ("abc", "abcd"),
        ("", "a"),
        ("hello", "z"),
    ],
)
def test_pattern_searches_agree_with_brute_force(text: str, pattern: str) -> None:
    expected = _all_matches(text, pattern)
    for search in (naive_pattern_search, kmp_search):
        trace = search({"text": text, "pattern": pattern})
        assert not trace.is_failure
        assert list(trace.last.data["matches"]) == expected
        assert f"{len(expected)} match(es)" in trace.last.description


def test_kmp_builds_prefix_table_first() -> None:
    trace = kmp_search({"text": "AABAACAABAA", "pattern": "AABAACAABAA"})
    phases = [s.data["phase"] for s in trace]
    first_search = phases.index("search")
    assert all(p == "lps" for p in phases[:first_search])
    assert all(p == "search" for p in phases[first_search:])
    assert list(trace.last.data["lps"]) == [0, 1, 0, 1, 2, 0, 1, 2, 3, 4, 5]


def test_kmp_uses_fewer_comparisons_than_naive_on_repetitive_text() -> None:
    payload = {"text": "AAAAAAAAAB", "pattern": "AAAB"}
    naive = naive_pattern_search(payload).last.data["comparisons"]
    kmp = kmp_search(payload).last.data["comparisons"]
    assert kmp < naive


@pytest.mark.parametrize("search", [naive_pattern_search, kmp_search])
@pytest.mark.parametrize("bad", [{"text": "abc", "pattern": ""}, {"text": 3, "pattern": "a"}, "abc"])
def test_pattern_searches_reject_malformed_input(search: Any, bad: Any) -> None:
    trace = search(bad)
    assert len(trace) == 1
    assert trace[0].description.startswith("Error")


# ------------------------------- Dynamic programming ------------------------


@pytest.mark.parametrize(("n", "expected"), [(0, 0), (1, 1), (2, 1), (10, 55), (MAX_FIBONACCI_N, 2880067194370816120)])
def test_fibonacci_final_value(n: int, expected: int) -> None:
    trace = fibonacci({"n": n})
    assert trace.last.data["table"][n] == expected
    assert trace.last.description == f"Done: F({n}) = {expected}."


def test_fibonacci_fills_table_in_order() -> None:
    trace = fibonacci({"n": 5})
    filled = [sum(v is not None for v in s.data["table"]) for s in trace]
    assert filled == sorted(filled)
    assert list(trace.last.data["table"]) == [0, 1, 1, 2, 3, 5]


@pytest.mark.parametrize("bad", [{"n": -1}, {"n": MAX_FIBONACCI_N + 1}, {"n": True}, {"n": "5"}, 5])
def test_fibonacci_rejects_bad_n(bad: Any) -> None:
    assert fibonacci(bad).is_failure


def test_knapsack_classic_instance() -> None:
    payload = {
        "items": [
            {"name": "A", "weight": 1, "value": 1},
            {"name": "B", "weight": 3, "value": 4},
            {"name": "C", "weight": 4, "value": 5},
            {"name": "D", "weight": 5, "value": 7},
        ],
        "capacity": 7,
    }
    trace = knapsack(payload)
    final = trace.last
    assert final.data["table"][4][7] == 9
    assert sorted(final.data["selected"]) == [1, 2]
    assert final.description == "Knapsack solved! Maximum value: 9. Selected items: B, C."


def test_knapsack_nothing_fits() -> None:
    trace = knapsack({"items": [{"name": "Anvil", "weight": 50, "value": 10}], "capacity": 3})
    assert trace.last.description.endswith("Selected items: none.")


@pytest.mark.parametrize(
    "bad",
    [
        {"items": [], "capacity": 5},
        {"items": [{"weight": 0, "value": 1}], "capacity": 5},
        {"items": [{"weight": 1, "value": -1}], "capacity": 5},
        {"items": [{"weight": 1, "value": 1}], "capacity": -1},
        {"items": [{"weight": 1, "value": 1}] * 10, "capacity": 500},
    ],
)
def test_knapsack_rejects_bad_input(bad: Any) -> None:
    trace = knapsack(bad)
    assert trace.is_failure
    assert trace[0].description.startswith("Error: invalid data for knapsack")


# ------------------------------- Graphs -------------------------------------


def test_bfs_visits_level_by_level() -> None:
    trace = breadth_first_search(
        {
            "nodes": ["A", "B", "C", "D", "E"],
            "edges": [["A", "B"], ["A", "C"], ["B", "D"], ["C", "E"]],
            "start": "A",
        }
    )
    assert list(trace.last.data["visited"]) == ["A", "B", "C", "D", "E"]
    assert trace.last.description == "BFS complete. Visit order: A -> B -> C -> D -> E."


def test_bfs_reports_unreachable_nodes() -> None:
    trace = breadth_first_search({"nodes": ["A", "B", "Z"], "edges": [["A", "B"]], "start": "A"})
    assert list(trace.last.data["visited"]) == ["A", "B"]
    assert "Unreachable: Z." in trace.last.description


def test_bfs_queue_snapshots_are_independent() -> None:
    trace = breadth_first_search({"nodes": ["A", "B", "C"], "edges": [["A", "B"], ["A", "C"]]})
    queues = [tuple(s.data["queue"]) for s in trace]
    assert queues[0] == ("A",)
    assert queues[-1] == ()


@pytest.mark.parametrize(
    "bad",
    [
        {"nodes": [], "edges": []},
        {"nodes": ["A", "A"], "edges": []},
        {"nodes": ["A"], "edges": [["A", "B"]]},
        {"nodes": ["A"], "edges": [], "start": "Q"},
        {"nodes": ["A", "B"], "edges": [["A"]]},
        {"nodes": ["A", "B"], "edges": [[["A"], "B"]], "start": "A"},
        {"nodes": ["A", "B"], "edges": [["A", {"to": "B"}]]},
        {"nodes": ["A", "B"], "edges": [["A", "B"]], "start": ["A"]},
        {"nodes": ["A"], "start": {"x": 1}},
        {"nodes": [f"N{i}" for i in range(MAX_GRAPH_NODES + 1)], "edges": []},
    ],
)
def test_bfs_rejects_bad_graphs(bad: Any) -> None:
    assert breadth_first_search(bad).is_failure


def test_bfs_accepts_graph_at_node_cap() -> None:
    nodes = [f"N{i}" for i in range(MAX_GRAPH_NODES)]
    edges = [[nodes[i - 1], nodes[i]] for i in range(1, MAX_GRAPH_NODES)]
    trace = breadth_first_search({"nodes": nodes, "edges": edges})
    assert list(trace.last.data["visited"]) == nodes


def test_generators_return_traces() -> None:
    assert isinstance(fibonacci({"n": 3}), Trace)


# ------------------------------- Input size caps ----------------------------


@pytest.mark.parametrize("sort", SORTS)
def test_sorts_accept_array_at_cap(sort: Any) -> None:
    array = list(range(MAX_ARRAY_LENGTH))
    trace = sort({"array": array})
    assert not trace.is_failure
    assert list(trace.last.data["array"]) == array


@pytest.mark.parametrize("sort", SORTS)
def test_sorts_reject_array_over_cap(sort: Any) -> None:
    trace = sort({"array": list(range(MAX_ARRAY_LENGTH + 1, 0, -1))})
    assert len(trace) == 1
    assert f"at most {MAX_ARRAY_LENGTH} elements" in trace[0].description


@pytest.mark.parametrize("search", [linear_search, binary_search])
def test_searches_respect_array_cap(search: Any) -> None:
    at_cap = search({"array": list(range(MAX_ARRAY_LENGTH)), "target": MAX_ARRAY_LENGTH - 1})
    assert at_cap.last.data["found"] == MAX_ARRAY_LENGTH - 1
    over = search({"array": list(range(MAX_ARRAY_LENGTH + 1)), "target": 0})
    assert over.is_failure


@pytest.mark.parametrize("search", [naive_pattern_search, kmp_search])
def test_pattern_searches_respect_text_cap(search: Any) -> None:
    text = "ab" * (MAX_TEXT_LENGTH // 2)
    at_cap = search({"text": text, "pattern": "ba"})
    assert list(at_cap.last.data["matches"]) == _all_matches(text, "ba")

    assert search({"text": text + "a", "pattern": "ba"}).is_failure
    assert search({"text": "abc", "pattern": "a" * (MAX_TEXT_LENGTH + 1)}).is_failure
