"""
Algorithm catalog.

Registry of every bundled demonstration: identifier, display name, category,
short description, trace generator and sample-input factory. The CLI and the
HTTP service only talk to generators through this module.

Lookups return a :class:`~algoplay.core.result.Result` so callers decide how
an unknown identifier is surfaced (exit code, HTTP 404, ...).
"""

from __future__ import annotations

import random
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from algoplay.core.playback import PlaybackSession, PresentationSink, Scheduler
from algoplay.core.result import Result, err, ok
from algoplay.core.settings import load_settings
from algoplay.core.trace import Trace, TraceGenerator, materialize

from .dynamic import fibonacci, knapsack
from .graphs import breadth_first_search
from .searching import binary_search, linear_search
from .sorting import bubble_sort, insertion_sort, selection_sort
from .strings import kmp_search, naive_pattern_search

SampleFactory = Callable[[random.Random, int], Any]


@dataclass(frozen=True, slots=True)
class AlgorithmEntry:
    """Catalog record for one demonstration."""

    id: str
    name: str
    category: str
    description: str
    generate: TraceGenerator
    sample: SampleFactory
    default_input: Any = None

    def sample_input(self, seed: int | None = None, size: int | None = None) -> Any:
        """Draw a fresh random input (the "new example" button)."""
        rng = random.Random(seed)
        return self.sample(rng, size if size is not None else load_settings().sample_size)

    def trace(self, initial_input: Any) -> Trace[Any]:
        return materialize(self.generate, initial_input)


# --------------------------------------------------------------------------- #
# Sample factories
# --------------------------------------------------------------------------- #


def _random_array(rng: random.Random, size: int) -> dict[str, Any]:
    return {"array": [rng.randint(1, 99) for _ in range(size)]}


def _search_array(rng: random.Random, size: int, *, ordered: bool) -> dict[str, Any]:
    array = [rng.randint(1, 99) for _ in range(size)]
    if ordered:
        array.sort()
    # mostly hits, sometimes a miss
    target = rng.choice(array) if rng.random() < 0.8 else rng.randint(1, 99)
    return {"array": array, "target": target}


_WORDS = ("ABABDABACDABABCABAB", "AABAACAADAABAABA", "THIS IS A TEST TEXT", "GEEKS FOR GEEKS")
_PATTERNS = ("ABABCABAB", "AABA", "TEST", "GEEK")


def _text_pattern(rng: random.Random, _size: int) -> dict[str, Any]:
    k = rng.randrange(len(_WORDS))
    return {"text": _WORDS[k], "pattern": _PATTERNS[k]}


def _knapsack_items(rng: random.Random, size: int) -> dict[str, Any]:
    count = max(2, min(size, 5))
    items = [
        {"name": f"Item {i + 1}", "weight": rng.randint(1, 6), "value": rng.randint(1, 30)}
        for i in range(count)
    ]
    return {"items": items, "capacity": rng.randint(5, 10)}


def _graph(rng: random.Random, size: int) -> dict[str, Any]:
    count = max(3, min(size, 8))
    nodes = [chr(ord("A") + i) for i in range(count)]
    edges = [[nodes[i], nodes[rng.randrange(i)]] for i in range(1, count)]
    for _ in range(count // 2):
        a, b = rng.sample(nodes, 2)
        if [a, b] not in edges and [b, a] not in edges:
            edges.append([a, b])
    return {"nodes": nodes, "edges": edges, "start": "A"}


# --------------------------------------------------------------------------- #
# Registry
# --------------------------------------------------------------------------- #

_ENTRIES: tuple[AlgorithmEntry, ...] = (
    AlgorithmEntry(
        "bubble-sort",
        "Bubble Sort",
        "sorting",
        "Repeatedly steps through the list, compares adjacent elements and swaps "
        "them if they are in the wrong order.",
        bubble_sort,
        _random_array,
        {"array": [64, 34, 25, 12, 22, 11, 90]},
    ),
    AlgorithmEntry(
        "insertion-sort",
        "Insertion Sort",
        "sorting",
        "Builds the sorted array one element at a time by inserting each key into "
        "the sorted prefix.",
        insertion_sort,
        _random_array,
        {"array": [12, 11, 13, 5, 6]},
    ),
    AlgorithmEntry(
        "selection-sort",
        "Selection Sort",
        "sorting",
        "Repeatedly selects the minimum of the unsorted suffix and swaps it into place.",
        selection_sort,
        _random_array,
        {"array": [29, 10, 14, 37, 13]},
    ),
    AlgorithmEntry(
        "linear-search",
        "Linear Search",
        "searching",
        "Checks every element in order until the target is found.",
        linear_search,
        lambda rng, size: _search_array(rng, size, ordered=False),
        {"array": [10, 50, 30, 70, 80, 20], "target": 30},
    ),
    AlgorithmEntry(
        "binary-search",
        "Binary Search",
        "searching",
        "Halves the search interval of a sorted array at every comparison.",
        binary_search,
        lambda rng, size: _search_array(rng, size, ordered=True),
        {"array": [2, 5, 8, 12, 16, 23, 38, 56, 72, 91], "target": 23},
    ),
    AlgorithmEntry(
        "naive-pattern",
        "Naive Pattern Searching",
        "strings",
        "Tries every alignment of the pattern against the text.",
        naive_pattern_search,
        _text_pattern,
        {"text": "AABAACAADAABAABA", "pattern": "AABA"},
    ),
    AlgorithmEntry(
        "kmp",
        "Knuth-Morris-Pratt",
        "strings",
        "Uses a longest-prefix-suffix table to skip re-comparing characters.",
        kmp_search,
        _text_pattern,
        {"text": "ABABDABACDABABCABAB", "pattern": "ABABCABAB"},
    ),
    AlgorithmEntry(
        "fibonacci",
        "Fibonacci Sequence",
        "dynamic-programming",
        "Fills a table bottom-up, each entry the sum of the previous two.",
        fibonacci,
        lambda rng, size: {"n": rng.randint(5, max(5, size + 2))},
        {"n": 10},
    ),
    AlgorithmEntry(
        "knapsack",
        "0/1 Knapsack",
        "dynamic-programming",
        "Chooses items maximizing value without exceeding the weight capacity.",
        knapsack,
        _knapsack_items,
        {
            "items": [
                {"name": "Laptop", "weight": 3, "value": 20},
                {"name": "Camera", "weight": 1, "value": 8},
                {"name": "Books", "weight": 4, "value": 10},
                {"name": "Jacket", "weight": 2, "value": 6},
            ],
            "capacity": 6,
        },
    ),
    AlgorithmEntry(
        "bfs",
        "Breadth-First Search",
        "graphs",
        "Visits nodes level by level using a FIFO queue.",
        breadth_first_search,
        _graph,
        {
            "nodes": ["A", "B", "C", "D", "E", "F"],
            "edges": [["A", "B"], ["A", "C"], ["B", "D"], ["C", "E"], ["D", "F"], ["E", "F"]],
            "start": "A",
        },
    ),
)

_BY_ID: dict[str, AlgorithmEntry] = {e.id: e for e in _ENTRIES}


def all_algorithms() -> tuple[AlgorithmEntry, ...]:
    return _ENTRIES


def categories() -> dict[str, list[AlgorithmEntry]]:
    """Entries grouped by category, in registration order."""
    grouped: dict[str, list[AlgorithmEntry]] = {}
    for entry in _ENTRIES:
        grouped.setdefault(entry.category, []).append(entry)
    return grouped


def lookup(algorithm_id: str) -> Result[AlgorithmEntry, str]:
    entry = _BY_ID.get(algorithm_id)
    if entry is None:
        known = ", ".join(sorted(_BY_ID))
        return err(f"Unknown algorithm '{algorithm_id}'. Known: {known}")
    return ok(entry)


def create_session(
    algorithm_id: str,
    initial_input: Any = None,
    *,
    scheduler: Scheduler | None = None,
    sink: PresentationSink | None = None,
    speed_multiplier: float = 1.0,
    base_delay_ms: float | None = None,
    seed: int | None = None,
) -> Result[PlaybackSession[Any], str]:
    """
    Build a playback session for a catalog entry.

    ``initial_input=None`` draws a random sample input (seeded by ``seed``).
    """

    def _build(entry: AlgorithmEntry) -> PlaybackSession[Any]:
        data = initial_input if initial_input is not None else entry.sample_input(seed)
        return PlaybackSession(
            entry.generate,
            data,
            scheduler=scheduler,
            sink=sink,
            speed_multiplier=speed_multiplier,
            base_delay_ms=base_delay_ms,
        )

    return lookup(algorithm_id).map(_build)


__all__ = [
    "AlgorithmEntry",
    "all_algorithms",
    "categories",
    "create_session",
    "lookup",
]
