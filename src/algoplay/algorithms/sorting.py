"""
Sorting trace generators.

Every generator takes ``{"array": [int, ...]}`` and records one step per
comparison, swap/shift, and pass boundary. Step payloads share one shape so a
single bar-chart renderer can draw all of them:

    {
        "array":     current contents,
        "comparing": indices being compared,
        "active":    indices just written/swapped,
        "sorted":    indices known to be in final position,
    }
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from algoplay.core.trace import Trace, TraceRecorder

from .validation import require_int_list

INPUT_HINT = "{'array': [int, ...]}"


def _frame(
    array: list[int],
    *,
    comparing: tuple[int, ...] = (),
    active: tuple[int, ...] = (),
    sorted_: Iterable[int] = (),
) -> dict[str, Any]:
    return {
        "array": array,
        "comparing": comparing,
        "active": active,
        "sorted": sorted(sorted_),
    }


def _state(array: list[int]) -> str:
    return "[" + ", ".join(str(v) for v in array) + "]"


def bubble_sort(initial_input: Any) -> Trace[dict[str, Any]]:
    """Bubble sort with early exit when a pass makes no swap."""
    parsed = require_int_list(initial_input)
    if parsed.is_err():
        return Trace.failure(f"Error: invalid data for bubble sort: {parsed.unwrap_err()}", expected=INPUT_HINT)

    array = parsed.unwrap()
    n = len(array)
    rec: TraceRecorder[dict[str, Any]] = TraceRecorder()
    rec.record(
        _frame(array),
        "Starting with the unsorted array. Bubble sort repeatedly steps through the list, "
        "comparing adjacent elements and swapping them if they are in the wrong order.",
        code="procedure bubbleSort(A: list of sortable items)",
        state=_state(array),
    )

    done: list[int] = []
    for i in range(n):
        swapped = False
        rec.record(
            _frame(array, sorted_=done),
            f"Starting pass {i + 1}. Each pass places the next largest element in its final position.",
            code="repeat",
            complexity="O(n) for this pass",
        )
        for j in range(n - i - 1):
            rec.record(
                _frame(array, comparing=(j, j + 1), sorted_=done),
                f"Comparing elements at positions {j} and {j + 1}: {array[j]} and {array[j + 1]}.",
                code="if A[i-1] > A[i] then",
                state=_state(array),
            )
            if array[j] > array[j + 1]:
                array[j], array[j + 1] = array[j + 1], array[j]
                swapped = True
                rec.record(
                    _frame(array, active=(j, j + 1), sorted_=done),
                    f"{array[j + 1]} > {array[j]}, swapping positions {j} and {j + 1}.",
                    code="swap(A[i-1], A[i])\nswapped := true",
                    state=_state(array),
                )
        done.append(n - i - 1)
        rec.record(
            _frame(array, sorted_=done),
            f"End of pass {i + 1}. Position {n - i - 1} (value {array[n - i - 1]}) is now final.",
            code="until not swapped",
            complexity=f"Completed pass {i + 1} of {max(n - 1, 1)}",
        )
        if not swapped:
            break

    rec.record(
        _frame(array, sorted_=range(n)),
        "Bubble sort complete. The array is fully sorted.",
        code="end procedure",
        complexity="O(n^2) worst case, O(n) when already sorted",
        state=_state(array),
    )
    return rec.build()


def insertion_sort(initial_input: Any) -> Trace[dict[str, Any]]:
    """Insertion sort, one step per comparison and per shift."""
    parsed = require_int_list(initial_input)
    if parsed.is_err():
        return Trace.failure(f"Error: invalid data for insertion sort: {parsed.unwrap_err()}", expected=INPUT_HINT)

    array = parsed.unwrap()
    n = len(array)
    rec: TraceRecorder[dict[str, Any]] = TraceRecorder()
    rec.record(
        _frame(array, sorted_=range(min(n, 1))),
        "Starting insertion sort. The first element on its own forms a sorted prefix.",
        code="for i := 1 to length(A) - 1",
        state=_state(array),
    )

    for i in range(1, n):
        key = array[i]
        rec.record(
            _frame(array, active=(i,), sorted_=range(i)),
            f"Take key {key} at position {i} and insert it into the sorted prefix.",
            code="key := A[i]; j := i - 1",
        )
        j = i - 1
        while j >= 0:
            rec.record(
                _frame(array, comparing=(j, j + 1), sorted_=range(i)),
                f"Compare {array[j]} at position {j} with key {key}.",
                code="while j >= 0 and A[j] > key",
            )
            if array[j] <= key:
                break
            array[j + 1] = array[j]
            rec.record(
                _frame(array, active=(j + 1,), sorted_=range(i)),
                f"{array[j]} > {key}: shift it right to position {j + 1}.",
                code="A[j + 1] := A[j]; j := j - 1",
                state=_state(array),
            )
            j -= 1
        array[j + 1] = key
        rec.record(
            _frame(array, active=(j + 1,), sorted_=range(i + 1)),
            f"Place key {key} at position {j + 1}. Prefix 0..{i} is sorted.",
            code="A[j + 1] := key",
            state=_state(array),
        )

    rec.record(
        _frame(array, sorted_=range(n)),
        "Insertion sort complete. The array is fully sorted.",
        code="end for",
        complexity="O(n^2) worst case, O(n) when already sorted",
        state=_state(array),
    )
    return rec.build()


def selection_sort(initial_input: Any) -> Trace[dict[str, Any]]:
    """Selection sort, one step per comparison and per swap."""
    parsed = require_int_list(initial_input)
    if parsed.is_err():
        return Trace.failure(f"Error: invalid data for selection sort: {parsed.unwrap_err()}", expected=INPUT_HINT)

    array = parsed.unwrap()
    n = len(array)
    rec: TraceRecorder[dict[str, Any]] = TraceRecorder()
    rec.record(
        _frame(array),
        "Starting selection sort. Each pass selects the minimum of the unsorted suffix.",
        code="for i := 0 to length(A) - 2",
        state=_state(array),
    )

    for i in range(n - 1):
        smallest = i
        rec.record(
            _frame(array, active=(i,), sorted_=range(i)),
            f"Pass {i + 1}: assume {array[i]} at position {i} is the minimum.",
            code="min := i",
        )
        for j in range(i + 1, n):
            rec.record(
                _frame(array, comparing=(smallest, j), sorted_=range(i)),
                f"Compare current minimum {array[smallest]} with {array[j]} at position {j}.",
                code="if A[j] < A[min] then min := j",
            )
            if array[j] < array[smallest]:
                smallest = j
        if smallest != i:
            array[i], array[smallest] = array[smallest], array[i]
            rec.record(
                _frame(array, active=(i, smallest), sorted_=range(i + 1)),
                f"Swap positions {i} and {smallest}. Position {i} now holds {array[i]}.",
                code="swap(A[i], A[min])",
                state=_state(array),
            )
        else:
            rec.record(
                _frame(array, sorted_=range(i + 1)),
                f"{array[i]} is already the minimum; no swap needed.",
                code="end if",
            )

    rec.record(
        _frame(array, sorted_=range(n)),
        "Selection sort complete. The array is fully sorted.",
        code="end for",
        complexity="O(n^2) comparisons, O(n) swaps",
        state=_state(array),
    )
    return rec.build()


__all__ = ["bubble_sort", "insertion_sort", "selection_sort"]
