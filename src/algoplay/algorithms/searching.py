"""Search trace generators over integer arrays.

Input: ``{"array": [int, ...], "target": int}``. Binary search additionally
requires the array to be sorted in non-decreasing order.
"""

from __future__ import annotations

from typing import Any

from algoplay.core.trace import Trace, TraceRecorder

from .validation import require_int, require_int_list

INPUT_HINT = "{'array': [int, ...], 'target': int}"


def linear_search(initial_input: Any) -> Trace[dict[str, Any]]:
    """Scan left to right, one step per inspected element."""
    array_r = require_int_list(initial_input)
    target_r = require_int(initial_input, "target")
    if array_r.is_err() or target_r.is_err():
        reason = array_r.unwrap_err() if array_r.is_err() else target_r.unwrap_err()
        return Trace.failure(f"Error: invalid data for linear search: {reason}", expected=INPUT_HINT)

    array, target = array_r.unwrap(), target_r.unwrap()
    rec: TraceRecorder[dict[str, Any]] = TraceRecorder()
    rec.record(
        {"array": array, "target": target, "current": None, "checked": [], "found": None},
        f"Searching for {target} by checking each element from left to right.",
        code="for i := 0 to length(A) - 1",
    )

    checked: list[int] = []
    for i, value in enumerate(array):
        checked.append(i)
        if value == target:
            rec.record(
                {"array": array, "target": target, "current": i, "checked": checked, "found": i},
                f"A[{i}] = {value} equals the target. Found {target} at position {i}!",
                code="if A[i] = target then return i",
                complexity=f"{i + 1} comparisons",
            )
            return rec.build()
        rec.record(
            {"array": array, "target": target, "current": i, "checked": checked, "found": None},
            f"A[{i}] = {value} is not {target}; move on.",
            code="if A[i] = target then return i",
        )

    rec.record(
        {"array": array, "target": target, "current": None, "checked": checked, "found": None},
        f"Reached the end of the array: {target} is not present.",
        code="return -1",
        complexity=f"{len(array)} comparisons, O(n)",
    )
    return rec.build()


def binary_search(initial_input: Any) -> Trace[dict[str, Any]]:
    """Halve the [left, right] window, one step per midpoint comparison."""
    array_r = require_int_list(initial_input)
    target_r = require_int(initial_input, "target")
    if array_r.is_err() or target_r.is_err():
        reason = array_r.unwrap_err() if array_r.is_err() else target_r.unwrap_err()
        return Trace.failure(f"Error: invalid data for binary search: {reason}", expected=INPUT_HINT)

    array, target = array_r.unwrap(), target_r.unwrap()
    if any(a > b for a, b in zip(array, array[1:], strict=False)):
        return Trace.failure("Error: binary search requires a sorted array.", expected=INPUT_HINT)

    def frame(left: int, right: int, mid: int | None, found: int | None = None) -> dict[str, Any]:
        return {"array": array, "target": target, "left": left, "right": right, "mid": mid, "found": found}

    rec: TraceRecorder[dict[str, Any]] = TraceRecorder()
    left, right = 0, len(array) - 1
    rec.record(
        frame(left, right, None),
        f"Starting binary search for target value {target} in the sorted array.",
        code="left := 0; right := n - 1",
    )

    comparisons = 0
    while left <= right:
        mid = (left + right) // 2
        comparisons += 1
        rec.record(
            frame(left, right, mid),
            f"Mid point: ({left} + {right}) // 2 = {mid}. "
            f"Compare A[{mid}] = {array[mid]} with target {target}.",
            code="mid := (left + right) / 2",
        )
        if array[mid] == target:
            rec.record(
                frame(left, right, mid, found=mid),
                f"Found target {target} at position {mid}!",
                code="if A[mid] = target then return mid",
                complexity=f"{comparisons} comparisons, O(log n)",
            )
            return rec.build()
        if array[mid] < target:
            left = mid + 1
            rec.record(
                frame(left, right, None),
                f"{array[mid]} < {target}. Search the right half ({left} to {right}).",
                code="left := mid + 1",
            )
        else:
            right = mid - 1
            rec.record(
                frame(left, right, None),
                f"{array[mid]} > {target}. Search the left half ({left} to {right}).",
                code="right := mid - 1",
            )

    rec.record(
        frame(left, right, None),
        f"Target {target} is not in the array. Search complete.",
        code="return -1",
        complexity=f"{comparisons} comparisons, O(log n)",
    )
    return rec.build()


__all__ = ["binary_search", "linear_search"]
