"""Dynamic-programming trace generators (one step per table cell update)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from algoplay.core.result import Result, err, ok
from algoplay.core.trace import Trace, TraceRecorder

from .validation import require_int, require_mapping

FIBONACCI_HINT = "{'n': int between 0 and 90}"
KNAPSACK_HINT = "{'items': [{'name': str, 'weight': int, 'value': int}, ...], 'capacity': int}"

MAX_FIBONACCI_N = 90
MAX_KNAPSACK_CELLS = 2_000


def fibonacci(initial_input: Any) -> Trace[dict[str, Any]]:
    """Bottom-up Fibonacci table ``dp[i] = dp[i-1] + dp[i-2]``."""
    parsed = require_int(initial_input, "n", minimum=0)
    if parsed.is_ok() and parsed.unwrap() > MAX_FIBONACCI_N:
        parsed = err(f"'n' must be <= {MAX_FIBONACCI_N}")
    if parsed.is_err():
        return Trace.failure(f"Error: invalid data for Fibonacci: {parsed.unwrap_err()}", expected=FIBONACCI_HINT)

    n = parsed.unwrap()
    table: list[int | None] = [None] * (n + 1)
    rec: TraceRecorder[dict[str, Any]] = TraceRecorder()
    rec.record(
        {"n": n, "table": table, "current": None, "sources": ()},
        f"Compute F({n}) bottom-up. dp[i] will hold the i-th Fibonacci number.",
        code="dp := array of size n + 1",
    )

    table[0] = 0
    rec.record(
        {"n": n, "table": table, "current": 0, "sources": ()},
        "Base case: dp[0] = 0.",
        code="dp[0] := 0",
    )
    if n >= 1:
        table[1] = 1
        rec.record(
            {"n": n, "table": table, "current": 1, "sources": ()},
            "Base case: dp[1] = 1.",
            code="dp[1] := 1",
        )
    b, a = 0, 1
    for i in range(2, n + 1):
        table[i] = a + b
        rec.record(
            {"n": n, "table": table, "current": i, "sources": (i - 1, i - 2)},
            f"dp[{i}] = dp[{i - 1}] + dp[{i - 2}] = {a} + {b} = {table[i]}.",
            code="dp[i] := dp[i - 1] + dp[i - 2]",
            complexity="O(1) per cell",
        )
        b, a = a, a + b

    rec.record(
        {"n": n, "table": table, "current": n, "sources": ()},
        f"Done: F({n}) = {table[n]}.",
        code="return dp[n]",
        complexity="O(n) time, O(n) space",
    )
    return rec.build()


def _parse_knapsack(initial_input: Any) -> Result[tuple[list[dict[str, Any]], int], str]:
    def _items(payload: Mapping[str, Any]) -> Result[list[dict[str, Any]], str]:
        raw = payload.get("items")
        if not isinstance(raw, list | tuple) or not raw:
            return err("'items' must be a non-empty list")
        items: list[dict[str, Any]] = []
        for i, item in enumerate(raw):
            if not isinstance(item, Mapping):
                return err(f"item {i} must be an object")
            weight, value = item.get("weight"), item.get("value")
            if not isinstance(weight, int) or isinstance(weight, bool) or weight <= 0:
                return err(f"item {i} needs a positive integer 'weight'")
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                return err(f"item {i} needs a non-negative integer 'value'")
            items.append({"name": str(item.get("name", f"item{i + 1}")), "weight": weight, "value": value})
        return ok(items)

    def _with_capacity(items: list[dict[str, Any]]) -> Result[tuple[list[dict[str, Any]], int], str]:
        def _bounded(capacity: int) -> Result[tuple[list[dict[str, Any]], int], str]:
            if (len(items) + 1) * (capacity + 1) > MAX_KNAPSACK_CELLS:
                return err(f"table too large (limit {MAX_KNAPSACK_CELLS} cells)")
            return ok((items, capacity))

        return require_int(initial_input, "capacity", minimum=0).flat_map(_bounded)

    return require_mapping(initial_input).flat_map(_items).flat_map(_with_capacity)


def knapsack(initial_input: Any) -> Trace[dict[str, Any]]:
    """0/1 knapsack table ``dp[i][w]`` followed by the item backtrack."""
    parsed = _parse_knapsack(initial_input)
    if parsed.is_err():
        return Trace.failure(f"Error: invalid data for knapsack: {parsed.unwrap_err()}", expected=KNAPSACK_HINT)

    items, capacity = parsed.unwrap()
    n = len(items)
    dp = [[0] * (capacity + 1) for _ in range(n + 1)]
    selected: list[int] = []

    def frame(cell: tuple[int, int] | None = None, **extra: Any) -> dict[str, Any]:
        return {"items": items, "capacity": capacity, "table": dp, "cell": cell, "selected": selected, **extra}

    rec: TraceRecorder[dict[str, Any]] = TraceRecorder()
    rec.record(
        frame(),
        "Initialize the DP table. dp[i][w] is the best value using the first i items "
        "with weight limit w. Row 0 and column 0 are 0.",
        code="dp[0][w] := 0 for all w",
    )

    for i in range(1, n + 1):
        item = items[i - 1]
        for w in range(1, capacity + 1):
            without = dp[i - 1][w]
            if item["weight"] > w:
                dp[i][w] = without
                rec.record(
                    frame((i, w)),
                    f"{item['name']} (weight {item['weight']}) does not fit in capacity {w}. "
                    f"Keep dp[{i}][{w}] = dp[{i - 1}][{w}] = {without}.",
                    code="dp[i][w] := dp[i-1][w]",
                )
                continue
            with_item = item["value"] + dp[i - 1][w - item["weight"]]
            dp[i][w] = max(without, with_item)
            rec.record(
                frame((i, w), compared=(without, with_item)),
                f"{item['name']}: include ({with_item}) vs exclude ({without}). "
                f"{'Include' if with_item > without else 'Exclude'}: dp[{i}][{w}] = {dp[i][w]}.",
                code="dp[i][w] := max(dp[i-1][w], v_i + dp[i-1][w - w_i])",
                complexity="O(1) per cell",
            )

    w = capacity
    for i in range(n, 0, -1):
        if dp[i][w] != dp[i - 1][w]:
            selected.append(i - 1)
            w -= items[i - 1]["weight"]
            rec.record(
                frame((i, w + items[i - 1]["weight"])),
                f"dp[{i}][{w + items[i - 1]['weight']}] differs from the row above: "
                f"{items[i - 1]['name']} is in the optimal set.",
                code="if dp[i][w] != dp[i-1][w] then take item i",
            )

    names = ", ".join(items[i]["name"] for i in sorted(selected)) or "none"
    rec.record(
        frame((n, capacity)),
        f"Knapsack solved! Maximum value: {dp[n][capacity]}. Selected items: {names}.",
        code="return dp[n][W]",
        complexity="O(n * W) time and space",
    )
    return rec.build()


__all__ = ["fibonacci", "knapsack"]
