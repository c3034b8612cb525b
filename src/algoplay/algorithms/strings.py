"""
Pattern-matching trace generators.

Input: ``{"text": str, "pattern": str}``.

Payload keys
------------
- ``text`` / ``pattern``: the inputs.
- ``shift``: index in ``text`` where the pattern is currently aligned.
- ``text_index`` / ``pattern_index``: characters being compared (or None).
- ``matches``: start indices of full matches found so far.
- ``comparisons``: character comparisons so far.
- KMP only: ``lps`` (prefix table so far) and ``phase`` ("lps" | "search").
"""

from __future__ import annotations

from typing import Any

from algoplay.core.result import Result
from algoplay.core.trace import Trace, TraceRecorder

from .validation import require_str

INPUT_HINT = "{'text': str, 'pattern': str}"


def _parse(initial_input: Any) -> Result[tuple[str, str], str]:
    return require_str(initial_input, "text", allow_empty=True).flat_map(
        lambda text: require_str(initial_input, "pattern").map(lambda pattern: (text, pattern))
    )


def naive_pattern_search(initial_input: Any) -> Trace[dict[str, Any]]:
    """Slide the pattern one position at a time, comparing left to right."""
    parsed = _parse(initial_input)
    if parsed.is_err():
        return Trace.failure(f"Error: invalid data for pattern search: {parsed.unwrap_err()}", expected=INPUT_HINT)
    text, pattern = parsed.unwrap()
    n, m = len(text), len(pattern)

    matches: list[int] = []
    comparisons = 0

    def frame(shift: int | None, ti: int | None = None, pi: int | None = None) -> dict[str, Any]:
        return {
            "text": text,
            "pattern": pattern,
            "shift": shift,
            "text_index": ti,
            "pattern_index": pi,
            "matches": matches,
            "comparisons": comparisons,
        }

    rec: TraceRecorder[dict[str, Any]] = TraceRecorder()
    rec.record(
        frame(None),
        f"Search for '{pattern}' in a text of length {n} by trying every alignment.",
        code="for s := 0 to n - m",
    )
    for shift in range(n - m + 1):
        for k in range(m):
            comparisons += 1
            equal = text[shift + k] == pattern[k]
            rec.record(
                frame(shift, shift + k, k),
                f"Shift {shift}: compare text[{shift + k}] = '{text[shift + k]}' with "
                f"pattern[{k}] = '{pattern[k]}': {'match' if equal else 'mismatch'}.",
                code="if T[s + j] != P[j] then break",
            )
            if not equal:
                break
        else:
            matches.append(shift)
            rec.record(
                frame(shift),
                f"Full match at index {shift}.",
                code="report match at s",
            )

    rec.record(
        frame(None),
        f"Search complete: {len(matches)} match(es) at {matches} after {comparisons} comparisons.",
        code="end for",
        complexity="O((n - m + 1) * m)",
    )
    return rec.build()


def kmp_search(initial_input: Any) -> Trace[dict[str, Any]]:
    """Knuth-Morris-Pratt: build the LPS table, then scan without backtracking."""
    parsed = _parse(initial_input)
    if parsed.is_err():
        return Trace.failure(f"Error: invalid data for KMP: {parsed.unwrap_err()}", expected=INPUT_HINT)
    text, pattern = parsed.unwrap()
    n, m = len(text), len(pattern)

    lps = [0] * m
    matches: list[int] = []
    comparisons = 0

    def frame(phase: str, ti: int | None = None, pi: int | None = None) -> dict[str, Any]:
        return {
            "text": text,
            "pattern": pattern,
            "phase": phase,
            "lps": lps,
            "shift": None if ti is None or pi is None else ti - pi,
            "text_index": ti,
            "pattern_index": pi,
            "matches": matches,
            "comparisons": comparisons,
        }

    rec: TraceRecorder[dict[str, Any]] = TraceRecorder()
    rec.record(
        frame("lps"),
        "Set lps[0] = 0: a single character has no proper prefix that is also a suffix.",
        code="lps[0] := 0; len := 0; i := 1",
    )

    length, i = 0, 1
    while i < m:
        if pattern[i] == pattern[length]:
            length += 1
            lps[i] = length
            rec.record(
                frame("lps", None, i),
                f"pattern[{i}] = pattern[{length - 1}] = '{pattern[i]}'. Set lps[{i}] = {length}.",
                code="len := len + 1; lps[i] := len; i := i + 1",
            )
            i += 1
        elif length != 0:
            rec.record(
                frame("lps", None, i),
                f"pattern[{i}] = '{pattern[i]}' differs from pattern[{length}] = '{pattern[length]}'. "
                f"Fall back: len := lps[{length - 1}] = {lps[length - 1]}.",
                code="len := lps[len - 1]",
            )
            length = lps[length - 1]
        else:
            lps[i] = 0
            rec.record(
                frame("lps", None, i),
                f"pattern[{i}] = '{pattern[i]}' differs from pattern[0]. Set lps[{i}] = 0.",
                code="lps[i] := 0; i := i + 1",
            )
            i += 1

    rec.record(
        frame("search"),
        f"LPS table complete: {lps}. Start scanning the text.",
        code="i := 0; j := 0",
        complexity="O(m) to build the table",
    )

    ti = pi = 0
    while ti < n:
        comparisons += 1
        if text[ti] == pattern[pi]:
            rec.record(
                frame("search", ti, pi),
                f"text[{ti}] = pattern[{pi}] = '{text[ti]}'. Advance both.",
                code="if T[i] = P[j] then i++, j++",
            )
            ti += 1
            pi += 1
            if pi == m:
                matches.append(ti - m)
                rec.record(
                    frame("search"),
                    f"Full match at index {ti - m}. Continue with j := lps[{m - 1}] = {lps[m - 1]}.",
                    code="report match; j := lps[j - 1]",
                )
                pi = lps[pi - 1]
        elif pi != 0:
            rec.record(
                frame("search", ti, pi),
                f"Mismatch: text[{ti}] = '{text[ti]}' vs pattern[{pi}] = '{pattern[pi]}'. "
                f"Reuse the prefix: j := lps[{pi - 1}] = {lps[pi - 1]}.",
                code="j := lps[j - 1]",
            )
            pi = lps[pi - 1]
        else:
            rec.record(
                frame("search", ti, pi),
                f"Mismatch at text[{ti}] = '{text[ti]}' with pattern[0]. Move to the next character.",
                code="i := i + 1",
            )
            ti += 1

    rec.record(
        frame("search"),
        f"KMP complete: {len(matches)} match(es) at {matches} after {comparisons} comparisons.",
        code="end while",
        complexity="O(n + m)",
    )
    return rec.build()


__all__ = ["kmp_search", "naive_pattern_search"]
