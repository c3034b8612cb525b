"""Input shape checks shared by the trace generators.

Generators must never raise on malformed input; they turn a failed check into
a single-step error trace instead. Each helper returns a
:class:`~algoplay.core.result.Result` carrying either the cleaned value or a
human-readable reason.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from algoplay.core.result import Result, err, ok

# Input size caps. Quadratic sorts record O(n^2) steps of O(n) payload each.
MAX_ARRAY_LENGTH = 100
MAX_TEXT_LENGTH = 200


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def require_mapping(initial_input: Any) -> Result[Mapping[str, Any], str]:
    if not isinstance(initial_input, Mapping):
        return err(f"expected an object, got {type(initial_input).__name__}")
    return ok(initial_input)


def require_int_list(initial_input: Any, key: str = "array") -> Result[list[int], str]:
    """Return ``initial_input[key]`` as a list of ints."""

    def _check(payload: Mapping[str, Any]) -> Result[list[int], str]:
        values = payload.get(key)
        if not isinstance(values, list | tuple):
            return err(f"'{key}' must be a list of integers")
        if len(values) > MAX_ARRAY_LENGTH:
            return err(f"'{key}' must have at most {MAX_ARRAY_LENGTH} elements")
        if not all(_is_int(v) for v in values):
            return err(f"'{key}' must contain only integers")
        return ok(list(values))

    return require_mapping(initial_input).flat_map(_check)


def require_int(initial_input: Any, key: str, *, minimum: int | None = None) -> Result[int, str]:
    """Return ``initial_input[key]`` as an int, optionally bounded below."""

    def _check(payload: Mapping[str, Any]) -> Result[int, str]:
        value = payload.get(key)
        if not _is_int(value):
            return err(f"'{key}' must be an integer")
        if minimum is not None and value < minimum:
            return err(f"'{key}' must be >= {minimum}")
        return ok(value)

    return require_mapping(initial_input).flat_map(_check)


def require_str(initial_input: Any, key: str, *, allow_empty: bool = False) -> Result[str, str]:
    def _check(payload: Mapping[str, Any]) -> Result[str, str]:
        value = payload.get(key)
        if not isinstance(value, str):
            return err(f"'{key}' must be a string")
        if not value and not allow_empty:
            return err(f"'{key}' must not be empty")
        if len(value) > MAX_TEXT_LENGTH:
            return err(f"'{key}' must be at most {MAX_TEXT_LENGTH} characters")
        return ok(value)

    return require_mapping(initial_input).flat_map(_check)


__all__ = [
    "MAX_ARRAY_LENGTH",
    "MAX_TEXT_LENGTH",
    "require_int",
    "require_int_list",
    "require_mapping",
    "require_str",
]
