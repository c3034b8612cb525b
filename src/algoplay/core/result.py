"""Ok/Err result type for the edges of the system.

Malformed generator input and unknown catalog ids are expected outcomes at
the CLI and HTTP boundaries, not crashes. Helpers that can fail return a
``Result`` and the caller decides how to surface the error: an error trace,
an exit code, or an HTTP 404.

Example
-------
>>> from algoplay.core.result import ok, err
>>> def parse_size(x: str):
...     return ok(int(x)) if x.isdigit() else err("not a size")
>>> ok("12").flat_map(parse_size).unwrap()
12
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


class Result(ABC, Generic[T, E]):
    """Either ``Ok(value)`` or ``Err(error)``."""

    @abstractmethod
    def is_ok(self) -> bool: ...

    def is_err(self) -> bool:
        return not self.is_ok()

    @abstractmethod
    def unwrap(self) -> T:
        """The success value; ``RuntimeError`` on ``Err``."""

    @abstractmethod
    def unwrap_err(self) -> E:
        """The error value; ``RuntimeError`` on ``Ok``."""

    @abstractmethod
    def map(self, fn: Callable[[T], U]) -> Result[U, E]: ...

    @abstractmethod
    def flat_map(self, fn: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain a step that can itself fail; the first ``Err`` wins."""


@dataclass(frozen=True)
class Ok(Result[T, E]):
    value: T

    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def unwrap_err(self) -> NoReturn:
        raise RuntimeError(f"unwrap_err() on {self!r}")

    def map(self, fn: Callable[[T], U]) -> Result[U, E]:
        return Ok(fn(self.value))

    def flat_map(self, fn: Callable[[T], Result[U, E]]) -> Result[U, E]:
        return fn(self.value)


@dataclass(frozen=True)
class Err(Result[T, E]):
    error: E

    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        raise RuntimeError(f"unwrap() on {self!r}")

    def unwrap_err(self) -> E:
        return self.error

    def map(self, fn: Callable[[T], U]) -> Result[U, E]:
        return Err(self.error)

    def flat_map(self, fn: Callable[[T], Result[U, E]]) -> Result[U, E]:
        return Err(self.error)


def ok(value: T) -> Result[T, E]:
    return Ok(value)


def err(error: E) -> Result[T, E]:
    return Err(error)


__all__ = ["Err", "Ok", "Result", "err", "ok"]
