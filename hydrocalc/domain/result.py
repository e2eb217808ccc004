# hydrocalc/domain/result.py
"""Discriminated result type returned by every computation in ``hydrocalc``.

A calculation either succeeds with :class:`Ok` (wrapping the value) or
yields a :class:`Failure` carrying its :class:`FailureKind` and a short
human-readable reason. Nothing in the numeric core raises for bad numbers:

* **INVALID_INPUT** – a value is non-finite, non-positive or outside the
  domain a formula requires (for example ``n <= 0`` in Manning).
* **OUT_OF_BRACKET_RANGE** – a bisection bracket could not be grown (or
  was never low enough) to contain the target, i.e. the answer lies
  outside the designed search range.

``Failure`` is falsy and ``Ok`` is truthy, so ``if result:`` reads
naturally at call sites.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Generic, Tuple, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")


class FailureKind(Enum):
    """Why a computation produced no value."""

    INVALID_INPUT = auto()
    OUT_OF_BRACKET_RANGE = auto()

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome."""

    value: T

    def __bool__(self) -> bool:
        return True

    def map(self, fn: Callable[[T], U]) -> "Ok[U]":
        return Ok(fn(self.value))

    def then(self, fn: Callable[[T], "Result[U]"]) -> "Result[U]":
        return fn(self.value)

    def unwrap_or(self, default: Any) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Failure:
    """No valid result; see ``kind`` and ``reason``."""

    kind: FailureKind
    reason: str = ""

    def __bool__(self) -> bool:
        return False

    def map(self, fn: Callable[[Any], Any]) -> "Failure":
        return self

    def then(self, fn: Callable[[Any], Any]) -> "Failure":
        return self

    def unwrap_or(self, default: U) -> U:
        return default


Result = Union[Ok[T], Failure]


def invalid(reason: str) -> Failure:
    return Failure(FailureKind.INVALID_INPUT, reason)


def out_of_range(reason: str) -> Failure:
    return Failure(FailureKind.OUT_OF_BRACKET_RANGE, reason)


def collect(*results: Result[Any]) -> Result[Tuple[Any, ...]]:
    """Combine several results into ``Ok(tuple)`` or the first failure."""
    values = []
    for res in results:
        if isinstance(res, Failure):
            return res
        values.append(res.value)
    return Ok(tuple(values))
