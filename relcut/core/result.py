"""Result type used by every fallible release step.

A step returns ``Ok(value)`` or ``Err(error)`` instead of raising, so the
release sequence can be driven (and tested) without any process exiting
half way through.

Usage:
    def read_code(text: str) -> Result[int, str]:
        if not text.isdigit():
            return Err(f"not a number: {text}")
        return Ok(int(text))

    match read_code("41"):
        case Ok(value):
            print(value + 1)
        case Err(error):
            print(error)

Callers narrow with ``isinstance(result, Err)`` and return early; the stage
runner in ``relcut.release.pipeline`` does the same for a list of steps.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result holding ``value``."""

    value: T

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        """Transform the value, keeping the result successful."""
        return Ok(f(self.value))

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed result holding ``error``."""

    error: E

    def map(self, f: Callable[[T], U]) -> Err[E]:
        return self

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Ok[T] | Err[E]
