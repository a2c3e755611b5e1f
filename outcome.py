"""Success-or-error result of a single calculator call."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from calculator import DivisionByZero


@dataclass(frozen=True)
class Outcome:
    """Exactly one of ``value`` or ``error`` is set."""

    value: int | None = None
    error: DivisionByZero | None = None

    def __post_init__(self) -> None:
        if (self.value is None) == (self.error is None):
            raise ValueError("an Outcome holds exactly one of value or error")

    @classmethod
    def success(cls, value: int) -> Outcome:
        return cls(value=value)

    @classmethod
    def failure(cls, error: DivisionByZero) -> Outcome:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None


def evaluate(op: Callable[[int, int], int], a: int, b: int) -> Outcome:
    """Call ``op(a, b)`` and wrap the result.

    DivisionByZero becomes a failure outcome.  Anything else raised by
    ``op`` propagates.
    """
    try:
        return Outcome.success(op(a, b))
    except DivisionByZero as exc:
        return Outcome.failure(exc)
