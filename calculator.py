"""Integer calculator used by the scenario verifier.

Four operations over Python ints.  Only division can fail, and it fails
with a single error kind: DivisionByZero.  The calculator holds no
state, so every call is independent of the ones before it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable


class DivisionByZero(ZeroDivisionError):
    """Raised by Calculator.divide when the divisor is zero."""

    def __init__(self) -> None:
        super().__init__("division by zero")


@dataclass(frozen=True)
class Calculator:
    """Add, subtract, multiply and truncating divide over integers."""

    OPERATIONS = ("add", "subtract", "multiply", "divide")

    # -- core operations --------------------------------------------------

    def add(self, a: int, b: int) -> int:
        return a + b

    def subtract(self, a: int, b: int) -> int:
        return a - b

    def multiply(self, a: int, b: int) -> int:
        return a * b

    def divide(self, a: int, b: int) -> int:
        """Integer division, truncating toward zero."""
        if b == 0:
            raise DivisionByZero()

        # divmod floors; step back toward zero when the signs differ
        # and the division is inexact.
        q, r = divmod(a, b)
        if r != 0 and (a < 0) != (b < 0):
            q += 1
        return q

    # -- lookup -----------------------------------------------------------

    def operation(self, name: str) -> Callable[[int, int], int]:
        """Return the bound operation called ``name``."""
        if name not in self.OPERATIONS:
            raise KeyError(f"unknown operation {name!r}")
        return getattr(self, name)
