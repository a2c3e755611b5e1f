"""Algebraic contracts a calculator must satisfy.

A Contract is a named, ordered list of properties.  Each property is a
predicate over an engine and some free integer inputs; the factory
evaluates every property over a verification Domain before an engine
is handed to a scenario.

The contracts say WHAT must hold.  They never look inside the engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Protocol

from calculator import DivisionByZero


# ---------------------------------------------------------------------------
# Verification domain
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Domain:
    """Inclusive integer interval [lo, hi] that inputs are drawn from."""

    lo: int
    hi: int

    def __post_init__(self) -> None:
        if self.lo > self.hi:
            raise ValueError(f"lo ({self.lo}) must be <= hi ({self.hi})")

    @property
    def width(self) -> int:
        return self.hi - self.lo + 1

    def contains(self, v: int) -> bool:
        return self.lo <= v <= self.hi

    def values(self) -> range:
        return range(self.lo, self.hi + 1)


TINY = Domain(lo=-8, hi=7)
SMALL = Domain(lo=-128, hi=127)


# ---------------------------------------------------------------------------
# Contract primitives
# ---------------------------------------------------------------------------

class Engine(Protocol):
    """What a calculator must look like to be verified."""

    def add(self, a: int, b: int) -> int: ...
    def subtract(self, a: int, b: int) -> int: ...
    def multiply(self, a: int, b: int) -> int: ...
    def divide(self, a: int, b: int) -> int: ...


@dataclass(frozen=True)
class Property:
    """A single verifiable property of an engine."""

    name: str
    description: str
    arity: int          # free integer inputs, excluding the engine
    predicate: Callable[..., bool]

    def check(self, engine: Engine, *args: Any) -> bool:
        return self.predicate(engine, *args)


@dataclass
class Contract:
    """An ordered collection of properties for one operation."""

    name: str
    properties: list[Property] = field(default_factory=list)

    def add(self, prop: Property) -> None:
        self.properties.append(prop)

    def __iter__(self):
        return iter(self.properties)

    def __len__(self):
        return len(self.properties)


# ---------------------------------------------------------------------------
# Predicates that need more than an expression
# ---------------------------------------------------------------------------

def _truncated_quotient(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _divides_without_error(engine: Engine, a: int, b: int) -> bool:
    if b == 0:
        return True
    return engine.divide(a, b) == _truncated_quotient(a, b)


def _zero_divisor_raises(engine: Engine, a: int) -> bool:
    try:
        engine.divide(a, 0)
    except DivisionByZero:
        return True
    return False


# ---------------------------------------------------------------------------
# Contract builders
# ---------------------------------------------------------------------------

def addition_contract() -> Contract:
    contract = Contract(name="addition")

    contract.add(Property(
        name="commutativity",
        description="add(a, b) == add(b, a)",
        arity=2,
        predicate=lambda e, a, b: e.add(a, b) == e.add(b, a),
    ))

    contract.add(Property(
        name="identity",
        description="add(a, 0) == a",
        arity=1,
        predicate=lambda e, a: e.add(a, 0) == a,
    ))

    return contract


def subtraction_contract() -> Contract:
    contract = Contract(name="subtraction")

    contract.add(Property(
        name="antisymmetry",
        description="subtract(a, b) == -subtract(b, a)",
        arity=2,
        predicate=lambda e, a, b: e.subtract(a, b) == -e.subtract(b, a),
    ))

    contract.add(Property(
        name="identity",
        description="subtract(a, 0) == a",
        arity=1,
        predicate=lambda e, a: e.subtract(a, 0) == a,
    ))

    contract.add(Property(
        name="self_inverse",
        description="subtract(a, a) == 0",
        arity=1,
        predicate=lambda e, a: e.subtract(a, a) == 0,
    ))

    return contract


def multiplication_contract() -> Contract:
    contract = Contract(name="multiplication")

    contract.add(Property(
        name="commutativity",
        description="multiply(a, b) == multiply(b, a)",
        arity=2,
        predicate=lambda e, a, b: e.multiply(a, b) == e.multiply(b, a),
    ))

    contract.add(Property(
        name="identity",
        description="multiply(a, 1) == a",
        arity=1,
        predicate=lambda e, a: e.multiply(a, 1) == a,
    ))

    contract.add(Property(
        name="zero",
        description="multiply(a, 0) == 0",
        arity=1,
        predicate=lambda e, a: e.multiply(a, 0) == 0,
    ))

    return contract


def division_contract() -> Contract:
    contract = Contract(name="division")

    contract.add(Property(
        name="total_for_nonzero_divisor",
        description="divide(a, b) returns the truncated quotient for b != 0",
        arity=2,
        predicate=_divides_without_error,
    ))

    contract.add(Property(
        name="identity",
        description="divide(a, 1) == a",
        arity=1,
        predicate=lambda e, a: e.divide(a, 1) == a,
    ))

    contract.add(Property(
        name="zero_divisor",
        description="divide(a, 0) raises DivisionByZero",
        arity=1,
        predicate=_zero_divisor_raises,
    ))

    return contract


def calculator_contracts() -> list[Contract]:
    """Every contract a calculator must pass, one per operation."""
    return [
        addition_contract(),
        subtraction_contract(),
        multiplication_contract(),
        division_contract(),
    ]
