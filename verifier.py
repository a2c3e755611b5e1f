"""Scenario verifier: drives a calculator from given/when/then steps.

One verifier serves one scenario.  It moves through four phases:

  FRESH      nothing has happened yet
  READY      "I have a calculator" acquired an engine
  EVALUATED  a when step ran and its outcome was recorded
  VERIFIED   at least one then step passed

Division by zero does not abort a scenario.  The failure outcome is
recorded in ScenarioState so a later then step can assert on it.
Assertion failures are raised as AssertionError subclasses for the test
runner to report.  Steps taken in an impossible order raise
StepOrderError instead.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable

from calculator import DivisionByZero
from contracts import Engine
from diagnostics import NullSink, TraceRecord, TraceSink, build_sink
from factory import CalculatorFactory
from outcome import Outcome, evaluate
from settings import CalculatorSettings


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class ScenarioError(Exception):
    """The scenario itself is malformed."""


class StepOrderError(ScenarioError):
    """A step ran in a phase where it makes no sense."""


class ResultMismatch(AssertionError):
    """The last result differs from the expected value."""


class MissingError(AssertionError):
    """A division-by-zero error was expected but none was recorded."""


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------

class Phase(Enum):
    FRESH = auto()
    READY = auto()
    EVALUATED = auto()
    VERIFIED = auto()


@dataclass
class ScenarioState:
    """What the last when step produced.  At most one field is set."""

    last_result: int | None = None
    last_error: DivisionByZero | None = None

    def record(self, outcome: Outcome) -> None:
        self.last_result = outcome.value
        self.last_error = outcome.error


# Display names and symbols for trace messages.
_OPERATIONS = {
    "add": ("Addition", "+"),
    "subtract": ("Subtraction", "-"),
    "multiply": ("Multiplication", "*"),
    "divide": ("Division", "/"),
}


class ScenarioVerifier:
    """Binds the step vocabulary to calculator calls and assertions."""

    def __init__(
        self,
        sink: TraceSink | None = None,
        engine_provider: Callable[[], Engine] = CalculatorFactory.create,
    ) -> None:
        self.sink = sink if sink is not None else NullSink()
        self.engine_provider = engine_provider
        self.engine: Engine | None = None
        self.state = ScenarioState()
        self.phase = Phase.FRESH

    @classmethod
    def from_settings(cls, settings: CalculatorSettings) -> ScenarioVerifier:
        """Verifier whose sink and engine verification follow ``settings``."""
        provider = functools.partial(
            CalculatorFactory.create,
            domain=settings.verification_domain,
            verify=settings.verify_on_create,
        )
        return cls(sink=build_sink(settings), engine_provider=provider)

    # -- given ------------------------------------------------------------

    def have_calculator(self) -> None:
        """Given I have a calculator."""
        self.engine = self.engine_provider()
        self.state = ScenarioState()
        self.phase = Phase.READY
        self._emit("given", None, (), "ready", "Calculator initialized")

    # -- when -------------------------------------------------------------

    def add(self, a: int, b: int) -> Outcome:
        return self._evaluate("add", a, b)

    def subtract(self, minuend: int, subtrahend: int) -> Outcome:
        return self._evaluate("subtract", minuend, subtrahend)

    def multiply(self, a: int, b: int) -> Outcome:
        return self._evaluate("multiply", a, b)

    def divide(self, a: int, b: int) -> Outcome:
        return self._evaluate("divide", a, b)

    # -- then -------------------------------------------------------------

    def assert_result(self, expected: int) -> None:
        """Then the result should be ``expected``."""
        self._require_evaluated("the result should be")
        if self.state.last_error is not None:
            raise ResultMismatch(
                f"expected result {expected}, but the last step raised "
                f"{type(self.state.last_error).__name__}: {self.state.last_error}"
            )
        if self.state.last_result != expected:
            raise ResultMismatch(
                f"expected result {expected}, got {self.state.last_result}"
            )
        self.phase = Phase.VERIFIED
        self._emit(
            "then", None, (expected,), "passed",
            f"Assertion passed: result = {self.state.last_result}",
        )

    def assert_error(self) -> None:
        """Then an error should be thrown."""
        self._require_evaluated("an error should be thrown")
        if not isinstance(self.state.last_error, DivisionByZero):
            raise MissingError(
                f"expected DivisionByZero, but the last step returned "
                f"{self.state.last_result}"
            )
        self.phase = Phase.VERIFIED
        self._emit(
            "then", None, (), "passed",
            f"DivisionByZero caught: {self.state.last_error}",
        )

    # -- internal ---------------------------------------------------------

    def _evaluate(self, name: str, a: int, b: int) -> Outcome:
        if self.phase is Phase.FRESH or self.engine is None:
            raise StepOrderError(
                f"cannot {name} {a} and {b} before 'I have a calculator'"
            )

        outcome = evaluate(getattr(self.engine, name), a, b)
        self.state.record(outcome)
        self.phase = Phase.EVALUATED

        label, symbol = _OPERATIONS[name]
        if outcome.ok:
            self._emit(
                "when", name, (a, b), str(outcome.value),
                f"{label}: {a} {symbol} {b} = {outcome.value}",
            )
        else:
            self._emit(
                "when", name, (a, b), type(outcome.error).__name__,
                f"Division by zero attempted: {a} {symbol} {b}",
                level="WARNING",
            )
        return outcome

    def _require_evaluated(self, step: str) -> None:
        if self.phase not in (Phase.EVALUATED, Phase.VERIFIED):
            raise StepOrderError(
                f"'{step}' needs a when step first (phase is {self.phase.name})"
            )

    def _emit(
        self,
        step: str,
        operation: str | None,
        operands: tuple[int, ...],
        outcome: str,
        message: str,
        level: str = "INFO",
    ) -> None:
        self.sink.emit(TraceRecord(
            step=step,
            operation=operation,
            operands=operands,
            outcome=outcome,
            level=level,
            message=message,
        ))
