"""
Step bindings for features/calculator.feature.

Each step is a thin call into ScenarioVerifier; the verifier fixture is
function-scoped, so every scenario starts from a fresh state.
"""

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from settings import CalculatorSettings
from verifier import Phase, ScenarioVerifier

scenarios("features/calculator.feature")


@pytest.fixture
def verifier(calculator_settings: CalculatorSettings) -> ScenarioVerifier:
    """Scenario verifier tracing through loguru."""
    return ScenarioVerifier.from_settings(calculator_settings)


# ---------------------------------------------------------------------------
# Given
# ---------------------------------------------------------------------------

@given("I have a calculator")
def have_calculator(verifier: ScenarioVerifier):
    verifier.have_calculator()


# ---------------------------------------------------------------------------
# When
# ---------------------------------------------------------------------------

@when(parsers.parse("I add {first:d} and {second:d}"))
def add_numbers(verifier: ScenarioVerifier, first: int, second: int):
    verifier.add(first, second)


@when(parsers.parse("I subtract {subtrahend:d} from {minuend:d}"))
def subtract_numbers(verifier: ScenarioVerifier, subtrahend: int, minuend: int):
    verifier.subtract(minuend, subtrahend)


@when(parsers.parse("I multiply {first:d} and {second:d}"))
def multiply_numbers(verifier: ScenarioVerifier, first: int, second: int):
    verifier.multiply(first, second)


@when(parsers.parse("I divide {first:d} by {second:d}"))
def divide_numbers(verifier: ScenarioVerifier, first: int, second: int):
    verifier.divide(first, second)


# ---------------------------------------------------------------------------
# Then
# ---------------------------------------------------------------------------

@then(parsers.parse("the result should be {expected:d}"))
def result_should_be(verifier: ScenarioVerifier, expected: int):
    verifier.assert_result(expected)
    assert verifier.phase is Phase.VERIFIED


@then("an ArithmeticException should be thrown")
@then("an error should be thrown")
def error_should_be_thrown(verifier: ScenarioVerifier):
    verifier.assert_error()
    assert verifier.state.last_result is None
