"""
Property-based tests using Hypothesis.

The factory checks the contracts over a small domain; these tests push
the same properties across arbitrary Python ints and through the
verifier's recovery path.
"""

from hypothesis import assume, given
from hypothesis.strategies import integers

from calculator import Calculator, DivisionByZero
from verifier import ScenarioVerifier

calc = Calculator()


class TestArithmeticProperties:
    @given(a=integers(), b=integers())
    def test_add_commutative(self, a, b):
        assert calc.add(a, b) == calc.add(b, a)

    @given(a=integers(), b=integers())
    def test_subtract_antisymmetric(self, a, b):
        assert calc.subtract(a, b) == -calc.subtract(b, a)

    @given(a=integers(), b=integers())
    def test_multiply_commutative(self, a, b):
        assert calc.multiply(a, b) == calc.multiply(b, a)

    @given(a=integers(), b=integers())
    def test_divide_nonzero_does_not_raise(self, a, b):
        assume(b != 0)
        q = calc.divide(a, b)
        # Truncation toward zero: |q * b| never exceeds |a|.
        assert abs(q * b) <= abs(a)
        assert abs(a - q * b) < abs(b)

    @given(a=integers())
    def test_divide_by_zero_raises(self, a):
        try:
            calc.divide(a, 0)
        except DivisionByZero:
            return
        raise AssertionError("divide(a, 0) returned normally")


class TestVerifierRecovery:
    @given(a=integers())
    def test_divide_by_zero_recorded_not_raised(self, a):
        verifier = ScenarioVerifier(engine_provider=Calculator)
        verifier.have_calculator()
        verifier.divide(a, 0)
        assert isinstance(verifier.state.last_error, DivisionByZero)
        assert verifier.state.last_result is None

    @given(a=integers(), b=integers())
    def test_exactly_one_field_set_after_divide(self, a, b):
        verifier = ScenarioVerifier(engine_provider=Calculator)
        verifier.have_calculator()
        verifier.divide(a, b)
        state = verifier.state
        assert (state.last_result is None) != (state.last_error is None)
