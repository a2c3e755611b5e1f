"""
Calculator factory.

The factory does not just construct a calculator.  It checks the
instance against every contract in contracts.py and only then hands
it out.

Flow:
  1. Caller asks for a calculator, optionally with a verification domain.
  2. Factory builds the engine (or takes the one supplied).
  3. Factory runs every contract property against it.
  4. All pass  -> return the engine.
     Any fails -> raise VerificationError, the engine is never released.
"""

from __future__ import annotations

import itertools
import random
from dataclasses import dataclass, field

from loguru import logger

from calculator import Calculator
from contracts import Contract, Domain, Engine, Property, TINY, calculator_contracts


@dataclass
class VerificationResult:
    """Outcome of verifying one property."""

    property_name: str
    passed: bool
    counterexample: tuple | None = None
    checks_run: int = 0

    def __repr__(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        ce = f"  counterexample={self.counterexample}" if self.counterexample else ""
        return f"[{status}] {self.property_name} ({self.checks_run} checks){ce}"


@dataclass
class VerificationReport:
    """Aggregate result of verifying one contract."""

    contract_name: str
    results: list[VerificationResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results)

    def summary(self) -> str:
        lines = [f"--- {self.contract_name} ---"]
        for r in self.results:
            lines.append(f"  {r}")
        status = "ALL PASSED" if self.passed else "FAILED"
        lines.append(f"  => {status}")
        return "\n".join(lines)


class VerificationError(Exception):
    """Raised when an engine fails one of its contracts."""

    def __init__(self, report: VerificationReport):
        self.report = report
        super().__init__(f"Verification failed:\n{report.summary()}")


# ---------------------------------------------------------------------------
# The factory
# ---------------------------------------------------------------------------

class CalculatorFactory:
    """
    Produces calculators that have passed their contracts.

    Domains up to EXHAUSTIVE_THRESHOLD values wide are checked
    exhaustively; wider domains fall back to edge values plus random
    samples.
    """

    EXHAUSTIVE_THRESHOLD = 256
    SAMPLE_COUNT = 2_000

    @classmethod
    def create(
        cls,
        domain: Domain | None = None,
        engine: Engine | None = None,
        verify: bool = True,
    ) -> Engine:
        """Build (or take), verify, and return a calculator."""
        engine = engine if engine is not None else Calculator()
        if verify:
            cls.verify(engine, domain or TINY)
        return engine

    @classmethod
    def verify(cls, engine: Engine, domain: Domain) -> list[VerificationReport]:
        reports = []
        for contract in calculator_contracts():
            report = cls._verify_contract(contract, engine, domain)
            reports.append(report)
            if not report.passed:
                logger.error("Contract {} failed:\n{}", contract.name, report.summary())
                raise VerificationError(report)
        logger.debug("Calculator verified over [{}, {}]", domain.lo, domain.hi)
        return reports

    # -- internal ---------------------------------------------------------

    @classmethod
    def _verify_contract(
        cls, contract: Contract, engine: Engine, domain: Domain
    ) -> VerificationReport:
        report = VerificationReport(contract_name=contract.name)
        for prop in contract:
            report.results.append(cls._verify_property(prop, engine, domain))
        return report

    @classmethod
    def _verify_property(
        cls, prop: Property, engine: Engine, domain: Domain
    ) -> VerificationResult:
        if domain.width <= cls.EXHAUSTIVE_THRESHOLD:
            combos = itertools.product(domain.values(), repeat=prop.arity)
        else:
            combos = _generate_samples(domain, prop.arity, cls.SAMPLE_COUNT)

        checks_run = 0
        for combo in combos:
            checks_run += 1
            try:
                held = prop.check(engine, *combo)
            except ArithmeticError:
                held = False
            if not held:
                return VerificationResult(
                    property_name=prop.name,
                    passed=False,
                    counterexample=tuple(combo),
                    checks_run=checks_run,
                )

        return VerificationResult(
            property_name=prop.name,
            passed=True,
            checks_run=checks_run,
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _generate_samples(
    domain: Domain, arity: int, count: int
) -> list[tuple[int, ...]]:
    """Edge-value combinations followed by random fill up to ``count``."""
    edge_values = [domain.lo, domain.lo + 1, -1, 0, 1, domain.hi - 1, domain.hi]
    edge_values = sorted({v for v in edge_values if domain.contains(v)})

    samples: list[tuple[int, ...]] = list(itertools.product(edge_values, repeat=arity))

    while len(samples) < count:
        samples.append(tuple(random.randint(domain.lo, domain.hi) for _ in range(arity)))

    return samples
