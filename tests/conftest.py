"""Shared fixtures for calculator tests."""

from __future__ import annotations

import pytest

from diagnostics import RecordingSink, configure_logging
from settings import CalculatorSettings, load_settings
from verifier import ScenarioVerifier


@pytest.fixture(scope="session", autouse=True)
def calculator_settings() -> CalculatorSettings:
    """Settings from ./calculator.toml when present, defaults otherwise."""
    settings = load_settings()
    configure_logging(settings)
    return settings


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def verifier(sink: RecordingSink) -> ScenarioVerifier:
    """A fresh verifier per test, so no scenario sees another's state."""
    return ScenarioVerifier(sink=sink)
