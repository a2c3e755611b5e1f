"""Configuration for the calculator harness.

Settings come from the ``[calculator]`` table of an optional TOML file.
Any key left out keeps its default, and a missing file means all
defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import toml
from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from contracts import Domain

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")

DEFAULT_SETTINGS_PATH = Path("calculator.toml")


class SettingsError(ValueError):
    """The settings file could not be read or holds invalid values."""


class CalculatorSettings(BaseModel):
    """Logging, tracing and verification options."""

    log_level: str = "INFO"
    log_file: Path | None = None
    trace_enabled: bool = True
    verify_on_create: bool = True
    verification_lo: int = Field(default=-8)
    verification_hi: int = Field(default=7)

    @field_validator("log_level")
    @classmethod
    def level_is_known(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {v!r}")
        return level

    @model_validator(mode="after")
    def domain_is_ordered(self) -> CalculatorSettings:
        if self.verification_lo > self.verification_hi:
            raise ValueError(
                f"verification_lo ({self.verification_lo}) must be <= "
                f"verification_hi ({self.verification_hi})"
            )
        return self

    @property
    def verification_domain(self) -> Domain:
        return Domain(lo=self.verification_lo, hi=self.verification_hi)


def load_settings(path: str | Path | None = None) -> CalculatorSettings:
    """Read settings from ``path`` (default ``calculator.toml``)."""
    settings_path = Path(path) if path is not None else DEFAULT_SETTINGS_PATH
    if not settings_path.exists():
        logger.debug("No settings file at {}, using defaults", settings_path)
        return CalculatorSettings()

    try:
        data: dict[str, Any] = toml.load(settings_path)
    except toml.TomlDecodeError as e:
        raise SettingsError(f"{settings_path} is not valid TOML: {e}") from e

    section = data.get("calculator", {})
    if not isinstance(section, dict):
        raise SettingsError(f"[calculator] in {settings_path} must be a table")

    try:
        settings = CalculatorSettings(**section)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings in {settings_path}:\n{e}") from e

    logger.debug("Loaded settings from {}", settings_path)
    return settings
