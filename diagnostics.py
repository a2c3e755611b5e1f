"""Trace records and the sinks that receive them.

Every verifier step produces one TraceRecord.  Where it goes is up to
the sink handed to the verifier: nowhere (NullSink), a list kept for
assertions (RecordingSink), or loguru (LoguruSink).  The verifier never
reads a record back.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Protocol

from loguru import logger

from settings import CalculatorSettings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan> - <level>{message}</level>"
)


@dataclass(frozen=True)
class TraceRecord:
    """One diagnostic line: which step ran, on what, and how it ended."""

    step: str                       # "given", "when" or "then"
    operation: str | None
    operands: tuple[int, ...]
    outcome: str
    level: str = "INFO"
    message: str = ""


class TraceSink(Protocol):
    def emit(self, record: TraceRecord) -> None: ...


class NullSink:
    """Drops every record."""

    def emit(self, record: TraceRecord) -> None:
        pass


@dataclass
class RecordingSink:
    """Keeps records in memory so tests can inspect them."""

    records: list[TraceRecord] = field(default_factory=list)

    def emit(self, record: TraceRecord) -> None:
        self.records.append(record)

    @property
    def messages(self) -> list[str]:
        return [r.message for r in self.records]

    @property
    def levels(self) -> list[str]:
        return [r.level for r in self.records]


class LoguruSink:
    """Writes each record through loguru at the record's level."""

    def __init__(self, component: str = "verifier") -> None:
        self._logger = logger.bind(component=component)

    def emit(self, record: TraceRecord) -> None:
        self._logger.bind(
            step=record.step,
            operation=record.operation,
            operands=record.operands,
            outcome=record.outcome,
        ).log(record.level, record.message)


def configure_logging(settings: CalculatorSettings) -> None:
    """Replace loguru's default handler with ones driven by ``settings``."""
    logger.remove()
    logger.configure(extra={"component": "calculator"})
    logger.add(sys.stderr, level=settings.log_level, format=LOG_FORMAT)
    if settings.log_file is not None:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            settings.log_file,
            level=settings.log_level,
            format=LOG_FORMAT,
            encoding="utf-8",
        )
        logger.info("Logging to file: {}", settings.log_file)


def build_sink(settings: CalculatorSettings) -> TraceSink:
    return LoguruSink() if settings.trace_enabled else NullSink()
