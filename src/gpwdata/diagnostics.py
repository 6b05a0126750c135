"""Structured diagnostic events and the sinks that render them.

The store and the service never log their anomalies directly. They build
a :class:`Diagnostic` and hand it to an injected :class:`DiagnosticSink`;
the sink decides how (and whether) to render it.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

_logger = logging.getLogger(__name__)


class DiagnosticKind(StrEnum):
    PAYLOAD_MISSING = "payload_missing"
    MULTIPLE_DOCUMENTS = "multiple_documents"
    TRANSPORT_FAULT = "transport_fault"
    ASSEMBLY_FAULT = "assembly_fault"


class Diagnostic(BaseModel):
    """A non-blocking log event produced by the store or the service."""

    model_config = ConfigDict(frozen=True)

    kind: DiagnosticKind
    level: int = Field(default=logging.ERROR, description="stdlib logging level")
    message: str
    operation: str = ""
    count: int | None = Field(default=None, description="Observed document count, if relevant")

    @property
    def is_error(self) -> bool:
        return self.level >= logging.ERROR


class DiagnosticSink(Protocol):
    """Receives diagnostics. Must not block and must not affect control flow."""

    def record(self, diagnostic: Diagnostic) -> None:
        ...


class LoggingDiagnosticSink:
    """Render diagnostics through stdlib :mod:`logging`."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or _logger

    def record(self, diagnostic: Diagnostic) -> None:
        if diagnostic.count is not None:
            self._logger.log(
                diagnostic.level,
                "%s [%s] %s Count = %d",
                diagnostic.operation or "-",
                diagnostic.kind.value,
                diagnostic.message,
                diagnostic.count,
            )
            return
        self._logger.log(
            diagnostic.level,
            "%s [%s] %s",
            diagnostic.operation or "-",
            diagnostic.kind.value,
            diagnostic.message,
        )


def emit(sink: DiagnosticSink | None, diagnostic: Diagnostic) -> None:
    """Hand *diagnostic* to *sink*, ignoring any failure inside the sink."""
    if sink is None:
        return
    try:
        sink.record(diagnostic)
    except Exception:  # noqa: BLE001
        _logger.debug("Diagnostic sink failed for %s", diagnostic.kind.value, exc_info=True)
