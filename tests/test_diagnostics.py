from __future__ import annotations

import logging

import pytest

from gpwdata.diagnostics import Diagnostic, DiagnosticKind, LoggingDiagnosticSink, emit


def test_logging_sink_renders_level_and_count(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="gpwdata")
    sink = LoggingDiagnosticSink()

    sink.record(
        Diagnostic(
            kind=DiagnosticKind.MULTIPLE_DOCUMENTS,
            message="read failed.",
            operation="read",
            count=2,
        )
    )

    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert record.levelno == logging.ERROR
    assert record.name == "gpwdata.diagnostics"
    assert "multiple_documents" in record.getMessage()
    assert "Count = 2" in record.getMessage()


def test_logging_sink_uses_given_logger(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("gpwdata.tests.sink")
    caplog.set_level(logging.INFO, logger="gpwdata.tests.sink")

    LoggingDiagnosticSink(logger).record(
        Diagnostic(kind=DiagnosticKind.TRANSPORT_FAULT, level=logging.INFO, message="read failed. Error=boom")
    )

    assert [(r.name, r.levelno) for r in caplog.records] == [("gpwdata.tests.sink", logging.INFO)]
    assert "Error=boom" in caplog.records[0].getMessage()


def test_is_error() -> None:
    assert Diagnostic(kind=DiagnosticKind.PAYLOAD_MISSING, message="x").is_error
    assert not Diagnostic(kind=DiagnosticKind.TRANSPORT_FAULT, level=logging.INFO, message="x").is_error


def test_emit_ignores_sink_failures() -> None:
    class _BrokenSink:
        def record(self, diagnostic: Diagnostic) -> None:
            raise RuntimeError("sink down")

    emit(_BrokenSink(), Diagnostic(kind=DiagnosticKind.ASSEMBLY_FAULT, message="x"))
    emit(None, Diagnostic(kind=DiagnosticKind.ASSEMBLY_FAULT, message="x"))
