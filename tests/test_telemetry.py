"""Tests for context telemetry sinks and the emit helper."""

from __future__ import annotations

import logging

from tension_engine.telemetry import (
    CONTEXT_CREATED,
    CONTEXT_RECOMPUTED,
    ContextEvent,
    InMemoryTelemetrySink,
    LoggerTelemetrySink,
    NoOpTelemetrySink,
    TelemetrySink,
    emit,
)


class _BrokenSink:
    def emit(self, event: ContextEvent) -> None:
        raise RuntimeError("sink down")


class TestTelemetry:
    def test_sinks_satisfy_protocol(self):
        for sink in (NoOpTelemetrySink(), InMemoryTelemetrySink(), LoggerTelemetrySink()):
            assert isinstance(sink, TelemetrySink)

    def test_in_memory_records(self):
        sink = InMemoryTelemetrySink()
        emit(sink, CONTEXT_CREATED, "SERVICE-ENTERPRISE-default")
        (event,) = sink.events
        assert event.name == CONTEXT_CREATED
        assert event.key == "SERVICE-ENTERPRISE-default"
        assert event.attributes == {}
        assert event.timestamp > 0

    def test_for_key_filters(self):
        sink = InMemoryTelemetrySink()
        emit(sink, CONTEXT_CREATED, "A-B-default")
        emit(sink, CONTEXT_CREATED, "C-D-default")
        emit(sink, CONTEXT_RECOMPUTED, "A-B-default", score=1.0)
        assert [e.name for e in sink.for_key("A-B-default")] == [
            CONTEXT_CREATED,
            CONTEXT_RECOMPUTED,
        ]

    def test_logger_sink(self, caplog):
        with caplog.at_level(logging.INFO, logger="tension_engine.telemetry.events"):
            emit(LoggerTelemetrySink(), CONTEXT_RECOMPUTED, "SERVICE-ENTERPRISE-default", score=12.5)
        record = caplog.records[-1]
        assert record.getMessage() == "context.recomputed SERVICE-ENTERPRISE-default"
        assert record.context_key == "SERVICE-ENTERPRISE-default"
        assert record.event_attributes == {"score": 12.5}

    def test_failing_sink_is_logged_not_raised(self, caplog):
        with caplog.at_level(logging.ERROR):
            emit(_BrokenSink(), CONTEXT_CREATED, "SERVICE-ENTERPRISE-default")
        assert "Telemetry sink failed on context.created" in caplog.text
