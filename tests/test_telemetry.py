"""Tests for sselfie_core.telemetry."""

from __future__ import annotations

import logging

from sselfie_core.telemetry import (
    InMemoryTelemetrySink,
    LoggerTelemetrySink,
    NoOpTelemetrySink,
    TelemetryEvent,
    TelemetrySink,
)


def test_sinks_satisfy_protocol():
    for sink in (NoOpTelemetrySink(), InMemoryTelemetrySink(), LoggerTelemetrySink()):
        assert isinstance(sink, TelemetrySink)


def test_in_memory_sink_keeps_order():
    sink = InMemoryTelemetrySink()
    sink.emit(TelemetryEvent(name="a"))
    sink.emit(TelemetryEvent(name="b", attributes={"x": 1}))
    assert sink.names() == ["a", "b"]
    assert sink.events[1].attributes == {"x": 1}
    assert sink.events[0].timestamp_ms > 0


def test_logger_sink_attaches_structured_fields(caplog):
    sink = LoggerTelemetrySink()
    with caplog.at_level(logging.INFO, logger="sselfie_core.telemetry"):
        sink.emit(TelemetryEvent(name="workflow.progress", attributes={"progress": 29}))
    record = caplog.records[-1]
    assert record.event_name == "workflow.progress"
    assert record.event_attributes == {"progress": 29}
    assert "workflow.progress" in record.getMessage()
