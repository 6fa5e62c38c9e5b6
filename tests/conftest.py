"""Test fixtures for tension engine tests."""

from __future__ import annotations

from typing import Any

import pytest

from tension_engine.analysis.analyzer import TensionAnalyzer
from tension_engine.analysis.metrics import MetricBag
from tension_engine.context.keys import ContextKey
from tension_engine.context.state import ContextState
from tension_engine.telemetry import InMemoryTelemetrySink, TelemetrySink

# Six of the eight core metrics; scores 21.67 on a fresh key.
EXAMPLE_METRICS: dict[str, float] = {
    "errorRate": 0.02,
    "latency": 150,
    "memoryUsage": 45,
    "cpuUsage": 30,
    "queueDepth": 2,
    "cacheHitRate": 0.85,
}


class FakeClock:
    """Monotonic clock that advances one second per call."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        self.now += 1.0
        return self.now


def make_metric_bag(**overrides: Any) -> MetricBag:
    """A fully instrumented, healthy bag covering every core metric."""
    values: dict[str, Any] = {
        "error_rate": 0.01,
        "latency": 100.0,
        "memory_usage": 40.0,
        "cpu_usage": 30.0,
        "disk_usage": 50.0,
        "queue_depth": 1.0,
        "network_latency": 50.0,
        "cache_hit_rate": 0.9,
    }
    values.update(overrides)
    return MetricBag(**values)


def make_uniform_bag(level: float) -> MetricBag:
    """Every percent-style core metric at *level*; normalizes to exactly *level*."""
    return MetricBag(
        memory_usage=level,
        cpu_usage=level,
        disk_usage=level,
    )


def make_analyzer(**overrides: Any) -> TensionAnalyzer:
    return TensionAnalyzer(clock=FakeClock(), **overrides)


def make_state(
    type: str = "SERVICE",  # noqa: A002
    scope: str = "ENTERPRISE",
    telemetry: TelemetrySink | None = None,
    **overrides: Any,
) -> ContextState:
    return ContextState(
        ContextKey.of(type, scope),
        make_analyzer(**overrides),
        telemetry=telemetry,
    )


@pytest.fixture
def analyzer() -> TensionAnalyzer:
    return make_analyzer()


@pytest.fixture
def sink() -> InMemoryTelemetrySink:
    return InMemoryTelemetrySink()
