"""Human-readable descriptions and remediation advice for a tension result."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from tension_engine.analysis.analyzer import TensionResult, Trend
from tension_engine.analysis.config import AnalyzerConfig
from tension_engine.color.engine import classify
from tension_engine.color.models import Classification

_BAND_LABELS: dict[Classification, str] = {
    "excellent": "Excellent",
    "very-good": "Very Good",
    "good": "Good",
    "fair": "Fair",
    "moderate": "Moderate",
    "concerning": "Concerning",
    "poor": "Poor",
    "bad": "Bad",
    "critical": "Critical",
    "failure": "Failure",
}

_TREND_LABELS: dict[Trend, str] = {
    Trend.IMPROVING: "Improving",
    Trend.STABLE: "Stable",
    Trend.DEGRADING: "Degrading",
}


class Severity(str, Enum):
    URGENT = "urgent"
    WARNING = "warning"
    MONITOR = "monitor"
    INFO = "info"
    OK = "ok"


class Recommendation(NamedTuple):
    severity: Severity
    source: str
    message: str

    def __str__(self) -> str:
        return f"[{self.severity.value.upper()}] {self.message}"


# metric -> (severe guidance, elevated guidance)
_GUIDANCE: dict[str, tuple[str, str]] = {
    "error_rate": (
        "High error rate detected - investigate application logs and recent deployments",
        "Elevated error rate - review error patterns and tighten alerting",
    ),
    "latency": (
        "High latency detected - optimize slow database queries and hot request paths",
        "Latency increasing - consider caching and profiling request handlers",
    ),
    "memory_usage": (
        "High memory usage - investigate leaks and scale out before the process is OOM-killed",
        "Memory usage elevated - monitor garbage collection and allocation patterns",
    ),
    "cpu_usage": (
        "High CPU usage - optimize hot code paths and consider horizontal scaling",
        "CPU usage elevated - profile the application for bottlenecks",
    ),
    "disk_usage": (
        "Disk usage high - rotate logs and clean up old data",
        "Disk usage elevated - review retention policies",
    ),
    "queue_depth": (
        "Queue backlog growing - add workers or speed up processing",
        "Queue depth elevated - watch consumer throughput",
    ),
    "network_latency": (
        "Network latency high - check external dependencies and connectivity",
        "Network latency elevated - monitor upstream services",
    ),
    "cache_hit_rate": (
        "Cache hit rate low - revisit the cache strategy and cache size",
        "Cache hit rate dropping - review key expiry and warm-up",
    ),
    "response_time_p95": (
        "Tail latency high - optimize slow queries and add capacity for peak load",
        "Tail latency elevated - inspect the slowest endpoints",
    ),
    "error_count": (
        "Error volume high - triage the most frequent exceptions",
        "Error volume elevated - track error counts per endpoint",
    ),
    "active_connections": (
        "Connection count near saturation - scale out or raise pool limits",
        "Connection count elevated - check for connection leaks",
    ),
}


def get_description(score: float, trend: Trend | str) -> str:
    """E.g. ``"Very Good & Stable"``; one fixed string per band and trend."""
    return f"{_BAND_LABELS[classify(score)]} & {_TREND_LABELS[Trend(trend)]}"


def get_recommendations(
    result: TensionResult, config: AnalyzerConfig | None = None
) -> list[Recommendation]:
    """Ordered, severity-tagged advice for *result*. Never empty."""
    cfg = config or AnalyzerConfig()
    recommendations: list[Recommendation] = []

    for contributor in result.contributors[: cfg.max_recommendation_contributors]:
        elevated, severe = cfg.thresholds[contributor.source]
        severe_text, elevated_text = _GUIDANCE[contributor.source]
        if contributor.value > severe:
            recommendations.append(
                Recommendation(Severity.URGENT, contributor.source, severe_text)
            )
        elif contributor.value > elevated:
            recommendations.append(
                Recommendation(Severity.MONITOR, contributor.source, elevated_text)
            )

    if result.trend is Trend.DEGRADING:
        recommendations.append(
            Recommendation(
                Severity.WARNING,
                "trend",
                f"Tension degrading (now {result.score:.0f}) - immediate attention required",
            )
        )

    if not recommendations:
        return [
            Recommendation(
                Severity.OK, "system", "System operating within normal parameters"
            )
        ]

    if result.trend is Trend.IMPROVING:
        recommendations.append(
            Recommendation(
                Severity.INFO, "trend", "Tension improving - keep current remediation in place"
            )
        )
    if result.confidence < cfg.low_confidence:
        recommendations.append(
            Recommendation(
                Severity.INFO,
                "confidence",
                f"Low analysis confidence ({result.confidence:.0f}%) - report more metrics",
            )
        )
    return recommendations
