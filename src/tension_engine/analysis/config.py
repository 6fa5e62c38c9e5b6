"""Analyzer configuration: weights, normalization ceilings, thresholds.

Defaults:

=====================  ======  ===============================  =====================
metric                 weight  normalization to 0-100           elevated / severe
=====================  ======  ===============================  =====================
error_rate             0.25    rate * 100                       10 / 20
latency                0.20    ms / 1000 * 100                  40 / 70
memory_usage           0.15    pass through                     70 / 85
cpu_usage              0.15    pass through                     70 / 85
queue_depth            0.10    depth / 5 * 100                  40 / 60
response_time_p95      0.10    ms / 2000 * 100                  50 / 75
disk_usage             0.05    pass through                     70 / 80
network_latency        0.05    ms / 500 * 100                   40 / 60
cache_hit_rate         0.05    (1 - rate) * 100                 30 / 50
error_count            0.05    count / 100 * 100                20 / 50
active_connections     0.05    count / 1000 * 100               75 / 90
=====================  ======  ===============================  =====================

Every normalized value is clamped to [0, 100], so each curve is monotonic
and bounded regardless of how far a raw reading overshoots its ceiling.
``error_rate`` and ``cache_hit_rate`` take no ceiling. Partial
``weights``/``ceilings``/``thresholds`` mappings are merged over
the defaults.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from pydantic import ConfigDict, Field, ValidationError, field_validator

from tension_engine.analysis.metrics import CORE_METRICS, METRIC_NAMES, _StrictModel
from tension_engine.errors import ConfigurationError

DEFAULT_WEIGHTS: dict[str, float] = {
    "error_rate": 0.25,
    "latency": 0.20,
    "memory_usage": 0.15,
    "cpu_usage": 0.15,
    "queue_depth": 0.10,
    "response_time_p95": 0.10,
    "disk_usage": 0.05,
    "network_latency": 0.05,
    "cache_hit_rate": 0.05,
    "error_count": 0.05,
    "active_connections": 0.05,
}

# Raw value at which a count/duration metric saturates at 100.
DEFAULT_CEILINGS: dict[str, float] = {
    "latency": 1000.0,
    "queue_depth": 5.0,
    "network_latency": 500.0,
    "response_time_p95": 2000.0,
    "error_count": 100.0,
    "active_connections": 1000.0,
}

# Fractions on a fixed curve (rate * 100, inverted for cache hits); no ceiling applies.
FIXED_CURVE_METRICS: tuple[str, ...] = ("error_rate", "cache_hit_rate")

# (elevated, severe) on the normalized 0-100 value.
DEFAULT_THRESHOLDS: dict[str, tuple[float, float]] = {
    "error_rate": (10.0, 20.0),
    "latency": (40.0, 70.0),
    "memory_usage": (70.0, 85.0),
    "cpu_usage": (70.0, 85.0),
    "queue_depth": (40.0, 60.0),
    "response_time_p95": (50.0, 75.0),
    "disk_usage": (70.0, 80.0),
    "network_latency": (40.0, 60.0),
    "cache_hit_rate": (30.0, 50.0),
    "error_count": (20.0, 50.0),
    "active_connections": (75.0, 90.0),
}


def _normalize_metric_name(name: Any) -> str:
    if not isinstance(name, str):
        raise ValueError(f"metric name must be a string, got {type(name).__name__}")
    cleaned = name.strip().lower()
    if cleaned not in METRIC_NAMES:
        raise ValueError(
            f"Unknown metric {name!r}. Use one of: {', '.join(METRIC_NAMES)}."
        )
    return cleaned


def _merge_over(defaults: Mapping[str, Any], overrides: Any) -> dict[str, Any]:
    if overrides is None:
        return dict(defaults)
    if not isinstance(overrides, Mapping):
        raise ValueError("expected a mapping of metric name to value")
    merged = dict(defaults)
    for name, value in overrides.items():
        merged[_normalize_metric_name(name)] = value
    return merged


class AnalyzerConfig(_StrictModel):
    """Every tunable of the analyzer. Immutable once built."""

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    weights: dict[str, float] = Field(default_factory=lambda: dict(DEFAULT_WEIGHTS))
    ceilings: dict[str, float] = Field(default_factory=lambda: dict(DEFAULT_CEILINGS))
    thresholds: dict[str, tuple[float, float]] = Field(
        default_factory=lambda: dict(DEFAULT_THRESHOLDS)
    )
    expected_metrics: tuple[str, ...] = Field(default=CORE_METRICS, min_length=1)

    history_capacity: int = Field(default=100, ge=1)
    trend_window: int = Field(default=5, ge=1)
    trend_threshold: float = Field(default=5.0, ge=0)

    # confidence = 100 * coverage * (1 - penalty * (1 - stability))
    volatility_divisor: float = Field(default=25.0, gt=0)
    volatility_penalty: float = Field(default=0.5, ge=0, le=1)
    low_confidence: float = Field(default=50.0, ge=0, le=100)

    max_recommendation_contributors: int = Field(default=3, ge=1)

    @field_validator("weights", mode="before")
    @classmethod
    def merge_weights(cls, value: Any) -> dict[str, Any]:
        return _merge_over(DEFAULT_WEIGHTS, value)

    @field_validator("ceilings", mode="before")
    @classmethod
    def merge_ceilings(cls, value: Any) -> dict[str, Any]:
        return _merge_over(DEFAULT_CEILINGS, value)

    @field_validator("thresholds", mode="before")
    @classmethod
    def merge_thresholds(cls, value: Any) -> dict[str, Any]:
        return _merge_over(DEFAULT_THRESHOLDS, value)

    @field_validator("expected_metrics", mode="before")
    @classmethod
    def normalize_expected(cls, value: Any) -> tuple[str, ...]:
        if isinstance(value, str):
            value = [value]
        names: list[str] = []
        for name in value:
            cleaned = _normalize_metric_name(name)
            if cleaned not in names:
                names.append(cleaned)
        return tuple(names)

    @field_validator("weights")
    @classmethod
    def check_weights(cls, weights: dict[str, float]) -> dict[str, float]:
        for name, weight in weights.items():
            if not math.isfinite(weight) or weight <= 0:
                raise ValueError(f"weight for {name!r} must be a positive number, got {weight!r}")
        return weights

    @field_validator("ceilings")
    @classmethod
    def check_ceilings(cls, ceilings: dict[str, float]) -> dict[str, float]:
        for name, ceiling in ceilings.items():
            if name in FIXED_CURVE_METRICS:
                raise ValueError(f"{name!r} is a fraction on a fixed curve and takes no ceiling")
            if not math.isfinite(ceiling) or ceiling <= 0:
                raise ValueError(f"ceiling for {name!r} must be a positive number, got {ceiling!r}")
        return ceilings

    @field_validator("thresholds")
    @classmethod
    def check_thresholds(
        cls, thresholds: dict[str, tuple[float, float]]
    ) -> dict[str, tuple[float, float]]:
        for name, (elevated, severe) in thresholds.items():
            if not 0 <= elevated < severe <= 100:
                raise ValueError(
                    f"thresholds for {name!r} must satisfy 0 <= elevated < severe <= 100, "
                    f"got ({elevated!r}, {severe!r})"
                )
        return thresholds

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None = None, **overrides: Any) -> AnalyzerConfig:
        """Validate *data* (plus keyword overrides), raising :class:`ConfigurationError`."""
        payload: dict[str, Any] = dict(data or {})
        payload.update(overrides)
        try:
            return cls.model_validate(payload)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid analyzer configuration: {exc}") from exc
