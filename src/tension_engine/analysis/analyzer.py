"""Tension analysis: weighted aggregation, trend, confidence.

``score = sum(value_i * weight_i) / sum(weight_i)`` over the metrics that
are actually present. A missing metric is "no signal", not "zero stress",
so it is excluded from both sums and shows up as lower confidence instead.
"""

from __future__ import annotations

import logging
import math
import time
from collections import deque
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, NamedTuple

from tension_engine.analysis.config import AnalyzerConfig
from tension_engine.analysis.metrics import MetricBag

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 50.0


class Trend(str, Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    DEGRADING = "degrading"


@dataclass(frozen=True)
class Contributor:
    """One metric's share of the score. ``impact = value * weight``."""

    source: str
    raw_value: float
    value: float
    weight: float
    impact: float


class HistoryPoint(NamedTuple):
    score: float
    trend: Trend
    timestamp: float


@dataclass(frozen=True)
class TensionResult:
    key: str
    score: float
    trend: Trend
    contributors: tuple[Contributor, ...]
    history: tuple[HistoryPoint, ...]
    confidence: float
    total_weight: float
    updated_at: float

    @property
    def top_contributor(self) -> Contributor | None:
        return self.contributors[0] if self.contributors else None


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------

def _clamp(value: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return max(lo, min(hi, value))


def normalize_metric(name: str, raw: float, config: AnalyzerConfig) -> float:
    """Map a raw reading onto the 0-100 stress scale."""
    if name == "error_rate":
        value = raw * 100
    elif name == "cache_hit_rate":
        # lower hit rate, more stress
        value = (1 - raw) * 100
    elif name in config.ceilings:
        value = raw / config.ceilings[name] * 100
    else:
        value = raw
    return _clamp(value)


def build_contributors(bag: MetricBag, config: AnalyzerConfig) -> list[Contributor]:
    """Contributors for every present metric, highest impact first."""
    contributors: list[Contributor] = []
    for name, raw in bag.present().items():
        weight = config.weights[name]
        value = normalize_metric(name, raw, config)
        contributors.append(
            Contributor(
                source=name,
                raw_value=raw,
                value=value,
                weight=weight,
                impact=value * weight,
            )
        )
    contributors.sort(key=lambda c: (-c.impact, c.source))
    return contributors


def weighted_score(contributors: list[Contributor]) -> tuple[float, float]:
    """Return ``(score, total_weight)``. No contributors gives the neutral score."""
    total_weight = sum(c.weight for c in contributors)
    if total_weight <= 0:
        return NEUTRAL_SCORE, 0.0
    score = sum(c.impact for c in contributors) / total_weight
    return round(_clamp(score), 2), total_weight


def determine_trend(score: float, previous: list[float], threshold: float) -> Trend:
    """Compare *score* with the mean of *previous*. Empty history is stable."""
    if not previous:
        return Trend.STABLE
    delta = score - sum(previous) / len(previous)
    if delta > threshold:
        return Trend.DEGRADING
    if delta < -threshold:
        return Trend.IMPROVING
    return Trend.STABLE


def compute_stability(scores: list[float], *, divisor: float) -> float:
    """``max(0, 1 - stdev(scores) / divisor)``. 1.0 for fewer than two scores."""
    if len(scores) < 2:
        return 1.0
    mean = sum(scores) / len(scores)
    variance = sum((s - mean) ** 2 for s in scores) / len(scores)
    return max(0.0, 1.0 - math.sqrt(variance) / divisor)


def compute_confidence(
    present: set[str], recent_scores: list[float], config: AnalyzerConfig
) -> float:
    expected = config.expected_metrics
    coverage = sum(1 for name in expected if name in present) / len(expected)
    stability = compute_stability(recent_scores, divisor=config.volatility_divisor)
    confidence = 100 * coverage * (1 - config.volatility_penalty * (1 - stability))
    return round(_clamp(confidence), 1)


# ---------------------------------------------------------------------------
# Analyzer
# ---------------------------------------------------------------------------

class TensionAnalyzer:
    """Scores metric bags and keeps a bounded score history per key.

    Parameters
    ----------
    config:
        An :class:`AnalyzerConfig`, a mapping to validate into one, or
        ``None`` for the defaults.
    clock:
        Returns the current epoch time; injected for deterministic tests.
    **overrides:
        Individual config fields, e.g. ``history_capacity=20``.

    Raises :class:`~tension_engine.errors.ConfigurationError` when the
    configuration is invalid.
    """

    def __init__(
        self,
        config: AnalyzerConfig | Mapping[str, Any] | None = None,
        *,
        clock: Callable[[], float] = time.time,
        **overrides: Any,
    ) -> None:
        if isinstance(config, AnalyzerConfig):
            if overrides:
                config = AnalyzerConfig.from_mapping(config.model_dump(), **overrides)
        else:
            config = AnalyzerConfig.from_mapping(config, **overrides)
        self._config = config
        self._clock = clock
        self._history: dict[str, deque[HistoryPoint]] = {}

    @property
    def config(self) -> AnalyzerConfig:
        return self._config

    def analyze(self, key: str, metrics: MetricBag | Mapping[str, Any]) -> TensionResult:
        bag = metrics if isinstance(metrics, MetricBag) else MetricBag.model_validate(metrics)
        cfg = self._config

        contributors = build_contributors(bag, cfg)
        score, total_weight = weighted_score(contributors)

        history = self._history.get(key)
        if history is None:
            history = self._history[key] = deque(maxlen=cfg.history_capacity)

        previous = [p.score for p in history][-cfg.trend_window:]
        trend = determine_trend(score, previous, cfg.trend_threshold)

        now = self._clock()
        history.append(HistoryPoint(score, trend, now))

        recent = [p.score for p in history][-cfg.trend_window:]
        confidence = compute_confidence({c.source for c in contributors}, recent, cfg)

        logger.debug(
            "Analyzed %s: score=%.2f trend=%s confidence=%.1f contributors=%d",
            key, score, trend.value, confidence, len(contributors),
        )
        return TensionResult(
            key=key,
            score=score,
            trend=trend,
            contributors=tuple(contributors),
            history=tuple(history),
            confidence=confidence,
            total_weight=total_weight,
            updated_at=now,
        )

    def history(self, key: str) -> tuple[HistoryPoint, ...]:
        return tuple(self._history.get(key, ()))

    def keys(self) -> list[str]:
        return list(self._history)

    def reset(self, key: str | None = None) -> None:
        """Forget the history of *key*, or of every key."""
        if key is None:
            self._history.clear()
        else:
            self._history.pop(key, None)
