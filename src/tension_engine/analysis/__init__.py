"""Tension analysis: weighted scoring, trend, confidence, advice."""

from tension_engine.analysis.advice import (
    Recommendation,
    Severity,
    get_description,
    get_recommendations,
)
from tension_engine.analysis.analyzer import (
    NEUTRAL_SCORE,
    Contributor,
    HistoryPoint,
    TensionAnalyzer,
    TensionResult,
    Trend,
    normalize_metric,
)
from tension_engine.analysis.config import (
    DEFAULT_CEILINGS,
    DEFAULT_THRESHOLDS,
    DEFAULT_WEIGHTS,
    FIXED_CURVE_METRICS,
    AnalyzerConfig,
)
from tension_engine.analysis.loader import load_analyzer_config, load_metric_bag
from tension_engine.analysis.metrics import CORE_METRICS, METRIC_NAMES, MetricBag

__all__ = [
    "CORE_METRICS",
    "DEFAULT_CEILINGS",
    "DEFAULT_THRESHOLDS",
    "DEFAULT_WEIGHTS",
    "FIXED_CURVE_METRICS",
    "METRIC_NAMES",
    "NEUTRAL_SCORE",
    "AnalyzerConfig",
    "Contributor",
    "HistoryPoint",
    "MetricBag",
    "Recommendation",
    "Severity",
    "TensionAnalyzer",
    "TensionResult",
    "Trend",
    "get_description",
    "get_recommendations",
    "load_analyzer_config",
    "load_metric_bag",
    "normalize_metric",
]
