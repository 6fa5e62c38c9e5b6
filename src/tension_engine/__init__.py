"""Tension Engine: bounded stress scoring and deterministic color derivation.

Runtime signals go in, a 0-100 tension score with trend and confidence
comes out, and every visual consumers need (HSL/HEX/RGB, palettes,
schemes, gradients) is derived from it as pure data.

Public API::

    from tension_engine import TensionAnalyzer, ContextStore
    from tension_engine.color import hex_from_tension, palette_from_tension
    from tension_engine.analysis import get_recommendations
"""

from tension_engine.analysis import (
    AnalyzerConfig,
    MetricBag,
    TensionAnalyzer,
    TensionResult,
    Trend,
    get_description,
    get_recommendations,
)
from tension_engine.context import ColorBundle, ContextKey, ContextState, ContextStore
from tension_engine.errors import (
    ColorValidationError,
    ConfigurationError,
    ContextClosedError,
    ContextStateError,
    TensionEngineError,
)

__all__ = [
    "AnalyzerConfig",
    "ColorBundle",
    "ColorValidationError",
    "ConfigurationError",
    "ContextClosedError",
    "ContextKey",
    "ContextState",
    "ContextStateError",
    "ContextStore",
    "MetricBag",
    "TensionAnalyzer",
    "TensionEngineError",
    "TensionResult",
    "Trend",
    "get_description",
    "get_recommendations",
]
__version__ = "0.1.0"
