"""Color bundle: every visual derived from one ``(score, trend)`` pair.

The trend nudges the hue by :data:`TREND_HUE_SHIFT` degrees (toward green
when improving, toward red when degrading) before any color is computed.
The nudge is applied as a tension offset, so the bundle is a pure
function of the effective tension plus the untouched score and trend.
"""

from __future__ import annotations

from dataclasses import dataclass

from tension_engine.analysis.advice import get_description
from tension_engine.analysis.analyzer import Trend
from tension_engine.color.engine import (
    TENSION_TO_HUE_MULTIPLIER,
    classify,
    color_description,
    color_value,
    hex_gradient_from_tension,
    hsl_gradient_from_tension,
    palette_from_tension,
    scheme_from_tension,
)
from tension_engine.color.models import (
    Classification,
    ColorPalette,
    ColorScheme,
    ColorValue,
    Gradient,
)

TREND_HUE_SHIFT = 10.0

_TREND_DIRECTION = {
    Trend.IMPROVING: -1.0,
    Trend.STABLE: 0.0,
    Trend.DEGRADING: 1.0,
}


@dataclass(frozen=True)
class ColorBundle:
    score: float
    trend: Trend
    effective_tension: float
    value: ColorValue
    palette: ColorPalette
    scheme: ColorScheme
    hsl_gradient: Gradient
    hex_gradient: Gradient
    classification: Classification
    color_description: str
    description: str
    border: str
    shadow: str


def effective_tension(score: float, trend: Trend | str) -> float:
    """Score shifted by the trend's hue nudge, clamped to [0, 100]."""
    offset = _TREND_DIRECTION[Trend(trend)] * TREND_HUE_SHIFT / TENSION_TO_HUE_MULTIPLIER
    return round(max(0.0, min(100.0, score + offset)), 2)


def build_color_bundle(score: float, trend: Trend | str) -> ColorBundle:
    trend = Trend(trend)
    # Validates score before the trend offset can clamp it into range.
    classification = classify(score)
    tension = effective_tension(score, trend)
    palette = palette_from_tension(tension)
    return ColorBundle(
        score=score,
        trend=trend,
        effective_tension=tension,
        value=color_value(tension),
        palette=palette,
        scheme=scheme_from_tension(tension),
        hsl_gradient=hsl_gradient_from_tension(tension),
        hex_gradient=hex_gradient_from_tension(tension),
        classification=classification,
        color_description=color_description(score),
        description=get_description(score, trend),
        border=palette[200],
        shadow=palette[700],
    )
