"""Tension-to-color derivation.

Tension 0 maps to hue 120 (green), tension 100 to hue 0 (red), linearly.
The hue is quantized to two decimals before it is used anywhere, so the
HSL string a function reports and the HEX it converts to always describe
the same color. Every function validates its arguments first and either
returns a complete result or raises :class:`ColorValidationError`.
"""

from __future__ import annotations

import math
from bisect import bisect_left

from tension_engine.color.conversion import (
    hsl_to_hex,
    rgb_from_hex,
    validate_number,
    validate_percent,
)
from tension_engine.color.models import (
    PALETTE_SHADES,
    Classification,
    ColorPalette,
    ColorScheme,
    ColorValue,
    Gradient,
    format_number,
)
from tension_engine.errors import ColorValidationError

MAX_HUE_GREEN = 120.0
MIN_HUE_RED = 0.0
TENSION_TO_HUE_MULTIPLIER = 1.2
DEFAULT_SATURATION = 70.0
DEFAULT_LIGHTNESS = 50.0
DEFAULT_GRADIENT_ANGLE = 135.0

SEVERITY_SPLIT = 50.0
# (background, text) below and above the severity split
CALM_SURFACE = ("#F0FDF4", "#14532D")
ALERT_SURFACE = ("#7F1D1D", "#FEF2F2")

CLASSIFICATIONS: tuple[Classification, ...] = (
    "excellent",
    "very-good",
    "good",
    "fair",
    "moderate",
    "concerning",
    "poor",
    "bad",
    "critical",
    "failure",
)
# Inclusive upper bound of every band but the last.
_BAND_UPPER_BOUNDS = (10, 20, 30, 40, 50, 60, 70, 80, 90)

_COLOR_FAMILIES: dict[Classification, str] = {
    "excellent": "Excellent (Emerald Green)",
    "very-good": "Very Good (Light Green)",
    "good": "Good (Green)",
    "fair": "Fair (Yellow-Green)",
    "moderate": "Moderate (Yellow)",
    "concerning": "Concerning (Orange)",
    "poor": "Poor (Red-Orange)",
    "bad": "Bad (Red)",
    "critical": "Critical (Deep Red)",
    "failure": "Failure (Dark Red)",
}


def _hsl_string(hue: float, saturation: float, lightness: float) -> str:
    return (
        f"hsl({format_number(hue)}, {format_number(saturation)}%, "
        f"{format_number(lightness)}%)"
    )


def _validate_angle(angle: float) -> float:
    angle = validate_number(angle, "angle")
    if math.isinf(angle):
        raise ColorValidationError("angle", angle, "must be finite")
    return angle


def _shift_hue(hue: float, degrees: float) -> float:
    return round((hue + degrees) % 360, 2)


def tension_to_hue(tension: float) -> float:
    tension = validate_percent(tension, "tension")
    return max(MIN_HUE_RED, round(MAX_HUE_GREEN - tension * TENSION_TO_HUE_MULTIPLIER, 2))


def hsl_from_tension(
    tension: float,
    saturation: float = DEFAULT_SATURATION,
    lightness: float = DEFAULT_LIGHTNESS,
) -> str:
    """Return ``"hsl(<hue>, <s>%, <l>%)"`` for *tension*."""
    hue = tension_to_hue(tension)
    saturation = validate_percent(saturation, "saturation")
    lightness = validate_percent(lightness, "lightness")
    return _hsl_string(hue, saturation, lightness)


def hex_from_tension(tension: float) -> str:
    """Return ``#RRGGBB`` for *tension* at the default saturation/lightness."""
    return hsl_to_hex(tension_to_hue(tension), DEFAULT_SATURATION, DEFAULT_LIGHTNESS)


def color_value(
    tension: float,
    saturation: float = DEFAULT_SATURATION,
    lightness: float = DEFAULT_LIGHTNESS,
) -> ColorValue:
    """HSL, HEX and RGB for the same (hue, saturation, lightness)."""
    hue = tension_to_hue(tension)
    saturation = validate_percent(saturation, "saturation")
    lightness = validate_percent(lightness, "lightness")
    hex_color = hsl_to_hex(hue, saturation, lightness)
    return ColorValue(
        hsl=_hsl_string(hue, saturation, lightness),
        hex=hex_color,
        rgb=rgb_from_hex(hex_color),
    )


def palette_from_tension(tension: float) -> ColorPalette:
    """Ten shades of the tension hue, keyed 50..900, lightest first.

    Lightness steps down 8 points per shade from 95. The lightest shade is
    washed out (saturation 30), the darkest three are punchier (80).
    """
    hue = tension_to_hue(tension)
    palette: ColorPalette = {}
    for index, shade in enumerate(PALETTE_SHADES):
        lightness = 95 - index * 8
        if shade == 50:
            saturation = 30
        elif shade >= 700:
            saturation = 80
        else:
            saturation = 70
        palette[shade] = hsl_to_hex(hue, saturation, lightness)
    return palette


def scheme_from_tension(tension: float) -> ColorScheme:
    """Primary, complementary (+180) secondary and triadic (+120) accent.

    Background and text switch to an alert surface once tension passes
    :data:`SEVERITY_SPLIT`.
    """
    hue = tension_to_hue(tension)
    background, text = ALERT_SURFACE if tension > SEVERITY_SPLIT else CALM_SURFACE
    return ColorScheme(
        primary=hsl_to_hex(hue, 70, 50),
        secondary=hsl_to_hex(_shift_hue(hue, 180), 60, 45),
        accent=hsl_to_hex(_shift_hue(hue, 120), 80, 55),
        background=background,
        text=text,
    )


def hsl_gradient_from_tension(
    tension: float,
    angle: float = DEFAULT_GRADIENT_ANGLE,
    start_saturation: float = 80,
    end_saturation: float = 80,
    start_lightness: float = 60,
    end_lightness: float = 40,
) -> Gradient:
    start_hue = tension_to_hue(tension)
    angle = _validate_angle(angle)
    start_saturation = validate_percent(start_saturation, "start_saturation")
    end_saturation = validate_percent(end_saturation, "end_saturation")
    start_lightness = validate_percent(start_lightness, "start_lightness")
    end_lightness = validate_percent(end_lightness, "end_lightness")

    end_hue = max(MIN_HUE_RED, round(start_hue - 30, 2))
    return Gradient(
        angle=angle,
        start=_hsl_string(start_hue, start_saturation, start_lightness),
        end=_hsl_string(end_hue, end_saturation, end_lightness),
    )


def hex_gradient_from_tension(
    tension: float, angle: float = DEFAULT_GRADIENT_ANGLE
) -> Gradient:
    tension = validate_percent(tension, "tension")
    angle = _validate_angle(angle)
    return Gradient(
        angle=angle,
        start=hex_from_tension(tension),
        end=hex_from_tension(min(100.0, tension + 20)),
    )


def classify(tension: float) -> Classification:
    """One of ten equal-width bands, ``excellent`` (<= 10) to ``failure`` (> 90)."""
    tension = validate_percent(tension, "tension")
    return CLASSIFICATIONS[bisect_left(_BAND_UPPER_BOUNDS, tension)]


def color_description(tension: float) -> str:
    return _COLOR_FAMILIES[classify(tension)]
