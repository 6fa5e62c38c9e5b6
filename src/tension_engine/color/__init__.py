"""Color math: deterministic tension-to-color derivation."""

from tension_engine.color.conversion import (
    hsl_to_hex,
    hsl_to_rgb,
    rgb_from_hex,
    rgb_to_hex,
    rgb_to_hsl,
)
from tension_engine.color.engine import (
    CLASSIFICATIONS,
    classify,
    color_description,
    color_value,
    hex_from_tension,
    hex_gradient_from_tension,
    hsl_from_tension,
    hsl_gradient_from_tension,
    palette_from_tension,
    scheme_from_tension,
    tension_to_hue,
)
from tension_engine.color.models import (
    PALETTE_SHADES,
    RGB,
    Classification,
    ColorPalette,
    ColorScheme,
    ColorValue,
    Gradient,
)

__all__ = [
    "CLASSIFICATIONS",
    "PALETTE_SHADES",
    "RGB",
    "Classification",
    "ColorPalette",
    "ColorScheme",
    "ColorValue",
    "Gradient",
    "classify",
    "color_description",
    "color_value",
    "hex_from_tension",
    "hex_gradient_from_tension",
    "hsl_from_tension",
    "hsl_gradient_from_tension",
    "hsl_to_hex",
    "hsl_to_rgb",
    "palette_from_tension",
    "rgb_from_hex",
    "rgb_to_hex",
    "rgb_to_hsl",
    "scheme_from_tension",
    "tension_to_hue",
]
