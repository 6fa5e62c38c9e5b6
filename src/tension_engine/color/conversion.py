"""HSL/RGB/HEX conversion and argument validation.

The HSL-to-RGB path is the usual chroma construction::

    c = (1 - |2l - 1|) * s
    x = c * (1 - |(h / 60) mod 2 - 1|)
    m = l - c / 2

with (r, g, b) picked by the 60-degree hue sector, shifted by ``m`` and
scaled to 0-255. Channels round half up.
"""

from __future__ import annotations

import math
import re
from typing import Any

from tension_engine.color.models import RGB
from tension_engine.errors import ColorValidationError

_HEX_RE = re.compile(r"#[0-9A-Fa-f]{6}")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def validate_number(value: Any, field: str) -> float:
    """Reject bools, non-numbers and NaN. Returns *value* as float."""
    # bool is a subclass of int in Python, reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ColorValidationError(field, value, "must be a valid number")
    if math.isnan(value):
        raise ColorValidationError(field, value, "must be a valid number")
    return float(value)


def validate_percent(value: Any, field: str) -> float:
    """Like :func:`validate_number` but also require ``0 <= value <= 100``."""
    number = validate_number(value, field)
    if not 0 <= number <= 100:
        raise ColorValidationError(field, value, "must be between 0 and 100")
    return number


def validate_hex(value: Any, field: str = "hex") -> str:
    if not isinstance(value, str) or not _HEX_RE.fullmatch(value):
        raise ColorValidationError(field, value, "must match #RRGGBB")
    return value


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> RGB:
    hue = validate_number(hue, "hue")
    if math.isinf(hue):
        raise ColorValidationError("hue", hue, "must be finite")
    s = validate_percent(saturation, "saturation") / 100
    l = validate_percent(lightness, "lightness") / 100  # noqa: E741

    hue %= 360
    c = (1 - abs(2 * l - 1)) * s
    x = c * (1 - abs((hue / 60) % 2 - 1))
    m = l - c / 2

    sectors = (
        (c, x, 0.0),
        (x, c, 0.0),
        (0.0, c, x),
        (0.0, x, c),
        (x, 0.0, c),
        (c, 0.0, x),
    )
    r, g, b = sectors[min(int(hue // 60), 5)]
    return RGB(
        _round_half_up((r + m) * 255),
        _round_half_up((g + m) * 255),
        _round_half_up((b + m) * 255),
    )


def rgb_to_hex(rgb: RGB | tuple[int, int, int]) -> str:
    for name, channel in zip("rgb", rgb):
        if isinstance(channel, bool) or not isinstance(channel, int) or not 0 <= channel <= 255:
            raise ColorValidationError(name, channel, "must be an integer between 0 and 255")
    r, g, b = rgb
    return f"#{r:02X}{g:02X}{b:02X}"


def hsl_to_hex(hue: float, saturation: float, lightness: float) -> str:
    return rgb_to_hex(hsl_to_rgb(hue, saturation, lightness))


def rgb_from_hex(hex_color: str) -> RGB:
    """Parse ``#RRGGBB`` (either case) into an :class:`RGB` triple."""
    validate_hex(hex_color)
    return RGB(
        int(hex_color[1:3], 16),
        int(hex_color[3:5], 16),
        int(hex_color[5:7], 16),
    )


def rgb_to_hsl(rgb: RGB | tuple[int, int, int]) -> tuple[float, float, float]:
    """Inverse of :func:`hsl_to_rgb`: ``(hue degrees, saturation %, lightness %)``."""
    r, g, b = (channel / 255 for channel in rgb)
    hi = max(r, g, b)
    lo = min(r, g, b)
    lightness = (hi + lo) / 2
    delta = hi - lo
    if delta == 0:
        return 0.0, 0.0, lightness * 100

    saturation = delta / (1 - abs(2 * lightness - 1))
    if hi == r:
        hue = 60 * (((g - b) / delta) % 6)
    elif hi == g:
        hue = 60 * ((b - r) / delta + 2)
    else:
        hue = 60 * ((r - g) / delta + 4)
    return hue, saturation * 100, lightness * 100
