"""Plain value types produced by the color engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, NamedTuple

Classification = Literal[
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
]

# Lightest to darkest.
PALETTE_SHADES: tuple[int, ...] = (50, 100, 200, 300, 400, 500, 600, 700, 800, 900)

ColorPalette = dict[int, str]


class RGB(NamedTuple):
    r: int
    g: int
    b: int


@dataclass(frozen=True)
class ColorValue:
    hsl: str
    hex: str
    rgb: RGB


@dataclass(frozen=True)
class ColorScheme:
    """Semantic roles derived from one base hue."""

    primary: str
    secondary: str
    accent: str
    background: str
    text: str

    def as_dict(self) -> dict[str, str]:
        return {
            "primary": self.primary,
            "secondary": self.secondary,
            "accent": self.accent,
            "background": self.background,
            "text": self.text,
        }


@dataclass(frozen=True)
class Gradient:
    """Two-stop linear gradient. ``start``/``end`` are CSS color strings."""

    angle: float
    start: str
    end: str

    @property
    def css(self) -> str:
        return f"linear-gradient({format_number(self.angle)}deg, {self.start}, {self.end})"


def format_number(value: float) -> str:
    """Render *value* with at most two decimals and no trailing zeros."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")
