"""RGB colours packed as 0xRRGGBB and a darkening helper."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Color:
    """An RGB colour with its packed integer form."""

    r: int
    g: int
    b: int
    hex: int


def rgb_to_color(r: int, g: int, b: int) -> Color:
    """Build a colour from its channels; each channel keeps its low byte."""
    r, g, b = int(r), int(g), int(b)
    packed = ((r << 16) | (g << 8) | b) & 0xFFFFFFFF
    return Color(r & 0xFF, g & 0xFF, b & 0xFF, packed)


def hex_to_color(value: int) -> Color:
    """Split a packed 0xRRGGBB value into a colour."""
    value = int(value) & 0xFFFFFFFF
    return Color((value & 0xFF0000) >> 16, (value & 0xFF00) >> 8, value & 0xFF, value)


def blackout(color: Color, ratio: float) -> Color:
    """Darken a colour by ``ratio`` (0 keeps it, 1 or more makes it black)."""
    intensity = min(max(1.0 - ratio, 0.0), 1.0)
    return rgb_to_color(
        int(color.r * intensity),
        int(color.g * intensity),
        int(color.b * intensity),
    )