"""Colour values, colour-string parsing and linear gradients."""

from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = ["Color", "parse_color", "create_gradient"]


@dataclass(frozen=True)
class Color:
    """An RGBA colour with channels in the range 0.0 to 1.0."""

    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0
    alpha: float = 1.0

    def to_hex(self) -> str:
        """Return the colour as ``#rrggbb``, ignoring alpha."""
        return "#{:02x}{:02x}{:02x}".format(
            _to_byte(self.red), _to_byte(self.green), _to_byte(self.blue)
        )


BLACK = Color(0.0, 0.0, 0.0, 1.0)

_NAMED_COLORS: dict[str, tuple[int, int, int]] = {
    "black": (0, 0, 0),
    "white": (255, 255, 255),
    "red": (255, 0, 0),
    "green": (0, 255, 0),
    "blue": (0, 0, 255),
    "yellow": (255, 255, 0),
    "cyan": (0, 255, 255),
    "magenta": (255, 0, 255),
    "gray": (190, 190, 190),
    "grey": (190, 190, 190),
    "darkgray": (169, 169, 169),
    "darkgrey": (169, 169, 169),
    "lightgray": (211, 211, 211),
    "lightgrey": (211, 211, 211),
    "orange": (255, 165, 0),
    "purple": (160, 32, 240),
    "brown": (165, 42, 42),
    "pink": (255, 192, 203),
    "navy": (0, 0, 128),
    "maroon": (176, 48, 96),
    "gold": (255, 215, 0),
    "silver": (192, 192, 192),
    "teal": (0, 128, 128),
    "olive": (128, 128, 0),
    "violet": (238, 130, 238),
}

_FUNC_RE = re.compile(r"^(rgba?)\s*\((.*)\)$", re.IGNORECASE)


def _to_byte(channel: float) -> int:
    return int(0.5 + channel * 255)


def _clamp(value: float) -> float:
    return min(1.0, max(0.0, value))


def _parse_hex(digits: str) -> Color | None:
    if len(digits) not in (3, 6, 9, 12) or not all(
        c in "0123456789abcdefABCDEF" for c in digits
    ):
        return None
    width = len(digits) // 3
    scale = 16**width - 1
    red, green, blue = (
        int(digits[i * width:(i + 1) * width], 16) / scale for i in range(3)
    )
    return Color(red, green, blue, 1.0)


def _parse_channel(text: str) -> float | None:
    text = text.strip()
    try:
        if text.endswith("%"):
            return _clamp(float(text[:-1]) / 100.0)
        return _clamp(float(text) / 255.0)
    except ValueError:
        return None


def _parse_function(kind: str, body: str) -> Color | None:
    parts = body.split(",")
    expected = 4 if kind == "rgba" else 3
    if len(parts) != expected:
        return None
    channels = [_parse_channel(p) for p in parts[:3]]
    if any(c is None for c in channels):
        return None
    alpha = 1.0
    if expected == 4:
        try:
            alpha = _clamp(float(parts[3].strip()))
        except ValueError:
            return None
    red, green, blue = channels
    return Color(red, green, blue, alpha)


def parse_color(text: str | None) -> Color:
    """Parse a colour string, falling back to opaque black.

    Accepts ``#rgb``, ``#rrggbb``, ``#rrrgggbbb``, ``#rrrrggggbbbb``,
    ``rgb(r,g,b)``, ``rgba(r,g,b,a)`` and a set of colour names.
    """
    if text is None:
        return BLACK
    text = text.strip()
    if text.startswith("#"):
        return _parse_hex(text[1:]) or BLACK
    match = _FUNC_RE.match(text)
    if match:
        return _parse_function(match.group(1).lower(), match.group(2)) or BLACK
    named = _NAMED_COLORS.get(text.lower().replace(" ", ""))
    if named is None:
        return BLACK
    return Color(*(c / 255 for c in named), 1.0)


def create_gradient(primary: Color, secondary: Color, n_pixels: int) -> bytes:
    """Return ``n_pixels`` RGB triplets blending ``primary`` into ``secondary``."""
    out = bytearray()
    for i in range(n_pixels):
        ratio = (i + 0.5) / n_pixels
        for first, second in (
            (primary.red, secondary.red),
            (primary.green, secondary.green),
            (primary.blue, secondary.blue),
        ):
            out.append(int(0.5 + (first * (1 - ratio) + second * ratio) * 255) & 0xFF)
    return bytes(out)