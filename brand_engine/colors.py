"""
Color codec.

Normalizes arbitrary CSS color strings to canonical "#RRGGBB" and derives
darker shades. Nothing in here raises: unsupported input maps to a fixed
sentinel instead.

Two sentinels are part of the contract and must stay distinct:
- DEFAULT_COLOR   returned by normalize() for anything it cannot parse
- DARKEN_FALLBACK returned by darken() when handed a non-canonical color
"""

import colorsys
import re

DEFAULT_COLOR = "#0066FF"
DARKEN_FALLBACK = "#003D99"

# Common design-system names. Values keep their table casing.
NAMED_COLORS = {
    "white": "#FFFFFF", "black": "#000000", "red": "#FF0000", "green": "#008000",
    "blue": "#0000FF", "yellow": "#FFFF00", "cyan": "#00FFFF", "magenta": "#FF00FF",
    "orange": "#FFA500", "purple": "#800080", "pink": "#FFC0CB", "gray": "#808080",
    "grey": "#808080", "navy": "#000080", "teal": "#008080", "maroon": "#800000",
    "lime": "#00FF00", "aqua": "#00FFFF", "silver": "#C0C0C0", "olive": "#808000",
    "coral": "#FF7F50", "salmon": "#FA8072", "tomato": "#FF6347", "gold": "#FFD700",
    "indigo": "#4B0082", "violet": "#EE82EE", "rebeccapurple": "#663399",
    "crimson": "#DC143C", "darkblue": "#00008B", "darkgreen": "#006400",
    "steelblue": "#4682B4", "slategray": "#708090", "dodgerblue": "#1E90FF",
    "royalblue": "#4169E1", "midnightblue": "#191970",
}

_NUM = r"(\d+(?:\.\d+)?|\.\d+)"
_SEP = r"\s*[,\s]\s*"
_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")
_CANONICAL_RE = re.compile(r"^#[0-9a-fA-F]{6}")
_RGB_RE = re.compile(r"^rgba?\(\s*" + _NUM + _SEP + _NUM + _SEP + _NUM, re.IGNORECASE)
_HSL_RE = re.compile(
    r"^hsla?\(\s*(-?\d+(?:\.\d+)?)(?:deg)?" + _SEP + _NUM + r"%" + _SEP + _NUM + r"%",
    re.IGNORECASE,
)


def _round(value: float) -> int:
    # half-up, so 127.5 -> 128 the way browsers round channels
    return int(value + 0.5)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def rgb_to_hex(rgb) -> str:
    return "#%02x%02x%02x" % tuple(int(_clamp(c, 0, 255)) for c in rgb)


def hex_to_rgb(color: str):
    """Return (r, g, b) for a canonical color, or None if it isn't one."""
    if not isinstance(color, str) or not _CANONICAL_RE.match(color):
        return None
    return int(color[1:3], 16), int(color[3:5], 16), int(color[5:7], 16)


def is_canonical(color) -> bool:
    return isinstance(color, str) and len(color) == 7 and hex_to_rgb(color) is not None


def _normalize_hex(value: str) -> str:
    digits = value[1:]
    if not _HEX_RE.match(digits):
        return DEFAULT_COLOR
    if len(digits) in (3, 4):
        r, g, b = digits[:3]
        return f"#{r}{r}{g}{g}{b}{b}"
    if len(digits) in (6, 8):
        return "#" + digits[:6]
    return DEFAULT_COLOR


def _hsl_to_hex(h: float, s: float, l: float) -> str:
    r, g, b = colorsys.hls_to_rgb(h, l, s)
    return rgb_to_hex(_round(c * 255) for c in (r, g, b))


def normalize(value) -> str:
    """
    Convert any supported CSS color string to canonical "#RRGGBB".

    Handles #hex (3/4/6/8 digits), rgb()/rgba(), hsl()/hsla() and a table of
    named colors. Modern functions (oklch(), lab(), color(), ...) and garbage
    return DEFAULT_COLOR.
    """
    if not value or not isinstance(value, str):
        return DEFAULT_COLOR

    trimmed = value.strip()
    if trimmed.startswith("#"):
        return _normalize_hex(trimmed)

    m = _RGB_RE.match(trimmed)
    if m:
        return rgb_to_hex(_round(_clamp(float(c), 0, 255)) for c in m.groups())

    m = _HSL_RE.match(trimmed)
    if m:
        h = (float(m.group(1)) % 360) / 360
        s = _clamp(float(m.group(2)) / 100, 0, 1)
        l = _clamp(float(m.group(3)) / 100, 0, 1)
        return _hsl_to_hex(h, s, l)

    return NAMED_COLORS.get(trimmed.lower(), DEFAULT_COLOR)


def darken(color: str, factor: float) -> str:
    """Scale each channel by factor (0 = black, 1 = unchanged)."""
    rgb = hex_to_rgb(color)
    if rgb is None:
        return DARKEN_FALLBACK
    factor = _clamp(factor, 0.0, 1.0)
    return rgb_to_hex(_round(c * factor) for c in rgb)


def blend(color: str, other: str, amount: float) -> str:
    """Move color towards other by amount (0..1)."""
    a = hex_to_rgb(normalize(color))
    b = hex_to_rgb(normalize(other))
    amount = _clamp(amount, 0.0, 1.0)
    return rgb_to_hex(_round(x + (y - x) * amount) for x, y in zip(a, b))
