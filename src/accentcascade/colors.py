"""Color math for accent colors.

All colors are hex strings. Stored colors are canonical ``#RRGGBB`` uppercase;
applied colors may carry a two digit alpha suffix (``#RRGGBBAA``).

Every float that becomes a channel or alpha byte is rounded half up
(``floor(x + 0.5)``), so results match the editor-side rendering exactly.
"""

from __future__ import annotations

import math
import re

HEX6_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")
HEX3_RE = re.compile(r"^#?([0-9a-fA-F]{3})$")
CSS_RGB_RE = re.compile(r"rgba?\(([^)]+)\)", re.IGNORECASE)

BLACK = "#000000"
WHITE = "#FFFFFF"
FALLBACK_BASE = "#181818"

# Luma cutoff for picking a black foreground (inclusive)
CONTRAST_THRESHOLD = 140


def _round(value: float) -> int:
    return math.floor(value + 0.5)


def _clamp_channel(value: float) -> int:
    return max(0, min(255, _round(value)))


def normalize_color(value: object) -> str | None:
    """Return ``#RRGGBB`` for ``#RGB``/``#RRGGBB`` input (``#`` optional), else None."""
    if not isinstance(value, str):
        return None
    trimmed = value.strip()
    if not trimmed:
        return None
    match = HEX6_RE.match(trimmed)
    if match:
        return "#" + match.group(1).upper()
    match = HEX3_RE.match(trimmed)
    if match:
        return "#" + "".join(digit * 2 for digit in match.group(1)).upper()
    return None


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    """Split a canonical color into integer channels."""
    digits = color.lstrip("#")
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def rgb_to_hex(r: float, g: float, b: float) -> str:
    return f"#{_clamp_channel(r):02X}{_clamp_channel(g):02X}{_clamp_channel(b):02X}"


def apply_alpha(color: str, alpha: float) -> str:
    """Append an alpha byte to a ``#RRGGBB`` color."""
    alpha = max(0.0, min(1.0, alpha))
    return f"{color}{_round(alpha * 255):02X}"


def luma(color: str) -> float:
    r, g, b = hex_to_rgb(color)
    return (299 * r + 587 * g + 114 * b) / 1000


def contrast_foreground(color: str) -> str:
    """Black text for light backgrounds (luma >= 140), white otherwise."""
    return BLACK if luma(color) >= CONTRAST_THRESHOLD else WHITE


def darken(color: str, factor: float) -> str:
    """Scale every channel by ``factor``.

    This is a plain multiply, not a lightness-preserving darken:
    ``darken("#336699", 0.65) == "#214263"``.
    """
    factor = max(0.0, min(1.0, factor))
    r, g, b = hex_to_rgb(color)
    return rgb_to_hex(r * factor, g * factor, b * factor)


def to_hsl(color: str) -> tuple[float, float, float]:
    """Convert to (hue in [0, 360), saturation in [0, 1], lightness in [0, 1])."""
    r, g, b = (channel / 255 for channel in hex_to_rgb(color))
    high = max(r, g, b)
    low = min(r, g, b)
    lightness = (high + low) / 2
    if high == low:
        return 0.0, 0.0, lightness
    delta = high - low
    if lightness > 0.5:
        saturation = delta / (2 - high - low)
    else:
        saturation = delta / (high + low)
    if high == r:
        hue = ((g - b) / delta) % 6
    elif high == g:
        hue = (b - r) / delta + 2
    else:
        hue = (r - g) / delta + 4
    return (hue * 60) % 360, saturation, lightness


def from_hsl(hue: float, saturation: float, lightness: float) -> str:
    """Convert HSL back to ``#RRGGBB`` using the six hue sectors."""
    saturation = max(0.0, min(1.0, saturation))
    lightness = max(0.0, min(1.0, lightness))
    chroma = (1 - abs(2 * lightness - 1)) * saturation
    sector = (hue % 360) / 60
    x = chroma * (1 - abs(sector % 2 - 1))
    if sector < 1:
        r, g, b = chroma, x, 0.0
    elif sector < 2:
        r, g, b = x, chroma, 0.0
    elif sector < 3:
        r, g, b = 0.0, chroma, x
    elif sector < 4:
        r, g, b = 0.0, x, chroma
    elif sector < 5:
        r, g, b = x, 0.0, chroma
    else:
        r, g, b = chroma, 0.0, x
    m = lightness - chroma / 2
    return rgb_to_hex((r + m) * 255, (g + m) * 255, (b + m) * 255)


def vivid_boost(color: str, factor: float) -> str:
    """Lift lightness and saturation toward 1 by ``factor * (1 - value)``."""
    factor = max(0.0, min(0.5, factor))
    hue, saturation, lightness = to_hsl(color)
    saturation += factor * (1 - saturation)
    lightness += factor * (1 - lightness)
    return from_hsl(hue, saturation, lightness)


def invert_color(color: str) -> str:
    r, g, b = hex_to_rgb(color)
    return rgb_to_hex(255 - r, 255 - g, 255 - b)


def parse_css_color(value: object) -> str | None:
    """Parse hex or ``rgb()``/``rgba()`` text into ``#RRGGBB``; alpha is ignored."""
    if not isinstance(value, str):
        return None
    trimmed = value.strip()
    if not trimmed:
        return None
    normalized = normalize_color(trimmed)
    if normalized:
        return normalized
    match = CSS_RGB_RE.search(trimmed)
    if not match:
        return None
    try:
        parts = [float(part.strip()) for part in match.group(1).split(",")]
    except ValueError:
        return None
    if len(parts) < 3 or not all(math.isfinite(part) for part in parts[:3]):
        return None
    return rgb_to_hex(parts[0], parts[1], parts[2])


def default_base_color(theme_background: object = None) -> str:
    """Base color shown when none is set: the theme background, else #181818."""
    return parse_css_color(theme_background) or FALLBACK_BASE
