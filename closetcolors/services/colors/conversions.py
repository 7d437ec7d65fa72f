"""
Color space conversions shared by every stage of the engine.

Hues are expressed in degrees [0, 360), saturation and lightness in [0, 1].
Hex strings are always emitted as lowercase ``#rrggbb``.
"""

import colorsys
import math
import re
from typing import NamedTuple, Optional, Tuple

import numpy as np


HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")


class RGB(NamedTuple):
    r: int
    g: int
    b: int


class HSL(NamedTuple):
    h: float  # degrees [0, 360)
    s: float  # [0, 1]
    l: float  # [0, 1]


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _to_channel(unit: float) -> int:
    """Scale a [0, 1] channel to 8 bits, rounding half up."""
    return int(clamp(math.floor(unit * 255 + 0.5), 0, 255))


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Convert 8-bit RGB channels to a ``#rrggbb`` string."""
    return f"#{int(r):02x}{int(g):02x}{int(b):02x}"


def hex_to_rgb(hex_color: str) -> Optional[RGB]:
    """
    Parse a hex color string.

    Accepts ``#rrggbb`` or ``rrggbb`` in any case. Returns None for anything else
    (wrong length, non-hex characters, non-string input) so callers can fall back
    to a neutral default instead of handling an exception.
    """
    if not isinstance(hex_color, str):
        return None
    match = HEX_PATTERN.match(hex_color.strip())
    if match is None:
        return None
    return RGB(*(int(part, 16) for part in match.groups()))


def normalize_hex(hex_color: str) -> Optional[str]:
    """Return the canonical lowercase ``#rrggbb`` form, or None when malformed."""
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return None
    return rgb_to_hex(*rgb)


def rgb_to_hsl(r: int, g: int, b: int) -> HSL:
    """
    Convert 8-bit RGB to HSL.

    The achromatic case (max == min) yields hue 0 and saturation 0.
    """
    h, l, s = colorsys.rgb_to_hls(r / 255.0, g / 255.0, b / 255.0)
    return HSL(h * 360.0, s, l)


def rgb_to_hsl_array(rgb: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Vectorized ``rgb_to_hsl`` over an (..., 3) uint8 array.

    Returns:
        Tuple of (hue_degrees, saturation, lightness) float arrays
    """
    unit = rgb[..., :3].astype(np.float64) / 255.0
    rn, gn, bn = unit[..., 0], unit[..., 1], unit[..., 2]
    max_c = unit.max(axis=-1)
    min_c = unit.min(axis=-1)
    delta = max_c - min_c
    lightness = (max_c + min_c) / 2.0

    chromatic = delta > 0
    safe_delta = np.where(chromatic, delta, 1.0)
    denom = np.where(lightness > 0.5, 2.0 - max_c - min_c, max_c + min_c)
    saturation = np.where(chromatic, delta / np.where(chromatic, denom, 1.0), 0.0)

    hue = np.select(
        [max_c == rn, max_c == gn],
        [(gn - bn) / safe_delta + np.where(gn < bn, 6.0, 0.0),
         (bn - rn) / safe_delta + 2.0],
        default=(rn - gn) / safe_delta + 4.0,
    )
    hue = np.where(chromatic, hue / 6.0 * 360.0, 0.0)
    return hue, saturation, lightness


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    """Convert HSL (hue in degrees) to 8-bit RGB."""
    r, g, b = colorsys.hls_to_rgb((h % 360.0) / 360.0, l, s)
    return RGB(_to_channel(r), _to_channel(g), _to_channel(b))


def hsl_to_hex(h: float, s: float, l: float) -> str:
    return rgb_to_hex(*hsl_to_rgb(h, s, l))


def hex_to_hsl(hex_color: str) -> Optional[HSL]:
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return None
    return rgb_to_hsl(*rgb)


def color_distance(c1, c2) -> float:
    """Euclidean distance between two RGB triples."""
    dr = int(c1[0]) - int(c2[0])
    dg = int(c1[1]) - int(c2[1])
    db = int(c1[2]) - int(c2[2])
    return math.sqrt(dr * dr + dg * dg + db * db)


def wrap_hue(degrees: float) -> float:
    """Wrap a hue rotation into [0, 360)."""
    return degrees % 360.0


def hue_difference(h1, h2):
    """
    Smallest angular separation between two hues, in degrees [0, 180].

    Works element-wise on numpy arrays as well as on plain floats.
    """
    diff = np.abs(h1 - h2) % 360.0
    return np.minimum(diff, 360.0 - diff)
