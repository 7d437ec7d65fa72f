"""
Named color lookup.

Maps arbitrary hex colors to the closest entry of a fixed fashion color table by
RGB Euclidean distance. The table is read-only reference data.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from loguru import logger

from .conversions import color_distance, hex_to_rgb, normalize_hex


UNKNOWN_COLOR_NAME = "Unknown"


@dataclass(frozen=True)
class NamedColor:
    name: str
    hex: str


NAMED_COLORS: Tuple[NamedColor, ...] = (
    NamedColor("Black", "#000000"),
    NamedColor("White", "#ffffff"),
    NamedColor("Ivory", "#fffff0"),
    NamedColor("Cream", "#fffdd0"),
    NamedColor("Beige", "#f5f5dc"),
    NamedColor("Khaki", "#c3b091"),
    NamedColor("Tan", "#d2b48c"),
    NamedColor("Camel", "#c19a6b"),
    NamedColor("Brown", "#8b4513"),
    NamedColor("Chocolate", "#7b3f00"),
    NamedColor("Rust", "#b7410e"),
    NamedColor("Silver", "#c0c0c0"),
    NamedColor("Light Gray", "#d3d3d3"),
    NamedColor("Gray", "#808080"),
    NamedColor("Charcoal", "#36454f"),
    NamedColor("Navy", "#000080"),
    NamedColor("Denim", "#1560bd"),
    NamedColor("Royal Blue", "#4169e1"),
    NamedColor("Sky Blue", "#87ceeb"),
    NamedColor("Teal", "#008080"),
    NamedColor("Turquoise", "#40e0d0"),
    NamedColor("Mint", "#98ff98"),
    NamedColor("Sage", "#9caf88"),
    NamedColor("Olive", "#808000"),
    NamedColor("Forest Green", "#228b22"),
    NamedColor("Emerald", "#50c878"),
    NamedColor("Yellow", "#ffff00"),
    NamedColor("Mustard", "#ffdb58"),
    NamedColor("Gold", "#ffd700"),
    NamedColor("Orange", "#ffa500"),
    NamedColor("Peach", "#ffe5b4"),
    NamedColor("Coral", "#ff7f50"),
    NamedColor("Red", "#ff0000"),
    NamedColor("Crimson", "#dc143c"),
    NamedColor("Maroon", "#800000"),
    NamedColor("Burgundy", "#800020"),
    NamedColor("Pink", "#ffc0cb"),
    NamedColor("Blush", "#de5d83"),
    NamedColor("Hot Pink", "#ff69b4"),
    NamedColor("Magenta", "#ff00ff"),
    NamedColor("Lavender", "#e6e6fa"),
    NamedColor("Lilac", "#c8a2c8"),
    NamedColor("Plum", "#8e4585"),
    NamedColor("Purple", "#800080"),
)


def nearest_named_color(hex_color: str) -> Optional[Tuple[NamedColor, float]]:
    """
    Closest table entry to ``hex_color`` and its RGB distance.

    Returns None when ``hex_color`` cannot be parsed. Ties keep the earlier
    table entry.
    """
    target = hex_to_rgb(hex_color)
    if target is None:
        return None

    best, best_distance = None, float("inf")
    for entry in NAMED_COLORS:
        distance = color_distance(target, hex_to_rgb(entry.hex))
        if distance < best_distance:
            best, best_distance = entry, distance
    return best, best_distance


def nearest_name(hex_color: str) -> str:
    """Name of the closest table color, or "Unknown" for unparseable input."""
    match = nearest_named_color(hex_color)
    if match is None:
        logger.debug(f"Cannot name malformed color {hex_color!r}")
        return UNKNOWN_COLOR_NAME
    return match[0].name


def hex_for_name(name: str) -> Optional[str]:
    """Case-insensitive reverse lookup of a table name."""
    if not isinstance(name, str):
        return None
    token = name.strip().lower()
    for entry in NAMED_COLORS:
        if entry.name.lower() == token:
            return normalize_hex(entry.hex)
    return None
