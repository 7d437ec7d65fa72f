"""
Readability normalization for UI swatches and accent text.

A clamp, not a search: saturation is raised to a floor (never lowered) and the
lightness is set to the requested target held inside a legible band.
"""

from loguru import logger

from .conversions import clamp, hex_to_rgb, hsl_to_hex, rgb_to_hsl


DEFAULT_TARGET_LIGHTNESS = 0.55
DEFAULT_MIN_SATURATION = 0.5
# Legible lightness band
READABLE_LIGHTNESS_RANGE = (0.35, 0.75)


def ensure_readable(hex_color: str,
                    target_lightness: float = DEFAULT_TARGET_LIGHTNESS,
                    min_saturation: float = DEFAULT_MIN_SATURATION) -> str:
    """
    Adjust ``hex_color`` so it reads well against UI backgrounds.

    Args:
        hex_color: Input color
        target_lightness: Desired lightness, clamped to [0.35, 0.75]
        min_saturation: Saturation floor

    Returns:
        Adjusted ``#rrggbb``; malformed input is returned unchanged
    """
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        logger.debug(f"ensure_readable: leaving malformed color {hex_color!r} unchanged")
        return hex_color
    hsl = rgb_to_hsl(*rgb)
    saturation = min(1.0, max(min_saturation, hsl.s))
    lightness = clamp(target_lightness, *READABLE_LIGHTNESS_RANGE)
    return hsl_to_hex(hsl.h, saturation, lightness)
