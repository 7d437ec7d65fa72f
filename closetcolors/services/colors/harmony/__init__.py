"""
Color Harmony Engine

Derives color-wheel harmony sets from a single base color. Every derived hue is
``(h + offset) mod 360`` and keeps the base saturation and lightness, except for
the monochrome ramp (lightness steps, clamped saturation) and the fixed neutrals.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from loguru import logger

from closetcolors.schemas import BasicMatches, RichPalette
from ..conversions import HSL, clamp, hex_to_rgb, hsl_to_hex, rgb_to_hex, rgb_to_hsl, wrap_hue
from .neutrals import neutral_hexes


# Hue offsets in degrees, in output order
COMPLEMENTARY_OFFSET = 180
SPLIT_COMPLEMENTARY_OFFSETS = (150, 210)
ANALOGOUS_OFFSETS = (-30, -15, 15, 30)
BASIC_ANALOGOUS_OFFSETS = (-30, 30)
TRIADIC_OFFSETS = (120, -120)
TETRADIC_OFFSETS = (90, 180, 270)

# Monochrome ramp: lightness steps around the base, clamped
MONOCHROME_STEPS = (-0.3, -0.18, -0.08, 0.08, 0.18, 0.3)
MONOCHROME_LIGHTNESS_RANGE = (0.05, 0.95)
# Saturation band for monochrome tints
MONOCHROME_SATURATION_RANGE = (0.28, 0.9)

# Unparseable base colors fall back to black
FALLBACK_BASE_HEX = "#000000"


@dataclass
class HarmonyCandidate:
    """A derived color in HSL."""
    h: float  # Hue in degrees [0, 360)
    s: float  # Saturation [0, 1]
    l: float  # Lightness [0, 1]

    @property
    def hex(self) -> str:
        return hsl_to_hex(self.h, self.s, self.l)


def rotate_hue(h: float, degrees: float) -> float:
    """Rotate hue (degrees) with wraparound into [0, 360)."""
    return wrap_hue(h + degrees)


def resolve_base(base_hex: str) -> Tuple[str, HSL]:
    """
    Canonical base hex and its HSL.

    Malformed input is treated as an unknown color and resolved to black.
    """
    rgb = hex_to_rgb(base_hex)
    if rgb is None:
        logger.warning(f"Unparseable base color {base_hex!r}; falling back to {FALLBACK_BASE_HEX}")
        rgb = hex_to_rgb(FALLBACK_BASE_HEX)
    return rgb_to_hex(*rgb), rgb_to_hsl(*rgb)


def generate_rotations(base: HSL, offsets) -> List[HarmonyCandidate]:
    """Hue rotations of ``base`` keeping its saturation and lightness."""
    return [HarmonyCandidate(h=rotate_hue(base.h, offset), s=base.s, l=base.l) for offset in offsets]


def generate_monochrome_candidates(base: HSL) -> List[HarmonyCandidate]:
    """Three shades and three tints of the base hue."""
    sat = clamp(base.s, *MONOCHROME_SATURATION_RANGE)
    candidates = []
    for step in MONOCHROME_STEPS:
        lightness = clamp(base.l + step, *MONOCHROME_LIGHTNESS_RANGE)
        candidates.append(HarmonyCandidate(h=base.h, s=sat, l=lightness))
    return candidates


def candidates_for(base: HSL) -> Dict[str, List[HarmonyCandidate]]:
    """All rotated and monochrome candidates for a base HSL, by category."""
    return {
        "complementary": generate_rotations(base, (COMPLEMENTARY_OFFSET,)),
        "split_complementary": generate_rotations(base, SPLIT_COMPLEMENTARY_OFFSETS),
        "analogous": generate_rotations(base, ANALOGOUS_OFFSETS),
        "triadic": generate_rotations(base, TRIADIC_OFFSETS),
        "tetradic": generate_rotations(base, TETRADIC_OFFSETS),
        "monochrome": generate_monochrome_candidates(base),
    }


def _hexes(candidates: List[HarmonyCandidate]) -> List[str]:
    return [candidate.hex for candidate in candidates]


def derive_basic_matches(base_hex: str) -> BasicMatches:
    """
    Complementary, two analogous (h-30, h+30) and two triadic (h+120, h-120)
    colors for lighter callers.
    """
    _, base = resolve_base(base_hex)
    return BasicMatches(
        complementary=generate_rotations(base, (COMPLEMENTARY_OFFSET,))[0].hex,
        analogous=_hexes(generate_rotations(base, BASIC_ANALOGOUS_OFFSETS)),
        triadic=_hexes(generate_rotations(base, TRIADIC_OFFSETS)),
    )


def derive_harmony(base_hex: str) -> RichPalette:
    """
    Full harmony palette for ``base_hex``.

    Deterministic in the base color; ``neutrals`` is the same for every input.
    """
    base_normalized, base = resolve_base(base_hex)
    candidates = candidates_for(base)
    logger.debug(f"Derived harmony for {base_normalized} (h={base.h:.1f}, s={base.s:.2f}, l={base.l:.2f})")
    return RichPalette(
        base=base_normalized,
        complementary=candidates["complementary"][0].hex,
        split_complementary=_hexes(candidates["split_complementary"]),
        analogous=_hexes(candidates["analogous"]),
        triadic=_hexes(candidates["triadic"]),
        tetradic=_hexes(candidates["tetradic"]),
        monochrome=_hexes(candidates["monochrome"]),
        neutrals=neutral_hexes(),
    )
