"""
Neutral pairings.

The neutral set is fixed and independent of the base color: every palette
carries the same seven.
"""

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class NeutralColor:
    """A neutral color with display metadata."""
    hex: str
    name: str


# Fixed neutral pool, in palette order
NEUTRAL_POOL = (
    NeutralColor("#000000", "Black"),
    NeutralColor("#ffffff", "White"),
    NeutralColor("#f5f5f5", "Off-White"),
    NeutralColor("#e5e7eb", "Cloud Gray"),
    NeutralColor("#9ca3af", "Stone Gray"),
    NeutralColor("#4b5563", "Slate"),
    NeutralColor("#111827", "Ink"),
)


def neutral_hexes() -> List[str]:
    """Hex values of the neutral pool as a fresh list."""
    return [neutral.hex for neutral in NEUTRAL_POOL]
