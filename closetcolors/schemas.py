"""
Closet Colors Schemas
Pydantic models for the values the color engine hands back to its callers.

Models are frozen: a result is immutable once produced. Dumping with
``by_alias=True`` yields the camelCase record shape stored by persistence callers.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


HEX_PATTERN = r"^#[0-9a-f]{6}$"


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


# ============================================================================
# DOMINANT COLOR EXTRACTION
# ============================================================================

class WeightedColor(FrozenModel):
    """A dominant color with its relative score."""
    hex: str = Field(..., pattern=HEX_PATTERN, description="Color as lowercase #rrggbb")
    weight: float = Field(
        ...,
        ge=0.0,
        description="Relative score (pixel count for legacy, perceptual weight for enhanced)"
    )


class ColorAnalysisResult(FrozenModel):
    """Ranked dominant colors of one image."""
    dominant_colors: List[WeightedColor] = Field(
        default_factory=list,
        alias="dominantColors",
        max_length=5,
        description="Up to 5 colors ordered by descending weight; empty when nothing survived suppression"
    )
    color_percentages: Dict[str, float] = Field(
        default_factory=dict,
        alias="colorPercentages",
        description="Hex -> share of the returned set (0-100)"
    )
    algorithm: str = Field("enhanced", description="Extraction algorithm used ('legacy' or 'enhanced')")
    region: Optional[List[int]] = Field(
        None,
        min_length=4,
        max_length=4,
        description="Garment focus box as [x, y, width, height]; None when the full image was used"
    )

    @property
    def hexes(self) -> List[str]:
        return [color.hex for color in self.dominant_colors]

    @property
    def is_empty(self) -> bool:
        return not self.dominant_colors


# ============================================================================
# COLOR THEORY
# ============================================================================

class BasicMatches(FrozenModel):
    """Lightweight harmony set."""
    complementary: str = Field(..., pattern=HEX_PATTERN)
    analogous: List[str] = Field(..., min_length=2, max_length=2, description="h-30, h+30")
    triadic: List[str] = Field(..., min_length=2, max_length=2, description="h+120, h-120")


class RichPalette(FrozenModel):
    """Full harmony palette derived from one base color."""
    base: str = Field(..., pattern=HEX_PATTERN)
    complementary: str = Field(..., pattern=HEX_PATTERN)
    split_complementary: List[str] = Field(
        ..., alias="splitComplementary", min_length=2, max_length=2, description="h+150, h+210"
    )
    analogous: List[str] = Field(..., min_length=4, max_length=4, description="h-30, h-15, h+15, h+30")
    triadic: List[str] = Field(..., min_length=2, max_length=2, description="h+120, h-120")
    tetradic: List[str] = Field(..., min_length=3, max_length=3, description="h+90, h+180, h+270")
    monochrome: List[str] = Field(..., min_length=6, max_length=6, description="Lightness steps around base")
    neutrals: List[str] = Field(..., min_length=7, max_length=7, description="Fixed neutral pairings")


# ============================================================================
# PAIRING ADVICE
# ============================================================================

class ColorSwatch(FrozenModel):
    """A named color."""
    name: str
    hex: str


class ColorPairing(FrozenModel):
    """One suggested pairing for a base garment color."""
    key: str = Field(..., description="'contrast', 'harmony' or 'neutral'")
    title: str
    colors: List[ColorSwatch]
    rationale: str
    highlight: Optional[str] = Field(None, description="Favorite color name this pairing taps into")


class ColorAdvice(FrozenModel):
    """Pairing advice for a garment."""
    base_color: Optional[ColorSwatch] = Field(None, alias="baseColor")
    summary: str
    pairings: List[ColorPairing] = Field(default_factory=list)
