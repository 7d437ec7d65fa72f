"""
Closet Colors

Garment color engine: dominant color extraction from clothing photos, color
theory palettes, named-color resolution and display readability helpers.
"""

from closetcolors.schemas import (
    BasicMatches,
    ColorAdvice,
    ColorAnalysisResult,
    ColorSwatch,
    RichPalette,
    WeightedColor,
)
from closetcolors.services.colors.extraction import analyze_colors
from closetcolors.services.colors.harmony import derive_basic_matches, derive_harmony
from closetcolors.services.colors.naming import nearest_name
from closetcolors.services.colors.raster import InvalidRasterError, RasterImage, Region
from closetcolors.services.colors.readability import ensure_readable

__version__ = "1.0.0"

__all__ = [
    "analyze_colors", "derive_basic_matches", "derive_harmony",
    "nearest_name", "ensure_readable",
    "RasterImage", "Region", "InvalidRasterError",
    "ColorAnalysisResult", "WeightedColor", "BasicMatches", "RichPalette",
    "ColorSwatch", "ColorAdvice",
]
