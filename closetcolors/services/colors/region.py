"""
Garment region focusing.

Scores every row and column by how much of it looks like "foreground" (neither
backdrop nor skin), then crops a bounding box around the most active band. This is
a heuristic, not a classifier: cluttered or multi-garment photos may crop poorly.
"""

import math
from typing import Optional, Tuple

import numpy as np
from loguru import logger

from .background import background_distance_map, estimate_background_color
from .conversions import RGB
from .raster import RasterImage, Region


# Pixels below this alpha do not count towards row/column totals
REGION_ALPHA_MIN = 64
# Pixels closer than this (RGB distance) to the backdrop are background
BACKGROUND_DISTANCE_THRESHOLD = 48
# Fraction of active pixels that marks the first garment row
ROW_ACTIVITY_THRESHOLD = 0.28
# The bottom edge only needs this share of the row threshold
BOTTOM_ROW_FACTOR = 0.6
# Fraction of active pixels that marks a garment column
COLUMN_ACTIVITY_THRESHOLD = 0.18

# Search window: skip headwear/hair at the top, frame edges elsewhere
TOP_MARGIN_RATIO = 0.12
BOTTOM_MARGIN_RATIO = 0.05
SIDE_MARGIN_RATIO = 0.05
# Padding added around the detected box
CROP_PADDING_RATIO = 0.04
# Fallback garment height when no bottom row qualifies
FALLBACK_HEIGHT_RATIO = 0.6

# Crops narrower/shorter than this are not trusted
MIN_CROP_WIDTH_RATIO = 0.4
MIN_CROP_HEIGHT_RATIO = 0.3
# Crops covering this much of the frame achieve nothing
MAX_CROP_AREA_RATIO = 0.92
# Images smaller than this on either side are analyzed whole
MIN_FOCUS_DIMENSION = 60


def is_likely_skin_tone(r: int, g: int, b: int) -> bool:
    """Basic RGB skin rule."""
    max_c = max(r, g, b)
    min_c = min(r, g, b)
    return (r > 95 and g > 40 and b > 20 and (max_c - min_c) > 15
            and abs(r - g) > 15 and r > g and r > b)


def skin_tone_mask(pixels: np.ndarray) -> np.ndarray:
    """Vectorized ``is_likely_skin_tone`` over an (H, W, >=3) uint8 array."""
    rgb = pixels[..., :3].astype(np.int16)
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]
    spread = rgb.max(axis=-1) - rgb.min(axis=-1)
    return ((r > 95) & (g > 40) & (b > 20) & (spread > 15)
            & (np.abs(r - g) > 15) & (r > g) & (r > b))


def activity_profile(image: RasterImage,
                     background: Optional[RGB]) -> Tuple[np.ndarray, np.ndarray]:
    """
    Per-row and per-column foreground activity.

    Activity is the share of opaque pixels in a row (column) that are neither
    within BACKGROUND_DISTANCE_THRESHOLD of ``background`` nor skin. Rows or
    columns with no opaque pixels score 0.

    Returns:
        Tuple of (row_scores, column_scores) float arrays
    """
    pixels = image.pixels
    opaque = pixels[..., 3] >= REGION_ALPHA_MIN

    active = opaque & ~skin_tone_mask(pixels)
    if background is not None:
        active &= background_distance_map(pixels, background) >= BACKGROUND_DISTANCE_THRESHOLD

    row_totals = opaque.sum(axis=1)
    col_totals = opaque.sum(axis=0)
    row_scores = np.where(row_totals > 0, active.sum(axis=1) / np.maximum(row_totals, 1), 0.0)
    col_scores = np.where(col_totals > 0, active.sum(axis=0) / np.maximum(col_totals, 1), 0.0)
    return row_scores, col_scores


def _first_at_least(scores: np.ndarray, indices, threshold: float) -> int:
    for i in indices:
        if 0 <= i < len(scores) and scores[i] >= threshold:
            return i
    return -1


def focus_garment_region(image: RasterImage,
                         background: Optional[RGB] = None) -> Optional[Region]:
    """
    Detect a bounding box likely to contain the garment.

    Args:
        image: Working (already downscaled) image
        background: Background estimate for this image; estimated from the
            border when not supplied

    Returns:
        Region to crop to, or None when no trustworthy region exists (the
        caller then analyzes the full image)
    """
    width, height = image.width, image.height
    if width < MIN_FOCUS_DIMENSION or height < MIN_FOCUS_DIMENSION:
        logger.debug(f"Image {width}x{height} too small to focus; using full frame")
        return None

    if background is None:
        background = estimate_background_color(image)
    row_scores, col_scores = activity_profile(image, background)

    # 1) top: first active row below the headwear margin
    min_row = math.floor(height * TOP_MARGIN_RATIO)
    max_row = height - math.floor(height * BOTTOM_MARGIN_RATIO)
    top = _first_at_least(row_scores, range(min_row, max_row), ROW_ACTIVITY_THRESHOLD)
    if top < 0:
        logger.debug("No garment rows found; using full frame")
        return None

    # 2) bottom: last row with relaxed activity, or a fixed garment height
    bottom = _first_at_least(row_scores, range(max_row, top, -1),
                             ROW_ACTIVITY_THRESHOLD * BOTTOM_ROW_FACTOR)
    if bottom < 0:
        bottom = min(height - 1, top + math.floor(height * FALLBACK_HEIGHT_RATIO))

    # 3) left/right: first active column from either side
    min_col = math.floor(width * SIDE_MARGIN_RATIO)
    max_col = width - math.floor(width * SIDE_MARGIN_RATIO)
    left = _first_at_least(col_scores, range(min_col, max_col), COLUMN_ACTIVITY_THRESHOLD)
    if left < 0:
        left = min_col
    right = _first_at_least(col_scores, range(max_col, left, -1), COLUMN_ACTIVITY_THRESHOLD)
    if right < 0:
        right = max_col

    # 4) pad and clamp
    margin_y = math.floor(height * CROP_PADDING_RATIO)
    margin_x = math.floor(width * CROP_PADDING_RATIO)
    crop_x = max(0, left - margin_x)
    crop_y = max(0, top - margin_y)
    crop_width = min(width - crop_x, right - left + 1 + margin_x * 2)
    crop_height = min(height - crop_y, bottom - top + 1 + margin_y * 2)

    # 5) reject crops that are too small to trust or too large to matter
    if crop_width < width * MIN_CROP_WIDTH_RATIO or crop_height < height * MIN_CROP_HEIGHT_RATIO:
        logger.debug(f"Rejected {crop_width}x{crop_height} crop as too small")
        return None
    if crop_width * crop_height >= width * height * MAX_CROP_AREA_RATIO:
        logger.debug(f"Rejected {crop_width}x{crop_height} crop as near full frame")
        return None

    region = Region(crop_x, crop_y, crop_width, crop_height)
    logger.debug(f"Garment region {region.as_xywh()} in {width}x{height} frame")
    return region
