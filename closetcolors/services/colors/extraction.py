"""
Dominant color extraction for garment photos.

Two interchangeable samplers share one signature:

- ``extract_legacy``: every 10th pixel, exact hex buckets, raw counts. Kept for
  output compatibility with earlier results; not the default.
- ``extract_enhanced``: stride-2 grid with background, skin and backdrop-tone
  suppression, center-biased perceptual weighting and near-duplicate
  consolidation.

``analyze_colors`` focuses the garment region first and then runs the chosen
sampler on the crop.
"""

from typing import Callable, Dict, List, Optional, Tuple

import numpy as np
from loguru import logger

from closetcolors.schemas import ColorAnalysisResult, WeightedColor
from closetcolors.utils.timing import performance_monitor
from .background import background_distance_map, estimate_background_color
from .conversions import (
    color_distance, hex_to_rgb, hue_difference, rgb_to_hex, rgb_to_hsl, rgb_to_hsl_array
)
from .raster import RasterImage
from .region import focus_garment_region, skin_tone_mask


MAX_DOMINANT_COLORS = 5

# Legacy sampler
LEGACY_PIXEL_STRIDE = 10
LEGACY_ALPHA_MIN = 128

# Enhanced sampler grid and alpha cut-off
ENHANCED_GRID_STRIDE = 2
ENHANCED_ALPHA_MIN = 128
# Mean channel brightness outside (MIN, MAX) is near-black / near-white
BRIGHTNESS_MIN = 10
BRIGHTNESS_MAX = 240
# Flat bright gray: channel spread below this at brightness above FLAT_BRIGHTNESS_MIN
FLAT_SPREAD_MAX = 10
FLAT_BRIGHTNESS_MIN = 210

# Center-bias ellipses, as fractions of width / height
TIGHT_RADIUS_X = 0.22
TIGHT_RADIUS_Y = 0.22
SOFT_RADIUS_X = 0.34
SOFT_RADIUS_Y = 0.30
TIGHT_CENTER_WEIGHT = 16.0
SOFT_CENTER_WEIGHT = 4.0
OUTER_WEIGHT = 0.4

# Outside the soft ellipse, pixels this close to the backdrop are dropped
ENHANCED_BACKGROUND_DISTANCE = 72
# Outside the soft ellipse, desaturated pixels near the backdrop hue are dropped
BACKGROUND_HUE_WINDOW = 24
BACKGROUND_HUE_MAX_SATURATION = 0.2

# Beige / cream backdrops
BEIGE_HUE_RANGE = (25, 50)
BEIGE_MAX_SATURATION = 0.35
BEIGE_MIN_LIGHTNESS = 0.65
# Generic washed-out backdrops
PALE_MAX_SATURATION = 0.12
PALE_MIN_LIGHTNESS = 0.6

# Keep the top 5 bits of each channel
QUANTIZE_MASK = 0b11111000

# Saturation weight: 1 + min(SATURATION_WEIGHT_CAP, s * SATURATION_WEIGHT_SCALE)
SATURATION_WEIGHT_SCALE = 3.5
SATURATION_WEIGHT_CAP = 3.0
# Lightness bonus bands counteracting mid-tone dominance
NEAR_WHITE_BAND = (0.72, 0.9)
DARK_BAND_MAX = 0.55

# Buckets closer than this (RGB distance, inclusive) are merged
CONSOLIDATION_DISTANCE = 18


def _rank(weights: Dict[str, float]) -> List[Tuple[str, float]]:
    """Top buckets by descending weight; ties keep first-seen order."""
    return sorted(weights.items(), key=lambda item: -item[1])[:MAX_DOMINANT_COLORS]


def _ordered_bucket_sums(keys: np.ndarray, weights: np.ndarray) -> Dict[str, float]:
    """Sum weights per packed-RGB key, keyed by hex in order of first appearance."""
    if keys.size == 0:
        return {}
    unique_keys, first_index, inverse = np.unique(keys, return_index=True, return_inverse=True)
    sums = np.bincount(inverse.ravel(), weights=weights, minlength=len(unique_keys))
    buckets = {}
    for slot in np.argsort(first_index, kind="stable"):
        key = int(unique_keys[slot])
        buckets[rgb_to_hex((key >> 16) & 0xFF, (key >> 8) & 0xFF, key & 0xFF)] = float(sums[slot])
    return buckets


def _pack_rgb(rgb: np.ndarray) -> np.ndarray:
    rgb = rgb.astype(np.int64)
    return (rgb[..., 0] << 16) | (rgb[..., 1] << 8) | rgb[..., 2]


def extract_legacy(image: RasterImage) -> ColorAnalysisResult:
    """
    Legacy histogram sampler.

    Percentages are count / (total_pixels / 10) * 100, so they are relative to
    the whole image rather than the returned set.
    """
    flat = image.pixels.reshape(-1, 4)
    total_pixels = flat.shape[0]
    sampled = flat[::LEGACY_PIXEL_STRIDE]
    sampled = sampled[sampled[:, 3] >= LEGACY_ALPHA_MIN]

    counts = _ordered_bucket_sums(_pack_rgb(sampled[:, :3]), np.ones(len(sampled)))
    ranked = _rank(counts)

    sample_base = total_pixels / LEGACY_PIXEL_STRIDE
    logger.debug(f"Legacy sampler: {len(sampled)} samples, {len(counts)} distinct colors")
    return ColorAnalysisResult(
        dominant_colors=[WeightedColor(hex=hex_color, weight=count) for hex_color, count in ranked],
        color_percentages={hex_color: count / sample_base * 100 for hex_color, count in ranked},
        algorithm="legacy",
    )


def accumulate_enhanced_weights(image: RasterImage) -> Dict[str, float]:
    """
    Perceptually weighted votes per quantized color, before consolidation.

    Returns:
        Mapping of quantized hex -> accumulated weight, in scan order of first
        appearance. Empty when every sample was suppressed.
    """
    width, height = image.width, image.height
    background = estimate_background_color(image)
    background_hue = rgb_to_hsl(*background).h if background is not None else None

    grid = image.pixels[::ENHANCED_GRID_STRIDE, ::ENHANCED_GRID_STRIDE]
    ys = np.arange(0, height, ENHANCED_GRID_STRIDE, dtype=np.float64)[:, None]
    xs = np.arange(0, width, ENHANCED_GRID_STRIDE, dtype=np.float64)[None, :]

    rgb = grid[..., :3].astype(np.int16)
    brightness = rgb.sum(axis=-1) / 3.0
    spread = rgb.max(axis=-1) - rgb.min(axis=-1)

    cx, cy = width / 2.0, height / 2.0
    dx2, dy2 = (xs - cx) ** 2, (ys - cy) ** 2
    in_tight = (dx2 / (width * TIGHT_RADIUS_X) ** 2 + dy2 / (height * TIGHT_RADIUS_Y) ** 2) <= 1
    in_soft = (dx2 / (width * SOFT_RADIUS_X) ** 2 + dy2 / (height * SOFT_RADIUS_Y) ** 2) <= 1
    outside = ~in_soft

    keep = grid[..., 3] >= ENHANCED_ALPHA_MIN
    keep &= ~((brightness > BRIGHTNESS_MAX) | (brightness < BRIGHTNESS_MIN)
              | ((spread < FLAT_SPREAD_MAX) & (brightness > FLAT_BRIGHTNESS_MIN)))

    if background is not None:
        keep &= ~(outside & (background_distance_map(grid, background) < ENHANCED_BACKGROUND_DISTANCE))
    keep &= ~(outside & skin_tone_mask(grid))

    hue, sat, light = rgb_to_hsl_array(grid)
    beige = ((hue >= BEIGE_HUE_RANGE[0]) & (hue <= BEIGE_HUE_RANGE[1])
             & (sat < BEIGE_MAX_SATURATION) & (light > BEIGE_MIN_LIGHTNESS))
    pale = (sat < PALE_MAX_SATURATION) & (light > PALE_MIN_LIGHTNESS)
    keep &= ~(beige | pale)

    if background_hue is not None:
        hue_gap = hue_difference(hue, background_hue)
        keep &= ~(outside & (sat < BACKGROUND_HUE_MAX_SATURATION) & (hue_gap < BACKGROUND_HUE_WINDOW))

    saturation_weight = 1.0 + np.minimum(SATURATION_WEIGHT_CAP, sat * SATURATION_WEIGHT_SCALE)
    lightness_bonus = np.where(
        (light >= NEAR_WHITE_BAND[0]) & (light <= NEAR_WHITE_BAND[1]),
        1.0 + (light - 0.7) * 3.0,
        np.where(light <= DARK_BAND_MAX, 1.0 + (DARK_BAND_MAX - light), 1.0),
    )
    center_weight = np.where(in_tight, TIGHT_CENTER_WEIGHT,
                             np.where(in_soft, SOFT_CENTER_WEIGHT, OUTER_WEIGHT))
    weight = center_weight * saturation_weight * lightness_bonus

    quantized = grid[..., :3][keep] & QUANTIZE_MASK
    buckets = _ordered_bucket_sums(_pack_rgb(quantized), weight[keep])
    logger.debug(f"Enhanced sampler: {int(keep.sum())}/{keep.size} samples kept, "
                 f"{len(buckets)} buckets")
    return buckets


def consolidate_colors(weights: Dict[str, float],
                       threshold: float = CONSOLIDATION_DISTANCE) -> Dict[str, float]:
    """
    Merge near-duplicate buckets.

    Walks buckets in order; each unvisited bucket absorbs every later unvisited
    bucket within ``threshold`` of its running color, summing weights and moving
    the running color to the midpoint. The merged color is re-quantized, so two
    groups can land on the same key and add up. Pairwise, O(n^2) in the number of
    distinct buckets.
    """
    keys = list(weights)
    colors = {key: hex_to_rgb(key) for key in keys}
    visited = set()
    consolidated: Dict[str, float] = {}

    for i, key in enumerate(keys):
        if key in visited:
            continue
        visited.add(key)
        total = weights[key]
        r0, g0, b0 = colors[key]
        for other in keys[i + 1:]:
            if other in visited:
                continue
            if color_distance((r0, g0, b0), colors[other]) <= threshold:
                total += weights[other]
                r1, g1, b1 = colors[other]
                # midpoint, rounding half up
                r0, g0, b0 = (r0 + r1 + 1) // 2, (g0 + g1 + 1) // 2, (b0 + b1 + 1) // 2
                visited.add(other)
        merged = rgb_to_hex(r0 & QUANTIZE_MASK, g0 & QUANTIZE_MASK, b0 & QUANTIZE_MASK)
        consolidated[merged] = consolidated.get(merged, 0.0) + total

    return consolidated


def summarize_weights(weights: Dict[str, float], algorithm: str = "enhanced",
                      region: Optional[List[int]] = None) -> ColorAnalysisResult:
    """Top colors with percentages renormalized over the returned set."""
    ranked = _rank(weights)
    total = sum(weight for _, weight in ranked)
    return ColorAnalysisResult(
        dominant_colors=[WeightedColor(hex=hex_color, weight=weight) for hex_color, weight in ranked],
        color_percentages={hex_color: (weight / total * 100 if total > 0 else 0.0)
                           for hex_color, weight in ranked},
        algorithm=algorithm,
        region=region,
    )


def extract_enhanced(image: RasterImage) -> ColorAnalysisResult:
    """
    Enhanced, suppression-aware sampler.

    An image whose every sample is suppressed yields an empty result, which is a
    valid outcome distinct from an error.
    """
    buckets = accumulate_enhanced_weights(image)
    if not buckets:
        logger.debug("No pixels survived suppression")
        return ColorAnalysisResult(algorithm="enhanced")
    consolidated = consolidate_colors(buckets)
    logger.debug(f"Consolidated {len(buckets)} buckets into {len(consolidated)}")
    return summarize_weights(consolidated, algorithm="enhanced")


EXTRACTORS: Dict[str, Callable[[RasterImage], ColorAnalysisResult]] = {
    "legacy": extract_legacy,
    "enhanced": extract_enhanced,
}


def analyze_colors(image: RasterImage, algorithm: str = "enhanced") -> ColorAnalysisResult:
    """
    Dominant colors of the garment in ``image``.

    Args:
        image: Working image, already downscaled by the caller
        algorithm: "enhanced" (default) or "legacy"

    Returns:
        ColorAnalysisResult with up to 5 colors; ``region`` records the garment
        crop, or None when the full image was analyzed

    Raises:
        ValueError: If ``algorithm`` is unknown
    """
    extractor = EXTRACTORS.get(algorithm)
    if extractor is None:
        raise ValueError(f"Unknown color algorithm '{algorithm}'. Use one of: {', '.join(EXTRACTORS)}")

    logger.info(f"Analyzing {image.width}x{image.height} image with {algorithm} sampler")

    with performance_monitor("garment_region_focus", width=image.width, height=image.height):
        region = focus_garment_region(image)
    working = image.crop(region) if region is not None else image

    with performance_monitor(f"{algorithm}_extraction", width=working.width, height=working.height):
        result = extractor(working)

    if region is not None:
        result = result.model_copy(update={"region": region.as_xywh()})

    logger.info(f"Extracted {len(result.dominant_colors)} dominant colors: {result.hexes}")
    return result
