"""
Background color estimation from border pixels.

The estimate is a coarse mode: border samples are bucketed at 4 bits per channel,
and the winning bucket is expanded back to 8 bits by shifting. It is kept as a
single function so a finer estimator can replace it without touching callers.
"""

from collections import Counter
from typing import List, Optional

import numpy as np
from loguru import logger

from .conversions import RGB
from .raster import RasterImage


# Border samples below this alpha are ignored
BORDER_ALPHA_MIN = 128
# Roughly this many samples are taken along each edge
SAMPLES_PER_EDGE = 50


def border_samples(image: RasterImage) -> List[RGB]:
    """
    Collect opaque pixels along the four edges, in scan order.

    Top and bottom edges are walked together left to right, then the left and
    right edges top to bottom.
    """
    pixels = image.pixels
    width, height = image.width, image.height
    step_x = max(1, width // SAMPLES_PER_EDGE)
    step_y = max(1, height // SAMPLES_PER_EDGE)

    coords = []
    for x in range(0, width, step_x):
        coords.append((x, 0))
        coords.append((x, height - 1))
    for y in range(0, height, step_y):
        coords.append((0, y))
        coords.append((width - 1, y))

    samples = []
    for x, y in coords:
        r, g, b, a = (int(v) for v in pixels[y, x])
        if a < BORDER_ALPHA_MIN:
            continue
        samples.append(RGB(r, g, b))
    return samples


def estimate_mode_color(samples: List[RGB]) -> Optional[RGB]:
    """
    Most frequent 4-bit bucket among ``samples``, expanded back to 8 bits.

    Ties go to the bucket seen first. Returns None for an empty sample list.
    """
    if not samples:
        return None
    counts = Counter((r >> 4, g >> 4, b >> 4) for r, g, b in samples)
    (qr, qg, qb), _ = counts.most_common(1)[0]
    return RGB(qr << 4, qg << 4, qb << 4)


def estimate_background_color(image: RasterImage) -> Optional[RGB]:
    """
    Approximate the backdrop color of ``image``.

    Returns:
        RGB estimate, or None when the border has no opaque pixels. None means
        "skip background suppression", not an error.
    """
    samples = border_samples(image)
    background = estimate_mode_color(samples)
    if background is None:
        logger.debug("No opaque border samples; background suppression disabled")
    else:
        logger.debug(f"Estimated background {background} from {len(samples)} border samples")
    return background


def background_distance_map(pixels: np.ndarray, background: RGB) -> np.ndarray:
    """Per-pixel Euclidean RGB distance to ``background`` for an (H, W, 4) array."""
    rgb = pixels[..., :3].astype(np.float64)
    diff = rgb - np.array(background, dtype=np.float64)
    return np.sqrt(np.sum(diff * diff, axis=-1))
