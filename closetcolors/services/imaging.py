"""
Closet Colors Imaging Utilities
Decodes uploaded image bytes into the working RasterImage the engine analyzes.
"""
import io
from typing import Optional

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from closetcolors.config import config
from closetcolors.schemas import ColorAnalysisResult
from closetcolors.services.cache import AnalysisCache
from closetcolors.services.colors.extraction import analyze_colors
from closetcolors.services.colors.raster import RasterImage
from closetcolors.utils.ids import generate_analysis_id
from closetcolors.utils.logging import get_logger


class ImageDecodeError(ValueError):
    """Raised when uploaded bytes cannot be turned into an image."""


def raster_from_array(array: np.ndarray) -> RasterImage:
    """
    Wrap a decoded uint8 array as a RasterImage.

    Accepts (H, W) grayscale, (H, W, 3) RGB or (H, W, 4) RGBA arrays; missing
    alpha is filled as fully opaque.
    """
    array = np.asarray(array)
    if array.dtype != np.uint8:
        raise ImageDecodeError(f"Expected uint8 pixel array, got {array.dtype}")
    if array.ndim == 2:
        array = np.repeat(array[:, :, None], 3, axis=2)
    if array.ndim != 3 or array.shape[2] not in (3, 4):
        raise ImageDecodeError(f"Unsupported pixel array shape {array.shape}")
    if array.shape[2] == 3:
        alpha = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
        array = np.concatenate([array, alpha], axis=2)
    return RasterImage(np.ascontiguousarray(array))


def load_raster(image_bytes: bytes, max_edge: Optional[int] = None) -> RasterImage:
    """
    Decode image bytes into a working-size RGBA raster.

    The image is EXIF-rotated, converted to RGBA and shrunk to fit inside
    ``max_edge`` x ``max_edge``. Smaller images are never enlarged.

    Args:
        image_bytes: Encoded image (JPEG, PNG, WebP, ...)
        max_edge: Working edge size; defaults to config.WORKING_EDGE

    Raises:
        ImageDecodeError: For empty, oversized or undecodable input
    """
    if max_edge is None:
        max_edge = config.WORKING_EDGE
    if not config.validate_working_edge(max_edge):
        raise ImageDecodeError(f"Working edge {max_edge} outside supported range")
    if not image_bytes:
        raise ImageDecodeError("Image data is empty")
    if len(image_bytes) > config.MAX_FILE_MB * 1024 * 1024:
        raise ImageDecodeError(f"File too large. Maximum size: {config.MAX_FILE_MB}MB")

    try:
        pil_image = Image.open(io.BytesIO(image_bytes))
        pil_image.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise ImageDecodeError(f"Failed to decode image: {e}") from e

    pil_image = ImageOps.exif_transpose(pil_image)
    if pil_image.mode != "RGBA":
        pil_image = pil_image.convert("RGBA")

    original_size = pil_image.size
    pil_image.thumbnail((max_edge, max_edge), Image.Resampling.LANCZOS)

    get_logger().debug(
        "Decoded image for analysis",
        extra={"original_size": original_size, "working_size": pil_image.size}
    )
    return raster_from_array(np.array(pil_image, dtype=np.uint8))


def analyze_image_bytes(image_bytes: bytes,
                        algorithm: Optional[str] = None,
                        cache: Optional[AnalysisCache] = None,
                        max_edge: Optional[int] = None) -> ColorAnalysisResult:
    """
    Decode, downscale and analyze an uploaded image.

    Args:
        image_bytes: Encoded image
        algorithm: "enhanced" or "legacy"; defaults to config.DEFAULT_ALGORITHM
        cache: Optional caller-owned cache for repeated analyses of one image
        max_edge: Working edge size; defaults to config.WORKING_EDGE

    Raises:
        ImageDecodeError: For unusable image bytes
        ValueError: For an unknown algorithm
    """
    algorithm = algorithm or config.DEFAULT_ALGORITHM
    if not config.validate_algorithm(algorithm):
        raise ValueError(f"Unknown color algorithm '{algorithm}'")

    log = get_logger()
    analysis_id = generate_analysis_id()
    log.info("Starting color analysis", extra={"analysis_id": analysis_id, "algorithm": algorithm})

    raster = load_raster(image_bytes, max_edge=max_edge)
    if cache is not None:
        result = cache.get_or_compute(raster, algorithm, analyze_colors)
    else:
        result = analyze_colors(raster, algorithm)

    log.info(
        "Color analysis complete",
        extra={"analysis_id": analysis_id, "colors": result.hexes, "region": result.region}
    )
    return result
