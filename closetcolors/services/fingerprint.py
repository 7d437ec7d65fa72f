"""
Closet Colors Fingerprinting Utilities
Content hashes used as analysis cache keys.
"""
import hashlib

from closetcolors.services.colors.raster import RasterImage


def compute_raster_fingerprint(image: RasterImage, algorithm: str) -> str:
    """
    Cache key for analyzing ``image`` with ``algorithm``.

    Covers dimensions as well as pixels: equal buffers of different shapes get
    different keys.
    """
    digest = hashlib.sha256()
    digest.update(f"{algorithm}:{image.width}x{image.height}:".encode("ascii"))
    digest.update(image.buffer)
    return digest.hexdigest()
