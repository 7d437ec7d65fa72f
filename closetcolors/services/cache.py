"""
Closet Colors Analysis Cache
Caller-owned LRU memoization of color analyses keyed by content hash.

There is no module-level instance; callers create a cache and pass it in.
"""
from collections import OrderedDict
from typing import Callable, Optional

from loguru import logger

from closetcolors.config import config
from closetcolors.schemas import ColorAnalysisResult
from closetcolors.services.colors.raster import RasterImage
from closetcolors.services.fingerprint import compute_raster_fingerprint


class AnalysisCache:
    """In-memory LRU cache of ColorAnalysisResult values."""

    def __init__(self, max_size: Optional[int] = None):
        self.max_size = config.CACHE_MAX_SIZE if max_size is None else max_size
        if self.max_size < 1:
            raise ValueError("Cache max_size must be at least 1")
        self._cache: "OrderedDict[str, ColorAnalysisResult]" = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._cache)

    def get(self, key: str) -> Optional[ColorAnalysisResult]:
        """Get value and mark it most recently used."""
        if key not in self._cache:
            return None
        self._cache.move_to_end(key)
        return self._cache[key]

    def set(self, key: str, value: ColorAnalysisResult) -> None:
        """Store value, evicting the least recently used entry when full."""
        if key in self._cache:
            self._cache.move_to_end(key)
        self._cache[key] = value
        while len(self._cache) > self.max_size:
            evicted, _ = self._cache.popitem(last=False)
            logger.debug(f"Evicted analysis {evicted[:12]} from cache")

    def clear(self) -> None:
        self._cache.clear()
        self.hits = 0
        self.misses = 0

    def get_or_compute(self, image: RasterImage, algorithm: str,
                       compute: Callable[[RasterImage, str], ColorAnalysisResult]) -> ColorAnalysisResult:
        """
        Cached ``compute(image, algorithm)``.

        Results are immutable, so the same instance is returned on every hit.
        """
        key = compute_raster_fingerprint(image, algorithm)
        cached = self.get(key)
        if cached is not None:
            self.hits += 1
            logger.debug(f"Analysis cache hit {key[:12]}")
            return cached

        self.misses += 1
        result = compute(image, algorithm)
        self.set(key, result)
        return result
