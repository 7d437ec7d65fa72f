"""
Raster value types consumed by the color engine.

A RasterImage owns an (height, width, 4) uint8 RGBA array. Construction is the one
place where the engine fails hard: without pixel data there is nothing to analyze.
"""

from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np


class InvalidRasterError(ValueError):
    """Raised when a pixel buffer cannot describe an image."""


@dataclass(frozen=True)
class Region:
    """Axis-aligned box inside a RasterImage."""
    x: int
    y: int
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height

    def as_xywh(self) -> list:
        return [self.x, self.y, self.width, self.height]


@dataclass(frozen=True, eq=False)
class RasterImage:
    """Row-major RGBA pixel buffer with its dimensions."""
    pixels: np.ndarray

    def __post_init__(self):
        pixels = self.pixels
        if not isinstance(pixels, np.ndarray):
            raise InvalidRasterError("RasterImage pixels must be a numpy array")
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise InvalidRasterError(
                f"Expected (height, width, 4) RGBA array, got shape {pixels.shape}"
            )
        if pixels.shape[0] < 1 or pixels.shape[1] < 1:
            raise InvalidRasterError(
                f"Image dimensions must be at least 1x1, got {pixels.shape[1]}x{pixels.shape[0]}"
            )
        if pixels.dtype != np.uint8:
            raise InvalidRasterError(f"Expected uint8 channels, got {pixels.dtype}")

    @classmethod
    def from_buffer(cls, buffer: Union[bytes, bytearray, Sequence[int], np.ndarray],
                    width: int, height: int) -> "RasterImage":
        """
        Build a RasterImage from a flat RGBA buffer.

        Raises:
            InvalidRasterError: If the dimensions are < 1, the buffer is empty,
                holds non-integer or out-of-range values, or its length is not
                width * height * 4
        """
        if width < 1 or height < 1:
            raise InvalidRasterError(f"Image dimensions must be at least 1x1, got {width}x{height}")

        if isinstance(buffer, (bytes, bytearray)):
            flat = np.frombuffer(bytes(buffer), dtype=np.uint8)
        else:
            flat = np.asarray(buffer)
            if flat.size and not np.issubdtype(flat.dtype, np.integer):
                raise InvalidRasterError(f"Channel values must be integers, got {flat.dtype}")
            if flat.size and (flat.min() < 0 or flat.max() > 255):
                raise InvalidRasterError("Channel values must be within [0, 255]")
            flat = flat.astype(np.uint8).ravel()

        expected = width * height * 4
        if flat.size == 0:
            raise InvalidRasterError("Pixel buffer is empty")
        if flat.size != expected:
            raise InvalidRasterError(
                f"Buffer length {flat.size} does not match {width}x{height}x4 = {expected}"
            )
        return cls(flat.reshape(height, width, 4).copy())

    @classmethod
    def solid(cls, width: int, height: int, rgba) -> "RasterImage":
        """Create a single-color image."""
        if width < 1 or height < 1:
            raise InvalidRasterError(f"Image dimensions must be at least 1x1, got {width}x{height}")
        if (len(rgba) != 4 or not all(isinstance(v, (int, np.integer)) for v in rgba)
                or not all(0 <= v <= 255 for v in rgba)):
            raise InvalidRasterError(f"Expected an (r, g, b, a) tuple of 0-255 integers, got {rgba!r}")
        pixels = np.empty((height, width, 4), dtype=np.uint8)
        pixels[:, :] = rgba
        return cls(pixels)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def buffer(self) -> bytes:
        return self.pixels.tobytes()

    def crop(self, region: Region) -> "RasterImage":
        """Copy the pixels inside ``region`` into a new image."""
        if (region.x < 0 or region.y < 0 or region.width < 1 or region.height < 1
                or region.x + region.width > self.width
                or region.y + region.height > self.height):
            raise InvalidRasterError(f"Region {region} outside {self.width}x{self.height} image")
        window = self.pixels[region.y:region.y + region.height, region.x:region.x + region.width]
        return RasterImage(window.copy())
