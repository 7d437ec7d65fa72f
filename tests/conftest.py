"""
Test configuration and synthetic image fixtures for closetcolors tests.
"""
import numpy as np
import pytest

from closetcolors.services.colors.raster import RasterImage


CREAM = (245, 245, 240)
GARMENT_RED = (209, 43, 43)
NAVY = (20, 40, 90)


def make_image(width, height, background, patches=()):
    """
    Build an opaque RGBA image filled with ``background``.

    Args:
        patches: Iterable of (x0, y0, x1, y1, rgb) rectangles, end-exclusive
    """
    pixels = np.empty((height, width, 4), dtype=np.uint8)
    pixels[:, :, :3] = background
    pixels[:, :, 3] = 255
    for x0, y0, x1, y1, rgb in patches:
        pixels[y0:y1, x0:x1, :3] = rgb
    return RasterImage(pixels)


@pytest.fixture
def red_patch_image():
    """200x200 cream frame with a 160x160 red center starting 20px in."""
    return make_image(200, 200, CREAM, [(20, 20, 180, 180, GARMENT_RED)])


@pytest.fixture
def navy_garment_image():
    """200x200 cream backdrop with a navy garment block."""
    return make_image(200, 200, CREAM, [(40, 50, 160, 180, NAVY)])


@pytest.fixture
def transparent_image():
    pixels = np.zeros((40, 40, 4), dtype=np.uint8)
    return RasterImage(pixels)
