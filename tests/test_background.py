"""
Unit tests for background estimation.
"""
import numpy as np
import pytest

from closetcolors.services.colors.background import (
    background_distance_map, border_samples, estimate_background_color, estimate_mode_color
)
from closetcolors.services.colors.conversions import RGB
from closetcolors.services.colors.raster import RasterImage

from .conftest import CREAM, make_image


class TestBorderSampling:
    """Test border sample collection."""

    def test_roughly_fifty_samples_per_edge(self):
        image = RasterImage.solid(100, 100, (1, 2, 3, 255))
        assert len(border_samples(image)) == 200

    def test_transparent_border_is_skipped(self, transparent_image):
        assert border_samples(transparent_image) == []

    def test_tiny_image(self):
        image = RasterImage.solid(1, 1, (9, 9, 9, 255))
        assert border_samples(image) == [RGB(9, 9, 9)] * 4


class TestModeEstimate:
    """Test the 4-bit mode estimate."""

    def test_expands_bucket_by_shift(self):
        assert estimate_mode_color([RGB(250, 1, 17)]) == RGB(240, 0, 16)

    def test_ties_go_to_first_seen_bucket(self):
        samples = [RGB(16, 16, 16), RGB(32, 32, 32), RGB(33, 33, 33), RGB(17, 17, 17)]
        assert estimate_mode_color(samples) == RGB(16, 16, 16)

    def test_empty_samples(self):
        assert estimate_mode_color([]) is None

    def test_cream_backdrop(self, red_patch_image):
        assert estimate_background_color(red_patch_image) == RGB(240, 240, 240)

    def test_no_estimate_for_transparent_image(self, transparent_image):
        assert estimate_background_color(transparent_image) is None

    def test_majority_border_color_wins(self):
        image = make_image(100, 100, CREAM, [(0, 0, 10, 100, (0, 0, 0))])
        assert estimate_background_color(image) == RGB(240, 240, 240)


class TestDistanceMap:
    """Test per-pixel background distances."""

    def test_distances(self):
        pixels = np.array([[[0, 0, 0, 255], [3, 4, 0, 255]]], dtype=np.uint8)
        distances = background_distance_map(pixels, RGB(0, 0, 0))
        assert distances.shape == (1, 2)
        assert distances[0, 0] == 0.0
        assert distances[0, 1] == pytest.approx(5.0)
