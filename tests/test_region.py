"""
Unit tests for garment region focusing.
"""
import numpy as np
import pytest

from closetcolors.services.colors.background import estimate_background_color
from closetcolors.services.colors.raster import RasterImage, Region
from closetcolors.services.colors.region import (
    activity_profile, focus_garment_region, is_likely_skin_tone, skin_tone_mask
)

from .conftest import CREAM, NAVY, make_image


class TestSkinTone:
    """Test the RGB skin heuristic."""

    @pytest.mark.parametrize("rgb", [(224, 172, 105), (198, 134, 66), (209, 43, 43)])
    def test_skin_like(self, rgb):
        assert is_likely_skin_tone(*rgb)

    @pytest.mark.parametrize("rgb", [NAVY, (128, 128, 128), (40, 200, 40), (90, 30, 20)])
    def test_not_skin(self, rgb):
        assert not is_likely_skin_tone(*rgb)

    def test_mask_matches_scalar_rule(self):
        colors = [(224, 172, 105), NAVY, (128, 128, 128), (209, 43, 43), (90, 30, 20)]
        pixels = np.array([[list(c) + [255] for c in colors]], dtype=np.uint8)
        mask = skin_tone_mask(pixels)
        assert list(mask[0]) == [is_likely_skin_tone(*c) for c in colors]


class TestActivityProfile:
    """Test row and column activity scores."""

    def test_scores(self, navy_garment_image):
        background = estimate_background_color(navy_garment_image)
        rows, cols = activity_profile(navy_garment_image, background)
        assert rows.shape == (200,)
        assert cols.shape == (200,)
        assert rows[10] == 0.0
        assert rows[100] == pytest.approx(0.6)
        assert cols[100] == pytest.approx(0.65)

    def test_transparent_rows_score_zero(self, transparent_image):
        rows, cols = activity_profile(transparent_image, None)
        assert not rows.any()
        assert not cols.any()


class TestFocusGarmentRegion:
    """Test garment bounding box detection."""

    def test_finds_padded_garment_box(self, navy_garment_image):
        assert focus_garment_region(navy_garment_image) == Region(32, 42, 136, 146)

    def test_region_is_inside_image(self, navy_garment_image):
        region = focus_garment_region(navy_garment_image)
        assert region.x >= 0 and region.y >= 0
        assert region.x + region.width <= 200
        assert region.y + region.height <= 200

    def test_solid_image_has_no_region(self):
        assert focus_garment_region(RasterImage.solid(120, 120, (245, 245, 240, 255))) is None

    def test_skin_colored_subject_has_no_region(self, red_patch_image):
        assert focus_garment_region(red_patch_image) is None

    def test_small_image_is_not_focused(self):
        image = make_image(50, 50, CREAM, [(10, 10, 40, 40, NAVY)])
        assert focus_garment_region(image) is None

    def test_narrow_crop_is_rejected(self):
        image = make_image(200, 200, CREAM, [(90, 50, 110, 180, NAVY)])
        assert focus_garment_region(image) is None

    def test_explicit_background(self, navy_garment_image):
        region = focus_garment_region(navy_garment_image, background=(240, 240, 240))
        assert region == Region(32, 42, 136, 146)

    def test_sparse_lower_rows_use_fallback_height(self):
        # lower rows reach 0.15 activity, under the relaxed 0.168 bottom threshold
        image = make_image(200, 200, CREAM, [
            (20, 50, 180, 51, NAVY),
            (20, 51, 50, 111, NAVY),
            (150, 111, 180, 161, NAVY),
        ])
        # bottom = top + 0.6 * height = 170, not the last navy row
        assert focus_garment_region(image) == Region(12, 42, 176, 137)

    def test_near_full_frame_crop_is_rejected(self):
        # padded box 75x59 covers 4425 of 4800 pixels
        image = make_image(75, 64, CREAM, [(3, 7, 72, 62, NAVY)])
        assert focus_garment_region(image) is None

    def test_shorter_garment_in_same_frame_is_kept(self):
        image = make_image(75, 64, CREAM, [(3, 7, 72, 51, NAVY)])
        assert focus_garment_region(image) == Region(0, 5, 75, 48)
