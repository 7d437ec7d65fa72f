"""
Tests for the public package surface.
"""
import closetcolors
from closetcolors import RasterImage, analyze_colors, derive_basic_matches, ensure_readable, nearest_name


class TestPublicApi:
    """Test the exported engine functions work together."""

    def test_version(self):
        assert closetcolors.__version__ == "1.0.0"

    def test_exports(self):
        for name in closetcolors.__all__:
            assert hasattr(closetcolors, name)

    def test_swatch_pipeline(self):
        image = RasterImage.from_buffer(bytes([0, 0, 128, 255]) * 64 * 64, 64, 64)
        result = analyze_colors(image)
        assert result.hexes == ["#000080"]
        assert nearest_name(result.hexes[0]) == "Navy"
        assert ensure_readable(result.hexes[0]) == ensure_readable("#000080")
        assert derive_basic_matches(result.hexes[0]).complementary.startswith("#")
