"""
Unit tests for pairing advice.
"""
import math

import pytest

from closetcolors.schemas import ColorAnalysisResult, ColorSwatch, WeightedColor
from closetcolors.services.colors.advice import (
    StyleProfile, build_color_advice, format_list, map_style_descriptor,
    named_swatch, normalize_garment_type, pick_tone_word, swatches_from_analysis
)


NAVY = ColorSwatch(name="Navy", hex="#000080")


class TestHelpers:
    """Test wording helpers."""

    @pytest.mark.parametrize("age,word", [
        (None, "fresh"), (16, "playful"), (25, "fresh"), (40, "polished"),
        (65, "refined"), (math.nan, "fresh"),
    ])
    def test_tone_word(self, age, word):
        assert pick_tone_word(age) == word

    def test_style_descriptor(self):
        assert map_style_descriptor(["Business", "edgy"]) == "tailored"
        assert map_style_descriptor(["unknown", " Athleisure "]) == "sporty"
        assert map_style_descriptor(None) is None

    def test_format_list(self):
        assert format_list([]) == ""
        assert format_list(["navy"]) == "navy"
        assert format_list(["navy", "white"]) == "navy or white"
        assert format_list(["navy", "white", "red"]) == "navy, white, or red"

    @pytest.mark.parametrize("value,expected", [
        ("Denim jacket", "outer layer"),
        ("Crop top", "top"),
        ("Wide-leg pants", "bottom"),
        ("Ankle boots", "footwear"),
        ("Maxi dress", "dress"),
        ("Scarf", "Scarf"),
        (None, None),
    ])
    def test_garment_type(self, value, expected):
        assert normalize_garment_type(value) == expected

    def test_named_swatch(self):
        assert named_swatch("#000080") == NAVY
        assert named_swatch("#000080", "Midnight").name == "Midnight"
        assert named_swatch("garbage").hex == "#000000"

    def test_swatches_from_analysis(self):
        result = ColorAnalysisResult(dominant_colors=[WeightedColor(hex="#000080", weight=1.0)])
        assert swatches_from_analysis(result) == [NAVY]


class TestBuildColorAdvice:
    """Test pairing selection and summaries."""

    def test_no_colors(self):
        advice = build_color_advice([])
        assert advice.base_color is None
        assert advice.pairings == []
        assert advice.summary.startswith("Try pairing this piece with easy neutrals")

    def test_default_pairings(self):
        advice = build_color_advice([NAVY], garment_type="Denim jacket")
        assert advice.base_color == NAVY
        assert [p.key for p in advice.pairings] == ["contrast", "harmony"]
        assert advice.pairings[0].title == "Bold Contrast"
        assert all(p.colors[0] == NAVY for p in advice.pairings)
        assert advice.summary.startswith("Try pairing this outer layer with")
        assert " Or pairing this outer layer with" in advice.summary

    def test_style_and_tone_in_rationale(self):
        profile = StyleProfile(age=45, style_preferences=["formal"])
        advice = build_color_advice([NAVY], profile=profile)
        for pairing in advice.pairings:
            assert "that leans tailored" in pairing.rationale
        assert advice.pairings[0].rationale.startswith("for a classic contrast")

    def test_gender_note(self):
        advice = build_color_advice([NAVY], profile=StyleProfile(gender="Female"))
        assert "softly feminine" in advice.pairings[0].rationale

    def test_disliked_colors_are_dropped(self):
        contrast = build_color_advice([NAVY]).pairings[0].colors[1]
        profile = StyleProfile(disliked_colors=[contrast.name])
        keys = [p.key for p in build_color_advice([NAVY], profile=profile).pairings]
        assert "contrast" not in keys
        assert keys == ["harmony", "neutral"]

    def test_favorite_is_highlighted(self):
        contrast = build_color_advice([NAVY]).pairings[0].colors[1]
        profile = StyleProfile(favorite_colors=[contrast.name.upper()])
        advice = build_color_advice([NAVY], profile=profile)
        assert advice.pairings[0].key == "contrast"
        assert advice.pairings[0].highlight == contrast.name.lower()
        assert advice.pairings[0].rationale.endswith("since it's one of your favorites.")
        assert f"your love of {contrast.name.lower()}" in advice.summary

    def test_alias_dump(self):
        dumped = build_color_advice([NAVY]).model_dump(by_alias=True)
        assert dumped["baseColor"] == {"name": "Navy", "hex": "#000080"}

    def test_neutrals_use_pool_names(self):
        black = ColorSwatch(name="Black", hex="#000000")
        profile = StyleProfile(disliked_colors=["Black", "white"])
        advice = build_color_advice([black], profile=profile)
        assert [p.key for p in advice.pairings] == ["neutral"]
        assert advice.pairings[0].colors == [black, ColorSwatch(name="Off-White", hex="#f5f5f5")]
        assert "with off-white" in advice.summary
