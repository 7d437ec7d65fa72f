"""
Personalised color pairing advice.

Turns a garment's named colors into at most two pairing suggestions (contrast,
harmony, neutral) with short rationales, using the harmony engine and the named
color table. Fully deterministic; no language model involved.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Set

from loguru import logger

from closetcolors.schemas import ColorAdvice, ColorAnalysisResult, ColorPairing, ColorSwatch
from .conversions import normalize_hex
from .harmony import derive_basic_matches, derive_harmony
from .harmony.neutrals import NEUTRAL_POOL
from .naming import nearest_name


PAIRING_TITLES = {
    "contrast": "Bold Contrast",
    "harmony": "Soft Harmony",
    "neutral": "Easy Neutral",
}

STYLE_DESCRIPTORS = {
    "streetwear": "streetwear",
    "sporty": "sporty",
    "athleisure": "sporty",
    "minimal": "minimal",
    "minimalist": "minimal",
    "classic": "classic",
    "business": "tailored",
    "formal": "tailored",
    "preppy": "polished",
    "edgy": "edgy",
    "casual": "casual",
    "boho": "boho",
    "elegant": "elegant",
}

BASE_PHRASES = {
    "contrast": {
        "playful": "for a bold pop",
        "fresh": "for a crisp contrast",
        "polished": "for a classic contrast",
        "refined": "for a refined contrast",
    },
    "harmony": {
        "playful": "to keep things soft and coordinated",
        "fresh": "to keep things easy and cohesive",
        "polished": "to keep the palette elegant",
        "refined": "to maintain a soft, composed mix",
    },
    "neutral": {
        "playful": "for an effortless base",
        "fresh": "for a versatile everyday base",
        "polished": "for a timeless base",
        "refined": "for a grounded, refined base",
    },
}

# Scores used to rank candidate pairings
CONTRAST_SCORE = 8
HARMONY_SCORE = 6
NEUTRAL_SCORE = 5
MAX_PAIRINGS = 2

NEUTRAL_NAMES = {neutral.hex: neutral.name for neutral in NEUTRAL_POOL}


@dataclass
class StyleProfile:
    """What we know about the wearer."""
    age: Optional[int] = None
    gender: Optional[str] = None
    favorite_colors: List[str] = field(default_factory=list)
    disliked_colors: List[str] = field(default_factory=list)
    style_preferences: List[str] = field(default_factory=list)


@dataclass
class _Candidate:
    key: str
    colors: List[ColorSwatch]
    score: int
    highlight: Optional[str] = None


def _token(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    trimmed = value.strip()
    return trimmed.lower() if trimmed else None


def _token_set(values: Optional[Iterable[str]]) -> Set[str]:
    return {token for token in (_token(value) for value in values or ()) if token}


def _ensure_hex(hex_color: str) -> str:
    return normalize_hex(hex_color) or "#000000"


def named_swatch(hex_color: str, name: Optional[str] = None) -> ColorSwatch:
    """Swatch for ``hex_color``, named from the color table unless ``name`` is given."""
    normalized = _ensure_hex(hex_color)
    label = name.strip() if name and name.strip() else nearest_name(normalized)
    return ColorSwatch(name=label, hex=normalized)


def swatches_from_analysis(result: ColorAnalysisResult) -> List[ColorSwatch]:
    """Named swatches for the dominant colors of an analysis, in rank order."""
    return [named_swatch(color.hex) for color in result.dominant_colors]


def pick_tone_word(age: Optional[int]) -> str:
    if not isinstance(age, (int, float)) or math.isnan(age):
        return "fresh"
    if age < 21:
        return "playful"
    if age < 34:
        return "fresh"
    if age < 50:
        return "polished"
    return "refined"


def map_style_descriptor(styles: Optional[Sequence[str]]) -> Optional[str]:
    for style in styles or ():
        descriptor = STYLE_DESCRIPTORS.get(_token(style) or "")
        if descriptor:
            return descriptor
    return None


def format_list(values: Sequence[str]) -> str:
    """'a', 'a or b', 'a, b, or c'."""
    if not values:
        return ""
    if len(values) == 1:
        return values[0]
    if len(values) == 2:
        return f"{values[0]} or {values[1]}"
    return f"{', '.join(values[:-1])}, or {values[-1]}"


def _gender_note(key: str, gender: Optional[str]) -> str:
    token = _token(gender)
    if not token:
        return ""
    if token.startswith("fem") or token == "woman":
        return {"contrast": " while keeping it softly feminine",
                "harmony": " with a graceful ease"}.get(key, " with a feminine, polished finish")
    if token.startswith("mal") or token == "man":
        return {"contrast": " while keeping it sharp",
                "harmony": " with a clean, modern edge"}.get(key, " with a grounded, confident feel")
    if "non" in token or "other" in token:
        return " with an inclusive, relaxed vibe"
    return ""


def build_rationale(key: str, tone: str, style_descriptor: Optional[str],
                    gender: Optional[str], highlight: Optional[str] = None) -> str:
    style_note = f" that leans {style_descriptor}" if style_descriptor else ""
    favourite_note = " since it's one of your favorites" if highlight else ""
    return f"{BASE_PHRASES[key][tone]}{style_note}{_gender_note(key, gender)}{favourite_note}."


def normalize_garment_type(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    token = value.lower()
    if "top" in token:
        return "top"
    if any(word in token for word in ("bottom", "pant", "short", "skirt")):
        return "bottom"
    if any(word in token for word in ("outer", "jacket", "coat")):
        return "outer layer"
    if any(word in token for word in ("foot", "shoe", "boot")):
        return "footwear"
    if "dress" in token:
        return "dress"
    if any(word in token for word in ("bag", "belt", "hat", "accessory")):
        return "accessory"
    return value


def _distinct(swatches: Iterable[ColorSwatch]) -> List[ColorSwatch]:
    seen = set()
    result = []
    for swatch in swatches:
        key = (swatch.name.lower(), swatch.hex.lower())
        if key in seen:
            continue
        seen.add(key)
        result.append(swatch)
    return result


class _Preferences:
    """Favorite / disliked lookups by name or hex."""

    def __init__(self, profile: StyleProfile):
        self.favorites = _token_set(profile.favorite_colors)
        self.disliked = _token_set(profile.disliked_colors)

    def allows(self, swatch: ColorSwatch) -> bool:
        return _token(swatch.name) not in self.disliked and swatch.hex.lower() not in self.disliked

    def highlight(self, swatch: ColorSwatch) -> Optional[str]:
        token = _token(swatch.name)
        if not token:
            return None
        if token in self.favorites or swatch.hex.lower() in self.favorites:
            return swatch.name.lower()
        return None


def _candidates(base: ColorSwatch, prefs: _Preferences,
                style_descriptor: Optional[str]) -> List[_Candidate]:
    matches = derive_basic_matches(base.hex)
    palette = derive_harmony(base.hex)
    candidates = []

    accent = named_swatch(matches.complementary)
    if prefs.allows(accent):
        highlight = prefs.highlight(accent)
        score = CONTRAST_SCORE + (3 if highlight else 0)
        if style_descriptor in ("streetwear", "edgy"):
            score += 1
        candidates.append(_Candidate("contrast", _distinct([base, accent]), score, highlight))

    analogous = [swatch for swatch in (named_swatch(h) for h in matches.analogous[:2]) if prefs.allows(swatch)]
    if analogous:
        highlight = next((h for h in map(prefs.highlight, analogous) if h), None)
        score = HARMONY_SCORE + len(analogous) + (2 if highlight else 0)
        if style_descriptor in ("minimal", "classic"):
            score += 1
        candidates.append(_Candidate("harmony", _distinct([base, analogous[0]]), score, highlight))

    base_name = _token(base.name)
    neutrals = [
        swatch for swatch in (named_swatch(h, NEUTRAL_NAMES.get(h)) for h in palette.neutrals)
        if _token(swatch.name) != base_name and prefs.allows(swatch)
    ][:2]
    if neutrals:
        highlight = next((h for h in map(prefs.highlight, neutrals) if h), None)
        score = NEUTRAL_SCORE + (1 if highlight else 0)
        if style_descriptor in ("tailored", "classic", "elegant"):
            score += 1
        candidates.append(_Candidate("neutral", _distinct([base, neutrals[0]]), score, highlight))

    return candidates


def _pairing_sentence(pairing: ColorPairing, prefix: str, garment_phrase: str) -> str:
    accents = format_list([swatch.name.lower() for swatch in pairing.colors[1:]])
    rationale = re.sub(r"\.*$", "", pairing.rationale).lower()
    sentence = f"{prefix} pairing {garment_phrase} with {accents} {rationale}".strip()
    highlight_note = f" It also taps into your love of {pairing.highlight}." if pairing.highlight else ""
    return f"{sentence}.{highlight_note}"


def build_color_advice(colors: Optional[Sequence[ColorSwatch]],
                       garment_type: Optional[str] = None,
                       profile: Optional[StyleProfile] = None) -> ColorAdvice:
    """
    Pairing advice for a garment.

    Args:
        colors: Named colors of the garment; the first one is the base
        garment_type: Free-text garment type ("Denim jacket", "skirt", ...)
        profile: Wearer preferences used to filter and rank pairings

    Returns:
        ColorAdvice with up to two pairings and a summary sentence
    """
    profile = profile or StyleProfile()
    tone = pick_tone_word(profile.age)
    style_descriptor = map_style_descriptor(profile.style_preferences)
    prefs = _Preferences(profile)

    base = named_swatch(colors[0].hex, colors[0].name) if colors else None
    candidates = _candidates(base, prefs, style_descriptor) if base else []

    ranked = sorted(candidates, key=lambda candidate: -candidate.score)[:MAX_PAIRINGS]
    pairings = [
        ColorPairing(
            key=candidate.key,
            title=PAIRING_TITLES[candidate.key],
            colors=candidate.colors,
            rationale=build_rationale(candidate.key, tone, style_descriptor,
                                      profile.gender, candidate.highlight),
            highlight=candidate.highlight,
        )
        for candidate in ranked
    ]

    garment = normalize_garment_type(garment_type)
    garment_phrase = f"this {garment}" if garment else "this piece"

    if not pairings:
        if base:
            summary = (f"Lean into warm neutrals or soft charcoal with {garment_phrase} "
                       "to keep the look balanced and easy to wear.")
        else:
            summary = ("Try pairing this piece with easy neutrals like soft beige or charcoal "
                       "to keep the look effortless.")
    else:
        sentences = [_pairing_sentence(pairings[0], "Try", garment_phrase)]
        if len(pairings) > 1:
            sentences.append(_pairing_sentence(pairings[1], "Or", garment_phrase))
        summary = " ".join(sentences)

    logger.debug(f"Built {len(pairings)} pairings for base {base.hex if base else None}: "
                 f"{[pairing.key for pairing in pairings]}")
    return ColorAdvice(base_color=base, summary=summary, pairings=pairings)
