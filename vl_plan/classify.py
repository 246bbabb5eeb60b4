"""Keyword classifiers deriving scene facets from sanitized prompt text.

Every facet is an ordered table of ``KeywordRule`` entries. Tables are
evaluated top to bottom and the first rule with a keyword present in the
lowercased text wins; when nothing matches the facet default is returned.
Reordering a table changes observable output.
"""
from __future__ import annotations

from typing import Iterable, NamedTuple, Sequence, Tuple, TypeVar

from vl_plan.models import (
    ArtStyle,
    AspectRatio,
    CameraAngle,
    ColorTone,
    CompositionRule,
    FrozenModel,
    Lighting,
)
from vl_plan.sanitize import ascii_lower

T = TypeVar("T")


class KeywordRule(NamedTuple):
    keywords: Tuple[str, ...]
    value: object

    def matches(self, lowered: str) -> bool:
        return any(keyword in lowered for keyword in self.keywords)


def first_match(rules: Sequence[KeywordRule], lowered: str, default: T) -> T:
    """Return the value of the first rule matching ``lowered`` or ``default``."""

    for rule in rules:
        if rule.matches(lowered):
            return rule.value  # type: ignore[return-value]
    return default


ASPECT_RULES = (
    KeywordRule(("9:16",), AspectRatio.Ratio_9_16),
    KeywordRule(("21:9",), AspectRatio.Ratio_21_9),
    KeywordRule(("16:9",), AspectRatio.Ratio_16_9),
    KeywordRule(("4:3",), AspectRatio.Ratio_4_3),
    KeywordRule(("3:4",), AspectRatio.Ratio_3_4),
    KeywordRule(("vertical", "portrait"), AspectRatio.Ratio_9_16),
    KeywordRule(("cinematic", "wide"), AspectRatio.Ratio_16_9),
)

ART_STYLE_RULES = (
    KeywordRule(("photo", "photoreal", "realistic"), ArtStyle.Photorealistic),
    KeywordRule(("anime", "manga"), ArtStyle.Anime),
    KeywordRule(("watercolor",), ArtStyle.Watercolor),
    KeywordRule(("pixel",), ArtStyle.PixelArt),
    KeywordRule(("line art", "sketch"), ArtStyle.LineArt),
    KeywordRule(("low poly", "low-poly"), ArtStyle.LowPoly),
    KeywordRule(("concept art", "key art"), ArtStyle.ConceptArt),
    KeywordRule(("painting", "digital painting"), ArtStyle.DigitalPainting),
)

LIGHTING_RULES = (
    KeywordRule(("soft light", "soft lighting"), Lighting.Soft),
    KeywordRule(("dramatic", "cinematic light"), Lighting.Dramatic),
    KeywordRule(("studio", "three-point"), Lighting.Studio),
    KeywordRule(("hard light",), Lighting.Hard),
)

COLOR_TONE_RULES = (
    KeywordRule(("teal and orange", "warm", "sunset"), ColorTone.Warm),
    KeywordRule(("cool", "blueish"), ColorTone.Cool),
    KeywordRule(("pastel",), ColorTone.Pastel),
    KeywordRule(("high contrast", "noir"), ColorTone.HighContrast),
)

CAMERA_ANGLE_RULES = (
    KeywordRule(("top-down", "top down", "bird's-eye"), CameraAngle.TopDown),
    KeywordRule(("close-up", "close up", "portrait shot"), CameraAngle.CloseUp),
    KeywordRule(("wide shot", "wide angle"), CameraAngle.WideShot),
    KeywordRule(("low angle",), CameraAngle.LowAngle),
    KeywordRule(("high angle",), CameraAngle.HighAngle),
    KeywordRule(("isometric",), CameraAngle.Isometric),
)

COMPOSITION_RULES = (
    KeywordRule(("rule of thirds",), CompositionRule.RuleOfThirds),
    KeywordRule(("centered", "symmetrical", "symmetry"), CompositionRule.Centered),
    KeywordRule(("golden ratio",), CompositionRule.GoldenRatio),
    KeywordRule(("leading lines",), CompositionRule.LeadingLines),
    KeywordRule(("symmetric",), CompositionRule.Symmetric),
)

ENVIRONMENT_RULES = (
    KeywordRule(("forest",), "forest"),
    KeywordRule(("city",), "city"),
    KeywordRule(("space", "galaxy", "nebula"), "space"),
    KeywordRule(("beach", "ocean", "sea"), "seaside"),
)

TIME_OF_DAY_RULES = (
    KeywordRule(("sunset",), "sunset"),
    KeywordRule(("night",), "night"),
    KeywordRule(("dawn", "sunrise"), "dawn"),
)

WEATHER_RULES = (
    KeywordRule(("rain",), "rainy"),
    KeywordRule(("fog", "mist"), "foggy"),
    KeywordRule(("snow",), "snowy"),
)


def classify_aspect_ratio(lowered: str) -> AspectRatio:
    return first_match(ASPECT_RULES, lowered, AspectRatio.Ratio_1_1)


def classify_art_style(lowered: str) -> ArtStyle:
    return first_match(ART_STYLE_RULES, lowered, ArtStyle.Unspecified)


def classify_lighting(lowered: str) -> Lighting:
    return first_match(LIGHTING_RULES, lowered, Lighting.Auto)


def classify_color_tone(lowered: str) -> ColorTone:
    return first_match(COLOR_TONE_RULES, lowered, ColorTone.Neutral)


def classify_camera_angle(lowered: str) -> CameraAngle:
    return first_match(CAMERA_ANGLE_RULES, lowered, CameraAngle.EyeLevel)


def classify_composition(lowered: str) -> CompositionRule:
    return first_match(COMPOSITION_RULES, lowered, CompositionRule.NoRule)


def classify_environment(lowered: str) -> str:
    return first_match(ENVIRONMENT_RULES, lowered, "")


def classify_time_of_day(lowered: str) -> str:
    return first_match(TIME_OF_DAY_RULES, lowered, "")


def classify_weather(lowered: str) -> str:
    return first_match(WEATHER_RULES, lowered, "")


SUBJECT_FALLBACK = "subject"
SUBJECT_SEPARATORS = frozenset(" ,.!?")
STOP_WORDS = frozenset({"a", "an", "the", "of", "in", "on", "with", "at", "to", "for"})

# Words that describe framing, style or setting rather than the subject.
DESCRIPTOR_WORDS = frozenset(
    {
        # framing and aspect
        "vertical", "portrait", "cinematic", "wide", "widescreen", "landscape", "square",
        "shot", "angle", "view", "lens", "close-up", "closeup", "top-down",
        "bird's-eye", "isometric", "composition", "centered", "symmetrical",
        "symmetry", "symmetric", "thirds", "rule", "golden", "ratio", "leading", "lines",
        # style
        "style", "art", "photo", "photoreal", "photorealistic", "realistic", "anime",
        "manga", "watercolor", "pixel", "pixel-art", "sketch", "line-art", "low-poly",
        "poly", "concept", "painting", "digital", "render", "detailed", "ultra-detailed",
        "4k", "8k", "hd",
        # light and color
        "light", "lighting", "lit", "soft", "dramatic", "studio", "three-point", "hard",
        "warm", "cool", "pastel", "noir", "contrast", "high-contrast", "blueish",
        "color", "colors", "grade", "palette", "tones",
        # setting
        "forest", "forests", "city", "space", "galaxy", "nebula", "beach", "ocean", "sea",
        "sunset", "night", "dawn", "sunrise", "rain", "rainy", "fog", "foggy", "mist",
        "misty", "snow", "snowy",
    }
)


def tokenize(lowered: str) -> list[str]:
    """Split on space and ``, . ! ?`` keeping maximal runs of other characters."""

    tokens: list[str] = []
    current: list[str] = []
    for ch in lowered:
        if ch in SUBJECT_SEPARATORS:
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(ch)
    if current:
        tokens.append("".join(current))
    return tokens


def _is_descriptor(token: str) -> bool:
    if not any("a" <= ch <= "z" for ch in token):
        return True
    return token in DESCRIPTOR_WORDS


def _last_matching(tokens: Iterable[str], accept) -> str | None:
    for token in reversed(list(tokens)):
        if accept(token):
            return token
    return None


def guess_subject_name(prompt: str) -> str:
    """Pick the subject as the last meaningful word of the prompt."""

    tokens = tokenize(ascii_lower(prompt))
    if not tokens:
        return SUBJECT_FALLBACK

    subject = _last_matching(tokens, lambda tok: tok not in STOP_WORDS and not _is_descriptor(tok))
    if subject is None:
        subject = _last_matching(tokens, lambda tok: tok not in STOP_WORDS)
    if subject is None:
        subject = tokens[-1]
    return subject


class Classification(FrozenModel):
    """Every facet the classifier bank derives from one prompt."""

    aspect_ratio: AspectRatio
    art_style: ArtStyle
    lighting: Lighting
    color_tone: ColorTone
    camera_angle: CameraAngle
    composition: CompositionRule
    subject_name: str
    environment: str
    time_of_day: str
    weather: str


def classify(sanitized: str) -> Classification:
    """Run the full classifier bank over sanitized prompt text."""

    lowered = ascii_lower(sanitized)
    return Classification(
        aspect_ratio=classify_aspect_ratio(lowered),
        art_style=classify_art_style(lowered),
        lighting=classify_lighting(lowered),
        color_tone=classify_color_tone(lowered),
        camera_angle=classify_camera_angle(lowered),
        composition=classify_composition(lowered),
        subject_name=guess_subject_name(sanitized),
        environment=classify_environment(lowered),
        time_of_day=classify_time_of_day(lowered),
        weather=classify_weather(lowered),
    )


__all__ = [
    "ART_STYLE_RULES",
    "ASPECT_RULES",
    "CAMERA_ANGLE_RULES",
    "COLOR_TONE_RULES",
    "COMPOSITION_RULES",
    "Classification",
    "DESCRIPTOR_WORDS",
    "ENVIRONMENT_RULES",
    "KeywordRule",
    "LIGHTING_RULES",
    "STOP_WORDS",
    "SUBJECT_FALLBACK",
    "TIME_OF_DAY_RULES",
    "WEATHER_RULES",
    "classify",
    "classify_art_style",
    "classify_aspect_ratio",
    "classify_camera_angle",
    "classify_color_tone",
    "classify_composition",
    "classify_environment",
    "classify_lighting",
    "classify_time_of_day",
    "classify_weather",
    "first_match",
    "guess_subject_name",
    "tokenize",
]
