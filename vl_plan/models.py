"""Data models for the scene plan compiler."""
from __future__ import annotations

from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

from vl_plan.sanitize import MAX_PROMPT_BYTES


class FrozenModel(BaseModel):
    """Immutable pydantic base model that forbids unknown fields."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class GenerationMode(str, Enum):
    TextToImage = "text-to-image"
    ImageToImage = "image-to-image"
    Inpaint = "inpaint"
    Outpaint = "outpaint"


class SafetyProfile(str, Enum):
    Safe = "safe"
    AllowNSFW = "allow-nsfw"


class QualityPreset(str, Enum):
    Draft = "draft"
    Standard = "standard"
    High = "high"
    Ultra = "ultra"


class AspectRatio(str, Enum):
    Ratio_1_1 = "1:1"
    Ratio_16_9 = "16:9"
    Ratio_9_16 = "9:16"
    Ratio_4_3 = "4:3"
    Ratio_3_4 = "3:4"
    Ratio_21_9 = "21:9"


class ArtStyle(str, Enum):
    Unspecified = "unspecified"
    Photorealistic = "photorealistic"
    DigitalPainting = "digital-painting"
    Watercolor = "watercolor"
    Anime = "anime"
    LineArt = "line-art"
    LowPoly = "low-poly"
    PixelArt = "pixel-art"
    ConceptArt = "concept-art"


class Lighting(str, Enum):
    Auto = "auto"
    Soft = "soft"
    Hard = "hard"
    Dramatic = "dramatic"
    Studio = "studio"


class ColorTone(str, Enum):
    Neutral = "neutral"
    Warm = "warm"
    Cool = "cool"
    HighContrast = "high-contrast"
    Pastel = "pastel"


class CameraAngle(str, Enum):
    EyeLevel = "eye-level"
    LowAngle = "low-angle"
    HighAngle = "high-angle"
    TopDown = "top-down"
    Isometric = "isometric"
    CloseUp = "close-up"
    WideShot = "wide-shot"


class CompositionRule(str, Enum):
    NoRule = "none"
    RuleOfThirds = "rule-of-thirds"
    Centered = "centered"
    GoldenRatio = "golden-ratio"
    Symmetric = "symmetric"
    LeadingLines = "leading-lines"


class BrushDetail(str, Enum):
    Auto = "auto"
    Minimal = "minimal"
    Normal = "normal"
    High = "high"
    Hyper = "hyper"


class SubjectDescriptor(FrozenModel):
    name: str
    attributes: str = ""
    position_hint: str = ""


class BackgroundDescriptor(FrozenModel):
    """Setting of the scene; an empty string means the cue was not found."""

    environment: str = ""
    time_of_day: str = ""
    weather: str = ""


class ColorLightingDescriptor(FrozenModel):
    color_tone: ColorTone = ColorTone.Neutral
    lighting: Lighting = Lighting.Auto
    palette_hint: str = ""


class CameraDescriptor(FrozenModel):
    angle: CameraAngle = CameraAngle.EyeLevel
    focal_length_mm: float = 35.0
    depth_of_field: bool = False


class CompositionDescriptor(FrozenModel):
    rule: CompositionRule = CompositionRule.NoRule
    allow_cropping: bool = True
    center_main_subject: bool = True


class ArtStyleDescriptor(FrozenModel):
    style: ArtStyle = ArtStyle.Unspecified
    brush_detail: BrushDetail = BrushDetail.Normal
    era_hint: str = ""


class NegativeConstraints(FrozenModel):
    visual_artifacts: str
    content_exclusions: str


class ScenePlan(FrozenModel):
    """Structured description of a single generation request.

    Fields are declared in the canonical control order so ``model_dump``
    lines up with the serialized document.
    """

    # sanitized text is printable ASCII, so characters and bytes agree
    core_prompt: str = Field(min_length=1, max_length=MAX_PROMPT_BYTES, pattern=r"^[ -~]+$")
    mode: GenerationMode
    safety_profile: SafetyProfile
    quality_preset: QualityPreset
    aspect_ratio: AspectRatio
    primary_subject: SubjectDescriptor
    secondary_subjects: Tuple[SubjectDescriptor, ...] = ()
    background: BackgroundDescriptor
    color_lighting: ColorLightingDescriptor
    camera: CameraDescriptor
    composition: CompositionDescriptor
    art_style: ArtStyleDescriptor
    negative_constraints: NegativeConstraints


class CompileRequest(FrozenModel):
    """Incoming request payload for the compiler.

    The prompt is kept verbatim; whitespace handling belongs to the sanitizer.
    """

    raw_prompt: str
    mode: GenerationMode = GenerationMode.TextToImage
    safety_profile: SafetyProfile = SafetyProfile.Safe
    quality_preset: QualityPreset = QualityPreset.Standard


class CompileResult(FrozenModel):
    """Scene plan together with its canonical JSON control document."""

    scene_plan: ScenePlan
    json_control: str


__all__ = [
    "ArtStyle",
    "ArtStyleDescriptor",
    "AspectRatio",
    "BackgroundDescriptor",
    "BrushDetail",
    "CameraAngle",
    "CameraDescriptor",
    "ColorLightingDescriptor",
    "ColorTone",
    "CompileRequest",
    "CompileResult",
    "CompositionDescriptor",
    "CompositionRule",
    "FrozenModel",
    "GenerationMode",
    "Lighting",
    "NegativeConstraints",
    "QualityPreset",
    "SafetyProfile",
    "ScenePlan",
    "SubjectDescriptor",
]
