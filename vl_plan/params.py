"""Backend generation parameters derived from a compiled scene plan."""
from __future__ import annotations

import hashlib
from typing import Dict, Optional, Tuple

from vl_plan.models import AspectRatio, CompileResult, FrozenModel, QualityPreset, SafetyProfile

SEED_MIN = 100_000_000
SEED_SPAN = 900_000_000
IMAGE_FORMAT = "png"

QUALITY_TABLE: Dict[QualityPreset, Tuple[int, float]] = {
    QualityPreset.Draft: (12, 5.0),
    QualityPreset.Standard: (20, 6.5),
    QualityPreset.High: (28, 7.5),
    QualityPreset.Ultra: (36, 8.0),
}

DIMENSIONS: Dict[AspectRatio, Tuple[int, int, str]] = {
    AspectRatio.Ratio_16_9: (1280, 720, "landscape"),
    AspectRatio.Ratio_9_16: (720, 1280, "story"),
    AspectRatio.Ratio_1_1: (1024, 1024, "square"),
    AspectRatio.Ratio_4_3: (1152, 864, "landscape"),
    AspectRatio.Ratio_3_4: (864, 1152, "portrait"),
    AspectRatio.Ratio_21_9: (1728, 720, "cinematic"),
}


class SafetyConfig(FrozenModel):
    profile: SafetyProfile
    block_nsfw: bool
    block_graphic_violence: bool
    block_hate: bool
    block_harassment: bool
    block_self_harm: bool


class GenerationParams(FrozenModel):
    """Sampler and canvas settings handed to a generation backend."""

    preset: QualityPreset
    steps: int
    guidance: float
    seed: int
    width: int
    height: int
    ratio: AspectRatio
    format: str
    layout: str
    safety: SafetyConfig


def build_safety_config(profile: SafetyProfile) -> SafetyConfig:
    """Expand a safety profile into per-category flags.

    ``allow-nsfw`` lifts only the NSFW block; every other category stays on.
    """

    profile = SafetyProfile(profile)
    return SafetyConfig(
        profile=profile,
        block_nsfw=profile == SafetyProfile.Safe,
        block_graphic_violence=True,
        block_hate=True,
        block_harassment=True,
        block_self_harm=True,
    )


def derive_seed(json_control: str) -> int:
    digest = hashlib.sha256(json_control.encode("utf-8")).hexdigest()
    return SEED_MIN + int(digest[:16], 16) % SEED_SPAN


def build_generation_params(result: CompileResult, seed: Optional[int] = None) -> GenerationParams:
    """Map the plan's quality preset and aspect ratio to backend parameters."""

    plan = result.scene_plan
    steps, guidance = QUALITY_TABLE[plan.quality_preset]
    width, height, layout = DIMENSIONS[plan.aspect_ratio]
    return GenerationParams(
        preset=plan.quality_preset,
        steps=steps,
        guidance=guidance,
        seed=derive_seed(result.json_control) if seed is None else int(seed),
        width=width,
        height=height,
        ratio=plan.aspect_ratio,
        format=IMAGE_FORMAT,
        layout=layout,
        safety=build_safety_config(plan.safety_profile),
    )


__all__ = [
    "DIMENSIONS",
    "GenerationParams",
    "IMAGE_FORMAT",
    "QUALITY_TABLE",
    "SafetyConfig",
    "build_generation_params",
    "build_safety_config",
    "derive_seed",
]
