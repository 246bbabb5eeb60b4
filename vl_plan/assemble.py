"""Assembler merging classifier output with fixed policy defaults."""
from __future__ import annotations

from typing import Optional

from vl_plan.classify import Classification, classify
from vl_plan.models import (
    ArtStyleDescriptor,
    BackgroundDescriptor,
    BrushDetail,
    CameraAngle,
    CameraDescriptor,
    ColorLightingDescriptor,
    CompositionDescriptor,
    GenerationMode,
    NegativeConstraints,
    QualityPreset,
    SafetyProfile,
    ScenePlan,
    SubjectDescriptor,
)

DEFAULT_FOCAL_LENGTH_MM = 35.0
DEFAULT_POSITION_HINT = "center"
DEFAULT_VISUAL_ARTIFACTS = "blurry, extra limbs, distorted faces, text artifacts"
DEFAULT_CONTENT_EXCLUSIONS = "no gore, no real-world logos"


def default_negative_constraints() -> NegativeConstraints:
    return NegativeConstraints(
        visual_artifacts=DEFAULT_VISUAL_ARTIFACTS,
        content_exclusions=DEFAULT_CONTENT_EXCLUSIONS,
    )


def assemble(
    sanitized_prompt: str,
    mode: GenerationMode,
    safety: SafetyProfile,
    quality: QualityPreset,
    *,
    classification: Optional[Classification] = None,
) -> ScenePlan:
    """Build the scene plan for an already sanitized prompt.

    ``classification`` may be passed when the caller has already run the
    classifier bank over the same text.
    """

    facets = classification if classification is not None else classify(sanitized_prompt)

    return ScenePlan(
        core_prompt=sanitized_prompt,
        mode=GenerationMode(mode),
        safety_profile=SafetyProfile(safety),
        quality_preset=QualityPreset(quality),
        aspect_ratio=facets.aspect_ratio,
        primary_subject=SubjectDescriptor(
            name=facets.subject_name,
            attributes="",
            position_hint=DEFAULT_POSITION_HINT,
        ),
        secondary_subjects=(),
        background=BackgroundDescriptor(
            environment=facets.environment,
            time_of_day=facets.time_of_day,
            weather=facets.weather,
        ),
        color_lighting=ColorLightingDescriptor(
            color_tone=facets.color_tone,
            lighting=facets.lighting,
            palette_hint="",
        ),
        camera=CameraDescriptor(
            angle=facets.camera_angle,
            focal_length_mm=DEFAULT_FOCAL_LENGTH_MM,
            depth_of_field=facets.camera_angle == CameraAngle.CloseUp,
        ),
        composition=CompositionDescriptor(
            rule=facets.composition,
            allow_cropping=True,
            center_main_subject=True,
        ),
        art_style=ArtStyleDescriptor(
            style=facets.art_style,
            brush_detail=BrushDetail.Normal,
            era_hint="",
        ),
        negative_constraints=default_negative_constraints(),
    )


__all__ = [
    "DEFAULT_CONTENT_EXCLUSIONS",
    "DEFAULT_FOCAL_LENGTH_MM",
    "DEFAULT_POSITION_HINT",
    "DEFAULT_VISUAL_ARTIFACTS",
    "assemble",
    "default_negative_constraints",
]
