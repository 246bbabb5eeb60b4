"""Per-platform request bodies built from a compiled scene plan.

Payloads are only assembled here; sending them is the caller's concern.
"""
from __future__ import annotations

import hashlib
import json
from functools import lru_cache
from typing import Any, Dict, List, Optional

from vl_plan.errors import UnknownPlatform, UnsupportedMode
from vl_plan.models import (
    ArtStyle,
    CameraAngle,
    ColorTone,
    CompileResult,
    CompositionRule,
    GenerationMode,
    Lighting,
    ScenePlan,
)
from vl_plan.params import GenerationParams, build_generation_params
from vl_plan.sanitize import sanitize_image_url
from vl_sdk.loader import load_platform_registry
from vl_sdk.models import PlatformProfile, PlatformRegistry

SYSTEM_DIRECTIVES = (
    "You must produce safe-for-work, non-violent, non-hateful content only.",
    "All outputs must be visually coherent, high-quality, and respectful.",
)

TASK_GENERATE = "image-generate"
TASK_EDIT = "image-edit"


@lru_cache(maxsize=1)
def get_platform_registry() -> PlatformRegistry:
    return load_platform_registry()


def resolve_platform(platform_id: str, registry: Optional[PlatformRegistry] = None) -> PlatformProfile:
    registry = registry if registry is not None else get_platform_registry()
    profile = registry.get(platform_id or "")
    if profile is None:
        raise UnknownPlatform(f"Unknown platform '{platform_id}'")
    return profile


def task_for_mode(mode: GenerationMode) -> str:
    return TASK_GENERATE if mode == GenerationMode.TextToImage else TASK_EDIT


def request_id_for(json_control: str) -> str:
    return "vlig-" + hashlib.sha256(json_control.encode("utf-8")).hexdigest()[:16]


def style_hints(plan: ScenePlan) -> List[str]:
    """Short phrases for every facet that moved off its default."""

    hints: List[str] = []
    if plan.art_style.style != ArtStyle.Unspecified:
        hints.append(f"{plan.art_style.style.value} style")
    if plan.color_lighting.lighting != Lighting.Auto:
        hints.append(f"{plan.color_lighting.lighting.value} lighting")
    if plan.color_lighting.color_tone != ColorTone.Neutral:
        hints.append(f"{plan.color_lighting.color_tone.value} color tone")
    if plan.camera.angle != CameraAngle.EyeLevel:
        hints.append(f"{plan.camera.angle.value} camera")
    if plan.composition.rule != CompositionRule.NoRule:
        hints.append(f"{plan.composition.rule.value} composition")
    background = plan.background
    for value in (background.environment, background.time_of_day, background.weather):
        if value:
            hints.append(value)
    return hints


def negative_prompts(plan: ScenePlan) -> List[str]:
    negatives = plan.negative_constraints
    terms: List[str] = []
    for text in (negatives.visual_artifacts, negatives.content_exclusions):
        terms.extend(term.strip() for term in text.split(",") if term.strip())
    return terms


def _google_body(
    plan: ScenePlan, profile: PlatformProfile, params: GenerationParams, source: Optional[str]
) -> Dict[str, Any]:
    parts: List[Dict[str, Any]] = [{"text": directive} for directive in SYSTEM_DIRECTIVES]
    parts.append({"text": plan.core_prompt})
    if source:
        parts.append({"fileData": {"mimeType": "image/png", "fileUri": source}})
    return {
        "model": profile.model_image,
        "contents": [{"role": "user", "parts": parts}],
        "generationConfig": {
            "seed": params.seed,
            "aspectRatio": params.ratio.value,
            "width": params.width,
            "height": params.height,
        },
        "negativePrompt": ", ".join(negative_prompts(plan)),
    }


def _openai_body(
    plan: ScenePlan,
    profile: PlatformProfile,
    params: GenerationParams,
    source: Optional[str],
    request_id: str,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "model": profile.model_image,
        "prompt": plan.core_prompt,
        "negative_prompt": ", ".join(negative_prompts(plan)),
        "size": f"{params.width}x{params.height}",
        "n": 1,
        "seed": params.seed,
        "response_format": "b64_json",
        "metadata": {"request_id": request_id},
    }
    if source:
        body["image"] = source
    return body


def _generic_image_body(
    plan: ScenePlan, params: GenerationParams, source: Optional[str]
) -> Dict[str, Any]:
    return {
        "prompt": plan.core_prompt,
        "system_directives": list(SYSTEM_DIRECTIVES),
        "style_hints": style_hints(plan),
        "negative_prompts": negative_prompts(plan),
        "width": params.width,
        "height": params.height,
        "steps": params.steps,
        "guidance": params.guidance,
        "seed": params.seed,
        "format": params.format,
        "ratio": params.ratio.value,
        "layout": params.layout,
        "safety": params.safety.model_dump(mode="json"),
        "source_image_url": source,
        "mode": task_for_mode(plan.mode),
    }


def _generic_json_body(
    result: CompileResult, params: GenerationParams, source: Optional[str], request_id: str
) -> Dict[str, Any]:
    plan = result.scene_plan
    return {
        "request_id": request_id,
        "mode": task_for_mode(plan.mode),
        "text": plan.core_prompt,
        "system_directives": list(SYSTEM_DIRECTIVES),
        "style_hints": style_hints(plan),
        "negative_prompts": negative_prompts(plan),
        "quality": params.model_dump(mode="json", exclude={"safety"}),
        "safety": params.safety.model_dump(mode="json"),
        "input_image_url": source,
        "control": json.loads(result.json_control),
    }


def build_platform_payload(
    result: CompileResult,
    platform_id: str,
    *,
    params: Optional[GenerationParams] = None,
    source_image_url: Optional[str] = None,
    registry: Optional[PlatformRegistry] = None,
) -> Dict[str, Any]:
    """Build the request body a platform expects for ``result``."""

    profile = resolve_platform(platform_id, registry)
    plan = result.scene_plan
    if plan.mode != GenerationMode.TextToImage and not profile.supports_image_edit:
        raise UnsupportedMode(f"Platform '{profile.id}' does not support mode '{plan.mode.value}'")

    source = sanitize_image_url(source_image_url) if source_image_url else None
    params = params if params is not None else build_generation_params(result)
    request_id = request_id_for(result.json_control)

    if profile.provider_family == "google":
        body = _google_body(plan, profile, params, source)
    elif profile.provider_family == "openai-compatible":
        body = _openai_body(plan, profile, params, source, request_id)
    elif profile.provider_family == "vondy":
        body = _generic_image_body(plan, params, source)
    else:
        body = _generic_json_body(result, params, source, request_id)

    return {
        "platform": profile.id,
        "provider_family": profile.provider_family,
        "endpoint_url": profile.endpoint_url,
        "task": task_for_mode(plan.mode),
        "request_id": request_id,
        "body": body,
    }


__all__ = [
    "SYSTEM_DIRECTIVES",
    "build_platform_payload",
    "get_platform_registry",
    "negative_prompts",
    "request_id_for",
    "resolve_platform",
    "style_hints",
    "task_for_mode",
]
