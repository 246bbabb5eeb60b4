"""Pipeline entry point: sanitize, classify, assemble, serialize."""
from __future__ import annotations

import hashlib
import time
from typing import Union

import structlog

from vl_plan.assemble import assemble
from vl_plan.classify import classify
from vl_plan.errors import PlanError
from vl_plan.models import (
    CompileRequest,
    CompileResult,
    GenerationMode,
    QualityPreset,
    SafetyProfile,
)
from vl_plan.sanitize import RawText, sanitize
from vl_plan.serialize import serialize

logger = structlog.get_logger(__name__)


def prompt_sha256(raw: RawText) -> str:
    data = raw if isinstance(raw, (bytes, bytearray)) else str(raw).encode("utf-8")
    return hashlib.sha256(data).hexdigest()


def compile_prompt(
    raw_prompt: RawText,
    mode: Union[GenerationMode, str] = GenerationMode.TextToImage,
    safety: Union[SafetyProfile, str] = SafetyProfile.Safe,
    quality: Union[QualityPreset, str] = QualityPreset.Standard,
) -> CompileResult:
    """Compile a raw prompt into a scene plan and its JSON control document."""

    started = time.perf_counter()
    try:
        sanitized = sanitize(raw_prompt)
    except PlanError as exc:
        logger.warning(
            "plan.compile.rejected",
            code=exc.code,
            prompt_sha256=prompt_sha256(raw_prompt or b""),
            mode=getattr(mode, "value", mode),
        )
        raise

    mode = GenerationMode(mode)
    safety = SafetyProfile(safety)
    quality = QualityPreset(quality)

    facets = classify(sanitized)
    plan = assemble(sanitized, mode, safety, quality, classification=facets)
    json_control = serialize(plan)

    elapsed_ms = (time.perf_counter() - started) * 1000.0
    logger.info(
        "plan.compile.ok",
        prompt_sha256=prompt_sha256(raw_prompt),
        prompt_bytes=len(sanitized),
        mode=mode.value,
        safety_profile=safety.value,
        quality_preset=quality.value,
        aspect_ratio=plan.aspect_ratio.value,
        art_style=plan.art_style.style.value,
        camera_angle=plan.camera.angle.value,
        duration_ms=round(elapsed_ms, 2),
    )
    return CompileResult(scene_plan=plan, json_control=json_control)


def compile_request(request: CompileRequest) -> CompileResult:
    return compile_prompt(
        request.raw_prompt,
        mode=request.mode,
        safety=request.safety_profile,
        quality=request.quality_preset,
    )


__all__ = ["compile_prompt", "compile_request", "prompt_sha256"]
