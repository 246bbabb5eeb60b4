"""Scene plan compilation endpoints."""
from __future__ import annotations

import time
from typing import Optional

import structlog
from fastapi import APIRouter, Response
from pydantic import BaseModel

from vl_api.utils import compile_or_raise, ok, plan_error
from vl_plan.errors import PlanError
from vl_plan.models import CompileRequest
from vl_plan.params import build_generation_params
from vl_plan.sanitize import sanitize

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/plan", tags=["plan"])


class SanitizeIn(BaseModel):
    raw_prompt: str


@router.post("/sanitize")
def sanitize_prompt(payload: SanitizeIn) -> dict:
    try:
        sanitized = sanitize(payload.raw_prompt)
    except PlanError as exc:
        raise plan_error(exc) from exc
    return ok({"sanitized": sanitized, "bytes": len(sanitized.encode("utf-8"))})


@router.post("/compile")
def compile_plan(payload: CompileRequest) -> dict:
    """Return the scene plan and its canonical control document."""

    started = time.perf_counter()
    result = compile_or_raise(payload)
    logger.info(
        "api.plan.compiled",
        mode=payload.mode.value,
        control_bytes=len(result.json_control),
        duration_ms=round((time.perf_counter() - started) * 1000.0, 2),
    )
    return ok(
        {
            "scene_plan": result.scene_plan.model_dump(mode="json"),
            "json_control": result.json_control,
        }
    )


@router.post("/control")
def compile_control(payload: CompileRequest) -> Response:
    """Return the canonical control document byte for byte."""

    result = compile_or_raise(payload)
    return Response(content=result.json_control, media_type="application/json")


class ParamsIn(CompileRequest):
    seed: Optional[int] = None


@router.post("/params")
def generation_params(payload: ParamsIn) -> dict:
    request = CompileRequest(**payload.model_dump(exclude={"seed"}))
    result = compile_or_raise(request)
    params = build_generation_params(result, seed=payload.seed)
    return ok({"params": params.model_dump(mode="json"), "json_control": result.json_control})


__all__ = ["router"]
