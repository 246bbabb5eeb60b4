"""Platform registry and payload endpoints."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter

from vl_api.utils import compile_or_raise, err, ok, plan_error
from vl_plan.adapters import build_platform_payload, get_platform_registry
from vl_plan.errors import PlanError
from vl_plan.models import CompileRequest
from vl_plan.params import build_generation_params

router = APIRouter(prefix="/platforms", tags=["platforms"])


@router.get("")
def list_platforms() -> dict:
    registry = get_platform_registry()
    return ok(
        {
            "version": registry.version,
            "platforms": [profile.model_dump(mode="json") for profile in registry.platforms],
        }
    )


class PayloadIn(CompileRequest):
    seed: Optional[int] = None
    source_image_url: Optional[str] = None


@router.post("/{platform_id}/payload")
def platform_payload(platform_id: str, payload: PayloadIn):
    if get_platform_registry().get(platform_id) is None:
        return err([f"Unknown platform '{platform_id}'"])

    request = CompileRequest(**payload.model_dump(exclude={"seed", "source_image_url"}))
    result = compile_or_raise(request)
    params = build_generation_params(result, seed=payload.seed)
    try:
        body = build_platform_payload(
            result,
            platform_id,
            params=params,
            source_image_url=payload.source_image_url,
        )
    except PlanError as exc:
        raise plan_error(exc) from exc
    return ok(body)


__all__ = ["router"]
