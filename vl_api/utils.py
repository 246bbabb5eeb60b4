"""Common API response helpers."""
from __future__ import annotations

from typing import Any, Dict, List

from fastapi import HTTPException

from vl_plan.compiler import compile_request
from vl_plan.errors import PlanError
from vl_plan.models import CompileRequest, CompileResult


def ok(data: Any) -> Dict[str, Any]:
    """Return a success envelope with payload."""

    return {"ok": True, "data": data, "warnings": [], "errors": []}


def err(messages: List[str]) -> Dict[str, Any]:
    """Return an error envelope with message list."""

    return {"ok": False, "data": None, "warnings": [], "errors": messages}


def plan_error(exc: PlanError) -> HTTPException:
    """Translate a compiler error into a 400 response."""

    return HTTPException(status_code=400, detail=exc.to_dict())


def compile_or_raise(payload: CompileRequest) -> CompileResult:
    """Compile ``payload`` or raise the matching HTTP error."""

    try:
        return compile_request(payload)
    except PlanError as exc:
        raise plan_error(exc) from exc
