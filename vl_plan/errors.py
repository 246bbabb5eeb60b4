"""Error taxonomy for the prompt compiler."""
from __future__ import annotations

PLAN_INVALID_INPUT = "PLAN_INVALID_INPUT"
PLAN_SANITIZATION_EXHAUSTED = "PLAN_SANITIZATION_EXHAUSTED"
PLAN_UNSAFE_URL = "PLAN_UNSAFE_URL"
PLAN_UNKNOWN_PLATFORM = "PLAN_UNKNOWN_PLATFORM"
PLAN_UNSUPPORTED_MODE = "PLAN_UNSUPPORTED_MODE"


class PlanError(ValueError):
    """Base class for terminal compiler failures."""

    code = "PLAN_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


class InvalidInput(PlanError):
    """The raw prompt was empty."""

    code = PLAN_INVALID_INPUT


class SanitizationExhausted(PlanError):
    """Nothing was left of the prompt after filtering."""

    code = PLAN_SANITIZATION_EXHAUSTED


class UnsafeURL(PlanError):
    code = PLAN_UNSAFE_URL


class UnknownPlatform(PlanError):
    code = PLAN_UNKNOWN_PLATFORM


class UnsupportedMode(PlanError):
    code = PLAN_UNSUPPORTED_MODE


__all__ = [
    "InvalidInput",
    "PLAN_INVALID_INPUT",
    "PLAN_SANITIZATION_EXHAUSTED",
    "PLAN_UNKNOWN_PLATFORM",
    "PLAN_UNSAFE_URL",
    "PLAN_UNSUPPORTED_MODE",
    "PlanError",
    "SanitizationExhausted",
    "UnknownPlatform",
    "UnsafeURL",
    "UnsupportedMode",
]
