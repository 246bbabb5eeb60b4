"""Deterministic prompt-to-scene-plan compiler."""

from .assemble import assemble
from .classify import Classification, classify, guess_subject_name
from .compiler import compile_prompt, compile_request
from .errors import (
    InvalidInput,
    PlanError,
    SanitizationExhausted,
    UnknownPlatform,
    UnsafeURL,
    UnsupportedMode,
)
from .models import (
    AspectRatio,
    CompileRequest,
    CompileResult,
    GenerationMode,
    QualityPreset,
    SafetyProfile,
    ScenePlan,
)
from .sanitize import sanitize
from .serialize import serialize

__all__ = [
    "AspectRatio",
    "Classification",
    "CompileRequest",
    "CompileResult",
    "GenerationMode",
    "InvalidInput",
    "PlanError",
    "QualityPreset",
    "SafetyProfile",
    "SanitizationExhausted",
    "ScenePlan",
    "UnknownPlatform",
    "UnsafeURL",
    "UnsupportedMode",
    "assemble",
    "classify",
    "compile_prompt",
    "compile_request",
    "guess_subject_name",
    "sanitize",
    "serialize",
]

__version__ = "0.1.0"
