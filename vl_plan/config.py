"""Environment configuration for compiler defaults."""
from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Type, TypeVar

from vl_plan.models import GenerationMode, QualityPreset, SafetyProfile

E = TypeVar("E", bound=Enum)

DEFAULT_PLATFORM = "custom-http"


def _env(name: str) -> str:
    value = os.getenv(name)
    return value.strip() if isinstance(value, str) else ""


def _enum_env(name: str, enum_cls: Type[E], default: E) -> E:
    raw = _env(name).lower()
    if not raw:
        return default
    try:
        return enum_cls(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class PlanConfig:
    """Defaults applied when a request leaves an option unset."""

    mode: GenerationMode = GenerationMode.TextToImage
    safety_profile: SafetyProfile = SafetyProfile.Safe
    quality_preset: QualityPreset = QualityPreset.Standard
    platform: str = DEFAULT_PLATFORM

    @classmethod
    def from_env(cls) -> "PlanConfig":
        """Construct from VLIG_* environment variables.

        Unknown values fall back to the built-in defaults.
        """
        return cls(
            mode=_enum_env("VLIG_DEFAULT_MODE", GenerationMode, GenerationMode.TextToImage),
            safety_profile=_enum_env("VLIG_DEFAULT_SAFETY", SafetyProfile, SafetyProfile.Safe),
            quality_preset=_enum_env("VLIG_DEFAULT_QUALITY", QualityPreset, QualityPreset.Standard),
            platform=_env("VLIG_DEFAULT_PLATFORM").lower() or DEFAULT_PLATFORM,
        )


def load_plan_config() -> PlanConfig:
    return PlanConfig.from_env()


__all__ = ["DEFAULT_PLATFORM", "PlanConfig", "load_plan_config"]
