"""Pydantic models for the platform registry."""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ProviderFamily = Literal["google", "openai-compatible", "vondy", "generic-json"]


class PlatformProfile(BaseModel):
    """Static description of one chat/runtime front end."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    display_name: str
    endpoint_url: str
    model_vision: str
    model_image: str
    provider_family: ProviderFamily
    supports_vision_chat: bool = True
    supports_image_edit: bool = True
    notes: Optional[str] = None


class PlatformRegistry(BaseModel):
    """Versioned collection of platform profiles."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    version: str
    platforms: List[PlatformProfile] = Field(default_factory=list)

    def get(self, platform_id: str) -> Optional[PlatformProfile]:
        wanted = platform_id.strip().lower()
        for profile in self.platforms:
            if profile.id == wanted:
                return profile
        return None

    def ids(self) -> List[str]:
        return [profile.id for profile in self.platforms]


__all__ = ["PlatformProfile", "PlatformRegistry", "ProviderFamily"]
