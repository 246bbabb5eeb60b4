"""Configuration loaders and tooling for the scene plan compiler."""
from __future__ import annotations

from .loader import (
    DEFAULT_PLATFORMS_PATH,
    file_sha256,
    load_platform_registry,
    platforms_path,
    validate_platform_registry,
)
from .models import PlatformProfile, PlatformRegistry
from .versioning import config_versions

__all__ = [
    "__version__",
    "DEFAULT_PLATFORMS_PATH",
    "PlatformProfile",
    "PlatformRegistry",
    "config_versions",
    "file_sha256",
    "load_platform_registry",
    "platforms_path",
    "validate_platform_registry",
]

__version__ = "0.1.0"
