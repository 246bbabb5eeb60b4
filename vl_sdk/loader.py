"""Helpers for loading the platform registry from YAML."""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Dict

import yaml

from .models import PlatformRegistry

CONFIG_DIR = Path(__file__).resolve().parents[1] / "config"
DEFAULT_PLATFORMS_PATH = CONFIG_DIR / "platforms.yml"
PLATFORMS_PATH_ENV = "VLIG_PLATFORMS_PATH"


def platforms_path() -> Path:
    """Return the registry location, honouring VLIG_PLATFORMS_PATH."""

    override = os.getenv(PLATFORMS_PATH_ENV, "").strip()
    return Path(override) if override else DEFAULT_PLATFORMS_PATH


def load_yaml(path: Path | str) -> Dict[str, Any]:
    """Load a YAML file as a dictionary."""
    p = Path(path)
    with p.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping at root of {p}, got {type(data)!r}")
    return data


def load_platform_registry(path: Path | str | None = None) -> PlatformRegistry:
    """Load the platform registry from the canonical YAML file."""

    raw = load_yaml(path if path is not None else platforms_path())
    return PlatformRegistry(**raw)


def validate_platform_registry(registry: PlatformRegistry) -> None:
    """Raise ValueError when ids repeat or an endpoint is not HTTP(S)."""

    seen = set()
    problems = []
    for profile in registry.platforms:
        if profile.id in seen:
            problems.append(f"duplicate platform id '{profile.id}'")
        seen.add(profile.id)
        if profile.id != profile.id.strip().lower():
            problems.append(f"platform id '{profile.id}' must be lowercase")
        if not profile.endpoint_url.startswith(("https://", "http://")):
            problems.append(f"platform '{profile.id}' endpoint must be http(s)")
    if not registry.platforms:
        problems.append("registry lists no platforms")
    if problems:
        raise ValueError("; ".join(problems))


def file_sha256(path: Path) -> str:
    """Compute a SHA-256 digest for the supplied file path."""

    data = path.read_bytes()
    return hashlib.sha256(data).hexdigest()
