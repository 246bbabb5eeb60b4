from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


EDITLESS_REGISTRY = """\
version: "test"
platforms:
  - id: viewer
    display_name: Read Only Viewer
    endpoint_url: https://viewer.example/v1/generate
    model_vision: viewer-vision
    model_image: viewer-image
    provider_family: generic-json
    supports_vision_chat: true
    supports_image_edit: false
"""


@pytest.fixture
def editless_registry_file(tmp_path, monkeypatch) -> Iterator[Path]:
    """Point the registry loader at a one-platform file without edit support."""

    from vl_plan.adapters import get_platform_registry

    path = tmp_path / "platforms.yml"
    path.write_text(EDITLESS_REGISTRY, encoding="utf-8")
    monkeypatch.setenv("VLIG_PLATFORMS_PATH", str(path))
    get_platform_registry.cache_clear()
    try:
        yield path
    finally:
        get_platform_registry.cache_clear()
