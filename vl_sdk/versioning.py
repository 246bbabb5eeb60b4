"""Utilities for reporting configuration file versions."""
from __future__ import annotations

from pathlib import Path

from .loader import file_sha256, platforms_path


def _version_from_yaml(path: Path) -> str | None:
    try:
        for line in path.read_text(encoding="utf-8").splitlines():
            if line.strip().startswith("version:"):
                return line.split(":", 1)[1].strip().strip('\"\'')
    except OSError:
        return None
    return None


def config_versions() -> dict[str, dict[str, object]]:
    """Return metadata for the configuration files the service reads."""

    files = {"platforms": platforms_path()}
    out: dict[str, dict[str, object]] = {}
    for key, path in files.items():
        path = path.resolve()
        if path.exists():
            out[key] = {
                "version": _version_from_yaml(path),
                "sha256": file_sha256(path)[:12],
                "path": str(path),
            }
        else:
            out[key] = {"missing": True, "path": str(path)}
    return out
