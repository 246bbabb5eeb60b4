"""Scene plan compiler FastAPI application."""
from __future__ import annotations

import os
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vl_plan import __version__
from vl_plan.adapters import get_platform_registry
from vl_plan.config import load_plan_config
from vl_sdk import config_versions, file_sha256, platforms_path

from .routers import health, plan, platforms

structlog.configure(processors=[structlog.processors.JSONRenderer()])
logger = structlog.get_logger(__name__)


def _log_platform_registry() -> None:
    registry = get_platform_registry()
    path = platforms_path()
    logger.info(
        "config.platforms.loaded",
        version=registry.version,
        platforms=registry.ids(),
        sha256=file_sha256(path),
    )


def _log_config_versions() -> None:
    logger.info("config.versions.snapshot", versions=config_versions())


def _log_plan_defaults() -> None:
    cfg = load_plan_config()
    logger.info(
        "plan.defaults.configured",
        mode=cfg.mode.value,
        safety_profile=cfg.safety_profile.value,
        quality_preset=cfg.quality_preset.value,
        platform=cfg.platform,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):  # pragma: no cover - framework glue
    _log_config_versions()
    _log_platform_registry()
    _log_plan_defaults()
    yield


app = FastAPI(title="VL/IG Scene Plan API", version=__version__, lifespan=lifespan)
app.include_router(health.router)
app.include_router(plan.router)
app.include_router(platforms.router)


def _cors_enabled() -> bool:
    toggle = os.getenv("VLIG_API_ENABLE_CORS", "").strip().lower()
    return toggle in {"1", "true", "yes", "on"}


if _cors_enabled():
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
