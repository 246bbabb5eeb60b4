"""Command line helpers for compiling prompts and inspecting platforms."""
from __future__ import annotations

import json
import logging
import sys
from typing import Optional

import structlog
import typer

from vl_plan.adapters import build_platform_payload
from vl_plan.compiler import compile_prompt
from vl_plan.config import load_plan_config
from vl_plan.errors import PlanError
from vl_plan.models import CompileResult
from vl_plan.params import build_generation_params
from vl_plan.sanitize import sanitize

from .loader import file_sha256, load_platform_registry, platforms_path, validate_platform_registry

app = typer.Typer(help="Scene plan compiler utilities")
platforms_app = typer.Typer(help="Platform registry commands")
app.add_typer(platforms_app, name="platforms")

logger = structlog.get_logger(__name__)

MODE_HELP = "text-to-image, image-to-image, inpaint or outpaint"
SAFETY_HELP = "safe or allow-nsfw"
QUALITY_HELP = "draft, standard, high or ultra"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log info events to stderr"),
) -> None:
    """Scene plan compiler utilities."""

    # stdout carries command output; log events go to stderr.
    level = logging.INFO if verbose else logging.WARNING
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )


def _compile_or_exit(
    prompt: str,
    mode: Optional[str],
    safety: Optional[str],
    quality: Optional[str],
) -> CompileResult:
    cfg = load_plan_config()
    try:
        return compile_prompt(
            prompt,
            mode=mode or cfg.mode,
            safety=safety or cfg.safety_profile,
            quality=quality or cfg.quality_preset,
        )
    except PlanError as exc:
        typer.echo(f"{exc.code}: {exc.message}")
        raise typer.Exit(code=1) from exc
    except ValueError as exc:
        typer.echo(f"Invalid option: {exc}")
        raise typer.Exit(code=1) from exc


@app.command("compile")
def compile_command(
    prompt: str = typer.Argument(..., help="Raw prompt text"),
    mode: Optional[str] = typer.Option(None, "--mode", "-m", help=MODE_HELP),
    safety: Optional[str] = typer.Option(None, "--safety", "-s", help=SAFETY_HELP),
    quality: Optional[str] = typer.Option(None, "--quality", "-q", help=QUALITY_HELP),
    plan: bool = typer.Option(False, "--plan", help="Print the scene plan instead of the control JSON"),
) -> None:
    """Compile a prompt and print its canonical JSON control document."""

    result = _compile_or_exit(prompt, mode, safety, quality)
    if plan:
        typer.echo(result.scene_plan.model_dump_json(indent=2))
    else:
        typer.echo(result.json_control)


@app.command("sanitize")
def sanitize_command(prompt: str = typer.Argument(..., help="Raw prompt text")) -> None:
    """Print the sanitized form of a prompt."""

    try:
        typer.echo(sanitize(prompt))
    except PlanError as exc:
        typer.echo(f"{exc.code}: {exc.message}")
        raise typer.Exit(code=1) from exc


@app.command("params")
def params_command(
    prompt: str = typer.Argument(..., help="Raw prompt text"),
    mode: Optional[str] = typer.Option(None, "--mode", "-m", help=MODE_HELP),
    safety: Optional[str] = typer.Option(None, "--safety", "-s", help=SAFETY_HELP),
    quality: Optional[str] = typer.Option(None, "--quality", "-q", help=QUALITY_HELP),
    seed: Optional[int] = typer.Option(None, "--seed", help="Fixed sampler seed"),
) -> None:
    """Print the backend generation parameters for a prompt."""

    result = _compile_or_exit(prompt, mode, safety, quality)
    params = build_generation_params(result, seed=seed)
    typer.echo(params.model_dump_json(indent=2))


@app.command("payload")
def payload_command(
    prompt: str = typer.Argument(..., help="Raw prompt text"),
    platform: Optional[str] = typer.Option(None, "--platform", "-p", help="Platform id from the registry"),
    mode: Optional[str] = typer.Option(None, "--mode", "-m", help=MODE_HELP),
    safety: Optional[str] = typer.Option(None, "--safety", "-s", help=SAFETY_HELP),
    quality: Optional[str] = typer.Option(None, "--quality", "-q", help=QUALITY_HELP),
    source_url: Optional[str] = typer.Option(None, "--source-url", help="Source image for edit modes"),
) -> None:
    """Print the request body a platform expects for a prompt."""

    result = _compile_or_exit(prompt, mode, safety, quality)
    platform_id = platform or load_plan_config().platform
    try:
        payload = build_platform_payload(result, platform_id, source_image_url=source_url)
    except PlanError as exc:
        typer.echo(f"{exc.code}: {exc.message}")
        raise typer.Exit(code=1) from exc
    typer.echo(json.dumps(payload, indent=2))


@platforms_app.command("list")
def platforms_list() -> None:
    """List the registered platforms."""

    registry = load_platform_registry()
    typer.echo(f"registry version: {registry.version}")
    for profile in registry.platforms:
        edit = "edit" if profile.supports_image_edit else "no-edit"
        typer.echo(f"{profile.id}: {profile.display_name} [{profile.provider_family}, {edit}]")


@platforms_app.command("validate")
def platforms_validate() -> None:
    """Validate the platform registry and report the result."""

    path = platforms_path()
    try:
        registry = load_platform_registry(path)
        validate_platform_registry(registry)
    except Exception as exc:  # noqa: BLE001 - broad to surface validation issues
        typer.echo("Platform registry validation failed:")
        typer.echo(str(exc))
        logger.info("platforms.validation.failed", path=str(path))
        raise typer.Exit(code=1) from exc
    logger.info(
        "platforms.validation.ok",
        path=str(path),
        sha256=file_sha256(path),
        platforms=len(registry.platforms),
    )
    typer.echo("Platform registry OK")


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    app()
