"""Canonical JSON rendering of scene plans.

The output is a wire contract shared by several front ends, so it is built
by hand rather than through ``json.dumps``: key order is fixed, there is no
whitespace between tokens, control characters other than tab, newline and
carriage return are dropped instead of ``\\u`` escaped, and everything else
is passed through unescaped.
"""
from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Tuple

from vl_plan.models import ScenePlan, SubjectDescriptor

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def escape(text: str) -> str:
    """Escape a string body for the control document."""

    out: List[str] = []
    for ch in text:
        replacement = _ESCAPES.get(ch)
        if replacement is not None:
            out.append(replacement)
        elif ord(ch) < 0x20:
            continue
        else:
            out.append(ch)
    return "".join(out)


def _string(value: str) -> str:
    return '"' + escape(value) + '"'


def _enum(value: Enum) -> str:
    return '"' + value.value + '"'


def _bool(value: bool) -> str:
    return "true" if value else "false"


def _float(value: float) -> str:
    return repr(float(value))


def _object(fields: Iterable[Tuple[str, str]]) -> str:
    return "{" + ",".join(f'"{key}":{rendered}' for key, rendered in fields) + "}"


def _subject(subject: SubjectDescriptor) -> str:
    return _object(
        (
            ("name", _string(subject.name)),
            ("attributes", _string(subject.attributes)),
            ("position_hint", _string(subject.position_hint)),
        )
    )


def serialize(plan: ScenePlan) -> str:
    """Render ``plan`` into its canonical JSON control document."""

    background = plan.background
    color = plan.color_lighting
    camera = plan.camera
    composition = plan.composition
    style = plan.art_style
    negatives = plan.negative_constraints

    return _object(
        (
            ("core_prompt", _string(plan.core_prompt)),
            ("mode", _enum(plan.mode)),
            ("safety_profile", _enum(plan.safety_profile)),
            ("quality_preset", _enum(plan.quality_preset)),
            ("aspect_ratio", _enum(plan.aspect_ratio)),
            ("primary_subject", _subject(plan.primary_subject)),
            ("secondary_subjects", "[" + ",".join(_subject(s) for s in plan.secondary_subjects) + "]"),
            (
                "background",
                _object(
                    (
                        ("environment", _string(background.environment)),
                        ("time_of_day", _string(background.time_of_day)),
                        ("weather", _string(background.weather)),
                    )
                ),
            ),
            (
                "color_lighting",
                _object(
                    (
                        ("color_tone", _enum(color.color_tone)),
                        ("lighting", _enum(color.lighting)),
                        ("palette_hint", _string(color.palette_hint)),
                    )
                ),
            ),
            (
                "camera",
                _object(
                    (
                        ("angle", _enum(camera.angle)),
                        ("focal_length_mm", _float(camera.focal_length_mm)),
                        ("depth_of_field", _bool(camera.depth_of_field)),
                    )
                ),
            ),
            (
                "composition",
                _object(
                    (
                        ("rule", _enum(composition.rule)),
                        ("allow_cropping", _bool(composition.allow_cropping)),
                        ("center_main_subject", _bool(composition.center_main_subject)),
                    )
                ),
            ),
            (
                "art_style",
                _object(
                    (
                        ("style", _enum(style.style)),
                        ("brush_detail", _enum(style.brush_detail)),
                        ("era_hint", _string(style.era_hint)),
                    )
                ),
            ),
            (
                "negative_constraints",
                _object(
                    (
                        ("visual_artifacts", _string(negatives.visual_artifacts)),
                        ("content_exclusions", _string(negatives.content_exclusions)),
                    )
                ),
            ),
        )
    )


CONTROL_KEYS = (
    "core_prompt",
    "mode",
    "safety_profile",
    "quality_preset",
    "aspect_ratio",
    "primary_subject",
    "secondary_subjects",
    "background",
    "color_lighting",
    "camera",
    "composition",
    "art_style",
    "negative_constraints",
)


__all__ = ["CONTROL_KEYS", "escape", "serialize"]
