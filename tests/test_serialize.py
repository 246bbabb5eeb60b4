import json

from vl_plan.assemble import assemble
from vl_plan.models import (
    GenerationMode,
    QualityPreset,
    SafetyProfile,
    SubjectDescriptor,
)
from vl_plan.serialize import CONTROL_KEYS, escape, serialize

PORTRAIT = "A cinematic portrait, 16:9, soft lighting, rule of thirds"

EXPECTED_PORTRAIT = (
    '{"core_prompt":"A cinematic portrait, 16:9, soft lighting, rule of thirds",'
    '"mode":"text-to-image","safety_profile":"safe","quality_preset":"high",'
    '"aspect_ratio":"16:9",'
    '"primary_subject":{"name":"thirds","attributes":"","position_hint":"center"},'
    '"secondary_subjects":[],'
    '"background":{"environment":"","time_of_day":"","weather":""},'
    '"color_lighting":{"color_tone":"neutral","lighting":"soft","palette_hint":""},'
    '"camera":{"angle":"eye-level","focal_length_mm":35.0,"depth_of_field":false},'
    '"composition":{"rule":"rule-of-thirds","allow_cropping":true,"center_main_subject":true},'
    '"art_style":{"style":"unspecified","brush_detail":"normal","era_hint":""},'
    '"negative_constraints":{"visual_artifacts":"blurry, extra limbs, distorted faces, text artifacts",'
    '"content_exclusions":"no gore, no real-world logos"}}'
)


def _plan(text: str):
    return assemble(text, GenerationMode.TextToImage, SafetyProfile.Safe, QualityPreset.High)


def test_canonical_document_matches_byte_for_byte() -> None:
    assert serialize(_plan(PORTRAIT)) == EXPECTED_PORTRAIT


def test_top_level_key_order() -> None:
    seen = []

    def record(items):  # noqa: ANN001
        seen.append(tuple(key for key, _ in items))
        return dict(items)

    json.loads(serialize(_plan("a bee")), object_pairs_hook=record)
    assert seen[-1] == CONTROL_KEYS


def test_nested_key_order() -> None:
    document = json.loads(serialize(_plan("a bee")))
    assert list(document["primary_subject"]) == ["name", "attributes", "position_hint"]
    assert list(document["background"]) == ["environment", "time_of_day", "weather"]
    assert list(document["color_lighting"]) == ["color_tone", "lighting", "palette_hint"]
    assert list(document["camera"]) == ["angle", "focal_length_mm", "depth_of_field"]
    assert list(document["composition"]) == ["rule", "allow_cropping", "center_main_subject"]
    assert list(document["art_style"]) == ["style", "brush_detail", "era_hint"]
    assert list(document["negative_constraints"]) == ["visual_artifacts", "content_exclusions"]


def test_escape_rules() -> None:
    assert escape('a "quote"') == 'a \\"quote\\"'
    assert escape("back\\slash") == "back\\\\slash"
    assert escape("line\nbreak\r\ttab") == "line\\nbreak\\r\\ttab"


def test_other_control_characters_are_dropped() -> None:
    assert escape("bell\x07 esc\x1b end") == "bell esc end"


def test_quote_and_newline_round_trip() -> None:
    plan = _plan("a bee").model_copy(update={"core_prompt": 'say "hi"\nnow'})
    document = json.loads(serialize(plan))
    assert document["core_prompt"] == 'say "hi"\nnow'


def test_lossy_control_character_round_trip() -> None:
    plan = _plan("a bee").model_copy(update={"core_prompt": "a\x01b\tc"})
    document = json.loads(serialize(plan))
    assert document["core_prompt"] == "ab\tc"


def test_non_ascii_passes_through_unescaped() -> None:
    plan = _plan("a bee").model_copy(update={"core_prompt": "café"})
    assert '"core_prompt":"café"' in serialize(plan)


def test_secondary_subjects_are_rendered_in_order() -> None:
    extra = (
        SubjectDescriptor(name="owl", attributes="", position_hint="left"),
        SubjectDescriptor(name="moon", attributes="full", position_hint="top"),
    )
    plan = _plan("a bee").model_copy(update={"secondary_subjects": extra})
    document = json.loads(serialize(plan))
    assert [s["name"] for s in document["secondary_subjects"]] == ["owl", "moon"]
    assert '"secondary_subjects":[{"name":"owl","attributes":"","position_hint":"left"},{"name":"moon"' in serialize(plan)


def test_booleans_and_float_tokens() -> None:
    document = serialize(_plan("close-up of a bee"))
    assert '"focal_length_mm":35.0,"depth_of_field":true' in document
    assert '"allow_cropping":true,"center_main_subject":true' in document


def test_serialization_is_deterministic() -> None:
    assert serialize(_plan(PORTRAIT)) == serialize(_plan(PORTRAIT))
