import time

import pytest

from vl_plan.errors import InvalidInput, SanitizationExhausted, UnsafeURL
from vl_plan.sanitize import (
    BLOCKLIST,
    MAX_PROMPT_BYTES,
    collapse_whitespace,
    redact_blocklist,
    sanitize,
    sanitize_image_url,
    strip_control,
    truncate,
)


def test_empty_prompt_is_invalid_input() -> None:
    with pytest.raises(InvalidInput):
        sanitize("")


def test_empty_bytes_prompt_is_invalid_input() -> None:
    with pytest.raises(InvalidInput):
        sanitize(b"")


def test_control_only_prompt_is_exhausted() -> None:
    with pytest.raises(SanitizationExhausted):
        sanitize("\x01\x02")


def test_whitespace_only_prompt_is_exhausted() -> None:
    with pytest.raises(SanitizationExhausted):
        sanitize("   ")


def test_errors_carry_stable_codes() -> None:
    with pytest.raises(InvalidInput) as invalid:
        sanitize("")
    with pytest.raises(SanitizationExhausted) as exhausted:
        sanitize("\t\n")
    assert invalid.value.code == "PLAN_INVALID_INPUT"
    assert exhausted.value.code == "PLAN_SANITIZATION_EXHAUSTED"
    assert isinstance(invalid.value, ValueError)


def test_strip_control_keeps_tab_and_newline_only() -> None:
    assert strip_control("a\x00b\tc\nd\re\x7ff") == "ab\tc\ndef"


def test_strip_control_drops_non_ascii() -> None:
    assert strip_control("café ¶ ok") == "caf  ok"
    assert strip_control("café".encode("utf-8")) == "caf"


def test_strip_control_is_idempotent() -> None:
    text = "x\x03y\tz\n\x1b[0mÿ"
    once = strip_control(text)
    assert strip_control(once) == once


def test_collapse_whitespace_runs_and_trailing() -> None:
    assert collapse_whitespace("a  \t\n b\r\n") == "a b"
    assert collapse_whitespace("  lead") == " lead"
    assert collapse_whitespace("   ") == ""


def test_collapse_whitespace_is_idempotent() -> None:
    text = " many\t\tspaces \n here  "
    once = collapse_whitespace(text)
    assert collapse_whitespace(once) == once


def test_redaction_preserves_length_and_position() -> None:
    assert redact_blocklist("a NUDE cat") == "a **** cat"
    assert sanitize("a NUDE cat") == "a **** cat"


def test_redaction_masks_every_occurrence() -> None:
    assert redact_blocklist("porn and PoRn") == "**** and ****"


def test_redaction_resumes_after_each_match() -> None:
    assert redact_blocklist("nsfwnsfw") == "********"


def test_redaction_masks_longer_terms_independently() -> None:
    # "nude" does not occur inside "nudity", which is masked by its own term
    assert redact_blocklist("nudity") == "******"
    assert redact_blocklist("erotica") == "******a"


def test_blocklist_order_is_pinned() -> None:
    assert BLOCKLIST == ("nsfw", "nude", "nudity", "porn", "explicit", "sexual", "erotic")


def test_redaction_order_decides_overlapping_spans() -> None:
    text = "nudesexual"
    assert redact_blocklist(text) == "**********"
    # with a term list whose first entry consumes the shared letters the
    # second term can no longer be found
    assert redact_blocklist("porno", ("porn", "orno")) == "****o"
    assert redact_blocklist("porno", ("orno", "porn")) == "p****"


def test_truncate_cuts_to_byte_limit() -> None:
    assert truncate("abcdef", 4) == "abcd"
    assert truncate("abc", 4) == "abc"


def test_sanitized_length_is_capped() -> None:
    result = sanitize("x" * (MAX_PROMPT_BYTES + 500))
    assert len(result.encode("utf-8")) == MAX_PROMPT_BYTES


def test_dense_blocklisted_prompt_is_linear() -> None:
    started = time.perf_counter()
    result = sanitize("nsfw " * 100_000)
    elapsed = time.perf_counter() - started
    assert result == "**** " * (MAX_PROMPT_BYTES // 5)
    assert len(result.encode("utf-8")) == MAX_PROMPT_BYTES
    assert elapsed < 5.0


def test_redaction_masks_adjacent_repeats() -> None:
    assert redact_blocklist("NSFWnsfwNsFw") == "*" * 12


def test_truncation_may_split_masked_token() -> None:
    raw = "a" * (MAX_PROMPT_BYTES - 2) + "nsfw"
    result = sanitize(raw)
    assert len(result) == MAX_PROMPT_BYTES
    assert result.endswith("a**")


def test_sanitize_full_pipeline() -> None:
    raw = "  A\x00 red\t\tfox\n\nin the snow  "
    assert sanitize(raw) == " A red fox in the snow"


def test_sanitize_bytes_input() -> None:
    assert sanitize(b"blue \xff\xfe bird") == "blue bird"


def test_sanitize_image_url_accepts_http_and_https() -> None:
    assert sanitize_image_url(" https://cdn.example/img.png ") == "https://cdn.example/img.png"
    assert sanitize_image_url("http://cdn.example/a.png") == "http://cdn.example/a.png"


@pytest.mark.parametrize(
    "url",
    ["", "   ", "ftp://cdn.example/a.png", "javascript:alert(1)", "https://a b", "https://"],
)
def test_sanitize_image_url_rejects_unsafe(url: str) -> None:
    with pytest.raises(UnsafeURL):
        sanitize_image_url(url)


def test_sanitize_image_url_rejects_oversized() -> None:
    with pytest.raises(UnsafeURL):
        sanitize_image_url("https://cdn.example/" + "a" * 3000)
