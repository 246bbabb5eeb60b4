import pytest

from vl_plan.classify import SUBJECT_FALLBACK, guess_subject_name, tokenize


def test_tokenize_splits_on_space_and_punctuation() -> None:
    assert tokenize("a red fox, running!  fast?yes.") == ["a", "red", "fox", "running", "fast", "yes"]


def test_tokenize_keeps_other_punctuation_inside_tokens() -> None:
    assert tokenize("close-up 9:16 bird's-eye") == ["close-up", "9:16", "bird's-eye"]


@pytest.mark.parametrize(
    "prompt, expected",
    [
        ("A Red Fox", "fox"),
        ("a cat sitting on the mat", "mat"),
        ("a lighthouse!", "lighthouse"),
        ("portrait of an old sailor with a pipe", "pipe"),
    ],
)
def test_subject_is_last_meaningful_word(prompt: str, expected: str) -> None:
    assert guess_subject_name(prompt) == expected


def test_subject_skips_scene_descriptors() -> None:
    prompt = "close-up of a dragon in a foggy forest at night, anime style, 9:16"
    assert guess_subject_name(prompt) == "dragon"


def test_subject_falls_back_when_only_descriptors_remain() -> None:
    assert guess_subject_name("a forest at night") == "night"
    assert guess_subject_name("16:9") == "16:9"


def test_subject_all_stop_words_returns_last_token() -> None:
    assert guess_subject_name("in the of") == "of"


def test_subject_without_tokens_uses_fallback() -> None:
    assert guess_subject_name(" ,.!? ") == SUBJECT_FALLBACK
    assert guess_subject_name("") == "subject"
