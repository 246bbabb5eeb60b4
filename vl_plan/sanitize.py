"""Sanitization of untrusted prompt text before classification."""
from __future__ import annotations

from typing import Union

from vl_plan.errors import InvalidInput, SanitizationExhausted, UnsafeURL

MAX_PROMPT_BYTES = 8000
MAX_URL_BYTES = 2048

# Order matters: earlier terms mask text before later terms are searched.
BLOCKLIST = ("nsfw", "nude", "nudity", "porn", "explicit", "sexual", "erotic")

MASK_CHAR = "*"

_WHITESPACE = frozenset(" \t\n\r")
_KEEP_CONTROL = frozenset("\t\n")
_ASCII_LOWER = str.maketrans("ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz")

RawText = Union[str, bytes]


def ascii_lower(text: str) -> str:
    """Lowercase A-Z only, leaving every other character untouched."""

    return text.translate(_ASCII_LOWER)


def _as_text(raw: RawText) -> str:
    if isinstance(raw, (bytes, bytearray)):
        # latin-1 maps each byte to the code point of the same value
        return bytes(raw).decode("latin-1")
    return raw


def strip_control(text: RawText) -> str:
    """Keep printable ASCII plus tab and newline, dropping everything else."""

    return "".join(ch for ch in _as_text(text) if 32 <= ord(ch) <= 126 or ch in _KEEP_CONTROL)


def collapse_whitespace(text: str) -> str:
    """Collapse runs of space/tab/CR/LF into one space and trim the trailing one."""

    out = []
    in_space = False
    for ch in text:
        if ch in _WHITESPACE:
            if not in_space:
                out.append(" ")
                in_space = True
        else:
            out.append(ch)
            in_space = False
    if out and out[-1] == " ":
        out.pop()
    return "".join(out)


def redact_blocklist(text: str, blocklist: tuple[str, ...] = BLOCKLIST) -> str:
    """Mask blocklisted substrings with ``*`` without changing length or offsets."""

    masked = list(text)
    shadow = ascii_lower(text)
    for term in blocklist:
        size = len(term)
        start = shadow.find(term)
        if start == -1:
            continue
        # later terms search the shadow with this term already masked
        chars = list(shadow)
        while start != -1:
            end = start + size
            masked[start:end] = MASK_CHAR * size
            chars[start:end] = MASK_CHAR * size
            start = shadow.find(term, end)
        shadow = "".join(chars)
    return "".join(masked)


def truncate(text: str, limit: int = MAX_PROMPT_BYTES) -> str:
    """Cut ``text`` to at most ``limit`` bytes of its UTF-8 encoding."""

    data = text.encode("utf-8")
    if len(data) <= limit:
        return text
    return data[:limit].decode("utf-8", errors="ignore")


def sanitize(raw: RawText) -> str:
    """Run the full sanitization pipeline over a raw prompt."""

    if raw is None or len(raw) == 0:
        raise InvalidInput("empty prompt")

    collapsed = collapse_whitespace(strip_control(raw))
    if not collapsed:
        raise SanitizationExhausted("prompt sanitized to empty")

    redacted = redact_blocklist(collapsed)
    if not redacted:
        raise SanitizationExhausted("prompt sanitized to empty")

    return truncate(redacted)


def sanitize_image_url(url: str) -> str:
    """Validate a source image URL for the edit modes."""

    raw = (url or "").strip()
    if not raw:
        raise UnsafeURL("empty url")
    if len(raw.encode("utf-8")) > MAX_URL_BYTES:
        raise UnsafeURL("url too long")
    cleaned = strip_control(raw)
    if any(ch in _WHITESPACE for ch in cleaned):
        raise UnsafeURL("url contains whitespace")
    lowered = ascii_lower(cleaned)
    if not lowered.startswith(("https://", "http://")):
        raise UnsafeURL("unsupported url scheme")
    if lowered in {"https://", "http://"}:
        raise UnsafeURL("url has no host")
    return cleaned


__all__ = [
    "BLOCKLIST",
    "MASK_CHAR",
    "MAX_PROMPT_BYTES",
    "MAX_URL_BYTES",
    "ascii_lower",
    "collapse_whitespace",
    "redact_blocklist",
    "sanitize",
    "sanitize_image_url",
    "strip_control",
    "truncate",
]
