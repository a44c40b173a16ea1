"""Small text helpers used by the scene file parser."""

from __future__ import annotations

_WHITESPACE = " \t\n\r\v\f"
_DIGITS = "0123456789"


def is_only_whitespace(text: str) -> bool:
    """Return True if ``text`` holds nothing but whitespace (or is empty)."""
    return all(ch in _WHITESPACE for ch in text)


def has_spaces(text: str | None) -> bool:
    """Return True if ``text`` contains a space or a tab."""
    if not text:
        return False
    return " " in text or "\t" in text


def trim_chars(text: str, chars: str) -> str:
    """Remove every leading and trailing character found in ``chars``."""
    return text.strip(chars)


def split_words(text: str, sep: str) -> list[str]:
    """Split ``text`` on ``sep``, dropping empty pieces."""
    return [word for word in text.split(sep) if word]


def parse_int(text: str) -> int:
    """Read a leading integer the way ``atoi`` does.

    Leading whitespace is skipped, one optional sign is accepted and digits
    are read until the first non-digit. No digits at all gives 0.
    """
    rest = text.lstrip(_WHITESPACE)
    sign = 1
    if rest[:1] == "-":
        sign = -1
        rest = rest[1:]
    elif rest[:1] == "+":
        rest = rest[1:]
    value = 0
    for ch in rest:
        if ch not in _DIGITS:
            break
        value = value * 10 + (ord(ch) - ord("0"))
    return sign * value