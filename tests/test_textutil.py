import pytest

from raycub.textutil import (
    has_spaces,
    is_only_whitespace,
    parse_int,
    split_words,
    trim_chars,
)


@pytest.mark.parametrize(
    "text, expected",
    [("", True), (" \t\n\r\v\f", True), ("  x ", False), ("1", False)],
)
def test_is_only_whitespace(text, expected):
    assert is_only_whitespace(text) is expected


@pytest.mark.parametrize(
    "text, expected",
    [("a b", True), ("a\tb", True), ("ab\n", False), ("", False), (None, False)],
)
def test_has_spaces(text, expected):
    assert has_spaces(text) is expected


def test_trim_chars_both_ends():
    assert trim_chars(" \t./tex.xpm \n", " \n\t") == "./tex.xpm"


def test_trim_chars_all_removed():
    assert trim_chars("\n\n ", " \n") == ""


def test_trim_chars_keeps_inner():
    assert trim_chars("\na b\n", "\n") == "a b"


def test_split_words_drops_empty():
    assert split_words(",,10,,20,30,", ",") == ["10", "20", "30"]


def test_split_words_empty_text():
    assert split_words("", ",") == []


@pytest.mark.parametrize(
    "text, expected",
    [("  -42abc", -42), ("+7", 7), ("abc", 0), ("\t255 ", 255), ("--3", 0), ("", 0)],
)
def test_parse_int(text, expected):
    assert parse_int(text) == expected