import pytest

from raycub.colors import lookup_color


@pytest.mark.parametrize(
    "name, expected",
    [
        ("snow", 0xFFFAFA),
        ("red", 0xFF0000),
        ("black", 0x0),
        ("white", 0xFFFFFF),
        ("blue", 0xFF),
        ("gray50", 0x7F7F7F),
        ("lightgoldenrodyellow", 0xFAFAD2),
        ("darkred", 0x8B0000),
    ],
)
def test_known_names(name, expected):
    assert lookup_color(name) == expected


def test_none_is_transparent():
    assert lookup_color("none") == -1


def test_lookup_ignores_case():
    assert lookup_color("RED") == lookup_color("red")
    assert lookup_color("Ghost White") == lookup_color("ghost white")
    assert lookup_color("NONE") == -1


def test_unknown_name_gives_none():
    assert lookup_color("no such colour") is None
    assert lookup_color("") is None


def test_first_entry_wins_for_duplicates():
    assert lookup_color("dark slate") == 0x2F4F4F
    assert lookup_color("light slate") == 0x778899
    assert lookup_color("light goldenrod") == 0xFAFAD2


def test_gray_and_grey_agree():
    for level in range(101):
        assert lookup_color(f"gray{level}") == lookup_color(f"grey{level}")


def test_spaced_and_joined_names_agree():
    pairs = [
        ("ghost white", "ghostwhite"),
        ("navy blue", "navyblue"),
        ("hot pink", "hotpink"),
        ("light green", "lightgreen"),
    ]
    for spaced, joined in pairs:
        assert lookup_color(spaced) == lookup_color(joined)


def test_numbered_variant_one_matches_base():
    for base in ("snow", "red", "gold", "orange", "yellow", "green", "cyan"):
        assert lookup_color(f"{base}1") == lookup_color(base)


def test_values_fit_in_rgb():
    names = ["snow", "thistle4", "gray100", "aquamarine", "deepskyblue4"]
    for name in names:
        assert 0 <= lookup_color(name) <= 0xFFFFFF