import pytest

from astro_interp.resolver import (
    aspect_combo_query_keys,
    combo_query_keys,
    lookup_aspect,
    lookup_aspect_combo,
    lookup_combo,
)
from astro_interp.store import Style


@pytest.fixture
def style():
    s = Style.allocate("test.ais")
    s.loaded = True
    return s


def test_query_key_order():
    assert combo_query_keys(1, 2, 3) == ["1+2+3", "1+2+*", "1+*+3", "*+2+*"]
    assert aspect_combo_query_keys(0, 4, 1) == ["0+4+1", "0+4+*", "*+*+1"]


def test_exact_match_then_sign_wildcard(style):
    style.append_combo("0+1+1", "A")
    style.append_combo("0+1+*", "B")
    assert lookup_combo(style, 0, 1, 1) == "A"
    assert lookup_combo(style, 0, 1, 2) == "B"


def test_specific_key_wins_regardless_of_insertion_order(style):
    style.append_combo("*+1+*", "any object in Aries")
    style.append_combo("0+*+5", "object in 5th")
    style.append_combo("0+1+*", "object in Aries")
    style.append_combo("0+1+5", "exact")
    assert lookup_combo(style, 0, 1, 5) == "exact"
    assert lookup_combo(style, 0, 1, 6) == "object in Aries"
    assert lookup_combo(style, 0, 2, 5) == "object in 5th"
    assert lookup_combo(style, 3, 1, 9) == "any object in Aries"


def test_first_duplicate_wins(style):
    style.append_combo("2+3+4", "first")
    style.append_combo("2+3+4", "second")
    assert lookup_combo(style, 2, 3, 4) == "first"


def test_default_location_when_nothing_matches(style):
    style.append_combo("1+1+1", "Sun in Aries, 1st")
    assert lookup_combo(style, 2, 2, 2) is None
    style.default_location = "Generic placement text"
    assert lookup_combo(style, 2, 2, 2) == "Generic placement text"
    assert lookup_combo(style, 1, 1, 1) == "Sun in Aries, 1st"


def test_wildcards_are_literal_not_patterns(style):
    style.append_combo("1+1+*", "stored wildcard")
    # A stored '*' house never answers the planet+house tier.
    assert lookup_combo(style, 1, 2, 1) is None


def test_aspect_combo_fallback(style):
    style.append_aspect_combo("0+4+*", "X")
    assert lookup_aspect_combo(style, 0, 4, 1) == "X"
    style.default_aspect = "not used for aspect combos"
    assert lookup_aspect_combo(style, 0, 5, 1) is None


def test_aspect_combo_order(style):
    style.append_aspect_combo("*+*+3", "any square")
    style.append_aspect_combo("1+5+*", "Sun and Mars")
    style.append_aspect_combo("1+5+3", "Sun square Mars")
    assert lookup_aspect_combo(style, 1, 5, 3) == "Sun square Mars"
    assert lookup_aspect_combo(style, 1, 5, 4) == "Sun and Mars"
    assert lookup_aspect_combo(style, 2, 6, 3) == "any square"


def test_aspect_lookup_ignores_orb(style):
    style.aspect_interact[3] = "Tension that demands work"
    assert lookup_aspect(style, 3) == "Tension that demands work"
    assert lookup_aspect(style, 3, orb=7) == "Tension that demands work"
    assert lookup_aspect(style, 4) is None


@pytest.mark.parametrize("asp", [-1, 25, 99])
def test_aspect_lookup_out_of_range(style, asp):
    assert lookup_aspect(style, asp) is None


def test_no_style_or_unloaded_style_gives_no_result(style):
    style.append_combo("1+1+1", "x")
    style.aspect_interact[1] = "y"
    style.default_location = "z"
    style.loaded = False
    assert lookup_combo(style, 1, 1, 1) is None
    assert lookup_aspect(style, 1) is None
    assert lookup_combo(None, 1, 1, 1) is None
    assert lookup_aspect_combo(None, 1, 2, 1) is None
    assert lookup_aspect(None, 1) is None
