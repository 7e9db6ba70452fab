import gc
import warnings

import pytest

from astro_interp.errors import StyleFileNotFoundError
from astro_interp.loader import load_style_file, merge_style_file
from astro_interp.resolver import lookup_aspect_combo, lookup_combo
from astro_interp.store import Style

SAMPLE_STYLE = """\
# Sample single-file style
[metadata]
name: Modern
author: Jane
version: 1.2
description: A modern take

[planet_meanings]
Sun: Vitality and purpose
2: Feelings and needs
Vulcan: never stored

[sign_descriptions]
Aries: Bold ; trailing comment

[house_areas]
1: Self
13: Nowhere

[combinations]
Sun+Aries+1: Sun in Aries rising. \\
    Strong start.
Sun+Aries+*: Sun in Aries anywhere
Bogus+Aries+1: never stored
*+Leo+*: Any object in Leo

[aspects]
Square: Tension
Conjunction: Fusion

[aspect_combinations]
Sun+Venus+Conjunct: Charm
Sun+Venus+*: Affection

[templates]
default_location: No specific text.
default_aspect: No aspect text.

[unknown]
ignored: yes
"""


@pytest.fixture
def sample(write_file):
    return load_style_file(str(write_file("modern.ais", SAMPLE_STYLE)))


def test_metadata_and_tables(sample):
    assert sample.loaded
    assert sample.name == "Modern"
    assert sample.author == "Jane"
    assert sample.version == "1.2"
    assert sample.description == "A modern take"
    assert sample.planet_meaning.get(1) == "Vitality and purpose"
    assert sample.planet_meaning.get(2) == "Feelings and needs"
    assert len(sample.planet_meaning) == 2
    assert sample.sign_desc.get(1) == "Bold"
    assert sample.sign_desire.get(1) == "Bold"
    assert sample.house_area.get(1) == "Self"
    assert len(sample.house_area) == 1
    assert sample.aspect_interact.get(3) == "Tension"
    assert sample.aspect_interact.get(1) == "Fusion"
    assert sample.default_location == "No specific text."
    assert sample.default_aspect == "No aspect text."


def test_combo_keys_are_stored_canonically(sample):
    assert [e.key for e in sample.combos] == ["1+1+1", "1+1+*", "*+5+*"]
    assert sample.combos[0].value == "Sun in Aries rising. Strong start."
    assert [e.key for e in sample.aspect_combos] == ["1+4+1", "1+4+*"]


def test_named_entries_answer_numeric_queries(sample):
    assert lookup_combo(sample, 1, 1, 1) == "Sun in Aries rising. Strong start."
    assert lookup_combo(sample, 1, 1, 7) == "Sun in Aries anywhere"
    assert lookup_combo(sample, 3, 5, 2) == "Any object in Leo"
    assert lookup_combo(sample, 3, 6, 2) == "No specific text."
    assert lookup_aspect_combo(sample, 1, 4, 1) == "Charm"
    assert lookup_aspect_combo(sample, 1, 4, 3) == "Affection"


def test_missing_file_raises(tmp_path):
    missing = tmp_path / "nope.ais"
    with pytest.raises(StyleFileNotFoundError) as info:
        load_style_file(str(missing))
    assert isinstance(info.value, FileNotFoundError)
    assert "nope.ais" in str(info.value)


def test_bad_growth_policy_leaves_no_open_file(write_file):
    path = write_file("broken.ais", "[aspects]\nSquare: Friction\n")
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        with pytest.raises(ValueError):
            load_style_file(str(path), combo_increment=0)
        gc.collect()
    assert not [w for w in caught if issubclass(w.category, ResourceWarning)]


def test_combo_growth_keeps_every_entry(write_file):
    body = "".join(f"{obj}+{sign}+1: text {obj}/{sign}\n" for obj in range(1, 11) for sign in range(1, 13))
    path = write_file("big.ais", "[combinations]\n" + body)
    style = load_style_file(str(path), combo_increment=16)
    assert len(style.combos) == 120
    assert style.combos.capacity == 128
    assert lookup_combo(style, 10, 12, 1) == "text 10/12"


SUN_FILE = """\
[metadata]
name: ignored here
[planet_meanings]
1: Solar core
Sun: named keys are not read here
[sign_descriptions]
1: Aries flavour
[house_areas]
12: Hidden
[combinations]
1+1+1: exact
1+1+*: wildcard form
Sun+Aries+2: named form
0+1+1: object zero
[aspect_combinations]
1+4+1: Sun conjunct Venus
1+4: missing aspect
[aspects]
1: not part of folder files
[templates]
default_location: not part of folder files
"""


def folder_style(**limits):
    return Style.allocate("folder", **limits)


def test_merge_reads_bare_integer_keys_only(write_file):
    style = folder_style()
    assert merge_style_file(style, str(write_file("Sun.ais", SUN_FILE)))
    assert style.planet_meaning.get(1) == "Solar core"
    assert len(style.planet_meaning) == 1
    assert style.sign_desc.get(1) == "Aries flavour"
    assert 1 not in style.sign_desire
    assert style.house_area.get(12) == "Hidden"
    assert [e.key for e in style.combos] == ["1+1+1"]
    assert [e.key for e in style.aspect_combos] == ["1+4+1"]
    assert len(style.aspect_interact) == 0
    assert style.default_location is None
    assert style.name is None


def test_merge_with_named_keys_uses_full_codec(write_file):
    style = folder_style()
    merge_style_file(style, str(write_file("Sun.ais", SUN_FILE)), named_keys=True)
    assert [e.key for e in style.combos] == ["1+1+1", "1+1+*", "1+1+2", "0+1+1"]


def test_merge_missing_file_is_silent(tmp_path):
    style = folder_style()
    assert merge_style_file(style, str(tmp_path / "Moon.ais")) is False
    assert len(style.combos) == 0


def test_merge_respects_hard_ceiling(write_file):
    body = "".join(f"1+{sign}+{house}: t\n" for sign in range(1, 13) for house in range(1, 13))
    style = folder_style(combo_increment=50, combo_limit=100)
    merge_style_file(style, str(write_file("Sun.ais", "[combinations]\n" + body)))
    assert len(style.combos) == 100
    assert style.combos[99].key == "1+9+4"
