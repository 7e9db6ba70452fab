"""Build :class:`Style` objects from interpretation text files.

Two readers share the parser in :mod:`astro_interp.parser`:

* :func:`load_style_file` reads a complete single-file style, resolving names
  and wildcards in every key through :mod:`astro_interp.keys`.
* :func:`merge_style_file` merges one per-object ``.ais`` file of a style
  folder into an existing style. Its keys are bare integers only.
"""
from __future__ import annotations

import logging
from typing import Callable

from astro_interp import keys
from astro_interp.errors import MalformedKeyError, StyleFileNotFoundError
from astro_interp.lookup import (
    FOLDER_FILE_SECTIONS,
    METADATA_KEYS,
    SECTION_ASPECT_COMBINATIONS,
    SECTION_ASPECTS,
    SECTION_COMBINATIONS,
    SECTION_HOUSE_AREAS,
    SECTION_METADATA,
    SECTION_PLANET_MEANINGS,
    SECTION_SIGN_DESCRIPTIONS,
    SECTION_TEMPLATES,
    STYLE_FILE_SECTIONS,
    is_valid_aspect,
    is_valid_house,
    is_valid_object,
    is_valid_sign,
)
from astro_interp.parser import Entry, iter_entries
from astro_interp.store import DEFAULT_INCREMENT, Style

logger = logging.getLogger(__name__)


def _open_text(path: str):
    return open(path, "r", encoding="utf-8", errors="replace")


# -------------------------
# Single-file styles
# -------------------------

def _metadata(style: Style, entry: Entry) -> None:
    field_name = entry.key.lower()
    if field_name in METADATA_KEYS:
        setattr(style, field_name, entry.value)


def _planet_meaning(style: Style, entry: Entry) -> None:
    obj = keys.resolve_object(entry.key)
    style.planet_meaning[obj] = entry.value


def _sign_description(style: Style, entry: Entry) -> None:
    # One text serves as both the sign's description and its desire.
    sign = keys.resolve_sign(entry.key)
    style.sign_desc[sign] = entry.value
    style.sign_desire[sign] = entry.value


def _house_area(style: Style, entry: Entry) -> None:
    house = keys.resolve_house(entry.key)
    style.house_area[house] = entry.value


def _combination(style: Style, entry: Entry) -> None:
    style.append_combo(keys.encode_key(*keys.decode_combo_key(entry.key)), entry.value)


def _aspect(style: Style, entry: Entry) -> None:
    asp = keys.resolve_aspect(entry.key)
    style.aspect_interact[asp] = entry.value


def _aspect_combination(style: Style, entry: Entry) -> None:
    style.append_aspect_combo(keys.encode_key(*keys.decode_aspect_combo_key(entry.key)), entry.value)


def _template(style: Style, entry: Entry) -> None:
    name = entry.key.lower()
    if name == "default_location":
        style.default_location = entry.value
    elif name == "default_aspect":
        style.default_aspect = entry.value


_STYLE_HANDLERS: dict[str, Callable[[Style, Entry], None]] = {
    SECTION_METADATA: _metadata,
    SECTION_PLANET_MEANINGS: _planet_meaning,
    SECTION_SIGN_DESCRIPTIONS: _sign_description,
    SECTION_HOUSE_AREAS: _house_area,
    SECTION_COMBINATIONS: _combination,
    SECTION_ASPECTS: _aspect,
    SECTION_ASPECT_COMBINATIONS: _aspect_combination,
    SECTION_TEMPLATES: _template,
}


def load_style_file(path: str, *, combo_increment: int = DEFAULT_INCREMENT) -> Style:
    """Parse a complete interpretation style from ``path``.

    Entries whose key cannot be decoded are skipped. The returned style is
    marked loaded; registering it is left to the caller.
    """
    style = Style.allocate(
        path,
        combo_increment=combo_increment,
        aspect_combo_increment=combo_increment,
    )
    try:
        fh = _open_text(path)
    except OSError as exc:
        logger.warning("Could not open interpretation file: %s", path)
        raise StyleFileNotFoundError(f"Could not open interpretation file: {path}") from exc

    with fh:
        for entry in iter_entries(fh, STYLE_FILE_SECTIONS):
            try:
                _STYLE_HANDLERS[entry.section](style, entry)
            except MalformedKeyError as exc:
                logger.debug("%s:%d: skipping [%s] entry: %s", path, entry.line_no, entry.section, exc)

    style.loaded = True
    logger.info("Loaded interpretation style %r from %s (%d combos, %d aspect combos)",
                style.display_name, path, len(style.combos), len(style.aspect_combos))
    return style


# -------------------------
# Per-object folder files
# -------------------------

def _merge_numeric(style: Style, entry: Entry) -> None:
    index = keys.leading_int(entry.key)
    if entry.section == SECTION_PLANET_MEANINGS:
        if index >= 1 and is_valid_object(index):
            style.planet_meaning[index] = entry.value
    elif entry.section == SECTION_SIGN_DESCRIPTIONS:
        if is_valid_sign(index):
            style.sign_desc[index] = entry.value
    elif entry.section == SECTION_HOUSE_AREAS:
        if is_valid_house(index):
            style.house_area[index] = entry.value


def _merge_combo(style: Style, entry: Entry, named_keys: bool) -> None:
    if named_keys:
        _combination(style, entry)
        return
    parsed = keys.parse_numeric_key(entry.key)
    if parsed is None:
        logger.debug("%s:%d: combination key '%s' is not three integers",
                     style.filename, entry.line_no, entry.key)
        return
    obj, sign, house = parsed
    if obj >= 1 and is_valid_object(obj) and is_valid_sign(sign) and is_valid_house(house):
        style.append_combo(keys.encode_key(obj, sign, house), entry.value)


def _merge_aspect_combo(style: Style, entry: Entry, named_keys: bool) -> None:
    if named_keys:
        _aspect_combination(style, entry)
        return
    parsed = keys.parse_numeric_key(entry.key)
    if parsed is None:
        logger.debug("%s:%d: aspect combination key '%s' is not three integers",
                     style.filename, entry.line_no, entry.key)
        return
    obj1, obj2, asp = parsed
    if obj1 >= 1 and obj2 >= 1 and is_valid_object(obj1) and is_valid_object(obj2) and is_valid_aspect(asp):
        style.append_aspect_combo(keys.encode_key(obj1, obj2, asp), entry.value)


def merge_style_file(style: Style, path: str, *, named_keys: bool = False) -> bool:
    """Merge one per-object ``.ais`` file into ``style``.

    Returns ``False`` without raising when the file cannot be opened, since a
    folder is not required to provide every object. With ``named_keys`` the
    combination sections go through the full key codec instead of the bare
    integer form.
    """
    try:
        fh = _open_text(path)
    except OSError:
        logger.debug("Skipping unreadable style file %s", path)
        return False

    with fh:
        for entry in iter_entries(fh, FOLDER_FILE_SECTIONS):
            try:
                if entry.section == SECTION_COMBINATIONS:
                    _merge_combo(style, entry, named_keys)
                elif entry.section == SECTION_ASPECT_COMBINATIONS:
                    _merge_aspect_combo(style, entry, named_keys)
                elif entry.section != SECTION_METADATA:
                    _merge_numeric(style, entry)
            except MalformedKeyError as exc:
                logger.debug("%s:%d: skipping [%s] entry: %s", path, entry.line_no, entry.section, exc)
    return True

