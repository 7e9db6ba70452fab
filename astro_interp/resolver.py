"""Specificity-ordered lookups against a loaded :class:`Style`.

Keys are compared as exact strings: a stored ``*`` only matches a query that
asks for ``*`` in the same field. More specific query keys are always tried
first; among duplicate keys the first one inserted wins.
"""
from __future__ import annotations

from typing import Iterable, Optional

from astro_interp.keys import encode_key
from astro_interp.lookup import WILDCARD, is_valid_aspect
from astro_interp.store import ComboEntry, Style


def combo_query_keys(obj: int, sign: int, house: int) -> list[str]:
    """Keys tried for an ``object, sign, house`` query, most specific first."""
    return [
        encode_key(obj, sign, house),
        encode_key(obj, sign, WILDCARD),
        encode_key(obj, WILDCARD, house),
        encode_key(WILDCARD, sign, WILDCARD),
    ]


def aspect_combo_query_keys(obj1: int, obj2: int, asp: int) -> list[str]:
    """Keys tried for an ``object1, object2, aspect`` query, most specific first."""
    return [
        encode_key(obj1, obj2, asp),
        encode_key(obj1, obj2, WILDCARD),
        encode_key(WILDCARD, WILDCARD, asp),
    ]


def first_match(entries: Iterable[ComboEntry], key: str) -> Optional[str]:
    for entry in entries:
        if entry.key == key:
            return entry.value
    return None


def _first_of(entries, keys: list[str]) -> Optional[str]:
    for key in keys:
        value = first_match(entries, key)
        if value is not None:
            return value
    return None


def lookup_combo(style: Optional[Style], obj: int, sign: int, house: int) -> Optional[str]:
    """Text for an object in a sign and house, or the style's default location."""
    if style is None or not style.loaded:
        return None
    value = _first_of(style.combos, combo_query_keys(obj, sign, house))
    if value is not None:
        return value
    return style.default_location


def lookup_aspect_combo(style: Optional[Style], obj1: int, obj2: int, asp: int) -> Optional[str]:
    """Text for two objects joined by an aspect; there is no style-level default."""
    if style is None or not style.loaded:
        return None
    return _first_of(style.aspect_combos, aspect_combo_query_keys(obj1, obj2, asp))


def lookup_aspect(style: Optional[Style], asp: int, orb: int = 0) -> Optional[str]:
    """Generic text for an aspect. ``orb`` is accepted but does not change the result."""
    if style is None or not style.loaded:
        return None
    if not is_valid_aspect(asp):
        return None
    return style.aspect_interact.get(asp)
