"""Encoding and decoding of composite ``A+B+C`` lookup keys.

Two grammars share the same shape:

* combo keys ``object+sign+house``
* aspect-combo keys ``object1+object2+aspect``

Each field is a numeric id, a case-insensitive name, or ``*`` for a wildcard
(``-1`` internally). Decoded keys are stored in their canonical numeric form so
``Sun+Aries+1`` and ``1+1+1`` address the same entry.

Every field, including the leading object, accepts ``*`` so that the
``*+sign+*`` and ``*+*+aspect`` fallback keys can be written in a file.
"""
from __future__ import annotations

import re
from typing import Optional

from astro_interp.errors import MalformedKeyError
from astro_interp.lookup import (
    ALIASES_ASPECTS,
    ALIASES_OBJECTS,
    ASPECT_NAMES,
    OBJECT_NAMES,
    SIGNS,
    WILDCARD,
    WILDCARD_TOKEN,
    is_valid_aspect,
    is_valid_house,
    is_valid_object,
    is_valid_sign,
)

SEPARATOR = "+"

_OBJECT_IDS = {name.lower(): i for i, name in enumerate(OBJECT_NAMES)}
_OBJECT_IDS.update({alias.lower(): OBJECT_NAMES.index(name) for alias, name in ALIASES_OBJECTS.items()})
_SIGN_IDS = {name.lower(): i for i, name in enumerate(SIGNS, start=1)}
_ASPECT_IDS = {name.lower(): i for i, name in enumerate(ASPECT_NAMES, start=1)}
_ASPECT_IDS.update({alias.lower(): ASPECT_NAMES.index(name) + 1 for alias, name in ALIASES_ASPECTS.items()})

_NUMERIC_TRIPLE = re.compile(r"\s*([+-]?\d+)\s*\+\s*([+-]?\d+)\s*\+\s*([+-]?\d+)\s*")


def _is_number(token: str) -> bool:
    return token.isascii() and token.isdigit()


def leading_int(token: str) -> int:
    """Parse the leading decimal digits of ``token``, ``0`` if there are none."""
    m = re.match(r"\s*([+-]?\d+)", token)
    return int(m.group(1)) if m else 0


def _resolve(token, names, valid, label, wildcard) -> int:
    token = token.strip()
    if token == WILDCARD_TOKEN:
        if wildcard:
            return WILDCARD
        raise MalformedKeyError(token, f"wildcard not allowed for {label}")
    if _is_number(token):
        value = int(token)
    else:
        value = names.get(token.lower())
        if value is None:
            raise MalformedKeyError(token, f"unknown {label} name")
    if not valid(value):
        raise MalformedKeyError(token, f"{label} id {value} out of range")
    return value


def resolve_object(token: str, wildcard: bool = False) -> int:
    return _resolve(token, _OBJECT_IDS, is_valid_object, "object", wildcard)


def resolve_sign(token: str, wildcard: bool = False) -> int:
    return _resolve(token, _SIGN_IDS, is_valid_sign, "sign", wildcard)


def resolve_house(token: str, wildcard: bool = False) -> int:
    # Houses have no names, only numbers.
    return _resolve(token, {}, is_valid_house, "house", wildcard)


def resolve_aspect(token: str, wildcard: bool = False) -> int:
    return _resolve(token, _ASPECT_IDS, is_valid_aspect, "aspect", wildcard)


def _split(key: str) -> list[str]:
    fields = key.split(SEPARATOR)
    if len(fields) != 3:
        raise MalformedKeyError(key, f"expected 3 '{SEPARATOR}'-separated fields, got {len(fields)}")
    return fields


def decode_combo_key(key: str) -> tuple[int, int, int]:
    """Decode ``object+sign+house`` into ids, ``-1`` marking a wildcard."""
    a, b, c = _split(key)
    try:
        return (
            resolve_object(a, wildcard=True),
            resolve_sign(b, wildcard=True),
            resolve_house(c, wildcard=True),
        )
    except MalformedKeyError as exc:
        raise MalformedKeyError(key, exc.reason) from exc


def decode_aspect_combo_key(key: str) -> tuple[int, int, int]:
    """Decode ``object1+object2+aspect`` into ids, ``-1`` marking a wildcard."""
    a, b, c = _split(key)
    try:
        return (
            resolve_object(a, wildcard=True),
            resolve_object(b, wildcard=True),
            resolve_aspect(c, wildcard=True),
        )
    except MalformedKeyError as exc:
        raise MalformedKeyError(key, exc.reason) from exc


def encode_key(first: Optional[int], second: Optional[int], third: Optional[int]) -> str:
    """Format ids as a canonical key; ``None`` or ``-1`` become ``*``."""
    return SEPARATOR.join(
        WILDCARD_TOKEN if part is None or part == WILDCARD else str(int(part))
        for part in (first, second, third)
    )


def parse_numeric_key(key: str) -> Optional[tuple[int, int, int]]:
    """Parse a key made of exactly three bare integers, else ``None``.

    This is the only key form per-object files in a style folder understand:
    names and wildcards are not resolved there.
    """
    m = _NUMERIC_TRIPLE.fullmatch(key)
    if m is None:
        return None
    return int(m.group(1)), int(m.group(2)), int(m.group(3))
