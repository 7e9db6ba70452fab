"""Line-oriented parser for the interpretation text format.

The format is a loose INI dialect::

    [section_name]
    key: value            # or ';' comment
    key: value \\
         continued value

``#`` and ``;`` always start a comment, there is no quoting. A value whose
last non-blank character is a backslash continues on the following physical
lines; the pieces are joined with single spaces.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

logger = logging.getLogger(__name__)

COMMENT_CHARS = "#;"
CONTINUATION = "\\"
_BLANK = " \t\r\n"


@dataclass(frozen=True)
class Entry:
    """One fully assembled ``key: value`` pair."""

    section: str
    key: str
    value: str
    line_no: int


def strip_comment(line: str) -> str:
    """Drop everything from the first ``#`` or ``;`` onward."""
    for i, ch in enumerate(line):
        if ch in COMMENT_CHARS:
            return line[:i]
    return line


def parse_section(line: str) -> Optional[str]:
    """Return the lower-cased section name if ``line`` is a ``[header]``."""
    text = strip_comment(line).strip(_BLANK)
    if not text.startswith("["):
        return None
    end = text.find("]")
    name = text[1:end] if end >= 0 else text[1:]
    return name.strip().lower()


def parse_line(line: str) -> Optional[tuple[str, str, bool]]:
    """Split a physical line into ``(key, value, continued)``.

    Returns ``None`` for blank lines, comments, section headers, lines without
    a ``:`` separator and lines whose value is empty. ``continued`` is true when
    the value ended in a backslash, which is removed from the returned value.
    """
    text = strip_comment(line).lstrip(_BLANK)
    if not text or text.startswith("["):
        return None

    key, sep, value = text.partition(":")
    if not sep:
        return None
    key = key.strip(_BLANK)
    value = value.strip(_BLANK)
    if not value:
        return None

    continued = value.endswith(CONTINUATION)
    if continued:
        value = value[:-1].rstrip(_BLANK)
    return key, value, continued


def _join(held: str, piece: str) -> str:
    return f"{held.rstrip(_BLANK)} {piece}".strip(_BLANK)


def iter_entries(lines: Iterable[str], sections: Iterable[str]) -> Iterator[Entry]:
    """Yield the entries of ``lines`` that fall inside a recognized section.

    Keys seen before the first header, or after a header not listed in
    ``sections``, are dropped until the next recognized header. Headers, blank
    lines and comments are only recognized while no continuation is pending.
    A continuation still pending at end of input is discarded.
    """
    known = frozenset(s.lower() for s in sections)
    section: Optional[str] = None
    held: Optional[tuple[str, str, int]] = None

    for line_no, raw in enumerate(lines, start=1):
        if held is not None:
            piece = raw.strip(_BLANK)
            more = piece.endswith(CONTINUATION)
            if more:
                piece = piece[:-1].strip(_BLANK)
            key, value, start = held
            value = _join(value, piece)
            if more:
                held = (key, value, start)
                continue
            held = None
            if section is not None and value:
                yield Entry(section, key, value, start)
            continue

        header = parse_section(raw)
        if header is not None:
            if header in known:
                section = header
            else:
                logger.debug("line %d: ignoring unknown section [%s]", line_no, header)
                section = None
            continue

        parsed = parse_line(raw)
        if parsed is None:
            continue
        key, value, continued = parsed
        if continued:
            held = (key, value, line_no)
            continue
        if section is not None:
            yield Entry(section, key, value, line_no)

    if held is not None:
        logger.debug("line %d: discarding unterminated continuation of '%s'", held[2], held[0])
