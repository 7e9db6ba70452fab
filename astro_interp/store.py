"""In-memory storage for one interpretation style."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Generic, Iterator, Optional, TypeVar

from astro_interp.lookup import (
    is_valid_aspect,
    is_valid_house,
    is_valid_object,
    is_valid_sign,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_INCREMENT = 64


class GrowableList(Generic[T]):
    """Append-only list whose capacity grows in fixed steps.

    Capacity grows by ``increment`` (never doubling) and, when ``limit`` is
    set, never past it; appends beyond the limit are dropped and reported by a
    ``False`` return value. Entries are never removed or deduplicated.
    """

    def __init__(self, increment: int = DEFAULT_INCREMENT, limit: Optional[int] = None):
        if increment <= 0:
            raise ValueError("increment must be positive")
        if limit is not None and limit < 0:
            raise ValueError("limit must not be negative")
        self.increment = increment
        self.limit = limit
        self._capacity = 0
        self._items: list[T] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    def append(self, item: T) -> bool:
        if len(self._items) >= self._capacity:
            new_capacity = self._capacity + self.increment
            if self.limit is not None:
                new_capacity = min(new_capacity, self.limit)
            if len(self._items) >= new_capacity:
                return False
            self._capacity = new_capacity
        self._items.append(item)
        return True

    def clear(self) -> None:
        self._items = []
        self._capacity = 0

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __repr__(self) -> str:
        return f"GrowableList(count={len(self)}, capacity={self._capacity}, limit={self.limit})"


@dataclass(frozen=True)
class ComboEntry:
    key: str
    value: str


class TextTable:
    """Mapping of validated domain ids to owned text, one value per slot."""

    def __init__(self, label: str, valid: Callable[[int], bool]):
        self.label = label
        self._valid = valid
        self._slots: dict[int, str] = {}

    def __setitem__(self, index: int, text: str) -> None:
        if not self._valid(index):
            raise ValueError(f"{self.label} index {index} out of range")
        self._slots[index] = text

    def __getitem__(self, index: int) -> str:
        return self._slots[index]

    def get(self, index: int, default: Optional[str] = None) -> Optional[str]:
        return self._slots.get(index, default)

    def __contains__(self, index: object) -> bool:
        return index in self._slots

    def __len__(self) -> int:
        return len(self._slots)

    def clear(self) -> None:
        self._slots.clear()


@dataclass
class Style:
    """All interpretation text of one style, loaded from a file or a folder."""

    filename: str
    name: Optional[str] = None
    author: Optional[str] = None
    version: Optional[str] = None
    description: Optional[str] = None
    loaded: bool = False

    planet_meaning: TextTable = field(default_factory=lambda: TextTable("object", is_valid_object))
    sign_desc: TextTable = field(default_factory=lambda: TextTable("sign", is_valid_sign))
    sign_desire: TextTable = field(default_factory=lambda: TextTable("sign", is_valid_sign))
    house_area: TextTable = field(default_factory=lambda: TextTable("house", is_valid_house))
    aspect_interact: TextTable = field(default_factory=lambda: TextTable("aspect", is_valid_aspect))
    aspect_therefore: TextTable = field(default_factory=lambda: TextTable("aspect", is_valid_aspect))

    combos: GrowableList[ComboEntry] = field(default_factory=GrowableList)
    aspect_combos: GrowableList[ComboEntry] = field(default_factory=GrowableList)

    default_location: Optional[str] = None
    default_aspect: Optional[str] = None

    @classmethod
    def allocate(
        cls,
        filename: str,
        *,
        combo_increment: int = DEFAULT_INCREMENT,
        combo_limit: Optional[int] = None,
        aspect_combo_increment: int = DEFAULT_INCREMENT,
        aspect_combo_limit: Optional[int] = None,
    ) -> "Style":
        """Create an empty style with its growth policy for both collections."""
        return cls(
            filename=filename,
            combos=GrowableList(combo_increment, combo_limit),
            aspect_combos=GrowableList(aspect_combo_increment, aspect_combo_limit),
        )

    @property
    def display_name(self) -> str:
        return self.name or self.filename

    def append_combo(self, key: str, value: str) -> bool:
        added = self.combos.append(ComboEntry(key, value))
        if not added:
            logger.debug("%s: combination limit %s reached, dropping '%s'",
                         self.filename, self.combos.limit, key)
        return added

    def append_aspect_combo(self, key: str, value: str) -> bool:
        added = self.aspect_combos.append(ComboEntry(key, value))
        if not added:
            logger.debug("%s: aspect combination limit %s reached, dropping '%s'",
                         self.filename, self.aspect_combos.limit, key)
        return added

    def release(self) -> None:
        """Drop every owned text and both collections."""
        for table in (
            self.planet_meaning,
            self.sign_desc,
            self.sign_desire,
            self.house_area,
            self.aspect_interact,
            self.aspect_therefore,
        ):
            table.clear()
        self.combos.clear()
        self.aspect_combos.clear()
        self.default_location = None
        self.default_aspect = None
        self.loaded = False
