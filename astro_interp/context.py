"""Caller-owned state tying the style and folder registries together."""
from __future__ import annotations

import logging
from typing import Optional

from astro_interp import resolver
from astro_interp.errors import StyleLimitError
from astro_interp.folders import ActiveMarker, Folder, FolderRegistry
from astro_interp.loader import load_style_file
from astro_interp.settings import Settings, get_settings, resolve_base_path
from astro_interp.store import Style

logger = logging.getLogger(__name__)


class StyleRegistry:
    """Ordered list of loaded styles plus the index of the current one."""

    def __init__(self, max_styles: int = 32):
        self.max_styles = max_styles
        self.styles: list[Style] = []
        self.sources: list[str] = []
        self.current_index: Optional[int] = None

    @property
    def current(self) -> Optional[Style]:
        if self.current_index is None:
            return None
        return self.styles[self.current_index]

    def __len__(self) -> int:
        return len(self.styles)

    def check_capacity(self) -> None:
        if len(self.styles) >= self.max_styles:
            logger.error("Maximum interpretation styles loaded (%d).", self.max_styles)
            raise StyleLimitError(f"Maximum interpretation styles loaded ({self.max_styles})")

    def register(self, style: Style, source: Optional[str] = None, make_current: bool = True) -> int:
        """Append ``style``; returns its index."""
        self.check_capacity()
        self.styles.append(style)
        self.sources.append(source or style.filename)
        index = len(self.styles) - 1
        if make_current:
            self.current_index = index
        return index

    def select(self, index: Optional[int]) -> None:
        if index is not None and not 0 <= index < len(self.styles):
            raise IndexError(f"No style at index {index}")
        self.current_index = index

    def release_all(self) -> None:
        for style in self.styles:
            style.release()
        self.styles = []
        self.sources = []
        self.current_index = None


class InterpretationContext:
    """Entry points used by chart and report code to fetch interpretation text.

    Usage::

        ctx = InterpretationContext()
        ctx.activate_style("modern")
        text = ctx.resolve_combo(1, 1, 1)   # Sun in Aries in the 1st house
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        base_path: Optional[str] = None,
        marker: Optional[ActiveMarker] = None,
    ):
        self.settings = settings or get_settings()
        self.styles = StyleRegistry(self.settings.max_styles)
        self.folders = FolderRegistry(
            base_path or resolve_base_path(self.settings),
            settings=self.settings,
            marker=marker,
        )

    @property
    def current_style(self) -> Optional[Style]:
        return self.styles.current

    # --- loading ---

    def load_style_file(self, path: str, make_current: bool = True) -> Style:
        """Load a single-file style and register it."""
        self.styles.check_capacity()
        style = load_style_file(path, combo_increment=self.settings.combo_increment)
        self.styles.register(style, source=path, make_current=make_current)
        return style

    def scan_folders(self) -> int:
        return self.folders.scan()

    def activate_style(self, name: str) -> Style:
        return self.folders.activate(name, self.styles)

    def use_default(self) -> None:
        """Deselect any custom style so callers fall back to built-in text."""
        self.styles.select(None)

    def ais_path(self, kind: str, obj: int) -> Optional[str]:
        return self.folders.ais_path(kind, obj)

    def load_ais_file(self, kind: str, obj: int) -> Optional[Style]:
        """Load one object's file from the active folder as a standalone style."""
        path = self.ais_path(kind, obj)
        if path is None:
            return None
        return self.load_style_file(path)

    # --- lookups ---

    def resolve_combo(self, obj: int, sign: int, house: int) -> Optional[str]:
        return resolver.lookup_combo(self.current_style, obj, sign, house)

    def resolve_aspect_combo(self, obj1: int, obj2: int, asp: int) -> Optional[str]:
        return resolver.lookup_aspect_combo(self.current_style, obj1, obj2, asp)

    def resolve_aspect(self, asp: int, orb: int = 0) -> Optional[str]:
        return resolver.lookup_aspect(self.current_style, asp, orb)

    # --- presentation ---

    def list_available_styles(self) -> list[Folder]:
        if not self.folders.scanned:
            self.folders.scan()
        return list(self.folders.folders)

    def format_style_listing(self) -> str:
        if not self.folders.scanned:
            self.folders.scan()
        return self.folders.format_listing()

    def close(self) -> None:
        self.styles.release_all()
