"""Discovery and activation of style folders.

An interpretations directory looks like::

    <base>/styles/<folder>/style.conf          folder metadata
    <base>/styles/<folder>/signs/<Object>.ais  per-object interpretation text
    <base>/styles/active -> <folder>           active marker (symlink), or
    <base>/styles/active.txt                   active marker (pointer file)
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from astro_interp.errors import StyleNotFoundError
from astro_interp.loader import merge_style_file
from astro_interp.lookup import (
    ACTIVE_LINK,
    ACTIVE_POINTER,
    AIS_SUFFIX,
    METADATA_KEYS,
    OBJECT_COUNT,
    SECTION_METADATA,
    SIGNS_DIRNAME,
    STYLE_CONF,
    STYLES_DIRNAME,
    is_valid_object,
    object_name,
)
from astro_interp.parser import iter_entries
from astro_interp.settings import Settings, get_settings, resolve_base_path
from astro_interp.store import Style

if TYPE_CHECKING:  # pragma: no cover
    from astro_interp.context import StyleRegistry

logger = logging.getLogger(__name__)


@dataclass
class Folder:
    """One discovered style package."""

    name: str
    path: str
    display_name: Optional[str] = None
    author: Optional[str] = None
    version: Optional[str] = None
    description: Optional[str] = None
    loaded: bool = False
    active: bool = False

    def matches(self, name: str) -> bool:
        wanted = name.lower()
        return self.name.lower() == wanted or (self.display_name or "").lower() == wanted


def load_folder_metadata(folder: Folder, path: str) -> bool:
    """Fill ``folder`` from the ``[metadata]`` section of a ``style.conf``."""
    try:
        fh = open(path, "r", encoding="utf-8", errors="replace")
    except OSError:
        logger.debug("Cannot read style metadata %s", path)
        return False

    with fh:
        for entry in iter_entries(fh, (SECTION_METADATA,)):
            field_name = entry.key.lower()
            if field_name == "name":
                folder.display_name = entry.value
            elif field_name in METADATA_KEYS:
                setattr(folder, field_name, entry.value)

    if folder.display_name is None:
        folder.display_name = folder.name
    return True


# -------------------------
# Active marker strategies
# -------------------------

class ActiveMarker:
    """Locates the name of the active folder inside a ``styles`` directory."""

    filename = ""

    def resolve(self, styles_path: str) -> Optional[str]:
        raise NotImplementedError


class SymlinkMarker(ActiveMarker):
    """``styles/active`` is a symbolic link to the active folder."""

    filename = ACTIVE_LINK

    def resolve(self, styles_path: str) -> Optional[str]:
        try:
            target = os.readlink(os.path.join(styles_path, self.filename))
        except (OSError, NotImplementedError):
            return None
        return os.path.basename(target.rstrip("/\\")) or None


class PointerFileMarker(ActiveMarker):
    """``styles/active.txt`` holds the active folder name on its first line."""

    filename = ACTIVE_POINTER

    def resolve(self, styles_path: str) -> Optional[str]:
        try:
            with open(os.path.join(styles_path, self.filename), "r", encoding="utf-8", errors="replace") as fh:
                line = fh.readline()
        except OSError:
            return None
        return line.strip() or None


def default_marker() -> ActiveMarker:
    """Pick the marker strategy the current platform can support."""
    if os.name == "nt" or not hasattr(os, "readlink"):
        return PointerFileMarker()
    return SymlinkMarker()


# -------------------------
# Registry
# -------------------------

class FolderRegistry:
    """Style folders found under ``<base_path>/styles`` and the active one."""

    def __init__(
        self,
        base_path: str,
        *,
        settings: Optional[Settings] = None,
        marker: Optional[ActiveMarker] = None,
    ):
        self.base_path = base_path
        self.settings = settings or get_settings()
        self.marker = marker or default_marker()
        self.folders: list[Folder] = []
        self.active_index: Optional[int] = None
        self.active_path: Optional[str] = None
        self.scanned = False

    @classmethod
    def initialize(cls, settings: Optional[Settings] = None, marker: Optional[ActiveMarker] = None) -> "FolderRegistry":
        """Resolve the per-user base directory and scan it."""
        settings = settings or get_settings()
        registry = cls(resolve_base_path(settings), settings=settings, marker=marker)
        registry.scan()
        return registry

    @property
    def styles_path(self) -> str:
        return os.path.join(self.base_path, STYLES_DIRNAME)

    @property
    def active_folder(self) -> Optional[Folder]:
        if self.active_index is None:
            return None
        return self.folders[self.active_index]

    def scan(self) -> int:
        """Rebuild the folder list; returns the number of folders found.

        A missing ``styles`` directory is not an error and yields zero.
        """
        self.folders = []
        self.active_index = None
        self.active_path = None
        self.scanned = True

        styles_path = self.styles_path
        try:
            entries = sorted(os.scandir(styles_path), key=lambda e: e.name)
        except OSError:
            logger.debug("No readable styles directory at %s", styles_path)
            return 0

        limit = self.settings.max_style_folders
        for entry in entries:
            if len(self.folders) >= limit:
                logger.warning("Style folder limit %d reached, ignoring the rest of %s", limit, styles_path)
                break
            if entry.name.startswith(".") or entry.is_symlink():
                continue
            conf_path = os.path.join(entry.path, STYLE_CONF)
            if not os.path.isfile(conf_path):
                continue
            folder = Folder(name=entry.name, path=entry.path)
            if load_folder_metadata(folder, conf_path):
                folder.loaded = True
                self.folders.append(folder)

        active_name = self.marker.resolve(styles_path)
        if active_name:
            index = self._index_by_dirname(active_name)
            if index is not None:
                self._set_active(index)
            else:
                logger.debug("Active marker points at unknown folder %r", active_name)

        logger.debug("Found %d style folder(s) in %s", len(self.folders), styles_path)
        return len(self.folders)

    def _index_by_dirname(self, name: str) -> Optional[int]:
        wanted = name.lower()
        for i, folder in enumerate(self.folders):
            if folder.name.lower() == wanted:
                return i
        return None

    def find(self, name: str) -> Optional[Folder]:
        """Find a folder by directory name or display name, ignoring case."""
        for folder in self.folders:
            if folder.matches(name):
                return folder
        return None

    def _set_active(self, index: int) -> None:
        for folder in self.folders:
            folder.active = False
        folder = self.folders[index]
        folder.active = True
        self.active_index = index
        self.active_path = folder.path

    def object_file(self, folder: Folder, obj: int, kind: str = SIGNS_DIRNAME) -> str:
        return os.path.join(folder.path, kind, object_name(obj) + AIS_SUFFIX)

    def ais_path(self, kind: str, obj: int) -> Optional[str]:
        """Path of an object's ``.ais`` file in the active folder, if any."""
        folder = self.active_folder
        if folder is None or not is_valid_object(obj):
            return None
        return self.object_file(folder, obj, kind)

    def build_style(self, folder: Folder) -> Style:
        """Merge every per-object file of ``folder`` into a new style."""
        settings = self.settings
        style = Style.allocate(
            folder.display_name or folder.name,
            combo_increment=settings.folder_combo_increment,
            combo_limit=settings.folder_combo_limit,
            aspect_combo_increment=settings.folder_aspect_combo_increment,
            aspect_combo_limit=settings.folder_aspect_combo_limit,
        )
        style.name = folder.display_name
        style.author = folder.author
        style.version = folder.version
        style.description = folder.description

        merged = 0
        for obj in range(OBJECT_COUNT):
            path = self.object_file(folder, obj)
            if os.path.isfile(path) and merge_style_file(style, path, named_keys=settings.folder_named_keys):
                merged += 1

        style.loaded = True
        logger.info("Activated style %r from %s (%d files, %d combos, %d aspect combos)",
                    style.display_name, folder.path, merged, len(style.combos), len(style.aspect_combos))
        return style

    def activate(self, name: str, styles: "StyleRegistry") -> Style:
        """Make the folder called ``name`` active and load it as the current style.

        Raises :class:`StyleNotFoundError` without touching any state when no
        folder matches.
        """
        if not self.scanned:
            self.scan()

        index = next((i for i, f in enumerate(self.folders) if f.matches(name)), None)
        if index is None:
            raise StyleNotFoundError(f"No interpretation style named '{name}' in {self.styles_path}")
        styles.check_capacity()

        self._set_active(index)
        style = self.build_style(self.folders[index])
        styles.register(style, source=self.folders[index].name)
        return style

    def format_listing(self) -> str:
        """Human-readable list of the available styles, active one starred."""
        lines = ["Available Interpretation Styles:"]
        if not self.folders:
            lines.append(f"  No style folders found in {self.styles_path}{os.sep}")
            return "\n".join(lines) + "\n"

        for folder in self.folders:
            line = (" * " if folder.active else "   ") + folder.name
            if folder.display_name and folder.display_name != folder.name:
                line += f" ({folder.display_name})"
            if folder.author or folder.version:
                credits = []
                if folder.author:
                    credits.append(folder.author)
                if folder.version:
                    credits.append(f"v{folder.version}")
                line += " - " + " ".join(credits)
            lines.append(line)
            if folder.description:
                lines.append(f"     {folder.description}")

        lines.append("")
        lines.append("Use --style <name> to select a style, or omit it for the default interpretations.")
        return "\n".join(lines) + "\n"
