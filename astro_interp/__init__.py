"""Interpretation text styles for astrological charts.

Parses interpretation style files, discovers style folders and resolves
object/sign/house and aspect lookups through a specificity-ordered fallback.
"""
from astro_interp.context import InterpretationContext, StyleRegistry
from astro_interp.errors import (
    InterpretationError,
    MalformedKeyError,
    StyleFileNotFoundError,
    StyleLimitError,
    StyleNotFoundError,
)
from astro_interp.folders import Folder, FolderRegistry
from astro_interp.loader import load_style_file, merge_style_file
from astro_interp.store import ComboEntry, GrowableList, Style

__version__ = "0.3.0"

__all__ = [
    "ComboEntry",
    "Folder",
    "FolderRegistry",
    "GrowableList",
    "InterpretationContext",
    "InterpretationError",
    "MalformedKeyError",
    "Style",
    "StyleFileNotFoundError",
    "StyleLimitError",
    "StyleNotFoundError",
    "StyleRegistry",
    "load_style_file",
    "merge_style_file",
    "__version__",
]
