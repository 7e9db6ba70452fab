"""Centralized, typed configuration for the interpretation core."""
from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

INTERPRETATIONS_SUBDIR = os.path.join(".astrolog", "interpretations")


class Settings(BaseSettings):
    """Strongly typed settings.

    Every field can be set through an ``ASTRO_INTERP_*`` environment variable
    or a ``.env`` file, e.g. ``ASTRO_INTERP_BASE_PATH=/srv/astrolog``.
    """

    model_config = SettingsConfigDict(
        env_prefix="ASTRO_INTERP_", env_file=".env", case_sensitive=False, extra="ignore"
    )

    base_path: Optional[str] = None
    max_style_folders: int = Field(default=64, ge=0)
    max_styles: int = Field(default=32, ge=1)

    combo_increment: int = Field(default=64, gt=0)
    folder_combo_increment: int = Field(default=500, gt=0)
    folder_combo_limit: int = Field(default=2000, ge=0)
    folder_aspect_combo_increment: int = Field(default=250, gt=0)
    folder_aspect_combo_limit: int = Field(default=1000, ge=0)

    # Per-object files in style folders only accept bare integer keys unless
    # this is switched on.
    folder_named_keys: bool = False


def home_directory() -> str:
    """Return the per-user home directory from the environment."""
    if os.name == "nt":
        return os.environ.get("USERPROFILE") or "C:\\"
    return os.environ.get("HOME") or "/tmp"


def resolve_base_path(settings: Optional[Settings] = None) -> str:
    """Return the interpretations directory holding the ``styles`` folder."""
    settings = settings or get_settings()
    if settings.base_path:
        return os.path.expanduser(settings.base_path)
    return os.path.join(home_directory(), INTERPRETATIONS_SUBDIR)


@lru_cache()
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance."""

    return Settings()
