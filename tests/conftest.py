"""Shared fixtures: clean settings and on-disk style trees."""
import os

import pytest

from astro_interp.settings import Settings, get_settings


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    """Keep ASTRO_INTERP_* variables from the developer's shell out of tests."""
    for name in list(os.environ):
        if name.upper().startswith("ASTRO_INTERP_"):
            monkeypatch.delenv(name)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def base_path(tmp_path):
    return tmp_path / "interpretations"


@pytest.fixture
def settings(base_path):
    return Settings(base_path=str(base_path))


@pytest.fixture
def make_style_folder(base_path):
    """Create ``<base>/styles/<name>`` with a style.conf and per-object files."""

    def _make(name, conf="[metadata]\n", files=None):
        folder = base_path / "styles" / name
        (folder / "signs").mkdir(parents=True, exist_ok=True)
        if conf is not None:
            (folder / "style.conf").write_text(conf, encoding="utf-8")
        for filename, text in (files or {}).items():
            (folder / "signs" / filename).write_text(text, encoding="utf-8")
        return folder

    return _make


@pytest.fixture
def write_file(tmp_path):
    def _write(name, text):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
