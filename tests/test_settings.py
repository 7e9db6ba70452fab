import os

import pytest

from astro_interp.settings import Settings, get_settings, resolve_base_path

posix_only = pytest.mark.skipif(os.name == "nt", reason="HOME is not consulted on Windows")


@posix_only
def test_base_path_defaults_to_home(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert resolve_base_path(Settings()) == os.path.join(str(tmp_path), ".astrolog", "interpretations")


@posix_only
def test_base_path_falls_back_without_home(monkeypatch):
    monkeypatch.delenv("HOME", raising=False)
    assert resolve_base_path(Settings()) == os.path.join("/tmp", ".astrolog", "interpretations")


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("ASTRO_INTERP_BASE_PATH", str(tmp_path))
    monkeypatch.setenv("ASTRO_INTERP_FOLDER_COMBO_LIMIT", "10")
    monkeypatch.setenv("ASTRO_INTERP_FOLDER_NAMED_KEYS", "true")
    settings = get_settings()
    assert settings.base_path == str(tmp_path)
    assert settings.folder_combo_limit == 10
    assert settings.folder_named_keys is True
    assert resolve_base_path() == str(tmp_path)


def test_defaults():
    settings = Settings()
    assert settings.max_style_folders == 64
    assert settings.combo_increment == 64
    assert (settings.folder_combo_increment, settings.folder_combo_limit) == (500, 2000)
    assert (settings.folder_aspect_combo_increment, settings.folder_aspect_combo_limit) == (250, 1000)
    assert settings.folder_named_keys is False


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
