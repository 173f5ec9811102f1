"""Shared test fixtures."""

from __future__ import annotations

import pytest

from gamerig.settings import Settings


@pytest.fixture(autouse=True)
def isolate_settings(tmp_path, monkeypatch):
    """Never read the real user's settings file."""
    monkeypatch.setattr(Settings, "_instance", Settings(path=tmp_path / "no_settings.json"))


@pytest.fixture
def use_settings(tmp_path, monkeypatch):
    """Install a settings file with the given content as the active settings."""

    def _install(data: dict) -> Settings:
        import json

        path = tmp_path / "settings.json"
        path.write_text(json.dumps(data))
        settings = Settings(path=path)
        monkeypatch.setattr(Settings, "_instance", settings)
        return settings

    return _install


@pytest.fixture
def fake_home(tmp_path, monkeypatch):
    """Point HOME and the XDG directories at an empty temp home."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CACHE_HOME", str(home / ".cache"))
    monkeypatch.setenv("XDG_DATA_HOME", str(home / ".local" / "share"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    return home
