"""JSON-backed settings store."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from gamerig.utils import xdg_config_home

log = logging.getLogger(__name__)

_SETTINGS_DIR = "gamerig"
_SETTINGS_FILE = "settings.json"


class Settings:
    """Read-only settings backed by an optional JSON file.

    Uses dot-notation keys for nested access:
        settings.get("check.packages")  # reads data["check"]["packages"]

    A missing or unreadable file behaves like an empty one, so every
    lookup falls back to its default.
    """

    _instance: Settings | None = None

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or (xdg_config_home() / _SETTINGS_DIR / _SETTINGS_FILE)
        self._data: dict[str, Any] = {}
        self._load()

    @classmethod
    def instance(cls) -> Settings:
        """Return the singleton settings instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def get_list(self, key: str, default: tuple[str, ...]) -> tuple[str, ...]:
        """Get a list of strings, falling back to *default* on a bad value."""
        value = self.get(key)
        if value is None:
            return default
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            log.warning("Setting '%s' must be a list of strings, using defaults", key)
            return default
        return tuple(value)

    def get_str(self, key: str, default: str) -> str:
        """Get a non-empty string, falling back to *default* on a bad value."""
        value = self.get(key)
        if value is None:
            return default
        if not isinstance(value, str) or not value.strip():
            log.warning("Setting '%s' must be a non-empty string, using '%s'", key, default)
            return default
        return value.strip()

    def get_int(self, key: str, default: int) -> int:
        """Get a non-negative integer, falling back to *default* on a bad value."""
        value = self.get(key)
        if value is None:
            return default
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            log.warning("Setting '%s' must be a non-negative integer, using %d", key, default)
            return default
        return value

    def _load(self) -> None:
        """Load settings from disk, gracefully handling errors."""
        if not self._path.exists():
            return
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            log.warning("Could not load settings from %s: %s", self._path, e)
            return
        if not isinstance(data, dict):
            log.warning("Ignoring settings file %s: top level must be an object", self._path)
            return
        self._data = data
