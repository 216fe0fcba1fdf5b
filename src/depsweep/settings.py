"""JSON-backed settings with built-in defaults."""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any

from depsweep.core.scanner import DEFAULT_TARGET_NAME
from depsweep.utils import SIZE_METHODS, xdg_config_home

log = logging.getLogger(__name__)

_SETTINGS_DIR = "depsweep"
_SETTINGS_FILE = "settings.json"

DEFAULTS: dict[str, Any] = {
    "scan": {
        "target_name": DEFAULT_TARGET_NAME,
        "size_method": "du",
    },
}


class Settings:
    """Settings read from ``$XDG_CONFIG_HOME/depsweep/settings.json``.

    Uses dot-notation keys for nested access; keys missing from the file
    fall back to :data:`DEFAULTS`:
        settings.get("scan.target_name")  # "node_modules" unless overridden
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or (xdg_config_home() / _SETTINGS_DIR / _SETTINGS_FILE)
        self._data: dict[str, Any] = {}
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def target_name(self) -> str:
        value = self.get("scan.target_name")
        if not isinstance(value, str) or not value or "/" in value:
            log.warning("Ignoring invalid scan.target_name %r in %s", value, self._path)
            return DEFAULT_TARGET_NAME
        return value

    @property
    def size_method(self) -> str:
        value = self.get("scan.size_method")
        if value not in SIZE_METHODS:
            log.warning("Ignoring unknown scan.size_method %r in %s", value, self._path)
            return DEFAULTS["scan"]["size_method"]
        return value

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key, falling back to the built-in default."""
        found, value = _lookup(self._data, key)
        if found:
            return value
        found, value = _lookup(DEFAULTS, key)
        return copy.deepcopy(value) if found else default

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
            log.warning("Settings file %s does not hold a JSON object, using defaults", self._path)
            return
        self._data = data


def _lookup(data: dict[str, Any], key: str) -> tuple[bool, Any]:
    node: Any = data
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return False, None
        node = node[part]
    return True, node
