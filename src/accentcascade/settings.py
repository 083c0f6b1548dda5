"""Settings and file persistence for accentcascade.

Reads degrade to defaults on missing or corrupted files; nothing here raises
for bad JSON.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, TypedDict

from accentcascade.builder import merge_customizations
from accentcascade.logger import get_logger

CACHE_DIR = Path.home() / ".cache" / "accentcascade"
SETTINGS_PATH = CACHE_DIR / "settings.json"
PRESETS_PATH = CACHE_DIR / "presets.json"

DEFAULT_CONFIG_FILE = ".harbormaster/project.json"
DEFAULT_VSCODE_SETTINGS = ".vscode/settings.json"
DEFAULT_THEME = "harbor-dark"
DEFAULT_PRESET = "default"

COLOR_CUSTOMIZATIONS_KEY = "workbench.colorCustomizations"

AVAILABLE_THEMES = [
    "harbor-dark",
    "textual-dark",
    "textual-light",
    "nord",
    "gruvbox",
    "tokyo-night",
    "dracula",
    "monokai",
]


class SettingsDict(TypedDict):
    """Settings schema."""

    config_file: str
    vscode_settings: str
    theme: str


def default_settings() -> SettingsDict:
    return {
        "config_file": DEFAULT_CONFIG_FILE,
        "vscode_settings": DEFAULT_VSCODE_SETTINGS,
        "theme": DEFAULT_THEME,
    }


def _read_json(path: Path) -> Any:
    """Parsed JSON from ``path``, or None when missing or unreadable."""
    if not path.exists():
        return None
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
        get_logger().warning("Unreadable JSON file", path=str(path), error=str(e))
        return None


def _write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")


def load_settings() -> SettingsDict:
    """Load settings from the cache file. Returns defaults if missing or corrupted."""
    settings = default_settings()
    data = _read_json(SETTINGS_PATH)
    if not isinstance(data, dict):
        return settings
    for key in ("config_file", "vscode_settings"):
        value = data.get(key)
        if isinstance(value, str) and value.strip():
            settings[key] = value.strip()
    theme = data.get("theme")
    if theme in AVAILABLE_THEMES:
        settings["theme"] = theme
    return settings


def save_settings(settings: SettingsDict) -> None:
    _write_json(SETTINGS_PATH, dict(settings))


def load_project_config(path: Path) -> dict[str, Any]:
    """Raw project config object; empty when missing, corrupted or not an object."""
    data = _read_json(path)
    return data if isinstance(data, dict) else {}


def save_project_config(path: Path, raw: dict[str, Any]) -> None:
    _write_json(path, raw)
    get_logger().debug("Project config saved", path=str(path))


def load_presets() -> dict[str, dict[str, Any]]:
    data = _read_json(PRESETS_PATH)
    if not isinstance(data, dict):
        return {}
    return {name: preset for name, preset in data.items() if isinstance(preset, dict)}


def save_preset(name: str, preset: dict[str, Any]) -> None:
    presets = load_presets()
    presets[name] = preset
    _write_json(PRESETS_PATH, presets)


def get_preset(name: str) -> dict[str, Any] | None:
    return load_presets().get(name)


def write_color_customizations(path: Path, color_map: dict[str, str]) -> bool:
    """Apply a color map to an editor settings file.

    Keys owned by the accent engine that are absent from ``color_map`` are
    removed. Returns False, leaving the file alone, when it exists but cannot
    be parsed (for example JSON with comments).
    """
    if path.exists():
        data = _read_json(path)
        if not isinstance(data, dict):
            get_logger().error("Editor settings not updated", path=str(path))
            return False
    else:
        data = {}
    merged = merge_customizations(data.get(COLOR_CUSTOMIZATIONS_KEY), color_map)
    if merged:
        data[COLOR_CUSTOMIZATIONS_KEY] = merged
    else:
        data.pop(COLOR_CUSTOMIZATIONS_KEY, None)
    _write_json(path, data)
    get_logger().info("Editor colors applied", path=str(path), keys=len(color_map))
    return True
