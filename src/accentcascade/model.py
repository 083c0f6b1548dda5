"""Cascade configuration model and normalization of raw (parsed JSON) input.

Normalization is the only place that touches untyped data. It never raises:
anything that does not validate is dropped, so every map in a
``CascadeConfig`` holds only real values.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any

from accentcascade.colors import normalize_color
from accentcascade.history import MAX_HISTORY
from accentcascade.regions import ALL_THEME_KEYS, GROUP_IDS, SCOPE_IDS, SECTION_IDS

BASE_FIELD = "window_accent"
SECTIONS_FIELD = "window_accent_sections"
GROUPS_FIELD = "window_accent_groups"
SECTION_INHERIT_FIELD = "window_accent_sections_inherit"
GROUP_INHERIT_FIELD = "window_accent_groups_inherit"
OVERRIDES_FIELD = "window_accent_overrides"
HISTORY_FIELD = "window_accent_history"
HIGHLIGHT_BOOST_FIELD = "window_accent_highlight_boost"
BACKUP_FIELD = "window_accent_backup"

ACCENT_FIELDS: tuple[str, ...] = (
    BASE_FIELD,
    SECTIONS_FIELD,
    GROUPS_FIELD,
    SECTION_INHERIT_FIELD,
    GROUP_INHERIT_FIELD,
    OVERRIDES_FIELD,
    HISTORY_FIELD,
    HIGHLIGHT_BOOST_FIELD,
    BACKUP_FIELD,
)

MAX_HIGHLIGHT_BOOST = 0.4
DEFAULT_HIGHLIGHT_BOOST = 0.15


@dataclass
class CascadeConfig:
    """Normalized accent state.

    ``backup`` is a snapshot of every other field and never carries a backup
    of its own.
    """

    base: str | None = None
    sections: dict[str, str] = field(default_factory=dict)
    groups: dict[str, str] = field(default_factory=dict)
    section_inherit: dict[str, bool] = field(default_factory=dict)
    group_inherit: dict[str, bool] = field(default_factory=dict)
    overrides: dict[str, str] = field(default_factory=dict)
    history: dict[str, list[str]] = field(default_factory=dict)
    highlight_boost: float | None = None
    backup: CascadeConfig | None = None

    def foreground(self) -> CascadeConfig:
        """Copy of this config without its backup."""
        return replace(
            self,
            sections=dict(self.sections),
            groups=dict(self.groups),
            section_inherit=dict(self.section_inherit),
            group_inherit=dict(self.group_inherit),
            overrides=dict(self.overrides),
            history={scope: list(values) for scope, values in self.history.items()},
            backup=None,
        )

    def is_empty(self) -> bool:
        """True when no foreground field holds a value."""
        return (
            self.base is None
            and self.highlight_boost is None
            and not self.sections
            and not self.groups
            and not self.section_inherit
            and not self.group_inherit
            and not self.overrides
            and not self.history
        )


def _mapping(value: object) -> dict[Any, Any]:
    return value if isinstance(value, dict) else {}


def _normalize_colors(value: object, ids: tuple[str, ...]) -> dict[str, str]:
    raw = _mapping(value)
    result: dict[str, str] = {}
    for item_id in ids:
        color = normalize_color(raw.get(item_id))
        if color:
            result[item_id] = color
    return result


def normalize_sections(value: object) -> dict[str, str]:
    return _normalize_colors(value, SECTION_IDS)


def normalize_groups(value: object) -> dict[str, str]:
    return _normalize_colors(value, GROUP_IDS)


def normalize_inherit_map(value: object, ids: tuple[str, ...]) -> dict[str, bool]:
    """Keep strict ``True`` flags only; ``False`` and absence resolve the same."""
    raw = _mapping(value)
    return {item_id: True for item_id in ids if raw.get(item_id) is True}


def normalize_section_inherit(value: object) -> dict[str, bool]:
    return normalize_inherit_map(value, SECTION_IDS)


def normalize_group_inherit(value: object) -> dict[str, bool]:
    return normalize_inherit_map(value, GROUP_IDS)


def normalize_overrides(value: object) -> dict[str, str]:
    """Keep overrides for known theme keys with valid colors."""
    result: dict[str, str] = {}
    for key, raw_color in _mapping(value).items():
        if key not in ALL_THEME_KEYS:
            continue
        color = normalize_color(raw_color)
        if color:
            result[key] = color
    return result


def normalize_history(value: object) -> dict[str, list[str]]:
    raw = _mapping(value)
    result: dict[str, list[str]] = {}
    for scope in SCOPE_IDS:
        entries = raw.get(scope)
        if not isinstance(entries, list):
            continue
        colors: list[str] = []
        for entry in entries:
            color = normalize_color(entry)
            if color and color not in colors:
                colors.append(color)
            if len(colors) == MAX_HISTORY:
                break
        if colors:
            result[scope] = colors
    return result


def normalize_highlight_boost(value: object) -> float | None:
    """Clamp a finite number into [0, 0.4]; anything else is None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return max(0.0, min(MAX_HIGHLIGHT_BOOST, float(value)))


def _normalize_snapshot(raw: dict[Any, Any]) -> CascadeConfig:
    return CascadeConfig(
        base=normalize_color(raw.get(BASE_FIELD)),
        sections=normalize_sections(raw.get(SECTIONS_FIELD)),
        groups=normalize_groups(raw.get(GROUPS_FIELD)),
        section_inherit=normalize_section_inherit(raw.get(SECTION_INHERIT_FIELD)),
        group_inherit=normalize_group_inherit(raw.get(GROUP_INHERIT_FIELD)),
        overrides=normalize_overrides(raw.get(OVERRIDES_FIELD)),
        history=normalize_history(raw.get(HISTORY_FIELD)),
        highlight_boost=normalize_highlight_boost(raw.get(HIGHLIGHT_BOOST_FIELD)),
    )


def normalize(raw: object) -> CascadeConfig:
    """Build a ``CascadeConfig`` from an arbitrary parsed JSON value."""
    data = _mapping(raw)
    config = _normalize_snapshot(data)
    backup_raw = data.get(BACKUP_FIELD)
    if isinstance(backup_raw, dict):
        backup = _normalize_snapshot(backup_raw)
        if not backup.is_empty():
            config.backup = backup
    return config


def to_raw(config: CascadeConfig) -> dict[str, Any]:
    """Flatten a config for persistence, omitting empty collections and None."""
    raw: dict[str, Any] = {}
    if config.base:
        raw[BASE_FIELD] = config.base
    if config.sections:
        raw[SECTIONS_FIELD] = dict(config.sections)
    if config.groups:
        raw[GROUPS_FIELD] = dict(config.groups)
    if config.section_inherit:
        raw[SECTION_INHERIT_FIELD] = dict(config.section_inherit)
    if config.group_inherit:
        raw[GROUP_INHERIT_FIELD] = dict(config.group_inherit)
    if config.overrides:
        raw[OVERRIDES_FIELD] = dict(config.overrides)
    history = {scope: list(values) for scope, values in config.history.items() if values}
    if history:
        raw[HISTORY_FIELD] = history
    if config.highlight_boost is not None:
        raw[HIGHLIGHT_BOOST_FIELD] = config.highlight_boost
    if config.backup is not None and not config.backup.is_empty():
        raw[BACKUP_FIELD] = to_raw(config.backup.foreground())
    return raw


def write_back(raw: object, config: CascadeConfig) -> dict[str, Any]:
    """Replace the accent fields of ``raw`` with ``config``, keeping everything else."""
    result = {key: value for key, value in _mapping(raw).items() if key not in ACCENT_FIELDS}
    result.update(to_raw(config))
    return result
