"""User-facing edits as transforms of the raw configuration object.

Every function takes the previous raw object and returns a new one; the input
is never modified and fields unrelated to the accent are carried over as-is.
Unknown section ids, group ids or theme keys leave the accent untouched.
"""

from __future__ import annotations

from typing import Any

from accentcascade.colors import normalize_color
from accentcascade.history import record
from accentcascade.model import (
    CascadeConfig,
    normalize,
    normalize_highlight_boost,
    to_raw,
    write_back,
)
from accentcascade.regions import ALL_THEME_KEYS, BASE_SCOPE, GROUP_IDS, SECTION_IDS


def set_base(raw: object, color: str | None) -> dict[str, Any]:
    """Set or clear (None) the base accent."""
    config = normalize(raw)
    value = normalize_color(color)
    config.base = value
    config.history = record(config.history, BASE_SCOPE, value)
    return write_back(raw, config)


def set_section(raw: object, section_id: str, color: str | None) -> dict[str, Any]:
    """Set a section color, or clear it along with its inherit flag.

    Applying a color leaves the inherit flag alone; a forced-inherit section
    keeps using its parent color until the flag is turned off.
    """
    config = normalize(raw)
    if section_id not in SECTION_IDS:
        return write_back(raw, config)
    value = normalize_color(color)
    if value is None:
        config.sections.pop(section_id, None)
        config.section_inherit.pop(section_id, None)
    else:
        config.sections[section_id] = value
        config.history = record(config.history, section_id, value)
    return write_back(raw, config)


def set_group(raw: object, group_id: str, color: str | None) -> dict[str, Any]:
    """Set a group color, or clear it along with its inherit flag."""
    config = normalize(raw)
    if group_id not in GROUP_IDS:
        return write_back(raw, config)
    value = normalize_color(color)
    if value is None:
        config.groups.pop(group_id, None)
        config.group_inherit.pop(group_id, None)
    else:
        config.groups[group_id] = value
        config.history = record(config.history, group_id, value)
    return write_back(raw, config)


def set_override(raw: object, key: str, color: str | None) -> dict[str, Any]:
    config = normalize(raw)
    if key not in ALL_THEME_KEYS:
        return write_back(raw, config)
    value = normalize_color(color)
    if value is None:
        config.overrides.pop(key, None)
    else:
        config.overrides[key] = value
    return write_back(raw, config)


def _set_flag(flags: dict[str, bool], item_id: str, enabled: bool) -> None:
    if enabled:
        flags[item_id] = True
    else:
        flags.pop(item_id, None)


def set_section_inherit(raw: object, section_id: str, enabled: bool) -> dict[str, Any]:
    """Force a section to inherit (or stop forcing it); its color is kept."""
    config = normalize(raw)
    if section_id in SECTION_IDS:
        _set_flag(config.section_inherit, section_id, enabled)
    return write_back(raw, config)


def set_group_inherit(raw: object, group_id: str, enabled: bool) -> dict[str, Any]:
    config = normalize(raw)
    if group_id in GROUP_IDS:
        _set_flag(config.group_inherit, group_id, enabled)
    return write_back(raw, config)


def set_highlight_boost(raw: object, value: float | None) -> dict[str, Any]:
    """Set the highlight boost (clamped to [0, 0.4]); None restores the default."""
    config = normalize(raw)
    config.highlight_boost = normalize_highlight_boost(value)
    return write_back(raw, config)


def _cleared(config: CascadeConfig, keep_base: bool) -> CascadeConfig:
    cleared = CascadeConfig(
        base=config.base if keep_base else None,
        highlight_boost=config.highlight_boost,
    )
    snapshot = config.foreground()
    cleared.backup = snapshot if not snapshot.is_empty() else config.backup
    return cleared


def clear_all(raw: object) -> dict[str, Any]:
    """Drop every color, flag, override and history entry, backing them up first.

    The highlight boost is a preference and survives the clear.
    """
    return write_back(raw, _cleared(normalize(raw), keep_base=False))


def clear_all_but_base(raw: object) -> dict[str, Any]:
    return write_back(raw, _cleared(normalize(raw), keep_base=True))


def swap_backup(raw: object) -> tuple[dict[str, Any], bool]:
    """Exchange the foreground state with the backup.

    Returns the new raw object and whether a backup existed; without one the
    accent is left unchanged.
    """
    config = normalize(raw)
    if config.backup is None:
        return write_back(raw, config), False
    swapped = config.backup.foreground()
    swapped.backup = config.foreground()
    return write_back(raw, swapped), True


def snapshot(raw: object) -> dict[str, Any]:
    """The foreground accent fields of ``raw``, suitable for storing as a preset."""
    return to_raw(normalize(raw).foreground())


def apply_snapshot(raw: object, preset: object) -> dict[str, Any]:
    """Replace the foreground with ``preset``, keeping the old one as backup."""
    config = normalize(raw)
    incoming = normalize(preset).foreground()
    current = config.foreground()
    incoming.backup = current if not current.is_empty() else config.backup
    return write_back(raw, incoming)
