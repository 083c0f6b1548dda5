"""Entry points used by the store, CLI and TUI.

``color_map`` runs normalize -> resolve -> build on a raw config.
``apply_edit`` turns one edit event into the next raw config and its map.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from accentcascade import mutations
from accentcascade.builder import build_chrome_css, build_theme_map
from accentcascade.colors import normalize_color
from accentcascade.model import normalize, write_back


@dataclass
class Edit:
    """One user edit.

    ``kind`` is one of ``EDIT_KINDS``; ``target`` names the section, group or
    theme key for scoped edits, ``value`` carries the color, flag or boost.
    """

    kind: str
    target: str = ""
    value: Any = None


@dataclass
class EditResult:
    raw: dict[str, Any]
    color_map: dict[str, str] = field(default_factory=dict)
    ok: bool = True


# Edits carrying a color; a malformed one is rejected rather than treated as a clear
COLOR_KINDS = frozenset({"applyBase", "applySection", "applyGroup", "applyOverride"})


def color_map(raw: object) -> dict[str, str]:
    """Flat ``{theme key: color}`` map for a raw config. Safe to call repeatedly."""
    return build_theme_map(normalize(raw))


def chrome_css(raw: object) -> str:
    return build_chrome_css(normalize(raw))


def _apply(raw: object, edit: Edit) -> tuple[dict[str, Any], bool]:
    kind = edit.kind
    if kind in COLOR_KINDS and normalize_color(edit.value) is None:
        return write_back(raw, normalize(raw)), False
    if kind == "applyBase":
        return mutations.set_base(raw, edit.value), True
    if kind == "clearBase":
        return mutations.set_base(raw, None), True
    if kind == "applySection":
        return mutations.set_section(raw, edit.target, edit.value), True
    if kind == "clearSection":
        return mutations.set_section(raw, edit.target, None), True
    if kind == "inheritSection":
        enabled = edit.value if isinstance(edit.value, bool) else True
        return mutations.set_section_inherit(raw, edit.target, enabled), True
    if kind == "applyGroup":
        return mutations.set_group(raw, edit.target, edit.value), True
    if kind == "clearGroup":
        return mutations.set_group(raw, edit.target, None), True
    if kind == "inheritGroup":
        enabled = edit.value if isinstance(edit.value, bool) else True
        return mutations.set_group_inherit(raw, edit.target, enabled), True
    if kind == "applyOverride":
        return mutations.set_override(raw, edit.target, edit.value), True
    if kind == "clearOverride":
        return mutations.set_override(raw, edit.target, None), True
    if kind == "setHighlightBoost":
        return mutations.set_highlight_boost(raw, edit.value), True
    if kind == "clearAll":
        return mutations.clear_all(raw), True
    if kind == "clearAllButBase":
        return mutations.clear_all_but_base(raw), True
    if kind == "swapBackup":
        return mutations.swap_backup(raw)
    if kind == "applyPreset":
        return mutations.apply_snapshot(raw, edit.value), True
    return write_back(raw, normalize(raw)), False


EDIT_KINDS: tuple[str, ...] = (
    "applyBase",
    "clearBase",
    "applySection",
    "clearSection",
    "inheritSection",
    "applyGroup",
    "clearGroup",
    "inheritGroup",
    "applyOverride",
    "clearOverride",
    "setHighlightBoost",
    "clearAll",
    "clearAllButBase",
    "swapBackup",
    "applyPreset",
)


def apply_edit(raw: object, edit: Edit) -> EditResult:
    """Apply an edit and return the new raw config with its color map.

    ``ok`` is False for an unknown edit kind, a color edit whose value is not a
    valid hex color, or a swap without a backup; the accent is unchanged in
    each case.
    """
    new_raw, ok = _apply(raw, edit)
    return EditResult(raw=new_raw, color_map=color_map(new_raw), ok=ok)
