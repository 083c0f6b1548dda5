"""Expand resolved group colors into editor theme keys.

Each group has its own recipe: some keys take the raw color, others a contrast
foreground, an alpha variant or a darkened variant. Per-key overrides replace
whatever the recipe produced and are the only values emitted for a group with
no resolved color.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from accentcascade.colors import apply_alpha, contrast_foreground, darken
from accentcascade.model import CascadeConfig
from accentcascade.regions import CHROME_GROUP, EDITOR_THEME_KEYS, get_group, theme_groups
from accentcascade.resolver import resolve, resolve_group

Recipe = Callable[[str], dict[str, str]]


def _title_bar(color: str) -> dict[str, str]:
    foreground = contrast_foreground(color)
    return {
        "titleBar.activeBackground": color,
        "titleBar.inactiveBackground": apply_alpha(color, 0.6),
        "titleBar.activeForeground": foreground,
        "titleBar.inactiveForeground": apply_alpha(foreground, 0.7),
        "titleBar.border": darken(color, 0.8),
    }


def _activity_bar(color: str) -> dict[str, str]:
    foreground = contrast_foreground(color)
    return {
        "activityBar.background": color,
        "activityBar.foreground": foreground,
        "activityBar.inactiveForeground": apply_alpha(foreground, 0.6),
        "activityBar.activeBorder": foreground,
    }


def _status_bar(color: str) -> dict[str, str]:
    background = darken(color, 0.65)
    return {
        "statusBar.background": background,
        "statusBar.foreground": contrast_foreground(background),
        "statusBar.border": background,
        "statusBar.debuggingBackground": color,
        "statusBar.debuggingForeground": contrast_foreground(color),
        "statusBarItem.hoverBackground": apply_alpha(color, 0.85),
    }


def _sidebar(color: str) -> dict[str, str]:
    return {
        "sideBar.border": apply_alpha(color, 0.4),
        "sideBarTitle.foreground": color,
        "sideBarSectionHeader.background": apply_alpha(color, 0.2),
        "sideBarSectionHeader.foreground": color,
    }


def _panel(color: str) -> dict[str, str]:
    return {
        "panel.border": apply_alpha(color, 0.5),
        "panelTitle.activeBorder": color,
        "panelTitle.activeForeground": color,
    }


def _tabs(color: str) -> dict[str, str]:
    return {
        "tab.activeBorder": color,
        "tab.activeBorderTop": color,
        "tab.unfocusedActiveBorder": apply_alpha(color, 0.5),
        "tab.activeModifiedBorder": color,
    }


def _editor(color: str) -> dict[str, str]:
    return {
        "editor.selectionBackground": apply_alpha(color, 0.35),
        "editor.selectionHighlightBackground": apply_alpha(color, 0.2),
        "editor.lineHighlightBackground": apply_alpha(color, 0.08),
        "editorCursor.foreground": color,
    }


def _lists(color: str) -> dict[str, str]:
    return {
        "list.activeSelectionBackground": apply_alpha(color, 0.5),
        "list.activeSelectionForeground": contrast_foreground(color),
        "list.inactiveSelectionBackground": apply_alpha(color, 0.25),
        "list.hoverBackground": apply_alpha(color, 0.12),
        "list.focusOutline": color,
    }


def _notifications(color: str) -> dict[str, str]:
    return {
        "notificationCenterHeader.background": color,
        "notificationCenterHeader.foreground": contrast_foreground(color),
        "notificationsInfoIcon.foreground": color,
        "notificationLink.foreground": color,
    }


def _buttons(color: str) -> dict[str, str]:
    return {
        "button.background": color,
        "button.foreground": contrast_foreground(color),
        "button.hoverBackground": darken(color, 0.85),
    }


def _badges(color: str) -> dict[str, str]:
    foreground = contrast_foreground(color)
    return {
        "badge.background": color,
        "badge.foreground": foreground,
        "activityBarBadge.background": color,
        "activityBarBadge.foreground": foreground,
    }


def _harbormaster(color: str) -> dict[str, str]:
    return {
        "harbormaster.panelBackground": apply_alpha(color, 0.2),
        "harbormaster.cardBackground": apply_alpha(color, 0.12),
        "harbormaster.border": apply_alpha(color, 0.35),
        "harbormaster.accent": color,
        "harbormaster.text": contrast_foreground(color),
        "harbormaster.buttonBackground": apply_alpha(color, 0.25),
        "harbormaster.buttonHover": apply_alpha(color, 0.35),
        "harbormaster.pillBackground": apply_alpha(color, 0.25),
    }


RECIPES: dict[str, Recipe] = {
    "titleBar": _title_bar,
    "activityBar": _activity_bar,
    "statusBar": _status_bar,
    "sidebar": _sidebar,
    "panel": _panel,
    "tabs": _tabs,
    "editor": _editor,
    "lists": _lists,
    "notifications": _notifications,
    "buttons": _buttons,
    "badges": _badges,
    "harbormaster": _harbormaster,
}

# CSS custom properties set from each chrome key: webview aliases first, then the panel variable
CHROME_CSS_VARS: dict[str, tuple[str, ...]] = {
    "harbormaster.panelBackground": (
        "--vscode-sideBar-background",
        "--vscode-editor-background",
        "--hm-panel-bg",
    ),
    "harbormaster.cardBackground": (
        "--vscode-sideBarSectionHeader-background",
        "--vscode-editorWidget-background",
        "--hm-card-bg",
    ),
    "harbormaster.border": ("--vscode-input-border", "--hm-border"),
    "harbormaster.accent": (
        "--vscode-button-background",
        "--vscode-activityBarBadge-background",
        "--hm-accent",
    ),
    "harbormaster.text": (
        "--vscode-foreground",
        "--vscode-button-foreground",
        "--vscode-button-secondaryForeground",
        "--vscode-badge-foreground",
        "--hm-text",
    ),
    "harbormaster.buttonBackground": ("--vscode-button-secondaryBackground", "--hm-button-bg"),
    "harbormaster.buttonHover": ("--vscode-button-hoverBackground", "--hm-button-hover"),
    "harbormaster.pillBackground": ("--vscode-badge-background", "--hm-pill-bg"),
}


def build(group_id: str, color: str | None, overrides: Mapping[str, str]) -> dict[str, str]:
    """Theme values for one group, with per-key overrides applied last."""
    group = get_group(group_id)
    if group is None:
        return {}
    derived = RECIPES[group_id](color) if color else {}
    values: dict[str, str] = {}
    for key in group.keys:
        value = overrides.get(key) or derived.get(key)
        if value:
            values[key] = value
    return values


def build_theme_map(config: CascadeConfig) -> dict[str, str]:
    """Flat ``{theme key: color}`` map for every editor-facing group."""
    resolved = resolve(config)
    color_map: dict[str, str] = {}
    for group in theme_groups():
        color_map.update(build(group.id, resolved[group.id], config.overrides))
    return color_map


def build_chrome_values(config: CascadeConfig) -> dict[str, str]:
    return build(CHROME_GROUP, resolve_group(config, CHROME_GROUP), config.overrides)


def build_chrome_css(config: CascadeConfig) -> str:
    """``:root`` block of CSS properties for the extension's own panels.

    Each chrome key sets its ``--vscode-*`` aliases and its ``--hm-*`` variable.
    Empty when the chrome group has no color and no overrides, letting the
    stylesheet fallbacks apply.
    """
    values = build_chrome_values(config)
    if not values:
        return ""
    lines = [
        f"  {variable}: {value};"
        for key, value in values.items()
        for variable in CHROME_CSS_VARS[key]
    ]
    return ":root {\n" + "\n".join(lines) + "\n}\n"


def merge_customizations(previous: object, color_map: Mapping[str, str]) -> dict[str, Any]:
    """Replace every engine-owned key in an editor color customization map.

    Keys the engine owns but did not emit this time are removed; keys it does
    not own are left alone. Applying the same map twice is a no-op.
    """
    existing = previous if isinstance(previous, dict) else {}
    merged = {key: value for key, value in existing.items() if key not in EDITOR_THEME_KEYS}
    merged.update(color_map)
    return merged
