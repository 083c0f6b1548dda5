"""Fixed accent sections, groups and the editor theme keys each group owns."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AccentSection:
    """A coarse grouping of UI regions."""

    id: str
    label: str


@dataclass(frozen=True)
class AccentGroup:
    """A UI region within one section, owning an ordered set of theme keys."""

    id: str
    label: str
    section: str
    keys: tuple[str, ...]


SECTIONS: tuple[AccentSection, ...] = (
    AccentSection("window", "Window"),
    AccentSection("highlights", "Highlights"),
    AccentSection("harbormaster", "Harbormaster UI"),
    AccentSection("other", "Other"),
)

GROUPS: tuple[AccentGroup, ...] = (
    AccentGroup(
        "titleBar",
        "Title bar",
        "window",
        (
            "titleBar.activeBackground",
            "titleBar.inactiveBackground",
            "titleBar.activeForeground",
            "titleBar.inactiveForeground",
            "titleBar.border",
        ),
    ),
    AccentGroup(
        "activityBar",
        "Activity bar",
        "window",
        (
            "activityBar.background",
            "activityBar.foreground",
            "activityBar.inactiveForeground",
            "activityBar.activeBorder",
        ),
    ),
    AccentGroup(
        "statusBar",
        "Status bar",
        "window",
        (
            "statusBar.background",
            "statusBar.foreground",
            "statusBar.border",
            "statusBar.debuggingBackground",
            "statusBar.debuggingForeground",
            "statusBarItem.hoverBackground",
        ),
    ),
    AccentGroup(
        "sidebar",
        "Side bar",
        "window",
        (
            "sideBar.border",
            "sideBarTitle.foreground",
            "sideBarSectionHeader.background",
            "sideBarSectionHeader.foreground",
        ),
    ),
    AccentGroup(
        "panel",
        "Panel",
        "window",
        (
            "panel.border",
            "panelTitle.activeBorder",
            "panelTitle.activeForeground",
        ),
    ),
    AccentGroup(
        "tabs",
        "Tabs",
        "highlights",
        (
            "tab.activeBorder",
            "tab.activeBorderTop",
            "tab.unfocusedActiveBorder",
            "tab.activeModifiedBorder",
        ),
    ),
    AccentGroup(
        "editor",
        "Editor",
        "highlights",
        (
            "editor.selectionBackground",
            "editor.selectionHighlightBackground",
            "editor.lineHighlightBackground",
            "editorCursor.foreground",
        ),
    ),
    AccentGroup(
        "lists",
        "Lists",
        "highlights",
        (
            "list.activeSelectionBackground",
            "list.activeSelectionForeground",
            "list.inactiveSelectionBackground",
            "list.hoverBackground",
            "list.focusOutline",
        ),
    ),
    AccentGroup(
        "notifications",
        "Notifications",
        "other",
        (
            "notificationCenterHeader.background",
            "notificationCenterHeader.foreground",
            "notificationsInfoIcon.foreground",
            "notificationLink.foreground",
        ),
    ),
    AccentGroup(
        "buttons",
        "Buttons",
        "other",
        (
            "button.background",
            "button.foreground",
            "button.hoverBackground",
        ),
    ),
    AccentGroup(
        "badges",
        "Badges",
        "other",
        (
            "badge.background",
            "badge.foreground",
            "activityBarBadge.background",
            "activityBarBadge.foreground",
        ),
    ),
    AccentGroup(
        "harbormaster",
        "Harbormaster panels",
        "harbormaster",
        (
            "harbormaster.panelBackground",
            "harbormaster.cardBackground",
            "harbormaster.border",
            "harbormaster.accent",
            "harbormaster.text",
            "harbormaster.buttonBackground",
            "harbormaster.buttonHover",
            "harbormaster.pillBackground",
        ),
    ),
)

# Resolved like any other group but rendered as panel CSS, not editor colors
CHROME_GROUP = "harbormaster"
HIGHLIGHTS_SECTION = "highlights"
BASE_SCOPE = "base"

SECTION_IDS: tuple[str, ...] = tuple(section.id for section in SECTIONS)
GROUP_IDS: tuple[str, ...] = tuple(group.id for group in GROUPS)
SCOPE_IDS: tuple[str, ...] = (BASE_SCOPE, *SECTION_IDS, *GROUP_IDS)

_SECTIONS_BY_ID = {section.id: section for section in SECTIONS}
_GROUPS_BY_ID = {group.id: group for group in GROUPS}
_GROUP_BY_KEY = {key: group.id for group in GROUPS for key in group.keys}

ALL_THEME_KEYS: frozenset[str] = frozenset(_GROUP_BY_KEY)
EDITOR_THEME_KEYS: frozenset[str] = frozenset(
    key for group in GROUPS if group.id != CHROME_GROUP for key in group.keys
)


def get_section(section_id: str) -> AccentSection | None:
    return _SECTIONS_BY_ID.get(section_id)


def get_group(group_id: str) -> AccentGroup | None:
    return _GROUPS_BY_ID.get(group_id)


def group_for_key(key: str) -> str | None:
    """Return the id of the group owning a theme key."""
    return _GROUP_BY_KEY.get(key)


def groups_in_section(section_id: str) -> list[AccentGroup]:
    return [group for group in GROUPS if group.section == section_id]


def theme_groups() -> list[AccentGroup]:
    """Groups whose keys land in the editor theme (everything but the chrome group)."""
    return [group for group in GROUPS if group.id != CHROME_GROUP]
