"""Transient "peek" colors layered over the last persisted theme map.

A preview never reads or writes the persisted configuration. It composes
against the state captured by the last ``refresh`` call, each preview
replaces the previous one, and a preview without a color restores the
persisted map exactly.
"""

from __future__ import annotations

from dataclasses import replace

from accentcascade.builder import build, build_theme_map
from accentcascade.colors import normalize_color
from accentcascade.model import CascadeConfig, normalize, normalize_highlight_boost
from accentcascade.regions import (
    CHROME_GROUP,
    GROUP_IDS,
    HIGHLIGHTS_SECTION,
    get_group,
    get_section,
    groups_in_section,
)
from accentcascade.resolver import resolve_group


class PreviewSession:
    """Holds the persisted theme map and the currently applied one."""

    def __init__(self, raw: object = None) -> None:
        self._config = CascadeConfig()
        self._persisted: dict[str, str] = {}
        self._applied: dict[str, str] = {}
        self._preview: CascadeConfig | None = None
        self.refresh(raw)

    @property
    def config(self) -> CascadeConfig:
        return self._config

    @property
    def shown(self) -> CascadeConfig:
        """The config behind the applied map: the previewed one, else the persisted one."""
        return self._preview if self._preview is not None else self._config

    @property
    def persisted(self) -> dict[str, str]:
        return dict(self._persisted)

    @property
    def applied(self) -> dict[str, str]:
        return dict(self._applied)

    @property
    def is_previewing(self) -> bool:
        return self._applied != self._persisted

    def refresh(self, raw: object) -> dict[str, str]:
        """Re-resolve from a persisted raw config and drop any preview."""
        self._config = normalize(raw)
        self._persisted = build_theme_map(self._config)
        self._applied = dict(self._persisted)
        self._preview = None
        return self.applied

    def cancel(self) -> dict[str, str]:
        self._applied = dict(self._persisted)
        self._preview = None
        return self.applied

    def _compose(self, group_ids: list[str], config: CascadeConfig) -> dict[str, str]:
        composed = dict(self._persisted)
        for group_id in group_ids:
            group = get_group(group_id)
            if group is None or group_id == CHROME_GROUP:
                continue
            for key in group.keys:
                composed.pop(key, None)
            composed.update(build(group_id, resolve_group(config, group_id), config.overrides))
        self._applied = composed
        self._preview = config
        return self.applied

    def preview_base(self, color: str | None) -> dict[str, str]:
        """Show ``color`` as the base on every group that inherits it."""
        value = normalize_color(color)
        if value is None:
            return self.cancel()
        config = replace(self._config.foreground(), base=value)
        return self._compose(list(GROUP_IDS), config)

    def preview_group(self, group_id: str, color: str | None) -> dict[str, str]:
        """Show ``color`` on one group; None (or an invalid color) restores the persisted map."""
        value = normalize_color(color)
        if value is None or get_group(group_id) is None:
            return self.cancel()
        config = self._config.foreground()
        config.groups[group_id] = value
        config.group_inherit.pop(group_id, None)
        return self._compose([group_id], config)

    def preview_section(self, section_id: str, color: str | None) -> dict[str, str]:
        """Show ``color`` on a section and every group inheriting from it."""
        value = normalize_color(color)
        if value is None or get_section(section_id) is None:
            return self.cancel()
        config = self._config.foreground()
        config.sections[section_id] = value
        config.section_inherit.pop(section_id, None)
        return self._compose([group.id for group in groups_in_section(section_id)], config)

    def preview_highlight_boost(self, value: float | None) -> dict[str, str]:
        boost = normalize_highlight_boost(value)
        if boost is None:
            return self.cancel()
        config = replace(self._config.foreground(), highlight_boost=boost)
        return self._compose([group.id for group in groups_in_section(HIGHLIGHTS_SECTION)], config)
