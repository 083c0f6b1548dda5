"""Resolve the effective accent color of every group.

Per group ``g`` in section ``s``:

1. the section inherits when its inherit flag is set or it has no color;
2. an inheriting section takes the base (vivid-boosted for ``highlights``),
   otherwise its own color;
3. the group inherits under the same rule and takes the section color,
   otherwise its own color;
4. the first defined of group, section and base wins.

Inheritance is ``flag OR absent``: a stored group color with its inherit flag
set is ignored until the flag is cleared.
"""

from __future__ import annotations

from accentcascade.colors import vivid_boost
from accentcascade.model import DEFAULT_HIGHLIGHT_BOOST, CascadeConfig
from accentcascade.regions import GROUPS, HIGHLIGHTS_SECTION, get_group


def boosted_base(config: CascadeConfig, section_id: str) -> str | None:
    """The base color as inherited into ``section_id``."""
    if config.base is None:
        return None
    if section_id != HIGHLIGHTS_SECTION:
        return config.base
    boost = config.highlight_boost
    if boost is None:
        boost = DEFAULT_HIGHLIGHT_BOOST
    return vivid_boost(config.base, boost)


def section_inherits(config: CascadeConfig, section_id: str) -> bool:
    return config.section_inherit.get(section_id) is True or section_id not in config.sections


def group_inherits(config: CascadeConfig, group_id: str) -> bool:
    return config.group_inherit.get(group_id) is True or group_id not in config.groups


def resolve_section(config: CascadeConfig, section_id: str) -> str | None:
    """Color a section hands down to its groups."""
    if section_inherits(config, section_id):
        return boosted_base(config, section_id)
    return config.sections[section_id]


def resolve_group(config: CascadeConfig, group_id: str) -> str | None:
    """Effective color for one group, or None when nothing in the chain is set."""
    group = get_group(group_id)
    if group is None:
        return None
    section_color = resolve_section(config, group.section)
    if group_inherits(config, group_id):
        group_color = section_color
    else:
        group_color = config.groups[group_id]
    return group_color or section_color or config.base


def resolve(config: CascadeConfig) -> dict[str, str | None]:
    """Effective color for every group, keyed by group id."""
    return {group.id: resolve_group(config, group.id) for group in GROUPS}
