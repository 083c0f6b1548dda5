"""Tests for the accent cascade resolution."""

from __future__ import annotations

from accentcascade.colors import vivid_boost
from accentcascade.model import CascadeConfig
from accentcascade.regions import GROUP_IDS, groups_in_section
from accentcascade.resolver import resolve, resolve_group, resolve_section

BASE = "#336699"


class TestResolve:
    """Tests for base -> section -> group precedence."""

    def test_empty_config_resolves_nothing(self) -> None:
        resolved = resolve(CascadeConfig())
        assert set(resolved) == set(GROUP_IDS)
        assert all(color is None for color in resolved.values())

    def test_base_flows_to_every_group(self) -> None:
        resolved = resolve(CascadeConfig(base=BASE))
        for group in groups_in_section("window"):
            assert resolved[group.id] == BASE
        assert resolved["badges"] == BASE
        assert resolved["harbormaster"] == BASE

    def test_highlights_get_default_boost(self) -> None:
        resolved = resolve(CascadeConfig(base=BASE))
        boosted = vivid_boost(BASE, 0.15)
        assert boosted != BASE
        for group in groups_in_section("highlights"):
            assert resolved[group.id] == boosted

    def test_highlights_use_configured_boost(self) -> None:
        config = CascadeConfig(base=BASE, highlight_boost=0.3)
        assert resolve_group(config, "tabs") == vivid_boost(BASE, 0.3)

    def test_zero_boost_is_not_the_default(self) -> None:
        config = CascadeConfig(base=BASE, highlight_boost=0.0)
        assert resolve_group(config, "tabs") == vivid_boost(BASE, 0.0)

    def test_explicit_highlights_color_is_not_boosted(self) -> None:
        config = CascadeConfig(base=BASE, sections={"highlights": "#00AA00"})
        assert resolve_group(config, "editor") == "#00AA00"

    def test_section_color_beats_base(self) -> None:
        config = CascadeConfig(base=BASE, sections={"window": "#AA0000"})
        assert resolve_group(config, "titleBar") == "#AA0000"
        assert resolve_group(config, "buttons") == BASE

    def test_section_inherit_flag_ignores_stored_color(self) -> None:
        config = CascadeConfig(
            base=BASE,
            sections={"window": "#AA0000"},
            section_inherit={"window": True},
        )
        assert resolve_section(config, "window") == BASE
        assert resolve_group(config, "statusBar") == BASE

    def test_group_color_beats_section(self) -> None:
        config = CascadeConfig(
            base=BASE,
            sections={"window": "#AA0000"},
            groups={"titleBar": "#445566"},
        )
        assert resolve_group(config, "titleBar") == "#445566"
        assert resolve_group(config, "activityBar") == "#AA0000"

    def test_group_inherit_flag_ignores_stored_color(self) -> None:
        config = CascadeConfig(
            sections={"window": "#AA0000"},
            groups={"titleBar": "#445566"},
            group_inherit={"titleBar": True},
        )
        assert resolve_group(config, "titleBar") == "#AA0000"

    def test_group_color_without_base(self) -> None:
        resolved = resolve(CascadeConfig(groups={"buttons": "#123456"}))
        assert resolved["buttons"] == "#123456"
        assert resolved["badges"] is None

    def test_section_without_base_only_colors_its_groups(self) -> None:
        resolved = resolve(CascadeConfig(sections={"other": "#123456"}))
        assert resolved["notifications"] == "#123456"
        assert resolved["titleBar"] is None

    def test_unknown_group(self) -> None:
        assert resolve_group(CascadeConfig(base=BASE), "menuBar") is None

    def test_boost_only_reaches_highlights(self) -> None:
        strong = CascadeConfig(base="#202020", highlight_boost=0.3)
        weak = CascadeConfig(base="#202020", highlight_boost=0.1)
        assert resolve_group(strong, "titleBar") != resolve_group(strong, "tabs")
        for group in groups_in_section("window"):
            assert resolve_group(strong, group.id) == resolve_group(weak, group.id) == "#202020"
        assert resolve_group(strong, "editor") != resolve_group(weak, "editor")
