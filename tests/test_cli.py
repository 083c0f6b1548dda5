"""Tests for the Typer command line."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from accentcascade.cli import app
from accentcascade.settings import load_project_config

runner = CliRunner()


@pytest.fixture
def invoke(config_path: Path):
    """Run a command against the test project config."""

    def _invoke(*args: str):
        return runner.invoke(app, [*args, "--config", str(config_path)])

    return _invoke


class TestEditCommands:
    """Tests for commands that change the project config."""

    def test_base(self, invoke, config_path: Path) -> None:
        result = invoke("base", "#abc")
        assert result.exit_code == 0
        assert "Base accent set to #AABBCC" in result.output
        assert load_project_config(config_path)["window_accent"] == "#AABBCC"

    def test_base_clear(self, invoke, config_path: Path) -> None:
        invoke("base", "#336699")
        assert invoke("base").exit_code == 0
        assert "window_accent" not in load_project_config(config_path)

    def test_invalid_color(self, invoke, config_path: Path) -> None:
        result = invoke("base", "#12345G")
        assert result.exit_code != 0
        assert not config_path.exists()

    def test_section_and_group(self, invoke, config_path: Path) -> None:
        assert invoke("section", "window", "#AA0000").exit_code == 0
        assert invoke("group", "titleBar", "#445566").exit_code == 0
        raw = load_project_config(config_path)
        assert raw["window_accent_sections"] == {"window": "#AA0000"}
        assert raw["window_accent_groups"] == {"titleBar": "#445566"}

    def test_unknown_ids(self, invoke, config_path: Path) -> None:
        assert invoke("section", "menus", "#AA0000").exit_code != 0
        assert invoke("group", "menuBar", "#AA0000").exit_code != 0
        assert invoke("override", "editor.background", "#AA0000").exit_code != 0
        assert invoke("inherit", "menus").exit_code != 0
        assert not config_path.exists()

    def test_override(self, invoke, config_path: Path) -> None:
        assert invoke("override", "badge.background", "#FF00FF").exit_code == 0
        assert load_project_config(config_path)["window_accent_overrides"] == {
            "badge.background": "#FF00FF"
        }

    def test_inherit(self, invoke, config_path: Path) -> None:
        assert invoke("inherit", "titleBar", "--on").exit_code == 0
        assert invoke("inherit", "window").exit_code == 0
        raw = load_project_config(config_path)
        assert raw["window_accent_groups_inherit"] == {"titleBar": True}
        assert raw["window_accent_sections_inherit"] == {"window": True}
        assert invoke("inherit", "titleBar", "--off").exit_code == 0
        assert "window_accent_groups_inherit" not in load_project_config(config_path)

    def test_group_color_turns_inherit_off(self, invoke, config_path: Path) -> None:
        invoke("inherit", "titleBar", "--on")
        assert invoke("group", "titleBar", "#445566").exit_code == 0
        raw = load_project_config(config_path)
        assert "window_accent_groups_inherit" not in raw
        assert raw["window_accent_groups"] == {"titleBar": "#445566"}

    def test_boost_is_clamped(self, invoke, config_path: Path) -> None:
        result = invoke("boost", "0.9")
        assert result.exit_code == 0
        assert "0.40" in result.output
        assert load_project_config(config_path)["window_accent_highlight_boost"] == 0.4

    def test_clear_and_swap(self, invoke, config_path: Path) -> None:
        invoke("base", "#336699")
        before = load_project_config(config_path)
        assert invoke("clear").exit_code == 0
        assert "window_accent" not in load_project_config(config_path)
        assert invoke("swap").exit_code == 0
        assert load_project_config(config_path) == before

    def test_clear_keep_base(self, invoke, config_path: Path) -> None:
        invoke("base", "#336699")
        invoke("group", "tabs", "#445566")
        assert invoke("clear", "--keep-base").exit_code == 0
        raw = load_project_config(config_path)
        assert raw["window_accent"] == "#336699"
        assert "window_accent_groups" not in raw

    def test_swap_without_backup(self, invoke) -> None:
        result = invoke("swap")
        assert result.exit_code == 1
        assert "No color backup available yet." in result.output


class TestOutputCommands:
    """Tests for commands that print or export colors."""

    def test_show_json(self, invoke) -> None:
        invoke("base", "#336699")
        result = invoke("show", "--json")
        assert result.exit_code == 0
        assert json.loads(result.output)["titleBar.activeBackground"] == "#336699"

    def test_show_table(self, invoke) -> None:
        invoke("base", "#336699")
        result = invoke("show")
        assert result.exit_code == 0
        assert "Base: #336699" in result.output

    def test_css(self, invoke) -> None:
        assert invoke("css").output == ""
        invoke("base", "#336699")
        result = invoke("css")
        assert result.output.startswith(":root {\n")
        assert "--hm-border: #33669959;" in result.output

    def test_apply(self, invoke, tmp_path: Path) -> None:
        invoke("base", "#336699")
        target = tmp_path / "settings.json"
        result = invoke("apply", "--settings", str(target))
        assert result.exit_code == 0
        data = json.loads(target.read_text(encoding="utf-8"))
        assert data["workbench.colorCustomizations"]["titleBar.activeBackground"] == "#336699"

    def test_apply_unparseable(self, invoke, tmp_path: Path) -> None:
        target = tmp_path / "settings.json"
        target.write_text("{ // comment\n}")
        assert invoke("apply", "--settings", str(target)).exit_code == 1


class TestPresetCommands:
    """Tests for saving and applying presets."""

    def test_save_and_apply(self, invoke, config_path: Path) -> None:
        invoke("base", "#336699")
        assert invoke("preset", "save", "night").exit_code == 0
        invoke("base", "#FFFFFF")
        assert invoke("preset", "apply", "night").exit_code == 0
        raw = load_project_config(config_path)
        assert raw["window_accent"] == "#336699"
        assert raw["window_accent_backup"]["window_accent"] == "#FFFFFF"

    def test_apply_missing(self, invoke) -> None:
        result = invoke("preset", "apply", "nope")
        assert result.exit_code == 1
        assert "No preset named nope." in result.output

    def test_list(self, invoke) -> None:
        assert "No presets saved." in runner.invoke(app, ["preset", "list"]).output
        invoke("base", "#336699")
        invoke("preset", "save")
        assert "default" in runner.invoke(app, ["preset", "list"]).output
