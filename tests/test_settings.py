"""Tests for settings persistence and the rolling logger."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from accentcascade import logger, settings
from accentcascade.logger import CompactFormatter, LineCountHandler, get_logger, setup_logger


class TestSettings:
    """Tests for the settings file."""

    def test_defaults_when_missing(self) -> None:
        assert settings.load_settings() == settings.default_settings()

    def test_round_trip(self) -> None:
        custom: settings.SettingsDict = {
            "config_file": "other/project.json",
            "vscode_settings": "other/settings.json",
            "theme": "nord",
        }
        settings.save_settings(custom)
        assert settings.load_settings() == custom

    def test_corrupted_file_falls_back(self, isolated_cache: Path) -> None:
        settings.SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
        settings.SETTINGS_PATH.write_text("{not json", encoding="utf-8")
        assert settings.load_settings() == settings.default_settings()
        log_text = (isolated_cache / "logs" / "accentcascade.log").read_text(encoding="utf-8")
        assert "Unreadable JSON file" in log_text

    def test_unknown_theme_is_ignored(self) -> None:
        settings.SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
        settings.SETTINGS_PATH.write_text(json.dumps({"theme": "neon", "config_file": " "}))
        assert settings.load_settings() == settings.default_settings()


class TestProjectConfig:
    """Tests for project config and preset files."""

    def test_missing_config_is_empty(self, config_path: Path) -> None:
        assert settings.load_project_config(config_path) == {}

    def test_non_object_config_is_empty(self, config_path: Path) -> None:
        config_path.parent.mkdir(parents=True)
        config_path.write_text("[1, 2]")
        assert settings.load_project_config(config_path) == {}

    def test_save_creates_parents(self, config_path: Path) -> None:
        settings.save_project_config(config_path, {"window_accent": "#336699"})
        assert config_path.read_text(encoding="utf-8").endswith("}\n")
        assert settings.load_project_config(config_path) == {"window_accent": "#336699"}

    def test_presets(self) -> None:
        assert settings.get_preset("night") is None
        settings.save_preset("night", {"window_accent": "#000000"})
        settings.save_preset("day", {"window_accent": "#FFFFFF"})
        assert settings.get_preset("night") == {"window_accent": "#000000"}
        assert set(settings.load_presets()) == {"night", "day"}


class TestColorCustomizations:
    """Tests for writing the editor settings file."""

    def test_creates_file(self, tmp_path: Path) -> None:
        path = tmp_path / ".vscode" / "settings.json"
        assert settings.write_color_customizations(path, {"badge.background": "#336699"})
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data == {"workbench.colorCustomizations": {"badge.background": "#336699"}}

    def test_keeps_unrelated_settings(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.json"
        path.write_text(
            json.dumps(
                {
                    "editor.fontSize": 13,
                    "workbench.colorCustomizations": {
                        "editor.background": "#101010",
                        "titleBar.activeBackground": "#111111",
                    },
                }
            )
        )
        assert settings.write_color_customizations(path, {"badge.background": "#336699"})
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["editor.fontSize"] == 13
        assert data["workbench.colorCustomizations"] == {
            "editor.background": "#101010",
            "badge.background": "#336699",
        }

    def test_empty_map_removes_key(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"workbench.colorCustomizations": {"tab.activeBorder": "#111111"}}))
        assert settings.write_color_customizations(path, {})
        assert json.loads(path.read_text(encoding="utf-8")) == {}

    def test_unparseable_file_is_left_alone(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.json"
        original = '{\n  // comment\n  "editor.fontSize": 13\n}\n'
        path.write_text(original)
        assert not settings.write_color_customizations(path, {"badge.background": "#336699"})
        assert path.read_text() == original


class TestLogger:
    """Tests for the compact formatter and line-count rotation."""

    def _record(self, msg: str = "hello", level: int = logging.INFO) -> logging.LogRecord:
        return logging.LogRecord("accentcascade", level, __file__, 10, msg, None, None)

    def test_compact_format(self) -> None:
        record = self._record()
        record.preset = "night mode"
        record.keys = 12
        line = CompactFormatter().format(record)
        parts = line.split()
        assert parts[1] == "I"
        assert "hello" in line
        assert "preset='night mode'" in line
        assert "keys=12" in line

    def test_level_letters(self) -> None:
        line = CompactFormatter().format(self._record(level=logging.WARNING))
        assert line.split()[1] == "W"

    def test_rotation_and_archive(self, tmp_path: Path) -> None:
        log_dir = tmp_path / "logs"
        handler = LineCountHandler(log_dir, max_lines=2, backup_count=2)
        handler.setFormatter(CompactFormatter())
        try:
            for index in range(2):
                handler.emit(self._record(f"line {index}"))
            assert (log_dir / "accentcascade.1.log").exists()
            assert handler.line_count == 0

            for index in range(4):
                handler.emit(self._record(f"more {index}"))
            assert (log_dir / "accentcascade.1.log").exists()
            assert not (log_dir / "accentcascade.2.log").exists()
            assert len(list((log_dir / "archive").glob("*.zip"))) == 1
        finally:
            handler.close()

    def test_counts_existing_lines(self, tmp_path: Path) -> None:
        log_dir = tmp_path / "logs"
        log_dir.mkdir()
        (log_dir / "accentcascade.log").write_text("a\nb\nc\n")
        handler = LineCountHandler(log_dir, max_lines=10)
        try:
            assert handler.line_count == 3
        finally:
            handler.close()

    def test_singleton(self, isolated_cache: Path) -> None:
        first = setup_logger()
        assert get_logger() is first
        first.info("Started", config="project.json")
        assert "config=project.json" in (isolated_cache / "logs" / "accentcascade.log").read_text()
        logger.reset_logger()
        assert get_logger() is not first
