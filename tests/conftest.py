"""Shared fixtures: keep logs, settings and presets inside tmp_path."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from accentcascade import logger


@pytest.fixture(autouse=True)
def isolated_cache(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Redirect every cache path and reset the logger around each test."""
    cache_dir = tmp_path / "cache"
    monkeypatch.setattr("accentcascade.logger.LOG_DIR", cache_dir / "logs")
    monkeypatch.setattr("accentcascade.settings.CACHE_DIR", cache_dir)
    monkeypatch.setattr("accentcascade.settings.SETTINGS_PATH", cache_dir / "settings.json")
    monkeypatch.setattr("accentcascade.settings.PRESETS_PATH", cache_dir / "presets.json")
    logger.reset_logger()
    yield cache_dir
    logger.reset_logger()


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Location of a project config file (not created)."""
    return tmp_path / "workspace" / ".harbormaster" / "project.json"
