"""Tests for transient preview colors."""

from __future__ import annotations

import copy

import pytest

from accentcascade.builder import build_theme_map
from accentcascade.colors import vivid_boost
from accentcascade.model import normalize
from accentcascade.preview import PreviewSession

RAW = {
    "window_accent": "#336699",
    "window_accent_groups": {"titleBar": "#445566"},
}


@pytest.fixture
def session() -> PreviewSession:
    return PreviewSession(copy.deepcopy(RAW))


class TestPreviewSession:
    """Tests for composing previews over the persisted map."""

    def test_starts_on_persisted_map(self, session: PreviewSession) -> None:
        assert session.persisted == build_theme_map(normalize(RAW))
        assert session.applied == session.persisted
        assert not session.is_previewing

    def test_group_preview(self, session: PreviewSession) -> None:
        applied = session.preview_group("buttons", "#aa0000")
        assert applied["button.background"] == "#AA0000"
        assert applied["badge.background"] == "#336699"
        assert session.is_previewing

    def test_cancel_restores_exactly(self, session: PreviewSession) -> None:
        session.preview_group("buttons", "#AA0000")
        assert session.preview_group("buttons", None) == session.persisted
        session.preview_section("window", "#AA0000")
        assert session.cancel() == session.persisted
        assert not session.is_previewing

    def test_invalid_color_cancels(self, session: PreviewSession) -> None:
        session.preview_group("buttons", "#AA0000")
        assert session.preview_group("buttons", "#12345G") == session.persisted

    def test_previews_replace_each_other(self, session: PreviewSession) -> None:
        session.preview_group("buttons", "#AA0000")
        applied = session.preview_group("badges", "#00AA00")
        assert applied["button.background"] == "#336699"
        assert applied["badge.background"] == "#00AA00"

    def test_section_preview_reaches_inheriting_groups(self, session: PreviewSession) -> None:
        applied = session.preview_section("window", "#AA0000")
        assert applied["statusBar.debuggingBackground"] == "#AA0000"
        assert applied["activityBar.background"] == "#AA0000"
        assert applied["titleBar.activeBackground"] == "#445566"
        assert applied["button.background"] == "#336699"

    def test_highlight_boost_preview(self, session: PreviewSession) -> None:
        applied = session.preview_highlight_boost(0.4)
        assert applied["tab.activeBorder"] == vivid_boost("#336699", 0.4)
        assert applied["titleBar.activeBackground"] == "#445566"

    def test_chrome_group_is_not_previewed(self, session: PreviewSession) -> None:
        assert session.preview_group("harbormaster", "#AA0000") == session.persisted

    def test_persisted_state_is_untouched(self) -> None:
        raw = copy.deepcopy(RAW)
        session = PreviewSession(raw)
        session.preview_group("titleBar", "#000000")
        session.preview_section("other", "#000000")
        assert raw == RAW
        assert session.config == normalize(RAW)

    def test_refresh_drops_preview(self, session: PreviewSession) -> None:
        session.preview_group("buttons", "#AA0000")
        applied = session.refresh({"window_accent": "#000000"})
        assert applied["button.background"] == "#000000"
        assert not session.is_previewing

    def test_base_preview(self, session: PreviewSession) -> None:
        applied = session.preview_base("#AA0000")
        assert applied["button.background"] == "#AA0000"
        assert applied["titleBar.activeBackground"] == "#445566"
        assert session.shown.base == "#AA0000"

    def test_shown_follows_preview(self, session: PreviewSession) -> None:
        assert session.shown == session.config
        session.preview_group("buttons", "#AA0000")
        assert session.shown.groups["buttons"] == "#AA0000"
        assert "buttons" not in session.config.groups
        session.cancel()
        assert session.shown == session.config
