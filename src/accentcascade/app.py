"""Textual TUI for editing the accent cascade of one project config."""

from __future__ import annotations

import atexit
import signal
import sys
from pathlib import Path
from typing import Any

import pyperclip
from rich.text import Text
from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header, Input, Label, ListItem, ListView, Static

from accentcascade import mutations
from accentcascade.colors import (
    contrast_foreground,
    default_base_color,
    invert_color,
    normalize_color,
)
from accentcascade.logger import AppLogger, get_logger
from accentcascade.model import DEFAULT_HIGHLIGHT_BOOST, CascadeConfig
from accentcascade.preview import PreviewSession
from accentcascade.regions import BASE_SCOPE, GROUPS, SECTIONS, get_group
from accentcascade.resolver import (
    group_inherits,
    resolve_group,
    resolve_section,
    section_inherits,
)
from accentcascade.settings import (
    load_project_config,
    load_settings,
    save_project_config,
    write_color_customizations,
)
from accentcascade.themes import ACCENT_THEME_NAME, CUSTOM_THEMES, build_accent_theme

BOOST_STEP = 0.05
INVALID_HEX_MESSAGE = "Invalid hex color. Use #RRGGBB or #RGB."


def swatch(color: str | None) -> Text:
    """A fixed-width color chip, or a dim placeholder when unset."""
    if color is None:
        return Text(" theme   ", style="dim")
    return Text(f" {color} ", style=f"{contrast_foreground(color)} on {color}")


class ScopeRow(ListItem):
    """One row per scope: the base accent, a section, or a group."""

    def __init__(self, kind: str, scope_id: str, label: str) -> None:
        super().__init__(classes="scope-row")
        self.kind = kind
        self.scope_id = scope_id
        self.caption = label
        self._line = Text(label)

    def compose(self) -> ComposeResult:
        yield Label(self._line, classes="scope-label")

    def effective(self, config: CascadeConfig) -> str | None:
        if self.kind == "base":
            return config.base
        if self.kind == "section":
            return resolve_section(config, self.scope_id)
        return resolve_group(config, self.scope_id)

    def inherits(self, config: CascadeConfig) -> bool:
        if self.kind == "section":
            return section_inherits(config, self.scope_id)
        if self.kind == "group":
            return group_inherits(config, self.scope_id)
        return False

    def render_row(self, config: CascadeConfig) -> None:
        indent = {"base": "", "section": "  ", "group": "    "}[self.kind]
        state = "inherit" if self.inherits(config) else ""
        if self.kind == "group":
            group = get_group(self.scope_id)
            if group and any(key in config.overrides for key in group.keys):
                state = (state + " +overrides").strip()
        history = " ".join(config.history.get(self.scope_id, []))
        line = Text.assemble(
            swatch(self.effective(config)),
            " ",
            (f"{indent}{self.caption}".ljust(28), "bold" if self.kind != "group" else ""),
            (state.ljust(20), "italic dim"),
            (history, "dim"),
        )
        self._line = line
        for label in self.query(".scope-label").results(Label):
            label.update(line)


class AccentEditorApp(App[None]):
    """Edit the base, section and group accents of a project config."""

    TITLE = "Accent Cascade"
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    #scope-list {
        height: 1fr;
        border: solid $primary;
    }

    #input-container {
        height: auto;
        padding: 1 2;
    }

    #color-input.invalid {
        border: tall $error;
    }

    #status-line {
        height: auto;
        padding: 0 2;
        background: $surface-darken-1;
        color: $text-muted;
    }

    .scope-row {
        padding: 0 1;
    }
    """

    BINDINGS = [  # noqa: RUF012
        Binding("q", "quit", "Quit", show=False),
        Binding("escape", "cancel_preview", "Cancel preview", priority=True),
        Binding("x", "clear_scope", "Clear"),
        Binding("i", "toggle_inherit", "Inherit"),
        Binding("c", "clear_all", "Clear all"),
        Binding("b", "clear_all_but_base", "Clear but base"),
        Binding("s", "swap_backup", "Swap backup"),
        Binding("plus", "boost(1)", "Boost +", show=False),
        Binding("minus", "boost(-1)", "Boost -", show=False),
        Binding("y", "copy_color", "Copy"),
        Binding("ctrl+y", "copy_color", "Copy", priority=True, show=False),
    ]

    def __init__(
        self,
        config_path: Path,
        vscode_settings: Path | None = None,
        theme_background: str | None = None,
    ) -> None:
        super().__init__()
        self.config_path = config_path
        self.vscode_settings = vscode_settings
        self.default_base = default_base_color(theme_background)
        self.raw: dict[str, Any] = {}
        self.session = PreviewSession()
        self._app_logger: AppLogger | None = None

        for custom_theme in CUSTOM_THEMES:
            self.register_theme(custom_theme)
        self._fallback_theme = load_settings()["theme"]
        self.theme = self._fallback_theme

    @property
    def config(self) -> CascadeConfig:
        return self.session.config

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        rows = [ScopeRow("base", BASE_SCOPE, "Base accent")]
        for section in SECTIONS:
            rows.append(ScopeRow("section", section.id, section.label))
            rows.extend(
                ScopeRow("group", group.id, group.label)
                for group in GROUPS
                if group.section == section.id
            )
        yield ListView(*rows, id="scope-list")
        with Vertical(id="input-container"):
            yield Input(placeholder=f"#RRGGBB (theme default {self.default_base})", id="color-input")
        yield Static("", id="status-line")
        yield Footer()

    def on_mount(self) -> None:
        self._app_logger = get_logger()
        self._app_logger.info("Accent editor started", config=str(self.config_path))
        self._reload(load_project_config(self.config_path))

    # State

    def _reload(self, raw: dict[str, Any]) -> None:
        self.raw = raw
        self.session.refresh(raw)
        for row in self.query(ScopeRow):
            row.render_row(self.config)
        self._apply_theme()
        self._update_status()

    def _commit(self, raw: dict[str, Any], message: str | None = None) -> None:
        save_project_config(self.config_path, raw)
        self._reload(raw)
        if self.vscode_settings is not None:
            write_color_customizations(self.vscode_settings, self.session.persisted)
        if message:
            self.notify(message, timeout=2)

    def _show_preview(self, was_previewing: bool) -> None:
        """Redraw rows from the previewed config and mirror the applied map to the editor."""
        for row in self.query(ScopeRow):
            row.render_row(self.session.shown)
        if self.vscode_settings is not None and (was_previewing or self.session.is_previewing):
            write_color_customizations(self.vscode_settings, self.session.applied)
        self._update_status()

    def _apply_theme(self) -> None:
        theme = build_accent_theme(self.config)
        if theme is None:
            self.theme = self._fallback_theme
            return
        self.register_theme(theme)
        if self.theme == ACCENT_THEME_NAME:
            self.refresh_css()
        else:
            self.theme = ACCENT_THEME_NAME

    def _update_status(self, extra: str = "") -> None:
        boost = self.config.highlight_boost
        boost_label = f"{round((DEFAULT_HIGHLIGHT_BOOST if boost is None else boost) * 100)}%"
        backup = "backup ready" if self.config.backup is not None else "no backup"
        parts = [f"Highlight boost {boost_label}", backup, f"{len(self.session.persisted)} keys"]
        if self.session.is_previewing:
            parts.append("previewing")
        if extra:
            parts.append(extra)
        self.query_one("#status-line", Static).update(" | ".join(parts))

    def _selected(self) -> ScopeRow | None:
        child = self.query_one("#scope-list", ListView).highlighted_child
        return child if isinstance(child, ScopeRow) else None

    def _set_invalid(self, invalid: bool) -> None:
        color_input = self.query_one("#color-input", Input)
        if invalid:
            color_input.add_class("invalid")
            color_input.styles.background = invert_color(self.default_base)
            color_input.styles.color = self.default_base
        else:
            color_input.remove_class("invalid")
            color_input.styles.clear_rule("background")
            color_input.styles.clear_rule("color")

    # Input handling

    @on(Input.Changed, "#color-input")
    def on_color_changed(self, event: Input.Changed) -> None:
        """Preview a valid color on the selected row; flag malformed hex."""
        trimmed = event.value.strip()
        value = normalize_color(trimmed)
        self._set_invalid(len(trimmed) in (6, 7) and value is None)
        row = self._selected()
        was_previewing = self.session.is_previewing
        if value is None or row is None:
            self.session.cancel()
        elif row.kind == "base":
            self.session.preview_base(value)
        elif row.kind == "section":
            self.session.preview_section(row.scope_id, value)
        else:
            self.session.preview_group(row.scope_id, value)
        self._show_preview(was_previewing)

    @on(Input.Submitted, "#color-input")
    def on_color_submitted(self, event: Input.Submitted) -> None:
        row = self._selected()
        value = normalize_color(event.value)
        if row is None:
            return
        if value is None:
            self._set_invalid(True)
            self._update_status(INVALID_HEX_MESSAGE)
            if self._app_logger:
                self._app_logger.warning("Invalid accent input", scope=row.scope_id, value=event.value)
            return
        if row.kind == "base":
            raw = mutations.set_base(self.raw, value)
        elif row.kind == "section":
            raw = mutations.set_section(self.raw, row.scope_id, value)
            raw = mutations.set_section_inherit(raw, row.scope_id, False)
        else:
            raw = mutations.set_group(self.raw, row.scope_id, value)
            raw = mutations.set_group_inherit(raw, row.scope_id, False)
        event.input.value = ""
        self._set_invalid(False)
        self._commit(raw, f"{row.caption} set to {value}")

    @on(ListView.Highlighted, "#scope-list")
    def on_row_highlighted(self, event: ListView.Highlighted) -> None:
        was_previewing = self.session.is_previewing
        self.session.cancel()
        color_input = self.query_one("#color-input", Input)
        if color_input.value:
            color_input.value = ""
        self._show_preview(was_previewing)

    # Actions

    def action_cancel_preview(self) -> None:
        was_previewing = self.session.is_previewing
        self.session.cancel()
        self.query_one("#color-input", Input).value = ""
        self._show_preview(was_previewing)

    def action_clear_scope(self) -> None:
        row = self._selected()
        if row is None:
            return
        if row.kind == "base":
            raw = mutations.set_base(self.raw, None)
        elif row.kind == "section":
            raw = mutations.set_section(self.raw, row.scope_id, None)
        else:
            raw = mutations.set_group(self.raw, row.scope_id, None)
        self._commit(raw, f"{row.caption} cleared")

    def action_toggle_inherit(self) -> None:
        row = self._selected()
        if row is None or row.kind == "base":
            return
        enabled = row.scope_id not in (
            self.config.section_inherit if row.kind == "section" else self.config.group_inherit
        )
        if row.kind == "section":
            raw = mutations.set_section_inherit(self.raw, row.scope_id, enabled)
        else:
            raw = mutations.set_group_inherit(self.raw, row.scope_id, enabled)
        self._commit(raw, f"{row.caption}: inherit {'on' if enabled else 'off'}")

    def action_clear_all(self) -> None:
        self._commit(mutations.clear_all(self.raw), "Cleared all accent colors")

    def action_clear_all_but_base(self) -> None:
        self._commit(mutations.clear_all_but_base(self.raw), "Cleared all but base")

    def action_swap_backup(self) -> None:
        raw, swapped = mutations.swap_backup(self.raw)
        if not swapped:
            self.notify("No color backup available yet.", timeout=2)
            return
        self._commit(raw, "Swapped with backup")

    def action_boost(self, direction: int) -> None:
        current = self.config.highlight_boost
        if current is None:
            current = DEFAULT_HIGHLIGHT_BOOST
        value = round(current + direction * BOOST_STEP, 2)
        self._commit(mutations.set_highlight_boost(self.raw, value))

    @work(thread=True)
    def action_copy_color(self) -> None:
        """Copy the selected row's effective color to the clipboard."""
        row = self._selected()
        if row is None:
            return
        color = row.effective(self.config)
        if color is None:
            self.notify("Nothing to copy: no color set", timeout=2)
            return
        try:
            pyperclip.copy(color)
            self.notify(f"Copied {color}", timeout=1)
        except pyperclip.PyperclipException:
            self.notify(f"Clipboard unavailable - copy manually: {color}", timeout=3)


def reset_terminal() -> None:
    """Reset terminal to sane state after TUI exits."""
    reset_sequences = [
        "\x1b[?1049l",  # Exit alternate screen buffer
        "\x1b[?1000l",  # Disable mouse tracking
        "\x1b[?1003l",  # Disable all mouse tracking
        "\x1b[?1006l",  # Disable SGR mouse mode
        "\x1b[?25h",    # Show cursor
        "\x1b[0m",      # Reset all attributes
    ]
    sys.stdout.write("".join(reset_sequences))
    sys.stdout.flush()


def run_app(
    config_path: Path,
    vscode_settings: Path | None = None,
    theme_background: str | None = None,
) -> None:
    """Run the accent editor."""
    atexit.register(reset_terminal)

    def signal_handler(signum: int, frame: object) -> None:
        reset_terminal()
        sys.exit(128 + signum)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        AccentEditorApp(config_path, vscode_settings, theme_background).run()
    finally:
        reset_terminal()
