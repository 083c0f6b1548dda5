"""CLI entry point using Typer."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from accentcascade import mutations
from accentcascade.builder import build_chrome_css, build_theme_map
from accentcascade.colors import normalize_color
from accentcascade.logger import get_logger
from accentcascade.model import DEFAULT_HIGHLIGHT_BOOST, normalize
from accentcascade.regions import ALL_THEME_KEYS, GROUP_IDS, GROUPS, SECTION_IDS, get_section
from accentcascade.resolver import group_inherits, resolve
from accentcascade.settings import (
    DEFAULT_PRESET,
    get_preset,
    load_presets,
    load_project_config,
    load_settings,
    save_preset,
    save_project_config,
    write_color_customizations,
)

INVALID_HEX_MESSAGE = "Invalid hex color. Use #RRGGBB or #RGB."

app = typer.Typer(
    name="accentcascade",
    help="Layered accent colors for editor themes",
    no_args_is_help=True,
)
preset_app = typer.Typer(help="Save and restore named accent presets")
app.add_typer(preset_app, name="preset")

console = Console()

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Project config file (default from settings)"),
]


def _config_path(config: Path | None) -> Path:
    return config if config is not None else Path(load_settings()["config_file"])


def _color_argument(value: str | None) -> str | None:
    """Validate a color argument; None means clear."""
    if value is None:
        return None
    normalized = normalize_color(value)
    if normalized is None:
        raise typer.BadParameter(INVALID_HEX_MESSAGE)
    return normalized


def _save(path: Path, raw: dict[str, Any], message: str) -> None:
    save_project_config(path, raw)
    get_logger().info(message, config=str(path))
    console.print(message)


def _swatch(color: str | None) -> Text:
    if color is None:
        return Text("(theme default)", style="dim")
    return Text(f" {color} ", style=f"on {color}")


@app.command()
def show(
    config: ConfigOption = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the flat theme map as JSON")] = False,
) -> None:
    """Show the effective color of every group."""
    cascade = normalize(load_project_config(_config_path(config)))
    color_map = build_theme_map(cascade)
    if as_json:
        console.print_json(json.dumps(color_map))
        return

    table = Table(title="Accent cascade")
    table.add_column("Group")
    table.add_column("Section")
    table.add_column("Effective")
    table.add_column("Source")
    resolved = resolve(cascade)
    for group in GROUPS:
        if not group_inherits(cascade, group.id):
            source = "group"
        elif resolved[group.id] is None:
            source = "-"
        else:
            source = "inherited"
        section = get_section(group.section)
        table.add_row(
            group.label,
            section.label if section else group.section,
            _swatch(resolved[group.id]),
            source,
        )
    console.print(table)
    boost = cascade.highlight_boost
    console.print(f"Base: {cascade.base or '(none)'}")
    console.print(f"Highlight boost: {DEFAULT_HIGHLIGHT_BOOST if boost is None else boost:.2f}")
    console.print(f"Overrides: {len(cascade.overrides)}  Theme keys: {len(color_map)}")
    if cascade.backup is not None:
        console.print("Backup available (use 'swap')")


@app.command()
def css(config: ConfigOption = None) -> None:
    """Print the panel CSS derived from the harbormaster group."""
    typer.echo(build_chrome_css(normalize(load_project_config(_config_path(config)))), nl=False)


@app.command()
def base(
    color: Annotated[str | None, typer.Argument(help="Hex color; omit to clear")] = None,
    config: ConfigOption = None,
) -> None:
    """Set or clear the base accent."""
    value = _color_argument(color)
    path = _config_path(config)
    raw = mutations.set_base(load_project_config(path), value)
    _save(path, raw, f"Base accent {'set to ' + value if value else 'cleared'}")


@app.command()
def section(
    section_id: Annotated[str, typer.Argument(help=f"One of: {', '.join(SECTION_IDS)}")],
    color: Annotated[str | None, typer.Argument(help="Hex color; omit to clear")] = None,
    config: ConfigOption = None,
) -> None:
    """Set a section color (turning forced inheritance off) or clear it."""
    if section_id not in SECTION_IDS:
        raise typer.BadParameter(f"Unknown section: {section_id}")
    value = _color_argument(color)
    path = _config_path(config)
    raw = mutations.set_section(load_project_config(path), section_id, value)
    if value:
        raw = mutations.set_section_inherit(raw, section_id, False)
    _save(path, raw, f"Section {section_id} {'set to ' + value if value else 'cleared'}")


@app.command()
def group(
    group_id: Annotated[str, typer.Argument(help=f"One of: {', '.join(GROUP_IDS)}")],
    color: Annotated[str | None, typer.Argument(help="Hex color; omit to clear")] = None,
    config: ConfigOption = None,
) -> None:
    """Set a group color (turning forced inheritance off) or clear it."""
    if group_id not in GROUP_IDS:
        raise typer.BadParameter(f"Unknown group: {group_id}")
    value = _color_argument(color)
    path = _config_path(config)
    raw = mutations.set_group(load_project_config(path), group_id, value)
    if value:
        raw = mutations.set_group_inherit(raw, group_id, False)
    _save(path, raw, f"Group {group_id} {'set to ' + value if value else 'cleared'}")


@app.command()
def override(
    key: Annotated[str, typer.Argument(help="Theme key, e.g. titleBar.activeBackground")],
    color: Annotated[str | None, typer.Argument(help="Hex color; omit to clear")] = None,
    config: ConfigOption = None,
) -> None:
    """Set or clear a per-key override."""
    if key not in ALL_THEME_KEYS:
        raise typer.BadParameter(f"Unknown theme key: {key}")
    value = _color_argument(color)
    path = _config_path(config)
    raw = mutations.set_override(load_project_config(path), key, value)
    _save(path, raw, f"Override {key} {'set to ' + value if value else 'cleared'}")


@app.command()
def inherit(
    scope: Annotated[str, typer.Argument(help="Section or group id")],
    enabled: Annotated[bool, typer.Option("--on/--off", help="Force inheritance on or off")] = True,
    config: ConfigOption = None,
) -> None:
    """Force a section or group to inherit from its parent."""
    path = _config_path(config)
    raw = load_project_config(path)
    if scope in SECTION_IDS:
        raw = mutations.set_section_inherit(raw, scope, enabled)
    elif scope in GROUP_IDS:
        raw = mutations.set_group_inherit(raw, scope, enabled)
    else:
        raise typer.BadParameter(f"Unknown section or group: {scope}")
    _save(path, raw, f"Inherit {'on' if enabled else 'off'} for {scope}")


@app.command()
def boost(
    value: Annotated[
        float | None,
        typer.Argument(help="Highlight boost between 0 and 0.4; omit to reset"),
    ] = None,
    config: ConfigOption = None,
) -> None:
    """Set the lightness/saturation lift for inherited highlight colors."""
    path = _config_path(config)
    raw = mutations.set_highlight_boost(load_project_config(path), value)
    stored = normalize(raw).highlight_boost
    label = f"{stored:.2f}" if stored is not None else f"default ({DEFAULT_HIGHLIGHT_BOOST:.2f})"
    _save(path, raw, f"Highlight boost {label}")


@app.command()
def clear(
    keep_base: Annotated[bool, typer.Option("--keep-base", help="Keep the base accent")] = False,
    config: ConfigOption = None,
) -> None:
    """Clear accent colors, saving the current state as backup."""
    path = _config_path(config)
    raw = load_project_config(path)
    if keep_base:
        _save(path, mutations.clear_all_but_base(raw), "Cleared all accent colors but base")
    else:
        _save(path, mutations.clear_all(raw), "Cleared all accent colors")


@app.command()
def swap(config: ConfigOption = None) -> None:
    """Swap the current accent state with the backup."""
    path = _config_path(config)
    raw, swapped = mutations.swap_backup(load_project_config(path))
    if not swapped:
        console.print("No color backup available yet.")
        raise typer.Exit(code=1)
    _save(path, raw, "Swapped with backup")


@app.command("apply")
def apply_colors(
    config: ConfigOption = None,
    settings_file: Annotated[
        Path | None,
        typer.Option("--settings", "-s", help="Editor settings.json (default from settings)"),
    ] = None,
) -> None:
    """Write the theme map into the editor's workbench.colorCustomizations."""
    target = settings_file if settings_file is not None else Path(load_settings()["vscode_settings"])
    color_map = build_theme_map(normalize(load_project_config(_config_path(config))))
    if not write_color_customizations(target, color_map):
        console.print(f"Could not parse {target}; leaving it unchanged.")
        raise typer.Exit(code=1)
    console.print(f"Applied {len(color_map)} colors to {target}")


@app.command()
def edit(
    config: ConfigOption = None,
    live: Annotated[
        bool, typer.Option("--live", help="Apply every change to the editor settings")
    ] = False,
    theme_background: Annotated[
        str | None,
        typer.Option("--theme-background", help="Theme background, used as the default base"),
    ] = None,
) -> None:
    """Open the interactive accent editor."""
    from accentcascade.app import run_app

    vscode_settings = Path(load_settings()["vscode_settings"]) if live else None
    run_app(_config_path(config), vscode_settings, theme_background)


@preset_app.command("save")
def preset_save(
    name: Annotated[str, typer.Argument(help="Preset name")] = DEFAULT_PRESET,
    config: ConfigOption = None,
) -> None:
    """Save the current accent state as a preset."""
    save_preset(name, mutations.snapshot(load_project_config(_config_path(config))))
    get_logger().info("Preset saved", preset=name)
    console.print(f"Saved preset {name}")


@preset_app.command("apply")
def preset_apply(
    name: Annotated[str, typer.Argument(help="Preset name")] = DEFAULT_PRESET,
    config: ConfigOption = None,
) -> None:
    """Replace the accent state with a preset (the current one becomes the backup)."""
    preset = get_preset(name)
    if preset is None:
        console.print(f"No preset named {name}.")
        raise typer.Exit(code=1)
    path = _config_path(config)
    _save(path, mutations.apply_snapshot(load_project_config(path), preset), f"Applied preset {name}")


@preset_app.command("list")
def preset_list() -> None:
    """List saved presets."""
    presets = load_presets()
    if not presets:
        console.print("No presets saved.")
        return
    for name, preset in sorted(presets.items()):
        console.print(name, _swatch(normalize(preset).base))


if __name__ == "__main__":
    app()
