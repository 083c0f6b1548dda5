"""Textual themes for the accent editor.

Harbor Dark
===========
The editor's own chrome follows the ``harbormaster`` accent group, the same
color the extension panels get through their ``--hm-*`` CSS properties.
When that group resolves to nothing the static Harbor Dark theme is used.

Layer hierarchy (darkest to lightest):
1. background (#121212) - app background
2. surface (#181818) - list rows, inputs; the fallback base accent
3. panel (#242424) - footer, modal dialogs
"""

from __future__ import annotations

from textual.theme import Theme

from accentcascade.colors import FALLBACK_BASE, contrast_foreground, darken, vivid_boost
from accentcascade.model import CascadeConfig
from accentcascade.regions import CHROME_GROUP
from accentcascade.resolver import resolve_group

HARBOR_DARK_THEME = Theme(
    name="harbor-dark",
    background="#121212",
    surface=FALLBACK_BASE,
    panel="#242424",
    foreground="#E6E6E6",
    # Steel blue, the extension's default accent swatch
    primary="#3C7FBF",
    secondary="#8C8C8C",
    accent="#5FA0DA",
    success="#5EB85E",
    warning="#E6A832",
    error="#D94A3D",
    dark=True,
    variables={
        "block-cursor-foreground": "#121212",
        "block-cursor-background": "#3C7FBF",
        "input-selection-background": "#3C7FBF 30%",
        "footer-key-foreground": "#5FA0DA",
        "border": "#404040",
        "border-blurred": "#333333",
    },
)

ACCENT_THEME_NAME = "harbor-accent"

CUSTOM_THEMES = [HARBOR_DARK_THEME]


def build_accent_theme(config: CascadeConfig) -> Theme | None:
    """Theme whose primary color is the resolved chrome accent, or None."""
    color = resolve_group(config, CHROME_GROUP)
    if color is None:
        return None
    return Theme(
        name=ACCENT_THEME_NAME,
        background="#121212",
        surface=FALLBACK_BASE,
        panel=darken(color, 0.35),
        foreground="#E6E6E6",
        primary=color,
        secondary="#8C8C8C",
        accent=vivid_boost(color, 0.2),
        success="#5EB85E",
        warning="#E6A832",
        error="#D94A3D",
        dark=True,
        variables={
            "block-cursor-foreground": contrast_foreground(color),
            "block-cursor-background": color,
            "input-selection-background": f"{color} 30%",
            "footer-key-foreground": color,
        },
    )
