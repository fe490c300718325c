#!/usr/bin/env python3
"""TUI themes and styling."""

from typing import Dict

from prompt_toolkit.styles import Style


THEMES: Dict[str, Dict[str, str]] = {
    "dark": {
        "": "#e2e8f0",
        "title": "#a855f7 bold",
        "logo": "#a855f7 bold",
        "text": "#e2e8f0",
        "text.dim": "#9ca3af",
        "task.name": "#ffffff bold",
        "task.desc": "#68d391 italic",
        "task.cmds": "#a0aec0",
        "highlight": "#ec4899",
        "highlight.name": "#ec4899 bold",
        "accent": "#ddd6fe",
        "tab.active": "#ec4899 bold",
        "tab.inactive": "#9ca3af",
        "tab.arrow": "#ec4899 bold",
        "search": "#c084fc",
        "border": "#6b21a8",
        "status": "#68d391 bold",
        "status.error": "#fc8181 bold",
        "error": "#fc8181 bold",
        "footer": "#a0aec0",
        "footer.key": "#ec4899",
    },
    "light": {
        "": "#2d3748",
        "title": "#7c3aed bold",
        "logo": "#7c3aed bold",
        "text": "#2d3748",
        "text.dim": "#718096",
        "task.name": "#000000 bold",
        "task.desc": "#047857 italic",
        "task.cmds": "#4a5568",
        "highlight": "#ec4899",
        "highlight.name": "#ec4899 bold",
        "accent": "#a855f7",
        "tab.active": "#ec4899 bold",
        "tab.inactive": "#4a5568",
        "tab.arrow": "#ec4899 bold",
        "search": "#7c3aed",
        "border": "#a855f7",
        "status": "#059669 bold",
        "status.error": "#dc2626 bold",
        "error": "#dc2626 bold",
        "footer": "#4a5568",
        "footer.key": "#ec4899",
    },
}

DEFAULT_THEME = "dark"


def get_theme_palette(theme: str) -> Dict[str, str]:
    """Get theme palette, falling back to default if theme not found."""
    base = THEMES.get(theme)
    if not base:
        base = THEMES[DEFAULT_THEME]
    return dict(base)


def resolve_theme_name(theme: str) -> str:
    return theme if theme in THEMES else DEFAULT_THEME


def build_style(theme: str) -> Style:
    """Build Style object from theme name."""
    palette = get_theme_palette(theme)
    return Style.from_dict(palette)


__all__ = ["THEMES", "DEFAULT_THEME", "get_theme_palette", "resolve_theme_name", "build_style"]
