"""Rendering helpers for the reference terminal menu."""

from __future__ import annotations

from .menu import grid_positions, render_page_lines, render_status_line
from .theme import DEFAULT_THEME, PLAIN_THEME, MenuTheme, available_theme_names, resolve_theme

__all__ = [
    "MenuTheme",
    "DEFAULT_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "resolve_theme",
    "grid_positions",
    "render_page_lines",
    "render_status_line",
]
