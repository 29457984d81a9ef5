"""ANSI palettes for the terminal menu renderer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MenuTheme:
    """Semantic ANSI palette used by the menu renderer."""

    name: str
    reset: str
    title: str
    key: str
    directory: str
    file: str
    symlink: str
    highlight: str
    message: str
    help_key: str
    help_dim: str


DEFAULT_THEME = MenuTheme(
    name="default",
    reset="\033[0m",
    title="\033[1;38;5;81m",
    key="\033[38;5;229m",
    directory="\033[1;34m",
    file="\033[38;5;252m",
    symlink="\033[38;5;44m",
    highlight="\033[7;1m",
    message="\033[38;5;214m",
    help_key="\033[38;5;229m",
    help_dim="\033[2;38;5;250m",
)

PLAIN_THEME = MenuTheme(
    name="plain",
    reset="",
    title="",
    key="",
    directory="",
    file="",
    symlink="",
    highlight="",
    message="",
    help_key="",
    help_dim="",
)

THEMES: dict[str, MenuTheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    PLAIN_THEME.name: PLAIN_THEME,
}


def available_theme_names() -> list[str]:
    return sorted(THEMES)


def resolve_theme(name: str | None, no_color: bool = False) -> MenuTheme:
    """Return the named theme, plain when color is off, default when unknown."""
    if no_color:
        return PLAIN_THEME
    if name is None:
        return DEFAULT_THEME
    return THEMES.get(name.strip().lower(), DEFAULT_THEME)
