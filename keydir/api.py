"""Library entry points for keyed directory menus.

``open_session`` validates the starting directory against the configured
root and returns a ready controller. ``browse_directory`` additionally runs
the reference terminal loop until a command closes the session.
"""

from __future__ import annotations

import logging
import os
import re
import sys
from collections.abc import Callable
from pathlib import Path

from .boundary import is_navigable, normalize_directory
from .editor import launch_editor
from .entries.fs import PatternLike, compile_pattern, require_directory
from .errors import IllegalDirectory, InvalidConfiguration, ListingFailed, NotADirectory
from .render.theme import resolve_theme
from .runtime.config import MenuConfig, load_menu_config
from .runtime.controller import NavigationController, PromptFunction
from .runtime.session import LabelFunction, NavigationSession, PathAction

logger = logging.getLogger(__name__)


def _compiled_exclude(exclude: PatternLike | None) -> re.Pattern[str] | None:
    try:
        return compile_pattern(exclude)
    except re.error as exc:
        raise InvalidConfiguration(f"invalid exclude pattern {exclude!r}: {exc}") from exc


def open_session(
    directory: Path,
    file_action: PathAction | None = None,
    directory_action: PathAction | None = None,
    *,
    label_for: LabelFunction | None = None,
    exclude: PatternLike | None = None,
    config: MenuConfig | None = None,
    prompt: PromptFunction | None = None,
    stay_open: bool | None = None,
) -> NavigationController:
    """Start a session at ``directory`` and build its first pages.

    Raises ``InvalidConfiguration``, ``NotADirectory`` or ``IllegalDirectory``
    before any session exists. ``stay_open`` overrides the configured choice
    of whether the menu survives a file action.
    """
    menu_config = (config or load_menu_config()).validate()
    exclude_re = _compiled_exclude(exclude)
    start = normalize_directory(Path(directory))
    try:
        require_directory(start)
    except ListingFailed as exc:
        raise NotADirectory(start) from exc
    root = normalize_directory(menu_config.root)
    if not is_navigable(start, root):
        raise IllegalDirectory(start, root)

    session = NavigationSession(
        root=root,
        current_directory=start,
        sort_method=menu_config.default_sort_method,
        file_action=file_action or launch_editor,
        directory_action=directory_action or launch_editor,
        column_major_order=menu_config.column_major_order,
        stay_open_after_file_action=(
            menu_config.stay_open_after_file_action if stay_open is None else stay_open
        ),
    )
    controller = NavigationController(
        session,
        menu_config,
        label_for=label_for,
        exclude=exclude_re,
        prompt=prompt,
    )
    controller.start()
    logger.info("session opened at %s (root %s)", start, root)
    return controller


def _suspended(action: PathAction, disable: Callable[[], None], enable: Callable[[], None]) -> PathAction:
    """Wrap ``action`` so it runs with the terminal out of raw mode."""

    def run(path: Path) -> str | None:
        disable()
        try:
            return action(path)
        finally:
            enable()

    return run


def browse_directory(
    directory: Path,
    file_action: PathAction | None = None,
    directory_action: PathAction | None = None,
    *,
    label_for: LabelFunction | None = None,
    exclude: PatternLike | None = None,
    config: MenuConfig | None = None,
    stay_open: bool | None = None,
    theme_name: str | None = None,
    no_color: bool = False,
) -> NavigationSession:
    """Browse interactively on the controlling terminal; return the final session."""
    from .runtime.loop import key_source, read_prompt_line, run_menu_loop
    from .runtime.terminal import TerminalController

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if not os.isatty(stdin_fd):
        raise SystemExit("keydir needs an interactive terminal; use --print for non-interactive output.")

    terminal = TerminalController(stdin_fd, stdout_fd)
    next_key = key_source(stdin_fd)
    controller = open_session(
        directory,
        _suspended(file_action or launch_editor, terminal.disable_tui_mode, terminal.enable_tui_mode),
        _suspended(directory_action or launch_editor, terminal.disable_tui_mode, terminal.enable_tui_mode),
        label_for=label_for,
        exclude=exclude,
        config=config,
        prompt=lambda text: read_prompt_line(text, terminal.write, next_key),
        stay_open=stay_open,
    )
    theme = resolve_theme(theme_name, no_color=no_color)
    with terminal.raw_mode():
        run_menu_loop(controller, terminal.write, next_key, theme)
    return controller.session


__all__ = [
    "open_session",
    "browse_directory",
]
