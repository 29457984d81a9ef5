"""Reference interactive loop rendering menu pages on a raw terminal.

The controller owns all navigation state; this loop only draws the active
page, reads one key at a time, and feeds it back through ``dispatch``.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable

from ..input.reader import read_key
from ..render.menu import render_page_lines, render_status_line
from ..render.theme import MenuTheme
from .controller import NavigationController

logger = logging.getLogger(__name__)

CLEAR_SCREEN = "\x1b[H\x1b[2J"
MAX_PROMPT_LENGTH = 256


def read_prompt_line(
    prompt_text: str,
    write: Callable[[str], None],
    next_key: Callable[[], str],
) -> str | None:
    """Collect a line of input on the bottom row; ``None`` when cancelled."""
    buffer = ""
    while True:
        write(f"\r\x1b[2K{prompt_text}{buffer}")
        key = next_key()
        if key in {"", "ESC", "C-g"}:
            return None
        if key == "ENTER":
            return buffer
        if key == "BACKSPACE":
            buffer = buffer[:-1]
            continue
        if len(key) == 1 and key.isprintable() and len(buffer) < MAX_PROMPT_LENGTH:
            buffer += key


def render_screen(controller: NavigationController, width: int, theme: MenuTheme) -> str:
    """Return the full screen text for the controller's current state."""
    session = controller.session
    page = session.current_page
    lines: list[str] = []
    if page is not None:
        lines.extend(render_page_lines(page, width, session.column_major_order, theme))
    lines.append("")
    status = render_status_line(
        session.page_index,
        len(session.pages),
        session.sort_method.value,
        session.reverse_order,
        session.message,
    )
    lines.append(f"{theme.message}{status}{theme.reset}" if session.message else status)
    if session.show_help:
        lines.append("")
        for help_line in controller.help_lines():
            key, _, description = help_line.partition(" ")
            lines.append(f"{theme.help_key}{key}{theme.reset} {theme.help_dim}{description.strip()}{theme.reset}")
    return CLEAR_SCREEN + "\r\n".join(lines)


def run_menu_loop(
    controller: NavigationController,
    write: Callable[[str], None],
    next_key: Callable[[], str],
    theme: MenuTheme,
    terminal_width: Callable[[], int] | None = None,
) -> None:
    """Draw and dispatch until a command closes the session or input ends."""
    width_of = terminal_width or (lambda: shutil.get_terminal_size((80, 24)).columns)
    while not controller.session.is_closed:
        write(render_screen(controller, max(1, width_of()), theme))
        key = next_key()
        if key == "":
            logger.debug("input closed; ending session")
            controller.quit()
            break
        controller.dispatch(key)


def key_source(stdin_fd: int) -> Callable[[], str]:
    return lambda: read_key(stdin_fd)


__all__ = [
    "read_prompt_line",
    "render_screen",
    "run_menu_loop",
    "key_source",
]
