"""Navigation runtime: session state, controller, configuration, and loop.

The terminal loop is imported lazily so library users and tests never pull
in ``termios``.
"""

from __future__ import annotations

from .controller import NavigationController, default_label
from .session import NavigationSession, SessionState


def run_menu_loop(*args, **kwargs):
    """Lazily import the loop runner to keep terminal modules optional."""
    from .loop import run_menu_loop as _run_menu_loop

    return _run_menu_loop(*args, **kwargs)


__all__ = [
    "NavigationController",
    "NavigationSession",
    "SessionState",
    "default_label",
    "run_menu_loop",
]
