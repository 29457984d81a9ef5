"""Mutable navigation state owned by one controller."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from ..entries.types import Entry, Page
from ..sorting import SortMethod

PathAction = Callable[[Path], "str | None"]
LabelFunction = Callable[[Entry], str]


class SessionState(Enum):
    LISTING = "listing"
    AWAITING_INPUT = "awaiting-input"
    CLOSED = "closed"


@dataclass
class NavigationSession:
    """State for one browse, reused across descents into subdirectories.

    ``pages`` is replaced wholesale on every successful rebuild. ``message``
    carries the last error or action result for the renderer to show.
    """

    root: Path
    current_directory: Path
    sort_method: SortMethod
    file_action: PathAction
    directory_action: PathAction
    filter_pattern: str | None = None
    highlight_pattern: str | None = None
    reverse_order: bool = False
    column_major_order: bool = False
    stay_open_after_file_action: bool = False
    pages: list[Page] = field(default_factory=list)
    page_index: int = 1
    state: SessionState = SessionState.LISTING
    keep_window: bool = False
    show_help: bool = False
    message: str = ""

    @property
    def current_page(self) -> Page | None:
        if not self.pages:
            return None
        return self.pages[self.page_index - 1]

    @property
    def titles(self) -> list[str]:
        return [page.title for page in self.pages]

    @property
    def is_closed(self) -> bool:
        return self.state is SessionState.CLOSED
