"""Navigation state machine driving directory menus.

The controller owns one ``NavigationSession``. Every recognized command
either adjusts the page index in place or runs the full rebuild pipeline
(list, sort, key, paginate) and swaps in the new pages atomically. Failed
rebuilds leave the previous pages untouched and record a message.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from pathlib import Path

from ..boundary import is_navigable, normalize_directory
from ..entries.fs import PatternLike, compile_pattern, list_entries
from ..entries.types import DirectoryTarget, Entry, EntryKind, FileTarget, KeyedEntry, Page
from ..errors import InvalidPattern, KeySpaceExhausted, ListingFailed, NotADirectory
from ..input.key_registry import SIDE_COMMAND_KEYS, KeyComboBinding, KeyComboRegistry
from ..keys import assign_keys
from ..pages import chunked, page_title, paginate
from ..sorting import next_sort_method, sort_entries
from .config import MenuConfig
from .session import LabelFunction, NavigationSession, SessionState

logger = logging.getLogger(__name__)

PromptFunction = Callable[[str], "str | None"]


def default_label(entry: Entry) -> str:
    """Return the base name marked ``/`` for directories and ``@`` for links."""
    if entry.kind is EntryKind.SYMLINK:
        return entry.name + "@"
    if entry.kind is EntryKind.DIRECTORY:
        return entry.name + "/"
    return entry.name


def _checked_pattern(pattern: str | None) -> str | None:
    if pattern is None or pattern == "":
        return None
    try:
        re.compile(pattern)
    except re.error as exc:
        raise InvalidPattern(pattern, str(exc)) from exc
    return pattern


class NavigationController:
    """Apply navigation, sort, and filter commands to a session."""

    def __init__(
        self,
        session: NavigationSession,
        config: MenuConfig,
        *,
        label_for: LabelFunction | None = None,
        exclude: PatternLike | None = None,
        prompt: PromptFunction | None = None,
    ) -> None:
        """Bind ``session`` to ``config``; ``exclude`` overrides the configured pattern."""
        self.session = session
        self.config = config
        self.label_for = label_for or default_label
        self.exclude = compile_pattern(exclude if exclude is not None else config.exclude_pattern)
        self.prompt = prompt
        self._side_commands = self._build_side_commands()

    # -- pipeline -----------------------------------------------------------

    def _keyed_entries(self, ordered: list[Entry]) -> list[KeyedEntry]:
        """Assign keys page by page so each page is its own key universe."""
        highlight = compile_pattern(self.session.highlight_pattern)
        keyed: list[KeyedEntry] = []
        for chunk in chunked(ordered, self.config.max_items_per_page):
            labels = [self.label_for(entry) for entry in chunk]
            keys = assign_keys(labels, self.config.reserved_keys)
            for entry, key, label in zip(chunk, keys, labels):
                keyed.append(
                    KeyedEntry(
                        entry=entry,
                        key=key,
                        label=label,
                        highlighted=bool(highlight is not None and highlight.search(entry.name)),
                    )
                )
        return keyed

    def build_pages(self, directory: Path) -> list[Page]:
        """Run the full listing pipeline for ``directory`` without touching state."""
        entries = list_entries(directory, exclude=self.exclude, only_matching=self.session.filter_pattern)
        ordered = sort_entries(entries, self.session.sort_method, reverse=self.session.reverse_order)
        pages = paginate(self._keyed_entries(ordered), self.config.max_items_per_page, directory)
        if not pages:
            pages = [Page(index=1, title=page_title(directory, 1, 1))]
        return pages

    def _rebuild(self, directory: Path, keep_page: bool = False) -> bool:
        """Rebuild pages for ``directory`` and commit them only on success."""
        session = self.session
        session.state = SessionState.LISTING
        try:
            pages = self.build_pages(directory)
        except (ListingFailed, NotADirectory, KeySpaceExhausted) as exc:
            logger.warning("rebuild of %s failed: %s", directory, exc)
            session.message = str(exc)
            if not session.pages:
                session.pages = [Page(index=1, title=page_title(session.current_directory, 1, 1))]
                session.page_index = 1
            session.state = SessionState.AWAITING_INPUT
            return False

        previous_index = session.page_index
        session.pages = pages
        session.current_directory = directory
        session.page_index = min(previous_index, len(pages)) if keep_page else 1
        session.message = ""
        session.state = SessionState.AWAITING_INPUT
        logger.debug(
            "rebuilt %s: %d pages, sort=%s reverse=%s filter=%r",
            directory,
            len(pages),
            session.sort_method.value,
            session.reverse_order,
            session.filter_pattern,
        )
        return True

    def start(self) -> bool:
        """Build the initial pages for the session's current directory."""
        return self._rebuild(self.session.current_directory)

    def rebuild(self) -> bool:
        """Re-run the pipeline for the current directory, keeping the page index when possible."""
        return self._rebuild(self.session.current_directory, keep_page=True)

    # -- renderer-facing views ----------------------------------------------

    @property
    def pages(self) -> list[Page]:
        """Current page sequence, read-only for renderers."""
        return self.session.pages

    @property
    def titles(self) -> list[str]:
        """Titles of the current pages, in page order."""
        return self.session.titles

    @property
    def page_index(self) -> int:
        """1-based index of the active page."""
        return self.session.page_index

    def go_to_page(self, index: int) -> bool:
        """Make page ``index`` (1-based) active when it exists."""
        if 1 <= index <= len(self.session.pages):
            self.session.page_index = index
        return True

    # -- commands -----------------------------------------------------------

    def _finish_action(self, result: str | None) -> bool:
        """Record an action result and close unless configured to stay open."""
        self.session.message = result or ""
        if self.session.stay_open_after_file_action:
            return True
        self.session.state = SessionState.CLOSED
        return False

    def _enter_directory(self, directory: Path) -> bool:
        """Descend into ``directory`` when it lies inside the root."""
        if not is_navigable(directory, self.session.root):
            logger.info("refusing to enter %s outside %s", directory, self.session.root)
            self.session.message = f"{directory} is outside {self.session.root}"
            return True
        self._rebuild(normalize_directory(directory))
        return True

    def select(self, key: str) -> bool:
        """Activate the entry bound to ``key`` on the current page.

        Directories are entered; files go to the file action. Unknown keys
        are ignored.
        """
        page = self.session.current_page
        item = page.find(key) if page is not None else None
        if item is None:
            return True
        target = item.target
        if isinstance(target, DirectoryTarget):
            return self._enter_directory(target.path)
        assert isinstance(target, FileTarget)
        logger.info("file action on %s", target.path)
        return self._finish_action(self.session.file_action(target.path))

    def ascend(self) -> bool:
        """Move to the parent directory; a no-op at the root."""
        current = self.session.current_directory
        parent = current.parent
        if normalize_directory(current) == normalize_directory(self.session.root):
            return True
        if parent == current or not is_navigable(parent, self.session.root):
            return True
        self._rebuild(normalize_directory(parent))
        return True

    def reveal_current_directory(self) -> bool:
        """Hand the current directory to the directory action."""
        directory = self.session.current_directory
        logger.info("directory action on %s", directory)
        return self._finish_action(self.session.directory_action(directory))

    def next_page(self) -> bool:
        """Advance to the next page, wrapping to the first."""
        if self.session.pages:
            self.session.page_index = self.session.page_index % len(self.session.pages) + 1
        return True

    def previous_page(self) -> bool:
        """Step back one page, wrapping to the last."""
        if self.session.pages:
            self.session.page_index = (self.session.page_index - 2) % len(self.session.pages) + 1
        return True

    def _rebuild_with(self, attribute: str, value: object, keep_page: bool = False) -> bool:
        """Set one session attribute and rebuild, restoring it if the rebuild fails."""
        previous = getattr(self.session, attribute)
        setattr(self.session, attribute, value)
        if not self._rebuild(self.session.current_directory, keep_page=keep_page):
            setattr(self.session, attribute, previous)
        return True

    def cycle_sort(self, direction: int = 1) -> bool:
        """Switch to the adjacent sort method and re-sort the current directory."""
        return self._rebuild_with("sort_method", next_sort_method(self.session.sort_method, direction))

    def toggle_reverse(self) -> bool:
        """Flip the reverse flag and re-sort the current directory."""
        return self._rebuild_with("reverse_order", not self.session.reverse_order)

    def set_filter(self, pattern: str | None) -> bool:
        """Show only names matching ``pattern``; ``None`` or ``""`` clears it."""
        try:
            checked = _checked_pattern(pattern)
        except InvalidPattern as exc:
            self.session.message = str(exc)
            return True
        return self._rebuild_with("filter_pattern", checked)

    def set_highlight(self, pattern: str | None) -> bool:
        """Flag names matching ``pattern``; membership and order are unchanged."""
        try:
            checked = _checked_pattern(pattern)
        except InvalidPattern as exc:
            self.session.message = str(exc)
            return True
        return self._rebuild_with("highlight_pattern", checked, keep_page=True)

    def toggle_column_major(self) -> bool:
        """Switch the renderer between row-major and column-major layout."""
        self.session.column_major_order = not self.session.column_major_order
        return True

    def toggle_persistence(self) -> bool:
        """Flip whether the menu stays open after a file action."""
        self.session.stay_open_after_file_action = not self.session.stay_open_after_file_action
        return True

    def toggle_help(self) -> bool:
        """Show or hide the key help."""
        self.session.show_help = not self.session.show_help
        return True

    def quit(self) -> bool:
        """Close the session."""
        self.session.state = SessionState.CLOSED
        return False

    def quit_keep_window(self) -> bool:
        """Close the session and ask the renderer to keep its window."""
        self.session.keep_window = True
        return self.quit()

    def _prompt_pattern(self, prompt_text: str, apply: Callable[[str | None], bool]) -> bool:
        """Ask for a pattern and hand it to ``apply``; cancelling changes nothing."""
        if self.prompt is None:
            self.session.message = "No prompt available"
            return True
        response = self.prompt(prompt_text)
        if response is None:
            return True
        return apply(response)

    # -- key dispatch ---------------------------------------------------------

    def _build_side_commands(self) -> KeyComboRegistry:
        def binding(name: str, description: str, handler: Callable[[], bool]) -> KeyComboBinding:
            return KeyComboBinding((SIDE_COMMAND_KEYS[name],), handler, name=name, description=description)

        return KeyComboRegistry().register_bindings(
            binding("next-page", "Next page", self.next_page),
            binding("previous-page", "Previous page", self.previous_page),
            binding("next-sort", "Next sort method", lambda: self.cycle_sort(1)),
            binding("previous-sort", "Previous sort method", lambda: self.cycle_sort(-1)),
            binding("reverse-order", "Reverse order", self.toggle_reverse),
            binding(
                "filter",
                "Filter by regexp",
                lambda: self._prompt_pattern("Filter (regexp): ", self.set_filter),
            ),
            binding(
                "highlight",
                "Highlight by regexp",
                lambda: self._prompt_pattern("Highlight (regexp): ", self.set_highlight),
            ),
            binding("toggle-display", "Toggle row/column layout", self.toggle_column_major),
            binding("toggle-persistence", "Keep menu open after opening a file", self.toggle_persistence),
            binding("help", "Toggle help", self.toggle_help),
            binding("quit", "Quit", self.quit),
            binding("quit-keep-window", "Quit, keep window", self.quit_keep_window),
        )

    def side_bindings(self) -> tuple[KeyComboBinding, ...]:
        """Return the side-command table the renderer dispatches back in."""
        return self._side_commands.bindings()

    def dispatch(self, key: str) -> bool:
        """Route one key token; returns ``False`` once the menu should close."""
        if self.session.is_closed:
            return False
        page = self.session.current_page
        if page is not None and page.find(key) is not None:
            return self.select(key)
        if key == self.config.back_to_parent_key:
            return self.ascend()
        if key == self.config.current_directory_key:
            return self.reveal_current_directory()
        handled = self._side_commands.dispatch(key)
        if handled is None:
            return True
        return handled

    def help_lines(self) -> list[str]:
        """Return one ``key  description`` line per reserved key and side command."""
        lines = [
            f"{self.config.back_to_parent_key:<8} Parent directory",
            f"{self.config.current_directory_key:<8} Open current directory",
        ]
        for entry in self.side_bindings():
            lines.append(f"{', '.join(entry.combos):<8} {entry.description}")
        return lines


__all__ = [
    "NavigationController",
    "PromptFunction",
    "default_label",
]
