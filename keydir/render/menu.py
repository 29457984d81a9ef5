"""Text layout for one menu page.

Cells read ``key label`` and are arranged in a grid filling rows first, or
columns first when column-major order is on. Page contents are never
reordered; only their placement on screen changes.
"""

from __future__ import annotations

from ..entries.types import EntryKind, KeyedEntry, Page
from .theme import MenuTheme, PLAIN_THEME

CELL_GAP = 2


def _cell_text(item: KeyedEntry) -> str:
    return f"{item.key} {item.label}"


def _styled_cell(item: KeyedEntry, width: int, theme: MenuTheme) -> str:
    if item.entry.kind is EntryKind.SYMLINK:
        label_color = theme.symlink
    elif item.entry.kind is EntryKind.DIRECTORY:
        label_color = theme.directory
    else:
        label_color = theme.file
    if item.highlighted:
        label_color += theme.highlight
    padding = " " * max(0, width - len(_cell_text(item)))
    return f"{theme.key}{item.key}{theme.reset} {label_color}{item.label}{theme.reset}{padding}"


def grid_positions(count: int, columns: int, column_major: bool) -> list[tuple[int, int]]:
    """Return ``(row, column)`` for each of ``count`` items in order."""
    columns = max(1, min(columns, count)) if count else 1
    rows = -(-count // columns) if count else 0
    if column_major:
        return [(idx % rows, idx // rows) for idx in range(count)]
    return [(idx // columns, idx % columns) for idx in range(count)]


def render_page_lines(
    page: Page,
    width: int,
    column_major: bool = False,
    theme: MenuTheme = PLAIN_THEME,
) -> list[str]:
    """Render the title and item grid of ``page`` within ``width`` columns."""
    lines = [f"{theme.title}{page.title}{theme.reset}"]
    if not page.items:
        lines.append("(empty)")
        return lines

    cell_width = max(len(_cell_text(item)) for item in page.items) + CELL_GAP
    columns = max(1, width // cell_width)
    positions = grid_positions(len(page.items), columns, column_major)
    row_count = max(row for row, _ in positions) + 1
    grid: list[list[str]] = [[] for _ in range(row_count)]
    placed = sorted(zip(positions, page.items), key=lambda pair: pair[0])
    for (row, _column), item in placed:
        grid[row].append(_styled_cell(item, cell_width, theme))
    lines.extend("".join(cells).rstrip() for cells in grid)
    return lines


def render_status_line(page_index: int, page_total: int, sort_name: str, reverse: bool, message: str) -> str:
    order = " reversed" if reverse else ""
    status = f"page {page_index}/{page_total}  sort: {sort_name}{order}"
    if message:
        status += f"  | {message}"
    return status


__all__ = [
    "grid_positions",
    "render_page_lines",
    "render_status_line",
]
