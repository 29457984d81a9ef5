"""Split ordered keyed entries into bounded pages and title them."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TypeVar

from .entries.types import KeyedEntry, Page
from .errors import InvalidConfiguration

T = TypeVar("T")


def _require_positive(max_per_page: int) -> None:
    if max_per_page <= 0:
        raise InvalidConfiguration(f"max items per page must be > 0, got {max_per_page}")


def chunked(items: Sequence[T], max_per_page: int) -> list[Sequence[T]]:
    """Return consecutive slices of at most ``max_per_page`` items."""
    _require_positive(max_per_page)
    return [items[start : start + max_per_page] for start in range(0, len(items), max_per_page)]


def page_count(item_count: int, max_per_page: int) -> int:
    """Return how many pages ``item_count`` entries need (ceiling division)."""
    _require_positive(max_per_page)
    return -(-item_count // max_per_page)


def page_title(directory: Path, index: int, total: int) -> str:
    """Return ``"<dir> (<index>)"``, or just ``"<dir>"`` for a lone page."""
    if total <= 1:
        return str(directory)
    return f"{directory} ({index})"


def paginate(keyed_entries: Sequence[KeyedEntry], max_per_page: int, directory: Path) -> list[Page]:
    """Slice entries into pages in arrival order; only the last may be short."""
    chunks = chunked(keyed_entries, max_per_page)
    total = len(chunks)
    return [
        Page(index=idx, title=page_title(directory, idx, total), items=tuple(chunk))
        for idx, chunk in enumerate(chunks, start=1)
    ]


__all__ = [
    "chunked",
    "page_count",
    "page_title",
    "paginate",
]
