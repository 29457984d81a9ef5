"""Domain datatypes for directory entries, keyed menu rows, and pages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class EntryKind(Enum):
    """Filesystem object type as seen in the listing (links are not followed)."""

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"


@dataclass(frozen=True)
class Entry:
    """Immutable snapshot of one visible directory child.

    ``full_path`` is resolved (symlinks followed) while ``kind`` reports the
    object as listed. Timestamps are integer nanoseconds.
    """

    name: str
    full_path: Path
    kind: EntryKind
    size: int = 0
    accessed_ns: int = 0
    modified_ns: int = 0
    status_changed_ns: int = 0
    target_is_dir: bool = False

    @property
    def is_dir(self) -> bool:
        """Return whether selecting this entry navigates into a directory."""
        return self.kind is EntryKind.DIRECTORY or (self.kind is EntryKind.SYMLINK and self.target_is_dir)


@dataclass(frozen=True)
class FileTarget:
    path: Path


@dataclass(frozen=True)
class DirectoryTarget:
    path: Path


MenuTarget = FileTarget | DirectoryTarget


@dataclass(frozen=True)
class KeyedEntry:
    """An entry bound to its activation key and display label."""

    entry: Entry
    key: str
    label: str
    highlighted: bool = False

    @property
    def target(self) -> MenuTarget:
        """Return the action variant the controller dispatches on selection."""
        if self.entry.is_dir:
            return DirectoryTarget(self.entry.full_path)
        return FileTarget(self.entry.full_path)


@dataclass(frozen=True)
class Page:
    """One bounded screenful of keyed entries (``index`` is 1-based)."""

    index: int
    title: str
    items: tuple[KeyedEntry, ...] = ()

    def find(self, key: str) -> KeyedEntry | None:
        """Return the item bound to ``key`` on this page, if any."""
        for item in self.items:
            if item.key == key:
                return item
        return None


__all__ = [
    "EntryKind",
    "Entry",
    "FileTarget",
    "DirectoryTarget",
    "MenuTarget",
    "KeyedEntry",
    "Page",
]
