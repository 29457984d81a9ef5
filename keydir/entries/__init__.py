"""Domain model for one directory level of menu entries.

This package contains non-UI primitives:
- entry, keyed-entry, and page datatypes
- the single-level filesystem lister with exclusion rules
"""

from __future__ import annotations

from .fs import compile_pattern, is_permanently_excluded, list_entries
from .types import DirectoryTarget, Entry, EntryKind, FileTarget, KeyedEntry, MenuTarget, Page

__all__ = [
    "Entry",
    "EntryKind",
    "KeyedEntry",
    "Page",
    "FileTarget",
    "DirectoryTarget",
    "MenuTarget",
    "compile_pattern",
    "is_permanently_excluded",
    "list_entries",
]
