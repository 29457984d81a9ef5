"""Named sort orders for directory entries and cycling between them."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from enum import Enum

from .entries.types import Entry


class SortMethod(Enum):
    """Closed set of sort orders, in cycling order."""

    NAME = "name"
    EXTENSION = "extension"
    SIZE = "size"
    TIME_ACCESSED = "time-accessed"
    TIME_MODIFIED = "time-modified"
    TIME_CHANGED = "time-changed"


def extension_of(name: str) -> str:
    """Return the text after the first ``.`` in ``name`` (empty when none)."""
    _, dot, rest = name.partition(".")
    return rest if dot else ""


def _name_key(entry: Entry) -> tuple:
    return (entry.name,)


def _extension_key(entry: Entry) -> tuple:
    if entry.is_dir:
        return (0, "", entry.name)
    return (1, extension_of(entry.name), entry.name)


def _size_key(entry: Entry) -> tuple:
    return (-entry.size, entry.name)


def _accessed_key(entry: Entry) -> tuple:
    return (-entry.accessed_ns, entry.name)


def _modified_key(entry: Entry) -> tuple:
    return (-entry.modified_ns, entry.name)


def _changed_key(entry: Entry) -> tuple:
    return (-entry.status_changed_ns, entry.name)


SORT_KEYS: dict[SortMethod, Callable[[Entry], tuple]] = {
    SortMethod.NAME: _name_key,
    SortMethod.EXTENSION: _extension_key,
    SortMethod.SIZE: _size_key,
    SortMethod.TIME_ACCESSED: _accessed_key,
    SortMethod.TIME_MODIFIED: _modified_key,
    SortMethod.TIME_CHANGED: _changed_key,
}


def sort_entries(entries: Iterable[Entry], method: SortMethod, reverse: bool = False) -> list[Entry]:
    """Return ``entries`` ordered by ``method``.

    Descending methods (size and the timestamps) negate their key; every key
    ends with the name so equal primaries still order deterministically.
    """
    ordered = sorted(entries, key=SORT_KEYS[method])
    if reverse:
        ordered.reverse()
    return ordered


def next_sort_method(current: SortMethod, direction: int = 1) -> SortMethod:
    """Return the method adjacent to ``current`` in declaration order, wrapping."""
    methods = list(SortMethod)
    step = 1 if direction >= 0 else -1
    return methods[(methods.index(current) + step) % len(methods)]


def parse_sort_method(value: str) -> SortMethod:
    """Map a method name such as ``"time-modified"`` to its enum member."""
    normalized = value.strip().lower().replace("_", "-")
    for method in SortMethod:
        if method.value == normalized:
            return method
    raise ValueError(f"unknown sort method: {value!r}")


__all__ = [
    "SortMethod",
    "SORT_KEYS",
    "extension_of",
    "sort_entries",
    "next_sort_method",
    "parse_sort_method",
]
