"""Error taxonomy for directory menus.

Every failure the engine reports derives from ``DirectoryMenuError`` so
callers and the CLI can catch one type and show its message.
"""

from __future__ import annotations

from pathlib import Path


class DirectoryMenuError(Exception):
    """Base class for all keydir failures."""


class NotADirectory(DirectoryMenuError):
    """Raised when a path that must be a directory is not one."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Not a directory: {path}")
        self.path = path


class IllegalDirectory(DirectoryMenuError):
    """Raised when a directory lies outside the navigable root."""

    def __init__(self, path: Path, root: Path) -> None:
        super().__init__(f"Directory {path} is outside the navigable root {root}")
        self.path = path
        self.root = root


class InvalidConfiguration(DirectoryMenuError):
    """Raised at startup for bad page sizes, key collisions, or patterns."""


class InvalidPattern(DirectoryMenuError):
    """Raised when a user-entered filter or highlight regex does not compile."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")
        self.pattern = pattern


class KeySpaceExhausted(DirectoryMenuError):
    """Raised when no unused activation key remains for an entry."""

    def __init__(self, label: str) -> None:
        super().__init__(f"No free key left for {label!r}")
        self.label = label


class ListingFailed(DirectoryMenuError):
    """Raised when a directory cannot be read during a rebuild."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot list {path}: {reason}")
        self.path = path


__all__ = [
    "DirectoryMenuError",
    "NotADirectory",
    "IllegalDirectory",
    "InvalidConfiguration",
    "InvalidPattern",
    "KeySpaceExhausted",
    "ListingFailed",
]
