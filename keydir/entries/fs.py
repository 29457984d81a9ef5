"""Filesystem scanning for one directory level of menu entries."""

from __future__ import annotations

import logging
import os
import re
import stat as stat_module
from pathlib import Path

from ..errors import ListingFailed, NotADirectory
from .types import Entry, EntryKind

logger = logging.getLogger(__name__)

PatternLike = str | re.Pattern[str]


def compile_pattern(pattern: PatternLike | None) -> re.Pattern[str] | None:
    """Return ``pattern`` compiled, passing ``None`` and compiled patterns through."""
    if pattern is None or isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(pattern)


def is_permanently_excluded(name: str) -> bool:
    """Return whether ``name`` is a dotfile or an editor backup file."""
    return name.startswith(".") or name.endswith("~")


def _entry_from_dir_entry(child: os.DirEntry[str]) -> Entry:
    """Build an ``Entry`` from one scandir result.

    Symlink metadata comes from the link target; broken links fall back to
    the link itself.
    """
    child_path = Path(child.path)
    try:
        is_link = child.is_symlink()
    except OSError:
        is_link = False

    try:
        st = child.stat(follow_symlinks=True)
    except OSError:
        st = child.stat(follow_symlinks=False)

    target_is_dir = stat_module.S_ISDIR(st.st_mode)
    if is_link:
        kind = EntryKind.SYMLINK
    elif target_is_dir:
        kind = EntryKind.DIRECTORY
    else:
        kind = EntryKind.FILE

    try:
        full_path = child_path.resolve()
    except (OSError, RuntimeError):
        full_path = child_path.absolute()

    return Entry(
        name=child.name,
        full_path=full_path,
        kind=kind,
        size=0 if target_is_dir else int(st.st_size),
        accessed_ns=int(st.st_atime_ns),
        modified_ns=int(st.st_mtime_ns),
        status_changed_ns=int(st.st_ctime_ns),
        target_is_dir=target_is_dir,
    )


def require_directory(directory: Path) -> None:
    """Raise unless ``directory`` exists and is a directory.

    Missing paths and non-directories are ``NotADirectory``; any other stat
    failure (such as a parent losing search permission) is ``ListingFailed``.
    """
    try:
        st = os.stat(directory)
    except (FileNotFoundError, NotADirectoryError) as exc:
        raise NotADirectory(directory) from exc
    except OSError as exc:
        raise ListingFailed(directory, exc.strerror or str(exc)) from exc
    if not stat_module.S_ISDIR(st.st_mode):
        raise NotADirectory(directory)


def list_entries(
    directory: Path,
    exclude: PatternLike | None = None,
    only_matching: PatternLike | None = None,
) -> list[Entry]:
    """List visible entries of ``directory`` in arbitrary order.

    Dotfiles and ``~`` backups are always skipped. ``exclude`` drops base
    names it matches; ``only_matching`` drops base names it does not match.
    Raises ``NotADirectory`` for non-directories and ``ListingFailed`` when
    the scan itself fails.
    """
    require_directory(directory)

    exclude_re = compile_pattern(exclude)
    only_re = compile_pattern(only_matching)
    entries: list[Entry] = []
    try:
        with os.scandir(directory) as children:
            for child in children:
                name = child.name
                if is_permanently_excluded(name):
                    continue
                if exclude_re is not None and exclude_re.search(name):
                    continue
                if only_re is not None and not only_re.search(name):
                    continue
                try:
                    entries.append(_entry_from_dir_entry(child))
                except OSError as exc:
                    # Entry vanished between scandir and stat.
                    logger.debug("skipping %s: %s", child.path, exc)
    except OSError as exc:
        raise ListingFailed(directory, exc.strerror or str(exc)) from exc

    logger.debug("listed %d entries in %s", len(entries), directory)
    return entries


__all__ = [
    "PatternLike",
    "compile_pattern",
    "is_permanently_excluded",
    "require_directory",
    "list_entries",
]
