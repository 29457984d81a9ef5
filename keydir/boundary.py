"""Root-boundary checks deciding which directories are navigable."""

from __future__ import annotations

import os
from pathlib import Path


def normalize_directory(path: Path) -> Path:
    """Return ``path`` absolute with symlinks and ``..`` segments resolved."""
    try:
        return path.expanduser().resolve()
    except (OSError, RuntimeError):
        return Path(os.path.normpath(path.expanduser().absolute()))


def _with_separator(path: Path) -> str:
    text = str(path)
    return text if text.endswith(os.sep) else text + os.sep


def is_navigable(candidate: Path, root: Path) -> bool:
    """Return whether ``candidate`` is ``root`` or lies beneath it.

    Both sides are fully normalized and compared as separator-terminated
    strings so ``/home/foobar`` never matches root ``/home/foo``.
    """
    candidate_text = _with_separator(normalize_directory(candidate))
    root_text = _with_separator(normalize_directory(root))
    return candidate_text.startswith(root_text)


__all__ = [
    "normalize_directory",
    "is_navigable",
]
