"""Public package surface for keydir.

Exports the library entry points plus ``main`` for programmatic CLI
invocation. Most implementation lives in submodules under ``keydir``.
"""

from __future__ import annotations

from .api import browse_directory, open_session
from .errors import (
    DirectoryMenuError,
    IllegalDirectory,
    InvalidConfiguration,
    InvalidPattern,
    KeySpaceExhausted,
    ListingFailed,
    NotADirectory,
)


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "main",
    "open_session",
    "browse_directory",
    "DirectoryMenuError",
    "NotADirectory",
    "IllegalDirectory",
    "InvalidConfiguration",
    "InvalidPattern",
    "KeySpaceExhausted",
    "ListingFailed",
]
