"""Deterministic activation-key assignment for menu labels.

Keys are single printable characters. A label prefers its own characters
(first one first), then falls back to digits, letters, and punctuation in
a fixed order. Multi-character tokens such as ``"C-b"`` or ``"LEFT"`` are
never generated, so they are safe for reserved and side-command keys.
"""

from __future__ import annotations

import string
from collections.abc import Collection, Iterable, Sequence

from .errors import InvalidConfiguration, KeySpaceExhausted

FALLBACK_KEYS = string.digits + string.ascii_lowercase + string.ascii_uppercase + string.punctuation
KEY_POOL = frozenset(FALLBACK_KEYS)


def is_assignable_key(key: str) -> bool:
    """Return whether ``key`` belongs to the generated single-character pool."""
    return key in KEY_POOL


def _candidates(label: str) -> Iterable[str]:
    yield from (ch for ch in label if ch in KEY_POOL)
    yield from FALLBACK_KEYS


def assign_keys(labels: Sequence[str], reserved: Collection[str] = ()) -> list[str]:
    """Return one unique key per label, aligned with ``labels`` by position.

    Raises ``KeySpaceExhausted`` rather than dropping a label when the pool
    runs dry.
    """
    used: set[str] = set(reserved)
    keys: list[str] = []
    for label in labels:
        key = next((candidate for candidate in _candidates(label) if candidate not in used), None)
        if key is None:
            raise KeySpaceExhausted(label)
        used.add(key)
        keys.append(key)
    return keys


def available_key_count(reserved: Collection[str]) -> int:
    """Return how many generated keys remain once ``reserved`` is set aside."""
    return len(KEY_POOL - set(reserved))


def validate_reserved_keys(
    back_to_parent_key: str,
    current_directory_key: str,
    side_command_keys: Collection[str] = (),
) -> None:
    """Check the two reserved session keys at configuration time.

    They must be non-empty, differ from each other, avoid side-command keys,
    and never be a single alphanumeric character (those are handed to
    entries).
    """
    for name, key in (
        ("back_to_parent_key", back_to_parent_key),
        ("current_directory_key", current_directory_key),
    ):
        if not key or key.isspace():
            raise InvalidConfiguration(f"{name} must be a non-empty key")
        if len(key) == 1 and key.isalnum():
            raise InvalidConfiguration(f"{name} {key!r} collides with generated alphanumeric keys")
        if key in side_command_keys:
            raise InvalidConfiguration(f"{name} {key!r} is already bound to a side command")
    if back_to_parent_key == current_directory_key:
        raise InvalidConfiguration(
            f"back_to_parent_key and current_directory_key are both {back_to_parent_key!r}"
        )


__all__ = [
    "FALLBACK_KEYS",
    "KEY_POOL",
    "is_assignable_key",
    "assign_keys",
    "available_key_count",
    "validate_reserved_keys",
]
