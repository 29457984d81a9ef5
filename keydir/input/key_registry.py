"""Side-command key table and dispatch for directory menus."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

# Command name -> key token. Tokens are multi-character or ESC so they never
# collide with generated single-character entry keys.
SIDE_COMMAND_KEYS: dict[str, str] = {
    "next-page": "RIGHT",
    "previous-page": "LEFT",
    "next-sort": "C-n",
    "previous-sort": "C-p",
    "reverse-order": "C-r",
    "filter": "C-f",
    "highlight": "C-l",
    "toggle-display": "C-t",
    "toggle-persistence": "C-o",
    "help": "C-k",
    "quit": "ESC",
    "quit-keep-window": "C-g",
}


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a zero-argument action.

    The handler returns ``True`` to keep showing a menu and ``False`` to close.
    """

    combos: tuple[str, ...]
    handler: Callable[[], bool]
    name: str = ""
    description: str = ""


class KeyComboRegistry:
    """Small key-dispatch table with optional key normalization strategy."""

    def __init__(self, normalize: Callable[[str], str] | None = None) -> None:
        """Create an empty table; ``normalize`` maps tokens before lookup."""
        self._normalize = normalize if normalize is not None else self._identity
        self._handlers: dict[str, Callable[[], bool]] = {}
        self._bindings: list[KeyComboBinding] = []

    @staticmethod
    def _identity(key: str) -> str:
        """Default normalizer that leaves tokens as typed."""
        return key

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Register one binding, overwriting existing handlers for same combos."""
        for combo in binding.combos:
            self._handlers[self._normalize(combo)] = binding.handler
        self._bindings.append(binding)
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        """Register multiple bindings and return ``self`` for fluent usage."""
        for binding in bindings:
            self.register_binding(binding)
        return self

    def handles(self, key: str) -> bool:
        """Return whether ``key`` has a bound handler."""
        return self._normalize(key) in self._handlers

    def bindings(self) -> tuple[KeyComboBinding, ...]:
        """Return registered bindings in registration order."""
        return tuple(self._bindings)

    def dispatch(self, key: str) -> bool | None:
        """Invoke bound handler for ``key``; ``None`` when nothing is bound."""
        handler = self._handlers.get(self._normalize(key))
        if handler is None:
            return None
        return handler()


__all__ = [
    "SIDE_COMMAND_KEYS",
    "KeyComboBinding",
    "KeyComboRegistry",
]
