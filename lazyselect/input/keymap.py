"""Key-token to action lookup tables."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..select.actions import Action

ActionFactory = Callable[[], Action | None]


@dataclass(frozen=True)
class KeyBinding:
    """One or more key tokens that produce the same action."""

    combos: tuple[str, ...]
    build: ActionFactory


class ActionKeymap:
    """Token-keyed table of action factories with optional normalization."""

    def __init__(self, normalize: Callable[[str], str] | None = None) -> None:
        self._normalize = normalize if normalize is not None else self._identity
        self._factories: dict[str, ActionFactory] = {}

    @staticmethod
    def _identity(key: str) -> str:
        return key

    def bind(self, binding: KeyBinding) -> ActionKeymap:
        """Register ``binding``, replacing earlier factories for the same tokens."""
        for combo in binding.combos:
            self._factories[self._normalize(combo)] = binding.build
        return self

    def bind_all(self, *bindings: KeyBinding) -> ActionKeymap:
        for binding in bindings:
            self.bind(binding)
        return self

    def has(self, key: str) -> bool:
        return self._normalize(key) in self._factories

    def lookup(self, key: str) -> Action | None:
        """Build the action bound to ``key``; ``None`` when unbound."""
        factory = self._factories.get(self._normalize(key))
        if factory is None:
            return None
        return factory()
