"""Key token to handler dispatch table used by the command dispatcher."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

KeyHandler = Callable[[str], bool]


@dataclass(frozen=True)
class KeyBinding:
    """Map one or more key tokens to a handler receiving the token."""

    keys: tuple[str, ...]
    handler: KeyHandler


class KeyBindings:
    """Exact-match key table with an optional catch-all handler."""

    def __init__(self, fallback: KeyHandler | None = None) -> None:
        self._handlers: dict[str, KeyHandler] = {}
        self._fallback = fallback

    def bind(self, binding: KeyBinding) -> KeyBindings:
        for key in binding.keys:
            self._handlers[key] = binding.handler
        return self

    def bind_all(self, *bindings: KeyBinding) -> KeyBindings:
        for binding in bindings:
            self.bind(binding)
        return self

    def dispatch(self, key: str) -> bool | None:
        """Run the handler for ``key``; ``None`` means nothing handled it."""
        handler = self._handlers.get(key, self._fallback)
        if handler is None:
            return None
        return handler(key)
