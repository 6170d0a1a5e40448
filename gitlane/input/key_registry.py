"""Key-token dispatch tables used by the per-mode handlers."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

KeyAction = Callable[[], "bool | None"]


@dataclass(frozen=True)
class KeyComboBinding:
    """One action reachable from one or more key tokens."""

    combos: tuple[str, ...]
    handler: KeyAction


class KeyComboRegistry:
    """Map key tokens to actions.

    ``dispatch`` returns ``None`` when the key is unbound, otherwise the
    action's result (``True`` asks the loop to quit).
    """

    def __init__(self, bindings: Iterable[KeyComboBinding] = ()) -> None:
        self._handlers: dict[str, KeyAction] = {}
        for binding in bindings:
            self.register_binding(binding)

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        for combo in binding.combos:
            self._handlers[combo] = binding.handler
        return self

    def bind(self, combos: Iterable[str], handler: KeyAction) -> KeyComboRegistry:
        return self.register_binding(KeyComboBinding(tuple(combos), handler))

    def __contains__(self, key: str) -> bool:
        return key in self._handlers

    def dispatch(self, key: str) -> bool | None:
        handler = self._handlers.get(key)
        if handler is None:
            return None
        return bool(handler())
