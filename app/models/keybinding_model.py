# app/models/keybinding_model.py
from __future__ import annotations
from dataclasses import dataclass, field


@dataclass
class KeyBinding:
    """
    A rebindable key with a pending-press counter.

    Key events arrive from the UI and only increment the counter. The tick
    callback drains it with `was_pressed()`, so presses between two ticks are
    never lost and each one is handled exactly once.
    """

    binding_id: str
    default_key: str
    category: str = ""
    bound_key: str | None = None
    _pending_presses: int = field(default=0, repr=False)

    @property
    def key(self) -> str:
        """The effective key name (bound key, or the default)."""
        return self.bound_key or self.default_key

    def press(self):
        self._pending_presses += 1

    def was_pressed(self) -> bool:
        """Consumes one pending press. Returns False when none are left."""
        if self._pending_presses == 0:
            return False
        self._pending_presses -= 1
        return True

    def rebind(self, key: str | None):
        """Binds a new key. An empty name restores the default."""
        key = (key or "").strip()
        self.bound_key = key if key and key != self.default_key else None
        self._pending_presses = 0

    def is_default(self) -> bool:
        return self.bound_key is None
