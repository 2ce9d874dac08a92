# app/services/hud_toast_service.py
import time
from typing import Callable

from app.core.constants import TOAST_TTL_MS


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class HudToast:
    """
    Holds at most one on-screen message and its expiry time.
    A new `show()` replaces whatever is pending.
    """

    def __init__(self, clock: Callable[[], int] = _monotonic_ms, ttl_ms: int = TOAST_TTL_MS):
        self._clock = clock
        self._ttl_ms = ttl_ms
        self._message: str | None = None
        self._until_ms = 0

    def show(self, message: str):
        self._message = message
        self._until_ms = self._clock() + self._ttl_ms

    def current(self) -> str | None:
        """The message to draw this frame. Clears it once expired."""
        if self._message is None:
            return None
        if self._clock() > self._until_ms:
            self._message = None
            return None
        return self._message

    def clear(self):
        self._message = None
