# app/services/tick_service.py
from typing import Callable

from PyQt6.QtCore import QObject, QTimer

from app.core.constants import FRAME_INTERVAL_MS, TICK_INTERVAL_MS
from app.utils.logger_utils import logger


class TickService(QObject):
    """
    Drives the app's two host callbacks on the GUI thread: the end-of-tick
    callback (key polling) and the per-frame render callback (HUD overlay).
    Callbacks run serially in registration order.
    """

    def __init__(self, tick_interval_ms: int = TICK_INTERVAL_MS, frame_interval_ms: int = FRAME_INTERVAL_MS, parent=None):
        super().__init__(parent)
        self._tick_callbacks: list[Callable[[], None]] = []
        self._frame_callbacks: list[Callable[[], None]] = []

        self._tick_timer = QTimer(self)
        self._tick_timer.setInterval(tick_interval_ms)
        self._tick_timer.timeout.connect(self.run_tick)

        self._frame_timer = QTimer(self)
        self._frame_timer.setInterval(frame_interval_ms)
        self._frame_timer.timeout.connect(self.run_frame)

    def register_end_tick(self, callback: Callable[[], None]):
        self._tick_callbacks.append(callback)

    def register_frame(self, callback: Callable[[], None]):
        self._frame_callbacks.append(callback)

    def start(self):
        logger.info("Starting tick and frame timers.")
        self._tick_timer.start()
        self._frame_timer.start()

    def stop(self):
        self._tick_timer.stop()
        self._frame_timer.stop()

    def is_running(self) -> bool:
        return self._tick_timer.isActive()

    def run_tick(self):
        self._run_all(self._tick_callbacks, "tick")

    def run_frame(self):
        self._run_all(self._frame_callbacks, "frame")

    @staticmethod
    def _run_all(callbacks: list[Callable[[], None]], phase: str):
        for callback in callbacks:
            try:
                callback()
            except Exception as e:
                # One failing callback must not stop the loop for the others
                logger.error(f"Unhandled error in {phase} callback {callback!r}: {e}", exc_info=True)
