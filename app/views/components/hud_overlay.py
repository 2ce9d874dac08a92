# app/views/components/hud_overlay.py

from PyQt6.QtCore import Qt, QRect
from PyQt6.QtGui import QColor, QPainter
from PyQt6.QtWidgets import QWidget

from app.core.constants import (
    TOAST_BACKGROUND_ARGB,
    TOAST_PADDING_X,
    TOAST_PADDING_Y,
    TOAST_TEXT_ARGB,
    TOAST_TOP_MARGIN,
)
from app.services.hud_toast_service import HudToast


class HudOverlay(QWidget):
    """
    A small, top-center, semi-transparent message box drawn over its parent.
    `on_frame()` is the per-frame render hook; it only repaints while a
    message is showing or has just expired.
    """

    def __init__(self, toast: HudToast, parent: QWidget | None = None):
        super().__init__(parent)
        self.toast = toast
        self._last_message: str | None = None

        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        self.setAttribute(Qt.WidgetAttribute.WA_NoSystemBackground)
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)
        if parent is not None:
            self.setGeometry(parent.rect())
        self.raise_()

    def on_frame(self):
        message = self.toast.current()
        if message is None and self._last_message is None:
            return
        self._last_message = message
        if self.parentWidget() is not None and self.geometry() != self.parentWidget().rect():
            self.setGeometry(self.parentWidget().rect())
        self.raise_()
        self.update()

    def paintEvent(self, event):
        message = self._last_message
        if not message:
            return

        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        metrics = painter.fontMetrics()
        text_w = metrics.horizontalAdvance(message)
        w = text_w + TOAST_PADDING_X * 2
        h = metrics.height() + TOAST_PADDING_Y * 2
        x = round(self.width() / 2 - w / 2)
        y = TOAST_TOP_MARGIN

        box = QRect(x, y, w, h)
        painter.fillRect(box, QColor.fromRgba(TOAST_BACKGROUND_ARGB))

        painter.setPen(QColor.fromRgba(TOAST_TEXT_ARGB))
        painter.drawText(box, Qt.AlignmentFlag.AlignCenter, message)
        painter.end()
