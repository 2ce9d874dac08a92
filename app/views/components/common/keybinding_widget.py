# app/views/components/common/keybinding_widget.py

from PyQt6.QtCore import pyqtSignal, Qt
from PyQt6.QtGui import QKeySequence
from PyQt6.QtWidgets import QHBoxLayout, QSizePolicy, QWidget

from qfluentwidgets import BodyLabel, CaptionLabel, PushButton

# ---------- constants ----------
ROW_MARGINS = (4, 0, 4, 0)
FIELD_WIDTH = 160
LISTENING_TEXT = "Press a key..."

# Keys that only modify another key
MODIFIER_KEYS = {
    Qt.Key.Key_Shift,
    Qt.Key.Key_Control,
    Qt.Key.Key_Alt,
    Qt.Key.Key_Meta,
    Qt.Key.Key_AltGr,
}


class KeyCaptureButton(PushButton):
    """
    A button that shows a key name. Clicking it listens for the next key:
    Escape cancels, Backspace restores the default key.
    """

    key_captured = pyqtSignal(str)

    def __init__(self, key: str, default_key: str, parent: QWidget | None = None):
        super().__init__(parent)
        self.default_key = default_key
        self._key = key
        self._listening = False
        self.setText(key)
        self.clicked.connect(self._start_listening)

    def key(self) -> str:
        return self._key

    def set_key(self, key: str):
        self._key = key
        self._listening = False
        self.setText(key)

    def _start_listening(self):
        self._listening = True
        self.setText(LISTENING_TEXT)
        self.setFocus()

    def keyPressEvent(self, event):
        if not self._listening:
            super().keyPressEvent(event)
            return

        key = event.key()
        if key in MODIFIER_KEYS:
            return
        if key == Qt.Key.Key_Escape:
            self.set_key(self._key)
            return
        if key == Qt.Key.Key_Backspace:
            new_key = self.default_key
        else:
            new_key = QKeySequence(event.keyCombination()).toString()

        self.set_key(new_key)
        self.key_captured.emit(new_key)

    def focusOutEvent(self, event):
        if self._listening:
            self.set_key(self._key)
        super().focusOutEvent(event)


class KeyBindingWidget(QWidget):
    """A row to display and rebind a single key binding: [label][stretch][key]."""

    key_changed = pyqtSignal(str)

    def __init__(self, label: str, key: str, default_key: str, parent: QWidget | None = None):
        super().__init__(parent)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Preferred)

        row = QHBoxLayout(self)
        row.setContentsMargins(*ROW_MARGINS)
        row.setSpacing(8)

        lbl = BodyLabel(f"{label}:", self)
        lbl.setSizePolicy(QSizePolicy.Policy.Minimum, QSizePolicy.Policy.Preferred)
        hint = CaptionLabel(f"Default: {default_key}. Backspace resets.", self)

        self.capture_button = KeyCaptureButton(key, default_key, self)
        self.capture_button.setFixedWidth(FIELD_WIDTH)

        row.addWidget(lbl)
        row.addWidget(hint)
        row.addStretch(1)
        row.addWidget(self.capture_button, 0, Qt.AlignmentFlag.AlignRight)

        self.capture_button.key_captured.connect(self.key_changed)

    def set_key(self, key: str):
        self.capture_button.set_key(key)
