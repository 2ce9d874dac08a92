# app/utils/ui_utils.py
from PyQt6.QtWidgets import QWidget

from qfluentwidgets import InfoBar, InfoBarPosition, Dialog

# level -> (InfoBar factory, minimum duration in ms)
_TOAST_STYLES = {
    "info": (InfoBar.info, 0),
    "success": (InfoBar.success, 0),
    "warning": (InfoBar.warning, 5000),
    "error": (InfoBar.error, 5000),
}


class UiUtils:
    """Small helpers around qfluentwidgets dialogs and InfoBars."""

    @staticmethod
    def show_confirm_dialog(
        parent: QWidget, title: str, content: str, yes_text: str, no_text: str
    ) -> bool:
        """Modal yes/no question. Closing the dialog counts as no."""
        dialog = Dialog(title, content, parent)
        dialog.yesButton.setText(yes_text or "OK")
        dialog.cancelButton.setText(no_text or "Cancel")
        return bool(dialog.exec())

    @staticmethod
    def show_toast(
        parent: QWidget,
        message: str,
        level: str = "info",
        title: str | None = None,
        duration: int = 3000,
        position: InfoBarPosition = InfoBarPosition.TOP_RIGHT,
    ):
        """
        Shows a non-blocking InfoBar over `parent`.

        `level` is one of info, success, warning, error; anything else is shown
        as info. Warnings and errors stay on screen for at least 5 seconds.
        """
        key = level.lower()
        factory, min_duration = _TOAST_STYLES.get(key, _TOAST_STYLES["info"])
        factory(
            title if title is not None else key.capitalize(),
            message,
            duration=max(duration, min_duration),
            position=position,
            parent=parent,
        )
