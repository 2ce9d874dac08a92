# app/core/signals.py
from PyQt6.QtCore import QObject, pyqtSignal


class GlobalSignals(QObject):
    """
    App-wide signals for code that has no view model to talk through,
    such as services and OS helpers. View models keep their own signals.
    """

    # message, level ('info' | 'success' | 'warning' | 'error')
    toast_requested = pyqtSignal(str, str)


global_signals = GlobalSignals()
