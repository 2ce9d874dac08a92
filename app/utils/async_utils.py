# app/utils/async_utils.py
import traceback
from typing import Any, Callable
from PyQt6.QtCore import QObject, pyqtSignal, QRunnable


class WorkerSignals(QObject):
    """
    Signals of a Worker. QRunnable is not a QObject, so they live here.

    result   -> return value of the task
    error    -> (exception type, exception, formatted traceback)
    finished -> always emitted last
    """

    result = pyqtSignal(object)
    error = pyqtSignal(tuple)
    finished = pyqtSignal()


class Worker(QRunnable):
    """Runs `task(*args, **kwargs)` on a QThreadPool and reports back through signals."""

    def __init__(self, task: Callable[..., Any], *args: Any, **kwargs: Any):
        super().__init__()
        self._task = task
        self._args = args
        self._kwargs = kwargs
        self.signals = WorkerSignals()

    def run(self):
        try:
            outcome = self._task(*self._args, **self._kwargs)
        except Exception as exc:
            self.signals.error.emit((type(exc), exc, traceback.format_exc()))
        else:
            self.signals.result.emit(outcome)
        finally:
            self.signals.finished.emit()
