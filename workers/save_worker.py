import logging
from typing import Any, Callable

from PySide6 import QtCore

from core.exceptions import GymError

logger = logging.getLogger(__name__)


class WorkerSignals(QtCore.QObject):
    """
    Defines the signals available from a running worker thread.

    Attributes:
        finished (object): Emitted with the operation's return value when successful.
        error (str): Emitted with an error message if the operation fails.
    """
    finished = QtCore.Signal(object)
    error = QtCore.Signal(str)


class SaveWorker(QtCore.QRunnable):
    """
    Background worker that runs one store operation (save, delete, payment reset...).
    Keeps the GUI responsive while SQLite and photo files are written.
    """
    def __init__(self, fn: Callable[..., Any], *args: Any, **kwargs: Any):
        super().__init__()
        self.fn = fn
        self.args = args
        self.kwargs = kwargs
        self.signals = WorkerSignals()

    @QtCore.Slot()
    def run(self) -> None:
        try:
            result = self.fn(*self.args, **self.kwargs)
        except GymError as e:
            self.signals.error.emit(e.message)
            return
        except Exception as e:
            logger.exception("Background task %s failed", getattr(self.fn, "__name__", self.fn))
            self.signals.error.emit(str(e))
            return
        self.signals.finished.emit(result)
