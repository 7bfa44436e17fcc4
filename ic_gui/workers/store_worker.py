"""QThread worker for calling the item store off the GUI thread."""

from __future__ import annotations

from typing import Any, Callable

from PySide6.QtCore import QObject, QThread, Signal


class StoreCallWorkerSignals(QObject):
    """Signals emitted by StoreCallWorker.

    Both carry the caller supplied ``context`` first so the receiving slot
    knows which request completed.
    """

    finished = Signal(object, object)  # (context, result)
    failed = Signal(object, str)  # (context, error message)


class StoreCallWorker(QObject):
    """Worker that runs one store call in a separate thread."""

    def __init__(
        self,
        call: Callable[..., Any],
        *args: Any,
        context: Any = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._call = call
        self._args = args
        self._context = context
        self._thread: QThread | None = None

        self.signals = StoreCallWorkerSignals()

    @property
    def context(self) -> Any:
        return self._context

    def start(self) -> None:
        """Start the worker in a new thread."""
        if self._thread is not None:
            return
        self._thread = QThread()
        self.moveToThread(self._thread)
        self._thread.started.connect(self._run)
        self._thread.start()

    def _run(self) -> None:
        """Execute the store call in the worker thread."""
        try:
            result = self._call(*self._args)
            self.signals.finished.emit(self._context, result)
        except Exception as exc:
            self.signals.failed.emit(self._context, str(exc))
        finally:
            self._cleanup_thread()

    def _cleanup_thread(self) -> None:
        """Stop the thread's event loop once the call has returned.

        The QThread object is kept until the worker itself is dropped; a
        running QThread must not be destroyed.
        """
        if self._thread is not None:
            self._thread.quit()
            if QThread.currentThread() is not self._thread:
                self._thread.wait()

    def is_running(self) -> bool:
        """Check if the worker is currently running."""
        return self._thread is not None and self._thread.isRunning()
