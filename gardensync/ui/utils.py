"""Common utilities for UI components."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QObject, QThread, Qt, SignalInstance

from gardensync.workers.base_worker import BaseWorker

WorkerRunner = Callable[..., None]


def safe_disconnect(signal: SignalInstance, slot: Optional[Callable] = None) -> bool:
    """Safely disconnect a signal from a slot.

    Returns:
        True if disconnection succeeded or was unnecessary, False if it failed.
    """
    try:
        if slot is not None:
            signal.disconnect(slot)
        else:
            signal.disconnect()
        return True
    except (RuntimeError, TypeError):
        # Signal/slot already disconnected or invalid
        return False


def safe_disconnect_multiple(
    connections: list[tuple[SignalInstance, Optional[Callable]]]
) -> None:
    """Safely disconnect multiple signal/slot pairs."""
    for signal, slot in connections:
        safe_disconnect(signal, slot)


class ThreadedWorkerRunner(QObject):
    """Runs workers on their own QThread and keeps them alive until done.

    Usage:
        runner = ThreadedWorkerRunner(parent)
        runner(worker, on_finished=self._on_done, on_error=self._on_error)

    Callbacks should be bound methods of QObjects living on the GUI thread so
    the queued connections deliver them there.
    """

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._active: dict[QThread, BaseWorker] = {}

    def __call__(
        self,
        worker: BaseWorker,
        *,
        on_finished: Callable[[object], None],
        on_error: Callable[[str], None] | None = None,
        on_failed: Callable[[object], None] | None = None,
    ) -> None:
        thread = QThread()
        worker.moveToThread(thread)
        thread.started.connect(worker.run)
        worker.finished.connect(on_finished, Qt.ConnectionType.QueuedConnection)
        if on_error is not None:
            worker.error.connect(on_error, Qt.ConnectionType.QueuedConnection)
        if on_failed is not None:
            worker.failed.connect(on_failed, Qt.ConnectionType.QueuedConnection)
        worker.finished.connect(thread.quit)
        worker.error.connect(thread.quit)
        worker.cancelled.connect(thread.quit)
        thread.finished.connect(self._on_thread_finished)
        self._active[thread] = worker
        thread.start()

    @property
    def active_count(self) -> int:
        return len(self._active)

    def cancel_all(self) -> None:
        for worker in self._active.values():
            worker.cancel()

    def wait_all(self, timeout_ms: int = 3000) -> None:
        for thread in list(self._active):
            if thread.isRunning():
                thread.quit()
                thread.wait(timeout_ms)

    def _on_thread_finished(self) -> None:
        thread = self.sender()
        if isinstance(thread, QThread):
            self._cleanup(thread)

    def _cleanup(self, thread: QThread) -> None:
        worker = self._active.pop(thread, None)
        if worker is not None:
            safe_disconnect_multiple([
                (worker.finished, None),
                (worker.error, None),
                (worker.failed, None),
                (worker.cancelled, None),
            ])
            worker.deleteLater()
        thread.deleteLater()
