"""Animated "Loading..." text driven by a QTimer."""

from __future__ import annotations

from PySide6.QtCore import QObject, QTimer, Signal

LOADING_FRAMES: tuple[str, ...] = ("Loading", "Loading.", "Loading..", "Loading...")
TICK_INTERVAL_MS = 400


class LoadingIndicator(QObject):
    """Cycles through ``LOADING_FRAMES`` while running.

    ``start`` and ``stop`` are both idempotent; there is never more than one
    timer.
    """

    frame_changed = Signal(str)

    def __init__(
        self,
        frames: tuple[str, ...] = LOADING_FRAMES,
        interval_ms: int = TICK_INTERVAL_MS,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        if not frames:
            raise ValueError("LoadingIndicator needs at least one frame")
        self._frames = frames
        self._index = 0
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._advance)

    @property
    def is_active(self) -> bool:
        return self._timer.isActive()

    @property
    def current_frame(self) -> str:
        return self._frames[self._index]

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    def start(self) -> None:
        if self._timer.isActive():
            return
        self._index = 0
        self._timer.start()
        self.frame_changed.emit(self.current_frame)

    def stop(self) -> None:
        if self._timer.isActive():
            self._timer.stop()

    def _advance(self) -> None:
        self._index = (self._index + 1) % len(self._frames)
        self.frame_changed.emit(self.current_frame)
