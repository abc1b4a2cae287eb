"""Worker for committing the selected theme to the site repository."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gardensync.errors import format_error_for_user
from gardensync.workers.base_worker import BaseWorker

if TYPE_CHECKING:
    from gardensync.core.theme_apply import ThemeApplier
    from gardensync.core.themes import ThemeDescriptor


class ApplyThemeWorker(BaseWorker):
    """Runs one read-modify-write of the `.env` file in a background thread."""

    def __init__(self, applier: ThemeApplier, theme: ThemeDescriptor, base_mode: str) -> None:
        super().__init__()
        self._applier = applier
        self._theme = theme
        self._base_mode = base_mode

    def run(self) -> None:
        self.started.emit()
        try:
            result = self._applier.apply(self._theme, self._base_mode)
            self.finished.emit(result)
        except Exception as e:
            self.failed.emit(e)
            self.error.emit(format_error_for_user(e))
