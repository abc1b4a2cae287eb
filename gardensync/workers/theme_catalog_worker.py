"""Worker for downloading the community theme list."""

from __future__ import annotations

from gardensync.core.constants import COMMUNITY_THEMES_URL
from gardensync.core.themes import fetch_theme_catalog
from gardensync.errors import format_error_for_user
from gardensync.workers.base_worker import BaseWorker


class ThemeCatalogWorker(BaseWorker):
    """Fetches the theme catalog in a background thread."""

    def __init__(self, url: str = COMMUNITY_THEMES_URL, session=None) -> None:
        super().__init__()
        self._url = url
        self._session = session

    def run(self) -> None:
        self.started.emit()
        try:
            catalog = fetch_theme_catalog(self._session, url=self._url)
        except Exception as e:
            self.failed.emit(e)
            self.error.emit(format_error_for_user(e))
            return
        if self._is_cancelled:
            self.cancelled.emit()
        else:
            self.finished.emit(catalog)
