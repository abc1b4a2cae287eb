"""Recent pull request list."""

from __future__ import annotations

import html
from typing import Iterable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel, QVBoxLayout, QWidget

MAX_VISIBLE_ENTRIES = 10


def recent_entries(urls: Iterable[str], limit: int = MAX_VISIBLE_ENTRIES) -> list[str]:
    """Newest first, at most ``limit`` entries."""
    items = [url for url in urls if url]
    return list(reversed(items))[:max(0, limit)]


class PullRequestHistoryView(QWidget):
    """Shows the most recent pull request links. Hidden while empty."""

    def __init__(self, parent: QWidget | None = None, limit: int = MAX_VISIBLE_ENTRIES) -> None:
        super().__init__(parent)
        self._limit = limit
        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(0, 8, 0, 0)
        self._layout.setSpacing(6)
        self._title = QLabel("Recent Pull Request History")
        self._title.setObjectName("SectionTitle")
        self._layout.addWidget(self._title)
        self._links: list[QLabel] = []
        self._urls: list[str] = []
        self.hide()

    def set_history(self, urls: Iterable[str]) -> None:
        for label in self._links:
            self._layout.removeWidget(label)
            label.deleteLater()
        self._links = []

        entries = recent_entries(urls, self._limit)
        self._urls = entries
        for url in entries:
            safe = html.escape(url, quote=True)
            link = QLabel(f'<a href="{safe}">{safe}</a>')
            link.setTextFormat(Qt.TextFormat.RichText)
            link.setOpenExternalLinks(True)
            link.setTextInteractionFlags(Qt.TextInteractionFlag.TextBrowserInteraction)
            self._layout.addWidget(link)
            self._links.append(link)
        self.setVisible(bool(entries))

    def displayed_urls(self) -> list[str]:
        return list(self._urls)
