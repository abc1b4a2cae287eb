"""Worker that delegates pull request creation to the template updater."""

from __future__ import annotations

from typing import Protocol

from gardensync.errors import format_error_for_user
from gardensync.workers.base_worker import BaseWorker


class PullRequestCreator(Protocol):
    """Creates the template update pull request.

    Returns the PR URL, or None/"" when the site already has the latest
    template and there is nothing to propose.
    """

    def create_pull_request(self) -> str | None: ...


class PullRequestWorker(BaseWorker):
    """Calls a :class:`PullRequestCreator` in a background thread."""

    def __init__(self, creator: PullRequestCreator) -> None:
        super().__init__()
        self._creator = creator

    def run(self) -> None:
        self.started.emit()
        try:
            url = self._creator.create_pull_request()
            self.finished.emit(url or "")
        except Exception as e:
            self.failed.emit(e)
            self.error.emit(format_error_for_user(e))
