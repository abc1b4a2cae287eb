"""Lifecycle of the "update site template" pull request."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Protocol

from PySide6.QtCore import QObject, Signal

logger = logging.getLogger("gardensync.pr")

GENERIC_FAILURE_MESSAGE = "Something went wrong. Try deleting the branch in GitHub."


class WorkflowState(Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class PullRequestRecord:
    url: str


class ProgressSignal(Protocol):
    def start(self) -> None: ...
    def stop(self) -> None: ...


class PullRequestLauncher(Protocol):
    """Starts PR creation and later reports back through the workflow.

    Implementations must call ``on_complete`` or ``on_failure`` on the
    workflow's thread.
    """

    def submit(self) -> None: ...


class PullRequestWorkflow(QObject):
    """Idle -> Loading -> Success | Error, restartable from any terminal state.

    The progress indicator runs exactly while the state is LOADING. Failure
    details are logged and replaced by a generic message for display.
    """

    state_changed = Signal(object)      # WorkflowState
    history_changed = Signal(list)      # list[str] of PR URLs

    def __init__(
        self,
        indicator: ProgressSignal,
        launcher: PullRequestLauncher | None = None,
        history: Iterable[str] = (),
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._indicator = indicator
        self._launcher = launcher
        self._state = WorkflowState.IDLE
        self._history: list[PullRequestRecord] = [PullRequestRecord(url) for url in history if url]
        self._last_url: str | None = None
        self._error_message = ""

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def history(self) -> tuple[PullRequestRecord, ...]:
        return tuple(self._history)

    @property
    def last_url(self) -> str | None:
        return self._last_url

    @property
    def error_message(self) -> str:
        return self._error_message

    def set_launcher(self, launcher: PullRequestLauncher | None) -> None:
        self._launcher = launcher

    def start(self) -> bool:
        """Begin a new PR request. Returns False when one is already running."""
        if self._state is WorkflowState.LOADING:
            logger.info("pull request already in progress; start ignored")
            return False
        if self._launcher is None:
            logger.warning("no pull request launcher configured")
            return False

        self._last_url = None
        self._error_message = ""
        self._set_state(WorkflowState.LOADING)
        self._indicator.start()
        try:
            self._launcher.submit()
        except Exception as exc:
            self.on_failure(exc)
        return True

    def on_complete(self, url: object = None) -> None:
        if self._state is not WorkflowState.LOADING:
            logger.debug("late pull request result ignored in state %s", self._state.value)
            return
        self._indicator.stop()
        pr_url = str(url).strip() if url else ""
        self._last_url = pr_url or None
        if pr_url:
            self._history.append(PullRequestRecord(pr_url))
            logger.info("pull request created url=%s", pr_url)
        else:
            logger.info("template already up to date; no pull request needed")
        self._set_state(WorkflowState.SUCCESS)
        if pr_url:
            self.history_changed.emit([record.url for record in self._history])

    def on_failure(self, error: object = None) -> None:
        if self._state is not WorkflowState.LOADING:
            logger.debug("late pull request failure ignored in state %s", self._state.value)
            return
        self._indicator.stop()
        self._error_message = GENERIC_FAILURE_MESSAGE
        if isinstance(error, BaseException):
            logger.warning("pull request creation failed: %s", type(error).__name__, exc_info=error)
        else:
            logger.warning("pull request creation failed")
        self._set_state(WorkflowState.ERROR)

    def reset(self) -> bool:
        """Return to IDLE. Not allowed while a request is running."""
        if self._state is WorkflowState.LOADING:
            return False
        self._last_url = None
        self._error_message = ""
        self._set_state(WorkflowState.IDLE)
        return True

    def teardown(self) -> None:
        self._indicator.stop()

    def _set_state(self, state: WorkflowState) -> None:
        if state is self._state:
            return
        self._state = state
        self.state_changed.emit(state)
