"""Tests for the pull request workflow state machine."""

from __future__ import annotations

import pytest

from gardensync.core.pr_workflow import (
    GENERIC_FAILURE_MESSAGE,
    PullRequestRecord,
    PullRequestWorkflow,
    WorkflowState,
)
from gardensync.errors import ErrorCode, TransportError


class CountingIndicator:
    def __init__(self) -> None:
        self.active = False
        self.starts = 0
        self.stops = 0

    def start(self) -> None:
        self.starts += 1
        self.active = True

    def stop(self) -> None:
        self.stops += 1
        self.active = False


class RecordingLauncher:
    def __init__(self, error: Exception | None = None) -> None:
        self.submits = 0
        self.error = error

    def submit(self) -> None:
        self.submits += 1
        if self.error is not None:
            raise self.error


@pytest.fixture
def indicator():
    return CountingIndicator()


@pytest.fixture
def launcher():
    return RecordingLauncher()


@pytest.fixture
def workflow(qapp, indicator, launcher):
    return PullRequestWorkflow(indicator, launcher)


class TestTransitions:
    """State transitions of PullRequestWorkflow."""

    def test_starts_idle(self, workflow, indicator):
        assert workflow.state is WorkflowState.IDLE
        assert workflow.history == ()
        assert indicator.active is False

    def test_start_enters_loading(self, workflow, indicator, launcher):
        states = []
        workflow.state_changed.connect(states.append)

        assert workflow.start() is True

        assert workflow.state is WorkflowState.LOADING
        assert indicator.active is True
        assert launcher.submits == 1
        assert states == [WorkflowState.LOADING]

    def test_start_while_loading_is_ignored(self, workflow, indicator, launcher):
        workflow.start()
        assert workflow.start() is False
        assert launcher.submits == 1
        assert indicator.starts == 1
        assert workflow.state is WorkflowState.LOADING

    def test_empty_outcome_is_success_without_history(self, workflow, indicator):
        history_events = []
        workflow.history_changed.connect(history_events.append)
        workflow.start()

        workflow.on_complete("")

        assert workflow.state is WorkflowState.SUCCESS
        assert workflow.history == ()
        assert workflow.last_url is None
        assert indicator.active is False
        assert indicator.stops == 1
        assert history_events == []

    def test_reference_outcome_appends_one_record(self, workflow, indicator):
        history_events = []
        workflow.history_changed.connect(history_events.append)
        workflow.start()

        workflow.on_complete("https://github.com/gardener/mygarden/pull/7")

        assert workflow.state is WorkflowState.SUCCESS
        assert workflow.history == (PullRequestRecord("https://github.com/gardener/mygarden/pull/7"),)
        assert workflow.last_url == "https://github.com/gardener/mygarden/pull/7"
        assert indicator.active is False
        assert history_events == [["https://github.com/gardener/mygarden/pull/7"]]

    def test_failure_enters_error_with_generic_message(self, workflow, indicator):
        workflow.start()

        workflow.on_failure(TransportError(ErrorCode.NETWORK_AUTH_FAILED, details={"token": "ghp_secret"}))

        assert workflow.state is WorkflowState.ERROR
        assert workflow.error_message == GENERIC_FAILURE_MESSAGE
        assert "ghp_secret" not in workflow.error_message
        assert workflow.history == ()
        assert indicator.active is False

    def test_submit_raising_enters_error(self, qapp, indicator):
        workflow = PullRequestWorkflow(indicator, RecordingLauncher(error=RuntimeError("boom")))
        assert workflow.start() is True
        assert workflow.state is WorkflowState.ERROR
        assert indicator.active is False

    def test_without_launcher_start_is_rejected(self, qapp, indicator):
        workflow = PullRequestWorkflow(indicator)
        assert workflow.start() is False
        assert workflow.state is WorkflowState.IDLE
        assert indicator.starts == 0


class TestTerminalStates:
    """Terminal states are only left through start() or reset()."""

    def test_results_outside_loading_are_ignored(self, workflow, indicator):
        workflow.on_complete("https://github.com/x/y/pull/1")
        workflow.on_failure(RuntimeError("late"))
        assert workflow.state is WorkflowState.IDLE
        assert workflow.history == ()
        assert indicator.stops == 0

    def test_late_failure_after_success_is_ignored(self, workflow):
        workflow.start()
        workflow.on_complete("https://github.com/x/y/pull/1")
        workflow.on_failure(RuntimeError("late"))
        assert workflow.state is WorkflowState.SUCCESS
        assert workflow.error_message == ""

    def test_restart_from_error_and_success(self, workflow, launcher):
        workflow.start()
        workflow.on_failure(RuntimeError("x"))
        assert workflow.start() is True
        assert workflow.state is WorkflowState.LOADING
        assert workflow.error_message == ""
        workflow.on_complete("https://github.com/x/y/pull/2")
        assert workflow.start() is True
        assert launcher.submits == 3

    def test_history_preserves_insertion_order(self, qapp, indicator, launcher):
        workflow = PullRequestWorkflow(indicator, launcher, history=["https://github.com/x/y/pull/1"])
        for number in (2, 3):
            workflow.start()
            workflow.on_complete(f"https://github.com/x/y/pull/{number}")
        assert [record.url for record in workflow.history] == [
            "https://github.com/x/y/pull/1",
            "https://github.com/x/y/pull/2",
            "https://github.com/x/y/pull/3",
        ]

    def test_reset_only_outside_loading(self, workflow):
        workflow.start()
        assert workflow.reset() is False
        workflow.on_complete("")
        assert workflow.reset() is True
        assert workflow.state is WorkflowState.IDLE

    def test_teardown_stops_indicator_idempotently(self, workflow, indicator):
        workflow.start()
        workflow.teardown()
        workflow.on_complete("")
        assert indicator.active is False
        assert workflow.state is WorkflowState.SUCCESS
