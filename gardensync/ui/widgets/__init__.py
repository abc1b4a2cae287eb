"""Reusable widgets for the settings panel."""

from gardensync.ui.widgets.loading_indicator import LOADING_FRAMES, LoadingIndicator
from gardensync.ui.widgets.pr_history_view import PullRequestHistoryView

__all__ = [
    "LOADING_FRAMES",
    "LoadingIndicator",
    "PullRequestHistoryView",
]
