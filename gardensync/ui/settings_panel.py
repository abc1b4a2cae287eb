"""Settings panel for the GitHub connection, site theme and template updates."""

from __future__ import annotations

import html
from typing import TYPE_CHECKING

from PySide6.QtCore import QTimer, Qt
from PySide6.QtWidgets import (
    QComboBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from gardensync.core.constants import BASE_MODES
from gardensync.core.pr_workflow import WorkflowState
from gardensync.core.themes import ThemeCatalog
from gardensync.ui.commands import (
    ApplyTheme,
    CreatePullRequest,
    SelectBaseTheme,
    SelectTheme,
    SetGardenBaseUrl,
    SetGitHubRepo,
    SetGitHubToken,
    SetGitHubUserName,
)
from gardensync.ui.widgets.pr_history_view import PullRequestHistoryView

if TYPE_CHECKING:
    from gardensync.ui.controller import SettingsController

SETUP_GUIDE_URL = "https://github.com/oleeskild/Obsidian-Digital-Garden"
TOKEN_URL = "https://github.com/settings/tokens/new?scopes=repo"
NOTICE_TIMEOUT_MS = 5000

PR_SUCCESS_MESSAGE = "Done! Approve your PR to make the changes go live."
PR_UP_TO_DATE_MESSAGE = "You already have the latest template. No need to create a PR."


class SettingsPanel(QWidget):
    """Edits settings through :class:`SettingsController` commands."""

    def __init__(self, controller: SettingsController, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._controller = controller
        self.setObjectName("SettingsPanel")
        self.setMinimumWidth(520)
        self._setup_ui()
        self._load()
        self._connect_controller()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)

        intro = QLabel(
            "Remember to read the setup guide if you haven't already. "
            f'It can be found <a href="{SETUP_GUIDE_URL}">here.</a>'
        )
        intro.setOpenExternalLinks(True)
        intro.setWordWrap(True)
        layout.addWidget(intro)

        form = QFormLayout()
        self._repo_edit = QLineEdit()
        self._repo_edit.setPlaceholderText("mydigitalgarden")
        self._user_edit = QLineEdit()
        self._user_edit.setPlaceholderText("myusername")
        self._token_edit = QLineEdit()
        self._token_edit.setPlaceholderText("Secret Token")
        self._token_edit.setEchoMode(QLineEdit.EchoMode.Password)
        self._base_url_edit = QLineEdit()
        self._base_url_edit.setPlaceholderText("my-digital-garden.netlify.app")
        self._base_url_edit.setToolTip(
            'Used for the "Copy Note URL" command. Leave blank to guess it from the repo name.'
        )

        token_hint = QLabel(f'A GitHub token with repo permissions. Generate one <a href="{TOKEN_URL}">here!</a>')
        token_hint.setObjectName("StatusDetail")
        token_hint.setOpenExternalLinks(True)

        self._base_theme_combo = QComboBox()
        for mode in BASE_MODES:
            self._base_theme_combo.addItem(mode.capitalize(), mode)
        self._theme_combo = QComboBox()
        self._theme_combo.setMinimumContentsLength(24)
        self._theme_combo.addItem("Loading themes...", "")
        self._theme_combo.setEnabled(False)
        self._apply_btn = QPushButton("Apply")

        form.addRow("GitHub repo name:", self._repo_edit)
        form.addRow("GitHub Username:", self._user_edit)
        form.addRow("GitHub token:", self._token_edit)
        form.addRow("", token_hint)
        form.addRow("Base URL:", self._base_url_edit)
        form.addRow("Base theme:", self._base_theme_combo)
        form.addRow("Theme:", self._theme_combo)
        form.addRow("", self._apply_btn)
        layout.addLayout(form)

        self._update_row = QWidget()
        update_layout = QHBoxLayout(self._update_row)
        update_layout.setContentsMargins(0, 0, 0, 0)
        update_desc = QLabel(
            "Update site to latest template. This creates a pull request with the latest "
            "template changes and publishes nothing before you approve it."
        )
        update_desc.setWordWrap(True)
        self._create_pr_btn = QPushButton("Create PR")
        update_layout.addWidget(update_desc, 1)
        update_layout.addWidget(self._create_pr_btn)
        self._update_row.setVisible(self._controller.can_create_pull_requests)
        layout.addWidget(self._update_row)

        self._progress_desc = QLabel("Creating PR. This should take less than 1 minute")
        self._progress_frame = QLabel("")
        self._progress_desc.hide()
        self._progress_frame.hide()
        self._result_label = QLabel("")
        self._result_label.setWordWrap(True)
        self._result_label.setOpenExternalLinks(True)
        self._result_label.hide()
        layout.addWidget(self._progress_desc)
        layout.addWidget(self._progress_frame)
        layout.addWidget(self._result_label)

        self._history_view = PullRequestHistoryView()
        layout.addWidget(self._history_view)

        self._notice_label = QLabel("")
        self._notice_label.setObjectName("StatusMessage")
        self._notice_label.setWordWrap(True)
        layout.addWidget(self._notice_label)
        layout.addStretch(1)

        self._notice_timer = QTimer(self)
        self._notice_timer.setSingleShot(True)
        self._notice_timer.timeout.connect(self._notice_label.clear)

    def _load(self) -> None:
        settings = self._controller.settings
        self._repo_edit.setText(settings.github_repo)
        self._user_edit.setText(settings.github_user_name)
        self._token_edit.setText(settings.github_token)
        self._base_url_edit.setText(settings.garden_base_url)
        index = self._base_theme_combo.findData(settings.base_theme)
        self._base_theme_combo.setCurrentIndex(max(0, index))
        self._history_view.set_history(record.url for record in self._controller.workflow.history)

    def _connect_controller(self) -> None:
        controller = self._controller
        self._repo_edit.editingFinished.connect(
            lambda: controller.dispatch(SetGitHubRepo(self._repo_edit.text()))
        )
        self._user_edit.editingFinished.connect(
            lambda: controller.dispatch(SetGitHubUserName(self._user_edit.text()))
        )
        self._token_edit.editingFinished.connect(
            lambda: controller.dispatch(SetGitHubToken(self._token_edit.text()))
        )
        self._base_url_edit.editingFinished.connect(
            lambda: controller.dispatch(SetGardenBaseUrl(self._base_url_edit.text()))
        )
        self._base_theme_combo.currentIndexChanged.connect(self._on_base_theme_changed)
        self._theme_combo.currentIndexChanged.connect(self._on_theme_changed)
        self._apply_btn.clicked.connect(lambda: controller.dispatch(ApplyTheme()))
        self._create_pr_btn.clicked.connect(lambda: controller.dispatch(CreatePullRequest()))

        controller.notice.connect(self.show_notice)
        controller.catalog_loaded.connect(self._populate_themes)
        controller.indicator.frame_changed.connect(self._progress_frame.setText)
        controller.workflow.state_changed.connect(self._on_workflow_state)
        controller.workflow.history_changed.connect(self._history_view.set_history)

    def show_notice(self, text: str, timeout_ms: int = NOTICE_TIMEOUT_MS) -> None:
        self._notice_label.setText(text)
        self._notice_timer.stop()
        if timeout_ms > 0:
            self._notice_timer.start(timeout_ms)

    def notice_text(self) -> str:
        return self._notice_label.text()

    def closeEvent(self, event) -> None:
        self._notice_timer.stop()
        self._controller.shutdown()
        super().closeEvent(event)

    def _on_base_theme_changed(self, _index: int) -> None:
        mode = self._base_theme_combo.currentData()
        if isinstance(mode, str) and mode:
            self._controller.dispatch(SelectBaseTheme(mode))

    def _on_theme_changed(self, _index: int) -> None:
        theme_id = self._theme_combo.currentData()
        if isinstance(theme_id, str) and theme_id:
            self._controller.dispatch(SelectTheme(theme_id))

    def _populate_themes(self, catalog: ThemeCatalog) -> None:
        current = self._controller.settings.theme
        self._theme_combo.blockSignals(True)
        try:
            self._theme_combo.clear()
            self._theme_combo.addItem("Select a theme", "")
            for theme in catalog.list_themes():
                self._theme_combo.addItem(theme.name, theme.theme_id)
                self._theme_combo.setItemData(
                    self._theme_combo.count() - 1,
                    f"{theme.repo} ({', '.join(theme.modes)})",
                    Qt.ItemDataRole.ToolTipRole,
                )
            index = self._theme_combo.findData(current.theme_id) if current is not None else 0
            if index < 0:
                # The stored theme stays selectable so Apply never commits a hidden choice.
                self._theme_combo.addItem(f"{current.name} (not in theme list)", current.theme_id)
                index = self._theme_combo.count() - 1
                self.show_notice(f"{current.name} is no longer in the community theme list.")
            self._theme_combo.setCurrentIndex(index)
        finally:
            self._theme_combo.blockSignals(False)
        self._theme_combo.setEnabled(len(catalog) > 0)

    def _on_workflow_state(self, state: WorkflowState) -> None:
        loading = state is WorkflowState.LOADING
        self._progress_desc.setVisible(loading)
        self._progress_frame.setVisible(loading)
        self._create_pr_btn.setEnabled(not loading)

        workflow = self._controller.workflow
        if state is WorkflowState.SUCCESS:
            url = workflow.last_url
            if url:
                safe = html.escape(url, quote=True)
                self._result_label.setText(f'{PR_SUCCESS_MESSAGE}<br><a href="{safe}">{safe}</a>')
            else:
                self._result_label.setText(PR_UP_TO_DATE_MESSAGE)
            self._result_label.show()
        elif state is WorkflowState.ERROR:
            self._result_label.setText(workflow.error_message)
            self._result_label.show()
        else:
            self._result_label.clear()
            self._result_label.hide()
