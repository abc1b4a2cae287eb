"""Settings panel controller: turns panel commands into settings and remote effects."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from PySide6.QtCore import QObject, Signal

from gardensync.core.pr_workflow import PullRequestWorkflow
from gardensync.core.remote_store import RemoteConfigStore
from gardensync.core.theme_apply import ApplyResult, ThemeApplier
from gardensync.core.theme_validation import validate_theme_selection
from gardensync.core.themes import ThemeCatalog, ThemeDescriptor
from gardensync.errors import ConfigurationError, ValidationError
from gardensync.ui.commands import (
    FIELD_ATTRIBUTES,
    ApplyTheme,
    Command,
    CreatePullRequest,
    SelectBaseTheme,
    SelectTheme,
)
from gardensync.ui.utils import ThreadedWorkerRunner, WorkerRunner
from gardensync.ui.widgets.loading_indicator import LoadingIndicator
from gardensync.workers.apply_theme_worker import ApplyThemeWorker
from gardensync.workers.pull_request_worker import PullRequestCreator, PullRequestWorker
from gardensync.workers.theme_catalog_worker import ThemeCatalogWorker

if TYPE_CHECKING:
    from gardensync.config.settings import AppSettings

logger = logging.getLogger("gardensync.controller")

StoreFactory = Callable[["AppSettings"], RemoteConfigStore]

APPLY_SUCCESS_MESSAGE = "Successfully applied theme"


def _default_store_factory(settings: AppSettings) -> RemoteConfigStore:
    return RemoteConfigStore(settings.github_token)


class SettingsController(QObject):
    """Single writer for :class:`AppSettings` on behalf of the settings panel."""

    notice = Signal(str)
    catalog_loaded = Signal(object)     # ThemeCatalog
    apply_finished = Signal(bool, str)  # ok, message

    def __init__(
        self,
        settings: AppSettings,
        *,
        pr_creator: PullRequestCreator | None = None,
        store_factory: StoreFactory = _default_store_factory,
        runner: WorkerRunner | None = None,
        indicator: LoadingIndicator | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._settings = settings
        self._pr_creator = pr_creator
        self._store_factory = store_factory
        self._runner = runner if runner is not None else ThreadedWorkerRunner(self)
        self._catalog = ThemeCatalog()
        self._delisted_theme: ThemeDescriptor | None = None
        self._indicator = indicator if indicator is not None else LoadingIndicator(parent=self)
        self._workflow = PullRequestWorkflow(
            self._indicator,
            launcher=self if pr_creator is not None else None,
            history=settings.pr_history,
            parent=self,
        )
        self._workflow.history_changed.connect(self._persist_history)
        self._handlers: dict[type, Callable[[Command], None]] = {
            SelectBaseTheme: self._select_base_theme,
            SelectTheme: self._select_theme,
            ApplyTheme: self._apply_theme,
            CreatePullRequest: self._create_pull_request,
        }
        for command_type in FIELD_ATTRIBUTES:
            self._handlers[command_type] = self._set_field

    @property
    def settings(self) -> AppSettings:
        return self._settings

    @property
    def workflow(self) -> PullRequestWorkflow:
        return self._workflow

    @property
    def indicator(self) -> LoadingIndicator:
        return self._indicator

    @property
    def catalog(self) -> ThemeCatalog:
        return self._catalog

    @property
    def can_create_pull_requests(self) -> bool:
        return self._pr_creator is not None

    def dispatch(self, command: Command) -> None:
        handler = self._handlers.get(type(command))
        if handler is None:
            raise TypeError(f"Unsupported settings command: {type(command).__name__}")
        handler(command)

    def load_catalog(self) -> None:
        worker = ThemeCatalogWorker()
        self._runner(worker, on_finished=self._on_catalog_loaded, on_error=self._on_catalog_error)

    def set_catalog(self, catalog: ThemeCatalog) -> None:
        self._catalog = catalog
        stored = self._settings.theme
        if stored is not None and stored.theme_id not in catalog:
            logger.info("stored theme %s is not in the catalog", stored.theme_id)
            self._delisted_theme = stored
        else:
            self._delisted_theme = None
        self.catalog_loaded.emit(catalog)

    def submit(self) -> None:
        """Launcher hook for the pull request workflow."""
        if self._pr_creator is None:
            raise RuntimeError("No pull request creator configured")
        worker = PullRequestWorker(self._pr_creator)
        self._runner(
            worker,
            on_finished=self._workflow.on_complete,
            on_failed=self._workflow.on_failure,
        )

    def shutdown(self) -> None:
        self._workflow.teardown()
        if isinstance(self._runner, ThreadedWorkerRunner):
            self._runner.cancel_all()
            self._runner.wait_all()

    # -- command handlers --

    def _set_field(self, command: Command) -> None:
        attribute = FIELD_ATTRIBUTES[type(command)]
        setattr(self._settings, attribute, command.value)
        self._settings.persist()

    def _select_base_theme(self, command: SelectBaseTheme) -> None:
        try:
            self._settings.base_theme = command.mode
        except ValueError:
            self.notice.emit(f"Unknown base theme: {command.mode}")
            return
        self._settings.persist()

    def _select_theme(self, command: SelectTheme) -> None:
        descriptor = self._catalog.get(command.theme_id)
        delisted = self._delisted_theme
        if descriptor is None and delisted is not None and delisted.theme_id == command.theme_id:
            descriptor = delisted
        if descriptor is None:
            self.notice.emit(f"Unknown theme: {command.theme_id}")
            return
        self._settings.theme = descriptor
        self._settings.persist()

    def _apply_theme(self, _command: ApplyTheme) -> None:
        theme = self._settings.theme
        base_mode = self._settings.base_theme
        try:
            base_mode = validate_theme_selection(theme, base_mode)
        except ValidationError as exc:
            self.notice.emit(exc.message)
            return
        owner = self._settings.github_user_name
        repo = self._settings.github_repo
        if not owner or not repo:
            self.notice.emit(ConfigurationError().message)
            return

        applier = ThemeApplier(self._store_factory(self._settings), owner, repo)
        worker = ApplyThemeWorker(applier, theme, base_mode)
        logger.info("applying theme=%s mode=%s repo=%s/%s", theme.theme_id, base_mode, owner, repo)
        self._runner(worker, on_finished=self._on_apply_done, on_error=self._on_apply_error)

    def _create_pull_request(self, _command: CreatePullRequest) -> None:
        if not self._workflow.start():
            logger.debug("create pull request ignored in state %s", self._workflow.state.value)

    # -- worker results --

    def _on_apply_done(self, result: object) -> None:
        if isinstance(result, ApplyResult):
            logger.info("theme apply finished created=%s", result.created)
        self.apply_finished.emit(True, APPLY_SUCCESS_MESSAGE)
        self.notice.emit(APPLY_SUCCESS_MESSAGE)

    def _on_apply_error(self, message: str) -> None:
        logger.warning("theme apply failed")
        self.apply_finished.emit(False, message)
        self.notice.emit(message)

    def _on_catalog_loaded(self, catalog: object) -> None:
        if isinstance(catalog, ThemeCatalog):
            self.set_catalog(catalog)

    def _on_catalog_error(self, message: str) -> None:
        logger.warning("theme catalog fetch failed")
        self.notice.emit(message)

    def _persist_history(self, urls: list) -> None:
        self._settings.pr_history = [str(url) for url in urls]
        self._settings.persist()
