"""QApplication bootstrap."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
import sys

from PySide6.QtWidgets import QApplication

from gardensync import __version__
from gardensync.config.settings import AppSettings
from gardensync.runtime_paths import log_dir
from gardensync.ui.controller import SettingsController
from gardensync.ui.settings_panel import SettingsPanel
from gardensync.workers.pull_request_worker import PullRequestCreator


def configure_logging(settings: AppSettings) -> logging.Logger:
    """Attach a rotating file handler to the `gardensync` logger tree once."""
    logger = logging.getLogger("gardensync")
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    handler = RotatingFileHandler(
        log_dir(settings.app_data_dir) / "gardensync.log",
        maxBytes=512_000,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def run_app(pr_creator: PullRequestCreator | None = None) -> int:
    """Initialize and run the settings panel.

    ``pr_creator`` is the template updater that builds the pull request; the
    Create PR section is hidden without one.
    """
    app = QApplication(sys.argv)
    app.setStyle("Fusion")
    app.setApplicationName("GardenSync")
    app.setOrganizationName("GardenSync")
    settings = AppSettings()
    logger = configure_logging(settings)
    logger.info("startup version=%s data_dir=%s", __version__, settings.app_data_dir)

    controller = SettingsController(settings, pr_creator=pr_creator)
    panel = SettingsPanel(controller)
    panel.setWindowTitle("Digital Garden Settings")
    panel.show()
    controller.load_catalog()

    exit_code = app.exec()
    return exit_code
