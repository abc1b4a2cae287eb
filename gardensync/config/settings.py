"""Application settings via QSettings."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from PySide6.QtCore import QSettings

from gardensync.core.constants import BASE_MODES, DEFAULT_BASE_MODE
from gardensync.core.themes import ThemeDescriptor

logger = logging.getLogger("gardensync.settings")


class AppSettings:
    """Wraps QSettings for persistent plugin configuration.

    Every setter writes through immediately; ``persist`` flushes to disk.
    """

    def __init__(self, qsettings: QSettings | None = None) -> None:
        self._qs = qsettings if qsettings is not None else QSettings("GardenSync", "GardenSync")

    # -- github connection --

    @property
    def github_repo(self) -> str:
        return self._qs.value("github/repo", "", type=str)

    @github_repo.setter
    def github_repo(self, value: str) -> None:
        self._qs.setValue("github/repo", (value or "").strip())

    @property
    def github_user_name(self) -> str:
        return self._qs.value("github/user_name", "", type=str)

    @github_user_name.setter
    def github_user_name(self, value: str) -> None:
        self._qs.setValue("github/user_name", (value or "").strip())

    @property
    def github_token(self) -> str:
        return self._qs.value("github/token", "", type=str)

    @github_token.setter
    def github_token(self, value: str) -> None:
        self._qs.setValue("github/token", (value or "").strip())

    # -- site --

    @property
    def garden_base_url(self) -> str:
        return self._qs.value("site/base_url", "", type=str)

    @garden_base_url.setter
    def garden_base_url(self, value: str) -> None:
        self._qs.setValue("site/base_url", (value or "").strip())

    # -- appearance --

    @property
    def base_theme(self) -> str:
        raw = self._qs.value("appearance/base_theme", DEFAULT_BASE_MODE, type=str)
        mode = (raw or "").strip().lower()
        if mode in BASE_MODES:
            return mode
        return DEFAULT_BASE_MODE

    @base_theme.setter
    def base_theme(self, value: str) -> None:
        mode = (value or "").strip().lower()
        if mode not in BASE_MODES:
            raise ValueError(f"Unknown base theme {value!r}; expected one of {', '.join(BASE_MODES)}")
        self._qs.setValue("appearance/base_theme", mode)

    @property
    def theme(self) -> ThemeDescriptor | None:
        raw = self._qs.value("appearance/theme", "", type=str)
        return ThemeDescriptor.from_json(raw)

    @theme.setter
    def theme(self, value: ThemeDescriptor | None) -> None:
        self._qs.setValue("appearance/theme", value.to_json() if value is not None else "")

    # -- pull request history --

    @property
    def pr_history(self) -> list[str]:
        raw = self._qs.value("pull_requests/history", "", type=str)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except ValueError:
            return []
        if not isinstance(data, list):
            return []
        return [item for item in data if isinstance(item, str) and item]

    @pr_history.setter
    def pr_history(self, value: list[str]) -> None:
        cleaned = [item for item in value if isinstance(item, str) and item]
        self._qs.setValue("pull_requests/history", json.dumps(cleaned))

    # -- persistence --

    def persist(self) -> bool:
        """Flush pending writes. Best-effort: failures are logged, not raised."""
        self._qs.sync()
        status = self._qs.status()
        if status != QSettings.Status.NoError:
            logger.warning("settings flush failed status=%s file=%s", status, self._qs.fileName())
            return False
        return True

    # -- helpers --

    @property
    def app_data_dir(self) -> Path:
        path = self._app_data_dir()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @staticmethod
    def _app_data_dir() -> Path:
        import os
        base = Path(os.environ.get("APPDATA", Path.home() / ".config"))
        return base / "gardensync"
