"""Commit the selected theme to the site repository's `.env` file."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from gardensync.core.constants import ENV_FILE_PATH
from gardensync.core.env_payload import build_env_payload
from gardensync.core.remote_store import RemoteConfigStore
from gardensync.core.theme_validation import validate_theme_selection
from gardensync.core.themes import ThemeDescriptor
from gardensync.errors import ConfigurationError, RemoteFileNotFound

logger = logging.getLogger("gardensync.apply")


@dataclass(frozen=True, slots=True)
class ApplyResult:
    created: bool
    sha: str
    payload: str


class ThemeApplier:
    """Read-modify-write of the theme settings file."""

    def __init__(self, store: RemoteConfigStore, owner: str, repo: str,
                 path: str = ENV_FILE_PATH) -> None:
        self._store = store
        self._owner = (owner or "").strip()
        self._repo = (repo or "").strip()
        self._path = path

    def apply(self, theme: ThemeDescriptor | None, base_mode: str) -> ApplyResult:
        mode = validate_theme_selection(theme, base_mode)
        if not self._owner or not self._repo:
            raise ConfigurationError()

        payload = build_env_payload(theme.css_url, mode)
        try:
            current = self._store.read_file(self._owner, self._repo, self._path)
        except RemoteFileNotFound:
            current = None

        sha = self._store.write_file(
            self._owner,
            self._repo,
            self._path,
            payload,
            sha=current.sha if current is not None else None,
        )
        logger.info("theme applied theme=%s mode=%s created=%s", theme.theme_id, mode, current is None)
        return ApplyResult(created=current is None, sha=sha, payload=payload)
