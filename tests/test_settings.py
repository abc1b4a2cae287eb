"""Tests for AppSettings persistence."""

from __future__ import annotations

from pathlib import Path

import pytest
from PySide6.QtCore import QSettings

from gardensync.config.settings import AppSettings
from gardensync.core.themes import ThemeDescriptor


def _theme() -> ThemeDescriptor:
    return ThemeDescriptor.from_catalog_entry(
        {"name": "Things", "repo": "colineckert/obsidian-things", "branch": "main", "modes": ["dark", "light"]}
    )


def test_defaults(settings):
    assert settings.github_repo == ""
    assert settings.github_user_name == ""
    assert settings.github_token == ""
    assert settings.garden_base_url == ""
    assert settings.base_theme == "dark"
    assert settings.theme is None
    assert settings.pr_history == []


def test_text_fields_are_stripped(settings):
    settings.github_repo = "  mygarden "
    settings.github_user_name = "gardener\n"
    settings.github_token = " ghp_token "
    settings.garden_base_url = "my-digital-garden.netlify.app "
    assert settings.github_repo == "mygarden"
    assert settings.github_user_name == "gardener"
    assert settings.github_token == "ghp_token"
    assert settings.garden_base_url == "my-digital-garden.netlify.app"


def test_base_theme_rejects_unknown_mode(settings):
    settings.base_theme = "Light"
    assert settings.base_theme == "light"
    with pytest.raises(ValueError):
        settings.base_theme = "sepia"
    assert settings.base_theme == "light"


def test_theme_round_trip_and_clear(settings):
    settings.theme = _theme()
    assert settings.theme == _theme()
    settings.theme = None
    assert settings.theme is None


def test_malformed_stored_theme_reads_as_none(settings):
    settings._qs.setValue("appearance/theme", '{"name": "half')
    assert settings.theme is None


def test_pr_history_single_and_many(settings):
    settings.pr_history = ["https://github.com/x/y/pull/1"]
    assert settings.pr_history == ["https://github.com/x/y/pull/1"]
    settings.pr_history = ["https://github.com/x/y/pull/1", "", "https://github.com/x/y/pull/2"]
    assert settings.pr_history == ["https://github.com/x/y/pull/1", "https://github.com/x/y/pull/2"]


def test_persist_survives_reload(tmp_path: Path):
    path = str(tmp_path / "persist.ini")
    first = AppSettings(QSettings(path, QSettings.Format.IniFormat))
    first.github_repo = "mygarden"
    first.theme = _theme()
    first.pr_history = ["https://github.com/x/y/pull/1"]
    assert first.persist() is True

    second = AppSettings(QSettings(path, QSettings.Format.IniFormat))
    assert second.github_repo == "mygarden"
    assert second.theme == _theme()
    assert second.pr_history == ["https://github.com/x/y/pull/1"]


def test_app_data_dir_uses_appdata(tmp_path: Path, monkeypatch, settings):
    monkeypatch.setenv("APPDATA", str(tmp_path))
    assert settings.app_data_dir == tmp_path / "gardensync"
    assert settings.app_data_dir.is_dir()
