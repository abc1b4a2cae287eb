"""Tests for theme descriptors and the community theme catalog."""

from __future__ import annotations

import pytest

from conftest import FakeResponse, FakeSession
from gardensync.core.themes import (
    ThemeCatalog,
    ThemeDescriptor,
    fetch_theme_catalog,
    stylesheet_url,
)
from gardensync.errors import ThemeCatalogError, TransportError


def _entry(name: str = "Minimal", repo: str = "kepano/obsidian-minimal", **extra) -> dict[str, object]:
    data: dict[str, object] = {"name": name, "repo": repo, "modes": ["dark", "light"]}
    data.update(extra)
    return data


class TestThemeDescriptor:
    """Tests for ThemeDescriptor parsing."""

    def test_defaults_branch_to_master(self):
        theme = ThemeDescriptor.from_catalog_entry(_entry())
        assert theme.branch == "master"
        assert theme.css_url == (
            "https://raw.githubusercontent.com/kepano/obsidian-minimal/master/obsidian.css"
        )
        assert theme.theme_id == "kepano/obsidian-minimal"
        assert theme.modes == ("dark", "light")

    def test_uses_explicit_branch(self):
        theme = ThemeDescriptor.from_catalog_entry(_entry(branch="main"))
        assert theme.css_url == stylesheet_url("kepano/obsidian-minimal", "main")
        assert "/main/" in theme.css_url

    def test_supports_only_listed_modes(self):
        theme = ThemeDescriptor.from_catalog_entry(_entry(modes=["dark"]))
        assert theme.supports("dark") is True
        assert theme.supports("light") is False

    @pytest.mark.parametrize(
        "entry",
        [
            "not a dict",
            {"repo": "a/b", "modes": ["dark"]},
            {"name": "X", "repo": "no-slash", "modes": ["dark"]},
            {"name": "X", "repo": "a/b", "modes": []},
            {"name": "X", "repo": "a/b", "modes": ["sepia"]},
            {"name": "X", "repo": "a/b", "modes": "dark"},
            {"name": "X\nY", "repo": "a/b", "modes": ["dark"]},
        ],
    )
    def test_malformed_entries_rejected(self, entry):
        with pytest.raises(ThemeCatalogError):
            ThemeDescriptor.from_catalog_entry(entry)

    def test_json_round_trip(self):
        theme = ThemeDescriptor.from_catalog_entry(_entry(branch="main", modes=["light"]))
        assert ThemeDescriptor.from_json(theme.to_json()) == theme

    @pytest.mark.parametrize("raw", ["", "{", "[1, 2]", '{"name": "X"}', "null"])
    def test_from_json_malformed_returns_none(self, raw):
        assert ThemeDescriptor.from_json(raw) is None


class TestThemeCatalog:
    """Tests for ThemeCatalog lookup."""

    def test_lookup_by_id_and_sorted_listing(self):
        catalog = ThemeCatalog.from_entries([
            _entry("Zeta", "z/zeta"),
            _entry("alpha", "a/alpha"),
        ])
        assert len(catalog) == 2
        assert "a/alpha" in catalog
        assert catalog.get("z/zeta").name == "Zeta"
        assert catalog.get("missing/theme") is None
        assert [theme.name for theme in catalog.list_themes()] == ["alpha", "Zeta"]

    def test_bad_and_duplicate_entries_are_reported(self):
        catalog = ThemeCatalog.from_entries([
            _entry("One", "a/one"),
            _entry("One again", "a/one"),
            {"name": "Broken"},
        ])
        assert len(catalog) == 1
        assert catalog.get("a/one").name == "One"
        errors = catalog.load_errors()
        assert len(errors) == 2
        assert any("Duplicate theme id" in msg for msg in errors)


class TestFetchThemeCatalog:
    """Tests for fetch_theme_catalog."""

    def test_fetch_parses_json_array(self):
        session = FakeSession(FakeResponse(200, [_entry(), _entry("Things", "colineckert/obsidian-things")]))
        catalog = fetch_theme_catalog(session, url="https://example.com/themes.json")
        assert len(catalog) == 2
        assert session.calls[0]["url"] == "https://example.com/themes.json"

    def test_fetch_rejects_non_array(self):
        session = FakeSession(FakeResponse(200, {"themes": []}))
        with pytest.raises(TransportError):
            fetch_theme_catalog(session)

    def test_fetch_http_error(self):
        session = FakeSession(FakeResponse(503, None, text="down"))
        with pytest.raises(TransportError):
            fetch_theme_catalog(session)

    def test_fetch_network_error(self, connection_error):
        session = FakeSession(connection_error)
        with pytest.raises(TransportError):
            fetch_theme_catalog(session)
