"""Community theme descriptors and catalog lookup."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import asdict, dataclass
from typing import Iterable, Mapping

import requests

from gardensync.core.constants import (
    BASE_MODES,
    COMMUNITY_THEMES_URL,
    DEFAULT_THEME_BRANCH,
    RAW_CONTENT_HOST,
    THEME_STYLESHEET_FILE,
)
from gardensync.errors import ErrorCode, ThemeCatalogError, TransportError

logger = logging.getLogger("gardensync.themes")

_REPO_RE = re.compile(r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$")
_BRANCH_RE = re.compile(r"^[A-Za-z0-9_./-]+$")
_MAX_NAME_LEN = 120
_MAX_CATALOG_ENTRIES = 5000


def stylesheet_url(repo: str, branch: str | None = None) -> str:
    """Raw URL of a theme repository's stylesheet."""
    return f"https://{RAW_CONTENT_HOST}/{repo}/{branch or DEFAULT_THEME_BRANCH}/{THEME_STYLESHEET_FILE}"


@dataclass(frozen=True, slots=True)
class ThemeDescriptor:
    """A selectable community theme."""

    name: str
    repo: str
    branch: str
    modes: tuple[str, ...]
    css_url: str

    @property
    def theme_id(self) -> str:
        return self.repo

    def supports(self, mode: str) -> bool:
        return mode in self.modes

    def to_dict(self) -> dict[str, object]:
        data = asdict(self)
        data["modes"] = list(self.modes)
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)

    @classmethod
    def from_catalog_entry(cls, entry: object) -> ThemeDescriptor:
        """Build a descriptor from one row of the community theme list."""
        if not isinstance(entry, Mapping):
            raise ThemeCatalogError(f"Theme entry must be an object, got {type(entry).__name__}")

        name = _required_str(entry, "name")
        if len(name) > _MAX_NAME_LEN:
            raise ThemeCatalogError(f"Theme name exceeds max length {_MAX_NAME_LEN}: {name[:40]!r}")
        repo = _required_str(entry, "repo")
        if not _REPO_RE.match(repo):
            raise ThemeCatalogError(f"Theme {name!r}: repo must look like owner/name, got {repo!r}")

        raw_branch = entry.get("branch")
        if raw_branch is None or raw_branch == "":
            branch = DEFAULT_THEME_BRANCH
        elif isinstance(raw_branch, str) and _BRANCH_RE.match(raw_branch.strip()):
            branch = raw_branch.strip()
        else:
            raise ThemeCatalogError(f"Theme {name!r}: invalid branch {raw_branch!r}")

        raw_modes = entry.get("modes")
        if not isinstance(raw_modes, list) or not raw_modes:
            raise ThemeCatalogError(f"Theme {name!r}: modes must be a non-empty list")
        modes: list[str] = []
        for mode in raw_modes:
            if not isinstance(mode, str):
                raise ThemeCatalogError(f"Theme {name!r}: mode entries must be strings")
            cleaned = mode.strip().lower()
            # Unknown modes are kept out; a theme must still list at least one base mode.
            if cleaned in BASE_MODES and cleaned not in modes:
                modes.append(cleaned)
        if not modes:
            raise ThemeCatalogError(f"Theme {name!r}: no supported base modes in {raw_modes!r}")

        return cls(
            name=name,
            repo=repo,
            branch=branch,
            modes=tuple(modes),
            css_url=stylesheet_url(repo, branch),
        )

    @classmethod
    def from_json(cls, raw: str) -> ThemeDescriptor | None:
        """Parse a stored descriptor. Malformed input yields None."""
        if not raw:
            return None
        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            return None
        if not isinstance(data, Mapping):
            return None
        try:
            descriptor = cls.from_catalog_entry(data)
        except ThemeCatalogError:
            return None
        return descriptor


class ThemeCatalog:
    """Identifier to descriptor lookup for the community theme list."""

    def __init__(self, descriptors: Iterable[ThemeDescriptor] = (),
                 load_errors: Iterable[str] = ()) -> None:
        self._themes: dict[str, ThemeDescriptor] = {}
        self._load_errors: list[str] = list(load_errors)
        for descriptor in descriptors:
            if descriptor.theme_id in self._themes:
                self._load_errors.append(
                    f"Duplicate theme id {descriptor.theme_id!r}; keeping the first entry."
                )
                continue
            self._themes[descriptor.theme_id] = descriptor

    @classmethod
    def from_entries(cls, entries: Iterable[object]) -> ThemeCatalog:
        descriptors: list[ThemeDescriptor] = []
        errors: list[str] = []
        for index, entry in enumerate(entries):
            if index >= _MAX_CATALOG_ENTRIES:
                errors.append(f"Theme list truncated at {_MAX_CATALOG_ENTRIES} entries.")
                break
            try:
                descriptors.append(ThemeDescriptor.from_catalog_entry(entry))
            except ThemeCatalogError as exc:
                errors.append(str(exc))
        return cls(descriptors, errors)

    def __len__(self) -> int:
        return len(self._themes)

    def __contains__(self, theme_id: object) -> bool:
        return theme_id in self._themes

    def get(self, theme_id: str) -> ThemeDescriptor | None:
        return self._themes.get(theme_id)

    def list_themes(self) -> list[ThemeDescriptor]:
        return sorted(self._themes.values(), key=lambda theme: theme.name.lower())

    def load_errors(self) -> list[str]:
        return list(self._load_errors)


def fetch_theme_catalog(
    session: requests.Session | None = None,
    url: str = COMMUNITY_THEMES_URL,
    timeout: float = 15.0,
) -> ThemeCatalog:
    """Download and parse the community theme list."""
    getter = session.get if session is not None else requests.get
    try:
        response = getter(url, timeout=timeout)
    except requests.Timeout as exc:
        raise TransportError(ErrorCode.NETWORK_TIMEOUT, details={"url": url, "original": str(exc)}) from exc
    except requests.RequestException as exc:
        raise TransportError(details={"url": url, "original": str(exc)}) from exc

    if response.status_code != 200:
        raise TransportError(
            ErrorCode.NETWORK_BAD_RESPONSE,
            details={"url": url, "status": response.status_code},
        )
    try:
        payload = response.json()
    except ValueError as exc:
        raise TransportError(ErrorCode.NETWORK_BAD_RESPONSE, details={"url": url}) from exc
    if not isinstance(payload, list):
        raise TransportError(
            ErrorCode.NETWORK_BAD_RESPONSE,
            details={"url": url, "reason": "theme list is not a JSON array"},
        )

    catalog = ThemeCatalog.from_entries(payload)
    errors = catalog.load_errors()
    logger.info("theme catalog loaded themes=%d skipped=%d", len(catalog), len(errors))
    if errors:
        logger.debug("theme catalog warnings: %s", " | ".join(errors[:6]))
    return catalog


def _required_str(data: Mapping[str, object], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ThemeCatalogError(f"Theme field {key!r} must be a non-empty string")
    cleaned = value.strip()
    if any(ch in cleaned for ch in ("\n", "\r", "\t")):
        raise ThemeCatalogError(f"Theme field {key!r} must be a single line string")
    return cleaned
