"""Theme and base mode selection checks."""

from __future__ import annotations

from gardensync.core.constants import BASE_MODES
from gardensync.core.themes import ThemeDescriptor
from gardensync.errors import NoThemeSelectedError, UnsupportedModeError


def normalize_base_mode(base_mode: str | None) -> str:
    return (base_mode or "").strip().lower()


def validate_theme_selection(theme: ThemeDescriptor | None, base_mode: str) -> str:
    """Raise unless ``theme`` lists ``base_mode`` among its supported modes.

    Returns the normalized mode, which is the value to write. Must complete
    before anything is written to the repository.
    """
    if theme is None:
        raise NoThemeSelectedError()
    mode = normalize_base_mode(base_mode)
    if mode not in BASE_MODES or not theme.supports(mode):
        raise UnsupportedModeError(base_mode, theme.name)
    return mode
