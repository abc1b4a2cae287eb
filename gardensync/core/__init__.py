"""Remote configuration and pull request lifecycle exports."""

from gardensync.core.remote_store import RemoteConfigStore, RemoteFile
from gardensync.core.theme_apply import ApplyResult, ThemeApplier
from gardensync.core.theme_validation import validate_theme_selection
from gardensync.core.themes import ThemeCatalog, ThemeDescriptor

__all__ = [
    "ApplyResult",
    "RemoteConfigStore",
    "RemoteFile",
    "ThemeApplier",
    "ThemeCatalog",
    "ThemeDescriptor",
    "validate_theme_selection",
]
