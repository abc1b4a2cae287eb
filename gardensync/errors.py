"""Error codes and error handling utilities for GardenSync."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for GardenSync operations."""

    # Validation errors
    THEME_MODE_UNSUPPORTED = auto()
    THEME_NOT_SELECTED = auto()

    # Remote file errors
    REMOTE_FILE_NOT_FOUND = auto()
    REMOTE_CONFLICT = auto()

    # Network errors
    NETWORK_TIMEOUT = auto()
    NETWORK_UNAVAILABLE = auto()
    NETWORK_AUTH_FAILED = auto()
    NETWORK_RATE_LIMITED = auto()
    NETWORK_BAD_RESPONSE = auto()

    # Theme catalog errors
    CATALOG_INVALID = auto()

    # Operation errors
    OPERATION_FAILED = auto()

    # Configuration errors
    CONFIG_MISSING = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.THEME_MODE_UNSUPPORTED: "This theme doesn't support the selected base mode.",
    ErrorCode.THEME_NOT_SELECTED: "Select a theme before applying.",

    ErrorCode.REMOTE_FILE_NOT_FOUND: "The file does not exist in the repository yet.",
    ErrorCode.REMOTE_CONFLICT: "The file was changed in GitHub while applying. Apply again.",

    ErrorCode.NETWORK_TIMEOUT: "GitHub did not respond in time. Check your connection.",
    ErrorCode.NETWORK_UNAVAILABLE: "Could not reach GitHub. Check your connection and credentials.",
    ErrorCode.NETWORK_AUTH_FAILED: "Could not reach GitHub. Check your connection and credentials.",
    ErrorCode.NETWORK_RATE_LIMITED: "GitHub rate limit reached. Wait a moment and try again.",
    ErrorCode.NETWORK_BAD_RESPONSE: "GitHub returned an unexpected response. Check your connection and credentials.",

    ErrorCode.CATALOG_INVALID: "The theme list could not be read.",

    ErrorCode.OPERATION_FAILED: "Something went wrong. Check your connection and credentials.",

    ErrorCode.CONFIG_MISSING: "Fill in the GitHub username and repository name first.",
}


@dataclass
class GardenSyncError(Exception):
    """Base exception for GardenSync with error code and context.

    ``details`` is for logs only. It may carry HTTP status codes or response
    bodies and is never rendered by :func:`format_error_for_user`.
    """

    code: ErrorCode
    message: str = ""
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected error occurred.")

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "code": self.code.name,
            "message": self.message,
            "details": self.details,
            "suggestion": self.suggestion,
        }


class ConfigurationError(GardenSyncError):
    """Settings needed for a remote call are missing."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        super().__init__(ErrorCode.CONFIG_MISSING, message, **kwargs)


class ValidationError(GardenSyncError):
    """A local selection is invalid; raised before any network effect."""


class UnsupportedModeError(ValidationError):
    """The selected theme does not list the selected base mode."""

    def __init__(self, mode: str, theme_name: str = "") -> None:
        super().__init__(
            ErrorCode.THEME_MODE_UNSUPPORTED,
            f"This theme doesn't support {mode} mode.",
            details={"mode": mode, "theme": theme_name},
        )
        self.mode = mode


class NoThemeSelectedError(ValidationError):
    def __init__(self) -> None:
        super().__init__(ErrorCode.THEME_NOT_SELECTED)


class RemoteFileNotFound(GardenSyncError):
    """The remote path does not exist. Callers switch to create mode."""

    def __init__(self, path: str) -> None:
        super().__init__(ErrorCode.REMOTE_FILE_NOT_FOUND, details={"path": path})
        self.path = path


class ConflictError(GardenSyncError):
    """The version token sent with a write is stale."""

    def __init__(self, path: str, details: dict[str, Any] | None = None) -> None:
        merged = {"path": path}
        merged.update(details or {})
        super().__init__(ErrorCode.REMOTE_CONFLICT, details=merged)
        self.path = path


class TransportError(GardenSyncError):
    """Network, auth, rate-limit or unexpected-status failure."""

    def __init__(self, code: ErrorCode = ErrorCode.NETWORK_UNAVAILABLE,
                 details: dict[str, Any] | None = None) -> None:
        super().__init__(code, details=dict(details or {}))


class ThemeCatalogError(GardenSyncError):
    """A theme catalog entry is malformed."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.CATALOG_INVALID, message, details=dict(details or {}))


def classify_status(status: int, body: str = "") -> ErrorCode:
    """Map a non-success HTTP status from the GitHub API to an error code."""
    lowered = (body or "").lower()
    if status in (401, 403) and "rate limit" in lowered:
        return ErrorCode.NETWORK_RATE_LIMITED
    if status == 429:
        return ErrorCode.NETWORK_RATE_LIMITED
    if status in (401, 403):
        return ErrorCode.NETWORK_AUTH_FAILED
    if status == 404:
        return ErrorCode.REMOTE_FILE_NOT_FOUND
    if status == 409:
        return ErrorCode.REMOTE_CONFLICT
    if status >= 500:
        return ErrorCode.NETWORK_UNAVAILABLE
    return ErrorCode.NETWORK_BAD_RESPONSE


def format_error_for_user(error: GardenSyncError | Exception) -> str:
    """Format an error for display. Details never reach the display layer."""
    if isinstance(error, GardenSyncError):
        parts = [error.message]
        if error.suggestion and error.suggestion != error.message:
            parts.append(f"\n\n{error.suggestion}")
        return "".join(parts)
    return ERROR_MESSAGES[ErrorCode.OPERATION_FAILED]
