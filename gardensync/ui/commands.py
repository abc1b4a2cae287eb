"""Commands sent from the settings panel to the controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class SetGitHubRepo:
    value: str


@dataclass(frozen=True, slots=True)
class SetGitHubUserName:
    value: str


@dataclass(frozen=True, slots=True)
class SetGitHubToken:
    value: str


@dataclass(frozen=True, slots=True)
class SetGardenBaseUrl:
    value: str


@dataclass(frozen=True, slots=True)
class SelectBaseTheme:
    mode: str


@dataclass(frozen=True, slots=True)
class SelectTheme:
    """Pick a theme by catalog id (the theme's `owner/repo`)."""

    theme_id: str


@dataclass(frozen=True, slots=True)
class ApplyTheme:
    pass


@dataclass(frozen=True, slots=True)
class CreatePullRequest:
    pass


FieldCommand = Union[SetGitHubRepo, SetGitHubUserName, SetGitHubToken, SetGardenBaseUrl]
Command = Union[FieldCommand, SelectBaseTheme, SelectTheme, ApplyTheme, CreatePullRequest]

# Command type -> AppSettings attribute written by it.
FIELD_ATTRIBUTES: dict[type, str] = {
    SetGitHubRepo: "github_repo",
    SetGitHubUserName: "github_user_name",
    SetGitHubToken: "github_token",
    SetGardenBaseUrl: "garden_base_url",
}
