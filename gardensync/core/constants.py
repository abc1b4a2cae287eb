"""Remote configuration constants."""

from __future__ import annotations

GITHUB_API_URL = "https://api.github.com"
RAW_CONTENT_HOST = "raw.githubusercontent.com"
COMMUNITY_THEMES_URL = (
    "https://raw.githubusercontent.com/obsidianmd/obsidian-releases/master/community-css-themes.json"
)

THEME_STYLESHEET_FILE = "obsidian.css"
DEFAULT_THEME_BRANCH = "master"

ENV_FILE_PATH = ".env"
THEME_COMMIT_MESSAGE = "Update theme"

BASE_MODES: tuple[str, ...] = ("dark", "light")
DEFAULT_BASE_MODE = "dark"
