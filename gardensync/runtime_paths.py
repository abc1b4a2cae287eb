"""Runtime path helpers."""

from __future__ import annotations

from pathlib import Path


def log_dir(app_data_dir: Path) -> Path:
    """Directory for rotating log files under the app data dir."""
    path = app_data_dir / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path
