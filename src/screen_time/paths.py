"""Helpers for locating application directories."""

from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs


APP_NAME = "ScreenTime"
APP_AUTHOR = "ScreenTime"

# Never rename: the file name is the only key to previously saved totals.
TOTALS_FILE_NAME = "monsterXhunter.json"


def get_data_dir() -> Path:
    """Return the base directory for persistent data."""
    dirs = PlatformDirs(appname=APP_NAME, appauthor=APP_AUTHOR, roaming=True)
    path = Path(dirs.user_data_path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_totals_path() -> Path:
    return get_data_dir() / TOTALS_FILE_NAME
