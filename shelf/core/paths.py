from __future__ import annotations

from pathlib import Path

from platformdirs import user_config_path

APP_NAME = "shelf"
APP_AUTHOR = "shelf"
SETTINGS_FILENAME = "settings.json"
LOG_FILENAME = "shelf.log"


def user_settings_path() -> Path:
    return Path(user_config_path(APP_NAME, APP_AUTHOR)) / SETTINGS_FILENAME
