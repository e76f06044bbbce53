"""
resxapp/paths.py -- Per-user locations for settings and data.

Uses platformdirs so that settings land in the right place on every OS.
"""

from __future__ import annotations

import os

from platformdirs import user_config_dir

_APP_NAME = "ResXEngine"
_APP_AUTHOR = "ResXEngine"

SETTINGS_FILE_NAME = "settings.json"


def get_user_config_dir() -> str:
    """Return the platform-appropriate user config directory."""
    path = user_config_dir(_APP_NAME, _APP_AUTHOR)
    os.makedirs(path, exist_ok=True)
    return path


def get_settings_path() -> str:
    """Return the path of the engine settings file (may not exist yet)."""
    return os.path.join(get_user_config_dir(), SETTINGS_FILE_NAME)
