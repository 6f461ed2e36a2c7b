"""Filesystem path helpers."""
from __future__ import annotations

import os
from pathlib import Path

from platformdirs import PlatformDirs

_APP_NAME = "keywrap"
_CONFIG_DIR_ENV = "KEYWRAP_CONFIG_DIR"


def runtime_config_dir() -> Path:
    """Return the per-user configuration directory, honouring ``KEYWRAP_CONFIG_DIR``."""
    value = os.getenv(_CONFIG_DIR_ENV)
    if value:
        return Path(value).expanduser()
    dirs = PlatformDirs(appname=_APP_NAME, appauthor=None, roaming=False)
    return Path(dirs.user_config_path)
