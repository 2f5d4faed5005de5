"""Configuration, data and cache directories, with environment overrides."""

from __future__ import annotations

import os
from pathlib import Path

from platformdirs import PlatformDirs

APPLICATION = "frz"
ORGANIZATION = "albo"

CONFIG_DIR_ENV = "FRZ_CONFIG_DIR"
DATA_DIR_ENV = "FRZ_DATA_DIR"
CACHE_DIR_ENV = "FRZ_CACHE_DIR"


def _project_dirs() -> PlatformDirs:
    return PlatformDirs(appname=APPLICATION, appauthor=ORGANIZATION, roaming=False)


def _dir_from_env(name: str) -> Path | None:
    """Return the override from an environment variable; empty means unset."""
    value = os.environ.get(name)
    return Path(value) if value else None


def get_config_dir() -> Path:
    """Return the directory holding user preferences."""
    return _dir_from_env(CONFIG_DIR_ENV) or Path(_project_dirs().user_config_dir)


def get_data_dir() -> Path:
    """Return the directory storing search indexes and other assets."""
    return _dir_from_env(DATA_DIR_ENV) or Path(_project_dirs().user_data_dir)


def get_cache_dir() -> Path:
    """Return the directory for temporary files and incremental state."""
    return _dir_from_env(CACHE_DIR_ENV) or Path(_project_dirs().user_cache_dir)