"""Per-user directories for wfv.

Config is read from ``user_config_dir()``. Clones of remote repositories
are kept under ``user_cache_dir()`` so later lookups only need a fetch.

Results are cached; call ``clear_caches()`` after changing the environment.
"""

from __future__ import annotations

import os
import sys
from functools import lru_cache
from pathlib import Path

__all__ = [
    "APP_NAME",
    "clear_caches",
    "home",
    "user_cache_dir",
    "user_config_dir",
]

APP_NAME = "wfv"


def _env_path(name: str) -> Path | None:
    value = os.environ.get(name)
    return Path(value) if value else None


@lru_cache(maxsize=1)
def home() -> Path:
    """Home directory from USERPROFILE (Windows) or HOME, else ``Path.home()``."""
    var = "USERPROFILE" if sys.platform == "win32" else "HOME"
    return _env_path(var) or Path.home()


def _app_dir(*, windows_var: str, windows_default: str, xdg_var: str, xdg_default: str) -> Path:
    if sys.platform == "win32":
        return (_env_path(windows_var) or home() / "AppData" / windows_default) / APP_NAME
    return (_env_path(xdg_var) or home() / xdg_default) / APP_NAME


@lru_cache(maxsize=1)
def user_config_dir() -> Path:
    """``$XDG_CONFIG_HOME/wfv`` or ``~/.config/wfv``; ``%APPDATA%\\wfv`` on Windows."""
    return _app_dir(
        windows_var="APPDATA",
        windows_default="Roaming",
        xdg_var="XDG_CONFIG_HOME",
        xdg_default=".config",
    )


@lru_cache(maxsize=1)
def user_cache_dir() -> Path:
    """``$XDG_CACHE_HOME/wfv`` or ``~/.cache/wfv``; ``%LOCALAPPDATA%\\wfv\\Cache`` on Windows."""
    base = _app_dir(
        windows_var="LOCALAPPDATA",
        windows_default="Local",
        xdg_var="XDG_CACHE_HOME",
        xdg_default=".cache",
    )
    return base / "Cache" if sys.platform == "win32" else base


def clear_caches() -> None:
    home.cache_clear()
    user_config_dir.cache_clear()
    user_cache_dir.cache_clear()
