"""Resolve the default persistent directory for save files."""

from __future__ import annotations

import logging
import os
import platform
from pathlib import Path

APP_NAME = "Savestate"
APP_SLUG = "savestate"

_logger = logging.getLogger(__name__)


def _windows_data_dir() -> Path:
    # %APPDATA% defaults to Roaming. If missing, fall back to the home dir.
    appdata = os.getenv("APPDATA")
    if appdata:
        return Path(appdata) / APP_NAME
    return Path.home() / "AppData" / "Roaming" / APP_NAME


def _mac_data_dir() -> Path:
    return Path.home() / "Library" / "Application Support" / APP_NAME


def _linux_data_dir() -> Path:
    xdg = os.getenv("XDG_DATA_HOME")
    if xdg:
        return Path(xdg) / APP_SLUG
    return Path.home() / ".local" / "share" / APP_SLUG


def default_save_dir() -> Path:
    """Return the OS-appropriate directory for save files.

    Windows: %APPDATA%/Savestate
    macOS:   ~/Library/Application Support/Savestate
    Linux:   ~/.local/share/savestate (or $XDG_DATA_HOME/savestate)
    """
    system = platform.system()
    if system == "Windows":
        return _windows_data_dir()
    if system == "Darwin":
        return _mac_data_dir()
    return _linux_data_dir()


def ensure_dir(path: Path) -> Path:
    """Create ``path`` if needed. Log and re-raise on failure."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        _logger.error("Failed to create directory '%s': %s", path, exc)
        raise
    return path
