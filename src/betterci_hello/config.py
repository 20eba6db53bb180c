# config.py
from __future__ import annotations

import os
from pathlib import Path

DEFAULT_HOME = ".betterci"
SETTINGS_FILENAME = "hello_world.json"


def home_dir() -> Path:
    """Root directory for persisted plugin state (BETTERCI_HOME, default .betterci)."""
    return Path(os.environ.get("BETTERCI_HOME", DEFAULT_HOME)).expanduser()


def settings_path() -> Path:
    """
    Location of the global greeting settings file.

    BETTERCI_HELLO_SETTINGS wins over BETTERCI_HOME when set.
    """
    override = os.environ.get("BETTERCI_HELLO_SETTINGS")
    if override:
        return Path(override).expanduser()
    return home_dir() / SETTINGS_FILENAME
