# settings.py
from __future__ import annotations

import json
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Protocol

from .config import settings_path
from .forms import settings_from_form


class SettingsProvider(Protocol):
    """What a running step needs from the global configuration."""

    def use_alternate_language(self) -> bool: ...


@dataclass
class SettingsError(Exception):
    path: str
    message: str

    def __str__(self) -> str:
        return f"Could not load settings from {self.path}: {self.message}"


# ---------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------

class SettingsStore:
    """
    JSON file holding the global configuration:
      {"useAlternateLanguage": false}
    """

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path is not None else settings_path()

    def read(self) -> Optional[Dict[str, Any]]:
        """Return the stored mapping, or None when nothing was ever saved."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise SettingsError(str(self.path), f"invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise SettingsError(str(self.path), "expected a JSON object")
        return data

    def write(self, data: Mapping[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(dict(data), f, sort_keys=True, indent=2)
            f.flush()
            os.fsync(f.fileno())
        tmp.replace(self.path)


# ---------------------------------------------------------------------
# Global settings
# ---------------------------------------------------------------------

class GreetingSettings:
    """
    Process-wide configuration of the greeting step.

    One instance per process, loaded at startup and changed only through
    configure(). Every change is written to the store before it becomes
    visible to readers.
    """

    def __init__(self, store: SettingsStore | None = None):
        self.store = store if store is not None else SettingsStore()
        self._lock = threading.Lock()
        self._use_alternate_language = False

    def load(self) -> GreetingSettings:
        data = self.store.read()
        value = False
        if data is not None:
            value = data.get("useAlternateLanguage", False)
            if not isinstance(value, bool):
                raise SettingsError(str(self.store.path), f"useAlternateLanguage must be a boolean, got {value!r}")
        with self._lock:
            self._use_alternate_language = value
        return self

    def use_alternate_language(self) -> bool:
        with self._lock:
            return self._use_alternate_language

    def configure(self, use_alternate_language: bool) -> None:
        value = bool(use_alternate_language)
        with self._lock:
            # in-memory value only changes once the write succeeded
            self.store.write({"useAlternateLanguage": value})
            self._use_alternate_language = value

    def configure_form(self, form: Mapping[str, Any]) -> bool:
        """Apply a submitted global configuration form."""
        self.configure(settings_from_form(form))
        return True

    def to_form(self) -> Dict[str, Any]:
        return {"useAlternateLanguage": self.use_alternate_language()}


# Global settings instance (loaded on first use)
_settings: Optional[GreetingSettings] = None
_settings_lock = threading.Lock()


def get_settings() -> GreetingSettings:
    """Get the process-wide settings, loading them from disk on first use."""
    global _settings
    with _settings_lock:
        if _settings is None:
            _settings = GreetingSettings().load()
        return _settings


def set_settings(settings: Optional[GreetingSettings]) -> None:
    """Replace (or with None, reset) the process-wide settings."""
    global _settings
    with _settings_lock:
        _settings = settings
