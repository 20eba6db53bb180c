"""Shared test fixtures for hello-world step tests."""

from collections.abc import Generator
from pathlib import Path

import pytest

from betterci_hello.runner import BuildContext, BuildLog
from betterci_hello.settings import GreetingSettings, SettingsStore, set_settings
from betterci_hello.ui.console import set_console, Console


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Point all persisted state at a temp dir and reset process-wide singletons."""
    home = tmp_path / "home"
    monkeypatch.setenv("BETTERCI_HOME", str(home))
    monkeypatch.delenv("BETTERCI_HELLO_SETTINGS", raising=False)
    set_settings(None)
    set_console(Console())
    yield home
    set_settings(None)


@pytest.fixture
def settings_path(isolated_home: Path) -> Path:
    return isolated_home / "hello_world.json"


@pytest.fixture
def settings(settings_path: Path) -> GreetingSettings:
    return GreetingSettings(SettingsStore(settings_path)).load()


@pytest.fixture
def context(settings: GreetingSettings) -> BuildContext:
    return BuildContext(log=BuildLog(), settings=settings)
