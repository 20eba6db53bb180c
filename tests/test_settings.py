"""Tests for the global greeting settings."""

import json
import threading

import pytest

from betterci_hello.config import settings_path
from betterci_hello.forms import FormError
from betterci_hello.settings import GreetingSettings, SettingsError, SettingsStore, get_settings, set_settings


def test_default_on_first_load(settings_path):
    assert not settings_path.exists()
    s = GreetingSettings(SettingsStore(settings_path)).load()
    assert s.use_alternate_language() is False


def test_configure_persists_before_returning(settings, settings_path):
    settings.configure(True)
    assert json.loads(settings_path.read_text(encoding="utf-8")) == {"useAlternateLanguage": True}
    assert settings.use_alternate_language() is True


def test_round_trip_through_reload(settings, settings_path):
    settings.configure(True)
    reloaded = GreetingSettings(SettingsStore(settings_path)).load()
    assert reloaded.use_alternate_language() is True

    reloaded.configure(False)
    assert GreetingSettings(SettingsStore(settings_path)).load().use_alternate_language() is False


def test_configure_form(settings):
    assert settings.configure_form({"useAlternateLanguage": "true"}) is True
    assert settings.use_alternate_language() is True
    assert settings.to_form() == {"useAlternateLanguage": True}


def test_configure_form_rejects_missing_field(settings, settings_path):
    with pytest.raises(FormError):
        settings.configure_form({})
    assert not settings_path.exists()
    assert settings.use_alternate_language() is False


def test_failed_write_leaves_value_unchanged(settings, monkeypatch):
    def boom(data):
        raise OSError("read-only file system")

    monkeypatch.setattr(settings.store, "write", boom)
    with pytest.raises(OSError):
        settings.configure(True)
    assert settings.use_alternate_language() is False


def test_malformed_file_is_an_error(settings_path):
    settings_path.parent.mkdir(parents=True)
    settings_path.write_text("{not json", encoding="utf-8")
    with pytest.raises(SettingsError):
        GreetingSettings(SettingsStore(settings_path)).load()


def test_non_boolean_value_is_an_error(settings_path):
    settings_path.parent.mkdir(parents=True)
    settings_path.write_text(json.dumps({"useAlternateLanguage": "yes"}), encoding="utf-8")
    with pytest.raises(SettingsError):
        GreetingSettings(SettingsStore(settings_path)).load()


def test_settings_path_env_override(tmp_path, monkeypatch):
    target = tmp_path / "custom" / "greeting.json"
    monkeypatch.setenv("BETTERCI_HELLO_SETTINGS", str(target))
    assert settings_path() == target
    GreetingSettings().configure(True)
    assert target.exists()


def test_get_settings_is_process_wide(isolated_home):
    first = get_settings()
    assert first is get_settings()
    assert first.store.path == isolated_home / "hello_world.json"
    set_settings(None)
    assert get_settings() is not first


def test_concurrent_reads_see_old_or_new_value(settings):
    seen = set()
    stop = threading.Event()

    def reader():
        while not stop.is_set():
            seen.add(settings.use_alternate_language())

    threads = [threading.Thread(target=reader) for _ in range(4)]
    for t in threads:
        t.start()
    for i in range(20):
        settings.configure(i % 2 == 0)
    stop.set()
    for t in threads:
        t.join()

    assert seen <= {True, False}
    assert settings.use_alternate_language() is False
