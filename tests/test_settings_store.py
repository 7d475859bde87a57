"""Tests for the settings store helpers."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from neuroimage_insight.config import AppConfig
from neuroimage_insight.settings_store import SettingsStore, default_settings_path


def _fake_os(name: str, **env: str) -> SimpleNamespace:
    def getenv(key: str, default=None):
        return env.get(key, default)

    return SimpleNamespace(name=name, getenv=getenv)


def test_default_settings_path_respects_xdg(monkeypatch, tmp_path):
    config_root = tmp_path / "xdg"
    fake_os = _fake_os("posix", XDG_CONFIG_HOME=str(config_root))
    monkeypatch.setattr("neuroimage_insight.settings_store.os", fake_os)

    resolved = default_settings_path()

    assert resolved == config_root / "neuroimage_insight" / "settings.yaml"


def test_default_settings_path_windows(monkeypatch, tmp_path):
    appdata = tmp_path / "AppData" / "Roaming"
    fake_os = _fake_os("nt", APPDATA=str(appdata))
    monkeypatch.setattr("neuroimage_insight.settings_store.os", fake_os)

    resolved = default_settings_path()

    assert resolved == appdata / "neuroimage_insight" / "settings.yaml"


def test_settings_store_round_trip(tmp_path):
    target_path = tmp_path / "settings.yaml"
    store = SettingsStore(path=target_path)
    original = AppConfig(endpoint_url="http://10.0.0.5:5000/predict", api_key="secret")

    store.save(original)
    loaded = store.load()

    assert loaded.endpoint_url == "http://10.0.0.5:5000/predict"
    assert loaded.api_key == "secret"
    assert target_path.exists()


def test_settings_store_loads_defaults_when_missing(tmp_path):
    store = SettingsStore(path=tmp_path / "missing.yaml")

    config = store.load()

    assert isinstance(config, AppConfig)
    assert config == AppConfig()


def test_load_or_default_sets_aside_unreadable_file(tmp_path):
    target_path = tmp_path / "settings.yaml"
    target_path.write_text("endpoint_url: [unclosed\n", encoding="utf-8")
    store = SettingsStore(path=target_path)

    config = store.load_or_default()

    assert config == AppConfig()
    assert not target_path.exists()
    assert store.invalid_path.read_text(encoding="utf-8") == "endpoint_url: [unclosed\n"


def test_load_or_default_keeps_valid_file(tmp_path):
    target_path = tmp_path / "settings.yaml"
    store = SettingsStore(path=target_path)
    store.save(AppConfig(preview_max_size=128))

    assert store.load_or_default().preview_max_size == 128
    assert not store.invalid_path.exists()


def test_load_raises_for_unreadable_file(tmp_path):
    target_path = tmp_path / "settings.yaml"
    target_path.write_text("endpoint_url: [unclosed\n", encoding="utf-8")

    with pytest.raises(ValueError):
        SettingsStore(path=target_path).load()
    assert target_path.exists()
