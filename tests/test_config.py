"""Tests for AppConfig validation and persistence."""

from __future__ import annotations

import json

import pytest

from neuroimage_insight.config import DEFAULT_ENDPOINT_URL, AppConfig


def test_defaults_point_at_local_predict_endpoint():
    config = AppConfig()
    assert config.endpoint_url == DEFAULT_ENDPOINT_URL
    assert config.request_timeout is None
    assert config.api_key is None


def test_endpoint_url_is_trimmed():
    config = AppConfig(endpoint_url="  http://example.com:5000/predict ")
    assert config.endpoint_url == "http://example.com:5000/predict"


def test_endpoint_url_requires_scheme():
    with pytest.raises(ValueError):
        AppConfig(endpoint_url="example.com:5000/predict")


def test_endpoint_url_must_not_be_blank():
    with pytest.raises(ValueError):
        AppConfig(endpoint_url="   ")


def test_blank_api_key_becomes_none():
    assert AppConfig(api_key="   ").api_key is None
    assert AppConfig(api_key=" token ").api_key == "token"


def test_timeout_bounds_are_enforced():
    with pytest.raises(ValueError):
        AppConfig(request_timeout=0.5)
    assert AppConfig(request_timeout=30).request_timeout == 30.0


def test_load_and_save_round_trip(tmp_path):
    path = tmp_path / "config.yaml"
    original = AppConfig(
        endpoint_url="http://scanner.local:5000/predict",
        request_timeout=45.0,
        preview_max_size=256,
    )
    original.save(path)

    loaded = AppConfig.load(path)
    assert loaded == original


def test_load_json_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"endpoint_url": "https://api.example/predict"}), encoding="utf-8")

    assert AppConfig.load(path).endpoint_url == "https://api.example/predict"


def test_load_rejects_invalid_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"preview_max_size": 1}), encoding="utf-8")

    with pytest.raises(ValueError):
        AppConfig.load(path)


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        AppConfig.load(tmp_path / "absent.yaml")


@pytest.mark.parametrize(
    ("name", "text"),
    [
        ("settings.yaml", "endpoint_url: [unclosed\n"),
        ("settings.json", '{"endpoint_url": '),
    ],
)
def test_load_reports_syntax_errors_with_path(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")

    with pytest.raises(ValueError) as excinfo:
        AppConfig.load(path)

    assert str(path) in str(excinfo.value)
