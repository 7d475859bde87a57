"""Tests for the CLI entry point."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from PIL import Image

from neuroimage_insight.__main__ import main as cli_main
from neuroimage_insight.config import AppConfig
from neuroimage_insight.inference.base import AnalysisResult, ServerError

class DummyStore:
    def __init__(self) -> None:
        self.loaded = False

    def load_or_default(self) -> AppConfig:
        self.loaded = True
        return AppConfig()


def _scan(tmp_path: Path) -> Path:
    path = tmp_path / "scan.png"
    Image.new("RGB", (8, 8)).save(path)
    return path


def _patch_client(monkeypatch, outcome, seen: list[AppConfig]) -> None:
    class DummyClient:
        def __init__(self, config: AppConfig) -> None:
            seen.append(config)

        def predict(self, image):
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        def close(self) -> None:
            pass

    monkeypatch.setattr("neuroimage_insight.__main__.SettingsStore", DummyStore)
    monkeypatch.setattr("neuroimage_insight.__main__.PredictionClient", DummyClient)


def test_cli_requires_input_in_headless_mode(monkeypatch):
    monkeypatch.setattr("neuroimage_insight.__main__.SettingsStore", DummyStore)
    with pytest.raises(SystemExit):
        cli_main(["--headless"])


def test_cli_rejects_non_image(monkeypatch, tmp_path):
    monkeypatch.setattr("neuroimage_insight.__main__.SettingsStore", DummyStore)
    document = tmp_path / "notes.txt"
    document.write_text("x", encoding="utf-8")

    with pytest.raises(SystemExit):
        cli_main(["--input", str(document)])


def test_cli_rejects_invalid_endpoint(monkeypatch):
    monkeypatch.setattr("neuroimage_insight.__main__.SettingsStore", DummyStore)
    with pytest.raises(SystemExit):
        cli_main(["--endpoint", "no-scheme", "--show-config"])


def test_cli_show_config_applies_overrides(monkeypatch, capsys):
    monkeypatch.setattr("neuroimage_insight.__main__.SettingsStore", DummyStore)

    cli_main(["--show-config", "--endpoint", "http://gpu-box:5000/predict", "--timeout", "30"])

    payload = json.loads(capsys.readouterr().out)
    assert payload["endpoint_url"] == "http://gpu-box:5000/predict"
    assert payload["request_timeout"] == 30.0


def test_cli_runs_headless_analysis(monkeypatch, tmp_path, capsys):
    seen: list[AppConfig] = []
    result = AnalysisResult(confidence=0.92, prediction="Tumor Detected", status="ok")
    _patch_client(monkeypatch, result, seen)
    scan = _scan(tmp_path)

    cli_main(["--input", str(scan), "--endpoint", "http://scanner:5000/predict"])

    payload = json.loads(capsys.readouterr().out)
    assert seen[0].endpoint_url == "http://scanner:5000/predict"
    assert payload["path"] == str(scan)
    assert payload["prediction"] == "Tumor Detected"
    assert payload["confidence_display"] == "92%"
    assert payload["verdict"] == "tumor"
    assert payload["error"] is None


def test_cli_reports_failures(monkeypatch, tmp_path, capsys):
    _patch_client(monkeypatch, ServerError(500, "internal error"), [])
    scan = _scan(tmp_path)

    cli_main(["--headless", "--input", str(scan)])

    payload = json.loads(capsys.readouterr().out)
    assert payload["prediction"] is None
    assert payload["error"] == "HTTP 500: internal error"
