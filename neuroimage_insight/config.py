"""Application-wide configuration models and persistence helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

DEFAULT_ENDPOINT_URL = "http://127.0.0.1:5000/predict"


class AppConfig(BaseModel):
    """Validates and stores runtime settings for the application."""

    endpoint_url: str = Field(
        default=DEFAULT_ENDPOINT_URL,
        description="URL of the remote prediction endpoint receiving image uploads.",
    )
    request_timeout: float | None = Field(
        default=None,
        ge=1.0,
        le=600.0,
        description=(
            "Timeout (seconds) for prediction requests. Leave unset to rely on the "
            "transport default."
        ),
    )
    api_key: str | None = Field(
        default=None,
        description="Optional bearer token for endpoints that require authentication.",
    )
    preview_max_size: int = Field(
        default=512,
        ge=64,
        le=4096,
        description="Longest edge, in pixels, of the locally rendered image preview.",
    )
    notification_timeout_ms: int = Field(
        default=5000,
        ge=500,
        le=60000,
        description="How long transient notifications stay visible in the GUI.",
    )

    @model_validator(mode="after")
    def _normalise_endpoint(self) -> AppConfig:
        url = self.endpoint_url.strip()
        if not url:
            raise ValueError("Endpoint URL must not be empty.")
        if "://" not in url:
            raise ValueError(
                "Endpoint URL must include a scheme such as http://localhost:5000/predict."
            )
        self.endpoint_url = url
        return self

    @model_validator(mode="after")
    def _normalise_api_key(self) -> AppConfig:
        if self.api_key is not None:
            self.api_key = self.api_key.strip() or None
        return self

    def as_dict(self) -> dict[str, Any]:
        """Serialize the configuration to primitive Python types."""
        return self.model_dump(mode="json")

    @classmethod
    def load(cls, path: Path) -> AppConfig:
        """Load configuration from a YAML or JSON file."""
        try:
            data = _read_config_file(path)
        except (yaml.YAMLError, json.JSONDecodeError) as exc:
            raise ValueError(f"Invalid configuration file at {path}: {exc}") from exc
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ValueError(f"Invalid configuration file at {path}: {exc}") from exc

    def save(self, path: Path) -> None:
        """Persist configuration to a YAML file."""
        _write_config_file(path, self.as_dict())


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(path)

    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in {".yaml", ".yml"}:
        return yaml.safe_load(text) or {}
    return json.loads(text)


def _write_config_file(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() in {".yaml", ".yml"}:
        yaml_text = yaml.safe_dump(
            data,
            allow_unicode=False,
            sort_keys=False,
        )
        path.write_text(yaml_text, encoding="utf-8")
    else:
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
