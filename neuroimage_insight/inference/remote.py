"""HTTP client for the remote brain-scan prediction endpoint."""

from __future__ import annotations

import json
import logging
from typing import Any

import requests
from pydantic import ValidationError
from requests import Response, Session

from ..config import AppConfig
from .base import (
    AnalysisResult,
    MalformedResponseError,
    SelectedImage,
    ServerError,
    TransportError,
)

logger = logging.getLogger(__name__)

UPLOAD_FIELD = "file"


class PredictionClient:
    """Uploads a single image and parses the endpoint's verdict."""

    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config or AppConfig()
        self._session: Session | None = None

    @property
    def endpoint_url(self) -> str:
        return self._config.endpoint_url

    def load(self) -> None:
        self._session = requests.Session()

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None

    def predict(self, image: SelectedImage) -> AnalysisResult:
        """POST ``image`` as multipart form data and return the parsed result."""
        if self._session is None:
            self.load()
        files = {UPLOAD_FIELD: (image.filename, image.content, image.content_type)}
        logger.debug(
            "Uploading %s (%d bytes) to %s", image.filename, len(image.content), self.endpoint_url
        )
        response = self._session_post(self.endpoint_url, files)
        result = self._parse_result(response.text)
        logger.info(
            "Prediction for %s: %s (confidence %.3f)",
            image.filename,
            result.prediction,
            result.confidence,
        )
        return result

    # ----- HTTP helpers ----------------------------------------------------

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._config.api_key:
            headers["Authorization"] = f"Bearer {self._config.api_key}"
        return headers

    def _session_post(self, url: str, files: dict[str, Any]) -> Response:
        if self._session is None:
            raise TransportError("HTTP session not initialised.")
        timeout = self._config.request_timeout
        try:
            response = self._session.post(
                url,
                files=files,
                headers=self._headers(),
                timeout=timeout,
            )
        except requests.exceptions.Timeout as exc:
            raise TransportError(
                f"Prediction request timed out after {timeout}s: {exc}"
            ) from exc
        except requests.exceptions.RequestException as exc:
            raise TransportError(f"Failed to contact prediction endpoint: {exc}") from exc
        if not 200 <= response.status_code < 300:
            logger.warning("Prediction endpoint returned HTTP %s", response.status_code)
            raise ServerError(response.status_code, response.text)
        return response

    # ----- Response handling -----------------------------------------------

    @staticmethod
    def _parse_result(text: str) -> AnalysisResult:
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as err:
            raise MalformedResponseError(text) from err
        if not isinstance(payload, dict):
            raise MalformedResponseError(text, reason="Expected a JSON object")
        try:
            return AnalysisResult.model_validate(payload)
        except ValidationError as err:
            fields = ", ".join(
                ".".join(str(part) for part in error["loc"]) or "body" for error in err.errors()
            )
            reason = f"Unexpected response shape ({fields})"
            raise MalformedResponseError(text, reason=reason) from err
