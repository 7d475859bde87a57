"""Result records and error types shared by prediction backends."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

TUMOR_DETECTED = "Tumor Detected"


@dataclass(frozen=True, slots=True)
class SelectedImage:
    """An image chosen by the user, held in memory until it is replaced."""

    filename: str
    content: bytes
    content_type: str
    source_path: Path | None = None
    preview: bytes | None = None

    @property
    def has_preview(self) -> bool:
        return self.preview is not None


class AnalysisResult(BaseModel):
    """Verdict returned by the remote prediction endpoint."""

    model_config = ConfigDict(extra="forbid", frozen=True, strict=True)

    confidence: float = Field(ge=0.0, le=1.0)
    prediction: str
    status: str

    @property
    def is_tumor(self) -> bool:
        return self.prediction == TUMOR_DETECTED


class AnalysisError(RuntimeError):
    """Raised when an image could not be analysed."""

    @property
    def detail(self) -> str:
        """Human-readable description suitable for the inline error panel."""
        return str(self)


class TransportError(AnalysisError):
    """The endpoint could not be reached or did not answer in time."""


class ServerError(AnalysisError):
    """The endpoint answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"HTTP {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class MalformedResponseError(AnalysisError):
    """The endpoint answered 2xx with a body that is not a valid result."""

    def __init__(self, body: str, reason: str | None = None) -> None:
        super().__init__(f"{reason}: {body}" if reason else body)
        self.body = body
        self.reason = reason


class WorkflowBusyError(AnalysisError):
    """Raised when the selection changes while a request is in flight."""
