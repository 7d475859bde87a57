"""Client and result types for the remote prediction endpoint."""

from .base import (
    TUMOR_DETECTED,
    AnalysisError,
    AnalysisResult,
    MalformedResponseError,
    SelectedImage,
    ServerError,
    TransportError,
    WorkflowBusyError,
)
from .remote import PredictionClient

__all__ = [
    "TUMOR_DETECTED",
    "AnalysisError",
    "AnalysisResult",
    "MalformedResponseError",
    "PredictionClient",
    "SelectedImage",
    "ServerError",
    "TransportError",
    "WorkflowBusyError",
]
