"""Top-level package for the NeuroImage Insight client."""

from .config import AppConfig
from .inference import AnalysisResult, PredictionClient
from .services import AnalysisWorkflow, ImageSelector, present_result
from .settings_store import SettingsStore

__all__ = [
    "AnalysisResult",
    "AnalysisWorkflow",
    "AppConfig",
    "ImageSelector",
    "PredictionClient",
    "SettingsStore",
    "present_result",
]
