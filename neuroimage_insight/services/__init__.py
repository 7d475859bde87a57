"""Service layer coordinating image selection, analysis and presentation."""

from .presenter import ResultView, Tone, present_result
from .selection import ImageSelector, load_image
from .workflow import AnalysisWorkflow, Notification, NotificationVariant, Phase, WorkflowState

__all__ = [
    "AnalysisWorkflow",
    "ImageSelector",
    "Notification",
    "NotificationVariant",
    "Phase",
    "ResultView",
    "Tone",
    "WorkflowState",
    "load_image",
    "present_result",
]
