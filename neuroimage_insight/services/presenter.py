"""Formatting of analysis results for display."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from ..inference.base import TUMOR_DETECTED, AnalysisResult

TUMOR_ADVISORY = (
    "The analysis indicates the presence of a tumor with high confidence. "
    "Please consult with a healthcare professional for proper diagnosis."
)
CLEAR_ADVISORY = (
    "No tumor detected in the provided image. Regular check-ups are still recommended."
)


class Tone(str, Enum):
    """Colour branch used when rendering a verdict."""

    TUMOR = "tumor"
    CLEAR = "clear"

    @property
    def color(self) -> str:
        return "#dc2626" if self is Tone.TUMOR else "#16a34a"

    @property
    def background(self) -> str:
        return "#fee2e2" if self is Tone.TUMOR else "#dcfce7"


@dataclass(frozen=True, slots=True)
class ResultView:
    prediction: str
    percentage: int
    tone: Tone
    advisory: str

    @property
    def percentage_text(self) -> str:
        return f"{self.percentage}%"

    @property
    def is_tumor(self) -> bool:
        return self.tone is Tone.TUMOR


def confidence_percentage(confidence: float) -> int:
    """Round ``confidence`` to a whole percentage, halves rounding up."""
    return int(math.floor(confidence * 100 + 0.5))


def present_result(result: AnalysisResult | None) -> ResultView | None:
    if result is None:
        return None
    is_tumor = result.prediction == TUMOR_DETECTED
    return ResultView(
        prediction=result.prediction,
        percentage=confidence_percentage(result.confidence),
        tone=Tone.TUMOR if is_tumor else Tone.CLEAR,
        advisory=TUMOR_ADVISORY if is_tumor else CLEAR_ADVISORY,
    )
