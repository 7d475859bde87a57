"""Workflow state machine driving the select-and-analyze cycle."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from threading import Lock
from typing import ClassVar, Protocol, Union

from ..inference.base import AnalysisError, AnalysisResult, SelectedImage, WorkflowBusyError

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    """The five phases a workflow can be in."""

    IDLE = "idle"
    SELECTED = "selected"
    ANALYZING = "analyzing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class _StateViews:
    """Read-only accessors shared by every workflow state."""

    __slots__ = ()
    phase: ClassVar[Phase]

    @property
    def selected_image(self) -> SelectedImage | None:
        return getattr(self, "image", None)

    @property
    def is_analyzing(self) -> bool:
        return self.phase is Phase.ANALYZING

    @property
    def result(self) -> AnalysisResult | None:
        return getattr(self, "analysis", None)

    @property
    def error_detail(self) -> str | None:
        return getattr(self, "detail", None)


@dataclass(frozen=True, slots=True)
class Idle(_StateViews):
    phase: ClassVar[Phase] = Phase.IDLE


@dataclass(frozen=True, slots=True)
class Selected(_StateViews):
    phase: ClassVar[Phase] = Phase.SELECTED
    image: SelectedImage


@dataclass(frozen=True, slots=True)
class Analyzing(_StateViews):
    phase: ClassVar[Phase] = Phase.ANALYZING
    image: SelectedImage


@dataclass(frozen=True, slots=True)
class Succeeded(_StateViews):
    phase: ClassVar[Phase] = Phase.SUCCEEDED
    image: SelectedImage
    analysis: AnalysisResult


@dataclass(frozen=True, slots=True)
class Failed(_StateViews):
    phase: ClassVar[Phase] = Phase.FAILED
    image: SelectedImage
    detail: str


WorkflowState = Union[Idle, Selected, Analyzing, Succeeded, Failed]


class NotificationVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True, slots=True)
class Notification:
    """Short user-facing message shown transiently by the front end."""

    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT

    @property
    def destructive(self) -> bool:
        return self.variant is NotificationVariant.DESTRUCTIVE


NO_IMAGE_SELECTED = Notification(
    "No image selected",
    "Please select a brain scan image to analyze",
    NotificationVariant.DESTRUCTIVE,
)
ANALYSIS_IN_PROGRESS = Notification(
    "Analysis in progress",
    "Please wait for the current analysis to finish.",
    NotificationVariant.DESTRUCTIVE,
)
ANALYSIS_FAILED = Notification(
    "Analysis Failed",
    "There was an error analyzing the image. Please try again.",
    NotificationVariant.DESTRUCTIVE,
)

NotificationSink = Callable[[Notification], None]
StateListener = Callable[[WorkflowState], None]


class Predictor(Protocol):
    """Anything able to turn a selected image into a verdict."""

    def predict(self, image: SelectedImage) -> AnalysisResult:
        """Submit ``image`` and return the parsed verdict."""


def completion_notice(result: AnalysisResult) -> Notification:
    variant = NotificationVariant.DESTRUCTIVE if result.is_tumor else NotificationVariant.DEFAULT
    return Notification("Analysis Complete", f"Result: {result.prediction}", variant)


class AnalysisWorkflow:
    """Owns the workflow state and performs one prediction per :meth:`analyze` call.

    All transitions happen under a lock, so ``analyze`` may be invoked from a
    worker thread. Listeners and the notification sink are called outside the
    lock from whichever thread caused the transition.
    """

    def __init__(
        self,
        predictor: Predictor,
        *,
        notify: NotificationSink | None = None,
        on_change: StateListener | None = None,
    ) -> None:
        self._predictor = predictor
        self._notify = notify
        self._on_change = on_change
        self._state: WorkflowState = Idle()
        self._lock = Lock()

    @property
    def state(self) -> WorkflowState:
        with self._lock:
            return self._state

    @property
    def is_analyzing(self) -> bool:
        return self.state.is_analyzing

    def set_predictor(self, predictor: Predictor) -> None:
        with self._lock:
            if self._state.is_analyzing:
                raise WorkflowBusyError("The predictor cannot change during an analysis.")
            self._predictor = predictor

    def select_image(self, image: SelectedImage) -> WorkflowState:
        """Make ``image`` the current selection, discarding any previous outcome."""
        return self._transition(
            Selected(image), "A new image cannot be selected during an analysis."
        )

    def clear_selection(self) -> WorkflowState:
        return self._transition(Idle(), "The selection cannot be cleared during an analysis.")

    def analyze(self) -> WorkflowState:
        """Submit the selected image and record the outcome.

        Without a selection, or while another request is in flight, a
        notification is emitted and no request is made.
        """
        refusal: Notification | None = None
        analyzing: Analyzing | None = None
        with self._lock:
            current = self._state
            image = current.selected_image
            if current.is_analyzing:
                refusal = ANALYSIS_IN_PROGRESS
            elif image is None:
                refusal = NO_IMAGE_SELECTED
            else:
                analyzing = Analyzing(image)
                self._state = analyzing
        if analyzing is None:
            logger.info("Analysis not started: %s", refusal.title)
            self._emit_notification(refusal)
            return current

        final: WorkflowState = Failed(image, "The analysis was interrupted.")
        try:
            self._emit_change(analyzing)
            result = self._predictor.predict(image)
        except AnalysisError as exc:
            logger.warning("Analysis of %s failed: %s", image.filename, exc)
            final = Failed(image, exc.detail)
        except Exception as exc:
            logger.exception("Unexpected failure while analysing %s", image.filename)
            final = Failed(image, str(exc) or exc.__class__.__name__)
        else:
            final = Succeeded(image, result)
        finally:
            with self._lock:
                self._state = final
            self._emit_change(final)

        if isinstance(final, Succeeded):
            self._emit_notification(completion_notice(final.analysis))
        else:
            self._emit_notification(ANALYSIS_FAILED)
        return final

    def _transition(self, target: WorkflowState, busy_message: str) -> WorkflowState:
        with self._lock:
            if self._state.is_analyzing:
                raise WorkflowBusyError(busy_message)
            self._state = target
        self._emit_change(target)
        return target

    def _emit_change(self, state: WorkflowState) -> None:
        if self._on_change is not None:
            self._on_change(state)

    def _emit_notification(self, notification: Notification) -> None:
        if self._notify is not None:
            self._notify(notification)
