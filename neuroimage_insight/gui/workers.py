"""Qt worker objects used to run analysis off the main thread."""

from __future__ import annotations

from PySide6.QtCore import QObject, QRunnable, Signal

from ..services.workflow import AnalysisWorkflow


class WorkflowSignals(QObject):
    """Re-emits workflow callbacks so they are delivered on the GUI thread."""

    state_changed = Signal(object)
    notified = Signal(object)


class WorkerSignals(QObject):
    error = Signal(str)


class AnalysisWorker(QRunnable):
    """Runs a single prediction request on a background worker thread."""

    def __init__(self, workflow: AnalysisWorkflow) -> None:
        super().__init__()
        self.workflow = workflow
        self.signals = WorkerSignals()

    def run(self) -> None:
        try:
            self.workflow.analyze()
        except Exception as exc:  # pragma: no cover - safety net for GUI worker
            self.signals.error.emit(str(exc))
