"""Main Qt window implementing the user interface."""

from __future__ import annotations

import logging

from PySide6 import QtCore
from PySide6.QtCore import QThreadPool
from PySide6.QtGui import QCloseEvent, QGuiApplication
from PySide6.QtWidgets import (
    QApplication,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from ..config import AppConfig
from ..inference.base import SelectedImage, WorkflowBusyError
from ..inference.remote import PredictionClient
from ..services.presenter import present_result
from ..services.workflow import AnalysisWorkflow, Notification, Phase, WorkflowState
from ..settings_store import SettingsStore
from .widgets.about_dialog import DISCLAIMER, AboutDialog
from .widgets.image_selector import ImageSelectorWidget
from .widgets.result_card import ResultCard
from .widgets.settings_form import SettingsDialog
from .widgets.status_panel import StatusPanel
from .workers import AnalysisWorker, WorkflowSignals

logger = logging.getLogger(__name__)

_STATUS_TEXT = {
    Phase.IDLE: "Select a brain scan to begin.",
    Phase.SELECTED: "Ready to analyze.",
    Phase.ANALYZING: "Contacting prediction service…",
    Phase.SUCCEEDED: "Analysis complete.",
    Phase.FAILED: "Analysis failed.",
}


class MainWindow(QMainWindow):
    """Primary application window."""

    def __init__(
        self,
        settings_store: SettingsStore | None = None,
        config: AppConfig | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("NeuroImage Insight")
        self.resize(880, 900)

        self.settings_store = settings_store or SettingsStore()
        self.config: AppConfig = config or self.settings_store.load_or_default()
        self.client = PredictionClient(self.config)
        self.thread_pool = QThreadPool()
        self._cursor_busy = False

        self.workflow_signals = WorkflowSignals()
        self.workflow_signals.state_changed.connect(self._on_state_changed)
        self.workflow_signals.notified.connect(self._show_notification)
        self.workflow = AnalysisWorkflow(
            self.client,
            notify=self.workflow_signals.notified.emit,
            on_change=self.workflow_signals.state_changed.emit,
        )

        self._build_ui()
        self._build_menus()
        self._on_state_changed(self.workflow.state)

    def _build_ui(self) -> None:
        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(central)
        self.setCentralWidget(scroll)

        title = QLabel("<h1>NeuroImage Insight</h1><p>Brain Tumor Detection AI</p>")
        title.setTextFormat(QtCore.Qt.TextFormat.RichText)
        layout.addWidget(title)

        self.info_label = QLabel(
            "Upload a clear MRI or CT scan for AI-powered tumor detection. "
            "The image is sent to the configured prediction service for analysis."
        )
        self.info_label.setWordWrap(True)
        layout.addWidget(self.info_label)

        self.selector = ImageSelectorWidget(self.config.preview_max_size)
        self.selector.image_selected.connect(self._on_image_selected)
        self.selector.cleared.connect(self._on_selection_cleared)
        layout.addWidget(self.selector)

        self.analyze_btn = QPushButton("Analyze Brain Scan")
        self.analyze_btn.clicked.connect(self._analyze)
        layout.addWidget(self.analyze_btn)

        self.status_panel = StatusPanel()
        layout.addWidget(self.status_panel)

        self.result_card = ResultCard()
        layout.addWidget(self.result_card)

        disclaimer = QLabel(f"<b>Medical Disclaimer</b><br>{DISCLAIMER}")
        disclaimer.setTextFormat(QtCore.Qt.TextFormat.RichText)
        disclaimer.setWordWrap(True)
        layout.addWidget(disclaimer)
        layout.addStretch()

        status = QStatusBar()
        self.setStatusBar(status)
        self._rebuild_status_bar()

    def _build_menus(self) -> None:
        menu_bar = self.menuBar()
        file_menu = menu_bar.addMenu("&File")
        self.settings_action = file_menu.addAction("Settings…")
        self.settings_action.triggered.connect(self._open_settings)
        file_menu.addSeparator()
        quit_action = file_menu.addAction("Quit")
        quit_action.triggered.connect(self.close)

        help_menu = menu_bar.addMenu("&Help")
        about_action = help_menu.addAction("About NeuroImage Insight…")
        about_action.triggered.connect(self._show_about_dialog)

    def _rebuild_status_bar(self) -> None:
        self.statusBar().setStyleSheet("")
        self.statusBar().showMessage(f"Endpoint: {self.config.endpoint_url}")

    # --- Event handlers -------------------------------------------------

    def _on_image_selected(self, image: SelectedImage) -> None:
        try:
            self.workflow.select_image(image)
        except WorkflowBusyError as exc:
            logger.info("Selection of %s refused: %s", image.filename, exc)
            self.selector.restore(self.workflow.state.selected_image)

    def _on_selection_cleared(self) -> None:
        try:
            self.workflow.clear_selection()
        except WorkflowBusyError as exc:
            logger.info("Clearing refused: %s", exc)
            self.selector.restore(self.workflow.state.selected_image)

    def _analyze(self) -> None:
        state = self.workflow.state
        if state.selected_image is not None and not state.is_analyzing:
            # Lock now; the Analyzing state change arrives through a queued signal.
            self.selector.set_busy(True)
        worker = AnalysisWorker(self.workflow)
        worker.signals.error.connect(self._on_worker_error)
        self.thread_pool.start(worker)

    def _on_worker_error(self, message: str) -> None:
        self.selector.set_busy(self.workflow.is_analyzing)
        QMessageBox.critical(self, "Analysis error", message)

    def _on_state_changed(self, state: WorkflowState) -> None:
        busy = state.is_analyzing
        self.selector.set_busy(busy)
        self.settings_action.setEnabled(not busy)
        self.analyze_btn.setEnabled(state.selected_image is not None and not busy)
        self.analyze_btn.setText("Analyzing Image..." if busy else "Analyze Brain Scan")
        self._set_busy_cursor(busy)

        self.status_panel.set_busy(busy, _STATUS_TEXT[state.phase])
        if state.error_detail:
            self.status_panel.show_detail(state.error_detail)
        else:
            self.status_panel.clear_detail()
        self.result_card.show_result(present_result(state.result))

    def _show_notification(self, notification: Notification) -> None:
        colour = "#b91c1c" if notification.destructive else ""
        self.statusBar().setStyleSheet(f"color: {colour};" if colour else "")
        self.statusBar().showMessage(
            f"{notification.title}: {notification.description}",
            self.config.notification_timeout_ms,
        )

    def _set_busy_cursor(self, active: bool) -> None:
        app = QApplication.instance()
        if app is None:
            return
        if active and not self._cursor_busy:
            QGuiApplication.setOverrideCursor(QtCore.Qt.CursorShape.WaitCursor)
            self._cursor_busy = True
        elif not active and self._cursor_busy:
            QGuiApplication.restoreOverrideCursor()
            self._cursor_busy = False

    def _open_settings(self) -> None:
        dialog = SettingsDialog(self.config, self)
        if dialog.exec() != dialog.DialogCode.Accepted:
            return
        self._apply_new_config(dialog.config())

    def _apply_new_config(self, config: AppConfig) -> None:
        client = PredictionClient(config)
        self.workflow.set_predictor(client)
        self.client.close()
        self.client = client
        self.config = config
        self.settings_store.save(config)
        self.selector.set_max_preview_size(config.preview_max_size)
        self._rebuild_status_bar()
        logger.info("Prediction endpoint set to %s", config.endpoint_url)

    def _show_about_dialog(self) -> None:
        dialog = AboutDialog(self.config, self)
        dialog.exec()

    def closeEvent(self, event: QCloseEvent) -> None:
        self.thread_pool.waitForDone()
        self.client.close()
        super().closeEvent(event)
