"""Reusable widget showing request progress and inline error detail."""

from __future__ import annotations

from PySide6.QtWidgets import QLabel, QPlainTextEdit, QProgressBar, QVBoxLayout, QWidget


class StatusPanel(QWidget):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(4)

        self._progress = QProgressBar()
        self._progress.setRange(0, 1)
        self._progress.setValue(0)
        self._progress.setTextVisible(False)
        self._progress.setVisible(False)

        self._status = QLabel("Idle")
        self._status.setWordWrap(True)

        self._detail = QPlainTextEdit()
        self._detail.setReadOnly(True)
        self._detail.setObjectName("errorDetail")
        self._detail.setMaximumHeight(120)
        self._detail.setStyleSheet("color: #b91c1c;")
        self._detail.setVisible(False)

        layout.addWidget(self._progress)
        layout.addWidget(self._status)
        layout.addWidget(self._detail)

    def set_busy(self, busy: bool, message: str = "") -> None:
        self._progress.setRange(0, 0 if busy else 1)
        self._progress.setVisible(busy)
        if message:
            self._status.setText(message)

    def show_detail(self, detail: str) -> None:
        self._detail.setPlainText(detail)
        self._detail.setVisible(True)

    def clear_detail(self) -> None:
        self._detail.clear()
        self._detail.setVisible(False)
