"""Card rendering the verdict returned by the prediction endpoint."""

from __future__ import annotations

from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QProgressBar, QVBoxLayout, QWidget

from ...services.presenter import ResultView


class ResultCard(QFrame):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("ResultCard")
        self.setFrameShape(QFrame.Shape.StyledPanel)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(8)

        self._heading = QLabel("Analysis Results")
        self._heading.setStyleSheet("font-size: 16px; font-weight: 600;")
        self._prediction = QLabel()
        self._prediction.setStyleSheet("font-size: 20px; font-weight: 700;")

        confidence_row = QHBoxLayout()
        confidence_row.addWidget(QLabel("Confidence Level"))
        confidence_row.addStretch()
        self._percentage = QLabel()
        confidence_row.addWidget(self._percentage)

        self._bar = QProgressBar()
        self._bar.setRange(0, 100)
        self._bar.setTextVisible(False)
        self._bar.setFixedHeight(8)

        self._advisory = QLabel()
        self._advisory.setWordWrap(True)
        self._advisory.setStyleSheet("color: #6b7280;")

        layout.addWidget(self._heading)
        layout.addWidget(self._prediction)
        layout.addLayout(confidence_row)
        layout.addWidget(self._bar)
        layout.addWidget(self._advisory)

        self.setVisible(False)

    def show_result(self, view: ResultView | None) -> None:
        if view is None:
            self.setVisible(False)
            return
        self._prediction.setText(view.prediction)
        self._prediction.setStyleSheet(
            f"font-size: 20px; font-weight: 700; color: {view.tone.color};"
        )
        self._percentage.setText(view.percentage_text)
        self._bar.setValue(view.percentage)
        self._bar.setStyleSheet(
            f"QProgressBar {{ background: {view.tone.background}; border: none; }}"
            f"QProgressBar::chunk {{ background: {view.tone.color}; }}"
        )
        self._advisory.setText(view.advisory)
        self.setVisible(True)
