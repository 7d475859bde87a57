"""Dialog that exposes application settings with validation."""

from __future__ import annotations

from functools import partial

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QDoubleSpinBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLineEdit,
    QMessageBox,
    QSpinBox,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from ...config import AppConfig


class SettingsDialog(QDialog):
    """Shows a validated form for editing application configuration."""

    def __init__(self, config: AppConfig, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self._original_config = config
        self._config: AppConfig | None = None
        self._field_min_width = 320

        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(12, 12, 12, 12)
        main_layout.setSpacing(12)

        self.endpoint_edit = QLineEdit(config.endpoint_url)
        self._normalise_width(self.endpoint_edit)

        self.api_key_edit = QLineEdit(config.api_key or "")
        self.api_key_edit.setEchoMode(QLineEdit.EchoMode.PasswordEchoOnEdit)
        self._normalise_width(self.api_key_edit)

        # 0 maps to "no timeout" so the transport default applies.
        self.timeout_spin = QDoubleSpinBox()
        self.timeout_spin.setRange(0.0, 600.0)
        self.timeout_spin.setDecimals(1)
        self.timeout_spin.setSingleStep(5.0)
        self.timeout_spin.setSpecialValueText("Transport default")
        self.timeout_spin.setValue(config.request_timeout or 0.0)
        self._normalise_width(self.timeout_spin)

        self.preview_spin = QSpinBox()
        self.preview_spin.setRange(64, 4096)
        self.preview_spin.setSingleStep(64)
        self.preview_spin.setValue(config.preview_max_size)
        self._normalise_width(self.preview_spin)

        self.notification_spin = QSpinBox()
        self.notification_spin.setRange(500, 60000)
        self.notification_spin.setSingleStep(500)
        self.notification_spin.setSuffix(" ms")
        self.notification_spin.setValue(config.notification_timeout_ms)
        self._normalise_width(self.notification_spin)

        remote_group = QGroupBox("Prediction Endpoint")
        remote_form = self._create_form_layout()
        remote_form.addRow(
            "Endpoint URL",
            self._with_help(
                self.endpoint_edit,
                "Endpoint URL",
                "Full URL of the prediction service, e.g. http://localhost:5000/predict. "
                "The scan is uploaded there as multipart form data.",
            ),
        )
        remote_form.addRow(
            "API key",
            self._with_help(
                self.api_key_edit,
                "API key",
                "Optional bearer token sent with every request. Leave empty if the "
                "endpoint is unsecured.",
            ),
        )
        remote_form.addRow(
            "Timeout (s)",
            self._with_help(
                self.timeout_spin,
                "Timeout",
                "How long to wait for the endpoint to answer. Leave at 'Transport default' "
                "to wait as long as the connection allows.",
            ),
        )
        remote_group.setLayout(remote_form)
        main_layout.addWidget(remote_group)

        display_group = QGroupBox("Display")
        display_form = self._create_form_layout()
        display_form.addRow(
            "Preview size (px)",
            self._with_help(
                self.preview_spin,
                "Preview size",
                "Longest edge of the local preview shown after selecting a scan.",
            ),
        )
        display_form.addRow(
            "Notification duration",
            self._with_help(
                self.notification_spin,
                "Notification duration",
                "How long status-bar notifications stay visible.",
            ),
        )
        display_group.setLayout(display_form)
        main_layout.addWidget(display_group)

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Save | QDialogButtonBox.StandardButton.Cancel
        )
        buttons.accepted.connect(self._on_accept)
        buttons.rejected.connect(self.reject)
        main_layout.addWidget(buttons, alignment=Qt.AlignmentFlag.AlignRight)

        self.setMinimumWidth(520)

    def _on_accept(self) -> None:
        data = self._collect_form_data()
        try:
            self._config = AppConfig.model_validate(data)
        except ValueError as exc:
            QMessageBox.critical(self, "Invalid settings", str(exc))
            return
        self.accept()

    def _collect_form_data(self) -> dict[str, object]:
        timeout = self.timeout_spin.value()
        return {
            "endpoint_url": self.endpoint_edit.text(),
            "api_key": self.api_key_edit.text() or None,
            "request_timeout": timeout if timeout > 0 else None,
            "preview_max_size": self.preview_spin.value(),
            "notification_timeout_ms": self.notification_spin.value(),
        }

    def config(self) -> AppConfig:
        return self._config or self._original_config

    def _with_help(self, widget: QWidget, title: str, message: str) -> QWidget:
        container = QWidget()
        layout = QHBoxLayout(container)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(widget)
        layout.addStretch()
        layout.addWidget(self._make_help_button(title, message))
        self._normalise_width(container)
        return container

    def _make_help_button(self, title: str, message: str) -> QToolButton:
        button = QToolButton(self)
        button.setText("?")
        button.setAutoRaise(True)
        button.setFixedSize(24, 24)
        button.clicked.connect(partial(QMessageBox.information, self, title, message))
        return button

    def _normalise_width(self, widget: QWidget) -> None:
        widget.setMinimumWidth(self._field_min_width)

    def _create_form_layout(self) -> QFormLayout:
        layout = QFormLayout()
        layout.setFieldGrowthPolicy(QFormLayout.FieldGrowthPolicy.AllNonFixedFieldsGrow)
        layout.setLabelAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        return layout
