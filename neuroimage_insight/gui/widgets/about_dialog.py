"""About dialog presenting metadata, the medical disclaimer and environment information."""

from __future__ import annotations

import platform
import sys
from importlib import metadata

import PIL
import pydantic
import requests
from PySide6 import __version__ as PYSIDE_VERSION
from PySide6.QtCore import Qt, qVersion
from PySide6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QLabel,
    QPlainTextEdit,
    QVBoxLayout,
    QWidget,
)

from ...config import AppConfig

DISCLAIMER = (
    "This AI-powered tool is for educational and screening purposes only. "
    "It should not replace professional medical diagnosis. "
    "Always consult healthcare professionals for comprehensive medical advice."
)


def _get_package_metadata() -> tuple[str, str]:
    """Return (version, summary) from package metadata."""
    try:
        pkg_version = metadata.version("neuroimage-insight")
        summary = metadata.metadata("neuroimage-insight").get("Summary", "")
        return pkg_version, summary
    except metadata.PackageNotFoundError:
        return "0.1.0-dev", ""


def _gather_environment(config: AppConfig) -> str:
    timeout = f"{config.request_timeout}s" if config.request_timeout else "transport default"
    lines = [
        f"Python: {platform.python_version()} ({sys.executable})",
        f"Platform: {platform.platform()}",
        f"PySide6: {PYSIDE_VERSION} / Qt: {qVersion()}",
        f"Requests: {requests.__version__}",
        f"Pydantic: {pydantic.VERSION}",
        f"Pillow: {PIL.__version__}",
        f"Prediction endpoint: {config.endpoint_url}",
        f"Request timeout: {timeout}",
        f"Authentication: {'bearer token' if config.api_key else 'none'}",
    ]
    return "\n".join(lines)


class AboutDialog(QDialog):
    """Simple about dialog with project metadata and env info."""

    def __init__(self, config: AppConfig, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("About NeuroImage Insight")

        version, summary = _get_package_metadata()
        description = summary or "Brain tumor detection client for a remote prediction service."
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        title_label = QLabel("<h2>NeuroImage Insight</h2>")
        title_label.setTextFormat(Qt.TextFormat.RichText)
        layout.addWidget(title_label)

        layout.addWidget(QLabel(f"Version {version}"))

        desc_label = QLabel(description)
        desc_label.setWordWrap(True)
        layout.addWidget(desc_label)

        disclaimer_label = QLabel(f"<b>Medical Disclaimer</b><br>{DISCLAIMER}")
        disclaimer_label.setTextFormat(Qt.TextFormat.RichText)
        disclaimer_label.setWordWrap(True)
        layout.addWidget(disclaimer_label)

        env_label = QLabel("<b>Environment</b>")
        env_label.setTextFormat(Qt.TextFormat.RichText)
        layout.addWidget(env_label)

        env_text = QPlainTextEdit()
        env_text.setReadOnly(True)
        env_text.setPlainText(_gather_environment(config))
        env_text.setMinimumHeight(160)
        layout.addWidget(env_text)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Close)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)
