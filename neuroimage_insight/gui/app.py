"""Application bootstrap for the Qt-based GUI."""

from __future__ import annotations

import sys

from PySide6.QtWidgets import QApplication

from ..config import AppConfig
from .main_window import MainWindow


def run_app(config: AppConfig | None = None) -> None:
    """Launch the GUI application."""
    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("NeuroImage Insight")
    window = MainWindow(config=config)
    window.show()
    app.exec()
