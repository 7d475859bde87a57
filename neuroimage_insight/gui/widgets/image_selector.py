"""Widget that accepts a brain scan via drag & drop or a file picker."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import (
    QColor,
    QDragEnterEvent,
    QDragLeaveEvent,
    QDragMoveEvent,
    QDropEvent,
    QPainter,
    QPaintEvent,
    QPen,
    QPixmap,
)
from PySide6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ...inference.base import SelectedImage, WorkflowBusyError
from ...services.selection import ImageSelector
from ...utils.paths import IMAGE_FILE_FILTER


class ImageSelectorWidget(QWidget):
    image_selected = Signal(object)
    cleared = Signal()

    def __init__(self, max_preview_size: int = 512, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setAcceptDrops(True)
        self.setObjectName("ImageSelector")
        self.setMinimumHeight(300)
        self._active = False
        self._selector = ImageSelector(
            self.image_selected.emit, max_preview_size=max_preview_size
        )

        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(12)

        self._preview = QLabel()
        self._preview.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._preview.setMinimumHeight(200)
        layout.addWidget(self._preview, stretch=1)

        self._label = QLabel("Drag and drop your brain scan image")
        self._label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._label.setWordWrap(True)
        layout.addWidget(self._label)

        button_row = QHBoxLayout()
        button_row.addStretch()
        self.browse_btn = QPushButton("Browse Files")
        self.browse_btn.clicked.connect(self._choose_file)
        self.clear_btn = QPushButton("Remove Image")
        self.clear_btn.clicked.connect(self._clear)
        self.clear_btn.setEnabled(False)
        button_row.addWidget(self.browse_btn)
        button_row.addWidget(self.clear_btn)
        button_row.addStretch()
        layout.addLayout(button_row)

        self.setToolTip("Drop an MRI or CT image, or click Browse Files.")

    @property
    def current(self) -> SelectedImage | None:
        return self._selector.current

    def set_max_preview_size(self, max_size: int) -> None:
        self._selector.set_max_preview_size(max_size)

    def set_busy(self, busy: bool) -> None:
        """Lock the selection while an analysis is in flight."""
        self._selector.set_locked(busy)
        self.setAcceptDrops(not busy)
        self.browse_btn.setEnabled(not busy)
        self.clear_btn.setEnabled(not busy and self._selector.current is not None)
        self._label.setText("Analyzing Image..." if busy else self._idle_text())

    def restore(self, image: SelectedImage | None) -> None:
        """Display ``image`` again after the workflow refused a newer selection."""
        self._selector.restore(image)
        if image is not None:
            self._show_preview(image)
            return
        self._preview.clear()
        self._label.setText(self._idle_text())
        self.clear_btn.setEnabled(False)
        self.update()

    def paintEvent(self, event: QPaintEvent | None = None) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        rect = self.rect().adjusted(1, 1, -1, -1)
        if self._active:
            border_color = QColor(59, 130, 246)
            painter.fillRect(rect, QColor(239, 246, 255))
        elif self._selector.current is not None:
            border_color = QColor(34, 197, 94)
        else:
            border_color = QColor(209, 213, 219)
        pen = QPen(border_color, 2, Qt.PenStyle.DashLine)
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawRoundedRect(rect, 8, 8)

        super().paintEvent(event)

    def dragEnterEvent(self, event: QDragEnterEvent) -> None:
        if event.mimeData().hasUrls():
            event.acceptProposedAction()
            self._active = True
            self.update()
        else:
            event.ignore()

    def dragMoveEvent(self, event: QDragMoveEvent) -> None:
        if event.mimeData().hasUrls():
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event: QDropEvent) -> None:
        self._active = False
        self.update()
        urls = [url for url in event.mimeData().urls() if url.isLocalFile()]
        if not urls:
            event.ignore()
            return
        event.acceptProposedAction()
        self._offer(Path(urls[0].toLocalFile()))

    def dragLeaveEvent(self, event: QDragLeaveEvent) -> None:
        if self._active:
            self._active = False
            self.update()

    # --- Event handlers -------------------------------------------------

    def _choose_file(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Select brain scan", "", IMAGE_FILE_FILTER)
        if path:
            self._offer(Path(path))

    def _offer(self, path: Path) -> None:
        try:
            image = self._selector.offer_paths([path])
        except WorkflowBusyError:
            return
        # The selection may have been rolled back by an image_selected slot.
        if image is not None and self._selector.current is image:
            self._show_preview(image)

    def _clear(self) -> None:
        self._selector.clear()
        self._preview.clear()
        self._label.setText(self._idle_text())
        self.clear_btn.setEnabled(False)
        self.update()
        self.cleared.emit()

    def _show_preview(self, image: SelectedImage) -> None:
        pixmap = QPixmap()
        if image.preview is not None and pixmap.loadFromData(image.preview, "PNG"):
            self._preview.setPixmap(pixmap)
        else:
            self._preview.setText("Preview unavailable")
        self._label.setText(self._idle_text())
        self.clear_btn.setEnabled(not self._selector.locked)
        self.update()

    def _idle_text(self) -> str:
        current = self._selector.current
        if current is None:
            return "Drag and drop your brain scan image"
        return f"Image selected: {current.filename}"
