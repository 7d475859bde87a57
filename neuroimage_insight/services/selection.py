"""Image selection independent of any GUI toolkit."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from ..inference.base import SelectedImage, WorkflowBusyError
from ..utils.images import build_preview
from ..utils.paths import declared_content_type, is_image_type

logger = logging.getLogger(__name__)

SelectionCallback = Callable[[SelectedImage], None]


def load_image(path: Path, *, max_preview_size: int = 512) -> SelectedImage | None:
    """Read ``path`` into a :class:`SelectedImage` or return ``None`` for non-images."""
    content_type = declared_content_type(path)
    if not is_image_type(content_type):
        logger.debug("Ignoring %s with declared type %s", path, content_type)
        return None
    content = path.read_bytes()
    return SelectedImage(
        filename=path.name,
        content=content,
        content_type=content_type,
        source_path=path,
        preview=build_preview(content, max_size=max_preview_size),
    )


class ImageSelector:
    """Holds the currently chosen image and reports accepted selections.

    Drops and file-picker results both arrive through :meth:`offer_paths`;
    only the first candidate is considered and anything that does not declare
    an image type is ignored without touching the current selection.
    """

    def __init__(
        self,
        on_select: SelectionCallback | None = None,
        *,
        max_preview_size: int = 512,
    ) -> None:
        self._on_select = on_select
        self._max_preview_size = max_preview_size
        self._current: SelectedImage | None = None
        self._locked = False

    @property
    def current(self) -> SelectedImage | None:
        return self._current

    @property
    def locked(self) -> bool:
        return self._locked

    def set_locked(self, locked: bool) -> None:
        self._locked = locked

    def set_max_preview_size(self, max_size: int) -> None:
        self._max_preview_size = max_size

    def offer_paths(self, paths: Iterable[Path]) -> SelectedImage | None:
        self._ensure_unlocked("A new image cannot be selected during an analysis.")
        first = next(iter(paths), None)
        if first is None:
            return None
        image = load_image(first, max_preview_size=self._max_preview_size)
        if image is None:
            return None
        return self._accept(image)

    def offer_bytes(
        self, filename: str, content: bytes, content_type: str
    ) -> SelectedImage | None:
        self._ensure_unlocked("A new image cannot be selected during an analysis.")
        if not is_image_type(content_type):
            logger.debug("Ignoring %s with declared type %s", filename, content_type)
            return None
        image = SelectedImage(
            filename=filename,
            content=content,
            content_type=content_type,
            preview=build_preview(content, max_size=self._max_preview_size),
        )
        return self._accept(image)

    def clear(self) -> None:
        self._ensure_unlocked("The selection cannot be cleared during an analysis.")
        self._current = None

    def restore(self, image: SelectedImage | None) -> None:
        """Show ``image`` again after a downstream consumer refused a newer one."""
        self._current = image

    def _accept(self, image: SelectedImage) -> SelectedImage:
        previous = self._current
        self._current = image
        logger.info("Selected %s (%s)", image.filename, image.content_type)
        if self._on_select is not None:
            try:
                self._on_select(image)
            except Exception:
                self._current = previous
                raise
        return image

    def _ensure_unlocked(self, message: str) -> None:
        if self._locked:
            raise WorkflowBusyError(message)
