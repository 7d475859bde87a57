"""Path helpers used across the application."""

from __future__ import annotations

import mimetypes
from pathlib import Path

IMAGE_FILE_FILTER = "Images (*.png *.jpg *.jpeg *.webp *.bmp *.gif *.tif *.tiff)"


def declared_content_type(path: Path) -> str | None:
    """Return the MIME type implied by the file name, if any."""
    content_type, _ = mimetypes.guess_type(path.name)
    return content_type


def is_image_type(content_type: str | None) -> bool:
    """Return True if ``content_type`` declares an image."""
    return bool(content_type) and content_type.lower().startswith("image/")


def is_image_file(path: Path) -> bool:
    """Return True if the given path declares an image type by its name."""
    return is_image_type(declared_content_type(path))
