"""Pillow helpers for rendering local previews of selected scans."""

from __future__ import annotations

import io
import logging

from PIL import Image, ImageOps, UnidentifiedImageError

logger = logging.getLogger(__name__)


def build_preview(content: bytes, *, max_size: int = 512) -> bytes | None:
    """Return a PNG thumbnail of ``content`` or ``None`` if it cannot be decoded.

    The thumbnail keeps the aspect ratio, honours EXIF orientation and never
    exceeds ``max_size`` pixels on its longest edge.
    """
    try:
        with Image.open(io.BytesIO(content)) as img:
            oriented = ImageOps.exif_transpose(img)
            oriented.thumbnail((max_size, max_size))
            if oriented.mode not in {"RGB", "RGBA", "L", "LA"}:
                oriented = oriented.convert("RGBA")
            buffer = io.BytesIO()
            oriented.save(buffer, format="PNG")
    except (UnidentifiedImageError, OSError) as exc:
        logger.warning("Unable to render preview: %s", exc)
        return None
    return buffer.getvalue()
