"""Tests for path and preview helpers."""

from __future__ import annotations

import io
from pathlib import Path

from PIL import Image

from neuroimage_insight.utils.images import build_preview
from neuroimage_insight.utils.paths import declared_content_type, is_image_file, is_image_type


def test_declared_content_type_from_extension():
    assert declared_content_type(Path("scan.JPG")) == "image/jpeg"
    assert declared_content_type(Path("scan")) is None


def test_is_image_type():
    assert is_image_type("image/png")
    assert is_image_type("IMAGE/TIFF")
    assert not is_image_type("application/dicom")
    assert not is_image_type(None)
    assert not is_image_type("")


def test_is_image_file():
    assert is_image_file(Path("brain.png"))
    assert not is_image_file(Path("brain.txt"))


def test_build_preview_limits_longest_edge():
    buffer = io.BytesIO()
    Image.new("RGB", (400, 100), color=(1, 2, 3)).save(buffer, format="JPEG")

    preview = build_preview(buffer.getvalue(), max_size=100)

    assert preview is not None
    with Image.open(io.BytesIO(preview)) as rendered:
        assert rendered.format == "PNG"
        assert rendered.size == (100, 25)


def test_build_preview_converts_cmyk():
    buffer = io.BytesIO()
    Image.new("CMYK", (10, 10)).save(buffer, format="JPEG")

    preview = build_preview(buffer.getvalue())

    assert preview is not None
    with Image.open(io.BytesIO(preview)) as rendered:
        assert rendered.mode == "RGBA"


def test_build_preview_returns_none_for_garbage():
    assert build_preview(b"garbage") is None
