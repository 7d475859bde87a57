"""Tests for the toolkit-independent image selector."""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from PIL import Image

from neuroimage_insight.inference.base import WorkflowBusyError
from neuroimage_insight.services.selection import ImageSelector, load_image


def _write_png(path: Path, size: tuple[int, int] = (32, 16)) -> Path:
    Image.new("RGB", size, color=(120, 120, 120)).save(path, format="PNG")
    return path


def _png_bytes() -> bytes:
    buffer = io.BytesIO()
    Image.new("L", (8, 8)).save(buffer, format="PNG")
    return buffer.getvalue()


def test_load_image_reads_bytes_and_builds_preview(tmp_path):
    path = _write_png(tmp_path / "scan.png")

    image = load_image(path, max_preview_size=64)

    assert image is not None
    assert image.filename == "scan.png"
    assert image.content_type == "image/png"
    assert image.content == path.read_bytes()
    assert image.source_path == path
    assert image.has_preview


def test_load_image_ignores_non_images(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("hello", encoding="utf-8")

    assert load_image(path) is None


def test_undecodable_image_is_accepted_without_preview(tmp_path):
    path = tmp_path / "broken.jpg"
    path.write_bytes(b"not really a jpeg")

    image = load_image(path)

    assert image is not None
    assert image.content_type == "image/jpeg"
    assert image.preview is None


def test_non_image_never_changes_selection_or_fires_callback(tmp_path):
    selected = []
    selector = ImageSelector(selected.append)
    first = selector.offer_paths([_write_png(tmp_path / "first.png")])
    document = tmp_path / "report.pdf"
    document.write_bytes(b"%PDF-1.4")

    assert selector.offer_paths([document]) is None
    assert selector.current is first
    assert selected == [first]


def test_only_the_first_dropped_file_is_considered(tmp_path):
    selected = []
    selector = ImageSelector(selected.append)
    document = tmp_path / "notes.txt"
    document.write_text("x", encoding="utf-8")
    image_path = _write_png(tmp_path / "scan.png")

    assert selector.offer_paths([document, image_path]) is None
    assert selector.current is None
    assert selected == []

    chosen = selector.offer_paths([image_path, document])
    assert chosen is not None and chosen.filename == "scan.png"


def test_new_selection_replaces_previous_preview(tmp_path):
    selector = ImageSelector()
    first = selector.offer_paths([_write_png(tmp_path / "a.png", (10, 10))])
    second = selector.offer_paths([_write_png(tmp_path / "b.png", (20, 20))])

    assert selector.current is second
    assert second.preview != first.preview


def test_offer_empty_drop_is_ignored():
    selector = ImageSelector()
    assert selector.offer_paths([]) is None


def test_offer_bytes_respects_declared_type():
    selected = []
    selector = ImageSelector(selected.append)

    assert selector.offer_bytes("scan.bin", b"data", "application/octet-stream") is None
    image = selector.offer_bytes("scan.png", _png_bytes(), "image/png")

    assert selected == [image]
    assert image.has_preview


def test_clear_and_lock(tmp_path):
    selector = ImageSelector()
    selector.offer_paths([_write_png(tmp_path / "scan.png")])

    selector.set_locked(True)
    with pytest.raises(WorkflowBusyError):
        selector.clear()
    with pytest.raises(WorkflowBusyError):
        selector.offer_paths([tmp_path / "scan.png"])
    assert selector.current is not None

    selector.set_locked(False)
    selector.clear()
    assert selector.current is None


def test_refused_selection_keeps_previous_image(tmp_path):
    accepted = []

    def on_select(image):
        if accepted:
            raise WorkflowBusyError("A new image cannot be selected during an analysis.")
        accepted.append(image)

    selector = ImageSelector(on_select)
    first = selector.offer_paths([_write_png(tmp_path / "first.png")])

    with pytest.raises(WorkflowBusyError):
        selector.offer_paths([_write_png(tmp_path / "second.png")])

    assert selector.current is first
    assert accepted == [first]


def test_restore_replaces_current_without_callback(tmp_path):
    selected = []
    selector = ImageSelector(selected.append)
    first = selector.offer_paths([_write_png(tmp_path / "first.png")])
    selector.offer_paths([_write_png(tmp_path / "second.png")])

    selector.restore(first)

    assert selector.current is first
    assert len(selected) == 2
