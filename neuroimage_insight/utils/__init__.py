"""Utility helpers for the NeuroImage Insight package."""

from .images import build_preview
from .paths import declared_content_type, is_image_file, is_image_type

__all__ = ["build_preview", "declared_content_type", "is_image_file", "is_image_type"]
