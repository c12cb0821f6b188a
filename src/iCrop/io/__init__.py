"""Reading and writing photos and their stored edits."""

from __future__ import annotations

from .image_loader import load_full_image, make_preview, save_image
from .sidecar import load_attributes, load_attributes_or_default, save_attributes, sidecar_path_for

__all__ = [
    "load_attributes",
    "load_attributes_or_default",
    "load_full_image",
    "make_preview",
    "save_attributes",
    "save_image",
    "sidecar_path_for",
]
