"""Pixel pipeline for the editor.

The package splits the work into two pieces:
- color: NumPy implementations of the colour controls
- pipeline: the Pillow adapter applying rotation, catalog filters and crops
"""

from __future__ import annotations

from .pipeline import FilterCapability, FilteredImage, FilterPipeline

__all__ = ["FilterCapability", "FilterPipeline", "FilteredImage"]
