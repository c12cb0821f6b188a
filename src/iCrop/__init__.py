"""Frame-alignment photo editing engine.

The package keeps an interactively rotated, zoomed and panned photo covering a
fixed output frame and resolves the final full-resolution crop.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
