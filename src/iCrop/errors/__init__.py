"""Custom exception hierarchy for iCrop."""

from __future__ import annotations


class ICropError(Exception):
    """Base class for all custom errors raised by iCrop."""


class OutOfBoundsCropError(ICropError):
    """Raised when a resolved crop rectangle leaves the source pixel buffer.

    The engine never clamps such rectangles: an out-of-bounds crop means the
    alignment step upstream let the image stop covering the frame.
    """

    def __init__(self, rect: object, bounds: tuple[float, float]) -> None:
        super().__init__(f"Crop {rect} exceeds image bounds {bounds[0]:g}x{bounds[1]:g}")
        self.rect = rect
        self.bounds = bounds


class FilterUnavailableError(ICropError):
    """Raised when the filter pipeline cannot produce an output image."""


class ParametersInvalidError(ICropError):
    """Raised when stored editor parameters are missing or cannot be parsed."""
