"""Output frame shapes and their on-canvas size."""

from __future__ import annotations

from enum import Enum

from ..config import CIRCLE_FILL_FRACTION, FRAME_FILL_FRACTION
from .geometry import EMPTY_SIZE, Size2


class FrameShape(Enum):
    """Shape of the fixed frame the final crop has to fill."""

    ORIGINAL = "original"
    RATIO_4X3 = "4:3"
    SQUARE = "square"
    RATIO_3X4 = "3:4"
    CIRCLE = "circle"

    @property
    def is_round(self) -> bool:
        """Return ``True`` when the front end should mask the frame as a circle."""

        return self is FrameShape.CIRCLE

    def frame_size(self, image_size: Size2, canvas_size: Size2) -> Size2:
        """Return the frame size laid out inside *canvas_size*.

        ``ORIGINAL`` follows the aspect ratio of *image_size*; every other shape
        only depends on the canvas.  An empty canvas (or an empty image for
        ``ORIGINAL``) yields an empty size.
        """

        if canvas_size.is_empty:
            return EMPTY_SIZE

        if self is FrameShape.ORIGINAL:
            if image_size.is_empty:
                return EMPTY_SIZE
            ratio = image_size.max_ratio(canvas_size)
            return image_size.scaled(FRAME_FILL_FRACTION / ratio)
        if self is FrameShape.RATIO_4X3:
            width = canvas_size.width * FRAME_FILL_FRACTION
            return Size2(width, width / 4.0 * 3.0)
        if self is FrameShape.RATIO_3X4:
            height = canvas_size.height * FRAME_FILL_FRACTION
            return Size2(height / 4.0 * 3.0, height)
        if self is FrameShape.SQUARE:
            side = min(canvas_size.width, canvas_size.height) * FRAME_FILL_FRACTION
            return Size2(side, side)
        side = min(canvas_size.width, canvas_size.height) * CIRCLE_FILL_FRACTION
        return Size2(side, side)
