"""EXIF orientation values and how they map display vectors to stored pixels.

A photo's pixels may be stored rotated or mirrored relative to how it is
displayed; the EXIF ``Orientation`` tag (0x0112) records which of eight
transforms brings the stored buffer upright.  Offsets measured on screen have
to be mapped through the inverse of that transform before they can address
the stored buffer.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, Mapping

from PIL import Image

from .geometry import Vector2

EXIF_ORIENTATION_TAG = 0x0112


class ImageOrientation(IntEnum):
    """The eight standard EXIF orientations."""

    UP = 1
    UP_MIRRORED = 2
    DOWN = 3
    DOWN_MIRRORED = 4
    LEFT_MIRRORED = 5
    RIGHT = 6
    RIGHT_MIRRORED = 7
    LEFT = 8

    @classmethod
    def from_exif(cls, value: object) -> ImageOrientation:
        """Return the orientation for an EXIF tag *value*, ``UP`` when invalid."""

        try:
            return cls(int(value))  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return cls.UP

    @property
    def is_transposed(self) -> bool:
        """Return ``True`` when width and height are swapped in storage."""

        return self >= ImageOrientation.LEFT_MIRRORED

    @property
    def is_mirrored(self) -> bool:
        return self in (
            ImageOrientation.UP_MIRRORED,
            ImageOrientation.DOWN_MIRRORED,
            ImageOrientation.LEFT_MIRRORED,
            ImageOrientation.RIGHT_MIRRORED,
        )

    def display_to_storage(self, vector: Vector2) -> Vector2:
        """Map an offset measured on the displayed image into the stored buffer."""

        return _DISPLAY_TO_STORAGE[self](vector)

    @property
    def upright_transpose(self) -> Image.Transpose | None:
        """Return the Pillow transpose that makes the stored buffer upright."""

        return _UPRIGHT_TRANSPOSE.get(self)


_DISPLAY_TO_STORAGE: Mapping[ImageOrientation, Callable[[Vector2], Vector2]] = {
    ImageOrientation.UP: lambda v: Vector2(v.x, v.y),
    ImageOrientation.UP_MIRRORED: lambda v: Vector2(-v.x, v.y),
    ImageOrientation.DOWN: lambda v: Vector2(-v.x, -v.y),
    ImageOrientation.DOWN_MIRRORED: lambda v: Vector2(v.x, -v.y),
    ImageOrientation.LEFT_MIRRORED: lambda v: Vector2(v.y, v.x),
    ImageOrientation.RIGHT: lambda v: Vector2(v.y, -v.x),
    ImageOrientation.RIGHT_MIRRORED: lambda v: Vector2(-v.y, -v.x),
    ImageOrientation.LEFT: lambda v: Vector2(-v.y, v.x),
}

# Same table ``PIL.ImageOps.exif_transpose`` uses.
_UPRIGHT_TRANSPOSE: Mapping[ImageOrientation, Image.Transpose] = {
    ImageOrientation.UP_MIRRORED: Image.Transpose.FLIP_LEFT_RIGHT,
    ImageOrientation.DOWN: Image.Transpose.ROTATE_180,
    ImageOrientation.DOWN_MIRRORED: Image.Transpose.FLIP_TOP_BOTTOM,
    ImageOrientation.LEFT_MIRRORED: Image.Transpose.TRANSPOSE,
    ImageOrientation.RIGHT: Image.Transpose.ROTATE_270,
    ImageOrientation.RIGHT_MIRRORED: Image.Transpose.TRANSVERSE,
    ImageOrientation.LEFT: Image.Transpose.ROTATE_90,
}
