"""Resolve the final crop rectangle in full-resolution pixel space.

The interactive session runs on a downscaled preview that is already displayed
upright.  The final render works on the full-resolution buffer in its stored
pixel order, after the buffer has been rotated by the edit angle.  This module
translates the preview pan/zoom state into a rectangle addressing that buffer.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..config import CROP_BOUNDS_TOLERANCE
from ..errors import OutOfBoundsCropError
from .alignment import screen_angle
from .geometry import Size2, Vector2, rotate
from .orientation import ImageOrientation


@dataclass(frozen=True)
class CropRect:
    """Axis-aligned rectangle in pixel coordinates."""

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center(self) -> Vector2:
        return Vector2(self.left + self.width / 2.0, self.top + self.height / 2.0)

    @property
    def size(self) -> Size2:
        return Size2(self.width, self.height)

    def is_within(self, bounds: Size2, tolerance: float = CROP_BOUNDS_TOLERANCE) -> bool:
        return (
            self.left >= -tolerance
            and self.top >= -tolerance
            and self.right <= bounds.width + tolerance
            and self.bottom <= bounds.height + tolerance
        )

    def ensure_within(self, bounds: Size2, tolerance: float = CROP_BOUNDS_TOLERANCE) -> None:
        """Raise :class:`OutOfBoundsCropError` unless the rect fits in *bounds*.

        The rectangle is never clamped: leaving the buffer means the image did
        not cover the frame, and hiding that would also hide the alignment bug.
        """

        if not self.is_within(bounds, tolerance):
            raise OutOfBoundsCropError(self, bounds.as_tuple())

    def to_box(self, bounds: Size2 | None = None) -> tuple[int, int, int, int]:
        """Return the integer ``(left, top, right, bottom)`` box Pillow expects.

        When *bounds* is given, sub-pixel overshoot permitted by the bounds
        tolerance is trimmed so the box stays inside the buffer.
        """

        left = int(round(self.left))
        top = int(round(self.top))
        right = int(round(self.right))
        bottom = int(round(self.bottom))
        if bounds is not None:
            left = max(0, left)
            top = max(0, top)
            right = min(int(bounds.width), right)
            bottom = min(int(bounds.height), bottom)
        return (left, top, max(left + 1, right), max(top + 1, bottom))


def resolve_crop(
    *,
    rotated_size: Size2,
    orientation: ImageOrientation,
    full_width: float,
    preview_width: float,
    frame_size: Size2,
    initial_zoom_scale: float,
    zoom_scale: float,
    pan_offset: Vector2,
    rotation_radians: float,
) -> CropRect | None:
    """Return the crop rectangle for the rotated full-resolution buffer.

    Parameters
    ----------
    rotated_size:
        Display-oriented size of the full-resolution image after the edit
        rotation was applied to it.
    orientation:
        EXIF orientation of the stored buffer.
    full_width:
        Display-oriented width of the full-resolution image before rotation.
    preview_width:
        Width of the preview the user interacted with, before rotation.
    frame_size:
        Frame size in screen points.
    initial_zoom_scale:
        Scale that made the preview fill the frame before any user zoom.
    zoom_scale:
        Committed user zoom multiplier.
    pan_offset:
        Committed pan in preview pixels (image-local, before zoom).
    rotation_radians:
        Counter-clockwise edit rotation.

    Returns
    -------
    CropRect | None
        Rectangle in the stored buffer's pixel space, or ``None`` when any
        size involved is empty or the scales are unusable.
    """

    if rotated_size.is_empty or frame_size.is_empty:
        return None
    if full_width <= 0.0 or preview_width <= 0.0:
        return None
    if not pan_offset.is_finite() or not math.isfinite(rotation_radians):
        return None
    extra_scale = full_width / preview_width
    full_zoom = initial_zoom_scale * zoom_scale / extra_scale
    if not math.isfinite(full_zoom) or full_zoom <= 0.0:
        return None

    full_pan = pan_offset * extra_scale
    display_pan = rotate(full_pan, screen_angle(rotation_radians))
    stored_pan = orientation.display_to_storage(display_pan)

    crop_size = frame_size.scaled(1.0 / full_zoom)
    picture_center = rotated_size.center
    if orientation.is_transposed:
        crop_size = crop_size.transposed()
        picture_center = Vector2(picture_center.y, picture_center.x)

    center = picture_center - stored_pan
    origin = center - crop_size.center
    return CropRect(origin.x, origin.y, crop_size.width, crop_size.height)
