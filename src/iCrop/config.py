"""Default configuration values for iCrop."""

from __future__ import annotations

from typing import Final

# Share of the canvas that the output frame may occupy.  Rectangular frames
# leave a 10% margin so the dimmed overflow of the photo stays visible around
# the frame; the circular mask is drawn slightly smaller.
FRAME_FILL_FRACTION: Final[float] = 0.9
CIRCLE_FILL_FRACTION: Final[float] = 0.8

# Longest edge of the preview image used while the user is interacting.  The
# full-resolution original is only touched when the final crop is rendered.
DEFAULT_THUMBNAIL_MAX_SIZE: Final[int] = 1600

# Committed zoom values are rounded to this many decimals before snapshots are
# compared so gesture noise does not register as an edit.
ZOOM_ROUND_DIGITS: Final[int] = 4

# Offsets within this distance (screen points) of zero count as touching.
ALIGNMENT_TOLERANCE: Final[float] = 1e-6

# Crop rectangles may overshoot the pixel buffer by this much before being
# reported as out of bounds.  Rotated buffers are rounded to whole pixels.
CROP_BOUNDS_TOLERANCE: Final[float] = 0.5

# White point matching a neutral warmth percent.
NEUTRAL_WHITE_POINT_K: Final[float] = 6500.0

SIDECAR_SUFFIX: Final[str] = ".icrop.json"
