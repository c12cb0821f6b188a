"""Keep a rotated, zoomed and panned image covering the output frame.

Everything here works in screen space with the frame centred on the origin.
The displayed image is a rectangle whose corners are labelled clockwise
``A`` (top-left), ``B`` (top-right), ``C`` (bottom-right) and ``D``
(bottom-left) before rotation.  For each image edge the engine measures the
signed distance from the frame corner that pokes out furthest past that edge:

* ``offset <= 0``: the edge covers the frame on that side;
* ``offset > 0``: a gap of ``offset`` screen points is visible.

Edit rotations are counter-clockwise-positive (Pillow's convention) while the
screen rotation matrix is clockwise-positive because ``y`` grows downward.
:func:`screen_angle` is the single place where an edit angle is negated on its
way into screen geometry.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Mapping

from ..config import ALIGNMENT_TOLERANCE
from .geometry import ORIGIN, Size2, Vector2, normalise_degrees, rotate, signed_distance

_LOGGER = logging.getLogger(__name__)


class ImageEdge(Enum):
    """Edges of the displayed image, named by their unrotated position."""

    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"


class FrameCorner(Enum):
    TOP_LEFT = "top_left"
    TOP_RIGHT = "top_right"
    BOTTOM_RIGHT = "bottom_right"
    BOTTOM_LEFT = "bottom_left"


_OPPOSITE_EDGE: Mapping[ImageEdge, ImageEdge] = {
    ImageEdge.TOP: ImageEdge.BOTTOM,
    ImageEdge.RIGHT: ImageEdge.LEFT,
    ImageEdge.BOTTOM: ImageEdge.TOP,
    ImageEdge.LEFT: ImageEdge.RIGHT,
}

# Outward unit normals of the unrotated image edges.
_OUTWARD_NORMALS: Mapping[ImageEdge, Vector2] = {
    ImageEdge.TOP: Vector2(0.0, -1.0),
    ImageEdge.RIGHT: Vector2(1.0, 0.0),
    ImageEdge.BOTTOM: Vector2(0.0, 1.0),
    ImageEdge.LEFT: Vector2(-1.0, 0.0),
}

# Band index -> frame corner measured against each image edge.  As the image
# turns past each multiple of 90 degrees a different frame corner becomes the
# one furthest beyond a given edge.
_BAND_CORNERS: tuple[Mapping[ImageEdge, FrameCorner], ...] = (
    # [0, 90]
    {
        ImageEdge.TOP: FrameCorner.TOP_LEFT,
        ImageEdge.RIGHT: FrameCorner.TOP_RIGHT,
        ImageEdge.BOTTOM: FrameCorner.BOTTOM_RIGHT,
        ImageEdge.LEFT: FrameCorner.BOTTOM_LEFT,
    },
    # (90, 180]
    {
        ImageEdge.TOP: FrameCorner.BOTTOM_LEFT,
        ImageEdge.RIGHT: FrameCorner.TOP_LEFT,
        ImageEdge.BOTTOM: FrameCorner.TOP_RIGHT,
        ImageEdge.LEFT: FrameCorner.BOTTOM_RIGHT,
    },
    # [-90, 0)
    {
        ImageEdge.TOP: FrameCorner.TOP_RIGHT,
        ImageEdge.RIGHT: FrameCorner.BOTTOM_RIGHT,
        ImageEdge.BOTTOM: FrameCorner.BOTTOM_LEFT,
        ImageEdge.LEFT: FrameCorner.TOP_LEFT,
    },
    # [-180, -90)
    {
        ImageEdge.TOP: FrameCorner.BOTTOM_RIGHT,
        ImageEdge.RIGHT: FrameCorner.BOTTOM_LEFT,
        ImageEdge.BOTTOM: FrameCorner.TOP_LEFT,
        ImageEdge.LEFT: FrameCorner.TOP_RIGHT,
    },
)


def screen_angle(rotation_radians: float) -> float:
    """Return the screen-space rotation for a counter-clockwise edit angle."""

    return -rotation_radians


def rotation_band(degrees: float) -> int:
    """Return the index of the 90 degree band containing *degrees*."""

    angle = normalise_degrees(degrees)
    if 0.0 <= angle <= 90.0:
        return 0
    if angle > 90.0:
        return 1
    if angle >= -90.0:
        return 2
    return 3


@dataclass(frozen=True)
class ViewGeometry:
    """Everything the engine needs to know about the current view.

    ``image_size`` is the unzoomed preview size, ``zoom_scale`` the total
    screen scale applied to it and ``pan_offset`` the image-local pan in
    preview pixels (it rotates and scales together with the image).
    """

    frame_size: Size2
    image_size: Size2
    rotation_radians: float = 0.0
    zoom_scale: float = 1.0
    pan_offset: Vector2 = field(default_factory=Vector2)

    @property
    def display_size(self) -> Size2:
        return self.image_size.scaled(self.zoom_scale)

    @property
    def is_degenerate(self) -> bool:
        """Return ``True`` when no layout has been established yet."""

        if self.frame_size.is_empty or self.image_size.is_empty:
            return True
        if not math.isfinite(self.zoom_scale) or self.zoom_scale <= 0.0:
            return True
        if not math.isfinite(self.rotation_radians) or not self.pan_offset.is_finite():
            return True
        return self.display_size.is_empty

    @property
    def display_center(self) -> Vector2:
        """Return the on-screen centre of the image relative to the frame centre."""

        return rotate(self.pan_offset * self.zoom_scale, screen_angle(self.rotation_radians))

    def with_pan(self, pan_offset: Vector2) -> ViewGeometry:
        return replace(self, pan_offset=pan_offset)

    def with_zoom(self, zoom_scale: float) -> ViewGeometry:
        return replace(self, zoom_scale=zoom_scale)


@dataclass(frozen=True)
class ImageCorners:
    """Rotated corners of the displayed image in screen space."""

    a: Vector2
    b: Vector2
    c: Vector2
    d: Vector2

    def edge(self, edge: ImageEdge) -> tuple[Vector2, Vector2]:
        """Return the endpoints of *edge* in clockwise winding order."""

        if edge is ImageEdge.TOP:
            return (self.a, self.b)
        if edge is ImageEdge.RIGHT:
            return (self.b, self.c)
        if edge is ImageEdge.BOTTOM:
            return (self.c, self.d)
        return (self.d, self.a)


@dataclass(frozen=True)
class AlignmentOffsets:
    """Signed gap between each image edge and the frame (positive = gap)."""

    top: float
    right: float
    bottom: float
    left: float

    def for_edge(self, edge: ImageEdge) -> float:
        return float(getattr(self, edge.value))

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.top, self.right, self.bottom, self.left)

    @property
    def worst(self) -> float:
        return max(self.as_tuple())

    def is_covered(self, tolerance: float = ALIGNMENT_TOLERANCE) -> bool:
        """Return ``True`` when the image covers the whole frame."""

        return self.worst <= tolerance

    def gapped_edges(self, tolerance: float = ALIGNMENT_TOLERANCE) -> list[ImageEdge]:
        return [edge for edge in ImageEdge if self.for_edge(edge) > tolerance]


def frame_corners(frame_size: Size2) -> dict[FrameCorner, Vector2]:
    """Return the frame corners with the frame centred on the origin."""

    half_w = frame_size.width / 2.0
    half_h = frame_size.height / 2.0
    return {
        FrameCorner.TOP_LEFT: Vector2(-half_w, -half_h),
        FrameCorner.TOP_RIGHT: Vector2(half_w, -half_h),
        FrameCorner.BOTTOM_RIGHT: Vector2(half_w, half_h),
        FrameCorner.BOTTOM_LEFT: Vector2(-half_w, half_h),
    }


def rotated_corners(view: ViewGeometry) -> ImageCorners | None:
    """Return the displayed image corners, or ``None`` for a degenerate view."""

    if view.is_degenerate:
        return None
    center = view.display_center
    size = view.display_size
    half_w = size.width / 2.0
    half_h = size.height / 2.0
    angle = screen_angle(view.rotation_radians)
    return ImageCorners(
        a=rotate(center + Vector2(-half_w, -half_h), angle, center),
        b=rotate(center + Vector2(half_w, -half_h), angle, center),
        c=rotate(center + Vector2(half_w, half_h), angle, center),
        d=rotate(center + Vector2(-half_w, half_h), angle, center),
    )


def _offsets_for_corners(view: ViewGeometry, corners: ImageCorners) -> AlignmentOffsets:
    assignment = _BAND_CORNERS[rotation_band(math.degrees(view.rotation_radians))]
    points = frame_corners(view.frame_size)
    values = {
        edge.value: signed_distance(points[assignment[edge]], *corners.edge(edge))
        for edge in ImageEdge
    }
    return AlignmentOffsets(**values)


def alignment_offsets(view: ViewGeometry) -> AlignmentOffsets | None:
    """Return the four edge offsets for *view*, ``None`` when degenerate."""

    corners = rotated_corners(view)
    if corners is None:
        return None
    return _offsets_for_corners(view, corners)


def is_frame_covered(view: ViewGeometry, tolerance: float = ALIGNMENT_TOLERANCE) -> bool:
    offsets = alignment_offsets(view)
    return offsets is not None and offsets.is_covered(tolerance)


def _center_distance(corners: ImageCorners, edge: ImageEdge) -> float:
    """Return the distance from the frame centre to *edge* (negative if beyond it)."""

    return -signed_distance(ORIGIN, *corners.edge(edge))


def _edge_scales(view: ViewGeometry) -> dict[ImageEdge, tuple[float, float]] | None:
    """Return ``edge -> (offset, corrective scale)`` for edges zoom can fix.

    Zoom scales the whole display about the frame centre, so an edge at
    distance ``L`` whose frame corner overshoots by ``offset`` touches the
    corner again after scaling by ``(L + offset) / L``.  Edges the frame
    centre already lies beyond cannot be reached by zooming and are omitted.
    """

    corners = rotated_corners(view)
    if corners is None:
        return None
    offsets = _offsets_for_corners(view, corners)
    scales: dict[ImageEdge, tuple[float, float]] = {}
    for edge in ImageEdge:
        distance = _center_distance(corners, edge)
        if distance <= ALIGNMENT_TOLERANCE:
            continue
        offset = offsets.for_edge(edge)
        scales[edge] = (offset, (distance + offset) / distance)
    return scales


def zoom_correction_scale(view: ViewGeometry) -> float:
    """Return the zoom multiplier closing every gap zoom can close.

    The edge that needs the largest scale is the worst one; scaling by its
    factor makes that edge touch the frame and leaves every other edge with a
    reachable gap covered.  Returns ``1.0`` when nothing needs fixing.
    """

    scales = _edge_scales(view)
    if not scales:
        return 1.0
    best = 1.0
    for offset, scale in scales.values():
        if offset > ALIGNMENT_TOLERANCE and math.isfinite(scale):
            best = max(best, scale)
    return best


def fill_to_frame_scale(view: ViewGeometry) -> float:
    """Return the zoom multiplier that makes the centred image exactly fill the frame.

    The pan offset is ignored (treated as zero).  The result may be below
    ``1.0`` when the image is currently larger than it needs to be.
    """

    scales = _edge_scales(view.with_pan(ORIGIN))
    if not scales:
        return 1.0
    best = max(scale for _, scale in scales.values())
    if not math.isfinite(best) or best <= 0.0:
        return 1.0
    return best


def pan_correction(view: ViewGeometry) -> Vector2:
    """Return the pan delta (image-local units) that closes uncovered edges.

    Each gapped edge pushes the image along its outward normal by the size of
    its gap.  Opposite edges that both show a gap cancel out: moving the image
    cannot close both, so they are left to the zoom correction and neither gap
    grows.
    """

    offsets = alignment_offsets(view)
    if offsets is None:
        return ORIGIN
    angle = screen_angle(view.rotation_radians)
    shift = ORIGIN
    for edge in offsets.gapped_edges():
        if offsets.for_edge(_OPPOSITE_EDGE[edge]) > ALIGNMENT_TOLERANCE:
            continue
        normal = rotate(_OUTWARD_NORMALS[edge], angle)
        shift = shift + normal * offsets.for_edge(edge)
    if shift == ORIGIN:
        return ORIGIN
    return rotate(shift, -angle) / view.zoom_scale


def align_by_panning(view: ViewGeometry) -> Vector2:
    """Return the corrected pan offset for *view*."""

    delta = pan_correction(view)
    if delta == ORIGIN:
        return view.pan_offset
    _LOGGER.debug("Pan correction %s applied to %s", delta, view.pan_offset)
    return view.pan_offset + delta


def fill_to_frame(view: ViewGeometry) -> tuple[Vector2, float]:
    """Return ``(pan_offset, zoom multiplier)`` that centres and fits the image."""

    if view.is_degenerate:
        return (view.pan_offset, 1.0)
    return (ORIGIN, fill_to_frame_scale(view))


def align_by_zooming(view: ViewGeometry) -> tuple[Vector2, float]:
    """Return ``(pan_offset, zoom multiplier)`` after the zoom correction.

    When the image leaves a gap on all four sides it is re-centred and fitted
    to the frame instead.
    """

    offsets = alignment_offsets(view)
    if offsets is None:
        return (view.pan_offset, 1.0)
    if len(offsets.gapped_edges()) == len(ImageEdge):
        _LOGGER.debug("Image smaller than frame on every side; filling frame")
        return fill_to_frame(view)
    scale = zoom_correction_scale(view)
    if scale != 1.0:
        _LOGGER.debug("Zoom correction x%.6f for offsets %s", scale, offsets.as_tuple())
    return (view.pan_offset, scale)
