"""Plane geometry primitives shared by the alignment engine and crop resolver.

All coordinates are screen coordinates: ``x`` grows to the right and ``y``
grows downward.  Under that handedness the standard rotation matrix turns a
vector visually *clockwise* for positive angles.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vector2:
    """Immutable ``(x, y)`` pair used for both points and offsets."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Vector2:
        return Vector2(-self.x, -self.y)

    def __mul__(self, factor: float) -> Vector2:
        return Vector2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Vector2:
        return Vector2(self.x / divisor, self.y / divisor)

    @property
    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def dot(self, other: Vector2) -> float:
        return self.x * other.x + self.y * other.y

    def rotated(self, radians: float, center: Vector2 | None = None) -> Vector2:
        """Return this vector rotated by *radians* about *center*."""

        return rotate(self, radians, center)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)


Point2 = Vector2
ORIGIN = Vector2(0.0, 0.0)


@dataclass(frozen=True)
class Size2:
    """Immutable ``(width, height)`` pair.

    A size with a zero component is *empty*: it describes a layout that has not
    been established yet and every consumer treats it as a no-op.
    """

    width: float = 0.0
    height: float = 0.0

    @property
    def is_empty(self) -> bool:
        return self.width <= 0.0 or self.height <= 0.0

    @property
    def center(self) -> Vector2:
        return Vector2(self.width / 2.0, self.height / 2.0)

    def scaled(self, factor: float) -> Size2:
        return Size2(self.width * factor, self.height * factor)

    def transposed(self) -> Size2:
        return Size2(self.height, self.width)

    def max_ratio(self, other: Size2) -> float:
        """Return the larger of the per-axis ratios ``self / other``."""

        return max(self.width / other.width, self.height / other.height)

    def min_ratio(self, other: Size2) -> float:
        """Return the smaller of the per-axis ratios ``self / other``."""

        return min(self.width / other.width, self.height / other.height)

    def as_tuple(self) -> tuple[float, float]:
        return (self.width, self.height)


EMPTY_SIZE = Size2(0.0, 0.0)


def rotate(vector: Vector2, radians: float, center: Vector2 | None = None) -> Vector2:
    """Rotate *vector* by *radians* about *center* (the origin by default)."""

    pivot = center if center is not None else ORIGIN
    dx = vector.x - pivot.x
    dy = vector.y - pivot.y
    cos_a = math.cos(radians)
    sin_a = math.sin(radians)
    return Vector2(
        dx * cos_a - dy * sin_a + pivot.x,
        dx * sin_a + dy * cos_a + pivot.y,
    )


def signed_distance(point: Vector2, line_start: Vector2, line_end: Vector2) -> float:
    """Return the signed perpendicular distance from *point* to a line.

    The line is the infinite line through *line_start* and *line_end*.  For the
    edges of a polygon wound clockwise on screen (top-left, top-right,
    bottom-right, bottom-left), points inside the polygon yield negative
    distances and points beyond an edge yield positive ones.  A degenerate line
    returns ``0.0``.
    """

    a = line_end.y - line_start.y
    b = line_start.x - line_end.x
    c = line_end.x * line_start.y - line_start.x * line_end.y
    norm = math.hypot(a, b)
    if norm == 0.0:
        return 0.0
    return (a * point.x + b * point.y + c) / norm


def normalise_degrees(degrees: float) -> float:
    """Wrap *degrees* into ``[-180, 180]`` keeping ``180`` as ``180``."""

    if -180.0 <= degrees <= 180.0:
        return degrees
    wrapped = math.fmod(degrees + 180.0, 360.0)
    if wrapped < 0.0:
        wrapped += 360.0
    return wrapped - 180.0
