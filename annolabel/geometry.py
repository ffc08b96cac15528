"""Small planar geometry helpers: angle handling and line intersection."""

from __future__ import annotations

import enum
import math

Point = tuple[float, float]
Line = tuple[Point, Point]


class IntersectionType(enum.IntEnum):
    """How two lines relate to each other."""

    NO_INTERSECTION = 0
    BOUNDED = 1
    UNBOUNDED = 2


def wrap_angle(src: float) -> float:
    """Bring an angle in radians into the range [-pi, pi]."""
    while src > math.pi:
        src -= math.pi * 2
    while src < -math.pi:
        src += math.pi * 2
    return src


def deg2rad(deg: float) -> float:
    """Convert degrees to radians."""
    return deg * math.pi / 180.0


def rad2deg(rad: float) -> float:
    """Convert radians to degrees."""
    return rad * 180.0 / math.pi


def intersection(a: Line, b: Line) -> tuple[IntersectionType, Point | None]:
    """Intersect the infinite lines through segments ``a`` and ``b``.

    Returns the kind of intersection and the intersection point; the point
    is ``None`` when the lines are parallel. ``BOUNDED`` means the point
    lies on both segments, ``UNBOUNDED`` that it lies on their extensions.
    """
    (a1x, a1y), (a2x, a2y) = a
    (b1x, b1y), (b2x, b2y) = b

    dax, day = a2x - a1x, a2y - a1y
    dbx, dby = b1x - b2x, b1y - b2y
    cx, cy = a1x - b1x, a1y - b1y

    denominator = day * dbx - dax * dby
    if denominator == 0 or not math.isfinite(denominator):
        return IntersectionType.NO_INTERSECTION, None

    reciprocal = 1.0 / denominator
    na = (dby * cx - dbx * cy) * reciprocal
    point = (a1x + dax * na, a1y + day * na)
    if na < 0 or na > 1:
        return IntersectionType.UNBOUNDED, point

    nb = (dax * cy - day * cx) * reciprocal
    if nb < 0 or nb > 1:
        return IntersectionType.UNBOUNDED, point

    return IntersectionType.BOUNDED, point