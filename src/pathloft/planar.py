"""Planar working-space helpers shared by the loft and cap engines.

Every function here takes a path (a sequence of point-like values) and
returns a new list of ``(x, y, z)`` tuples; the input is never
modified.  The loft engine prepares each of its two paths with
:func:`planarize`, which chains the three steps below:

``transform_to_plane``
    rotate the path so the normal of its leading corner points along
    +z, then flatten it onto z = 0.
``center``
    translate the path so the centre of its XY bounding box is the
    origin.  The bounding box (rather than the vertex mean) keeps the
    origin inside the polygon along both axes, which the angular ray
    partition of the loft relies on.
``make_ccw``
    reverse the path if it winds clockwise.

The angle helpers implement the wrap-aware interval test used to
partition a polygon into angular wedges.
"""

from __future__ import annotations

from math import atan2
from typing import List, Sequence, Tuple

import pathloft.geom as geom
import pathloft.xform as xform
from pathloft.errors import DegeneratePathError

Point3 = Tuple[float, float, float]

ZAXIS = (0.0, 0.0, 1.0)


def plane_normal(points: Sequence[Sequence[float]]) -> Point3:
    """Return the unit normal of ``(p2 - p1) x (p3 - p1)``.

    Raises ``DegeneratePathError`` if the path has fewer than three
    points or its first three points are collinear.
    """

    pts = geom.path(points)
    if len(pts) < 3:
        raise DegeneratePathError('a plane needs at least three points',
                                  {'count': len(pts)})
    p1, p2, p3 = pts[0], pts[1], pts[2]
    n = geom.cross(geom.sub(p2, p1), geom.sub(p3, p1))
    if geom.mag(n) < geom.epsilon:
        raise DegeneratePathError('leading points are collinear',
                                  {'points': [p1, p2, p3]})
    return geom.unit(n)


def transform_to_plane(points: Sequence[Sequence[float]]) -> List[Point3]:
    """Rotate a path into the z = 0 plane.

    The rotation aligns :func:`plane_normal` with +z.  When the normal is
    already parallel or anti-parallel to +z no rotation is applied.  In
    both cases z is then forced to zero, absorbing floating point drift
    left by the rotation.
    """

    pts = geom.path(points)
    normal = plane_normal(pts)
    rot = xform.Alignment(normal, ZAXIS)
    if rot is not None:
        pts = xform.transform(rot, pts)
    return [(p[0], p[1], 0.0) for p in pts]


def center(points: Sequence[Sequence[float]]) -> List[Point3]:
    """Translate a path so its XY bounding-box centre is the origin."""

    pts = geom.path(points)
    if not pts:
        return pts
    (minx, miny), (maxx, maxy) = geom.bbox2d(pts)
    cx = (minx + maxx) / 2.0
    cy = (miny + maxy) / 2.0
    return [(p[0] - cx, p[1] - cy, p[2]) for p in pts]


def is_clockwise(points: Sequence[Sequence[float]]) -> bool:
    """Return ``True`` if the XY projection of a closed path winds clockwise.

    Sums ``(x2 - x1) * (y2 + y1)`` over the edges; a positive sum means
    clockwise.  Degenerate paths (zero sum) are not clockwise.
    """

    total = 0.0
    count = len(points)
    for i in range(count):
        x1, y1 = points[i][0], points[i][1]
        x2, y2 = points[(i + 1) % count][0], points[(i + 1) % count][1]
        total += (x2 - x1) * (y2 + y1)
    return total > 0


def signed_area(points: Sequence[Sequence[float]]) -> float:
    """Shoelace area of the XY projection, positive when counterclockwise."""

    total = 0.0
    count = len(points)
    for i in range(count):
        x0, y0 = points[i][0], points[i][1]
        x1, y1 = points[(i + 1) % count][0], points[(i + 1) % count][1]
        total += x0 * y1 - x1 * y0
    return total / 2.0


def make_ccw(points: Sequence[Sequence[float]]) -> List[Point3]:
    """Return a copy of the path, reversed if it winds clockwise."""

    pts = geom.path(points)
    if is_clockwise(pts):
        pts.reverse()
    return pts


def planarize(points: Sequence[Sequence[float]]) -> List[Point3]:
    """Flatten, centre and orient a path counterclockwise."""

    return make_ccw(center(transform_to_plane(points)))


## angles
## ------

def normalize_angle(angle: float) -> float:
    """Map an angle in radians onto ``[0, 2*pi)``."""

    result = angle % geom.pi2
    # tiny negative angles round up to 2*pi
    if result >= geom.pi2:
        result = 0.0
    return result


def origin_angle(p: Sequence[float]) -> float:
    """Normalised angle of the ray from the origin through ``p``'s XY."""

    return normalize_angle(atan2(p[1], p[0]))


def angle_between(start: float, angle: float, end: float) -> bool:
    """Return ``True`` if ``angle`` lies in the arc running counterclockwise
    from ``start`` to ``end``.

    Both bounds are inclusive.  When ``start > end`` the arc wraps past
    2*pi; when ``start == end`` the arc is the single bound.  All three
    angles are expected on ``[0, 2*pi)``.
    """

    if angle == start or angle == end:
        return True
    if start == end:
        return False
    if start < end:
        return start < angle < end
    return angle > start or angle < end


__all__ = [
    'plane_normal',
    'transform_to_plane',
    'center',
    'is_clockwise',
    'signed_area',
    'make_ccw',
    'planarize',
    'normalize_angle',
    'origin_angle',
    'angle_between',
]
