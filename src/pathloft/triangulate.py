"""Ear-clipping triangulation of a single closed polygon.

Used to cap a path with a flat surface.  The polygon may lie in any
plane; its orientation is taken from its Newell normal, so no
flattening is needed and the emitted triangles keep the winding of the
input.  See https://www.geometrictools.com/Documentation/TriangulationByEarClipping.pdf
and https://arxiv.org/pdf/1212.6038 for background.

The working polygon is a :class:`VertexArena`: vertices are marked
removed rather than deleted, so triangle indices always refer to the
caller's original vertex order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from math import pi
from typing import Iterator, List, Optional, Sequence, Tuple

import pathloft.geom as geom
from pathloft.errors import DegeneratePathError, NoEarFound
from pathloft.mesh import MeshBuffers, TriIndices

logger = logging.getLogger(__name__)

Point3 = Tuple[float, float, float]


class VertexArena:
    """Closed vertex sequence supporting removal with stable indices."""

    def __init__(self, points: Sequence[Sequence[float]]):
        self._points: List[Point3] = geom.path(points)
        self._live: List[bool] = [True] * len(self._points)
        self.live_count = len(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def at(self, i: int) -> Point3:
        return self._points[i]

    def is_live(self, i: int) -> bool:
        return self._live[i]

    def remove(self, i: int) -> None:
        if self._live[i]:
            self._live[i] = False
            self.live_count -= 1

    def next(self, i: int) -> Optional[int]:
        """Index of the next live vertex after ``i``, wrapping around."""
        return self._find(i, 1)

    def prev(self, i: int) -> Optional[int]:
        """Index of the previous live vertex before ``i``, wrapping around."""
        return self._find(i, -1)

    def _find(self, i: int, step: int) -> Optional[int]:
        count = len(self._points)
        current = i
        for _ in range(count - 1):
            current = (current + step) % count
            if self._live[current]:
                return current
        return None

    def __iter__(self) -> Iterator[Tuple[int, Point3]]:
        for i, p in enumerate(self._points):
            if self._live[i]:
                yield i, p


@dataclass
class Tip:
    """Ear candidate at ``verts[1]``, flanked by its live neighbours."""

    verts: TriIndices
    angle: float
    ear: bool

    @property
    def index(self) -> int:
        return self.verts[1]


def _same_side(a: Point3, b: Point3, ref: Point3, p: Point3) -> bool:
    # is p on ref's side of line ab, counting points on the line as inside
    edge = geom.sub(b, a)
    cp_ref = geom.cross(edge, geom.sub(ref, a))
    cp_p = geom.cross(edge, geom.sub(p, a))
    scale = geom.mag(cp_ref) * geom.mag(edge)
    if scale == 0.0:
        return True
    # signed distance of p from the line, positive towards ref
    return geom.dot(cp_ref, cp_p) / scale >= -geom.epsilon


def point_in_triangle(p: Point3, v1: Point3, v2: Point3, v3: Point3) -> bool:
    """True if ``p`` lies inside or on the boundary of triangle v1 v2 v3.

    ``p`` is assumed to be in (or near) the triangle's plane.
    """
    return (_same_side(v1, v2, v3, p) and
            _same_side(v2, v3, v1, p) and
            _same_side(v3, v1, v2, p))


def compute_tip(arena: VertexArena, i: int, normal: Point3) -> Tip:
    """Evaluate vertex ``i`` of the live polygon as an ear.

    The interior angle is measured on the side ``normal`` points away
    from; a vertex is an ear when that angle is below pi and no other
    live vertex lies in its triangle.
    """

    prev = arena.prev(i)
    nxt = arena.next(i)
    if prev is None or nxt is None or prev == nxt:
        return Tip((i, i, i), pi, False)
    verts = (prev, i, nxt)
    v1, v2, v3 = arena.at(prev), arena.at(i), arena.at(nxt)

    a = geom.sub(v1, v2)
    b = geom.sub(v3, v2)
    angle = geom.vangle(a, b)

    # positive when the polygon turns left at v2 about its normal
    turn = geom.dot(geom.cross(geom.sub(v2, v1), b), normal)
    scale = geom.mag(a) * geom.mag(b) * geom.mag(normal)
    convex = scale > 0.0 and turn / scale > geom.epsilon
    if not convex:
        return Tip(verts, geom.pi2 - angle, False)

    for j, p in arena:
        if j in verts:
            continue
        if geom.vclose(p, v1) or geom.vclose(p, v2) or geom.vclose(p, v3):
            continue
        if point_in_triangle(p, v1, v2, v3):
            return Tip(verts, angle, False)

    return Tip(verts, angle, True)


def _smallest_ear(tips: Sequence[Optional[Tip]]) -> Optional[Tip]:
    best = None
    for tip in tips:
        if tip is None or not tip.ear:
            continue
        if best is None or tip.angle < best.angle:
            best = tip
    return best


def triangulate(polygon: Sequence[Sequence[float]]) -> List[TriIndices]:
    """Return ``n - 2`` index triangles covering an n-vertex polygon.

    Triangles are ``(prev, ear, next)`` in the polygon's own winding and
    index into ``polygon`` as given.  The ear with the smallest interior
    angle is clipped first (lowest index on ties), which avoids sliver
    triangles.  Raises ``DegeneratePathError`` for fewer than three
    vertices and ``NoEarFound`` when the polygon cannot be clipped, which
    happens for self-intersecting or degenerate input.
    """

    arena = VertexArena(polygon)
    count = len(arena)
    if count < 3:
        raise DegeneratePathError('a polygon needs at least three vertices',
                                  {'count': count})
    normal = geom.newell([arena.at(i) for i in range(count)])

    tips: List[Optional[Tip]] = [compute_tip(arena, i, normal) for i in range(count)]
    tris: List[TriIndices] = []

    while len(tris) < count - 2:
        best = _smallest_ear(tips)
        if best is None:
            # tips away from the last clip may be stale; check them all once
            tips = [compute_tip(arena, i, normal) if arena.is_live(i) else None
                    for i in range(count)]
            best = _smallest_ear(tips)
        if best is None:
            raise NoEarFound('no ear left to clip',
                             {'triangles': len(tris), 'live': arena.live_count})

        tris.append(best.verts)
        prev, ear, nxt = best.verts
        arena.remove(ear)
        tips[ear] = None
        tips[prev] = compute_tip(arena, prev, normal)
        tips[nxt] = compute_tip(arena, nxt, normal)

    logger.debug('clipped %d ears from %d vertices', len(tris), count)
    return tris


def cap(polygon: Sequence[Sequence[float]]) -> MeshBuffers:
    """Return a flat cap over ``polygon`` as mesh buffers.

    The vertex buffer is the polygon itself, in its own order.
    """

    return MeshBuffers.from_points(polygon, triangulate(polygon))


__all__ = [
    'VertexArena',
    'Tip',
    'point_in_triangle',
    'compute_tip',
    'triangulate',
    'cap',
]
