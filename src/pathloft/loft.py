"""Loft a triangulated collar between two closed paths.

The collar joins every vertex of a "floor" path to its counterpart(s) on
a "ceiling" path, following the ray-partition approach described in
https://micsymposium.org/mics2018/proceedings/MICS_2018_paper_65.pdf:

1. Each path is copied, rotated flat onto z = 0, centred on its XY
   bounding box and made counterclockwise (:func:`pathloft.planar.planarize`).
   The two paths are prepared independently; only connectivity is taken
   from the prepared copies.
2. The path with fewer vertices becomes ``pS`` and the other ``pL``.
   On a tie, ``start`` is ``pS``.
3. One ray per ``pS`` vertex is cast from the origin through the midpoint
   of the edge arriving at that vertex.  Consecutive rays bound a wedge
   around each ``pS`` vertex.
4. Every ``pL`` vertex whose angle falls inside a wedge is connected to
   that wedge's ``pS`` vertex, giving an :class:`AdjacencyMatrix`.
5. A repair policy (:mod:`pathloft.repair`) patches the matrix so the
   connections form one closed staircase.
6. The staircase is walked for ``|pL| + |pS|`` steps; each step to the
   next row or column emits one triangle.  A walk that does not step
   through every row and every column exactly once is rejected.

The returned vertex buffer holds the caller's original coordinates,
``pL`` first then ``pS``, each in its original order.

Example::

    >>> from pathloft.loft import loft
    >>> floor = [(-20, 20, 0), (-20, -20, 0), (20, -20, 0), (20, 20, 0)]
    >>> ceiling = [(-25, 5, 10), (-5, -25, 10), (25, -5, 10), (5, 25, 10)]
    >>> mesh = loft(floor, ceiling)
    >>> mesh.triangle_count
    8

"""

from __future__ import annotations

import logging
from math import atan2
from typing import List, Optional, Sequence, Tuple, Union

import pathloft.geom as geom
from pathloft.adjacency import AdjacencyMatrix
from pathloft.errors import (
    BrokenConnectivityPath,
    DegeneratePathError,
    NoStartingConnection,
)
from pathloft.mesh import MeshBuffers, TriIndices
from pathloft.planar import (
    angle_between,
    center,
    is_clockwise,
    normalize_angle,
    origin_angle,
    transform_to_plane,
)
from pathloft.repair import RepairFunction, RepairPolicy, get_repair_policy

logger = logging.getLogger(__name__)

Point3 = Tuple[float, float, float]


def _prepare(points: Sequence[Point3]) -> Tuple[List[Point3], List[int]]:
    """Planarize a path, keeping the original index of every vertex."""

    flat = center(transform_to_plane(points))
    order = list(range(len(flat)))
    if is_clockwise(flat):
        flat.reverse()
        order.reverse()
    return flat, order


def compute_rays(ps: Sequence[Point3]) -> List[float]:
    """Return one normalised ray angle per vertex of ``ps``.

    Ray ``i`` passes through the midpoint of the edge from vertex
    ``i - 1`` to vertex ``i``.
    """

    rays = []
    for i in range(len(ps)):
        x1, y1 = ps[i - 1][0], ps[i - 1][1]
        x2, y2 = ps[i][0], ps[i][1]
        rays.append(normalize_angle(atan2((y1 + y2) / 2.0, (x1 + x2) / 2.0)))
    return rays


def build_adjacency(pl: Sequence[Point3], ps: Sequence[Point3],
                    rays: Optional[Sequence[float]] = None) -> AdjacencyMatrix:
    """Connect each ``pL`` vertex to the ``pS`` vertex whose wedge holds it.

    Wedge ``col`` runs from ``rays[col]`` to ``rays[col + 1]``, bounds
    included, so a vertex lying exactly on a ray joins both neighbours.
    """

    if rays is None:
        rays = compute_rays(ps)
    matrix = AdjacencyMatrix(len(pl), len(ps))
    angles = [origin_angle(p) for p in pl]
    count = len(rays)
    for col in range(count):
        start = rays[col]
        end = rays[(col + 1) % count]
        for row, angle in enumerate(angles):
            if angle_between(start, angle, end):
                matrix[row, col] = True
    return matrix


def walk_strip(matrix: AdjacencyMatrix, pl: Sequence[Point3],
               ps: Sequence[Point3]) -> List[TriIndices]:
    """Walk the connection staircase and emit the collar triangles.

    Indices refer to the concatenation ``pl + ps``.  Each triangle is
    ``(pL[row], pS[col], next vertex)``, reversed where needed so it is
    counterclockwise in the working plane.

    Raises ``NoStartingConnection`` if row 0 has no connection and
    ``BrokenConnectivityPath`` if the walk reaches a cell it cannot
    leave, or if it does not step down exactly once per row and right
    exactly once per column.
    """

    rows, cols = matrix.rows, matrix.cols
    row = 0
    col = matrix.first_in_row(0)
    if col is None:
        raise NoStartingConnection('no connection in the first row',
                                   {'rows': rows, 'cols': cols})
    down = right = 0

    tris: List[TriIndices] = []
    for step in range(rows + cols):
        i1, v1 = row, pl[row]
        i2, v2 = rows + col, ps[col]
        if matrix[row + 1, col]:
            row = (row + 1) % rows
            down += 1
            i3, v3 = row, pl[row]
        elif matrix[row, col + 1]:
            col = (col + 1) % cols
            right += 1
            i3, v3 = rows + col, ps[col]
        else:
            raise BrokenConnectivityPath('strip cannot advance',
                                         {'step': step, 'row': row, 'col': col})
        tri = (i1, i2, i3)
        if is_clockwise([v1, v2, v3]):
            tri = (i3, i2, i1)
        tris.append(tri)

    if down != rows or right != cols:
        # every pL and pS vertex joins the collar exactly once
        raise BrokenConnectivityPath('strip does not pass every vertex once',
                                     {'down': down, 'right': right,
                                      'rows': rows, 'cols': cols})
    return tris


def loft(start: Sequence[Sequence[float]], end: Sequence[Sequence[float]], *,
         repair: Union[RepairPolicy, str, RepairFunction] = RepairPolicy.NEXT_COLUMN
         ) -> MeshBuffers:
    """Return the collar mesh joining two closed paths.

    ``start`` and ``end`` need not share a vertex count or a plane.  An
    empty path yields empty buffers; a path of one or two vertices, or
    one whose leading three points are collinear, raises
    ``DegeneratePathError``.  ``repair`` selects the connection-repair
    policy.
    """

    raw_start = geom.path(start)
    raw_end = geom.path(end)
    if not raw_start or not raw_end:
        return MeshBuffers()
    for name, pts in (('start', raw_start), ('end', raw_end)):
        if len(pts) < 3:
            raise DegeneratePathError('{} path needs at least three vertices'.format(name),
                                      {'path': name, 'count': len(pts)})
    fix = get_repair_policy(repair)

    p1, order1 = _prepare(raw_start)
    p2, order2 = _prepare(raw_end)

    if len(p1) > len(p2):
        pl, order_l, raw_l = p1, order1, raw_start
        ps, order_s, raw_s = p2, order2, raw_end
    else:
        pl, order_l, raw_l = p2, order2, raw_end
        ps, order_s, raw_s = p1, order1, raw_start

    rays = compute_rays(ps)
    matrix = build_adjacency(pl, ps, rays)
    logger.debug('loft %d x %d: %d wedge connections', len(pl), len(ps), matrix.count())
    added = fix(matrix)
    logger.debug('repair added %d connections', added)

    tris = walk_strip(matrix, pl, ps)

    # prepared position -> index into the raw vertex buffer
    offset = len(pl)
    lookup = list(order_l) + [offset + i for i in order_s]
    indices = [lookup[i] for tri in tris for i in tri]

    return MeshBuffers(geom.flatten(raw_l + raw_s), indices)


__all__ = ['loft', 'compute_rays', 'build_adjacency', 'walk_strip']
