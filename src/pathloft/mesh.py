"""Flat vertex/index buffers produced by the loft and cap engines."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple

from pathloft.geom import flatten, point, triangle_normal

Vec3 = Tuple[float, float, float]
TriIndices = Tuple[int, int, int]
TriTuple = Tuple[Vec3, Vec3, Vec3, Vec3]


@dataclass
class MeshBuffers:
    """Triangle mesh as a flat coordinate list and a flat index list.

    ``vertices`` holds ``x, y, z`` triples; ``indices`` holds one triple
    of vertex numbers per triangle.
    """

    vertices: List[float] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)

    @classmethod
    def from_points(cls, points: Sequence[Sequence[float]],
                    triangles: Sequence[Sequence[int]]) -> "MeshBuffers":
        indices: List[int] = []
        for tri in triangles:
            indices.extend(int(i) for i in tri)
        return cls(flatten([point(p) for p in points]), indices)

    @property
    def vertex_count(self) -> int:
        return len(self.vertices) // 3

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    def is_empty(self) -> bool:
        return not self.vertices and not self.indices

    def points(self) -> List[Vec3]:
        v = self.vertices
        return [(v[i], v[i + 1], v[i + 2]) for i in range(0, len(v) - 2, 3)]

    def triangles(self) -> List[TriIndices]:
        ind = self.indices
        return [(ind[i], ind[i + 1], ind[i + 2]) for i in range(0, len(ind) - 2, 3)]


def mesh_view(buffers: MeshBuffers) -> Iterator[TriTuple]:
    """Yield triangles as ``(normal, v0, v1, v2)``.

    Normals are unit vectors.  Triangles with degenerate geometry (zero
    area) are skipped silently.
    """

    pts = buffers.points()
    for i0, i1, i2 in buffers.triangles():
        v0, v1, v2 = pts[i0], pts[i1], pts[i2]
        normal = triangle_normal(v0, v1, v2)
        if normal is None:
            continue
        yield normal, v0, v1, v2


__all__ = ['MeshBuffers', 'mesh_view', 'Vec3', 'TriIndices']
