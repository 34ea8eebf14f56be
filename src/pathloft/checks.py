"""Validation helpers for pathloft meshes."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from pathloft.geom import dot, epsilon, mag, newell, path, triangle_area, triangle_normal
from pathloft.mesh import MeshBuffers


def indices_in_range(buffers: MeshBuffers) -> "CheckResult":
    """Every index must name a vertex and the index list must hold whole triangles."""

    warnings: List[str] = []
    if len(buffers.vertices) % 3:
        warnings.append('vertex buffer length {} is not a multiple of 3'.format(len(buffers.vertices)))
    if len(buffers.indices) % 3:
        warnings.append('index buffer length {} is not a multiple of 3'.format(len(buffers.indices)))
    count = buffers.vertex_count
    bad = [i for i in buffers.indices if i < 0 or i >= count]
    if bad:
        warnings.append(f'indices out of range [0, {count}): {sorted(set(bad))}')
    return CheckResult(not warnings, warnings)


def faces_oriented(buffers: MeshBuffers, reference=None) -> "CheckResult":
    """Check that every non-degenerate face normal agrees with ``reference``.

    Without a reference the first non-degenerate face sets the
    orientation.
    """

    pts = buffers.points()
    inconsistent = []
    for idx, (a, b, c) in enumerate(buffers.triangles()):
        normal = triangle_normal(pts[a], pts[b], pts[c])
        if normal is None:
            continue
        if reference is None:
            reference = normal
            continue
        if dot(reference, normal) < -epsilon:
            inconsistent.append(idx)

    if reference is None:
        return CheckResult(True, ['no non-degenerate faces found'])
    if inconsistent:
        return CheckResult(False, [f'inconsistent face orientation indices: {inconsistent}'])
    return CheckResult(True, [])


def edge_counts(buffers: MeshBuffers) -> Counter:
    edges: Counter = Counter()
    for a, b, c in buffers.triangles():
        edges[_edge_key(a, b)] += 1
        edges[_edge_key(b, c)] += 1
        edges[_edge_key(c, a)] += 1
    return edges


def boundary_edges(buffers: MeshBuffers) -> List[Tuple[int, int]]:
    """Edges used by exactly one triangle, sorted."""

    return sorted(edge for edge, count in edge_counts(buffers).items() if count == 1)


def strip_closed(buffers: MeshBuffers) -> "CheckResult":
    """A closed collar uses each edge at most twice and has no degenerate triangle."""

    warnings: List[str] = []
    invalid = [edge for edge, count in edge_counts(buffers).items() if count > 2]
    if invalid:
        warnings.append(f'edges with multiplicity >2: {sorted(invalid)}')
    repeated = [tri for tri in buffers.triangles() if len(set(tri)) < 3]
    if repeated:
        warnings.append(f'triangles repeating a vertex: {repeated}')
    return CheckResult(not warnings, warnings)


def cap_area_matches(polygon: Sequence[Sequence[float]],
                     triangles: Sequence[Sequence[int]], rel: float = 1e-6) -> "CheckResult":
    """Check that ``triangles`` cover the area of a planar ``polygon``."""

    pts = path(polygon)
    expected = mag(newell(pts)) / 2.0
    total = sum(triangle_area(pts[a], pts[b], pts[c]) for a, b, c in triangles)
    if abs(total - expected) > max(rel * expected, epsilon):
        return CheckResult(False, [f'triangle area {total} differs from polygon area {expected}'])
    return CheckResult(True, [])


def _edge_key(a: int, b: int) -> tuple[int, int]:
    return (a, b) if a < b else (b, a)


@dataclass
class CheckResult:
    ok: bool
    warnings: List[str]

    def __bool__(self) -> bool:
        return self.ok


__all__ = [
    'CheckResult',
    'indices_in_range',
    'faces_oriented',
    'edge_counts',
    'boundary_edges',
    'strip_closed',
    'cap_area_matches',
]
