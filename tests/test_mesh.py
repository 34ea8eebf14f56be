import pytest

from pathloft.mesh import MeshBuffers, mesh_view


SQUARE = [(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)]


def test_from_points():
    mesh = MeshBuffers.from_points(SQUARE, [(0, 1, 2), (0, 2, 3)])
    assert mesh.vertices == [0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 1.0, 1.0, 0.0, 0.0, 1.0, 0.0]
    assert mesh.indices == [0, 1, 2, 0, 2, 3]
    assert mesh.vertex_count == 4
    assert mesh.triangle_count == 2
    assert mesh.points() == [tuple(map(float, p)) for p in SQUARE]
    assert mesh.triangles() == [(0, 1, 2), (0, 2, 3)]
    assert not mesh.is_empty()


def test_empty():
    mesh = MeshBuffers()
    assert mesh.is_empty()
    assert mesh.vertex_count == 0
    assert mesh.triangles() == []
    assert list(mesh_view(mesh)) == []


def test_mesh_view():
    mesh = MeshBuffers.from_points(SQUARE, [(0, 1, 2), (0, 2, 3)])
    faces = list(mesh_view(mesh))
    assert len(faces) == 2
    normal, v0, v1, v2 = faces[0]
    assert normal == pytest.approx((0.0, 0.0, 1.0))
    assert (v0, v1, v2) == ((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0))


def test_mesh_view_skips_degenerate():
    pts = SQUARE + [(2, 0, 0)]
    mesh = MeshBuffers.from_points(pts, [(0, 1, 4), (0, 1, 2)])
    faces = list(mesh_view(mesh))
    assert len(faces) == 1
    assert faces[0][3] == (1.0, 1.0, 0.0)
