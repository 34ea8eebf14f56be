import math

import pytest

from pathloft.errors import DegeneratePathError
from pathloft.geom import dist, pi2
from pathloft.planar import (
    angle_between,
    center,
    is_clockwise,
    make_ccw,
    normalize_angle,
    origin_angle,
    plane_normal,
    planarize,
    signed_area,
    transform_to_plane,
)


SQUARE = [(0, 0, 0), (2, 0, 0), (2, 2, 0), (0, 2, 0)]


def _sides(pts):
    return [dist(pts[i], pts[(i + 1) % len(pts)]) for i in range(len(pts))]


def test_plane_normal_xy():
    assert plane_normal(SQUARE) == pytest.approx((0.0, 0.0, 1.0))
    assert plane_normal(list(reversed(SQUARE))) == pytest.approx((0.0, 0.0, -1.0))


def test_plane_normal_degenerate():
    with pytest.raises(DegeneratePathError):
        plane_normal([(0, 0, 0), (1, 0, 0)])
    with pytest.raises(DegeneratePathError) as info:
        plane_normal([(0, 0, 0), (1, 1, 1), (2, 2, 2), (0, 1, 0)])
    assert 'points' in info.value.details


def test_transform_to_plane_keeps_xy_plane():
    raised = [(x, y, 5) for x, y, _ in SQUARE]
    assert transform_to_plane(raised) == [(float(x), float(y), 0.0) for x, y, _ in SQUARE]
    # anti-parallel normal is not rotated either
    cw = list(reversed(raised))
    assert transform_to_plane(cw) == [(float(x), float(y), 0.0) for x, y, _ in reversed(SQUARE)]


def test_transform_to_plane_vertical():
    wall = [(5, 0, 0), (5, 2, 0), (5, 2, 2), (5, 0, 2)]
    flat = transform_to_plane(wall)
    assert all(p[2] == 0.0 for p in flat)
    assert _sides(flat) == pytest.approx([2.0, 2.0, 2.0, 2.0])
    assert dist(flat[0], flat[2]) == pytest.approx(2 * math.sqrt(2))
    # leading corner turns counterclockwise once its normal is +z
    assert not is_clockwise(flat)


def test_transform_to_plane_tilted_preserves_distances():
    c, s = math.cos(0.5), math.sin(0.5)
    tilted = [(x, y * c, y * s) for x, y, _ in SQUARE]
    flat = transform_to_plane(tilted)
    assert flat[0][2] == 0.0
    for i in range(4):
        for j in range(4):
            assert dist(flat[i], flat[j]) == pytest.approx(dist(SQUARE[i], SQUARE[j]))


def test_transform_to_plane_does_not_mutate():
    wall = [[5, 0, 0], [5, 2, 0], [5, 2, 2], [5, 0, 2]]
    transform_to_plane(wall)
    assert wall == [[5, 0, 0], [5, 2, 0], [5, 2, 2], [5, 0, 2]]


def test_center_uses_bounding_box():
    tri = [(0, 0, 3), (4, 0, 3), (0, 2, 3)]
    assert center(tri) == [(-2.0, -1.0, 3.0), (2.0, -1.0, 3.0), (-2.0, 1.0, 3.0)]
    assert center([]) == []


def test_is_clockwise():
    assert not is_clockwise(SQUARE)
    assert is_clockwise(list(reversed(SQUARE)))
    assert not is_clockwise([(0, 0, 0), (1, 0, 0), (2, 0, 0)])


def test_signed_area():
    assert signed_area(SQUARE) == pytest.approx(4.0)
    assert signed_area(list(reversed(SQUARE))) == pytest.approx(-4.0)


def test_make_ccw():
    cw = [list(p) for p in reversed(SQUARE)]
    ccw = make_ccw(cw)
    assert not is_clockwise(ccw)
    assert ccw == [(float(x), float(y), float(z)) for x, y, z in SQUARE]
    assert cw[0] == [0, 2, 0]
    assert make_ccw(SQUARE) == [tuple(map(float, p)) for p in SQUARE]


def test_planarize():
    wall = [(5, 10, 0), (5, 12, 0), (5, 12, 2), (5, 10, 2)]
    flat = planarize(wall)
    assert all(p[2] == 0.0 for p in flat)
    assert not is_clockwise(flat)
    xs = [p[0] for p in flat]
    ys = [p[1] for p in flat]
    assert min(xs) + max(xs) == pytest.approx(0.0)
    assert min(ys) + max(ys) == pytest.approx(0.0)
    assert signed_area(flat) == pytest.approx(4.0)


def test_planarize_is_idempotent():
    once = planarize([(1, 1, 1), (4, 1, 1), (4, 3, 1), (1, 3, 1)])
    assert planarize(once) == once


@pytest.mark.parametrize(
    'angle, expected',
    [
        (0.0, 0.0),
        (math.pi, math.pi),
        (-math.pi / 2, 3 * math.pi / 2),
        (pi2, 0.0),
        (5 * math.pi, math.pi),
        (-1e-20, 0.0),
    ],
)
def test_normalize_angle(angle, expected):
    result = normalize_angle(angle)
    assert result == pytest.approx(expected)
    assert 0.0 <= result < pi2


def test_origin_angle():
    assert origin_angle((0, 1, 0)) == pytest.approx(math.pi / 2)
    assert origin_angle((0, -1, 0)) == pytest.approx(3 * math.pi / 2)
    assert origin_angle((-1, 0, 7)) == pytest.approx(math.pi)


@pytest.mark.parametrize(
    'start, angle, end, expected',
    [
        (1.0, 1.5, 2.0, True),
        (1.0, 1.0, 2.0, True),
        (1.0, 2.0, 2.0, True),
        (1.0, 0.5, 2.0, False),
        (1.0, 2.5, 2.0, False),
        # arcs that wrap past 2*pi
        (5.0, 6.0, 1.0, True),
        (5.0, 0.5, 1.0, True),
        (5.0, 5.0, 1.0, True),
        (5.0, 1.0, 1.0, True),
        (5.0, 3.0, 1.0, False),
        # zero-width arc
        (1.0, 1.0, 1.0, True),
        (1.0, 2.0, 1.0, False),
    ],
)
def test_angle_between(start, angle, end, expected):
    assert angle_between(start, angle, end) is expected
