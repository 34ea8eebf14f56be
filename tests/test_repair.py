import pytest

from pathloft.adjacency import AdjacencyMatrix
from pathloft.errors import BrokenConnectivityPath
from pathloft.loft import walk_strip
from pathloft.repair import (
    REPAIR_POLICIES,
    RepairPolicy,
    get_repair_policy,
    repair_next_column,
    repair_none,
)

T, F = True, False


def _octagon_over_square():
    # raw wedge partition of an 8-gon around a 4-gon: two rows per column,
    # consecutive columns share no row
    return AdjacencyMatrix.from_rows([
        [F, F, F, T],
        [F, F, F, T],
        [T, F, F, F],
        [T, F, F, F],
        [F, T, F, F],
        [F, T, F, F],
        [F, F, T, F],
        [F, F, T, F],
    ])


def _dummy_paths(rows, cols):
    pl = [(float(i), 1.0, 0.0) for i in range(rows)]
    ps = [(float(i), -1.0, 0.0) for i in range(cols)]
    return pl, ps


def test_repair_none_is_noop():
    m = _octagon_over_square()
    before = m.tolist()
    assert repair_none(m) == 0
    assert m.tolist() == before


def test_next_column_bridges_each_step():
    m = _octagon_over_square()
    assert repair_next_column(m) == 4
    assert m.tolist() == [
        [F, F, F, T],
        [T, F, F, T],
        [T, F, F, F],
        [T, T, F, F],
        [F, T, F, F],
        [F, T, T, F],
        [F, F, T, F],
        [F, F, T, T],
    ]
    assert all(m.has_forward(r, c) for r, c in m.cells())


def test_next_column_is_stable():
    m = _octagon_over_square()
    repair_next_column(m)
    after = m.tolist()
    assert repair_next_column(m) == 0
    assert m.tolist() == after


def test_next_column_fills_empty_column():
    m = AdjacencyMatrix.from_rows([
        [T, F, F],
        [T, F, F],
        [F, F, T],
        [F, F, T],
    ])
    assert repair_next_column(m) == 3
    # row 2 moves into the empty middle column
    assert m.tolist() == [
        [T, F, F],
        [T, T, F],
        [F, T, T],
        [T, F, T],
    ]
    assert all(m.col_degree(c) for c in range(m.cols))

    pl, ps = _dummy_paths(4, 3)
    tris = walk_strip(m, pl, ps)
    assert [sorted(t) for t in tris] == [
        [0, 1, 4],
        [1, 4, 5],
        [1, 2, 5],
        [2, 5, 6],
        [2, 3, 6],
        [3, 4, 6],
        [0, 3, 4],
    ]


def test_next_column_empty_column_square_matrix():
    # column 0 is empty and column 1 holds rows 0 and 2
    m = AdjacencyMatrix.from_rows([
        [F, T, F],
        [F, F, T],
        [F, T, F],
    ])
    assert repair_next_column(m) == 3
    assert m.tolist() == [
        [F, T, T],
        [T, F, T],
        [T, T, F],
    ]

    pl, ps = _dummy_paths(3, 3)
    tris = walk_strip(m, pl, ps)
    assert [sorted(t) for t in tris] == [
        [0, 4, 5],
        [0, 1, 5],
        [1, 3, 5],
        [1, 2, 3],
        [2, 3, 4],
        [0, 2, 4],
    ]


def test_next_column_fills_rows_without_wedge():
    m = AdjacencyMatrix.from_rows([[T, F, F], [F, F, F], [F, F, F]])
    assert repair_next_column(m) == 5
    assert m.tolist() == [
        [T, T, F],
        [F, T, T],
        [T, F, T],
    ]
    assert all(m.row_degree(r) for r in range(m.rows))


def test_next_column_keeps_wedges_that_do_not_wind_once():
    raw = [
        [T, F, F],
        [F, F, T],
        [F, T, F],
    ]
    m = AdjacencyMatrix.from_rows(raw)
    repair_next_column(m)
    assert all(m[r, c] for r, row in enumerate(raw) for c, v in enumerate(row) if v)

    pl, ps = _dummy_paths(3, 3)
    with pytest.raises(BrokenConnectivityPath) as info:
        walk_strip(m, pl, ps)
    assert info.value.details['right'] != 3


def test_next_column_empty_matrix():
    m = AdjacencyMatrix(3, 3)
    assert repair_next_column(m) == 0
    assert m.count() == 0



def test_registry():
    assert set(REPAIR_POLICIES) == set(RepairPolicy)
    assert get_repair_policy(RepairPolicy.NONE) is repair_none
    assert get_repair_policy(RepairPolicy.NEXT_COLUMN) is repair_next_column
    assert get_repair_policy('none') is repair_none
    assert get_repair_policy('next-column') is repair_next_column


def test_registry_callable():
    def custom(matrix):
        return 0

    assert get_repair_policy(custom) is custom


@pytest.mark.parametrize('bad', ['bogus', 42, None])
def test_registry_rejects_unknown(bad):
    with pytest.raises(ValueError):
        get_repair_policy(bad)
