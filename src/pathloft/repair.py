"""Connection-repair policies for loft adjacency matrices.

The angular wedge partition leaves gaps: consecutive wedges own
disjoint runs of ``pL`` rows, so the strip cannot step from one column
to the next, and a wedge too narrow to hold any ``pL`` vertex leaves its
column empty.  A repair policy patches the matrix in place so the strip
walk can trace one closed cycle through it.

Policies are selected by :class:`RepairPolicy` and looked up in
``REPAIR_POLICIES``.  Any callable taking an :class:`AdjacencyMatrix`
and returning the number of cells it added can stand in for a
registered policy.

The ``NEXT_COLUMN`` policy is greedy and order dependent.  On strongly
non-convex or very dissimilar path pairs it can still produce a collar
that crosses itself; the strip walk rejects any matrix that does not
close over every row and column.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple, Union

from pathloft.adjacency import AdjacencyMatrix

logger = logging.getLogger(__name__)

RepairFunction = Callable[[AdjacencyMatrix], int]


class RepairPolicy(Enum):
    """Available connection-repair strategies.

    ``NONE`` keeps the raw wedge partition.

    ``NEXT_COLUMN`` first gives every column at least one row, then
    bridges dead ends into the next column (see
    :func:`repair_next_column`).  A dead end is a true cell with no
    forward neighbour, ``[row + 1, col]`` or ``[row, col + 1]``.  Cells
    whose 4-neighbour degree differs from two are not patched on that
    count alone; the degree is only logged.
    """
    NONE = "none"
    NEXT_COLUMN = "next-column"


def repair_none(matrix: AdjacencyMatrix) -> int:
    """Leave the raw wedge partition untouched."""

    return 0


def _bridge_target(matrix: AdjacencyMatrix, row: int, col: int) -> Optional[Tuple[int, bool]]:
    # nearest following column holding this row (True) or the next (False)
    for k in range(1, matrix.cols):
        c = col + k
        if matrix[row, c]:
            return k, True
        if matrix[row + 1, c]:
            return k, False
    return None


def _row_columns(matrix: AdjacencyMatrix) -> Optional[List[int]]:
    """Pick one column per row, or ``None`` if the matrix is empty.

    A row on the ray between two wedges holds both; the earlier wedge
    (counterclockwise) is kept.  A row with no wedge takes the column
    of the nearest earlier row.
    """

    cols = matrix.cols
    assign: List[Optional[int]] = []
    for row in range(matrix.rows):
        owned = [c for c in range(cols) if matrix[row, c]]
        if not owned:
            assign.append(None)
        elif cols > 2 and owned == [0, cols - 1]:
            assign.append(cols - 1)
        else:
            assign.append(owned[0])

    known = [c for c in assign if c is not None]
    if not known:
        return None
    last = known[-1]
    for row, c in enumerate(assign):
        if c is None:
            assign[row] = last
        else:
            last = c
    return assign


def _balance_columns(assign: List[int], cols: int) -> Optional[List[int]]:
    """Move run boundaries so every column owns at least one row.

    ``assign`` must advance once around the columns as the rows go
    around (or stay in one column), and there must be at least as many
    rows as columns; otherwise ``None`` is returned.  Rows keep their
    column where possible; an empty column takes rows from its
    neighbours.
    """

    rows = len(assign)
    steps = [(assign[(r + 1) % rows] - assign[r]) % cols for r in range(rows)]
    if rows < cols or sum(steps) not in (0, cols):
        return None

    # unroll the rows from the start of a run so columns only increase
    first = next((r for r in range(rows) if steps[r - 1]), 0)
    base = assign[first]
    unrolled = [base]
    for p in range(1, rows):
        unrolled.append(unrolled[-1] + steps[(first + p - 1) % rows])

    # bounds[j] is the first unrolled position owned by column base + j
    bounds = [next((p for p, u in enumerate(unrolled) if u >= base + j), rows)
              for j in range(cols)]
    for j in range(1, cols):
        bounds[j] = max(bounds[j], bounds[j - 1] + 1)
    bounds[-1] = min(bounds[-1], rows - 1)
    for j in range(cols - 2, -1, -1):
        bounds[j] = min(bounds[j], bounds[j + 1] - 1)

    balanced = [0] * rows
    for p in range(rows):
        if p >= bounds[0] + rows:
            # wrapped back into the first column
            j = 0
        else:
            j = max(j for j in range(cols) if bounds[j] <= p)
        balanced[(first + p) % rows] = (base + j) % cols
    return balanced


def repair_next_column(matrix: AdjacencyMatrix) -> int:
    """Balance the columns, then bridge every dead end into the next one.

    When the rows' wedges wind once around the columns, each row is
    first reduced to a single column and run boundaries are shifted so
    that no column is empty and no row is left without a column.  Rows
    moved into an empty column lose their original wedge cell.

    Then each dead-end cell, one with neither ``[row + 1, col]`` nor
    ``[row, col + 1]`` set, is handled in row-major order: cells
    ``[row, col + 1 ...]`` are set up to the nearest following column
    that holds either this row or the next one.  Returns the number of
    cells set that were not set before.
    """

    before = set(matrix.cells())
    starved = sum(1 for r, c in before if matrix.degree(r, c) < 2)

    assign = _row_columns(matrix)
    balanced = _balance_columns(assign, matrix.cols) if assign is not None else None
    if balanced is not None:
        moved = sum(1 for a, b in zip(assign, balanced) if a != b)
        for row in range(matrix.rows):
            for col in range(matrix.cols):
                matrix[row, col] = col == balanced[row]
        logger.debug('next-column repair: %d rows moved to fill empty columns', moved)
    else:
        logger.debug('next-column repair: wedges do not wind once; columns not balanced')

    for row in range(matrix.rows):
        for col in range(matrix.cols):
            if not matrix[row, col] or matrix.has_forward(row, col):
                continue
            target = _bridge_target(matrix, row, col)
            if target is None:
                logger.debug('no bridge target for cell [%d, %d]', row, col)
                continue
            k, same_row = target
            span = k - 1 if same_row else k
            for step in range(1, span + 1):
                matrix[row, col + step] = True

    added = len(set(matrix.cells()) - before)
    logger.debug('next-column repair: %d under-connected cells, %d cells added',
                 starved, added)
    return added


REPAIR_POLICIES: Dict[RepairPolicy, RepairFunction] = {
    RepairPolicy.NONE: repair_none,
    RepairPolicy.NEXT_COLUMN: repair_next_column,
}


def get_repair_policy(policy: Union[RepairPolicy, str, RepairFunction]) -> RepairFunction:
    """Resolve a policy member, its string value, or a callable."""

    if isinstance(policy, RepairPolicy):
        return REPAIR_POLICIES[policy]
    if isinstance(policy, str):
        try:
            return REPAIR_POLICIES[RepairPolicy(policy)]
        except ValueError:
            raise ValueError('unknown repair policy: {}'.format(policy)) from None
    if callable(policy):
        return policy
    raise ValueError('bad repair policy: {!r}'.format(policy))


__all__ = [
    'RepairPolicy',
    'RepairFunction',
    'REPAIR_POLICIES',
    'get_repair_policy',
    'repair_none',
    'repair_next_column',
]
