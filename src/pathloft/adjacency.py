"""Boolean adjacency grid used by the loft engine.

Rows index the vertices of the larger path (``pL``) and columns the
vertices of the smaller one (``pS``).  A true cell ``[row, col]`` means
a bridging edge joins ``pL[row]`` and ``pS[col]``.  Both paths are
closed, so neighbourhood queries wrap around in both directions: the
grid is a torus.
"""

from __future__ import annotations

from typing import Iterator, List, Tuple

Cell = Tuple[int, int]


class AdjacencyMatrix:
    """A ``rows x cols`` grid of booleans with cyclic neighbourhoods."""

    def __init__(self, rows: int, cols: int):
        if rows < 1 or cols < 1:
            raise ValueError('adjacency matrix needs at least one row and column')
        self.rows = rows
        self.cols = cols
        # one list per row; rows never share storage
        self._cells: List[List[bool]] = [[False] * cols for _ in range(rows)]

    @classmethod
    def from_rows(cls, rows: List[List[bool]]) -> "AdjacencyMatrix":
        """Build a matrix from a list of equal-length boolean rows."""

        if not rows or not rows[0]:
            raise ValueError('adjacency matrix needs at least one row and column')
        width = len(rows[0])
        if any(len(r) != width for r in rows):
            raise ValueError('adjacency rows must all have the same length')
        matrix = cls(len(rows), width)
        for i, r in enumerate(rows):
            matrix._cells[i] = [bool(v) for v in r]
        return matrix

    def __getitem__(self, cell: Cell) -> bool:
        row, col = cell
        return self._cells[row % self.rows][col % self.cols]

    def __setitem__(self, cell: Cell, value: bool) -> None:
        row, col = cell
        self._cells[row % self.rows][col % self.cols] = bool(value)

    def __repr__(self) -> str:
        lines = [''.join('#' if v else '.' for v in r) for r in self._cells]
        return 'AdjacencyMatrix({}x{}:\n{})'.format(self.rows, self.cols, '\n'.join(lines))

    def tolist(self) -> List[List[bool]]:
        return [list(r) for r in self._cells]

    def cells(self) -> Iterator[Cell]:
        """Yield the true cells in row-major order."""

        for row in range(self.rows):
            for col in range(self.cols):
                if self._cells[row][col]:
                    yield row, col

    def count(self) -> int:
        return sum(sum(1 for v in r if v) for r in self._cells)

    def first_in_row(self, row: int) -> int | None:
        """Return the lowest true column of ``row``, or ``None``."""

        for col, v in enumerate(self._cells[row % self.rows]):
            if v:
                return col
        return None

    def row_degree(self, row: int) -> int:
        return sum(1 for v in self._cells[row % self.rows] if v)

    def col_degree(self, col: int) -> int:
        return sum(1 for r in self._cells if r[col % self.cols])

    def degree(self, row: int, col: int) -> int:
        """Number of true 4-neighbours (up, down, left, right) of a cell."""

        # a 1-wide axis would count the cell itself as its own neighbour
        total = 0
        if self.rows > 1:
            total += self[row - 1, col] + self[row + 1, col]
        if self.cols > 1:
            total += self[row, col - 1] + self[row, col + 1]
        return int(total)

    def has_forward(self, row: int, col: int) -> bool:
        """True if the strip can leave ``[row, col]`` downwards or rightwards."""

        return self[row + 1, col] or self[row, col + 1]


__all__ = ['AdjacencyMatrix', 'Cell']
