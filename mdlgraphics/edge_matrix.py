"""Edge lists stored as a 4-row matrix of homogeneous point columns."""

from __future__ import annotations

from typing import Any, Iterable, Iterator

from .matrix import Matrix, zeros

Point = tuple[float, float, float]


class EdgeMatrix:
    """Pairs of points, one point per column, as (x, y, z, 1) columns."""

    def __init__(self, matrix: Matrix | None = None) -> None:
        if matrix is None:
            matrix = zeros(0, 4)
        if matrix.height != 4:
            raise ValueError(
                f"an edge matrix needs a grid of height 4, got height {matrix.height}"
            )
        self.matrix = matrix

    @classmethod
    def from_grid(cls, grid: Iterable[Iterable[Any]]) -> EdgeMatrix:
        """Build an edge matrix from a copy of a 4-row grid."""
        return cls(Matrix(grid))

    def _add_point(self, point: Point) -> None:
        x, y, z = point
        self.matrix.add_col((float(x), float(y), float(z), 1.0))

    def add_edge(self, p0: Point, p1: Point) -> None:
        """Append the edge from p0 to p1."""
        self._add_point(p0)
        self._add_point(p1)

    def __iter__(self) -> Iterator[tuple[Point, Point]]:
        points = iter(zip(self.matrix[0], self.matrix[1], self.matrix[2]))
        return zip(points, points)

    def __len__(self) -> int:
        return self.matrix.width // 2

    def __matmul__(self, other: object) -> EdgeMatrix:
        if not isinstance(other, EdgeMatrix):
            return NotImplemented
        return EdgeMatrix.from_grid(self.matrix @ other.matrix)

    def __rmatmul__(self, other: object) -> EdgeMatrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return EdgeMatrix(other @ self.matrix)

    def __str__(self) -> str:
        return str(self.matrix)

    def __repr__(self) -> str:
        return f"EdgeMatrix({self.matrix!r})"