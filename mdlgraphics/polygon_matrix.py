"""Triangle lists with face and vertex normals."""

from __future__ import annotations

import math
from typing import Any, Iterable, Iterator

from .matrix import Matrix, zeros
from .vector3d import Vector3D, average, from_points

Point = tuple[float, float, float]
Vertex = tuple[float, float, float, Vector3D]
Triangle = tuple[Vertex, Vertex, Vertex]


def _key(point: Point) -> tuple[Any, ...]:
    """A hashable key under which all NaNs compare equal."""
    return tuple(None if math.isnan(value) else value for value in point)


class PolygonMatrix:
    """Triangles stored as consecutive triples of (x, y, z, 1) columns."""

    def __init__(self, matrix: Matrix | None = None) -> None:
        if matrix is None:
            matrix = zeros(0, 4)
        if matrix.height != 4:
            raise ValueError(
                f"a polygon matrix needs a grid of height 4, got height {matrix.height}"
            )
        self.matrix = matrix

    @classmethod
    def from_grid(cls, grid: Iterable[Iterable[Any]]) -> PolygonMatrix:
        """Build a polygon matrix from a copy of a 4-row grid."""
        return cls(Matrix(grid))

    def _add_point(self, point: Point) -> None:
        x, y, z = point
        self.matrix.add_col((float(x), float(y), float(z), 1.0))

    def add_triangle(self, p0: Point, p1: Point, p2: Point) -> None:
        """Append the triangle p0, p1, p2."""
        self._add_point(p0)
        self._add_point(p1)
        self._add_point(p2)

    @property
    def poly_count(self) -> int:
        return self.matrix.width // 3

    def _points(self) -> list[Point]:
        return list(zip(self.matrix[0], self.matrix[1], self.matrix[2]))

    def _compute_normals(self) -> tuple[list[Vector3D], list[Vector3D]]:
        points = self._points()
        corners = iter(points)
        normals = [
            from_points(a, b).cross(from_points(a, c)).normalize()
            for a, b, c in zip(corners, corners, corners)
        ]

        occurrences: dict[tuple[Any, ...], list[int]] = {}
        for index, point in enumerate(points):
            occurrences.setdefault(_key(point), []).append(index)

        vertex_normals = [Vector3D(0.0, 0.0, 0.0)] * len(points)
        for indices in occurrences.values():
            triangles = sorted({index // 3 for index in indices})
            normal = average(normals[t] for t in triangles if t < len(normals))
            for index in indices:
                vertex_normals[index] = normal
        return normals, vertex_normals

    @property
    def normals(self) -> list[Vector3D]:
        """The unit normal of each triangle."""
        return self._compute_normals()[0]

    @property
    def vertex_normals(self) -> list[Vector3D]:
        """For each point, the averaged normal of the triangles touching it."""
        return self._compute_normals()[1]

    def __iter__(self) -> Iterator[tuple[Triangle, Vector3D]]:
        normals, vertex_normals = self._compute_normals()
        vertices = iter(
            zip(self.matrix[0], self.matrix[1], self.matrix[2], vertex_normals)
        )
        return zip(zip(vertices, vertices, vertices), normals)

    def __matmul__(self, other: object) -> PolygonMatrix:
        if not isinstance(other, PolygonMatrix):
            return NotImplemented
        return PolygonMatrix.from_grid(self.matrix @ other.matrix)

    def __rmatmul__(self, other: object) -> PolygonMatrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return PolygonMatrix(other @ self.matrix)

    def __str__(self) -> str:
        return str(self.matrix)

    def __repr__(self) -> str:
        return f"PolygonMatrix({self.matrix!r})"