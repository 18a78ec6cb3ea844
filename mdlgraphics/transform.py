"""Affine transformations and a stack of them."""

from __future__ import annotations

import math
from enum import Enum

from .edge_matrix import EdgeMatrix
from .matrix import Matrix, identity
from .polygon_matrix import PolygonMatrix


class Axis(Enum):
    """A coordinate axis to rotate about."""

    X = "x"
    Y = "y"
    Z = "z"

    def matrix(self, angle: float) -> Matrix:
        """The 4x4 rotation matrix for an angle in radians."""
        c, s = math.cos(angle), math.sin(angle)
        if self is Axis.X:
            rows = [
                [1.0, 0.0, 0.0, 0.0],
                [0.0, c, -s, 0.0],
                [0.0, s, c, 0.0],
                [0.0, 0.0, 0.0, 1.0],
            ]
        elif self is Axis.Y:
            rows = [
                [c, 0.0, s, 0.0],
                [0.0, 1.0, 0.0, 0.0],
                [-s, 0.0, c, 0.0],
                [0.0, 0.0, 0.0, 1.0],
            ]
        else:
            rows = [
                [c, -s, 0.0, 0.0],
                [s, c, 0.0, 0.0],
                [0.0, 0.0, 1.0, 0.0],
                [0.0, 0.0, 0.0, 1.0],
            ]
        return Matrix(rows)


class Transformer:
    """An accumulated 4x4 transformation; new operations apply after old ones."""

    def __init__(self) -> None:
        self._matrix = identity(4)

    @property
    def matrix(self) -> Matrix:
        return self._matrix.copy()

    def reset(self) -> None:
        self._matrix = identity(4)

    def scale(self, sx: float, sy: float, sz: float) -> None:
        self._matrix = (
            Matrix(
                [
                    [sx, 0.0, 0.0, 0.0],
                    [0.0, sy, 0.0, 0.0],
                    [0.0, 0.0, sz, 0.0],
                    [0.0, 0.0, 0.0, 1.0],
                ]
            )
            @ self._matrix
        )

    def translate(self, tx: float, ty: float, tz: float) -> None:
        self._matrix = (
            Matrix(
                [
                    [1.0, 0.0, 0.0, tx],
                    [0.0, 1.0, 0.0, ty],
                    [0.0, 0.0, 1.0, tz],
                    [0.0, 0.0, 0.0, 1.0],
                ]
            )
            @ self._matrix
        )

    def rotate(self, axis: Axis, angle: float) -> None:
        """Rotate about an axis by an angle in radians."""
        self._matrix = axis.matrix(angle) @ self._matrix

    def apply_edges(self, edge_matrix: EdgeMatrix) -> EdgeMatrix:
        return self._matrix @ edge_matrix

    def apply_poly(self, poly_matrix: PolygonMatrix) -> PolygonMatrix:
        return self._matrix @ poly_matrix

    def compose(self, other: Transformer) -> None:
        """Make other's transformation apply before this one's."""
        self._matrix = self._matrix @ other._matrix

    def copy(self) -> Transformer:
        clone = Transformer()
        clone._matrix = self._matrix.copy()
        return clone


class TStack:
    """A stack of transformers, starting with the identity."""

    def __init__(self) -> None:
        self._stack: list[Transformer] = [Transformer()]

    def top(self) -> Transformer:
        if not self._stack:
            raise IndexError("transform stack is empty")
        return self._stack[-1]

    def push_copy(self) -> None:
        """Push a copy of the current top."""
        self._stack.append(self.top().copy())

    def pop(self) -> None:
        """Drop the top transformer; does nothing on an empty stack."""
        if self._stack:
            self._stack.pop()

    def __len__(self) -> int:
        return len(self._stack)