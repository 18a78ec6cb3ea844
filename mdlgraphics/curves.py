"""Parametric curves sampled over t in [0, 1]."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod

from .matrix import Matrix

Point2 = tuple[float, float]
Point3 = tuple[float, float, float]

_BEZIER = Matrix(
    [
        [-1.0, 3.0, -3.0, 1.0],
        [3.0, -6.0, 3.0, 0.0],
        [-3.0, 3.0, 0.0, 0.0],
        [1.0, 0.0, 0.0, 0.0],
    ]
)

_HERMITE = Matrix(
    [
        [2.0, -2.0, 1.0, 1.0],
        [-3.0, 3.0, -2.0, -1.0],
        [0.0, 0.0, 1.0, 0.0],
        [1.0, 0.0, 0.0, 0.0],
    ]
)


class Parametric(ABC):
    """A curve given by coordinate functions of t."""

    @abstractmethod
    def x(self, t: float) -> float: ...

    @abstractmethod
    def y(self, t: float) -> float: ...

    @abstractmethod
    def z(self, t: float) -> float: ...

    def f(self, t: float) -> Point3:
        return (self.x(t), self.y(t), self.z(t))

    def points(self, n: int) -> list[Point3]:
        """n points at evenly spaced t from 0 to 1 inclusive."""
        denominator = n - 1
        return [
            self.f(i / denominator if denominator else math.nan) for i in range(n)
        ]


def _coefficients(solver: Matrix, values: tuple[float, ...]) -> tuple[float, ...]:
    product = solver @ Matrix([value] for value in values)
    return tuple(row[0] for row in product)


def _cubic(coefficients: tuple[float, ...], t: float) -> float:
    a, b, c, d = coefficients
    return a * t * t * t + b * t * t + c * t + d


class _Cubic(Parametric):
    """A planar cubic in z = 0 given by its polynomial coefficients."""

    def __init__(self, coeff_x: tuple[float, ...], coeff_y: tuple[float, ...]) -> None:
        self.coeff_x = coeff_x
        self.coeff_y = coeff_y

    def x(self, t: float) -> float:
        return _cubic(self.coeff_x, t)

    def y(self, t: float) -> float:
        return _cubic(self.coeff_y, t)

    def z(self, t: float) -> float:
        return 0.0


class Bezier(_Cubic):
    """A cubic Bezier curve through p0 and p3 guided by p1 and p2."""

    def __init__(self, p0: Point2, p1: Point2, p2: Point2, p3: Point2) -> None:
        super().__init__(
            _coefficients(_BEZIER, (p0[0], p1[0], p2[0], p3[0])),
            _coefficients(_BEZIER, (p0[1], p1[1], p2[1], p3[1])),
        )


class Hermite(_Cubic):
    """A cubic Hermite curve from p0 to p1 with end tangents r0 and r1."""

    def __init__(self, p0: Point2, p1: Point2, r0: Point2, r1: Point2) -> None:
        super().__init__(
            _coefficients(_HERMITE, (p0[0], p1[0], r0[0], r1[0])),
            _coefficients(_HERMITE, (p0[1], p1[1], r0[1], r1[1])),
        )


class Circle(Parametric):
    """A circle parallel to the xy plane, traced once as t goes 0 to 1."""

    def __init__(self, radius: float, center: Point3) -> None:
        self.radius = radius
        self.center = center

    def x(self, t: float) -> float:
        return self.center[0] + self.radius * math.cos(math.tau * t)

    def y(self, t: float) -> float:
        return self.center[1] + self.radius * math.sin(math.tau * t)

    def z(self, t: float) -> float:
        return self.center[2]