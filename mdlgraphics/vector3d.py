"""Three-dimensional vectors of floats."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

Point = tuple[float, float, float]


def _div(a: float, b: float) -> float:
    """IEEE division: a zero divisor yields inf or nan instead of raising."""
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


@dataclass(frozen=True)
class Vector3D:
    """A vector in three-dimensional space."""

    x: float
    y: float
    z: float

    def __add__(self, other: object) -> Vector3D:
        if not isinstance(other, Vector3D):
            return NotImplemented
        return Vector3D(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: object) -> Vector3D:
        if not isinstance(other, Vector3D):
            return NotImplemented
        return Vector3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def dot(self, other: Vector3D) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3D) -> Vector3D:
        return Vector3D(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def scale(self, factor: float) -> Vector3D:
        return Vector3D(self.x * factor, self.y * factor, self.z * factor)

    def normalize(self) -> Vector3D:
        """Return the unit vector; a zero vector gives nan components."""
        magnitude = math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)
        return Vector3D(
            _div(self.x, magnitude), _div(self.y, magnitude), _div(self.z, magnitude)
        )


ZERO = Vector3D(0.0, 0.0, 0.0)


def from_point(p: Point) -> Vector3D:
    """The position vector of a point."""
    return Vector3D(p[0], p[1], p[2])


def from_points(p0: Point, p1: Point) -> Vector3D:
    """The vector from p0 to p1."""
    return Vector3D(p1[0] - p0[0], p1[1] - p0[1], p1[2] - p0[2])


def vector_sum(vectors: Iterable[Vector3D]) -> Vector3D:
    """Sum vectors, starting from the zero vector."""
    total = ZERO
    for vector in vectors:
        total = total + vector
    return total


def average(vectors: Iterable[Vector3D]) -> Vector3D:
    """The normalised sum of the vectors."""
    return vector_sum(vectors).normalize()


def interpolate(vectors_weights: Iterable[tuple[Vector3D, float]]) -> Vector3D:
    """The normalised weighted sum of the vectors."""
    return vector_sum(vector.scale(weight) for vector, weight in vectors_weights).normalize()