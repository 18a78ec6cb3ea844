"""Ambient, diffuse and specular lighting of surface normals."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from .color import BLACK, WHITE, Color
from .vector3d import Vector3D

Factors = tuple[float, float, float]

SPEC_POWER = 3.0
VIEW_VECTOR = Vector3D(0.0, 0.0, 1.0)


@dataclass(frozen=True)
class LightingConfig:
    """Reflection constants per channel: ambient, diffuse and specular."""

    ka: Factors
    kd: Factors
    ks: Factors


def _powf(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except ValueError:
        return math.nan
    except OverflowError:
        return math.inf


class Lighter:
    """A set of directional light sources with an ambient colour."""

    def __init__(
        self,
        sources: Iterable[tuple[Vector3D, Color]] | None = None,
        ambient_color: Color = WHITE,
    ) -> None:
        self.sources: list[tuple[Vector3D, Color]] = (
            list(sources) if sources is not None else [(Vector3D(1.0, 1.0, 1.0), WHITE)]
        )
        self.ambient_color = ambient_color
        self.spec_power = SPEC_POWER
        self.view_vector = VIEW_VECTOR

    def add_source(self, direction: Vector3D, color: Color) -> None:
        self.sources.append((direction, color))

    def _ambient(self, conf: LightingConfig) -> Color:
        return self.ambient_color * conf.ka

    def _diffuse(self, normal: Vector3D, conf: LightingConfig) -> Color:
        result = BLACK
        for direction, color in self.sources:
            d = normal.dot(direction.normalize())
            result = result + color * (d * conf.kd[0], d * conf.kd[1], d * conf.kd[2])
        return result

    def _specular(self, normal: Vector3D, conf: LightingConfig) -> Color:
        result = BLACK
        for direction, color in self.sources:
            source = direction.normalize()
            reflected = normal.scale(2.0 * normal.dot(source)) - source
            s = _powf(reflected.dot(self.view_vector), self.spec_power)
            result = result + color * (s * conf.ks[0], s * conf.ks[1], s * conf.ks[2])
        return result

    def calculate(self, normal: Vector3D, conf: LightingConfig) -> Color:
        """The colour of a surface with this normal under these lights."""
        unit = normal.normalize()
        return (
            BLACK
            + self._ambient(conf)
            + self._diffuse(unit, conf)
            + self._specular(unit, conf)
        )

    def copy(self) -> Lighter:
        clone = Lighter(self.sources, self.ambient_color)
        clone.spec_power = self.spec_power
        clone.view_vector = self.view_vector
        return clone