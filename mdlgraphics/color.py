"""RGB colours with saturating 8-bit channel arithmetic."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Iterable, Sequence

_CHANNELS = ("red", "green", "blue")


def _to_channel(value: float) -> int:
    """Convert a float to a channel value the way a saturating cast does."""
    if math.isnan(value) or value <= 0:
        return 0
    if value >= 255:
        return 255
    return int(value)


@dataclass(frozen=True)
class Color:
    """An RGB colour whose channels lie in 0..255."""

    red: int = 0
    green: int = 0
    blue: int = 0

    def __post_init__(self) -> None:
        for name in _CHANNELS:
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"{name} must be an int, not {type(value).__name__}")
            if not 0 <= value <= 255:
                raise ValueError(f"{name} must be within 0..255, got {value}")

    def __add__(self, other: object) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color(
            min(self.red + other.red, 255),
            min(self.green + other.green, 255),
            min(self.blue + other.blue, 255),
        )

    def __mul__(self, factors: object) -> Color:
        try:
            fr, fg, fb = factors  # type: ignore[misc]
            fr, fg, fb = float(fr), float(fg), float(fb)
        except (TypeError, ValueError):
            return NotImplemented
        return Color(
            _to_channel(self.red * fr),
            _to_channel(self.green * fg),
            _to_channel(self.blue * fb),
        )

    def __rmul__(self, factors: object) -> Color:
        return self.__mul__(factors)

    def __str__(self) -> str:
        return f"{self.red} {self.green} {self.blue}"


BLACK = Color(0, 0, 0)
RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)
BLUE = Color(0, 0, 255)
PURPLE = Color(255, 0, 255)
CYAN = Color(0, 255, 255)
YELLOW = Color(255, 255, 0)
WHITE = Color(255, 255, 255)


def random_color() -> Color:
    """Return a colour with uniformly random channels."""
    return Color(random.randint(0, 255), random.randint(0, 255), random.randint(0, 255))


def weighted_average(color_weights: Iterable[tuple[Color, float]]) -> Color:
    """Blend colours, each weighted by its share of the total weight."""
    pairs: Sequence[tuple[Color, float]] = list(color_weights)
    total = sum(weight for _, weight in pairs)
    if not pairs or total == 0:
        return BLACK
    result = BLACK
    for color, weight in pairs:
        share = weight / total
        result = result + color * (share, share, share)
    return result