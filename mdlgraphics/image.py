"""A raster image with a depth buffer, line drawing and polygon filling."""

from __future__ import annotations

import math
import os
import subprocess
from enum import Enum
from typing import Iterator

from .color import BLACK, Color
from .edge_matrix import EdgeMatrix
from .lighter import Lighter, LightingConfig
from .polygon_matrix import PolygonMatrix
from .vector3d import Vector3D, interpolate

SCREEN_SIZE = 500
SAMPLE_SCALE = 4.0
FINAL_SCREEN_SIZE = SCREEN_SIZE * int(SAMPLE_SCALE)
TEST_DIR = "test_images/"

_I32_MAX = 2**31 - 1
_I32_MIN = -(2**31)

Point = tuple[float, float, float]
Vertex = tuple[float, float, float, Vector3D]


class ShadingMethod(Enum):
    """How a polygon's interior is coloured."""

    FLAT = "flat"
    PHONG = "phong"


def _i32(value: float) -> int:
    """Truncate a float towards zero into the 32-bit signed range."""
    if math.isnan(value):
        return 0
    if value >= _I32_MAX:
        return _I32_MAX
    if value <= _I32_MIN:
        return _I32_MIN
    return int(value)


def _ratio(a: float, b: float) -> float:
    """Float division where a zero divisor yields inf or nan."""
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _dist(p0: Point, p1: Point) -> float:
    return math.sqrt(
        (p1[0] - p0[0]) ** 2 + (p1[1] - p0[1]) ** 2 + (p1[2] - p0[2]) ** 2
    )


def _parent_dir(filename: str) -> str:
    head, sep, _ = filename.rpartition("/")
    return head if sep else "."


class Image:
    """A width x height grid of colours, row 0 at the bottom."""

    def __init__(self, width: int, height: int, name: str | None = None) -> None:
        self.name = name
        self._width = width
        self._height = height
        self.sample_scale = SAMPLE_SCALE
        self._lighter = Lighter()
        self._reset_pixels()

    def _reset_pixels(self) -> None:
        self._data: list[list[Color]] = [[BLACK] * self._width for _ in range(self._height)]
        self._zbuffer: list[list[float]] = [
            [-math.inf] * self._width for _ in range(self._height)
        ]

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def lighter(self) -> Lighter:
        """The light sources used when drawing polygons."""
        return self._lighter

    def __getitem__(self, index: int) -> list[Color]:
        return self._data[index]

    def __iter__(self) -> Iterator[list[Color]]:
        return iter(self._data)

    def clear(self) -> None:
        """Erase all pixels and reset the lighting."""
        self.clear_shapes_only()
        self.clear_lighter()

    def clear_shapes_only(self) -> None:
        """Erase all pixels and the depth buffer."""
        self._reset_pixels()

    def clear_lighter(self) -> None:
        self._lighter = Lighter()

    def _require_name(self) -> str:
        if self.name is None:
            raise ValueError("No provided name field to write to")
        return self.name

    def save(self) -> None:
        """Write the image to <name>.png."""
        self.save_name(f"{self._require_name()}.png")

    def save_test(self) -> None:
        """Write the image into the test image directory."""
        self.save_name(f"{TEST_DIR}{self._require_name()}.png")

    def save_name(self, filename: str) -> None:
        """Convert the image to the format given by the file name and write it."""
        os.makedirs(_parent_dir(filename), exist_ok=True)
        subprocess.run(
            ["convert", "-resize", "500x500", "-", filename],
            input=str(self).encode(),
            check=False,
        )
        print(f"Image can be found at {filename}.")

    def display(self) -> int:
        """Show the image on screen and return the viewer's exit status."""
        env = dict(os.environ)
        env["DISPLAY"] = ":0"
        completed = subprocess.run(
            ["display", "-resize", "500x500", "-"],
            input=str(self).encode(),
            env=env,
            check=False,
        )
        return completed.returncode

    def draw_matrix(self, matrix: EdgeMatrix, color: Color) -> None:
        """Draw every edge of the matrix flat at depth 0."""
        for p0, p1 in matrix:
            self.draw_line((_i32(p0[0]), _i32(p0[1]), 0.0), (_i32(p1[0]), _i32(p1[1]), 0.0), color)

    def draw_polygons(
        self,
        matrix: PolygonMatrix,
        light_conf: LightingConfig,
        shading: ShadingMethod,
    ) -> None:
        """Fill every front-facing triangle, lit by the image's lighter."""
        lighter = self._lighter.copy()
        facing = Vector3D(0.0, 0.0, 1.0)
        scale = self.sample_scale
        for triangle, normal in matrix:
            if not normal.dot(facing) >= 0.0:
                continue
            color = lighter.calculate(normal, light_conf)
            vertices = sorted(
                ((x * scale, y * scale, z * scale, n) for x, y, z, n in triangle),
                key=lambda vertex: vertex[1],
            )
            self._fill_triangle(vertices, color, lighter, light_conf, shading)

    def _fill_triangle(
        self,
        v: list[Vertex],
        color: Color,
        lighter: Lighter,
        light_conf: LightingConfig,
        shading: ShadingMethod,
    ) -> None:
        (x0, y0, z0, n0), (x1, y1, z1, n1), (x2, y2, z2, n2) = v
        iy0, iy1, iy2 = _i32(y0), _i32(y1), _i32(y2)

        dx_straight = _ratio(x2 - x0, iy2 - iy0 + 1)
        dx_bot_mid = _ratio(x1 - x0, iy1 - iy0 + 1)
        dx_mid_top = _ratio(x2 - x1, iy2 - iy1 + 1)
        dz_straight = _ratio(z2 - z0, iy2 - iy0 + 1)
        dz_bot_mid = _ratio(z1 - z0, iy1 - iy0 + 1)
        dz_mid_top = _ratio(z2 - z1, iy2 - iy1 + 1)

        x_straight, z_straight = x0, z0
        x_two, z_two = x0, z0
        dx_two, dz_two = dx_bot_mid, dz_bot_mid
        swapped = False

        for y in range(iy0, iy2 + 1):
            if y == iy1:
                x_two, dx_two = x1, dx_mid_top
                z_two, dz_two = z1, dz_mid_top
                swapped = True

            if shading is ShadingMethod.FLAT:
                self.draw_line(
                    (_i32(x_straight), y, z_straight), (_i32(x_two), y, z_two), color
                )
            else:
                here_straight = (x_straight, float(y), z_straight)
                here_two = (x_two, float(y), z_two)
                straight_normal = interpolate(
                    [
                        (n0, _dist(here_straight, (x2, y2, z2))),
                        (n2, _dist(here_straight, (x0, y0, z0))),
                    ]
                )
                if swapped:
                    two_normal = interpolate(
                        [
                            (n1, _dist(here_two, (x2, y2, z2))),
                            (n2, _dist(here_two, (x1, y1, z1))),
                        ]
                    )
                else:
                    two_normal = interpolate(
                        [
                            (n0, _dist(here_two, (x1, y1, z1))),
                            (n1, _dist(here_two, (x0, y0, z0))),
                        ]
                    )
                self._scan_line_phong(
                    y,
                    (_i32(x_straight), z_straight, straight_normal),
                    (_i32(x_two), z_two, two_normal),
                    lighter,
                    light_conf,
                )

            x_straight += dx_straight
            x_two += dx_two
            z_straight += dz_straight
            z_two += dz_two

    def _scan_line_phong(
        self,
        y: int,
        left: tuple[int, float, Vector3D],
        right: tuple[int, float, Vector3D],
        lighter: Lighter,
        light_conf: LightingConfig,
    ) -> None:
        if y < 0 or y >= self._height:
            return
        if left[0] > right[0]:
            left, right = right, left
        left_x, left_z, left_normal = left
        right_x, right_z, right_normal = right

        z = left_z
        dzpp = (right_z - left_z) / (right_x - left_x + 1.0)
        row = self._data[y]
        depths = self._zbuffer[y]
        for x in range(left_x, right_x + 1):
            if 0 <= x < self._width and z > depths[x]:
                here = (float(x), float(y), z)
                normal = interpolate(
                    [
                        (left_normal, _dist(here, (float(right_x), float(y), right_z))),
                        (right_normal, _dist(here, (float(left_x), float(y), left_z))),
                    ]
                )
                row[x] = lighter.calculate(normal, light_conf)
                depths[x] = z
            z += dzpp

    def draw_line(
        self,
        p0: tuple[int, int, float],
        p1: tuple[int, int, float],
        color: Color,
    ) -> None:
        """Draw a depth-tested line between two integer points."""
        if p0[0] > p1[0]:
            p0, p1 = p1, p0
        x0, y0, z0 = p0
        x1, y1, z1 = p1

        dz = z1 - z0
        dy = y1 - y0
        dx = x1 - x0

        steep = abs(dy) > abs(dx)
        down = dy < 0

        accumulator = 2 * dy
        corrector = 2 * dx * (1 if down else -1)

        if steep and down:
            faster_coords = range(y0, y1 - 1, -1)
        elif steep:
            faster_coords = range(y0, y1 + 1)
        else:
            faster_coords = range(x0, x1 + 1)

        if steep:
            error = dy + corrector
        elif down:
            error = accumulator + dx
        else:
            error = accumulator - dx

        slower = x0 if steep else y0
        step = -1 if (not steep and down) else 1

        if steep:
            accumulator, corrector = corrector, accumulator

        faster_limit, slower_limit = (
            (self._height, self._width) if steep else (self._width, self._height)
        )

        z = z0
        dzpp = dz / (max(abs(dy), abs(dx)) + 1.0)

        for faster in faster_coords:
            if not (0 <= faster < faster_limit and 0 <= slower < slower_limit):
                continue

            r, c = (faster, slower) if steep else (slower, faster)
            if z > self._zbuffer[r][c]:
                self._zbuffer[r][c] = z
                self._data[r][c] = color

            take_step = error >= 0 if steep == down else error <= 0
            if take_step:
                slower += step
                error += corrector
            error += accumulator
            z += dzpp

    def downsample(self, scale: float = SAMPLE_SCALE) -> Image:
        """Average each scale x scale block into one pixel of a smaller image."""
        block = int(scale)
        area = scale * scale
        result = Image(self._width // block, self._height // block)
        for r in range(result.height):
            source_rows = self._data[r * block : (r + 1) * block]
            for c in range(result.width):
                pixels = [px for row in source_rows for px in row[c * block : (c + 1) * block]]
                red = min(sum(px.red for px in pixels) / area, 255.0)
                green = min(sum(px.green for px in pixels) / area, 255.0)
                blue = min(sum(px.blue for px in pixels) / area, 255.0)
                result._data[r][c] = Color(int(red), int(green), int(blue))
        return result

    def __str__(self) -> str:
        """The image as a plain PPM document, top row first."""
        parts = [f"P3\n{self._width} {self._height}\n255\n"]
        for row in reversed(self._data):
            parts.extend(f"{px} " for px in row)
        parts.append("\n")
        return "".join(parts)