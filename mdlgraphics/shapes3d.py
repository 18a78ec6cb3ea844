"""Solid shapes that tessellate themselves into triangles."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .polygon_matrix import PolygonMatrix

Point = tuple[float, float, float]


@dataclass(frozen=True)
class Cube:
    """An axis-aligned box given by its left-top-front corner and its extent."""

    ltf: Point
    width: float
    height: float
    depth: float

    def add_to_matrix(self, p: PolygonMatrix) -> None:
        """Append the twelve triangles of the box's six faces."""
        left, top, front = self.ltf
        right = left + self.width
        bottom = top - self.height
        back = front - self.depth

        ltf = (left, top, front)
        lbf = (left, bottom, front)
        lbb = (left, bottom, back)
        ltb = (left, top, back)
        rtf = (right, top, front)
        rbf = (right, bottom, front)
        rbb = (right, bottom, back)
        rtb = (right, top, back)

        faces = [
            (ltf, ltb, lbb), (ltf, lbb, lbf),  # left
            (rtf, ltf, lbf), (rtf, lbf, rbf),  # front
            (rtb, rtf, rbf), (rtb, rbf, rbb),  # right
            (ltb, rtb, rbb), (ltb, rbb, lbb),  # back
            (rtb, ltb, ltf), (rtb, ltf, rtf),  # top
            (rbf, lbf, lbb), (rbf, lbb, rbb),  # bottom
        ]
        for triangle in faces:
            p.add_triangle(*triangle)


@dataclass(frozen=True)
class Sphere:
    """A sphere built from half-circle meridians rotated about the x axis."""

    radius: float
    center: Point

    def points(self, steps: int) -> list[Point]:
        """steps meridians of steps // 2 + 1 points each, meridian by meridian."""
        circle_steps = steps // 2
        cx, cy, cz = self.center
        result = []
        for s in range(steps):
            rot = s / steps
            for cs in range(circle_steps + 1):
                cir = cs / circle_steps if circle_steps else math.nan
                result.append(
                    (
                        self.radius * math.cos(math.pi * cir) + cx,
                        self.radius * math.sin(math.pi * cir) * math.cos(math.tau * rot) + cy,
                        self.radius * math.sin(math.pi * cir) * math.sin(math.tau * rot) + cz,
                    )
                )
        return result

    def add_to_matrix(self, p: PolygonMatrix, steps: int) -> None:
        """Append the sphere's triangles; steps must be at least 2."""
        if steps < 2:
            raise ValueError(f"a sphere needs at least 2 steps, got {steps}")
        pts = self.points(steps)
        n = steps // 2 + 1
        for turn in range(steps - 1):
            p.add_triangle(pts[turn * n], pts[turn * n + 1], pts[(turn + 1) * n + 1])
            p.add_triangle(
                pts[(turn + 1) * n - 2], pts[(turn + 1) * n - 1], pts[(turn + 2) * n - 2]
            )
            for pi in range(turn * n + 1, (turn + 1) * n - 2):
                p.add_triangle(pts[pi], pts[pi + 1], pts[pi + n + 1])
                p.add_triangle(pts[pi], pts[pi + n + 1], pts[pi + n])

        last = (steps - 1) * n
        p.add_triangle(pts[last], pts[last + 1], pts[1])
        p.add_triangle(pts[steps * n - 2], pts[steps * n - 1], pts[n - 2])
        for pi in range(1, n - 2):
            p.add_triangle(pts[last + pi], pts[last + pi + 1], pts[pi + 1])
            p.add_triangle(pts[last + pi], pts[pi + 1], pts[pi])


@dataclass(frozen=True)
class Torus:
    """A torus about the y axis: tube radius thickness, ring radius radius."""

    thickness: float
    radius: float
    center: Point

    def points(self, ring_steps: int, cir_steps: int) -> list[Point]:
        """ring_steps cross-sections of cir_steps + 1 points each."""
        cx, cy, cz = self.center
        result = []
        for s0 in range(ring_steps):
            p = s0 / ring_steps
            for s1 in range(cir_steps + 1):
                t = s1 / cir_steps if cir_steps else math.nan
                reach = self.thickness * math.cos(math.tau * t) + self.radius
                result.append(
                    (
                        math.cos(p * math.tau) * reach + cx,
                        self.thickness * math.sin(math.tau * t) + cy,
                        -math.sin(p * math.tau) * reach + cz,
                    )
                )
        return result

    def add_to_matrix(self, p: PolygonMatrix, ring_steps: int, cir_steps: int) -> None:
        """Append the torus's triangles; needs ring_steps >= 2 and cir_steps >= 1."""
        if ring_steps < 2 or cir_steps < 1:
            raise ValueError(
                f"a torus needs ring_steps >= 2 and cir_steps >= 1, got {ring_steps}, {cir_steps}"
            )
        pts = self.points(ring_steps, cir_steps)
        w = cir_steps + 1
        for s0 in range(ring_steps - 1):
            for s1 in range(cir_steps - 1):
                p.add_triangle(pts[s0 * w + s1], pts[(s0 + 1) * w + s1 + 1], pts[s0 * w + s1 + 1])
                p.add_triangle(pts[s0 * w + s1], pts[(s0 + 1) * w + s1], pts[(s0 + 1) * w + s1 + 1])
            p.add_triangle(pts[s0 * w + cir_steps - 1], pts[(s0 + 1) * w], pts[s0 * w])
            p.add_triangle(
                pts[s0 * w + cir_steps - 1], pts[(s0 + 1) * w + cir_steps - 1], pts[(s0 + 1) * w]
            )

        last = (ring_steps - 1) * w
        for s1 in range(cir_steps - 1):
            p.add_triangle(pts[last + s1], pts[w + s1 + 1], pts[last + s1 + 1])
            p.add_triangle(pts[last + s1], pts[w + s1], pts[w + s1 + 1])
        p.add_triangle(pts[last + cir_steps - 1], pts[w], pts[last])
        p.add_triangle(pts[last + cir_steps - 1], pts[w + cir_steps - 1], pts[w])