"""MDL commands and the frame that executes them onto an image."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Sequence

from .color import WHITE, Color
from .curves import Bezier, Circle, Hermite, Parametric
from .edge_matrix import EdgeMatrix
from .image import FINAL_SCREEN_SIZE, Image, ShadingMethod
from .lighter import LightingConfig
from .polygon_matrix import PolygonMatrix
from .shapes3d import Cube, Sphere, Torus
from .transform import Axis, Transformer, TStack
from .vector3d import Vector3D, interpolate

DEFAULT_LIGHTING_CONFIG = LightingConfig(
    ka=(0.1, 0.1, 0.1), kd=(0.5, 0.5, 0.5), ks=(0.5, 0.5, 0.5)
)
SIDE_LENGTH = 10.0
CIRCLE_SIDE_LENGTH = 5.0
CURVE_POINTS = 50


class InterpolationMethod(Enum):
    """How a knob moves between its start and end values."""

    LINEAR = "linear"
    EXPONENTIAL = "exp"
    LOGARITHMIC = "log"


def _div(a: float, b: float) -> float:
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _ln(value: float) -> float:
    if math.isnan(value) or value < 0:
        return math.nan
    if value == 0:
        return -math.inf
    if math.isinf(value):
        return math.inf
    return math.log(value)


def _exp(value: float) -> float:
    try:
        return math.exp(value)
    except OverflowError:
        return math.inf


def interpolate_value(
    begin: tuple[int, float],
    end: tuple[int, float],
    i: int,
    method: InterpolationMethod = InterpolationMethod.LINEAR,
) -> float:
    """The knob value at step i of a run from begin to end, each (frame, value)."""
    (b0, b1), (e0, e1) = begin, end
    if method is InterpolationMethod.LINEAR:
        return b1 + _div(e1 - b1, float(e0) - float(b0)) * i
    if method is InterpolationMethod.EXPONENTIAL:
        r = _div(_ln(_div(e1, b1)), float(e0) - float(b0) + 1.0)
        return b1 * _exp(r * (i + 1.0))
    a = _div(e1 - b1, _ln(float(e0) - float(b0) + 1.0))
    return b1 + a * _ln(i + 1.0)


@dataclass(frozen=True)
class Command:
    """One MDL command: its keyword and its argument tokens."""

    name: str
    args: tuple[str, ...] = ()
    line: int = 0


_ARITY: dict[str, frozenset[int]] = {
    "constants": frozenset({10}),
    "line": frozenset({6}),
    "circle": frozenset({4}),
    "hermite": frozenset({8}),
    "bezier": frozenset({8}),
    "box": frozenset({6, 7}),
    "sphere": frozenset({4, 5}),
    "torus": frozenset({5, 6}),
    "scale": frozenset({3, 4}),
    "move": frozenset({3, 4}),
    "rotate": frozenset({2, 3}),
    "push": frozenset({0}),
    "pop": frozenset({0}),
    "set": frozenset({2}),
    "light": frozenset({6}),
    "moving_light": frozenset({10}),
    "shading": frozenset({1}),
    "clear": frozenset({0}),
    "display": frozenset({0}),
    "save": frozenset({1}),
    "frames": frozenset({1}),
    "basename": frozenset({1}),
    "vary": frozenset({5, 6}),
    "tween": frozenset({4, 5}),
    "save_knobs": frozenset({1}),
}


def parse_commands(program: str) -> list[Command]:
    """Split an MDL program into commands, one per line; // starts a comment."""
    commands = []
    for number, raw in enumerate(program.splitlines(), start=1):
        tokens = raw.split("//", 1)[0].split()
        if not tokens:
            continue
        name, args = tokens[0], tuple(tokens[1:])
        if name not in _ARITY:
            raise ValueError(f"line {number}: unknown command {name!r}")
        if len(args) not in _ARITY[name]:
            raise ValueError(
                f"line {number}: {name} takes {sorted(_ARITY[name])} arguments, got {len(args)}"
            )
        commands.append(Command(name, args, number))
    return commands


def _take(args: Iterator[str]) -> str:
    try:
        return next(args)
    except StopIteration:
        raise ValueError("missing command argument") from None


def _float(args: Iterator[str]) -> float:
    return float(_take(args))


def _floats(args: Iterator[str], count: int) -> tuple[float, ...]:
    return tuple(_float(args) for _ in range(count))


def _u8(args: Iterator[str]) -> int:
    value = int(_take(args))
    if not 0 <= value <= 255:
        raise ValueError(f"{value} is out of range for a colour channel")
    return value


def _usize(value: float) -> int:
    """Convert the way a saturating float-to-unsigned cast does."""
    if math.isnan(value) or value <= 0:
        return 0
    if math.isinf(value):
        raise OverflowError("step count is infinite")
    return int(value)


class Frame:
    """One image and the drawing state that MDL commands act on."""

    def __init__(self) -> None:
        self.image = Image(FINAL_SCREEN_SIZE, FINAL_SCREEN_SIZE, "result")
        self.t = TStack()
        self.constants: dict[str, LightingConfig] = {}
        self.knob_map: dict[str, float] | None = {}
        self.shading_method: ShadingMethod | None = None

    def run(self, commands: Iterable[Command]) -> None:
        """Execute commands in order."""
        for command in commands:
            self.execute(command)

    def execute(self, command: Command) -> None:
        """Execute a single command."""
        args = list(command.args)
        name = command.name
        n = len(args)
        if name == "constants":
            self.process_constants(args)
        elif name == "line":
            self.line(args)
        elif name == "circle":
            self.circle(args)
        elif name == "hermite":
            self.hermite(args)
        elif name == "bezier":
            self.bezier(args)
        elif name == "box":
            self.cube(args, n == 7)
        elif name == "sphere":
            self.sphere(args, n == 5)
        elif name == "torus":
            self.torus(args, n == 6)
        elif name == "scale":
            self.scale(args)
        elif name == "move":
            self.translate(args)
        elif name == "rotate":
            self.rotate(args)
        elif name == "push":
            self.t.push_copy()
        elif name == "pop":
            self.t.pop()
        elif name == "light":
            self.light(args)
        elif name == "moving_light":
            self.moving_light(args)
        elif name == "shading":
            self.set_shading(args)
        elif name == "clear":
            fresh = Image(self.image.width, self.image.height, "result")
            fresh.sample_scale = self.image.sample_scale
            self.image = fresh
        elif name == "display":
            try:
                self.image.display()
            except OSError:
                pass
        elif name == "save":
            self.save(args)
        elif name in ("set", "frames", "basename", "vary", "tween", "save_knobs"):
            pass
        else:
            raise ValueError(f"{name} is unimplemented!")

    def process_constants(self, args: Sequence[str]) -> None:
        """Store named lighting constants given as r, g, b triples of ka kd ks."""
        it = iter(args)
        name = _take(it)
        reds = _floats(it, 3)
        greens = _floats(it, 3)
        blues = _floats(it, 3)
        self.constants[name] = LightingConfig(
            ka=(reds[0], greens[0], blues[0]),
            kd=(reds[1], greens[1], blues[1]),
            ks=(reds[2], greens[2], blues[2]),
        )

    def _draw_edges(self, e: EdgeMatrix) -> None:
        self.image.draw_matrix(self.t.top().apply_edges(e), WHITE)

    def _draw_curve(self, curve: Parametric, count: int) -> None:
        e = EdgeMatrix()
        pts = curve.points(count)
        for a, b in zip(pts, pts[1:]):
            e.add_edge(a, b)
        self._draw_edges(e)

    def line(self, args: Sequence[str]) -> None:
        it = iter(args)
        e = EdgeMatrix()
        p0 = _floats(it, 3)
        p1 = _floats(it, 3)
        e.add_edge(p0, p1)
        self._draw_edges(e)

    def circle(self, args: Sequence[str]) -> None:
        it = iter(args)
        center = _floats(it, 3)
        radius = _float(it)
        count = _usize(math.tau * radius / CIRCLE_SIDE_LENGTH)
        self._draw_curve(Circle(radius, center), count)

    def hermite(self, args: Sequence[str]) -> None:
        it = iter(args)
        p0, p1, r0, r1 = (_floats(it, 2) for _ in range(4))
        self._draw_curve(Hermite(p0, p1, r0, r1), CURVE_POINTS)

    def bezier(self, args: Sequence[str]) -> None:
        it = iter(args)
        p0, p1, p2, p3 = (_floats(it, 2) for _ in range(4))
        self._draw_curve(Bezier(p0, p1, p2, p3), CURVE_POINTS)

    def _light_conf(self, it: Iterator[str], use_constant: bool) -> LightingConfig:
        if use_constant:
            return self.constants[_take(it)]
        return DEFAULT_LIGHTING_CONFIG

    def _draw_solid(
        self, p: PolygonMatrix, conf: LightingConfig, default: ShadingMethod
    ) -> None:
        shading = self.shading_method if self.shading_method is not None else default
        self.image.draw_polygons(self.t.top().apply_poly(p), conf, shading)

    def cube(self, args: Sequence[str], use_constant: bool) -> None:
        it = iter(args)
        conf = self._light_conf(it, use_constant)
        ltf = _floats(it, 3)
        width, height, depth = _floats(it, 3)
        p = PolygonMatrix()
        Cube(ltf, width, height, depth).add_to_matrix(p)
        self._draw_solid(p, conf, ShadingMethod.FLAT)

    def sphere(self, args: Sequence[str], use_constant: bool) -> None:
        it = iter(args)
        conf = self._light_conf(it, use_constant)
        center = _floats(it, 3)
        radius = _float(it)
        p = PolygonMatrix()
        Sphere(radius, center).add_to_matrix(p, _usize(math.tau * radius / SIDE_LENGTH))
        self._draw_solid(p, conf, ShadingMethod.PHONG)

    def torus(self, args: Sequence[str], use_constant: bool) -> None:
        it = iter(args)
        conf = self._light_conf(it, use_constant)
        center = _floats(it, 3)
        thickness = _float(it)
        radius = _float(it)
        p = PolygonMatrix()
        Torus(thickness, radius, center).add_to_matrix(
            p,
            _usize(math.tau * radius / SIDE_LENGTH),
            _usize(math.tau * thickness / SIDE_LENGTH),
        )
        self._draw_solid(p, conf, ShadingMethod.PHONG)

    def _knob(self, it: Iterator[str]) -> float:
        if self.knob_map is not None:
            knob = next(it, None)
            if knob is not None:
                return self.knob_map[knob]
        return 1.0

    def scale(self, args: Sequence[str]) -> None:
        it = iter(args)
        sx, sy, sz = _floats(it, 3)
        k = self._knob(it)
        step = Transformer()
        step.scale(sx * k, sy * k, sz * k)
        self.t.top().compose(step)

    def translate(self, args: Sequence[str]) -> None:
        it = iter(args)
        tx, ty, tz = _floats(it, 3)
        k = self._knob(it)
        step = Transformer()
        step.translate(tx * k, ty * k, tz * k)
        self.t.top().compose(step)

    def rotate(self, args: Sequence[str]) -> None:
        it = iter(args)
        name = _take(it)
        try:
            axis = Axis(name)
        except ValueError:
            raise ValueError("Unrecognized axis; use x/y/z.") from None
        angle = _float(it) * math.pi / 180.0
        k = self._knob(it)
        step = Transformer()
        step.rotate(axis, angle * k)
        self.t.top().compose(step)

    def light(self, args: Sequence[str]) -> None:
        it = iter(args)
        color = Color(_u8(it), _u8(it), _u8(it))
        direction = Vector3D(*_floats(it, 3))
        self.image.lighter.add_source(direction, color)

    def moving_light(self, args: Sequence[str]) -> None:
        """Add a light whose direction is blended between two by a knob."""
        it = iter(args)
        color = Color(_u8(it), _u8(it), _u8(it))
        first = Vector3D(*_floats(it, 3))
        last = Vector3D(*_floats(it, 3))
        knob = _take(it)
        if self.knob_map is None:
            raise KeyError(knob)
        value = self.knob_map[knob]
        self.image.lighter.add_source(
            interpolate([(first, 1.0 - value), (last, value)]), color
        )

    def set_shading(self, args: Sequence[str]) -> None:
        kind = _take(iter(args))
        if kind == "flat":
            self.shading_method = ShadingMethod.FLAT
        elif kind == "phong":
            self.shading_method = ShadingMethod.PHONG
        else:
            if kind != "default":
                print(f"{kind} shading has not been implemented yet. Using defaults")
            self.shading_method = None

    def save(self, args: Sequence[str]) -> None:
        filename = _take(iter(args))
        if "." not in filename:
            raise ValueError("No file extension found!")
        self.image.save_name(filename)