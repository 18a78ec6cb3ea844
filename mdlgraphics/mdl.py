"""Run MDL programs: single images or knob-driven animations."""

from __future__ import annotations

import os
import subprocess
import time
from typing import Sequence

from .frame import Command, Frame, InterpolationMethod, interpolate_value, parse_commands
from .image import Image

KnobMap = dict[str, float]


def _frame_index(token: str) -> int:
    value = int(token)
    if value < 0:
        raise ValueError(f"frame number must not be negative, got {value}")
    return value


def _curve(args: Sequence[str], index: int) -> InterpolationMethod:
    if len(args) <= index:
        return InterpolationMethod.LINEAR
    try:
        return InterpolationMethod(args[index])
    except ValueError:
        raise ValueError("Unimplemented interpolation method") from None


def _apply_run(
    knob_maps: list[KnobMap],
    knob: str,
    start: int,
    stop: int,
    lerp_start: float,
    lerp_stop: float,
    curve: InterpolationMethod,
) -> None:
    """Set a knob over frames start..stop, holding its end values outside that run."""
    if stop < start:
        raise ValueError(f"frame range ends before it starts: {start} to {stop}")
    length = stop - start + 1
    for knobs in knob_maps[:start]:
        knobs.setdefault(knob, lerp_start)
    for i, knobs in enumerate(knob_maps[start : start + length]):
        knobs[knob] = interpolate_value((start, lerp_start), (stop, lerp_stop), i, curve)
    for knobs in knob_maps[start + length :]:
        knobs.setdefault(knob, lerp_stop)


def _parent_dir(path: str) -> str:
    head, sep, _ = path.rpartition("/")
    return head if sep else "."


def _elapsed(since: float) -> str:
    return f"{time.perf_counter() - since:.3f}s"


class MDLParser:
    """Executes MDL programs, drawing one image or writing an animated GIF."""

    def __init__(self) -> None:
        self.basename: str | None = "result"
        self.knob_lists: dict[str, KnobMap] = {}
        self.image: Image | None = None

    def plan_frames(self, commands: Sequence[Command]) -> list[KnobMap] | None:
        """Knob values for each animation frame, or None for a single image."""
        frames_cmd = next((c for c in commands if c.name == "frames"), None)
        if frames_cmd is None:
            if any(c.name == "vary" for c in commands):
                raise ValueError("Vary exists without frames.")
            return None

        size = _frame_index(frames_cmd.args[0])
        knob_maps: list[KnobMap] = [{} for _ in range(size)]

        basename_cmd = next((c for c in commands if c.name == "basename"), None)
        if basename_cmd is not None:
            self.basename = basename_cmd.args[0]

        current: KnobMap = {}
        for command in commands:
            if command.name == "set":
                current[command.args[0]] = float(command.args[1])
            elif command.name == "save_knobs":
                self.knob_lists[command.args[0]] = dict(current)

        for command in commands:
            if command.name != "tween":
                continue
            args = command.args
            start = _frame_index(args[0])
            stop = _frame_index(args[1])
            curve = _curve(args, 4)
            for knob, lerp_start in self.knob_lists[args[2]].items():
                lerp_stop = self.knob_lists[args[3]].get(knob)
                if lerp_stop is not None:
                    _apply_run(knob_maps, knob, start, stop, lerp_start, lerp_stop, curve)

        for command in commands:
            if command.name != "vary":
                continue
            args = command.args
            knob = args[0]
            start = _frame_index(args[1])
            stop = _frame_index(args[2])
            lerp_start = float(args[3])
            lerp_stop = float(args[4])
            curve = _curve(args, 5)
            _apply_run(knob_maps, knob, start, stop, lerp_start, lerp_stop, curve)

        return knob_maps

    def parse_file(self, path: str | os.PathLike[str]) -> None:
        """Read an MDL program from a file and run it."""
        with open(path, encoding="utf-8") as handle:
            program = handle.read()
        self.parse_str(program)

    def parse_str(self, program: str) -> None:
        """Run an MDL program given as text."""
        commands = parse_commands(program)
        knob_maps = self.plan_frames(commands)

        if knob_maps is None:
            frame = Frame()
            started = time.perf_counter()
            frame.run(commands)
            print(f"Drew image in {_elapsed(started)}.")
            self.image = frame.image
            return

        documents = []
        for i, knobs in enumerate(knob_maps):
            frame = Frame()
            frame.knob_map = knobs
            started = time.perf_counter()
            frame.run(commands)
            print(f"Drew frame {i} in {_elapsed(started)}.")
            documents.append(str(frame.image.downsample(frame.image.sample_scale)))

        if self.basename is None:
            self.basename = "result"
        target = f"{self.basename}.gif"
        print(f"Beginning file write to {target}...")
        started = time.perf_counter()
        os.makedirs(_parent_dir(self.basename), exist_ok=True)

        process = subprocess.Popen(
            ["convert", "-delay", "1.7", "-loop", "0", "-", target],
            stdin=subprocess.PIPE,
        )
        try:
            for document in documents:
                process.stdin.write(document.encode())
        finally:
            process.stdin.close()
            process.wait()
        print(f"Wrote frames to {target} in {_elapsed(started)}.")