import math

import pytest

from mdlgraphics.color import BLACK, WHITE, Color
from mdlgraphics.edge_matrix import EdgeMatrix
from mdlgraphics.frame import (
    Command,
    Frame,
    InterpolationMethod,
    interpolate_value,
    parse_commands,
)
from mdlgraphics.image import Image, ShadingMethod
from mdlgraphics.lighter import LightingConfig
from mdlgraphics.vector3d import Vector3D


def small_frame(size=40):
    frame = Frame()
    frame.image = Image(size, size, "result")
    frame.image.sample_scale = 1.0
    return frame


def transformed(frame, point):
    e = EdgeMatrix()
    e.add_edge(point, point)
    return next(iter(frame.t.top().apply_edges(e)))[0]


def test_parse_commands_skips_comments_and_blanks():
    cmds = parse_commands("// header\n\nmove 1 2 3 // go\npush\n")
    assert cmds == [Command("move", ("1", "2", "3"), 3), Command("push", (), 4)]


def test_parse_commands_rejects_unknown_and_bad_arity():
    with pytest.raises(ValueError):
        parse_commands("teleport 1 2")
    with pytest.raises(ValueError):
        parse_commands("line 1 2 3")


def test_linear_interpolation():
    assert interpolate_value((0, 0.0), (10, 10.0), 5) == pytest.approx(5.0)


@pytest.mark.parametrize(
    "method", [InterpolationMethod.EXPONENTIAL, InterpolationMethod.LOGARITHMIC]
)
def test_curved_interpolation_reaches_end(method):
    assert interpolate_value((2, 1.0), (6, 8.0), 4, method) == pytest.approx(8.0)


def test_interpolation_method_names():
    assert InterpolationMethod("exp") is InterpolationMethod.EXPONENTIAL
    assert InterpolationMethod("log") is InterpolationMethod.LOGARITHMIC


def test_constants_stored_per_channel():
    frame = small_frame()
    frame.run(parse_commands("constants shiny 1 2 3 4 5 6 7 8 9"))
    assert frame.constants["shiny"] == LightingConfig(
        ka=(1.0, 4.0, 7.0), kd=(2.0, 5.0, 8.0), ks=(3.0, 6.0, 9.0)
    )


def test_push_pop():
    frame = small_frame()
    frame.run(parse_commands("push\npush\npop"))
    assert len(frame.t) == 2


def test_move_and_knob():
    frame = small_frame()
    frame.run(parse_commands("move 1 2 3"))
    assert transformed(frame, (0.0, 0.0, 0.0)) == pytest.approx((1.0, 2.0, 3.0))
    frame = small_frame()
    frame.knob_map = {"k": 2.0}
    frame.run(parse_commands("move 1 2 3 k"))
    assert transformed(frame, (0.0, 0.0, 0.0)) == pytest.approx((2.0, 4.0, 6.0))


def test_missing_knob_raises():
    frame = small_frame()
    with pytest.raises(KeyError):
        frame.execute(Command("scale", ("1", "1", "1", "nope")))


def test_rotate_quarter_turn_and_bad_axis():
    frame = small_frame()
    frame.execute(Command("rotate", ("z", "90")))
    assert transformed(frame, (1.0, 0.0, 0.0)) == pytest.approx((0.0, 1.0, 0.0), abs=1e-9)
    with pytest.raises(ValueError):
        frame.execute(Command("rotate", ("w", "90")))


def test_line_draws_white():
    frame = small_frame()
    frame.run(parse_commands("line 0 0 0 10 0 0"))
    assert frame.image[0][5] == WHITE
    assert frame.image[5][5] == BLACK


def test_box_unknown_constant():
    frame = small_frame()
    with pytest.raises(KeyError):
        frame.execute(Command("box", ("nope", "0", "10", "0", "5", "5", "5")))


def test_sphere_draws_inside_its_radius():
    frame = small_frame()
    frame.run(parse_commands("sphere 20 20 0 15"))
    lit = {
        (c, r)
        for r in range(frame.image.height)
        for c, px in enumerate(frame.image[r])
        if px != BLACK
    }
    assert (20, 20) in lit
    assert frame.image[0][0] == BLACK
    assert frame.image[39][39] == BLACK
    outside = [(c, r) for c, r in lit if (c - 20) ** 2 + (r - 20) ** 2 > 16**2]
    assert outside == []


def test_shading_settings():
    frame = small_frame()
    frame.set_shading(["phong"])
    assert frame.shading_method is ShadingMethod.PHONG
    frame.set_shading(["default"])
    assert frame.shading_method is None


def test_save_needs_extension():
    with pytest.raises(ValueError):
        small_frame().save(["picture"])


def test_light_added_and_range_checked():
    frame = small_frame()
    before = len(frame.image.lighter.sources)
    frame.light(["255", "0", "0", "1", "0", "0"])
    assert len(frame.image.lighter.sources) == before + 1
    assert frame.image.lighter.sources[-1] == (Vector3D(1.0, 0.0, 0.0), Color(255, 0, 0))
    with pytest.raises(ValueError):
        frame.light(["300", "0", "0", "1", "0", "0"])


def test_moving_light_at_zero_uses_first_direction():
    frame = small_frame()
    frame.knob_map = {"k": 0.0}
    frame.moving_light(["10", "20", "30", "0", "3", "0", "5", "0", "0", "k"])
    direction, color = frame.image.lighter.sources[-1]
    assert color == Color(10, 20, 30)
    assert (direction.x, direction.y, direction.z) == pytest.approx((0.0, 1.0, 0.0))


def test_clear_erases_pixels():
    frame = small_frame()
    frame.run(parse_commands("line 0 0 0 10 0 0\nclear"))
    assert frame.image[0][5] == BLACK
    assert frame.image.width == 40
    assert math.isclose(frame.image.sample_scale, 1.0)