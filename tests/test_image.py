import subprocess
from unittest.mock import patch

import pytest

from mdlgraphics.color import BLACK, BLUE, CYAN, GREEN, PURPLE, RED, WHITE, YELLOW
from mdlgraphics.edge_matrix import EdgeMatrix
from mdlgraphics.image import Image, ShadingMethod
from mdlgraphics.lighter import Lighter, LightingConfig
from mdlgraphics.polygon_matrix import PolygonMatrix
from mdlgraphics.vector3d import Vector3D

CONF = LightingConfig(ka=(0.1, 0.1, 0.1), kd=(0.5, 0.5, 0.5), ks=(0.5, 0.5, 0.5))


def lit_pixels(img):
    return {
        (c, r)
        for r in range(img.height)
        for c, px in enumerate(img[r])
        if px is not BLACK
    }


def test_one_x_four_brgb():
    img = Image(4, 1, "one_x_four")
    img[0][1] = RED
    img[0][2] = GREEN
    img[0][3] = BLUE
    assert str(img) == "P3\n4 1\n255\n0 0 0 255 0 0 0 255 0 0 0 255 \n"


def test_black_500x500():
    blank = Image(500, 500, "blank")
    expected = "P3\n500 500\n255\n" + "0 0 0 " * (500 * 500) + "\n"
    assert str(blank) == expected


def test_rows_written_top_first():
    img = Image(2, 2)
    img[0][0] = RED
    img[1][1] = GREEN
    assert str(img) == "P3\n2 2\n255\n0 0 0 0 255 0 255 0 0 0 0 0 \n"


def test_block_painting_like_picmaker():
    img = Image(10, 10, "blocks")
    for r in range(5):
        for c in range(5):
            img[r][c] = GREEN
    tokens = str(img).split("\n")[3].split(" 0 ")
    assert str(img).count("0 255 0 ") == 25
    assert len(lit_pixels(img)) == 25
    assert tokens


def test_octant1():
    img = Image(500, 500, "octant1")
    img.draw_line((5, 10, 0.0), (450, 250, 0.0), WHITE)
    pixels = lit_pixels(img)
    assert img[10][5] == WHITE
    assert img[250][450] == WHITE
    assert len(pixels) == 446
    assert sorted(x for x, _ in pixels) == list(range(5, 451))


ALL_OCTANTS = [
    ((5, 10), (450, 250)),
    ((5, 10), (250, 450)),
    ((400, 250), (5, 400)),
    ((5, 400), (400, 250)),
    ((250, 5), (5, 400)),
]

DW_LINES = [
    ((0, 0), (499, 499)),
    ((0, 0), (499, 250)),
    ((499, 499), (0, 250)),
    ((0, 499), (499, 0)),
    ((0, 499), (499, 250)),
    ((499, 0), (0, 250)),
    ((0, 0), (250, 499)),
    ((499, 499), (250, 0)),
    ((0, 499), (250, 0)),
    ((499, 0), (250, 499)),
    ((0, 250), (499, 250)),
    ((250, 0), (250, 499)),
]


@pytest.mark.parametrize("start, end", ALL_OCTANTS + DW_LINES)
def test_lines_hit_endpoints_once_per_major_step(start, end):
    img = Image(500, 500, "lines")
    img.draw_line((start[0], start[1], 0.0), (end[0], end[1], 0.0), WHITE)
    pixels = lit_pixels(img)
    assert start in pixels
    assert end in pixels
    dx = abs(end[0] - start[0])
    dy = abs(end[1] - start[1])
    assert len(pixels) == max(dx, dy) + 1
    major = [y for _, y in pixels] if dy > dx else [x for x, _ in pixels]
    assert len(set(major)) == len(major)


def test_line_direction_does_not_matter():
    forward = Image(50, 50)
    backward = Image(50, 50)
    forward.draw_line((3, 40, 0.0), (45, 7, 0.0), CYAN)
    backward.draw_line((45, 7, 0.0), (3, 40, 0.0), CYAN)
    assert lit_pixels(forward) == lit_pixels(backward)


def test_line_clipped_to_image():
    img = Image(20, 20)
    img.draw_line((-5, 2, 0.0), (5, 2, 0.0), YELLOW)
    assert lit_pixels(img) == {(x, 2) for x in range(0, 6)}


def test_depth_buffer():
    img = Image(10, 10)
    img.draw_line((0, 5, 1.0), (9, 5, 1.0), RED)
    img.draw_line((0, 5, 0.0), (9, 5, 0.0), BLUE)
    assert img[5][3] == RED
    img.draw_line((0, 5, 1.0), (9, 5, 1.0), BLUE)
    assert img[5][3] == RED
    img.draw_line((0, 5, 2.0), (9, 5, 2.0), PURPLE)
    assert img[5][3] == PURPLE


def test_draw_matrix():
    img = Image(20, 20)
    edges = EdgeMatrix()
    edges.add_edge((2.7, 3.0, 5.0), (12.0, 3.9, 1.0))
    edges.add_edge((4.0, 4.0, 0.0), (4.0, 10.0, 0.0))
    img.draw_matrix(edges, RED)
    pixels = lit_pixels(img)
    assert {(x, 3) for x in range(2, 13)} <= pixels
    assert {(4, y) for y in range(4, 11)} <= pixels
    assert len(pixels) == 11 + 7


def _triangle(*points):
    p = PolygonMatrix()
    p.add_triangle(*points)
    return p


@pytest.mark.parametrize("shading", [ShadingMethod.FLAT, ShadingMethod.PHONG])
def test_draw_polygons_front_face(shading):
    img = Image(20, 20)
    img.sample_scale = 1.0
    poly = _triangle((0.0, 0.0, 0.0), (10.0, 0.0, 0.0), (0.0, 10.0, 0.0))
    img.draw_polygons(poly, CONF, shading)
    expected = Lighter().calculate(Vector3D(0.0, 0.0, 1.0), CONF)
    assert img[2][2] == expected
    assert img[15][15] == BLACK


def test_draw_polygons_back_face_culled():
    img = Image(20, 20)
    img.sample_scale = 1.0
    poly = _triangle((0.0, 0.0, 0.0), (0.0, 10.0, 0.0), (10.0, 0.0, 0.0))
    img.draw_polygons(poly, CONF, ShadingMethod.FLAT)
    assert lit_pixels(img) == set()


def test_draw_polygons_uses_sample_scale():
    img = Image(40, 40)
    poly = _triangle((0.0, 0.0, 0.0), (5.0, 0.0, 0.0), (0.0, 5.0, 0.0))
    img.draw_polygons(poly, CONF, ShadingMethod.FLAT)
    expected = Lighter().calculate(Vector3D(0.0, 0.0, 1.0), CONF)
    assert img[8][8] == expected
    assert img[35][35] == BLACK


def test_downsample_averages_blocks():
    img = Image(4, 4)
    img[0][0] = RED
    img[0][1] = RED
    img[3][3] = WHITE
    small = img.downsample(2)
    assert (small.width, small.height) == (2, 2)
    assert small[0][0].red == 127
    assert small[0][0].green == 0
    assert small[1][1].red == 63
    assert small[0][1] == BLACK


def test_clear_resets_pixels_and_lighter():
    img = Image(5, 5)
    img[1][1] = RED
    img.lighter.add_source(Vector3D(0.0, 1.0, 0.0), BLUE)
    assert len(img.lighter.sources) == 2
    img.clear()
    assert lit_pixels(img) == set()
    assert len(img.lighter.sources) == 1


def test_clear_shapes_keeps_lighter_and_resets_depth():
    img = Image(5, 5)
    img.lighter.add_source(Vector3D(0.0, 1.0, 0.0), BLUE)
    img.draw_line((0, 1, 5.0), (4, 1, 5.0), RED)
    img.clear_shapes_only()
    assert len(img.lighter.sources) == 2
    img.draw_line((0, 1, 0.0), (4, 1, 0.0), GREEN)
    assert img[1][2] == GREEN


def test_save_without_name_raises():
    img = Image(2, 2)
    with pytest.raises(ValueError):
        img.save()


def test_save_name_pipes_ppm(tmp_path):
    img = Image(2, 2, "x")
    img[0][0] = RED
    target = tmp_path / "sub" / "out.png"
    with patch("subprocess.run") as run:
        run.return_value = subprocess.CompletedProcess(args=[], returncode=0)
        img.save_name(str(target))
    assert (tmp_path / "sub").is_dir()
    args, kwargs = run.call_args
    assert args[0][-1] == str(target)
    assert kwargs["input"] == str(img).encode()


def test_save_test_uses_test_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    img = Image(2, 2, "pic")
    img[1][0] = GREEN
    with patch("subprocess.run") as run:
        run.return_value = subprocess.CompletedProcess(args=[], returncode=0)
        img.save_test()
    args, kwargs = run.call_args
    assert args[0][-1] == "test_images/pic.png"
    assert kwargs["input"] == str(img).encode()
    assert (tmp_path / "test_images").is_dir()


def test_display_returns_exit_status():
    img = Image(2, 2)
    with patch("subprocess.run") as run:
        run.return_value = subprocess.CompletedProcess(args=[], returncode=3)
        status = img.display()
    assert status == 3
    assert run.call_args.kwargs["env"]["DISPLAY"] == ":0"