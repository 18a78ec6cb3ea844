# mdlgraphics

mdlgraphics is a pure-Python software renderer for MDL, a small line-based
scripting language for 3D graphics. A script can draw lines, circles, Hermite
and Bézier curves, boxes, spheres and tori. It builds up transforms with
`move`, `scale`, `rotate`, `push` and `pop`. Solids are filled through a
z-buffer and lit by ambient, diffuse and specular light, with flat or Phong
shading.

## Requirements

- Python 3.10 or later.
- ImageMagick. Its `convert` program must be on the `PATH` to write PNG and
  GIF files, and its `display` program is needed to show images on screen.
  The package does not encode image files itself. It passes plain PPM text to
  these programs.

## Installation

```
pip install .
```

## Command line

```
mdlgraphics scene.mdl
```

This runs `scene.mdl`. If no file is given, `varytest.mdl` in the current
directory is read.

The command returns exit status 1 when:
- the file cannot be opened, or
- the script is rejected, for example because of an unknown command, a wrong
  number of arguments, an unknown constants name or knob, or a `save` file name
  without an extension.

## The MDL language

There is one command per line. Text after `//` is a comment.

| Command | Arguments |
| --- | --- |
| `line` | `x0 y0 z0 x1 y1 z1` |
| `circle` | `cx cy cz r` |
| `hermite` | `x0 y0 x1 y1 rx0 ry0 rx1 ry1` |
| `bezier` | `x0 y0 x1 y1 x2 y2 x3 y3` |
| `box` | `[constants] x y z width height depth` |
| `sphere` | `[constants] cx cy cz r` |
| `torus` | `[constants] cx cy cz thickness r` |
| `constants` | `name ka_r kd_r ks_r ka_g kd_g ks_g ka_b kd_b ks_b` |
| `move`, `scale` | `x y z [knob]` |
| `rotate` | `x\|y\|z degrees [knob]` |
| `push`, `pop`, `clear`, `display` | none |
| `light` | `r g b x y z` |
| `moving_light` | `r g b x0 y0 z0 x1 y1 z1 knob` |
| `shading` | `flat`, `phong` or `default` |
| `save` | `file.ext` |
| `frames` | `count` |
| `basename` | `name` |
| `set` | `knob value` |
| `save_knobs` | `list_name` |
| `vary` | `knob start_frame end_frame start_value end_value [linear\|exp\|log]` |
| `tween` | `start_frame end_frame list_a list_b [linear\|exp\|log]` |

Solid shapes are drawn into a 2000×2000 canvas, which is four times the
500×500 output size. Their coordinates are scaled by four. `save` resizes the
canvas to 500×500 when it writes the file.

Under the default shading:
- boxes use flat shading, and
- spheres and tori use Phong shading.

When a script has a `frames` command, it is run once for each frame with that
frame's knob values. Each frame is averaged down by a factor of four, and all
the frames are written to `<basename>.gif`. The basename defaults to `result`.
Using `vary` without `frames` is an error.

Example script:

```
constants shiny 0.2 0.5 0.8 0.2 0.5 0.8 0.2 0.5 0.8
light 255 255 255 1 1 1
shading phong
push
move 250 250 0
rotate y 30
sphere shiny 0 0 0 100
pop
save scene.png
```

Every pixel is computed in Python, so large or finely tessellated scenes take
a while to draw.

## Library use

```python
from mdlgraphics.mdl import MDLParser

parser = MDLParser()
parser.parse_str("sphere 250 250 0 100\nsave ball.png\n")
drawn = parser.image  # the Image of a still (non-animated) script
```

You can also use the lower-level modules directly:

| Module | What it provides |
| --- | --- |
| `mdlgraphics.frame` | `parse_commands`, `Command`, and `Frame`, which executes commands onto its `image` |
| `mdlgraphics.image` | `Image`, with `draw_line`, `draw_matrix`, `draw_polygons`, `downsample`, `save_name`, `display`, and PPM output through `str()` |
| `mdlgraphics.transform` | `Axis`, `Transformer` and `TStack` |
| `mdlgraphics.edge_matrix` | `EdgeMatrix` |
| `mdlgraphics.polygon_matrix` | `PolygonMatrix`, with face and vertex normals |
| `mdlgraphics.matrix` | `Matrix`, with `@` multiplication |
| `mdlgraphics.shapes3d` | `Cube`, `Sphere` and `Torus` |
| `mdlgraphics.curves` | `Bezier`, `Hermite` and `Circle` |
| `mdlgraphics.lighter` | `Lighter` and `LightingConfig` |
| `mdlgraphics.color` | `Color` |
| `mdlgraphics.vector3d` | `Vector3D` |

```python
from mdlgraphics.color import Color
from mdlgraphics.image import Image

img = Image(4, 1, "strip")
img[0][1] = Color(255, 0, 0)
print(str(img))  # P3\n4 1\n255\n0 0 0 255 0 0 0 0 0 0 0 0 \n
```

## Running the tests

```
pip install ".[test]"
pytest
```