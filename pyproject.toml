[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mdlgraphics"
version = "0.1.0"
description = "A small software renderer that draws MDL scene scripts into images and animations"
requires-python = ">=3.10"
dependencies = []
keywords = ["graphics", "rendering", "mdl", "rasterizer", "animation", "z-buffer", "phong"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mdlgraphics = "mdlgraphics.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["mdlgraphics"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
