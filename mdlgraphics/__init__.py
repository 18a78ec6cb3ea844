"""Software renderer for MDL scene scripts: lines, curves, lit solids and animations."""

__version__ = "0.1.0"