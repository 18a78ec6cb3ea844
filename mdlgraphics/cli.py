"""Command line entry point: run an MDL program file."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from .mdl import MDLParser

DEFAULT_PROGRAM = "varytest.mdl"


def main(argv: Sequence[str] | None = None) -> int:
    """Run the MDL program named on the command line; return an exit status."""
    parser = argparse.ArgumentParser(description="Render an MDL program.")
    parser.add_argument("program", nargs="?", default=DEFAULT_PROGRAM)
    options = parser.parse_args(argv)

    try:
        MDLParser().parse_file(options.program)
    except OSError as error:
        print(f"File open failed: {error}", file=sys.stderr)
        return 1
    except (ValueError, KeyError, OverflowError) as error:
        print(f"Program parse failed: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())