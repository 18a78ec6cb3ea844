"""Row-major two-dimensional grids with matrix multiplication."""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any, Iterable, Iterator


def _format_element(value: Any) -> str:
    """Format a value in plain positional notation."""
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "inf" if value > 0 else "-inf"
        if value.is_integer():
            if value == 0 and math.copysign(1.0, value) < 0:
                return "-0"
            return str(int(value))
        return format(Decimal(repr(value)), "f")
    return str(value)


class Matrix:
    """A grid of rows, each row a list of the same length."""

    def __init__(self, rows: Iterable[Iterable[Any]]) -> None:
        self._rows: list[list[Any]] = [list(row) for row in rows]
        if self._rows:
            width = len(self._rows[0])
            if any(len(row) != width for row in self._rows):
                raise ValueError("all rows must have the same length")

    @property
    def width(self) -> int:
        return len(self._rows[0]) if self._rows else 0

    @property
    def height(self) -> int:
        return len(self._rows)

    def at(self, r: int, c: int) -> Any:
        return self._rows[r][c]

    def add_row(self, items: Iterable[Any]) -> None:
        """Append a row; it must be as wide as the existing rows."""
        row = list(items)
        if self._rows and len(row) != self.width:
            raise ValueError(f"row has {len(row)} items, expected {self.width}")
        self._rows.append(row)

    def add_col(self, items: Iterable[Any]) -> None:
        """Append a column; it must have one item per row."""
        column = list(items)
        if len(column) != self.height:
            raise ValueError(f"column has {len(column)} items, expected {self.height}")
        for row, item in zip(self._rows, column):
            row.append(item)

    def copy(self) -> Matrix:
        return Matrix(self._rows)

    def __getitem__(self, index: int) -> list[Any]:
        return self._rows[index]

    def __iter__(self) -> Iterator[list[Any]]:
        return iter(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._rows == other._rows

    __hash__ = None  # type: ignore[assignment]

    def __matmul__(self, other: object) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.width != other.height:
            raise ValueError(
                f"cannot multiply {self.height}x{self.width} by {other.height}x{other.width}"
            )
        columns = list(zip(*other._rows)) if other._rows else []
        if not columns:
            return Matrix([[] for _ in self._rows])
        return Matrix(
            [sum((a * b for a, b in zip(row, column)), 0.0) for column in columns]
            for row in self._rows
        )

    def __str__(self) -> str:
        return "".join(
            "".join(f"{_format_element(item)} " for item in row) + "\n" for row in self._rows
        )

    def __repr__(self) -> str:
        return f"Matrix({self._rows!r})"

    def format_compact(self) -> str:
        """Rows with single spaces between items and no trailing space."""
        return "".join(
            " ".join(_format_element(item) for item in row) + "\n" for row in self._rows
        )


def filled(item: Any, width: int, height: int) -> Matrix:
    """A height x width matrix with every entry set to item."""
    return Matrix([item] * width for _ in range(height))


def zeros(width: int, height: int) -> Matrix:
    """A height x width matrix of 0.0."""
    return filled(0.0, width, height)


def identity(size: int) -> Matrix:
    """The size x size identity matrix."""
    return Matrix([1.0 if r == c else 0.0 for c in range(size)] for r in range(size))