"""Hexagonal boards.

Two layouts are provided:

- :class:`HexTriGraph`: a hex-hex board whose rows grow from ``minwidth``
  to ``maxwidth`` and shrink back. Cells are labelled row letter first
  (``a`` is the bottom row) then column number, e.g. ``e5``.
- :class:`HexSlantedGraph`: a ``width`` x ``height`` rhombus as used by
  connection games. Cells are labelled column letter then row number, with
  row ``1`` first.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import ClassVar, Dict, Tuple

from ..errors import InvalidCellError
from .base import COLUMN_LABELS, BoardTopology, Coords, split_label

HEX_DIRECTIONS: Tuple[str, ...] = ("NE", "E", "SE", "SW", "W", "NW")


class HexTriGraph(BoardTopology):
    """Hex-hex board with rows of ``minwidth`` .. ``maxwidth`` .. ``minwidth`` cells."""
    directions: ClassVar[Tuple[str, ...]] = HEX_DIRECTIONS

    def __init__(self, minwidth: int, maxwidth: int, holes: Iterable[str] = ()) -> None:
        if minwidth >= maxwidth:
            raise ValueError("The minimum width must be strictly less than the maximum width.")
        self.minwidth = minwidth
        self.maxwidth = maxwidth
        height = (maxwidth - minwidth) * 2 + 1
        super().__init__(maxwidth, height, holes)

    @property
    def midrow(self) -> int:
        return self.height // 2

    def row_width(self, y: int) -> int:
        delta = self.maxwidth - self.minwidth
        return self.minwidth + (self.midrow - abs(delta - y))

    def _label(self, x: int, y: int) -> str:
        return f"{COLUMN_LABELS[self.height - y - 1]}{x + 1}"

    def _parse(self, cell: str) -> Coords:
        row, col = split_label(cell)
        index = COLUMN_LABELS.index(row)
        if index >= self.height:
            raise InvalidCellError(f"The row label is invalid: {row}", cell)
        return col - 1, self.height - index - 1

    def _in_grid(self, x: int, y: int) -> bool:
        return 0 <= y < self.height and 0 <= x < self.row_width(y)

    def _step(self, x: int, y: int, direction: str) -> Coords:
        mid = self.midrow
        if direction == "E":
            return x + 1, y
        if direction == "W":
            return x - 1, y
        if direction == "NE":
            return (x, y - 1) if y <= mid else (x + 1, y - 1)
        if direction == "NW":
            return (x - 1, y - 1) if y <= mid else (x, y - 1)
        if direction == "SE":
            return (x, y + 1) if y >= mid else (x + 1, y + 1)
        if direction == "SW":
            return (x, y + 1) if y < mid else (x - 1, y + 1)
        raise ValueError(f"Invalid direction requested: {direction}")


_SLANTED_OFFSETS: Dict[str, Coords] = {
    "NE": (0, 1),
    "E": (1, 0),
    "SE": (1, -1),
    "SW": (0, -1),
    "W": (-1, 0),
    "NW": (-1, 1),
}


class HexSlantedGraph(BoardTopology):
    """Rhombus of hexagons, each cell touching six others."""
    directions: ClassVar[Tuple[str, ...]] = HEX_DIRECTIONS

    def _label(self, x: int, y: int) -> str:
        return f"{COLUMN_LABELS[x]}{y + 1}"

    def _parse(self, cell: str) -> Coords:
        col, row = split_label(cell)
        x = COLUMN_LABELS.index(col)
        if x >= self.width:
            raise InvalidCellError(f"The column label is invalid: {col}", cell)
        if row > self.height:
            raise InvalidCellError(f"The row label is invalid: {row}", cell)
        return x, row - 1

    def _in_grid(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _step(self, x: int, y: int, direction: str) -> Coords:
        dx, dy = _SLANTED_OFFSETS[direction]
        return x + dx, y + dy
