"""Rectangular boards.

Cells are labelled with a column letter and a row number counted from the
bottom, so on an 8x8 board ``a8`` is the top-left corner at ``(0, 0)`` and
``h1`` the bottom-right corner at ``(7, 7)``.
"""

from __future__ import annotations

from typing import ClassVar, Dict, Tuple

from ..errors import InvalidCellError
from .base import COLUMN_LABELS, BoardTopology, Coords, split_label

ORTH_DIRECTIONS: Tuple[str, ...] = ("N", "E", "S", "W")
DIAG_DIRECTIONS: Tuple[str, ...] = ("NE", "SE", "SW", "NW")
ALL_DIRECTIONS: Tuple[str, ...] = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")

_OFFSETS: Dict[str, Coords] = {
    "N": (0, -1),
    "NE": (1, -1),
    "E": (1, 0),
    "SE": (1, 1),
    "S": (0, 1),
    "SW": (-1, 1),
    "W": (-1, 0),
    "NW": (-1, -1),
}


class _RectTopology(BoardTopology):
    def _label(self, x: int, y: int) -> str:
        return f"{COLUMN_LABELS[x]}{self.height - y}"

    def _parse(self, cell: str) -> Coords:
        col, row = split_label(cell)
        x = COLUMN_LABELS.index(col)
        if x >= self.width:
            raise InvalidCellError(f"The column label is invalid: {col}", cell)
        if row > self.height:
            raise InvalidCellError(f"The row label is invalid: {row}", cell)
        return x, self.height - row

    def _in_grid(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _step(self, x: int, y: int, direction: str) -> Coords:
        dx, dy = _OFFSETS[direction]
        return x + dx, y + dy


class SquareGraph(_RectTopology):
    """8-connected rectangular board (orthogonal and diagonal adjacency)."""
    directions: ClassVar[Tuple[str, ...]] = ALL_DIRECTIONS


class SquareOrthGraph(_RectTopology):
    """4-connected rectangular board."""
    directions: ClassVar[Tuple[str, ...]] = ORTH_DIRECTIONS


class SquareDiagGraph(_RectTopology):
    """Rectangular board connected along diagonals only (draughts-style)."""
    directions: ClassVar[Tuple[str, ...]] = DIAG_DIRECTIONS
