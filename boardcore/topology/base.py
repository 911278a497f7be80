"""Board topology base class.

A topology answers structural questions about a board: which labels name
cells, how labels map to ``(x, y)`` coordinates, which cells are adjacent,
and which cells lie along a ray. It knows nothing about occupancy; callers
combine it with their board contents (see :mod:`boardcore.paths`).

Topologies are immutable once built. ``copy.deepcopy`` returns the same
instance so that cloned engines share it.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import ClassVar, Dict, FrozenSet, List, Optional, Tuple

from ..errors import InvalidCellError

COLUMN_LABELS = "abcdefghijklmnopqrstuvwxyz"

_LABEL_RE = re.compile(r"^([a-z])([1-9][0-9]*)$")

Coords = Tuple[int, int]


def split_label(cell: str) -> Tuple[str, int]:
    """Split ``"c12"`` into ``("c", 12)``; raise on anything else."""
    if not isinstance(cell, str):
        raise InvalidCellError(f"Cell labels must be strings, got {cell!r}", cell)
    match = _LABEL_RE.match(cell)
    if match is None:
        raise InvalidCellError(f"Malformed cell label: {cell!r}", cell)
    return match.group(1), int(match.group(2))


class BoardTopology(ABC):
    """Cell addressing, adjacency and rays for one board shape.

    Subclasses describe the raw grid (label format, grid bounds and the
    single-step offset for each direction). The base class layers holes,
    edge filtering, adjacency and rays on top.
    """

    #: Directions understood by :meth:`move` and :meth:`ray`, in canonical order.
    directions: ClassVar[Tuple[str, ...]] = ()

    def __init__(self, width: int, height: int, holes: Iterable[str] = ()) -> None:
        if not (1 <= width <= len(COLUMN_LABELS)) or not (1 <= height <= len(COLUMN_LABELS)):
            raise ValueError(f"Unsupported board dimensions {width}x{height}")
        self.width = width
        self.height = height
        hole_set = set()
        for cell in holes:
            x, y = self._parse(cell)
            if not self._in_grid(x, y):
                raise InvalidCellError(f"Hole {cell!r} is off the board", cell)
            hole_set.add(self._label(x, y))
        self.holes: FrozenSet[str] = frozenset(hole_set)
        self._rows: List[List[str]] = self._build_rows()
        self._cells: FrozenSet[str] = frozenset(c for row in self._rows for c in row)
        self._adjacency: Dict[str, FrozenSet[str]] = self._build_adjacency()

    # ------------------------------------------------------------------
    # Grid description (subclass hooks)
    # ------------------------------------------------------------------

    @abstractmethod
    def _label(self, x: int, y: int) -> str:
        """Label for grid coordinates, without any bounds check."""

    @abstractmethod
    def _parse(self, cell: str) -> Coords:
        """Coordinates for a label; raises InvalidCellError if malformed."""

    @abstractmethod
    def _in_grid(self, x: int, y: int) -> bool:
        """True when ``(x, y)`` lies inside the raw grid (holes ignored)."""

    @abstractmethod
    def _step(self, x: int, y: int, direction: str) -> Coords:
        """One step from ``(x, y)`` in ``direction``; may leave the grid."""

    def _row_coords(self) -> List[List[Coords]]:
        """Grid coordinates grouped by row, top row first."""
        return [
            [(x, y) for x in range(self.width) if self._in_grid(x, y)]
            for y in range(self.height)
        ]

    def _edge_allowed(self, from_cell: str, to_cell: str) -> bool:
        """Directed topologies veto individual edges here."""
        return True

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    def _build_rows(self) -> List[List[str]]:
        rows = []
        for coords in self._row_coords():
            row = [self._label(x, y) for x, y in coords]
            rows.append([c for c in row if c not in self.holes])
        return rows

    def _build_adjacency(self) -> Dict[str, FrozenSet[str]]:
        adjacency = {}
        for cell in self._cells:
            x, y = self._parse(cell)
            adjacent = set()
            for direction in self.directions:
                nxt = self.move(x, y, direction)
                if nxt is not None:
                    adjacent.add(self._label(*nxt))
            adjacency[cell] = frozenset(adjacent)
        return adjacency

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def contains(self, x: int, y: int) -> bool:
        """True when ``(x, y)`` is a cell of this board."""
        return self._in_grid(x, y) and self._label(x, y) not in self.holes

    def has_cell(self, cell: str) -> bool:
        return isinstance(cell, str) and cell in self._cells

    def coords2algebraic(self, x: int, y: int) -> str:
        if not self.contains(x, y):
            raise InvalidCellError(f"({x}, {y}) is not a cell of this board", (x, y))
        return self._label(x, y)

    def algebraic2coords(self, cell: str) -> Coords:
        x, y = self._parse(cell)
        if not self._in_grid(x, y):
            raise InvalidCellError(f"The cell {cell!r} is off the board", cell)
        if cell in self.holes:
            raise InvalidCellError(f"The cell {cell!r} has been removed from the board", cell)
        return x, y

    def list_cells(self, ordered: bool = False) -> List[str] | List[List[str]]:
        """All cells; grouped by row (top row first) when ``ordered``."""
        if ordered:
            return [list(row) for row in self._rows]
        return [cell for row in self._rows for cell in row]

    def neighbours(self, cell: str) -> set[str]:
        if cell not in self._adjacency:
            raise InvalidCellError(f"Unknown cell {cell!r}", cell)
        return set(self._adjacency[cell])

    def move(self, x: int, y: int, direction: str, dist: int = 1) -> Optional[Coords]:
        """Walk ``dist`` steps along edges; ``None`` if the walk leaves the board."""
        if direction not in self.directions:
            raise ValueError(f"Unrecognized direction {direction!r} for {type(self).__name__}")
        cx, cy = x, y
        for _ in range(dist):
            nx, ny = self._step(cx, cy, direction)
            if not self.contains(nx, ny):
                return None
            if not self._edge_allowed(self._label(cx, cy), self._label(nx, ny)):
                return None
            cx, cy = nx, ny
        return cx, cy

    def ray(self, x: int, y: int, direction: str) -> List[str]:
        """Cells strictly after ``(x, y)`` in ``direction`` up to the edge."""
        cells = []
        nxt = self.move(x, y, direction)
        while nxt is not None:
            cells.append(self._label(*nxt))
            nxt = self.move(nxt[0], nxt[1], direction)
        return cells

    def bearing(self, from_cell: str, to_cell: str) -> Optional[str]:
        """Direction whose ray from ``from_cell`` reaches ``to_cell``, if any."""
        x, y = self.algebraic2coords(from_cell)
        self.algebraic2coords(to_cell)
        for direction in self.directions:
            if to_cell in self.ray(x, y, direction):
                return direction
        return None

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, cell: object) -> bool:
        return isinstance(cell, str) and cell in self._cells

    def __deepcopy__(self, memo: dict) -> BoardTopology:
        return self

    def __copy__(self) -> BoardTopology:
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.width}x{self.height}, holes={len(self.holes)})"
