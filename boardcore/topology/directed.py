"""Directed rectangular boards.

Useful when a game allows ingress to a cell but not egress, e.g. a sanctuary
a piece can enter but never leave. Adjacency is the set of *outgoing*
neighbours, so it may be asymmetric.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import ClassVar, FrozenSet, Tuple

from ..errors import InvalidCellError
from .square import ORTH_DIRECTIONS, _RectTopology


class SquareOrthDirectedGraph(_RectTopology):
    """4-connected board with selected outgoing edges removed.

    Args:
        width: Number of columns
        height: Number of rows
        holes: Cells removed from the board entirely
        sanctuaries: Cells with every outgoing edge removed
        removed_edges: Individual ``(from, to)`` edges to remove
    """
    directions: ClassVar[Tuple[str, ...]] = ORTH_DIRECTIONS

    def __init__(
        self,
        width: int,
        height: int,
        holes: Iterable[str] = (),
        sanctuaries: Iterable[str] = (),
        removed_edges: Iterable[Tuple[str, str]] = (),
    ) -> None:
        self.sanctuaries: FrozenSet[str] = frozenset(sanctuaries)
        self.removed_edges: FrozenSet[Tuple[str, str]] = frozenset(
            (a, b) for a, b in removed_edges
        )
        super().__init__(width, height, holes)
        for cell in self.sanctuaries:
            if cell not in self:
                raise InvalidCellError(f"Sanctuary {cell!r} is not a cell", cell)
        for a, b in self.removed_edges:
            for cell in (a, b):
                if cell not in self:
                    raise InvalidCellError(f"Removed edge endpoint {cell!r} is not a cell", cell)

    def _edge_allowed(self, from_cell: str, to_cell: str) -> bool:
        if from_cell in self.sanctuaries:
            return False
        return (from_cell, to_cell) not in self.removed_edges

    def in_neighbours(self, cell: str) -> set[str]:
        """Cells with an outgoing edge into ``cell``."""
        if cell not in self:
            raise InvalidCellError(f"Unknown cell {cell!r}", cell)
        return {other for other, adjacent in self._adjacency.items() if cell in adjacent}
