"""Board topology providers.

Usage:
    from boardcore.topology import SquareGraph

    graph = SquareGraph(8, 8)
    graph.algebraic2coords("a8")   # (0, 0)
    graph.ray(0, 0, "SE")          # ["b7", "c6", ..., "h1"]
"""

from .base import COLUMN_LABELS, BoardTopology, split_label
from .directed import SquareOrthDirectedGraph
from .hex import HEX_DIRECTIONS, HexSlantedGraph, HexTriGraph
from .square import (
    ALL_DIRECTIONS,
    DIAG_DIRECTIONS,
    ORTH_DIRECTIONS,
    SquareDiagGraph,
    SquareGraph,
    SquareOrthGraph,
)

__all__ = [
    "ALL_DIRECTIONS",
    "COLUMN_LABELS",
    "DIAG_DIRECTIONS",
    "HEX_DIRECTIONS",
    "ORTH_DIRECTIONS",
    "BoardTopology",
    "HexSlantedGraph",
    "HexTriGraph",
    "SquareDiagGraph",
    "SquareGraph",
    "SquareOrthDirectedGraph",
    "SquareOrthGraph",
    "split_label",
]
