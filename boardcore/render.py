"""Helpers for building :class:`~boardcore.models.RenderDescriptor` objects.

The descriptor schema belongs to the external renderer. These helpers only
cover the parts every game builds the same way: the piece string and the
annotations derived from the last ply's result events.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any, Dict, List, Optional

from .models import MoveResult
from .topology import BoardTopology

Target = Dict[str, int]


def target(topology: BoardTopology, cell: str) -> Target:
    x, y = topology.algebraic2coords(cell)
    return {"row": y, "col": x}


def pieces_string(
    topology: BoardTopology,
    board: Mapping[str, Any],
    key_for: Callable[[Any], str],
) -> str:
    """Rows of comma-separated legend keys, ``-`` for an empty cell.

    A row with no pieces collapses to ``_``.
    """
    rows = []
    for row in topology.list_cells(ordered=True):
        keys = [key_for(board[cell]) if cell in board else "-" for cell in row]
        if all(k == "-" for k in keys):
            rows.append("_")
        else:
            rows.append(",".join(keys))
    return "\n".join(rows)


def _cells(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [c for c in str(value).split(",") if c]


def annotations_from_results(topology: BoardTopology, results: Iterable[MoveResult]) -> List[Dict[str, Any]]:
    annotations: List[Dict[str, Any]] = []
    for result in results:
        if result.type == "move":
            annotations.append({
                "type": "move",
                "targets": [target(topology, result.get("from")), target(topology, result.get("to"))],
            })
        elif result.type == "place":
            annotations.append({"type": "enter", "targets": [target(topology, result.get("where"))]})
        elif result.type == "take":
            annotations.append({"type": "exit", "targets": [target(topology, result.get("from"))]})
        elif result.type == "capture":
            cells = _cells(result.get("where"))
            if cells:
                annotations.append({"type": "exit", "targets": [target(topology, c) for c in cells]})
    return annotations


def dots(topology: BoardTopology, cells: Sequence[str]) -> List[Dict[str, Any]]:
    if not cells:
        return []
    return [{"type": "dots", "targets": [target(topology, c) for c in cells]}]
