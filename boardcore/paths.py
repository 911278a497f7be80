"""Path and ray queries over occupancy-derived graphs.

Occupancy changes every ply, so nothing here is cached: callers build a
:class:`MoveGraph` for the question at hand (``build_graph`` with an edge
predicate over their current board), query it, and drop it.

Search order is deterministic. Neighbours are visited in sorted order so
the same position always yields the same path, which keeps trusted and
untrusted replays identical.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Dict, List, Literal, Optional, Set

from .errors import PathError
from .topology.base import BoardTopology


__all__ = [
    "MoveGraph",
    "all_simple_paths",
    "build_graph",
    "cast_ray",
    "paths_between",
    "reachable",
    "shortest_path",
]

EdgePredicate = Callable[[str, str], bool]
StopPredicate = Callable[[str], bool]
PathMode = Literal["permissive", "canonical"]


class MoveGraph:
    """Small directed graph keyed by cell label (or any virtual node name)."""

    def __init__(self) -> None:
        self._out: Dict[str, Set[str]] = {}
        self._in: Dict[str, Set[str]] = {}

    def add_node(self, node: str) -> None:
        self._out.setdefault(node, set())
        self._in.setdefault(node, set())

    def add_edge(self, source: str, target: str, bidirectional: bool = False) -> None:
        self.add_node(source)
        self.add_node(target)
        self._out[source].add(target)
        self._in[target].add(source)
        if bidirectional:
            self._out[target].add(source)
            self._in[source].add(target)

    def has_edge(self, source: str, target: str) -> bool:
        return target in self._out.get(source, ())

    def successors(self, node: str) -> List[str]:
        return sorted(self._out.get(node, ()))

    def predecessors(self, node: str) -> List[str]:
        return sorted(self._in.get(node, ()))

    def nodes(self) -> List[str]:
        return sorted(self._out)

    def __contains__(self, node: object) -> bool:
        return node in self._out

    def __len__(self) -> int:
        return len(self._out)


def build_graph(
    topology: BoardTopology,
    allow_edge: EdgePredicate,
    nodes: Optional[Iterable[str]] = None,
) -> MoveGraph:
    """Build a graph over ``nodes`` (default: every cell).

    An edge ``a -> b`` exists when ``b`` is a topology neighbour of ``a``,
    both are in the node set, and ``allow_edge(a, b)`` holds.
    """
    graph = MoveGraph()
    node_set = set(topology.list_cells() if nodes is None else nodes)
    for node in sorted(node_set):
        graph.add_node(node)
        for neighbour in sorted(topology.neighbours(node)):
            if neighbour in node_set and allow_edge(node, neighbour):
                graph.add_edge(node, neighbour)
    return graph


def _require_nodes(graph: MoveGraph, *nodes: str) -> None:
    for node in nodes:
        if node not in graph:
            raise PathError(f"Node {node!r} is not in the graph", context={"node": node})


def shortest_path(graph: MoveGraph, source: str, target: str) -> Optional[List[str]]:
    """Unweighted shortest path by bidirectional breadth-first search.

    Returns the node list from ``source`` to ``target`` inclusive, or
    ``None`` when ``target`` is unreachable.
    """
    _require_nodes(graph, source, target)
    if source == target:
        return [source]

    pred: Dict[str, Optional[str]] = {source: None}
    succ: Dict[str, Optional[str]] = {target: None}
    forward_fringe = [source]
    reverse_fringe = [target]

    while forward_fringe and reverse_fringe:
        if len(forward_fringe) <= len(reverse_fringe):
            level, forward_fringe = forward_fringe, []
            for node in level:
                for nxt in graph.successors(node):
                    if nxt not in pred:
                        pred[nxt] = node
                        forward_fringe.append(nxt)
                    if nxt in succ:
                        return _join(pred, succ, nxt)
        else:
            level, reverse_fringe = reverse_fringe, []
            for node in level:
                for prev in graph.predecessors(node):
                    if prev not in succ:
                        succ[prev] = node
                        reverse_fringe.append(prev)
                    if prev in pred:
                        return _join(pred, succ, prev)
    return None


def _join(pred: Dict[str, Optional[str]], succ: Dict[str, Optional[str]], meet: str) -> List[str]:
    path = []
    node: Optional[str] = meet
    while node is not None:
        path.append(node)
        node = pred[node]
    path.reverse()
    node = succ[meet]
    while node is not None:
        path.append(node)
        node = succ[node]
    return path


def all_simple_paths(
    graph: MoveGraph,
    source: str,
    target: str,
    cutoff: Optional[int] = None,
) -> List[List[str]]:
    """Every acyclic path from ``source`` to ``target``.

    ``cutoff`` bounds the number of edges in a path. Paths are produced in
    depth-first order over sorted successors.
    """
    _require_nodes(graph, source, target)
    if source == target:
        return []
    limit = len(graph) - 1 if cutoff is None else cutoff
    if limit < 1:
        return []

    paths: List[List[str]] = []
    visited = [source]
    on_path = {source}
    stack = [iter(graph.successors(source))]
    while stack:
        children = stack[-1]
        child = next(children, None)
        if child is None:
            stack.pop()
            on_path.discard(visited.pop())
            continue
        if child in on_path:
            continue
        if child == target:
            paths.append(visited + [target])
            continue
        if len(visited) < limit:
            visited.append(child)
            on_path.add(child)
            stack.append(iter(graph.successors(child)))
    return paths


def paths_between(
    graph: MoveGraph,
    source: str,
    target: str,
    mode: PathMode = "permissive",
) -> List[List[str]]:
    """Paths for move generation.

    ``permissive`` lists every simple path (used to accept any route a user
    clicks). ``canonical`` lists only the deterministic shortest path, so a
    destination maps to exactly one committed move string.
    """
    if mode == "permissive":
        return all_simple_paths(graph, source, target)
    if mode == "canonical":
        path = shortest_path(graph, source, target)
        return [] if path is None or len(path) < 2 else [path]
    raise ValueError(f"Unknown path mode {mode!r}")


def reachable(graph: MoveGraph, source: str) -> Set[str]:
    """Nodes reachable from ``source`` by at least one edge."""
    _require_nodes(graph, source)
    seen: Set[str] = set()
    frontier = [source]
    while frontier:
        node = frontier.pop()
        for nxt in graph.successors(node):
            if nxt not in seen:
                seen.add(nxt)
                frontier.append(nxt)
    seen.discard(source)
    return seen


def cast_ray(
    topology: BoardTopology,
    cell: str,
    direction: str,
    stop: Optional[StopPredicate] = None,
    include_stop: bool = False,
    max_distance: Optional[int] = None,
) -> List[str]:
    """Cells along a ray, truncated where the caller says.

    Args:
        topology: Board the ray is cast on
        cell: Origin (excluded from the result)
        direction: One of ``topology.directions``
        stop: Predicate marking the first cell where the ray ends
        include_stop: Whether the stopping cell is part of the result
        max_distance: Maximum number of cells returned

    Returns:
        Ordered cells from nearest to farthest.
    """
    x, y = topology.algebraic2coords(cell)
    cells: List[str] = []
    for nxt in topology.ray(x, y, direction):
        if max_distance is not None and len(cells) >= max_distance:
            break
        if stop is not None and stop(nxt):
            if include_stop:
                cells.append(nxt)
            break
        cells.append(nxt)
    return cells
