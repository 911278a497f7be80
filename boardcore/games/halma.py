"""Halma.

Each player starts with their pieces in a triangular camp in one corner and
races them into the camp in the opposite corner. A move is either a single
step to an adjacent empty cell (``a1-b2``) or a chain of hops, each jumping
over an adjacent piece of either colour into the empty cell directly beyond
(``a1-c3-e3``). Hopped pieces stay on the board.

Any route through the hop graph is accepted when playing a move, but the
move list names each destination once, by its shortest route; a submitted
route is normalized to that entry. A player wins once the target camp is
full and holds at least one of their own pieces.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Set

from ..engine import GameEngine
from ..errors import InvalidMoveError
from ..grammar import MoveGrammar, ParsedMove
from ..models import GameInfo, MoveResult, RenderDescriptor, ValidationResult, VariantInfo
from ..paths import MoveGraph, reachable, shortest_path
from ..render import annotations_from_results, dots, pieces_string
from ..topology import SquareGraph
from .. import validation

CAMP_DEPTH = {8: 4, 10: 5}


class HalmaGame(GameEngine):
    game_info = GameInfo(
        uid="halma",
        name="Halma",
        version="20250110",
        player_counts=[2],
        variants=[VariantInfo(uid="size-10", group="board")],
        flags=[],
    )
    grammar = MoveGrammar(separators=("-",), keywords=("pass",))

    @property
    def board_size(self) -> int:
        return 10 if "size-10" in self.variants else 8

    def build_topology(self) -> SquareGraph:
        return SquareGraph(self.board_size, self.board_size)

    def camp(self, player: int) -> Set[str]:
        """Starting camp of ``player``: bottom-left for 1, top-right for 2."""
        size = self.board_size
        depth = CAMP_DEPTH[size]
        cells = set()
        for x in range(size):
            for y in range(size):
                if player == 1 and x + (size - 1 - y) < depth:
                    cells.add(self.topology.coords2algebraic(x, y))
                elif player == 2 and (size - 1 - x) + y < depth:
                    cells.add(self.topology.coords2algebraic(x, y))
        return cells

    def target_camp(self, player: int) -> Set[str]:
        return self.camp(3 - player)

    def initial_board(self) -> Dict[str, Any]:
        board: Dict[str, Any] = {}
        for player in (1, 2):
            for cell in self.camp(player):
                board[cell] = player
        return board

    # ------------------------------------------------------------------
    # Move graph
    # ------------------------------------------------------------------

    def hop_landing(self, origin: str, start: str, end: str) -> bool:
        """True when a piece from ``origin`` standing on ``start`` may hop to ``end``."""
        direction = self.topology.bearing(start, end)
        if direction is None:
            return False
        x, y = self.topology.algebraic2coords(start)
        if self.topology.move(x, y, direction, 2) != self.topology.algebraic2coords(end):
            return False
        middle = self.topology.coords2algebraic(*self.topology.move(x, y, direction))
        occupied = middle in self.board and middle != origin
        return occupied and (end not in self.board or end == origin)

    def hops_from(self, origin: str, cell: str) -> List[str]:
        """Cells the piece from ``origin`` can reach from ``cell`` in one hop."""
        x, y = self.topology.algebraic2coords(cell)
        landings = []
        for direction in self.topology.directions:
            land = self.topology.move(x, y, direction, 2)
            if land is None:
                continue
            land_cell = self.topology.coords2algebraic(*land)
            if self.hop_landing(origin, cell, land_cell):
                landings.append(land_cell)
        return landings

    def hop_graph(self, origin: str) -> MoveGraph:
        """Directed graph of single hops available to the piece on ``origin``.

        The moving piece is lifted off the board first, so it never serves
        as a hop's middle piece.
        """
        graph = MoveGraph()
        graph.add_node(origin)
        frontier = [origin]
        seen = {origin}
        while frontier:
            cell = frontier.pop()
            for land_cell in self.hops_from(origin, cell):
                graph.add_edge(cell, land_cell)
                if land_cell not in seen:
                    seen.add(land_cell)
                    frontier.append(land_cell)
        return graph

    def steps_from(self, cell: str) -> List[str]:
        return sorted(n for n in self.topology.neighbours(cell) if n not in self.board)

    def moves_from(self, cell: str) -> List[str]:
        moves = [f"{cell}-{step}" for step in self.steps_from(cell)]
        graph = self.hop_graph(cell)
        for destination in sorted(reachable(graph, cell)):
            path = shortest_path(graph, cell, destination)
            if path is not None:
                moves.append("-".join(path))
        return moves

    def placements_for(self, player: int) -> List[str]:
        moves: List[str] = []
        for cell in sorted(c for c, owner in self.board.items() if owner == player):
            moves.extend(self.moves_from(cell))
        return moves

    def moves(self, player: Optional[int] = None) -> List[str]:
        if self.gameover:
            return []
        if player is None:
            player = self.current_player
        moves = self.placements_for(player)
        if not moves:
            moves.append("pass")
        return moves

    def normalize_move(self, move: str) -> str:
        cells = move.split("-")
        if len(cells) < 2 or (len(cells) == 2 and cells[1] in self.topology.neighbours(cells[0])):
            return move
        graph = self.hop_graph(cells[0])
        if cells[-1] not in graph:
            return move
        path = shortest_path(graph, cells[0], cells[-1])
        return "-".join(path) if path is not None else move

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def min_cells(self) -> int:
        return 2

    def instructions_key(self) -> str:
        if self.moves() == ["pass"]:
            return "validation.general.MUST_PASS"
        return "validation.halma.INITIAL_INSTRUCTIONS"

    def validate_move(self, m: str) -> ValidationResult:
        m = self.grammar.normalize(m)
        if self.gameover:
            return validation.invalid("errors.MOVES_GAMEOVER")
        if m == "":
            return validation.empty(self.instructions_key())
        try:
            parsed = self.grammar.tokenize(m)
        except InvalidMoveError as e:
            return validation.invalid(e.message_key, **e.params)
        if parsed.keyword == "pass":
            if self.placements_for(self.current_player):
                return validation.invalid("validation.general.ILLEGAL_PASS")
            return validation.complete()
        cells = parsed.cells
        if not cells:
            if any(move.startswith(m) for move in self.moves()):
                return validation.partial(self.instructions_key())
            return validation.invalid("validation.general.INVALID_MOVE", move=m)
        for cell in cells:
            if not self.topology.has_cell(cell):
                return validation.invalid("validation.general.INVALID_CELL", cell=cell)
        origin = cells[0]
        if origin not in self.board:
            return validation.invalid("validation.general.UNOCCUPIED", where=origin)
        if self.board[origin] != self.current_player:
            return validation.invalid("validation.general.UNCONTROLLED", where=origin)
        if len(cells) == 1:
            following = self.steps_from(origin) + self.hops_from(origin, origin)
            if not self.continues(m, parsed, following):
                return validation.invalid("validation.general.INVALID_MOVE", move=m)
            return validation.partial("validation.halma.SELECT_DESTINATION")

        if len(cells) == 2 and cells[1] in self.topology.neighbours(origin):
            if cells[1] in self.board:
                return validation.invalid("validation.general.OCCUPIED", where=cells[1])
            if not parsed.complete:
                return validation.invalid("validation.halma.STEP_THEN_HOP")
            return validation.complete()

        visited = {origin}
        for start, end in zip(cells, cells[1:]):
            if end in visited:
                return validation.invalid("validation.halma.REVISIT", where=end)
            if end in self.topology.neighbours(start):
                return validation.invalid("validation.halma.STEP_THEN_HOP")
            if not self.hop_landing(origin, start, end):
                return validation.invalid("validation.halma.INVALID_HOP", **{"from": start, "to": end})
            visited.add(end)
        if not parsed.complete:
            following = [c for c in self.hops_from(origin, cells[-1]) if c not in visited]
            if not self.continues(m, parsed, following):
                return validation.invalid("validation.halma.DEAD_END", where=cells[-1])
            return validation.partial("validation.halma.SELECT_DESTINATION")
        return validation.complete()

    @staticmethod
    def continues(move: str, parsed: ParsedMove, following: List[str]) -> bool:
        """True when some cell in ``following`` can finish the unfinished tail of ``move``."""
        tail = "" if parsed.complete else move.rsplit("-", 1)[-1]
        return any(cell.startswith(tail) for cell in following)

    def click_to_move(self, move: str, cell: str, piece: Optional[str] = None) -> str:
        if self.board.get(cell) == self.current_player:
            return cell
        return super().click_to_move(move, cell, piece)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def execute(self, move: str, parsed: ParsedMove, partial: bool) -> None:
        if parsed.keyword == "pass":
            self.results.append(MoveResult(type="pass", who=self.current_player))
            return
        cells = parsed.cells
        if len(cells) < 2:
            return
        start, end = cells[0], cells[-1]
        self.board[end] = self.board.pop(start)
        self.results.append(MoveResult(**{"type": "move", "from": start, "to": end, "how": "-".join(cells)}))

    def end_of_game(self) -> Optional[List[int]]:
        winners = []
        for player in (1, 2):
            target = self.target_camp(player)
            if all(c in self.board for c in target) and any(self.board[c] == player for c in target):
                winners.append(player)
        return winners or None

    def get_player_score(self, player: int) -> Optional[int]:
        """Pieces already in the target camp."""
        return sum(1 for c in self.target_camp(player) if self.board.get(c) == player)

    def render(self) -> RenderDescriptor:
        annotations = annotations_from_results(self.topology, self.results)
        if self.last_move is not None and self.results:
            hops = [r.get("how") for r in self.results if r.type == "move" and r.get("how")]
            if hops and len(hops[0].split("-")) > 2:
                annotations.extend(dots(self.topology, hops[0].split("-")[1:-1]))
        return RenderDescriptor(
            board={
                "style": "squares-checkered",
                "width": self.board_size,
                "height": self.board_size,
                "markers": [
                    {"type": "shading", "colour": p, "cells": sorted(self.camp(p))} for p in (1, 2)
                ],
            },
            legend={
                "A": {"name": "piece", "colour": 1},
                "B": {"name": "piece", "colour": 2},
            },
            pieces=pieces_string(self.topology, self.board, lambda owner: "A" if owner == 1 else "B"),
            annotations=annotations,
        )
