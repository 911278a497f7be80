"""Hex.

Players take turns placing a stone on any empty cell of a rhombus of
hexagons. Player 1 connects the first and last rows, player 2 the first and
last columns; a chain of one colour joining its two edges wins, and the
chain is recorded for display. Hex cannot end in a draw.

Pie rule: as their first move, player 2 may answer ``swap``. The single
stone on the board is mirrored across the long diagonal and becomes
player 2's, and player 1 moves next.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..engine import GameEngine
from ..errors import InvalidMoveError
from ..grammar import MoveGrammar, ParsedMove
from ..models import GameInfo, MoveResult, RenderDescriptor, ValidationResult, VariantInfo
from ..paths import build_graph, shortest_path
from ..render import annotations_from_results, pieces_string, target
from ..topology import HexSlantedGraph
from .. import validation

# Virtual nodes standing for the two edges a player connects.
START = "<start>"
END = "<end>"


class HexGame(GameEngine):
    game_info = GameInfo(
        uid="hex",
        name="Hex",
        version="20250301",
        player_counts=[2],
        variants=[
            VariantInfo(uid="size-9", group="board"),
            VariantInfo(uid="size-13", group="board"),
        ],
        flags=["pie"],
    )
    grammar = MoveGrammar(separators=(), keywords=("swap",))

    @property
    def board_size(self) -> int:
        for variant in self.variants:
            if variant.startswith("size-"):
                return int(variant.split("-")[1])
        return 11

    def build_topology(self) -> HexSlantedGraph:
        return HexSlantedGraph(self.board_size, self.board_size)

    def initial_board(self) -> Dict[str, Any]:
        return {}

    def initial_extras(self) -> Dict[str, Any]:
        return {"connection": []}

    def can_swap(self) -> bool:
        return self.current_player == 2 and len(self.board) == 1 and not self.extras.get("swapped", False)

    def mirror(self, cell: str) -> str:
        x, y = self.topology.algebraic2coords(cell)
        return self.topology.coords2algebraic(y, x)

    def moves(self, player: Optional[int] = None) -> List[str]:
        if self.gameover:
            return []
        moves = sorted(c for c in self.topology.list_cells() if c not in self.board)
        if self.can_swap():
            moves.append("swap")
        return moves

    def instructions_key(self) -> str:
        if self.can_swap():
            return "validation.hex.SWAP_INSTRUCTIONS"
        return "validation.hex.INITIAL_INSTRUCTIONS"

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
        if not parsed.complete:
            if any(move.startswith(m) for move in self.moves()):
                return validation.partial(self.instructions_key())
            return validation.invalid("validation.general.INVALID_MOVE", move=m)
        if parsed.keyword == "swap":
            if not self.can_swap():
                return validation.invalid("validation.hex.ILLEGAL_SWAP")
            return validation.complete()
        if not self.topology.has_cell(m):
            return validation.invalid("validation.general.INVALID_CELL", cell=m)
        if m in self.board:
            return validation.invalid("validation.general.OCCUPIED", where=m)
        return validation.complete()

    def click_to_move(self, move: str, cell: str, piece: Optional[str] = None) -> str:
        return cell

    def execute(self, move: str, parsed: ParsedMove, partial: bool) -> None:
        if not parsed.complete:
            return
        if parsed.keyword == "swap":
            (stone,) = self.board
            mirrored = self.mirror(stone)
            del self.board[stone]
            self.board[mirrored] = 2
            self.extras["swapped"] = True
            self.results.append(MoveResult(type="swap", where=stone, to=mirrored))
            return
        self.board[move] = self.current_player
        self.results.append(MoveResult(type="place", where=move))

    def connection(self, player: int) -> Optional[List[str]]:
        """Shortest chain of ``player``'s stones joining their edges, if any."""
        owned = [c for c, owner in self.board.items() if owner == player]
        if not owned:
            return None
        graph = build_graph(self.topology, lambda a, b: True, nodes=owned)
        graph.add_node(START)
        graph.add_node(END)
        last = self.board_size - 1
        for cell in owned:
            x, y = self.topology.algebraic2coords(cell)
            edge = y if player == 1 else x
            if edge == 0:
                graph.add_edge(START, cell, bidirectional=True)
            if edge == last:
                graph.add_edge(cell, END, bidirectional=True)
        path = shortest_path(graph, START, END)
        if path is None:
            return None
        return path[1:-1]

    def end_of_game(self) -> Optional[List[int]]:
        for player in (1, 2):
            chain = self.connection(player)
            if chain is not None:
                self.extras["connection"] = chain
                return [player]
        return None

    def render(self) -> RenderDescriptor:
        annotations = annotations_from_results(self.topology, [r for r in self.results if r.type != "swap"])
        for result in self.results:
            if result.type == "swap":
                annotations.append({
                    "type": "move",
                    "targets": [target(self.topology, result.get("where")), target(self.topology, result.get("to"))],
                })
        chain = self.extras.get("connection") or []
        if chain:
            annotations.append({"type": "line", "targets": [target(self.topology, c) for c in chain]})
        return RenderDescriptor(
            board={
                "style": "hex-slanted",
                "width": self.board_size,
                "height": self.board_size,
                "markers": [
                    {"type": "edge", "edge": "N", "colour": 1},
                    {"type": "edge", "edge": "S", "colour": 1},
                    {"type": "edge", "edge": "E", "colour": 2},
                    {"type": "edge", "edge": "W", "colour": 2},
                ],
            },
            legend={
                "A": {"name": "piece", "colour": 1},
                "B": {"name": "piece", "colour": 2},
            },
            pieces=pieces_string(self.topology, self.board, lambda owner: "A" if owner == 1 else "B"),
            annotations=annotations,
        )
