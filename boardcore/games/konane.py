"""Konane (Hawaiian checkers).

The board starts full, in a checkerboard of both colours. Player 1 removes
one of their pieces from a corner or the centre, then player 2 removes one
of their pieces next to the hole. From then on every move is a jump: a
piece leaps orthogonally over an adjacent enemy piece into the empty cell
beyond, capturing it, and may keep jumping in the same direction. A move is
written ``from-landing`` (``c3-c5`` for one capture, ``c3-c7`` for two). The
player who cannot move loses.

The phase is read from the board: a full board means the first removal, one
empty cell the second.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..engine import GameEngine
from ..grammar import MoveGrammar, ParsedMove
from ..models import GameInfo, MoveResult, RenderDescriptor, ValidationResult, VariantInfo
from ..render import annotations_from_results, pieces_string
from ..topology import SquareOrthGraph
from .. import validation

logger = logging.getLogger(__name__)

FIRST_REMOVALS = {
    6: ("a1", "c3", "d4", "f6"),
    8: ("a1", "d4", "e5", "h8"),
}


class KonaneGame(GameEngine):
    game_info = GameInfo(
        uid="konane",
        name="Konane",
        version="20241029",
        player_counts=[2],
        variants=[VariantInfo(uid="size-8", group="board")],
        flags=["automove"],
    )
    grammar = MoveGrammar(separators=("-",), keywords=())

    @property
    def board_size(self) -> int:
        return 8 if "size-8" in self.variants else 6

    def build_topology(self) -> SquareOrthGraph:
        return SquareOrthGraph(self.board_size, self.board_size)

    def initial_board(self) -> Dict[str, Any]:
        board = {}
        for x in range(self.board_size):
            for y in range(self.board_size):
                board[self.topology.coords2algebraic(x, y)] = 2 if (x + y) % 2 == 0 else 1
        return board

    def phase(self) -> str:
        empty = len(self.topology) - len(self.board)
        if empty == 0:
            return "first"
        if empty == 1:
            return "second"
        return "jump"

    def _hole(self) -> str:
        return next(c for c in self.topology.list_cells() if c not in self.board)

    def jumps_from(self, cell: str) -> List[str]:
        """Landing cells for the piece on ``cell``, nearest first per direction."""
        player = self.board[cell]
        landings = []
        for direction in self.topology.directions:
            x, y = self.topology.algebraic2coords(cell)
            while True:
                over = self.topology.move(x, y, direction)
                land = self.topology.move(x, y, direction, 2)
                if over is None or land is None:
                    break
                over_cell = self.topology.coords2algebraic(*over)
                land_cell = self.topology.coords2algebraic(*land)
                if self.board.get(over_cell) != 3 - player or land_cell in self.board:
                    break
                landings.append(land_cell)
                x, y = land
        return landings

    def moves(self, player: Optional[int] = None) -> List[str]:
        if self.gameover:
            return []
        if player is None:
            player = self.current_player
        phase = self.phase()
        if phase == "first":
            return [c for c in FIRST_REMOVALS[self.board_size] if self.board.get(c) == player]
        if phase == "second":
            return sorted(n for n in self.topology.neighbours(self._hole()) if self.board.get(n) == player)
        moves = []
        for cell in sorted(c for c, owner in self.board.items() if owner == player):
            moves.extend(f"{cell}-{landing}" for landing in self.jumps_from(cell))
        return moves

    def min_cells(self) -> int:
        return 2 if self.phase() == "jump" else 1

    def instructions_key(self) -> str:
        return {
            "first": "validation.konane.FIRST_MOVE",
            "second": "validation.konane.SECOND_MOVE",
        }.get(self.phase(), "validation.konane.NORMAL_MOVE")

    def validate_move(self, m: str) -> ValidationResult:
        result = super().validate_move(m)
        m = self.grammar.normalize(m)
        if m == "" or self.gameover:
            return result
        state = validation.state_of(result)
        if state is validation.ValidationState.INVALID and result.message_key == "validation.general.INVALID_MOVE":
            if self.phase() != "jump":
                return validation.invalid(self.instructions_key())
            return validation.invalid("validation.konane.INVALID_MOVE", move=m)
        if state is validation.ValidationState.PARTIAL:
            return validation.partial("validation.konane.SELECT_LANDING")
        return result

    def click_to_move(self, move: str, cell: str, piece: Optional[str] = None) -> str:
        if self.board.get(cell) == self.current_player:
            return cell
        if move and "-" not in move and cell not in self.board:
            return f"{move}-{cell}"
        return cell

    def execute(self, move: str, parsed: ParsedMove, partial: bool) -> None:
        cells = parsed.cells
        if len(cells) == 1:
            if self.phase() != "jump":
                del self.board[cells[0]]
                self.results.append(MoveResult(**{"type": "take", "from": cells[0]}))
            return
        if len(cells) != 2:
            return
        start, end = cells
        player = self.board.pop(start)
        self.board[end] = player
        self.results.append(MoveResult(**{"type": "move", "from": start, "to": end}))
        direction = self.topology.bearing(start, end)
        x, y = self.topology.algebraic2coords(start)
        for cell in self.topology.ray(x, y, direction):
            if cell == end:
                break
            if self.board.get(cell) == 3 - player:
                del self.board[cell]
                self.results.append(MoveResult(type="capture", where=cell))

    def end_of_game(self) -> Optional[List[int]]:
        if self.moves():
            return None
        logger.debug(f"konane: player {self.current_player} cannot move")
        return [3 - self.current_player]

    def render(self) -> RenderDescriptor:
        return RenderDescriptor(
            board={"style": "squares", "width": self.board_size, "height": self.board_size},
            legend={
                "A": {"name": "piece", "colour": 1},
                "B": {"name": "piece", "colour": 2},
            },
            pieces=pieces_string(self.topology, self.board, lambda owner: "A" if owner == 1 else "B"),
            annotations=annotations_from_results(self.topology, self.results),
        )
