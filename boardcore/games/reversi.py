"""Reversi.

Players place a piece so that it outflanks a line of enemy pieces; every
outflanked piece flips. A player with no flipping placement must ``pass``.
The game ends when neither player can place; the player with more pieces
wins (fewer in the ``anti`` variant) and a tie lists both players.

Variants: ``standard-6`` / ``standard-10`` board sizes, ``octagon-8`` /
``octagon-10`` boards with the three cells of each corner removed, and
``anti``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from ..engine import GameEngine
from ..errors import InvalidMoveError
from ..grammar import MoveGrammar, ParsedMove
from ..models import GameInfo, MoveResult, RenderDescriptor, ValidationResult, VariantInfo
from ..paths import cast_ray
from ..render import annotations_from_results, dots, pieces_string, target
from ..topology import COLUMN_LABELS, SquareGraph
from .. import validation


class ReversiGame(GameEngine):
    game_info = GameInfo(
        uid="reversi",
        name="Reversi",
        version="20240615",
        player_counts=[2],
        variants=[
            VariantInfo(uid="standard-6", group="board"),
            VariantInfo(uid="standard-10", group="board"),
            VariantInfo(uid="octagon-8", group="board"),
            VariantInfo(uid="octagon-10", group="board"),
            VariantInfo(uid="anti", group="objective"),
        ],
        flags=["scores", "automove"],
    )
    grammar = MoveGrammar(separators=(), keywords=("pass",))

    @property
    def board_size(self) -> int:
        for variant in self.variants:
            if variant.endswith("-6"):
                return 6
            if variant.endswith("-10"):
                return 10
        return 8

    def corner_coords(self) -> List[Tuple[int, int]]:
        if not any(v.startswith("octagon") for v in self.variants):
            return []
        s = self.board_size
        return [
            (0, 0), (0, 1), (1, 0),
            (s - 1, 0), (s - 1, 1), (s - 2, 0),
            (0, s - 1), (0, s - 2), (1, s - 1),
            (s - 1, s - 1), (s - 1, s - 2), (s - 2, s - 1),
        ]

    def blocked_corners(self) -> List[str]:
        s = self.board_size
        return [f"{COLUMN_LABELS[x]}{s - y}" for x, y in self.corner_coords()]

    def build_topology(self) -> SquareGraph:
        return SquareGraph(self.board_size, self.board_size, holes=self.blocked_corners())

    def initial_board(self) -> Dict[str, Any]:
        half = self.board_size // 2
        cell = self.topology.coords2algebraic
        return {
            cell(half - 1, half - 1): 2,
            cell(half, half - 1): 1,
            cell(half - 1, half): 1,
            cell(half, half): 2,
        }

    def initial_extras(self) -> Dict[str, Any]:
        return {"scores": [2, 2]}

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    def _outflanked(self, origin: str, direction: str, player: int) -> Tuple[List[str], Optional[str]]:
        """Enemy run from ``origin`` and the cell that ends it."""
        opponent = 3 - player
        ray = cast_ray(
            self.topology,
            origin,
            direction,
            stop=lambda c: self.board.get(c) != opponent,
            include_stop=True,
        )
        if len(ray) < 2 or self.board.get(ray[-1]) == opponent:
            return [], None
        return ray[:-1], ray[-1]

    def legal_placements(self, player: int) -> List[str]:
        placements = set()
        for cell, owner in self.board.items():
            if owner != player:
                continue
            for direction in self.topology.directions:
                run, end = self._outflanked(cell, direction, player)
                if run and end not in self.board:
                    placements.add(end)
        return sorted(placements)

    def flips(self, cell: str, player: int) -> Tuple[List[str], List[str]]:
        """Pieces flipped by ``player`` placing at ``cell``, and the anchoring ends."""
        flipped: List[str] = []
        ends: List[str] = []
        for direction in self.topology.directions:
            run, end = self._outflanked(cell, direction, player)
            if run and self.board.get(end) == player:
                flipped.extend(run)
                ends.append(end)
        return flipped, ends

    def moves(self, player: Optional[int] = None) -> List[str]:
        if self.gameover:
            return []
        if player is None:
            player = self.current_player
        moves = self.legal_placements(player)
        if not moves:
            moves.append("pass")
        return moves

    def instructions_key(self) -> str:
        if self.moves() == ["pass"]:
            return "validation.general.MUST_PASS"
        return "validation.reversi.INITIAL_INSTRUCTIONS"

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
                return validation.partial()
            return validation.invalid("validation.general.INVALID_MOVE", move=m)
        if parsed.keyword == "pass":
            if self.legal_placements(self.current_player):
                return validation.invalid("validation.general.ILLEGAL_PASS")
            return validation.complete()
        if not self.topology.has_cell(m):
            return validation.invalid("validation.general.INVALID_CELL", cell=m)
        if m in self.board:
            return validation.invalid("validation.general.OCCUPIED", where=m)
        if m not in self.legal_placements(self.current_player):
            return validation.invalid("validation.reversi.NO_FLIPS", where=m)
        return validation.complete()

    def click_to_move(self, move: str, cell: str, piece: Optional[str] = None) -> str:
        return cell

    def execute(self, move: str, parsed: ParsedMove, partial: bool) -> None:
        if not parsed.complete:
            return
        player = self.current_player
        if parsed.keyword == "pass":
            self.results.append(MoveResult(type="pass", who=player))
            return
        self.board[move] = player
        self.results.append(MoveResult(type="place", where=move))
        flipped, ends = self.flips(move, player)
        for cell in flipped:
            self.board[cell] = player
        self.results.append(MoveResult(type="capture", where=",".join(flipped), count=len(flipped), how=",".join(ends)))
        self.update_scores()

    def update_scores(self) -> None:
        counts = [0, 0]
        for owner in self.board.values():
            counts[owner - 1] += 1
        self.extras["scores"] = counts

    def get_player_score(self, player: int) -> Optional[int]:
        return self.extras.get("scores", [0, 0])[player - 1]

    def end_of_game(self) -> Optional[List[int]]:
        if self.legal_placements(1) or self.legal_placements(2):
            return None
        p1, p2 = self.get_player_score(1), self.get_player_score(2)
        if "anti" in self.variants:
            p1, p2 = p2, p1
        if p1 > p2:
            return [1]
        if p2 > p1:
            return [2]
        return [1, 2]

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> RenderDescriptor:
        annotations = annotations_from_results(
            self.topology, [r for r in self.results if r.type != "capture"]
        )
        place = next((r for r in self.results if r.type == "place"), None)
        capture = next((r for r in self.results if r.type == "capture"), None)
        if place is not None and capture is not None and capture.get("how"):
            for end in capture.get("how").split(","):
                annotations.append({
                    "type": "move",
                    "style": "dashed",
                    "arrow": False,
                    "targets": [target(self.topology, place.get("where")), target(self.topology, end)],
                })
        if not self.gameover:
            annotations.extend(dots(self.topology, self.legal_placements(self.current_player)))
        return RenderDescriptor(
            board={
                "style": "squares-checkered",
                "width": self.board_size,
                "height": self.board_size,
                "blocked": [{"row": y, "col": x} for x, y in self.corner_coords()],
            },
            legend={
                "A": {"name": "piece", "colour": 1},
                "B": {"name": "piece", "colour": 2},
            },
            pieces=pieces_string(self.topology, self.board, lambda owner: "A" if owner == 1 else "B"),
            annotations=annotations,
        )
