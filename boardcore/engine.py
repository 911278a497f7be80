"""Execution engine shared by every game.

A game subclasses :class:`GameEngine`, declares its :class:`GameInfo` and
move grammar, and fills in the rule hooks (``build_topology``,
``initial_board``, ``moves``, ``execute``, ``end_of_game``, ``render``).
Everything else lives here:

- the commit pipeline of :meth:`GameEngine.move` with trusted / untrusted
  execution and the move-list failsafe,
- partial (speculative) moves that never touch the stack,
- end-of-game bookkeeping and the special ending moves (resign, timeout,
  draw, abandon),
- the move state stack, ``load``/``clone`` and the serialized record,
- the click handler, which never raises.

Live fields (``current_player``, ``board``, ``last_move``, ``results``,
``extras``, ``gameover``, ``winner``) describe the position being played.
``load(i)`` resets all of them from snapshot ``i``.
"""

from __future__ import annotations

import copy
import json
import logging
import random
import sys
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .chat import build_chat_log
from .config import get_settings
from .errors import (
    FailsafeError,
    GameMismatchError,
    GameOverError,
    InvalidMoveError,
    InvalidPlayerError,
    InvalidVariantError,
    MoveError,
)
from .grammar import MoveGrammar, ParsedMove
from .messages import translate
from .metrics import record_click_error, record_commit, record_game_finished, record_rejection
from .models import (
    ClickResult,
    GameInfo,
    GameRecord,
    MoveResult,
    MoveState,
    RenderDescriptor,
    ResultType,
    ValidationResult,
)
from .stack import MoveStateStack
from .topology import BoardTopology
from . import validation

logger = logging.getLogger(__name__)

SPECIAL_MOVES = ("resign", "timeout", "draw", "abandoned")

StateInput = Union[GameRecord, Dict[str, Any], str]


def _debug(msg: str) -> None:
    """Write a trace line to stderr when engine debugging is enabled."""
    if get_settings().debug_engine:
        sys.stderr.write(msg)


def outcome_of(results: Sequence[MoveResult]) -> Tuple[bool, List[int]]:
    """``(gameover, winner)`` as recorded by a snapshot's result events."""
    gameover = False
    winner: List[int] = []
    for result in results:
        if result.type == ResultType.EOG.value:
            gameover = True
        elif result.type == ResultType.WINNERS.value:
            winner = list(result.get("players", []))
    return gameover, winner


class GameEngine(ABC):
    """Base class of every game engine.

    Args:
        state: A serialized game to resume (``GameRecord``, dict or JSON
            text). ``None`` starts a fresh game.
        variants: Variant uids for a fresh game. Ignored when ``state`` is
            given, since the record carries its own variants.
    """

    game_info: ClassVar[GameInfo]
    grammar: ClassVar[MoveGrammar] = MoveGrammar()

    def __init__(
        self,
        state: Optional[StateInput] = None,
        variants: Optional[Sequence[str]] = None,
    ) -> None:
        info = self.game_info
        if state is None:
            self.variants: List[str] = self.check_variants(variants or [])
            self.num_players: int = info.player_counts[0]
            self.topology: BoardTopology = self.build_topology()
            fresh = MoveState(
                version=info.version,
                current_player=1,
                board=self.initial_board(),
                last_move=None,
                results=[],
                extras=self.initial_extras(),
            )
            self.stack = MoveStateStack([fresh])
        else:
            record = self.coerce_record(state)
            if record.game_id != info.uid:
                raise GameMismatchError(info.uid, record.game_id)
            self.variants = self.check_variants(record.variants)
            if record.num_players not in info.player_counts:
                raise InvalidPlayerError(
                    translate("errors.INVALID_PLAYER", player=record.num_players),
                    "errors.INVALID_PLAYER",
                    {"player": record.num_players},
                )
            self.num_players = record.num_players
            self.topology = self.build_topology()
            self.stack = MoveStateStack(record.stack)
        self.load()

    # ------------------------------------------------------------------
    # Rule hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def build_topology(self) -> BoardTopology:
        """Board topology for ``self.variants``."""

    @abstractmethod
    def initial_board(self) -> Dict[str, Any]:
        """Contents of the board before the first move."""

    def initial_extras(self) -> Dict[str, Any]:
        return {}

    @abstractmethod
    def moves(self, player: Optional[int] = None) -> List[str]:
        """Every legal move for ``player`` (default: the player to move)."""

    @abstractmethod
    def execute(self, move: str, parsed: ParsedMove, partial: bool) -> None:
        """Apply ``move`` to the live board and append its result events.

        ``move`` has already been normalized. When ``partial`` is true the
        move may be a prefix; apply whatever it determines so far.
        """

    @abstractmethod
    def end_of_game(self) -> Optional[List[int]]:
        """Winners if the position just reached ends the game, else ``None``."""

    @abstractmethod
    def render(self) -> RenderDescriptor:
        """Board-agnostic description of the live position."""

    def instructions_key(self) -> str:
        """Message key shown while the candidate move is empty."""
        return "validation.general.DEFAULT_HANDLER"

    def min_cells(self) -> int:
        """Fewest cells a whole move has in the current position."""
        return 1

    def normalize_move(self, move: str) -> str:
        """Map an accepted move onto its entry in :meth:`moves`."""
        return move

    def next_player(self) -> int:
        return self.current_player % self.num_players + 1

    def click_to_move(self, move: str, cell: str, piece: Optional[str] = None) -> str:
        """Merge a clicked cell into the candidate move (dash-separated path)."""
        if move == "":
            return cell
        if move[-1] in self.grammar.separators:
            return move + cell
        return f"{move}-{cell}"

    def get_player_score(self, player: int) -> Optional[int]:
        return None

    def chat(self, node: List[str], name: str, results: List[MoveResult], result: MoveResult) -> bool:
        """Narrate ``result`` into ``node`` if the game has its own wording."""
        return False

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @staticmethod
    def coerce_record(state: StateInput) -> GameRecord:
        if isinstance(state, GameRecord):
            return state.model_copy(deep=True)
        if isinstance(state, str):
            return GameRecord.model_validate_json(state)
        return GameRecord.model_validate(state)

    @classmethod
    def check_variants(cls, variants: Sequence[str]) -> List[str]:
        """Reject unknown variants and two variants from the same group."""
        declared = {v.uid: v for v in cls.game_info.variants}
        checked: List[str] = []
        groups: Dict[str, str] = {}
        for uid in variants:
            if uid in checked:
                continue
            info = declared.get(uid)
            if info is None:
                raise InvalidVariantError(
                    f"The {cls.game_info.uid} engine has no variant '{uid}'.",
                    context={"variant": uid},
                )
            if info.group is not None:
                if info.group in groups:
                    raise InvalidVariantError(
                        f"Variants '{groups[info.group]}' and '{uid}' are mutually exclusive.",
                        context={"group": info.group},
                    )
                groups[info.group] = uid
            checked.append(uid)
        return checked

    # ------------------------------------------------------------------
    # Stack and persistence
    # ------------------------------------------------------------------

    def load(self, index: int = -1) -> GameEngine:
        """Reset every live field from snapshot ``index``."""
        snapshot = self.stack.load(index)
        self.current_player: int = snapshot.current_player
        self.board: Dict[str, Any] = snapshot.board
        self.last_move: Optional[str] = snapshot.last_move
        self.results: List[MoveResult] = snapshot.results
        self.extras: Dict[str, Any] = snapshot.extras
        self.gameover, self.winner = outcome_of(snapshot.results)
        return self

    def move_state(self) -> MoveState:
        return MoveState(
            version=self.game_info.version,
            current_player=self.current_player,
            board=self.board,
            last_move=self.last_move,
            results=self.results,
            extras=self.extras,
        )

    def save_state(self) -> None:
        self.stack.push(self.move_state())

    def state(self) -> GameRecord:
        """Serializable record of the game: metadata plus every snapshot."""
        snapshots = self.stack.snapshots()
        gameover, winner = outcome_of(snapshots[-1].results)
        return GameRecord(
            game_id=self.game_info.uid,
            num_players=self.num_players,
            variants=list(self.variants),
            game_over=gameover,
            winner=winner,
            stack=snapshots,
        )

    def serialize(self) -> str:
        data = self.state().model_dump(by_alias=True, exclude_none=True)
        return json.dumps(data, sort_keys=True)

    @classmethod
    def deserialize(cls, text: str) -> GameEngine:
        return cls(state=text)

    def clone(self) -> GameEngine:
        """Independent deep copy, live (possibly partial) position included."""
        return copy.deepcopy(self)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate_move(self, m: str) -> ValidationResult:
        """Classify ``m`` against :meth:`moves`. Never mutates the engine."""
        m = self.grammar.normalize(m)
        if self.gameover:
            return validation.invalid("errors.MOVES_GAMEOVER")
        if m == "":
            return validation.empty(self.instructions_key())
        try:
            self.grammar.tokenize(m)
        except InvalidMoveError as e:
            return validation.invalid(e.message_key, **e.params)
        verdict = validation.classify_candidate(m, self.moves(), self.grammar, self.min_cells())
        if verdict is validation.ValidationState.INVALID:
            return validation.invalid("validation.general.INVALID_MOVE", move=m)
        return validation.verdict(verdict)

    def handle_click(self, move: str, row: int, col: int, piece: Optional[str] = None) -> ClickResult:
        """Merge a click at ``(row, col)`` into ``move`` and re-validate.

        Never raises. An invalid click resets the candidate to ``""``.
        """
        try:
            cell = self.topology.coords2algebraic(col, row)
            newmove = self.click_to_move(self.grammar.normalize(move), cell, piece)
            result = self.validate_move(newmove)
            return ClickResult(
                **result.model_dump(),
                move=newmove if result.valid else "",
            )
        except Exception as e:
            logger.debug(f"Click at ({row}, {col}) on '{move}' failed: {e}", exc_info=True)
            record_click_error(self.game_info.uid)
            params = {"row": row, "col": col, "move": move, "emessage": str(e)}
            key = "validation.general.GENERIC"
            return ClickResult(
                valid=False,
                move="",
                message=translate(key, **params),
                message_key=key,
                params=params,
            )

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def failsafe_enabled(self) -> bool:
        return "no-failsafe" not in self.game_info.flags or get_settings().enforce_failsafe

    def _reject(self, error: MoveError) -> MoveError:
        record_rejection(self.game_info.uid, error.code)
        return error

    def move(self, m: str, trusted: bool = False, partial: bool = False) -> GameEngine:
        """Play ``m``.

        Args:
            m: Move string
            trusted: Skip validation and the failsafe (replaying stored moves)
            partial: Apply an in-progress move to the live board only

        Raises:
            GameOverError: The game has ended
            InvalidMoveError: Untrusted move that does not validate, or is
                incomplete while ``partial`` is false
            FailsafeError: Untrusted move that validated but is absent from
                the move list
        """
        uid = self.game_info.uid
        if self.gameover:
            key = "errors.MOVES_GAMEOVER"
            raise self._reject(GameOverError(translate(key), key))

        m = self.grammar.normalize(m)
        if not trusted:
            result = self.validate_move(m)
            if not result.valid:
                raise self._reject(InvalidMoveError(
                    result.message,
                    result.message_key or "validation.general.INVALID_MOVE",
                    result.params,
                    context={"move": m},
                ))
            if not partial and result.complete != 1:
                key = "validation.general.INCOMPLETE"
                raise self._reject(InvalidMoveError(translate(key, move=m), key, {"move": m}))
            if not partial and self.failsafe_enabled() and self.normalize_move(m) not in self.moves():
                logger.warning(f"{uid}: '{m}' validated but is not in the move list")
                key = "validation.general.FAILSAFE"
                raise self._reject(FailsafeError(translate(key, move=m), key, {"move": m}))

        if m == "":
            return self
        parsed = self.grammar.tokenize(m)

        if partial:
            _debug(f"DEBUG: {uid} partial '{m}' for player {self.current_player}\n")
            self.execute(m, parsed, partial=True)
            return self

        self.results = []
        self.execute(m, parsed, partial=False)
        self.last_move = m
        self.current_player = self.next_player()
        self.check_eog()
        self.save_state()
        record_commit(uid, trusted)
        logger.debug(f"{uid}: committed '{m}' (ply {len(self.stack) - 1}, trusted={trusted})")
        return self

    def check_eog(self) -> GameEngine:
        winners = self.end_of_game()
        if winners is not None:
            self._finish(winners, "normal")
        return self

    def _finish(self, winners: Sequence[int], outcome: str) -> None:
        self.gameover = True
        self.winner = list(winners)
        self.results.append(MoveResult(type=ResultType.EOG.value))
        self.results.append(MoveResult(type=ResultType.WINNERS.value, players=list(winners)))
        record_game_finished(self.game_info.uid, outcome)

    def _check_player(self, player: int) -> None:
        if not 1 <= player <= self.num_players:
            key = "errors.INVALID_PLAYER"
            raise InvalidPlayerError(translate(key, player=player), key, {"player": player})

    def _special(self, last_move: str, event: MoveResult, losers: Sequence[int], outcome: str) -> GameEngine:
        if self.gameover:
            key = "errors.MOVES_GAMEOVER"
            raise GameOverError(translate(key), key)
        self.results = [event]
        self.last_move = last_move
        if outcome == "abandoned":
            winners: List[int] = []
        else:
            winners = [p for p in range(1, self.num_players + 1) if p not in losers]
        self._finish(winners, outcome)
        self.save_state()
        return self

    def resign(self, player: int) -> GameEngine:
        """``player`` concedes; everyone else wins together."""
        self._check_player(player)
        event = MoveResult(type=ResultType.RESIGNED.value, player=player)
        return self._special("resign", event, [player], "resign")

    def timeout(self, player: int) -> GameEngine:
        self._check_player(player)
        event = MoveResult(type=ResultType.TIMEOUT.value, player=player)
        return self._special("timeout", event, [player], "timeout")

    def draw(self) -> GameEngine:
        """Agreed draw: every player is listed as a winner."""
        return self._special("draw", MoveResult(type=ResultType.DRAW_AGREED.value), [], "draw")

    def abandoned(self) -> GameEngine:
        """Abandoned game: no winners."""
        return self._special("abandoned", MoveResult(type=ResultType.GAME_ABANDONED.value), [], "abandoned")

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def random_move(self, rng: random.Random) -> str:
        """A legal move chosen with ``rng``."""
        moves = self.moves()
        if not moves:
            key = "errors.MOVES_GAMEOVER"
            raise GameOverError(translate(key), key)
        return rng.choice(moves)

    def move_history(self) -> List[List[str]]:
        """Committed moves grouped into rounds of ``num_players``."""
        played = [s.last_move or "" for s in self.stack.snapshots()[1:]]
        return [played[i:i + self.num_players] for i in range(0, len(played), self.num_players)]

    def move_history_with_sequence(self) -> List[List[Tuple[int, str]]]:
        """Like :meth:`move_history`, with the player who made each move."""
        snapshots = self.stack.snapshots()
        played = [(prev.current_player, s.last_move or "") for prev, s in zip(snapshots, snapshots[1:])]
        return [played[i:i + self.num_players] for i in range(0, len(played), self.num_players)]

    def results_history(self) -> List[List[MoveResult]]:
        return [s.results for s in self.stack.snapshots() if s.results]

    def state_count(self, fields: Optional[Mapping[str, Any]] = None) -> int:
        """Number of snapshots on the stack matching ``fields``.

        ``fields`` maps :class:`MoveState` field names to the values to look
        for. By default the top snapshot's ``board`` and ``current_player``
        are used, which counts how often the current position has occurred
        (itself included).
        """
        if fields is None:
            top = self.stack.last()
            fields = {"board": top.board, "current_player": top.current_player}
        unknown = [k for k in fields if k not in MoveState.model_fields]
        if unknown:
            raise ValueError(f"Unknown snapshot fields: {unknown}")
        return sum(
            1 for s in self.stack.snapshots()
            if all(getattr(s, k) == v for k, v in fields.items())
        )

    def same_move(self, move1: str, move2: str) -> bool:
        """True when ``move2`` reaches the same position as ``move1``.

        The engine must be positioned just after ``move1`` was committed.
        ``move2`` is replayed, trusted, on the position before it.
        """
        move1 = self.grammar.normalize(move1)
        move2 = self.grammar.normalize(move2)
        if move1 == move2:
            return True
        if move1 in SPECIAL_MOVES or move2 in SPECIAL_MOVES:
            return False
        if (self.last_move or "") != move1 or len(self.stack) < 2:
            raise ValueError(f"'{move1}' is not the last move played (last move: {self.last_move!r})")
        record = self.state()
        record.stack = record.stack[:-1]
        other = type(self)(state=record)
        other.move(move2, trusted=True)
        ignored = {"version", "last_move", "results"}
        return self.stack.last().model_dump(exclude=ignored) == other.stack.last().model_dump(exclude=ignored)

    def get_player_result(self, player: int) -> Optional[int]:
        """1 for a winner, 0 for anyone else, ``None`` while the game runs."""
        if not self.gameover:
            return None
        return 1 if player in self.winner else 0

    def gen_record(self, players: Sequence[str] = (), event: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """Summary record of a finished game, or ``None`` while it runs."""
        if not self.gameover:
            return None
        header: Dict[str, Any] = {
            "game": {"name": self.game_info.name, "variants": list(self.variants)},
            "players": [
                {
                    "name": name,
                    "score": self.get_player_score(i),
                    "result": self.get_player_result(i),
                }
                for i, name in enumerate(players, start=1)
            ],
        }
        if event is not None:
            header["event"] = event
        if self.extras.get("swapped"):
            header["pie-invoked"] = True
        return {"header": header, "moves": self.move_history()}

    def chat_log(self, players: Sequence[str]) -> List[List[str]]:
        """Turn-by-turn narration of the whole game, oldest first."""
        return build_chat_log(self.stack.snapshots(), players, self.num_players, self.chat)

    def status(self) -> str:
        lines = []
        if self.gameover:
            lines.append("**GAME OVER**")
            lines.append(f"Winner: {', '.join(str(w) for w in self.winner)}")
        else:
            lines.append(f"Player {self.current_player} to move")
        scores = [self.get_player_score(p) for p in range(1, self.num_players + 1)]
        if any(s is not None for s in scores):
            lines.append("Scores: " + ", ".join(f"{p}: {s}" for p, s in enumerate(scores, start=1)))
        if self.variants:
            lines.append(f"**Variants**: {', '.join(self.variants)}")
        return "\n\n".join(lines) + "\n"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(ply={len(self.stack) - 1}, "
            f"player={self.current_player}, gameover={self.gameover})"
        )
