"""boardcore - shared infrastructure for turn-based abstract board-game engines.

Board topologies, path and ray queries, the move state stack, tri-state move
validation and the trusted/untrusted execution engine, plus four reference
games (reversi, konane, halma, hex).
"""

from .engine import GameEngine
from .errors import (
    BoardCoreError,
    FailsafeError,
    GameMismatchError,
    GameOverError,
    InvalidCellError,
    InvalidIndexError,
    InvalidMoveError,
    InvalidVariantError,
    MoveError,
    ValidationError,
)
from .games import get_game, list_games, load_game, new_game
from .models import ClickResult, GameRecord, MoveResult, MoveState, ValidationResult

__version__ = "0.1.0"

__all__ = [
    "BoardCoreError",
    "ClickResult",
    "FailsafeError",
    "GameEngine",
    "GameMismatchError",
    "GameOverError",
    "GameRecord",
    "InvalidCellError",
    "InvalidIndexError",
    "InvalidMoveError",
    "InvalidVariantError",
    "MoveError",
    "MoveResult",
    "MoveState",
    "ValidationError",
    "ValidationResult",
    "get_game",
    "list_games",
    "load_game",
    "new_game",
]
