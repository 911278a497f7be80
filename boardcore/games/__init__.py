"""Game registry.

Usage:
    from boardcore.games import get_game, load_game

    engine = get_game("reversi")(variants=["standard-6"])
    restored = load_game(engine.serialize())
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Type

from ..engine import GameEngine, StateInput
from ..errors import UnknownGameError
from ..models import GameInfo
from .halma import HalmaGame
from .hex import HexGame
from .konane import KonaneGame
from .reversi import ReversiGame

GAMES: Dict[str, Type[GameEngine]] = {
    cls.game_info.uid: cls
    for cls in (ReversiGame, KonaneGame, HalmaGame, HexGame)
}


def get_game(uid: str) -> Type[GameEngine]:
    """Engine class registered as ``uid``."""
    try:
        return GAMES[uid]
    except KeyError:
        raise UnknownGameError(uid) from None


def new_game(uid: str, variants: Optional[Sequence[str]] = None) -> GameEngine:
    return get_game(uid)(variants=variants)


def load_game(serialized: StateInput) -> GameEngine:
    """Rebuild whichever engine a serialized record belongs to."""
    record = GameEngine.coerce_record(serialized)
    return get_game(record.game_id)(state=record)


def list_games() -> List[GameInfo]:
    return [cls.game_info for cls in GAMES.values()]


__all__ = [
    "GAMES",
    "HalmaGame",
    "HexGame",
    "KonaneGame",
    "ReversiGame",
    "get_game",
    "list_games",
    "load_game",
    "new_game",
]
