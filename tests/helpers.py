"""Position builders and playout helpers shared by the test modules."""

from __future__ import annotations

import random
from typing import Any, Dict, List, Optional, Type

from boardcore.engine import GameEngine
from boardcore.games import GAMES
from boardcore.models import GameRecord, MoveState

ALL_GAMES = sorted(GAMES)


def build_position(
    cls: Type[GameEngine],
    board: Dict[str, Any],
    current_player: int = 1,
    variants: Optional[List[str]] = None,
    extras: Optional[Dict[str, Any]] = None,
) -> GameEngine:
    """Engine whose single snapshot is an arbitrary position."""
    record = GameRecord(
        game_id=cls.game_info.uid,
        num_players=2,
        variants=variants or [],
        stack=[
            MoveState(
                version=cls.game_info.version,
                current_player=current_player,
                board=board,
                extras=extras or {},
            )
        ],
    )
    return cls(state=record)


def play_random(engine: GameEngine, plies: int, seed: int = 0) -> List[str]:
    """Play up to ``plies`` seeded random moves; return the moves played."""
    rng = random.Random(seed)
    played = []
    for _ in range(plies):
        if engine.gameover:
            break
        m = engine.random_move(rng)
        engine.move(m)
        played.append(m)
    return played
