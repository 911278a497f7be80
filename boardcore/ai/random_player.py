"""Random player.

Selects uniformly random legal moves using the per-instance RNG on
:class:`BasePlayer`. Intended for testing, smoke runs and the CLI's
``play`` command rather than competitive play.
"""

from __future__ import annotations

from ..engine import GameEngine
from .base import BasePlayer


class RandomPlayer(BasePlayer):
    """Player that selects random legal moves."""

    def select_move(self, engine: GameEngine) -> str | None:
        """Select a random legal move, or ``None`` when the game is over.

        Args:
            engine: Engine holding the current position.
        """
        if engine.gameover or engine.current_player != self.player_number:
            return None
        moves = engine.moves()
        if not moves:
            return None
        selected = engine.random_move(self.rng)
        self.move_count += 1
        return selected
