"""
Base player class for boardcore
Abstract base class that all computer players inherit from
"""

from abc import ABC, abstractmethod
from typing import Optional
import random

from ..engine import GameEngine


class BasePlayer(ABC):
    """Abstract base class for all computer players"""

    def __init__(self, player_number: int, rng: Optional[random.Random] = None, seed: int = 0):
        """
        Initialize a player

        Args:
            player_number: The player number this bot controls (1-based)
            rng: Random source for all stochastic behaviour. A private
                ``random.Random(seed)`` is created when omitted.
            seed: Seed for the private random source
        """
        self.player_number = player_number
        self.move_count = 0
        self.rng: random.Random = rng if rng is not None else random.Random(seed)

    @abstractmethod
    def select_move(self, engine: GameEngine) -> Optional[str]:
        """
        Select a move for the current position

        Args:
            engine: Engine holding the position to move in

        Returns:
            Selected move string or None if no moves are available
        """
