"""
Shared pytest fixtures for boardcore tests.

Engine fixtures are function-scoped so every test starts from its own
position. Settings and the message translator are process-wide, so they are
reset around every test.
"""

from __future__ import annotations

from typing import Callable, List, Optional

import pytest

from boardcore.config import reset_settings
from boardcore.engine import GameEngine
from boardcore.games import get_game
from boardcore.messages import set_translator

from tests.helpers import build_position, play_random


# =============================================================================
# PROCESS-WIDE STATE
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate_process_state(monkeypatch):
    """Clear BOARDCORE_* overrides and restore the bundled translator."""
    for name in (
        "BOARDCORE_DEBUG_ENGINE",
        "BOARDCORE_ENFORCE_FAILSAFE",
        "BOARDCORE_LOG_LEVEL",
        "BOARDCORE_METRICS_ENABLED",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    set_translator(None)
    reset_settings()


# =============================================================================
# ENGINE FACTORIES
# =============================================================================


@pytest.fixture
def make_engine() -> Callable[..., GameEngine]:
    """Factory for fresh engines: ``make_engine("reversi", ["anti"])``."""

    def _make(uid: str, variants: Optional[List[str]] = None) -> GameEngine:
        return get_game(uid)(variants=variants)

    return _make


@pytest.fixture
def make_position() -> Callable[..., GameEngine]:
    """Factory for engines set up on a custom board."""
    return build_position


@pytest.fixture
def played_engine(make_engine) -> Callable[..., GameEngine]:
    """Factory for engines advanced by seeded random play."""

    def _make(uid: str, plies: int = 8, seed: int = 0, variants: Optional[List[str]] = None) -> GameEngine:
        engine = make_engine(uid, variants)
        play_random(engine, plies, seed)
        return engine

    return _make
