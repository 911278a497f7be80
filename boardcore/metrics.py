"""Prometheus metrics for the board-game engines.

This module centralises counters so that the execution engine and the click
handler can record lightweight telemetry without each game managing its own
metric instances. Recording goes through the ``record_*`` helpers, which
are no-ops when ``BOARDCORE_METRICS_ENABLED`` is off.
"""

from __future__ import annotations

from typing import Final

from prometheus_client import Counter

from .config import get_settings

MOVES_COMMITTED: Final[Counter] = Counter(
    "boardcore_moves_committed_total",
    "Total number of committed plies, labeled by game and execution mode.",
    labelnames=("game", "mode"),
)

MOVE_REJECTIONS: Final[Counter] = Counter(
    "boardcore_move_rejections_total",
    (
        "Total number of moves rejected at the execution boundary, labeled "
        "by game and error code."
    ),
    labelnames=("game", "code"),
)

CLICK_ERRORS: Final[Counter] = Counter(
    "boardcore_click_errors_total",
    "Internal errors swallowed by handle_click, labeled by game.",
    labelnames=("game",),
)

GAMES_FINISHED: Final[Counter] = Counter(
    "boardcore_games_finished_total",
    "Total finished games, labeled by game and outcome.",
    labelnames=("game", "outcome"),
)


def record_commit(game: str, trusted: bool) -> None:
    if get_settings().metrics_enabled:
        MOVES_COMMITTED.labels(game=game, mode="trusted" if trusted else "untrusted").inc()


def record_rejection(game: str, code: str) -> None:
    if get_settings().metrics_enabled:
        MOVE_REJECTIONS.labels(game=game, code=code).inc()


def record_click_error(game: str) -> None:
    if get_settings().metrics_enabled:
        CLICK_ERRORS.labels(game=game).inc()


def record_game_finished(game: str, outcome: str) -> None:
    if get_settings().metrics_enabled:
        GAMES_FINISHED.labels(game=game, outcome=outcome).inc()
