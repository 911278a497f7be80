"""Message catalog and localization hook.

Every user-facing string the engines produce is looked up here by key. The
bundled templates are English; a host application that localizes its UI
installs its own translator with :func:`set_translator` and receives the
key plus the params instead.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

Translator = Callable[..., str]

MESSAGES: dict[str, str] = {
    # General validation
    "validation.general.VALID_MOVE": "Valid move.",
    "validation.general.VALID_PARTIAL": "Valid partial move. Keep going.",
    "validation.general.AMBIGUOUS": "This move can be previewed, but it must be extended before it can be submitted.",
    "validation.general.DEFAULT_HANDLER": "Invalid move.",
    "validation.general.GENERIC": (
        "An error occurred while handling the click on row {row}, column {col}"
        " (move '{move}'): {emessage}"
    ),
    "validation.general.INVALID_CELL": "'{cell}' is not a valid cell.",
    "validation.general.INVALID_MOVE": "'{move}' is not a valid move.",
    "validation.general.INCOMPLETE": "The move '{move}' is not complete.",
    "validation.general.OCCUPIED": "The cell {where} is already occupied.",
    "validation.general.UNOCCUPIED": "There is no piece at {where}.",
    "validation.general.UNCONTROLLED": "The piece at {where} does not belong to you.",
    "validation.general.BAD_SEPARATOR": "The separator '{separator}' is not used in this game.",
    "validation.general.MALFORMED": "Could not parse the move '{move}'.",
    "validation.general.FAILSAFE": (
        "The move '{move}' passed validation but is not in the list of legal"
        " moves. Please report this."
    ),
    "validation.general.MUST_PASS": "You have no legal moves and must pass.",
    "validation.general.ILLEGAL_PASS": "You may only pass when you have no other move.",
    # Engine errors
    "errors.MOVES_GAMEOVER": "The game is over. No further moves can be made.",
    "errors.INVALID_PLAYER": "There is no player {player} in this game.",
    # Reversi
    "validation.reversi.INITIAL_INSTRUCTIONS": "Place a piece that outflanks at least one enemy piece.",
    "validation.reversi.NO_FLIPS": "A piece at {where} would not flip any enemy pieces.",
    # Konane
    "validation.konane.FIRST_MOVE": "Remove one of your pieces from a centre or corner cell.",
    "validation.konane.SECOND_MOVE": "Remove one of your pieces next to the empty cell.",
    "validation.konane.NORMAL_MOVE": "Select a piece to jump with.",
    "validation.konane.SELECT_LANDING": "Select where the piece should land.",
    "validation.konane.INVALID_MOVE": "'{move}' is not a legal jump.",
    # Halma
    "validation.halma.INITIAL_INSTRUCTIONS": "Select one of your pieces to move.",
    "validation.halma.SELECT_DESTINATION": "Select an adjacent empty cell, or a cell to hop to.",
    "validation.halma.STEP_THEN_HOP": "A single step ends the move; you cannot hop after stepping.",
    "validation.halma.INVALID_HOP": "You cannot hop from {from} to {to}.",
    "validation.halma.REVISIT": "A hopping piece may not revisit {where}.",
    "validation.halma.DEAD_END": "There is no further hop from {where}.",
    # Hex
    "validation.hex.INITIAL_INSTRUCTIONS": "Place a stone on any empty cell.",
    "validation.hex.SWAP_INSTRUCTIONS": "Place a stone, or swap to take over your opponent's first stone.",
    "validation.hex.ILLEGAL_SWAP": "Swapping is only allowed as the second player's first move.",
    # Chat narration
    "results.MOVE.nowhat": "{player} moved from {from} to {to}.",
    "results.MOVE.complete": "{player} moved {what} from {from} to {to}.",
    "results.PLACE.nowhat": "{player} placed a piece at {where}.",
    "results.PLACE.complete": "{player} placed {what} at {where}.",
    "results.CAPTURE.nowhat": "{player} captured a piece at {where}.",
    "results.CAPTURE.multiple": "{player} captured {count} pieces.",
    "results.TAKE": "{player} removed the piece at {from}.",
    "results.PASS.simple": "{player} passed.",
    "results.SWAP": "{player} swapped sides.",
    "results.EOG": "The game is over.",
    "results.WINNERS.single": "The winner is {winners}.",
    "results.WINNERS.multiple": "The winners are {winners}.",
    "results.WINNERS.none": "There is no winner.",
    "results.RESIGN": "{player} resigned.",
    "results.TIMEOUT": "{player} ran out of time.",
    "results.DRAWAGREED": "The players agreed to a draw.",
    "results.ABANDONED": "The game was abandoned.",
}


def _default_translator(key: str, **params: Any) -> str:
    template = MESSAGES.get(key)
    if template is None:
        return key
    try:
        return template.format(**params)
    except (KeyError, IndexError):
        logger.debug(f"Missing params for message {key}: {params}")
        return template


_translator: Translator = _default_translator


def translate(key: str, **params: Any) -> str:
    """Resolve ``key`` through the active translator."""
    return _translator(key, **params)


def set_translator(translator: Translator | None) -> None:
    """Install an external translator, or restore the bundled English one."""
    global _translator
    _translator = translator if translator is not None else _default_translator
