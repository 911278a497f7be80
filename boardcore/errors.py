"""
boardcore Error Hierarchy

Unified exception hierarchy for the board-game engines. All custom exceptions
inherit from BoardCoreError so callers can catch and filter them in one place.

Two families matter to callers:

- Construction-time errors (GameMismatchError, InvalidIndexError,
  InvalidCellError, InvalidVariantError) are structural and propagate
  untouched.
- Move-time errors (MoveError subclasses) carry a localizable message key
  and its params so a UI can re-prompt the user.

Usage:
    from boardcore.errors import InvalidMoveError, MoveError

    try:
        engine.move("a1-a3")
    except MoveError as e:
        logger.info(f"Rejected: {e.message_key} {e.params}")
"""

from __future__ import annotations

from typing import Any

__all__ = [
    # Base error
    "BoardCoreError",
    # Structural errors
    "GameMismatchError",
    "InvalidCellError",
    "InvalidIndexError",
    "InvalidVariantError",
    "UnknownGameError",
    # Move-time errors
    "FailsafeError",
    "GameOverError",
    "InvalidMoveError",
    "InvalidPlayerError",
    "MoveError",
    "ValidationError",
    # Path engine
    "PathError",
]


class BoardCoreError(Exception):
    """Base exception for all boardcore errors.

    Attributes:
        code: Machine-readable error code for categorization
        message: Human-readable error description
        context: Additional context for debugging
    """
    code: str = "BOARDCORE_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"[{self.code}] {self.message} ({ctx})"
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


# =============================================================================
# Structural Errors
# =============================================================================


class InvalidCellError(BoardCoreError, ValueError):
    """Cell label or coordinate pair that does not name a board cell.

    Raised for malformed labels, out-of-range coordinates and holes. A
    topology never answers with a plausible-looking wrong coordinate.
    """
    code: str = "INVALID_CELL"

    def __init__(self, message: str, cell: Any = None):
        super().__init__(message, context={"cell": cell} if cell is not None else None)
        self.cell = cell


class InvalidIndexError(BoardCoreError, IndexError):
    """Requested snapshot index resolves outside the move state stack."""
    code: str = "INVALID_INDEX"

    def __init__(self, index: int, length: int):
        super().__init__(
            "Could not load the requested state from the stack.",
            context={"index": index, "length": length},
        )
        self.index = index
        self.length = length


class GameMismatchError(BoardCoreError):
    """Serialized state belongs to a different game than the engine."""
    code: str = "GAME_MISMATCH"

    def __init__(self, expected: str, actual: str):
        super().__init__(
            f"The {expected} engine cannot process a game of '{actual}'.",
            context={"expected": expected, "actual": actual},
        )
        self.expected = expected
        self.actual = actual


class InvalidVariantError(BoardCoreError):
    """Variant list names a variant the game does not declare."""
    code: str = "INVALID_VARIANT"


class UnknownGameError(BoardCoreError, KeyError):
    """No registered game has the requested uid."""
    code: str = "UNKNOWN_GAME"

    def __init__(self, uid: str):
        super().__init__(f"No game is registered as '{uid}'.", context={"uid": uid})
        self.uid = uid


class PathError(BoardCoreError):
    """Path query against a node the graph does not contain."""
    code: str = "PATH_ERROR"


# =============================================================================
# Move-time Errors
# =============================================================================


class MoveError(BoardCoreError):
    """Recoverable move-time error.

    Move errors are surfaced to users, so they carry the message key and
    params of the catalog entry describing them rather than only an
    English sentence.

    Attributes:
        message_key: Key into the message catalog
        params: Parameters for the catalog template
    """
    code: str = "MOVE_ERROR"

    def __init__(
        self,
        message: str,
        message_key: str,
        params: dict[str, Any] | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        self.message_key = message_key
        self.params = dict(params or {})

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["messageKey"] = self.message_key
        data["params"] = self.params
        return data


class GameOverError(MoveError):
    """A move was attempted after the game ended."""
    code: str = "MOVES_GAMEOVER"


class InvalidMoveError(MoveError):
    """Move that is syntactically or semantically invalid for the position."""
    code: str = "VALIDATION_GENERAL"


ValidationError = InvalidMoveError


class FailsafeError(MoveError):
    """Move passed local validation but is absent from the move list.

    Signals drift between the incremental validator and the authoritative
    move generator. The move is rejected before it reaches the stack.
    """
    code: str = "VALIDATION_FAILSAFE"


class InvalidPlayerError(MoveError):
    """Player number outside ``1..numplayers``."""
    code: str = "INVALID_PLAYER"
