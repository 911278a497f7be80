"""
Pydantic models for engine state, move results and validation verdicts.

Field names are snake_case in Python; the serialized form uses the camelCase
wire names (``currentPlayer``, ``gameId``, ...) through aliases.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


class ResultType(str, Enum):
    """Result event kinds shared by the bundled games."""
    PLACE = "place"
    MOVE = "move"
    CAPTURE = "capture"
    TAKE = "take"
    PASS = "pass"
    SWAP = "swap"
    EOG = "eog"
    WINNERS = "winners"
    RESIGNED = "resigned"
    TIMEOUT = "timeout"
    DRAW_AGREED = "drawagreed"
    GAME_ABANDONED = "gameabandoned"


class MoveResult(BaseModel):
    """One observable sub-effect of a ply.

    Only ``type`` is fixed; every other parameter (``from``, ``to``,
    ``where``, ``count``, ``players`` ...) is carried as an extra field so
    games can describe their own effects.
    """
    type: str

    class Config:
        extra = "allow"

    def get(self, key: str, default: Any = None) -> Any:
        """Return parameter ``key`` (e.g. ``"from"``) or ``default``."""
        extra = self.model_extra or {}
        return extra.get(key, default)


class MoveState(BaseModel):
    """Snapshot of the whole game after one committed ply."""
    version: str = ""
    current_player: int = Field(alias="currentPlayer")
    board: Dict[str, Any] = Field(default_factory=dict)
    last_move: Optional[str] = Field(None, alias="lastMove")
    results: List[MoveResult] = Field(default_factory=list)
    extras: Dict[str, Any] = Field(default_factory=dict)

    class Config:
        populate_by_name = True


class GameRecord(BaseModel):
    """Canonical persisted form of an engine: metadata plus the full stack."""
    game_id: str = Field(alias="gameId")
    num_players: int = Field(alias="numPlayers")
    variants: List[str] = Field(default_factory=list, alias="variantList")
    game_over: bool = Field(False, alias="gameOver")
    winner: List[int] = Field(default_factory=list)
    stack: List[MoveState]

    class Config:
        populate_by_name = True


class ValidationResult(BaseModel):
    """Verdict of ``validate_move``.

    ``complete`` is only meaningful when ``valid`` is true:

    - ``-1``: definitively incomplete; would be rejected if submitted.
    - ``0``: has the shape of a whole move and longer legal moves extend
      it, but it is not itself legal. Renderable as a preview only; a
      commit is rejected.
    - ``1``: complete and unambiguous.
    """
    valid: bool
    message: str
    complete: Optional[Literal[-1, 0, 1]] = None
    canrender: Optional[bool] = None
    message_key: Optional[str] = Field(None, alias="messageKey")
    params: Dict[str, Any] = Field(default_factory=dict)

    class Config:
        populate_by_name = True


class ClickResult(ValidationResult):
    """Validation verdict plus the candidate move string after the click."""
    move: str = ""


class RenderDescriptor(BaseModel):
    """Board-agnostic description consumed by an external renderer."""
    board: Dict[str, Any]
    legend: Dict[str, Any] = Field(default_factory=dict)
    pieces: Optional[str] = None
    annotations: List[Dict[str, Any]] = Field(default_factory=list)


class VariantInfo(BaseModel):
    """A selectable variant; variants sharing a group are exclusive."""
    uid: str
    group: Optional[str] = None


class GameInfo(BaseModel):
    """Static metadata a game engine declares about itself."""
    uid: str
    name: str
    version: str
    player_counts: List[int] = Field(alias="playerCounts")
    variants: List[VariantInfo] = Field(default_factory=list)
    flags: List[str] = Field(default_factory=list)

    class Config:
        populate_by_name = True

    def variant_uids(self) -> List[str]:
        return [v.uid for v in self.variants]
