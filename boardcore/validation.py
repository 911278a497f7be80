"""Tri-state move validation.

Validation walks a candidate move string through these states::

    EMPTY ──> PARTIAL ──> AMBIGUOUS ──> COMPLETE
      │          │            │            │
      └──────────┴────────────┴────────────┴──> INVALID

and reports the state as a :class:`~boardcore.models.ValidationResult`:

============  =====  ========  =============================================
state         valid  complete  meaning
============  =====  ========  =============================================
EMPTY         True   -1        nothing entered yet
PARTIAL       True   -1        valid prefix, more input required
AMBIGUOUS     True    0        shaped like a whole move, but only a prefix
                               of legal moves; preview only
COMPLETE      True    1        legal and ready to commit
INVALID       False  None      no legal move starts this way
============  =====  ========  =============================================

Validators are pure: they read the engine, never write it.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Any, Optional

from .errors import InvalidMoveError
from .grammar import MoveGrammar
from .messages import translate
from .models import ValidationResult


class ValidationState(str, Enum):
    EMPTY = "empty"
    PARTIAL = "partial"
    AMBIGUOUS = "ambiguous"
    COMPLETE = "complete"
    INVALID = "invalid"

    @property
    def complete(self) -> Optional[int]:
        return _COMPLETENESS[self]


_COMPLETENESS = {
    ValidationState.EMPTY: -1,
    ValidationState.PARTIAL: -1,
    ValidationState.AMBIGUOUS: 0,
    ValidationState.COMPLETE: 1,
    ValidationState.INVALID: None,
}

_DEFAULT_KEYS = {
    ValidationState.EMPTY: "validation.general.DEFAULT_HANDLER",
    ValidationState.PARTIAL: "validation.general.VALID_PARTIAL",
    ValidationState.AMBIGUOUS: "validation.general.AMBIGUOUS",
    ValidationState.COMPLETE: "validation.general.VALID_MOVE",
    ValidationState.INVALID: "validation.general.INVALID_MOVE",
}


def verdict(state: ValidationState, key: Optional[str] = None, **params: Any) -> ValidationResult:
    """Build the ValidationResult for ``state`` with a catalog message."""
    key = key or _DEFAULT_KEYS[state]
    valid = state is not ValidationState.INVALID
    return ValidationResult(
        valid=valid,
        complete=state.complete,
        canrender=True if state in (ValidationState.PARTIAL, ValidationState.AMBIGUOUS, ValidationState.COMPLETE) else None,
        message=translate(key, **params),
        message_key=key,
        params=params,
    )


def empty(key: Optional[str] = None, **params: Any) -> ValidationResult:
    return verdict(ValidationState.EMPTY, key, **params)


def partial(key: Optional[str] = None, **params: Any) -> ValidationResult:
    return verdict(ValidationState.PARTIAL, key, **params)


def ambiguous(key: Optional[str] = None, **params: Any) -> ValidationResult:
    return verdict(ValidationState.AMBIGUOUS, key, **params)


def complete(key: Optional[str] = None, **params: Any) -> ValidationResult:
    return verdict(ValidationState.COMPLETE, key, **params)


def invalid(key: Optional[str] = None, **params: Any) -> ValidationResult:
    return verdict(ValidationState.INVALID, key, **params)


def state_of(result: ValidationResult) -> ValidationState:
    """Map a ValidationResult back onto the state machine."""
    if not result.valid:
        return ValidationState.INVALID
    if result.complete == 1:
        return ValidationState.COMPLETE
    if result.complete == 0:
        return ValidationState.AMBIGUOUS
    return ValidationState.PARTIAL


def classify_candidate(
    candidate: str,
    moves: Sequence[str],
    grammar: MoveGrammar,
    min_cells: int = 1,
) -> ValidationState:
    """Classify ``candidate`` against an authoritative move list.

    Args:
        candidate: Normalized move string
        moves: Every legal move in the position
        grammar: Grammar used to find token boundaries
        min_cells: Fewest cells a whole move has in this position; a
            prefix with at least this many cells is reported AMBIGUOUS
            rather than PARTIAL

    Returns:
        The validation state; COMPLETE whenever ``candidate`` is in
        ``moves``, even if longer moves extend it.
    """
    if candidate == "":
        return ValidationState.EMPTY
    if candidate in moves:
        return ValidationState.COMPLETE
    try:
        parsed = grammar.tokenize(candidate)
    except InvalidMoveError:
        return ValidationState.INVALID
    if not parsed.complete:
        # ends mid-token, so compare characters rather than tokens
        if any(m.startswith(candidate) for m in moves):
            return ValidationState.PARTIAL
        return ValidationState.INVALID
    if not any(grammar.extends(candidate, m) for m in moves):
        return ValidationState.INVALID
    if len(parsed.cells) >= min_cells:
        return ValidationState.AMBIGUOUS
    return ValidationState.PARTIAL
