"""Append-only stack of per-ply snapshots.

Element 0 is the initial position; element ``i + 1`` follows from element
``i`` by exactly one committed move. Snapshots are deep-copied on the way in
and on the way out, so neither the engine's later in-place mutations nor a
caller holding a loaded snapshot can alter history.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import List

from .errors import InvalidIndexError
from .models import MoveState


class MoveStateStack:
    """Ordered, append-only sequence of :class:`MoveState` snapshots."""

    def __init__(self, states: Iterable[MoveState] = ()) -> None:
        self._states: List[MoveState] = []
        for state in states:
            self.push(state)

    def push(self, state: MoveState) -> None:
        """Append a deep copy of ``state``."""
        self._states.append(state.model_copy(deep=True))

    def resolve(self, index: int) -> int:
        """Turn a possibly negative index into a position in ``[0, len)``."""
        resolved = index + len(self._states) if index < 0 else index
        if not 0 <= resolved < len(self._states):
            raise InvalidIndexError(index, len(self._states))
        return resolved

    def load(self, index: int = -1) -> MoveState:
        """Deep copy of the snapshot at ``index`` (negative counts from the end)."""
        return self._states[self.resolve(index)].model_copy(deep=True)

    def last(self) -> MoveState:
        return self.load(-1)

    def snapshots(self) -> List[MoveState]:
        """Deep copies of every snapshot, oldest first."""
        return [s.model_copy(deep=True) for s in self._states]

    def __getitem__(self, index: int) -> MoveState:
        return self.load(index)

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[MoveState]:
        return iter(self.snapshots())

    def __repr__(self) -> str:
        return f"MoveStateStack(len={len(self._states)})"
