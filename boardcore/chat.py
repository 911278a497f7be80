"""Chat narration of a game's result events.

Each snapshot with results becomes one node: ``[ply, sentence, ...]``. The
mover is the player before the snapshot's ``current_player``. Games can
word an event themselves through a ``chat`` hook; otherwise the generic
sentences from the message catalog are used.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import List, Optional

from .messages import translate
from .models import MoveResult, MoveState

ChatHook = Callable[[List[str], str, List[MoveResult], MoveResult], bool]


def player_name(player: int, players: Sequence[str]) -> str:
    if 1 <= player <= len(players):
        return players[player - 1]
    return f"Player {player}"


def _join_players(numbers: Sequence[int], players: Sequence[str]) -> str:
    return ", ".join(player_name(n, players) for n in numbers)


def narrate(result: MoveResult, name: str, players: Sequence[str]) -> Optional[str]:
    """Generic sentence for one result event, or ``None`` for unknown kinds."""
    kind = result.type
    if kind == "move":
        params = {"player": name, "from": result.get("from"), "to": result.get("to")}
        if result.get("what") is not None:
            return translate("results.MOVE.complete", what=result.get("what"), **params)
        return translate("results.MOVE.nowhat", **params)
    if kind == "place":
        if result.get("what") is not None:
            return translate("results.PLACE.complete", player=name, what=result.get("what"), where=result.get("where"))
        return translate("results.PLACE.nowhat", player=name, where=result.get("where"))
    if kind == "capture":
        count = result.get("count")
        if count is not None and count != 1:
            return translate("results.CAPTURE.multiple", player=name, count=count)
        return translate("results.CAPTURE.nowhat", player=name, where=result.get("where"))
    if kind == "take":
        return translate("results.TAKE", player=name, **{"from": result.get("from")})
    if kind == "pass":
        return translate("results.PASS.simple", player=name)
    if kind == "swap":
        return translate("results.SWAP", player=name)
    if kind == "eog":
        return translate("results.EOG")
    if kind == "resigned":
        return translate("results.RESIGN", player=player_name(result.get("player", 0), players))
    if kind == "timeout":
        return translate("results.TIMEOUT", player=player_name(result.get("player", 0), players))
    if kind == "drawagreed":
        return translate("results.DRAWAGREED")
    if kind == "gameabandoned":
        return translate("results.ABANDONED")
    if kind == "winners":
        winners = list(result.get("players", []))
        if not winners:
            return translate("results.WINNERS.none")
        key = "results.WINNERS.single" if len(winners) == 1 else "results.WINNERS.multiple"
        return translate(key, winners=_join_players(winners, players))
    return None


def build_chat_log(
    snapshots: Sequence[MoveState],
    players: Sequence[str],
    num_players: int,
    hook: Optional[ChatHook] = None,
) -> List[List[str]]:
    log: List[List[str]] = []
    for ply, state in enumerate(snapshots):
        if not state.results:
            continue
        mover = state.current_player - 1
        if mover < 1:
            mover = num_players
        name = player_name(mover, players)
        node = [str(ply)]
        for result in state.results:
            if hook is not None and hook(node, name, state.results, result):
                continue
            sentence = narrate(result, name, players)
            if sentence is not None:
                node.append(sentence)
        if len(node) > 1:
            log.append(node)
    return log
