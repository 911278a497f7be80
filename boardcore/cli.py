"""boardcore CLI - command line interface for the bundled game engines.

Usage:
    # List the registered games and their variants
    boardcore list

    # Start a game and save its record
    boardcore new reversi --variant standard-6 --output game.json

    # Show the legal moves / the rendered position of a saved game
    boardcore moves game.json
    boardcore render game.json

    # Play a move against a saved game (untrusted unless --trusted)
    boardcore move game.json d3

    # Play a seeded random game to the end
    boardcore play halma --seed 7 --output halma.json

    # Replay a record trusted and untrusted and compare the results
    boardcore replay halma.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .ai import RandomPlayer
from .config import get_settings
from .engine import SPECIAL_MOVES, GameEngine
from .errors import BoardCoreError, MoveError
from .games import get_game, list_games, load_game
from .models import GameRecord

logger = logging.getLogger(__name__)


def _read_record(source: str) -> GameRecord:
    text = sys.stdin.read() if source == "-" else Path(source).read_text()
    return GameEngine.coerce_record(text)


def _write(engine: GameEngine, output: Optional[str]) -> None:
    text = engine.serialize()
    if output:
        Path(output).write_text(text)
        logger.info(f"Wrote {engine.game_info.uid} record to {output}")
    else:
        print(text)


def replay(record: GameRecord, trusted: bool) -> GameEngine:
    """Rebuild a game from scratch by replaying every recorded move."""
    engine = get_game(record.game_id)(variants=record.variants)
    for snapshot in record.stack[1:]:
        m = snapshot.last_move or ""
        if m not in SPECIAL_MOVES:
            engine.move(m, trusted=trusted)
        elif m in ("resign", "timeout"):
            getattr(engine, m)(snapshot.results[0].get("player"))
        else:
            getattr(engine, m)()
    return engine


def cmd_list(args: argparse.Namespace) -> int:
    print(f"{'Game':<10} {'Name':<12} {'Version':<10} Variants")
    print("-" * 60)
    for info in list_games():
        variants = ", ".join(info.variant_uids()) or "-"
        print(f"{info.uid:<10} {info.name:<12} {info.version:<10} {variants}")
    return 0


def cmd_new(args: argparse.Namespace) -> int:
    engine = get_game(args.game)(variants=args.variant)
    _write(engine, args.output)
    return 0


def cmd_moves(args: argparse.Namespace) -> int:
    engine = load_game(_read_record(args.record))
    for m in engine.moves():
        print(m)
    return 0


def cmd_move(args: argparse.Namespace) -> int:
    engine = load_game(_read_record(args.record))
    try:
        engine.move(args.move, trusted=args.trusted)
    except MoveError as e:
        print(json.dumps(e.to_dict()), file=sys.stderr)
        return 1
    _write(engine, args.output or (args.record if args.record != "-" else None))
    return 0


def cmd_render(args: argparse.Namespace) -> int:
    engine = load_game(_read_record(args.record))
    if args.json:
        print(json.dumps(engine.render().model_dump(exclude_none=True), indent=2, sort_keys=True))
        return 0
    print(engine.render().pieces or "")
    print()
    print(engine.status(), end="")
    return 0


def cmd_play(args: argparse.Namespace) -> int:
    engine = get_game(args.game)(variants=args.variant)
    players = [RandomPlayer(p, seed=args.seed * 10 + p) for p in range(1, engine.num_players + 1)]
    plies = 0
    while not engine.gameover and plies < args.max_plies:
        m = players[engine.current_player - 1].select_move(engine)
        if m is None:
            break
        engine.move(m)
        plies += 1
    if not engine.gameover:
        logger.info(f"Stopped after {plies} plies without a result")
    for number, round_ in enumerate(engine.move_history(), start=1):
        print(f"{number:>4}. {' '.join(round_)}")
    print()
    print(engine.status(), end="")
    if args.output:
        _write(engine, args.output)
    return 0


def cmd_replay(args: argparse.Namespace) -> int:
    record = _read_record(args.record)
    original = load_game(record).serialize()
    trusted = replay(record, trusted=True).serialize()
    untrusted = replay(record, trusted=False).serialize()
    if trusted != untrusted:
        print("MISMATCH: trusted and untrusted replays differ")
        return 1
    if trusted != original:
        print("MISMATCH: replay differs from the stored record")
        return 1
    print(f"OK: {len(record.stack) - 1} plies replayed identically")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="boardcore",
        description="boardcore game engine CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # list
    list_parser = subparsers.add_parser("list", help="List registered games")
    list_parser.set_defaults(func=cmd_list)

    # new
    new_parser = subparsers.add_parser("new", help="Start a new game")
    new_parser.add_argument("game", help="Game uid")
    new_parser.add_argument("--variant", "-v", action="append", default=[], help="Variant uid (repeatable)")
    new_parser.add_argument("--output", "-o", help="Write the record here instead of stdout")
    new_parser.set_defaults(func=cmd_new)

    # moves
    moves_parser = subparsers.add_parser("moves", help="List legal moves of a saved game")
    moves_parser.add_argument("record", help="Record file, or - for stdin")
    moves_parser.set_defaults(func=cmd_moves)

    # move
    move_parser = subparsers.add_parser("move", help="Play a move against a saved game")
    move_parser.add_argument("record", help="Record file, or - for stdin")
    move_parser.add_argument("move", help="Move string")
    move_parser.add_argument("--trusted", action="store_true", help="Skip validation")
    move_parser.add_argument("--output", "-o", help="Write the record here (default: in place)")
    move_parser.set_defaults(func=cmd_move)

    # render
    render_parser = subparsers.add_parser("render", help="Show the position of a saved game")
    render_parser.add_argument("record", help="Record file, or - for stdin")
    render_parser.add_argument("--json", action="store_true", help="Print the full render descriptor")
    render_parser.set_defaults(func=cmd_render)

    # play
    play_parser = subparsers.add_parser("play", help="Play a seeded random game")
    play_parser.add_argument("game", help="Game uid")
    play_parser.add_argument("--variant", "-v", action="append", default=[], help="Variant uid (repeatable)")
    play_parser.add_argument("--seed", type=int, default=0, help="Random seed")
    play_parser.add_argument("--max-plies", type=int, default=500, help="Stop after this many plies")
    play_parser.add_argument("--output", "-o", help="Write the final record here")
    play_parser.set_defaults(func=cmd_play)

    # replay
    replay_parser = subparsers.add_parser("replay", help="Verify a record by replaying it")
    replay_parser.add_argument("record", help="Record file, or - for stdin")
    replay_parser.set_defaults(func=cmd_replay)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(
        level=getattr(logging, get_settings().log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except BoardCoreError as e:
        logger.error(str(e))
        return 2


if __name__ == "__main__":
    sys.exit(main())
