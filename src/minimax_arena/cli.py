from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any

from .engine import play_match
from .errors import SearchError
from .game import render_state
from .registry import GAMES, agent_factory, game_factory
from .search import minimax
from .tournament import load_tournament_parser

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "MINIMAX_ARENA_LOG_LEVEL"


def setup_logging(level_name: str | None = None) -> None:
    """Configure root logging once; --log-level wins over MINIMAX_ARENA_LOG_LEVEL."""
    if getattr(setup_logging, "_configured", False):
        return
    name = (level_name or os.environ.get(LOG_LEVEL_ENV, "WARNING")).upper()
    level: int = getattr(logging, name, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    setup_logging._configured = True  # type: ignore[attr-defined]


def _parse_indices(raw: str | None) -> list[int]:
    if not raw:
        return []
    try:
        return [int(x) for x in raw.split(",") if x.strip()]
    except ValueError:
        raise ValueError(f"--moves expects comma separated indices, got: {raw!r}") from None


def _advance(state: Any, indices: list[int]) -> Any:
    """Play the given moves, each an index into possible_moves() at that point."""
    for idx in indices:
        legal = state.possible_moves()
        if not 0 <= idx < len(legal):
            raise ValueError(f"move index {idx} out of range, {len(legal)} move(s) available")
        state.apply_move(legal[idx])
    return state


def cmd_list_games(_: argparse.Namespace) -> int:
    for name in sorted(GAMES):
        print(name)
    return 0


def cmd_analyze(args: argparse.Namespace) -> int:
    state = _advance(game_factory(args.game)(), _parse_indices(args.moves))
    print(render_state(state))
    print()

    try:
        result = minimax(state, args.depth)
    except SearchError as e:
        logger.debug("search failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(f"outcome: {result.outcome}")
    print("best moves:")
    for m in result.moves:
        print(f"  {m}")
    return 0


def cmd_play(args: argparse.Namespace) -> int:
    state = _advance(game_factory(args.game)(), _parse_indices(args.moves))
    first = agent_factory(args.first)()
    second = agent_factory(args.second)()

    log_path = Path(args.log).expanduser().resolve() if args.log else None
    try:
        result = play_match(state, first, second, max_turns=args.max_turns, log_path=log_path)

        print(f"game: {result.game}")
        print(f"winner: {None if result.winner is None else result.winner.value}")
        print(f"reason: {result.reason}")
        print(f"turns: {result.turns}")
        if log_path:
            print(f"log: {log_path}")
        return 0
    finally:
        for a in (first, second):
            close = getattr(a, "close", None)
            if callable(close):
                close()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="minimax-arena")
    p.add_argument("--log-level", default=None, help=f"Logging level (default: ${LOG_LEVEL_ENV} or WARNING)")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_list = sub.add_parser("list-games", help="List built-in games")
    p_list.set_defaults(func=cmd_list_games)

    p_an = sub.add_parser("analyze", help="Print the minimax outcome and every best move")
    p_an.add_argument("game", help="Built-in name (e.g. tictactoe) or '<path>:<symbol>'")
    p_an.add_argument("--depth", type=int, default=2, help="Search depth below the candidate moves")
    p_an.add_argument("--moves", help="Comma separated move indices to play before analysing")
    p_an.set_defaults(func=cmd_analyze)

    p_play = sub.add_parser("play", help="Play a match")
    p_play.add_argument("game", help="Built-in name (e.g. tictactoe) or '<path>:<symbol>'")
    p_play.add_argument("--first", default="human", help="human|random|minimax[:<depth>]|<path>:<symbol>")
    p_play.add_argument(
        "--second", default="minimax", help="human|random|minimax[:<depth>] (default depth 2)|<path>:<symbol>"
    )
    p_play.add_argument("--moves", help="Comma separated move indices to play before the match starts")
    p_play.add_argument("--max-turns", type=int, default=10_000, help="Hard cap on turns")
    p_play.add_argument("--log", help="Write JSON match log to this path")
    p_play.set_defaults(func=cmd_play)

    load_tournament_parser(sub)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
