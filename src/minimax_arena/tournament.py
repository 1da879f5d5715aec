from __future__ import annotations

import argparse
import json
import logging
import time
import tomllib
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from .engine import MatchResult, play_match
from .outcome import Player
from .registry import agent_factory, game_factory

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Competitor:
    id: str
    agent: str


@dataclass(frozen=True, slots=True)
class TournamentConfig:
    competitors: list[Competitor]
    games: list[str]
    rounds: int = 1
    swap_starts: bool = True
    max_turns: int = 10_000
    log_dir: Path | None = None


@dataclass(frozen=True, slots=True)
class MatchSummary:
    game: str
    first: str
    second: str
    winner: str | None
    reason: str
    turns: int


@dataclass(frozen=True, slots=True)
class TournamentResult:
    started_ts_ms: int
    duration_ms: int
    matches: list[MatchSummary]
    scoreboard: dict[str, dict[str, int]]


def _pairings(xs: list[Competitor]) -> list[tuple[Competitor, Competitor]]:
    out: list[tuple[Competitor, Competitor]] = []
    for i in range(len(xs)):
        for j in range(i + 1, len(xs)):
            out.append((xs[i], xs[j]))
    return out


def _scoreboard_init(competitors: list[Competitor]) -> dict[str, dict[str, int]]:
    return {c.id: {"wins": 0, "losses": 0, "draws": 0, "points": 0} for c in competitors}


def _apply_result(sb: dict[str, dict[str, int]], first: str, second: str, winner: str | None) -> None:
    if winner is None:
        sb[first]["draws"] += 1
        sb[second]["draws"] += 1
        sb[first]["points"] += 1
        sb[second]["points"] += 1
        return

    loser = second if winner == first else first
    sb[winner]["wins"] += 1
    sb[loser]["losses"] += 1
    sb[winner]["points"] += 3


def _maybe_close(agent: Any) -> None:
    close = getattr(agent, "close", None)
    if callable(close):
        close()


def run_tournament(config: TournamentConfig) -> TournamentResult:
    started = time.time()
    sb = _scoreboard_init(config.competitors)
    matches: list[MatchSummary] = []

    for game_spec in config.games:
        new_game = game_factory(game_spec)
        for a, b in _pairings(config.competitors):
            seats = [(a, b)]
            if config.swap_starts:
                seats.append((b, a))

            for r in range(config.rounds):
                for first, second in seats:
                    agent_first = agent_factory(first.agent)()
                    agent_second = agent_factory(second.agent)()

                    log_path = None
                    if config.log_dir:
                        safe_game = game_spec.replace(":", "_").replace("/", "_")
                        log_path = config.log_dir / safe_game / f"{first.id}_vs_{second.id}_r{r}.json"

                    try:
                        res: MatchResult = play_match(
                            new_game(),
                            agent_first,
                            agent_second,
                            max_turns=config.max_turns,
                            log_path=log_path,
                        )
                    finally:
                        _maybe_close(agent_first)
                        _maybe_close(agent_second)

                    winner_id = None
                    if res.winner is not None:
                        winner_id = first.id if res.winner is Player.FIRST else second.id
                    logger.info("%s: %s vs %s -> %s (%s)", res.game, first.id, second.id, winner_id, res.reason)
                    matches.append(
                        MatchSummary(
                            game=res.game,
                            first=first.id,
                            second=second.id,
                            winner=winner_id,
                            reason=res.reason,
                            turns=res.turns,
                        )
                    )
                    _apply_result(sb, first.id, second.id, winner_id)

    return TournamentResult(
        started_ts_ms=int(started * 1000),
        duration_ms=int((time.time() - started) * 1000),
        matches=matches,
        scoreboard=sb,
    )


def load_config(path: Path) -> TournamentConfig:
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    return parse_config(data)


def parse_config(data: dict[str, Any]) -> TournamentConfig:
    competitors_raw = data.get("competitors", [])
    if not isinstance(competitors_raw, list) or len(competitors_raw) < 2:
        raise ValueError("Config must contain at least two [[competitors]] entries")

    competitors: list[Competitor] = []
    for c in competitors_raw:
        if not isinstance(c, dict) or "id" not in c:
            raise ValueError(f"Each [[competitors]] entry must be a table with an id, got: {c!r}")
        competitors.append(Competitor(id=str(c["id"]), agent=str(c.get("agent", "random"))))
    ids = [c.id for c in competitors]
    if len(set(ids)) != len(ids):
        raise ValueError(f"Competitor ids must be unique, got: {ids!r}")

    games = data.get("games", ["tictactoe"])
    if not isinstance(games, list) or not games:
        raise ValueError("games must be a non-empty list")

    log_dir = None
    if data.get("log_dir"):
        log_dir = Path(str(data["log_dir"])).expanduser().resolve()

    return TournamentConfig(
        competitors=competitors,
        games=[str(g) for g in games],
        rounds=int(data.get("rounds", 1)),
        swap_starts=bool(data.get("swap_starts", True)),
        max_turns=int(data.get("max_turns", 10_000)),
        log_dir=log_dir,
    )


def cmd_tournament(args: argparse.Namespace) -> int:
    config = load_config(Path(args.config).expanduser().resolve())
    result = run_tournament(config)

    print("scoreboard:")
    for cid, row in sorted(result.scoreboard.items(), key=lambda kv: (-kv[1]["points"], kv[0])):
        print(f"  {cid}: {row}")

    if args.out:
        out_path = Path(args.out).expanduser().resolve()
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(json.dumps(asdict(result), indent=2, sort_keys=True) + "\n", encoding="utf-8")
        print(f"out: {out_path}")

    return 0


def load_tournament_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("tournament", help="Run a round robin from a TOML config")
    p.add_argument("--config", default="arena.toml", help="Path to config TOML")
    p.add_argument("--out", help="Write JSON results to this path")
    p.set_defaults(func=cmd_tournament)
