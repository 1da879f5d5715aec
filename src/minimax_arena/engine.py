from __future__ import annotations

import json
import logging
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from .game import GameState, clone_state, render_state
from .outcome import Finished, Player

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MoveRecord:
    turn: int
    player: str
    move: str
    ms: float
    note: str | None = None


@dataclass(frozen=True, slots=True)
class MatchResult:
    game: str
    winner: Player | None
    reason: str
    turns: int
    move_history: list[MoveRecord]


def play_match(
    state: GameState,
    agent_first: Any,
    agent_second: Any,
    *,
    max_turns: int = 10_000,
    log_path: Path | None = None,
) -> MatchResult:
    """
    Play `state` to the end, asking each agent for its player's moves.

    Agents must implement:
      - name: str
      - select_move(state, player, legal_moves) -> move

    The agents see a private copy; the caller's state is left untouched.
    """
    game_name = str(getattr(state, "name", type(state).__name__))
    state = clone_state(state)
    history: list[MoveRecord] = []

    def finish(winner: Player | None, reason: str, turns: int) -> MatchResult:
        result = MatchResult(game=game_name, winner=winner, reason=reason, turns=turns, move_history=history)
        logger.info("%s finished after %d turn(s): %s (winner: %s)", game_name, turns, reason, winner)
        if log_path:
            _write_log(log_path, result, state)
        return result

    for turn in range(1, max_turns + 1):
        status = state.status()
        if isinstance(status, Finished):
            reason = "draw" if status.result.winner() is None else "win"
            return finish(status.result.winner(), reason, turn - 1)

        player = status.player
        agent = agent_first if player is Player.FIRST else agent_second
        legal = state.possible_moves()
        if not legal:
            return finish(player.other(), "no_legal_moves", turn - 1)

        t0 = time.perf_counter()
        try:
            move = agent.select_move(clone_state(state), player, legal)
        except Exception:
            logger.exception("agent %s failed on turn %d", agent.name, turn)
            ms = (time.perf_counter() - t0) * 1000.0
            history.append(MoveRecord(turn=turn, player=player.value, move="", ms=ms, note="agent_error"))
            return finish(player.other(), "agent_error", turn)
        ms = (time.perf_counter() - t0) * 1000.0

        if move not in legal:
            logger.warning("agent %s chose illegal move %r on turn %d", agent.name, move, turn)
            history.append(MoveRecord(turn=turn, player=player.value, move=str(move), ms=ms, note="illegal_move"))
            return finish(player.other(), "illegal_move", turn)

        state.apply_move(move)
        history.append(MoveRecord(turn=turn, player=player.value, move=str(move), ms=ms))
        logger.debug("turn %d: %s played %s (%.1f ms)", turn, player.value, move, ms)

    return finish(None, "max_turns", max_turns)


def _write_log(path: Path, result: MatchResult, final_state: GameState) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "game": result.game,
        "result": {
            **asdict(result),
            "winner": None if result.winner is None else result.winner.value,
            "move_history": [asdict(r) for r in result.move_history],
        },
        "final_render": render_state(final_state),
    }
    path.write_text(json.dumps(payload, indent=2, sort_keys=True) + "\n", encoding="utf-8")
