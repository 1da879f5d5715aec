from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from .errors import GameAlreadyFinished, MoveFailed, NoPossibleMoves
from .game import GameState, clone_state, heuristic_score
from .ordering import outcome_key
from .outcome import Definite, Finished, Indefinite, Outcome

M = TypeVar("M")


@dataclass(frozen=True, slots=True)
class Minimax(Generic[M]):
    outcome: Outcome
    moves: list[M] = field(default_factory=list)  # every move tied for best, in possible_moves() order


def minimax(state: GameState, depth: int) -> Minimax:
    """
    Explore every line from `state` up to `depth` further plies below the
    children and return the best outcome for the player to move.

    With depth 0 each child that is not terminal is scored with its heuristic.
    Raises a SearchError subclass on failure; the caller's state is never mutated.
    """
    if depth < 0:
        raise ValueError(f"depth must be non-negative, got: {depth!r}")

    status = state.status()
    if isinstance(status, Finished):
        raise GameAlreadyFinished()
    player = status.player

    moves = state.possible_moves()
    if not moves:
        raise NoPossibleMoves()

    scored: list[tuple[object, Outcome]] = []
    for move in moves:
        child = clone_state(state)
        try:
            child.apply_move(move)
        except ValueError as e:
            raise MoveFailed(move, e) from e

        child_status = child.status()
        outcome: Outcome
        if isinstance(child_status, Finished):
            outcome = Definite(child_status.result, 0)
        elif depth == 0:
            outcome = Indefinite(heuristic_score(child))
        else:
            outcome = minimax(child, depth - 1).outcome
            if isinstance(outcome, Definite):
                outcome = outcome.deeper()
        scored.append((move, outcome))

    if not scored:
        raise NoPossibleMoves()

    best = max((o for _, o in scored), key=outcome_key(player))
    return Minimax(outcome=best, moves=[m for m, o in scored if o == best])
