from __future__ import annotations

import copy
from typing import Any, Protocol, TypeVar, runtime_checkable

from .outcome import Status

Move = Any


@runtime_checkable
class GameState(Protocol):
    """
    What the search needs from a game.

    Optional extras, looked up with getattr so games may leave them out:
      - heuristic_score() -> int   (default 0, positive favours Player.FIRST)
      - clone() -> Self            (default copy.deepcopy)
      - render() -> str            (used by the human agent and the CLI)
    """

    def status(self) -> Status: ...

    def possible_moves(self) -> list[Move]: ...

    def apply_move(self, move: Move) -> None: ...


S = TypeVar("S")


def heuristic_score(state: Any) -> int:
    score = getattr(state, "heuristic_score", None)
    if callable(score):
        return int(score())
    return 0


def clone_state(state: S) -> S:
    clone = getattr(state, "clone", None)
    if callable(clone):
        return clone()
    return copy.deepcopy(state)


def render_state(state: Any) -> str:
    render = getattr(state, "render", None)
    if callable(render):
        return str(render())
    return str(state)
