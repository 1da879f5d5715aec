from __future__ import annotations

__all__ = [
    "DRAW",
    "Definite",
    "Draw",
    "Finished",
    "GameAlreadyFinished",
    "GameResult",
    "GameState",
    "Indefinite",
    "Minimax",
    "MoveError",
    "MoveFailed",
    "NoPossibleMoves",
    "Ordering",
    "Outcome",
    "Player",
    "Running",
    "SearchError",
    "Status",
    "Win",
    "compare_outcome",
    "minimax",
]

from .errors import GameAlreadyFinished, MoveError, MoveFailed, NoPossibleMoves, SearchError
from .game import GameState
from .ordering import Ordering, compare_outcome
from .outcome import DRAW, Definite, Draw, Finished, GameResult, Indefinite, Outcome, Player, Running, Status, Win
from .search import Minimax, minimax
