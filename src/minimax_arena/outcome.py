from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias


class Player(Enum):
    FIRST = "first"
    SECOND = "second"

    def other(self) -> Player:
        return Player.SECOND if self is Player.FIRST else Player.FIRST


@dataclass(frozen=True, slots=True)
class Draw:
    def winner(self) -> Player | None:
        return None

    def __str__(self) -> str:
        return "draw"


@dataclass(frozen=True, slots=True)
class Win:
    player: Player

    def winner(self) -> Player | None:
        return self.player

    def __str__(self) -> str:
        return f"win({self.player.value})"


GameResult: TypeAlias = Draw | Win

DRAW = Draw()


@dataclass(frozen=True, slots=True)
class Running:
    player: Player  # to move


@dataclass(frozen=True, slots=True)
class Finished:
    result: GameResult


Status: TypeAlias = Running | Finished


@dataclass(frozen=True, slots=True)
class Definite:
    """
    A forced result under optimal play.

    `distance` counts the plies still needed to reach the terminal state along
    the line that achieves it.
    """

    result: GameResult
    distance: int = 0

    def __post_init__(self) -> None:
        if self.distance < 0:
            raise ValueError(f"distance must be non-negative, got: {self.distance!r}")

    def deeper(self) -> Definite:
        return Definite(self.result, self.distance + 1)

    def __str__(self) -> str:
        return f"{self.result} in {self.distance}"


@dataclass(frozen=True, slots=True)
class Indefinite:
    """Heuristic estimate at the search horizon; higher favours Player.FIRST."""

    score: int

    def __str__(self) -> str:
        return f"score {self.score:+d}"


Outcome: TypeAlias = Definite | Indefinite
