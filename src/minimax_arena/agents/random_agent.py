from __future__ import annotations

import random
from dataclasses import dataclass, field

from ..game import GameState, Move
from ..outcome import Player


@dataclass(slots=True)
class RandomAgent:
    name: str = "random"
    seed: int | None = None
    _rng: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)

    def select_move(self, state: GameState, player: Player, legal_moves: list[Move]) -> Move:
        return self._rng.choice(legal_moves)
