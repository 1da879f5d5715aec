from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from ..game import GameState, Move
from ..outcome import Player
from ..search import Minimax, minimax

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MinimaxAgent:
    """
    Plays one of the best moves found by a depth-bounded minimax search.

    The search reports every move tied for best; the agent picks among them with
    its own RNG so seeded agents replay identically.
    """

    depth: int = 2
    name: str = "minimax"
    seed: int | None = None
    last_result: Minimax | None = field(default=None, init=False)
    _rng: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.depth < 0:
            raise ValueError(f"depth must be non-negative, got: {self.depth!r}")
        self._rng = random.Random(self.seed)

    def select_move(self, state: GameState, player: Player, legal_moves: list[Move]) -> Move:
        result = minimax(state, self.depth)
        self.last_result = result
        logger.debug("%s: %s via %d tied move(s)", player.value, result.outcome, len(result.moves))
        return self._rng.choice(result.moves)
