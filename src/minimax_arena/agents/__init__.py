from __future__ import annotations

__all__ = ["HumanAgent", "MinimaxAgent", "RandomAgent"]

from .human import HumanAgent
from .minimax_agent import MinimaxAgent
from .random_agent import RandomAgent
