from __future__ import annotations

__all__ = ["Game2048", "TicTacToe"]

from .game2048 import Game2048
from .tictactoe import TicTacToe
