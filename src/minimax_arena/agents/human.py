from __future__ import annotations

from dataclasses import dataclass

from ..game import GameState, Move, render_state
from ..outcome import Player


@dataclass(slots=True)
class HumanAgent:
    name: str = "human"

    def select_move(self, state: GameState, player: Player, legal_moves: list[Move]) -> Move:
        print(render_state(state))
        print(f"player: {player.value}")
        print("legal moves:")
        for i, m in enumerate(legal_moves):
            print(f"  [{i}] {m}")

        while True:
            raw = input("choose move index> ").strip()
            try:
                idx = int(raw)
            except ValueError:
                print("enter a number")
                continue
            if 0 <= idx < len(legal_moves):
                return legal_moves[idx]
            print("out of range")
