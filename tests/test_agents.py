from __future__ import annotations

import pytest

from minimax_arena.agents import HumanAgent, MinimaxAgent, RandomAgent
from minimax_arena.cli import build_parser
from minimax_arena.errors import GameAlreadyFinished
from minimax_arena.games.game2048 import ROBOT, Game2048, Spawn
from minimax_arena.games.tictactoe import Place, TicTacToe
from minimax_arena.outcome import Definite, Player, Win
from minimax_arena.registry import agent_factory, game_factory


def test_minimax_agent_picks_from_the_tie_set() -> None:
    game = TicTacToe.from_rows("X.X .OO XO.")
    picks = set()
    for seed in range(10):
        agent = MinimaxAgent(depth=2, seed=seed)
        picks.add(agent.select_move(game, Player.FIRST, game.possible_moves()))
        assert agent.last_result is not None
        assert agent.last_result.outcome == Definite(Win(Player.FIRST), 0)
    assert picks <= {Place.UPPER, Place.LEFT}


def test_minimax_agent_propagates_search_errors() -> None:
    game = TicTacToe.from_rows("XXX OO. ...")
    with pytest.raises(GameAlreadyFinished):
        MinimaxAgent(depth=1).select_move(game, Player.SECOND, [])


def test_minimax_agent_rejects_negative_depth() -> None:
    with pytest.raises(ValueError):
        MinimaxAgent(depth=-1)


def test_random_agent_is_reproducible() -> None:
    moves = list(range(20))
    a = [RandomAgent(seed=3).select_move(None, Player.FIRST, moves) for _ in range(3)]
    assert len(set(a)) == 1


def test_human_agent_retries_until_valid(monkeypatch, capsys) -> None:
    answers = iter(["x", "9", "1"])
    monkeypatch.setattr("builtins.input", lambda _prompt: next(answers))
    game = TicTacToe()
    move = HumanAgent().select_move(game, Player.FIRST, [Place.CENTER, Place.LOWER])
    assert move is Place.LOWER
    out = capsys.readouterr().out
    assert "enter a number" in out
    assert "out of range" in out
    assert "[1] lower" in out


def test_registry_resolves_builtins() -> None:
    assert isinstance(game_factory("tictactoe")(), TicTacToe)
    assert isinstance(agent_factory("random")(), RandomAgent)
    assert agent_factory("minimax:3")().depth == 3
    assert agent_factory("minimax")().depth == MinimaxAgent().depth
    with pytest.raises(ValueError):
        agent_factory("minimax:deep")


def test_registry_loads_symbols_from_files(tmp_path) -> None:
    plugin = tmp_path / "plugin.py"
    plugin.write_text(
        "class Lazy:\n"
        "    name = 'lazy'\n"
        "    def select_move(self, state, player, legal_moves):\n"
        "        return legal_moves[-1]\n",
        encoding="utf-8",
    )
    agent = agent_factory(f"{plugin}:Lazy")()
    assert agent.name == "lazy"
    with pytest.raises(AttributeError):
        agent_factory(f"{plugin}:Missing")
    with pytest.raises(ValueError):
        game_factory("no-such-game")


def test_default_minimax_agent_answers_on_an_empty_2048_board() -> None:
    args = build_parser().parse_args(["play", "2048"])
    agent = agent_factory(args.second)()
    assert agent.depth == 2

    game = Game2048()
    move = agent.select_move(game, ROBOT, game.possible_moves())
    assert isinstance(move, Spawn)
