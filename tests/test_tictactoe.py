from __future__ import annotations

import pytest

from minimax_arena.games.tictactoe import (
    EmptyPlace,
    InvalidStatus,
    Place,
    PlaceAlreadyUsed,
    TicTacToe,
    WrongPlayer,
)
from minimax_arena.outcome import DRAW, Finished, Player, Running, Win


def test_game_flow_and_errors() -> None:
    game = TicTacToe()

    game.make_move(Player.FIRST, Place.CENTER)
    game.make_move(Player.SECOND, Place.UPPER_LEFT)
    game.make_move(Player.FIRST, Place.LOWER_LEFT)

    with pytest.raises(WrongPlayer) as wrong:
        game.make_move(Player.FIRST, Place.UPPER_RIGHT)
    assert wrong.value.player is Player.SECOND

    with pytest.raises(PlaceAlreadyUsed) as used:
        game.make_move(Player.SECOND, Place.UPPER_LEFT)
    assert used.value.place is Place.UPPER_LEFT
    assert used.value.player is Player.SECOND

    game.make_move(Player.SECOND, Place.UPPER)
    game.make_move(Player.FIRST, Place.UPPER_RIGHT)

    assert game.status() == Finished(Win(Player.FIRST))
    assert game.possible_moves() == []

    with pytest.raises(InvalidStatus):
        game.make_move(Player.SECOND, Place.LOWER_RIGHT)


def test_possible_moves_are_the_empty_cells() -> None:
    game = TicTacToe()
    assert game.possible_moves() == list(Place)

    game.apply_move(Place.CENTER)
    assert Place.CENTER not in game.possible_moves()
    assert len(game.possible_moves()) == 8
    assert game.status() == Running(Player.SECOND)


def test_apply_move_rejects_junk() -> None:
    game = TicTacToe()
    with pytest.raises(ValueError):
        game.apply_move(999)
    assert game == TicTacToe()


def test_full_grid_without_line_is_a_draw() -> None:
    game = TicTacToe.from_rows("XOX XOO OXX")
    assert game.status() == Finished(DRAW)


def test_revert_move() -> None:
    game = TicTacToe.from_rows("XX. OO. ...")
    game.apply_move(Place.UPPER_RIGHT)
    assert game.status() == Finished(Win(Player.FIRST))

    game.revert_move(Player.FIRST, Place.UPPER_RIGHT)
    assert game == TicTacToe.from_rows("XX. OO. ...")

    with pytest.raises(EmptyPlace):
        game.revert_move(Player.FIRST, Place.LOWER)
    with pytest.raises(WrongPlayer) as wrong:
        game.revert_move(Player.FIRST, Place.LEFT)
    assert wrong.value.player is Player.SECOND


def test_from_rows_validates_input() -> None:
    with pytest.raises(ValueError):
        TicTacToe.from_rows("XX")
    with pytest.raises(ValueError):
        TicTacToe.from_rows("XXX ... ...")
    with pytest.raises(ValueError):
        TicTacToe.from_rows("XQ. ... ...")


def test_render() -> None:
    game = TicTacToe.from_rows("X.. .O. ..X")
    assert game.render() == "X . .\n. O .\n. . X"
    assert TicTacToe.from_rows(game.render()) == game
