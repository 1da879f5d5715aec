from __future__ import annotations

import json
from pathlib import Path

from minimax_arena.cli import main


def test_list_games(capsys) -> None:
    assert main(["list-games"]) == 0
    assert capsys.readouterr().out.split() == ["2048", "tictactoe"]


def test_analyze_reports_every_best_move(capsys) -> None:
    # X: upper_left, upper_right, lower_left; O: center, lower, right. X to move can win twice over.
    rc = main(["analyze", "tictactoe", "--depth", "2", "--moves", "0,3,1,4,3,2"])
    out = capsys.readouterr().out
    assert rc == 0
    assert "outcome: win(first) in 0" in out
    assert out.splitlines()[-2:] == ["  upper", "  left"]


def test_analyze_finished_game_fails(capsys) -> None:
    rc = main(["analyze", "tictactoe", "--depth", "1", "--moves", "0,2,0,1,0"])
    captured = capsys.readouterr()
    assert rc == 1
    assert "finished" in captured.err


def test_play_writes_a_log(tmp_path: Path, capsys) -> None:
    log = tmp_path / "m.json"
    rc = main(["play", "tictactoe", "--first", "minimax:1", "--second", "random", "--log", str(log)])
    assert rc == 0
    out = capsys.readouterr().out
    assert "game: tictactoe" in out
    assert json.loads(log.read_text(encoding="utf-8"))["game"] == "tictactoe"
