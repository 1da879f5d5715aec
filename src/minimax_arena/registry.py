"""
Name resolution for games and agents used by the CLI and tournaments.

Games: a built-in name (see GAMES) or "<path>:<symbol>".
Agents: "random", "human", "minimax" / "minimax:<depth>", or "<path>:<symbol>".
A loaded symbol that is callable is treated as a factory.
"""
from __future__ import annotations

import importlib.util
import sys
from pathlib import Path
from types import ModuleType
from typing import Any, Callable

from .agents import HumanAgent, MinimaxAgent, RandomAgent
from .games import Game2048, TicTacToe

GAMES: dict[str, Callable[[], Any]] = {
    "tictactoe": TicTacToe,
    "2048": Game2048,
}


def split_symbol_spec(spec: str) -> tuple[Path, str]:
    if ":" not in spec:
        raise ValueError(f"Expected '<path>:<symbol>', got: {spec!r}")
    path_str, symbol = spec.rsplit(":", 1)
    path = Path(path_str).expanduser().resolve()
    if not path.exists():
        raise FileNotFoundError(path)
    if not symbol:
        raise ValueError(f"Missing symbol in spec: {spec!r}")
    return path, symbol


def load_module_from_path(path: Path) -> ModuleType:
    module_name = f"minimax_arena_plugin_{abs(hash(str(path)))}"
    spec = importlib.util.spec_from_file_location(module_name, str(path))
    if spec is None or spec.loader is None:
        raise ImportError(f"Could not load module from: {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


def load_symbol(spec: str) -> Any:
    path, symbol = split_symbol_spec(spec)
    module = load_module_from_path(path)
    try:
        return getattr(module, symbol)
    except AttributeError as e:
        raise AttributeError(f"{path} has no symbol {symbol!r}") from e


def _as_factory(obj: Any) -> Callable[[], Any]:
    if callable(obj):
        return obj
    return lambda: obj


def game_factory(spec: str) -> Callable[[], Any]:
    if spec in GAMES:
        return GAMES[spec]
    return _as_factory(load_symbol(spec))


def agent_factory(spec: str) -> Callable[[], Any]:
    if spec == "random":
        return RandomAgent
    if spec == "human":
        return HumanAgent
    if spec == "minimax" or spec.startswith("minimax:"):
        depth_str = spec.removeprefix("minimax").removeprefix(":").strip()
        if not depth_str:
            return MinimaxAgent
        try:
            depth = int(depth_str)
        except ValueError:
            raise ValueError(f"minimax depth must be an integer, got: {spec!r}") from None
        return lambda: MinimaxAgent(depth=depth)
    return _as_factory(load_symbol(spec))
