from __future__ import annotations


class MoveError(ValueError):
    """Base class for a game refusing to apply a move."""


class SearchError(Exception):
    """A search invocation failed; nothing is retried."""


class GameAlreadyFinished(SearchError):
    def __init__(self) -> None:
        super().__init__("cannot search from a finished game")


class MoveFailed(SearchError):
    def __init__(self, move: object, inner: ValueError) -> None:
        super().__init__(f"applying move {move} failed: {inner}")
        self.move = move
        self.inner = inner


class NoPossibleMoves(SearchError):
    def __init__(self) -> None:
        super().__init__("running game offers no possible moves")
