from __future__ import annotations

from enum import IntEnum

from ..errors import MoveError
from ..outcome import DRAW, Finished, Player, Running, Status, Win


class Place(IntEnum):
    UPPER_LEFT = 0
    UPPER = 1
    UPPER_RIGHT = 2
    LEFT = 3
    CENTER = 4
    RIGHT = 5
    LOWER_LEFT = 6
    LOWER = 7
    LOWER_RIGHT = 8

    def __str__(self) -> str:
        return self.name.lower()

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)


LINES = [
    (Place.UPPER_LEFT, Place.UPPER, Place.UPPER_RIGHT),
    (Place.LEFT, Place.CENTER, Place.RIGHT),
    (Place.LOWER_LEFT, Place.LOWER, Place.LOWER_RIGHT),
    (Place.UPPER_LEFT, Place.LEFT, Place.LOWER_LEFT),
    (Place.UPPER, Place.CENTER, Place.LOWER),
    (Place.UPPER_RIGHT, Place.RIGHT, Place.LOWER_RIGHT),
    (Place.UPPER_LEFT, Place.CENTER, Place.LOWER_RIGHT),
    (Place.UPPER_RIGHT, Place.CENTER, Place.LOWER_LEFT),
]

GLYPHS = {None: ".", Player.FIRST: "X", Player.SECOND: "O"}


class InvalidStatus(MoveError):
    def __init__(self, status: Status) -> None:
        super().__init__(f"game is not running: {status}")
        self.status = status


class WrongPlayer(MoveError):
    def __init__(self, player: Player) -> None:
        super().__init__(f"expected player {player.value}")
        self.player = player


class PlaceAlreadyUsed(MoveError):
    def __init__(self, place: Place, player: Player) -> None:
        super().__init__(f"{place} is already taken by {player.value}")
        self.place = place
        self.player = player


class EmptyPlace(MoveError):
    def __init__(self, place: Place) -> None:
        super().__init__(f"{place} is empty")
        self.place = place


class TicTacToe:
    """Three in a row on a 3x3 grid. Player.FIRST plays X and opens."""

    name = "tictactoe"

    def __init__(self) -> None:
        self._status: Status = Running(Player.FIRST)
        self.grid: list[Player | None] = [None] * 9

    @classmethod
    def from_rows(cls, rows: str) -> TicTacToe:
        """
        Build a position from a picture such as "XO. .X. ..O".

        Whitespace is ignored; the player to move is derived from the counts.
        """
        cells = [c for c in rows if not c.isspace()]
        if len(cells) != 9:
            raise ValueError(f"expected 9 cells, got: {rows!r}")
        lookup = {v: k for k, v in GLYPHS.items()}
        game = cls()
        try:
            game.grid = [lookup[c.upper()] for c in cells]
        except KeyError as e:
            raise ValueError(f"unknown cell {e.args[0]!r} in {rows!r}") from None
        x = game.grid.count(Player.FIRST)
        o = game.grid.count(Player.SECOND)
        if x - o not in (0, 1):
            raise ValueError(f"impossible piece counts in {rows!r}")
        game._status = game._evaluate(Player.FIRST if x == o else Player.SECOND)
        return game

    def __getitem__(self, place: Place) -> Player | None:
        return self.grid[place]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TicTacToe):
            return NotImplemented
        return self._status == other._status and self.grid == other.grid

    def status(self) -> Status:
        return self._status

    def possible_moves(self) -> list[Place]:
        if isinstance(self._status, Finished):
            return []
        return [p for p in Place if self.grid[p] is None]

    def apply_move(self, move: Place) -> None:
        if isinstance(self._status, Finished):
            raise InvalidStatus(self._status)
        self.make_move(self._status.player, Place(move))

    def make_move(self, player: Player, place: Place) -> None:
        if isinstance(self._status, Finished):
            raise InvalidStatus(self._status)
        occupant = self.grid[place]
        if occupant is not None:
            raise PlaceAlreadyUsed(place, occupant)
        if self._status.player is not player:
            raise WrongPlayer(self._status.player)

        self.grid[place] = player
        self._status = self._evaluate(player.other())

    def revert_move(self, player: Player, place: Place) -> None:
        occupant = self.grid[place]
        if occupant is None:
            raise EmptyPlace(place)
        if occupant is not player:
            raise WrongPlayer(occupant)

        self.grid[place] = None
        self._status = self._evaluate(player)

    def clone(self) -> TicTacToe:
        game = TicTacToe.__new__(TicTacToe)
        game._status = self._status
        game.grid = list(self.grid)
        return game

    def _winner(self) -> Player | None:
        for a, b, c in LINES:
            v = self.grid[a]
            if v is not None and v == self.grid[b] and v == self.grid[c]:
                return v
        return None

    def _evaluate(self, to_move: Player) -> Status:
        w = self._winner()
        if w is not None:
            return Finished(Win(w))
        if all(v is not None for v in self.grid):
            return Finished(DRAW)
        return Running(to_move)

    def render(self) -> str:
        rows = []
        for r in range(3):
            rows.append(" ".join(GLYPHS[self.grid[3 * r + c]] for c in range(3)))
        return "\n".join(rows)

    def __repr__(self) -> str:
        return f"TicTacToe({' '.join(self.render().splitlines())!r})"
