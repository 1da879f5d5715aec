"""
2048 played as a two-player game.

The human (Player.FIRST) slides the tiles, the robot (Player.SECOND) drops a 2
or a 4 on an empty cell. The robot moves first and wins once the human has no
slide left. Coordinates put (0, 0) at the lower left corner, y grows upwards.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..errors import MoveError
from ..outcome import Finished, Player, Running, Status, Win

WIDTH = 4
HEIGHT = 4
SIZE = WIDTH * HEIGHT
SPAWN_VALUES = (2, 4)

HUMAN = Player.FIRST
ROBOT = Player.SECOND


class Direction(Enum):
    UP = (0, 1)
    DOWN = (0, -1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    def opposite(self) -> Direction:
        dx, dy = self.value
        return Direction((-dx, -dy))

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, slots=True)
class Place:
    x: int
    y: int

    def __post_init__(self) -> None:
        if not (0 <= self.x < WIDTH and 0 <= self.y < HEIGHT):
            raise ValueError(f"place out of the grid: ({self.x}, {self.y})")

    @classmethod
    def from_index(cls, index: int) -> Place:
        return cls(index % WIDTH, index // WIDTH)

    @property
    def index(self) -> int:
        return self.y * WIDTH + self.x

    def step(self, direction: Direction) -> Place | None:
        dx, dy = direction.value
        x, y = self.x + dx, self.y + dy
        if 0 <= x < WIDTH and 0 <= y < HEIGHT:
            return Place(x, y)
        return None

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


@dataclass(frozen=True, slots=True)
class Slide:
    direction: Direction

    @property
    def player(self) -> Player:
        return HUMAN

    def __str__(self) -> str:
        return f"slide {self.direction}"


@dataclass(frozen=True, slots=True)
class Spawn:
    place: Place
    value: int

    @property
    def player(self) -> Player:
        return ROBOT

    def __str__(self) -> str:
        return f"spawn {self.value} at {self.place}"


Move = Slide | Spawn


class InvalidStatus(MoveError):
    def __init__(self, status: Status) -> None:
        super().__init__(f"game is not running: {status}")
        self.status = status


class WrongPlayer(MoveError):
    def __init__(self, player: Player) -> None:
        super().__init__(f"expected player {player.value}")
        self.player = player


class PlaceAlreadyFilled(MoveError):
    def __init__(self, place: Place) -> None:
        super().__init__(f"{place} is already filled")
        self.place = place


class ValueNotAllowed(MoveError):
    def __init__(self, value: int) -> None:
        super().__init__(f"only 2 or 4 may be spawned, got: {value!r}")
        self.value = value


class DirectionBlocked(MoveError):
    def __init__(self, direction: Direction) -> None:
        super().__init__(f"nothing moves {direction}")
        self.direction = direction


class Game2048:
    name = "2048"

    def __init__(self) -> None:
        self._status: Status = Running(ROBOT)
        self.grid: list[int] = [0] * SIZE

    @classmethod
    def from_rows(cls, rows: list[list[int]], to_move: Player = HUMAN) -> Game2048:
        """Rows are listed top to bottom, as they are rendered."""
        if len(rows) != HEIGHT or any(len(r) != WIDTH for r in rows):
            raise ValueError(f"expected {HEIGHT} rows of {WIDTH} values")
        game = cls()
        for y, row in enumerate(reversed(rows)):
            for x, v in enumerate(row):
                v = int(v)
                if v != 0 and (v < 2 or v & (v - 1)):
                    raise ValueError(f"tiles must be 0 or a power of two, got: {v!r}")
                game.grid[Place(x, y).index] = v
        game._status = Running(to_move)
        locked = not game._slides()
        if to_move is ROBOT and 0 not in game.grid:
            # a slide always frees a cell, so only a locked grid can be full here
            if not locked:
                raise ValueError("robot to move on a full grid the human can still slide")
            game._status = Finished(Win(ROBOT))
        elif to_move is HUMAN and locked:
            game._status = Finished(Win(ROBOT))
        return game

    def __getitem__(self, place: Place) -> int:
        return self.grid[place.index]

    def __setitem__(self, place: Place, value: int) -> None:
        self.grid[place.index] = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Game2048):
            return NotImplemented
        return self._status == other._status and self.grid == other.grid

    def status(self) -> Status:
        return self._status

    def possible_moves(self) -> list[Move]:
        if isinstance(self._status, Finished):
            return []
        if self._status.player is HUMAN:
            return [Slide(d) for d in self._slides()]
        moves: list[Move] = []
        for i, v in enumerate(self.grid):
            if v == 0:
                moves.extend(Spawn(Place.from_index(i), value) for value in SPAWN_VALUES)
        return moves

    def apply_move(self, move: Move) -> None:
        if isinstance(self._status, Finished):
            raise InvalidStatus(self._status)
        if not isinstance(move, (Slide, Spawn)):
            raise ValueError(f"move must be Slide or Spawn, got: {move!r}")
        if self._status.player is not move.player:
            raise WrongPlayer(self._status.player)

        if isinstance(move, Slide):
            self._slide(move.direction)
        else:
            self._spawn(move.place, move.value)

    def heuristic_score(self) -> int:
        return self.grid.count(0)

    def clone(self) -> Game2048:
        game = Game2048.__new__(Game2048)
        game._status = self._status
        game.grid = list(self.grid)
        return game

    def _slides(self) -> list[Direction]:
        return [d for d in Direction if self._can_slide(d)]

    def _can_slide(self, direction: Direction) -> bool:
        for i, v in enumerate(self.grid):
            if v == 0:
                continue
            adjacent = Place.from_index(i).step(direction)
            if adjacent is not None and self[adjacent] in (0, v):
                return True
        return False

    def _line_heads(self, direction: Direction) -> list[Place]:
        if direction is Direction.UP:
            return [Place(x, HEIGHT - 1) for x in range(WIDTH)]
        if direction is Direction.DOWN:
            return [Place(x, 0) for x in range(WIDTH)]
        if direction is Direction.LEFT:
            return [Place(0, y) for y in range(HEIGHT)]
        return [Place(WIDTH - 1, y) for y in range(HEIGHT)]

    def _slide(self, direction: Direction) -> None:
        back = direction.opposite()
        before = list(self.grid)

        for head in self._line_heads(direction):
            line: list[Place] = []
            p: Place | None = head
            while p is not None:
                line.append(p)
                p = p.step(back)

            tiles = [self[q] for q in line if self[q] != 0]
            packed: list[int] = []
            merged = False
            for v in tiles:
                if packed and not merged and packed[-1] == v:
                    packed[-1] = 2 * v
                    merged = True
                else:
                    packed.append(v)
                    merged = False
            packed.extend([0] * (len(line) - len(packed)))
            for q, v in zip(line, packed):
                self[q] = v

        if self.grid == before:
            raise DirectionBlocked(direction)
        self._status = Running(ROBOT)

    def _spawn(self, place: Place, value: int) -> None:
        if self[place] > 0:
            raise PlaceAlreadyFilled(place)
        if value not in SPAWN_VALUES:
            raise ValueNotAllowed(value)

        self[place] = value
        self._status = Running(HUMAN)
        if not self._slides():
            self._status = Finished(Win(ROBOT))

    def render(self) -> str:
        digits = len(str(max(self.grid)))
        cell = digits + 2
        border = "+" + "+".join("-" * cell for _ in range(WIDTH)) + "+"
        spacer = "|" + "+".join(" " * cell for _ in range(WIDTH)) + "|"
        out = [border]
        for y in reversed(range(HEIGHT)):
            values = [self[Place(x, y)] for x in range(WIDTH)]
            out.append("|" + " ".join((str(v) if v else "").center(cell) for v in values) + "|")
            if y > 0:
                out.append(spacer)
        out.append(border)
        return "\n".join(out)

    def __repr__(self) -> str:
        return f"Game2048(grid={self.grid!r}, status={self._status!r})"
