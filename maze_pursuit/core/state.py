from enum import Enum
from typing import NamedTuple, Tuple

from .exceptions import InvalidMoveError


class Direction(Enum):
    """The five seeker moves. Member order is the child enumeration order."""
    WAIT = (0, 0)
    NORTH = (0, 1)
    SOUTH = (0, -1)
    EAST = (1, 0)
    WEST = (-1, 0)

    @classmethod
    def from_delta(cls, dx: int, dy: int) -> "Direction":
        try:
            return cls((dx, dy))
        except ValueError:
            raise InvalidMoveError(f"({dx}, {dy}) is not a unit move or wait") from None

    @property
    def label(self) -> str:
        return _DIRECTION_LABELS[self]


_DIRECTION_LABELS = {
    Direction.WAIT: "Wait",
    Direction.NORTH: "Move up",
    Direction.SOUTH: "Move down",
    Direction.EAST: "Move right",
    Direction.WEST: "Move left",
}


class Position(NamedTuple):
    """A cell coordinate. North is +y, east is +x."""
    x: int
    y: int

    def moved(self, direction: Direction) -> "Position":
        dx, dy = direction.value
        return Position(self.x + dx, self.y + dy)

    def delta_to(self, other: "Position") -> Tuple[int, int]:
        return (other.x - self.x, other.y - self.y)


class GameState(NamedTuple):
    """Positions of both agents. Used by value as the solver's memo key."""
    seeker: Position
    pursuer: Position

    @classmethod
    def of(cls, seeker: Tuple[int, int], pursuer: Tuple[int, int]) -> "GameState":
        return cls(Position(*seeker), Position(*pursuer))

    def __str__(self):
        return f"seeker={tuple(self.seeker)} pursuer={tuple(self.pursuer)}"
