from enum import Enum
from typing import Dict, List, NamedTuple, Tuple
import networkx as nx
import numpy as np

from .exceptions import MalformedLevelError
from .state import GameState, Position


class WallSide(Enum):
    NORTH = 0
    EAST = 1


class Wall(NamedTuple):
    """
    A wall on one side of a cell.

    Only north and east sides exist. A south wall is the north wall of the
    cell below, a west wall is the east wall of the cell to the left.
    """
    x: int
    y: int
    side: int


class GameLevel:
    """Level configuration: grid size, walls, exit and both start positions"""

    def __init__(self, width: int, height: int,
                 seeker_start: Tuple[int, int], pursuer_start: Tuple[int, int],
                 exit_position: Tuple[int, int], walls: List[Wall] = None,
                 name: str = "", comment: str = ""):
        self.name = name
        self.comment = comment
        self.width = width
        self.height = height
        self.seeker_start = Position(*seeker_start)
        self.pursuer_start = Position(*pursuer_start)
        self.exit_position = Position(*exit_position)
        self.walls = [Wall(*wall) for wall in (walls or [])]

    @classmethod
    def from_dict(cls, data: Dict) -> "GameLevel":
        """
        Build a level from a plain dictionary.

        Accepts either snake_case keys (as written by ``to_dict``) or the
        capitalised keys of the legacy level format (``Width``,
        ``TheseusX``, ``MinotaurY``, ``ExitX``, ``Walls`` with ``X``/``Y``/``Side``).
        """
        try:
            if 'Width' in data:
                walls = [Wall(w['X'], w['Y'], w['Side']) for w in data.get('Walls', [])]
                return cls(
                    width=data['Width'],
                    height=data['Height'],
                    seeker_start=(data['TheseusX'], data['TheseusY']),
                    pursuer_start=(data['MinotaurX'], data['MinotaurY']),
                    exit_position=(data['ExitX'], data['ExitY']),
                    walls=walls,
                    name=data.get('Name', ""),
                    comment=data.get('Comment', ""),
                )

            walls = [Wall(w['x'], w['y'], w['side']) for w in data.get('walls', [])]
            return cls(
                width=data['width'],
                height=data['height'],
                seeker_start=tuple(data['seeker']),
                pursuer_start=tuple(data['pursuer']),
                exit_position=tuple(data['exit']),
                walls=walls,
                name=data.get('name', ""),
                comment=data.get('comment', ""),
            )
        except (KeyError, TypeError) as e:
            raise MalformedLevelError(f"Level description is missing or has a bad field: {e}") from e

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'comment': self.comment,
            'width': self.width,
            'height': self.height,
            'seeker': list(self.seeker_start),
            'pursuer': list(self.pursuer_start),
            'exit': list(self.exit_position),
            'walls': [{'x': w.x, 'y': w.y, 'side': w.side} for w in self.walls],
        }

    def build_board(self) -> "Board":
        return Board(self.width, self.height, self.walls, self.exit_position)

    def initial_state(self) -> GameState:
        """Start state of the level. Both agents must start inside the grid."""
        for label, position in (('seeker', self.seeker_start), ('pursuer', self.pursuer_start)):
            if not (0 <= position.x < self.width and 0 <= position.y < self.height):
                raise MalformedLevelError(f"The {label} starts outside the grid at {tuple(position)}")
        return GameState(self.seeker_start, self.pursuer_start)


class Board:
    """
    Static description of one level's grid.

    Wall flags are stored as two read-only boolean matrices indexed
    ``[x, y]``. The exit is either a cell of the grid or the cell just
    outside one edge, which represents an opening in the boundary wall.
    """

    def __init__(self, width: int, height: int, walls: List[Wall],
                 exit_position: Tuple[int, int]):
        if width <= 0 or height <= 0:
            raise MalformedLevelError(f"Board dimensions must be positive, got {width}x{height}")

        exit_position = Position(*exit_position)
        _check_exit(width, height, exit_position)

        north_walls = np.zeros((width, height), dtype=bool)
        east_walls = np.zeros((width, height), dtype=bool)

        for wall in walls:
            x, y, side = wall
            if not (0 <= x < width and 0 <= y < height):
                raise MalformedLevelError(f"Wall at ({x}, {y}) lies outside the {width}x{height} grid")
            if side == WallSide.NORTH.value:
                north_walls[x, y] = True
            elif side == WallSide.EAST.value:
                east_walls[x, y] = True
            else:
                raise MalformedLevelError(f"Wall at ({x}, {y}) has side {side!r}; only 0 (north) and 1 (east) exist")

        north_walls.flags.writeable = False
        east_walls.flags.writeable = False

        self.width = width
        self.height = height
        self.north_walls = north_walls
        self.east_walls = east_walls
        self.exit = exit_position

    @classmethod
    def from_level(cls, level: GameLevel) -> "Board":
        return level.build_board()

    def contains(self, position: Position) -> bool:
        return 0 <= position.x < self.width and 0 <= position.y < self.height

    def has_north_wall(self, x: int, y: int) -> bool:
        return bool(self.north_walls[x, y])

    def has_east_wall(self, x: int, y: int) -> bool:
        return bool(self.east_walls[x, y])

    def exit_is_outside(self) -> bool:
        return not self.contains(self.exit)

    def to_graph(self) -> nx.Graph:
        """Graph of cells joined by open edges, plus the exit when it lies outside"""
        graph = nx.Graph()
        for x in range(self.width):
            for y in range(self.height):
                cell = Position(x, y)
                graph.add_node(cell)
                if y < self.height - 1 and not self.north_walls[x, y]:
                    graph.add_edge(cell, Position(x, y + 1))
                if x < self.width - 1 and not self.east_walls[x, y]:
                    graph.add_edge(cell, Position(x + 1, y))

        if self.exit_is_outside():
            graph.add_edge(self.exit, self._cell_beside_exit())
        return graph

    def _cell_beside_exit(self) -> Position:
        x = min(max(self.exit.x, 0), self.width - 1)
        y = min(max(self.exit.y, 0), self.height - 1)
        return Position(x, y)

    def __repr__(self):
        return (f"Board({self.width}x{self.height}, exit={tuple(self.exit)}, "
                f"walls={int(self.north_walls.sum() + self.east_walls.sum())})")


def _check_exit(width: int, height: int, exit_position: Position):
    x_outside = exit_position.x in (-1, width)
    y_outside = exit_position.y in (-1, height)
    x_inside = 0 <= exit_position.x < width
    y_inside = 0 <= exit_position.y < height

    if (x_inside or x_outside) and (y_inside or y_outside) and not (x_outside and y_outside):
        return
    raise MalformedLevelError(
        f"Exit {tuple(exit_position)} must be a cell of the {width}x{height} grid "
        f"or lie one step outside a single edge"
    )
