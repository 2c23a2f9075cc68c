from typing import List, Tuple, Union

from .board import Board, GameLevel
from .exceptions import InvalidMoveError
from .state import Direction, GameState, Position


class MoveOutcome:
    """
    Result of resolving one turn.

    ``pursuer_path`` starts at the pursuer's initial position and ends at its
    final position. Consecutive duplicates are collapsed, so a pursuer that
    stands still yields a path of length 1.
    """

    def __init__(self, seeker_start: Position, seeker_stop: Position,
                 pursuer_path: Tuple[Position, ...]):
        self.seeker_start = seeker_start
        self.seeker_stop = seeker_stop
        self.pursuer_path = tuple(pursuer_path)

    @property
    def final_state(self) -> GameState:
        return GameState(self.seeker_stop, self.pursuer_path[-1])

    def __eq__(self, other):
        if not isinstance(other, MoveOutcome):
            return NotImplemented
        return (self.seeker_start == other.seeker_start and
                self.seeker_stop == other.seeker_stop and
                self.pursuer_path == other.pursuer_path)

    def __repr__(self):
        return (f"MoveOutcome(seeker {tuple(self.seeker_start)} -> {tuple(self.seeker_stop)}, "
                f"pursuer {[tuple(p) for p in self.pursuer_path]})")


class Game:
    """
    Transition rules of the pursuit puzzle.

    Every method is a pure function of the board and its arguments. The class
    keeps no history; see ``services.game_session.GameSession`` for undo/redo.
    """

    def __init__(self, board: Board):
        self.board = board

    @classmethod
    def from_level(cls, level: GameLevel) -> "Game":
        return cls(level.build_board())

    # Win and loss

    def is_win(self, state: GameState) -> bool:
        return state.seeker == self.board.exit

    def is_loss(self, state: GameState) -> bool:
        return state.seeker == state.pursuer

    def is_game_over(self, state: GameState) -> bool:
        return self.is_win(state) or self.is_loss(state)

    # Movement legality

    def can_move_north(self, position: Position) -> bool:
        if not self.board.contains(position):
            return False
        if position.y < self.board.height - 1:
            return not self.board.north_walls[position.x, position.y]
        return Position(position.x, position.y + 1) == self.board.exit

    def can_move_south(self, position: Position) -> bool:
        if not self.board.contains(position):
            return False
        if position.y > 0:
            return not self.board.north_walls[position.x, position.y - 1]
        return Position(position.x, position.y - 1) == self.board.exit

    def can_move_east(self, position: Position) -> bool:
        if not self.board.contains(position):
            return False
        if position.x < self.board.width - 1:
            return not self.board.east_walls[position.x, position.y]
        return Position(position.x + 1, position.y) == self.board.exit

    def can_move_west(self, position: Position) -> bool:
        if not self.board.contains(position):
            return False
        if position.x > 0:
            return not self.board.east_walls[position.x - 1, position.y]
        return Position(position.x - 1, position.y) == self.board.exit

    def can_move(self, position: Position, direction: Direction) -> bool:
        if direction == Direction.WAIT:
            return True
        if direction == Direction.NORTH:
            return self.can_move_north(position)
        if direction == Direction.SOUTH:
            return self.can_move_south(position)
        if direction == Direction.EAST:
            return self.can_move_east(position)
        return self.can_move_west(position)

    # Turn resolution

    def resolve_turn(self, state: GameState,
                     move: Union[Direction, Tuple[int, int]]) -> MoveOutcome:
        """
        Play one full turn: the seeker moves, then the pursuer reacts.

        ``move`` is a ``Direction`` or one of the five vectors (0, 0), (0, 1),
        (0, -1), (1, 0), (-1, 0). Raises InvalidMoveError if the game is
        already over, the vector is not a legal move shape, or a wall (or the
        closed boundary) blocks the way.
        """
        if self.is_win(state) or self.is_loss(state):
            raise InvalidMoveError(f"The game is already over in state {state}")

        direction = move if isinstance(move, Direction) else Direction.from_delta(*move)
        if not self.can_move(state.seeker, direction):
            raise InvalidMoveError(f"Seeker at {tuple(state.seeker)} cannot {direction.label.lower()}")

        return self._apply_move(state, direction)

    def _apply_move(self, state: GameState, direction: Direction) -> MoveOutcome:
        # Assumes the move was already validated
        seeker_stop = state.seeker.moved(direction)
        path = self.pursuer_path(seeker_stop, state.pursuer)
        return MoveOutcome(state.seeker, seeker_stop, path)

    def pursuer_path(self, seeker: Position, pursuer: Position) -> Tuple[Position, ...]:
        """The pursuer takes up to two steps, both aimed at the seeker's final position"""
        first_step = self.get_step(seeker, pursuer)
        second_step = self.get_step(seeker, first_step)

        path = [pursuer]
        if first_step != pursuer:
            path.append(first_step)
        if second_step != first_step:
            path.append(second_step)
        return tuple(path)

    def get_step(self, seeker: Position, pursuer: Position) -> Position:
        """One pursuer step. Horizontal moves win over vertical ones: east, west, north, south."""
        if seeker.x > pursuer.x and self.can_move_east(pursuer):
            return pursuer.moved(Direction.EAST)
        elif seeker.x < pursuer.x and self.can_move_west(pursuer):
            return pursuer.moved(Direction.WEST)
        elif seeker.y > pursuer.y and self.can_move_north(pursuer):
            return pursuer.moved(Direction.NORTH)
        elif seeker.y < pursuer.y and self.can_move_south(pursuer):
            return pursuer.moved(Direction.SOUTH)
        else:
            return pursuer

    # Child enumeration

    def get_moves(self, state: GameState) -> List[Tuple[Direction, GameState]]:
        """
        Legal moves from a non-terminal state with the state each one leads to.

        Moves are tried in the order wait, north, south, east, west. A result
        identical to ``state`` itself is dropped.
        """
        moves = []
        for direction in Direction:
            if not self.can_move(state.seeker, direction):
                continue
            child = self._apply_move(state, direction).final_state
            if child == state:
                continue
            moves.append((direction, child))
        return moves

    def get_children(self, state: GameState) -> List[GameState]:
        return [child for _, child in self.get_moves(state)]
