from abc import ABC, abstractmethod
from typing import Optional, Union
from ..core.game import Game, GameState
from ..core.state import Direction


class Unknown:
    """Win distance not known: the state is not (yet) known to be winnable"""

    __slots__ = ()

    is_known = False

    def improves_on(self, other: "WinDistance") -> bool:
        return False

    def __eq__(self, other):
        return isinstance(other, Unknown)

    def __hash__(self):
        return hash(Unknown)

    def __repr__(self):
        return "Unknown()"


class Known:
    """Minimum number of turns to a forced win"""

    __slots__ = ('distance',)

    is_known = True

    def __init__(self, distance: int):
        if distance < 0:
            raise ValueError(f"Win distance cannot be negative, got {distance}")
        self.distance = distance

    def improves_on(self, other: "WinDistance") -> bool:
        return not other.is_known or self.distance < other.distance

    def __eq__(self, other):
        return isinstance(other, Known) and other.distance == self.distance

    def __hash__(self):
        return hash((Known, self.distance))

    def __repr__(self):
        return f"Known({self.distance})"


WinDistance = Union[Unknown, Known]
UNKNOWN = Unknown()


def as_optional(win_distance: WinDistance) -> Optional[int]:
    """Unwrap a WinDistance for display and tabular output"""
    return win_distance.distance if win_distance.is_known else None


class SolverResult:
    """Result of solver computation"""

    def __init__(self, seeker_can_win: bool, win_distance: WinDistance = UNKNOWN,
                 first_move: Optional[Direction] = None, is_loss: bool = False,
                 states_explored: int = 0, winning_states: int = 0,
                 loss_states: int = 0):
        self.seeker_can_win = seeker_can_win
        self.win_distance = win_distance
        self.first_move = first_move
        self.is_loss = is_loss
        self.states_explored = states_explored
        self.winning_states = winning_states
        self.loss_states = loss_states

    def __repr__(self):
        return (f"SolverResult(seeker_can_win={self.seeker_can_win}, "
                f"win_distance={self.win_distance!r}, first_move={self.first_move}, "
                f"is_loss={self.is_loss}, states_explored={self.states_explored})")


class BaseSolver(ABC):
    """Abstract base class for game solvers"""

    def __init__(self, game: Game, start_state: GameState):
        self.game = game
        self.start_state = start_state

    @abstractmethod
    def solve(self) -> SolverResult:
        """Solve the game from the start state"""
        pass

    @abstractmethod
    def can_seeker_win(self) -> bool:
        """Determine if the seeker can force a win from the start state"""
        pass
