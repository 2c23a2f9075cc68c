"""
Maze Pursuit Solver Package

Transition rules and an exhaustive solver for a grid pursuit puzzle: the
seeker heads for the exit while the pursuer chases it two steps per turn.
"""

from .core import (
    Board, GameLevel, Wall, WallSide,
    Game, GameState, MoveOutcome, Position, Direction,
    InvalidMoveError, MalformedLevelError
)

from .solver import (
    BaseSolver, SolverResult, BFSSolver, SearchNode,
    WinDistance, Known, Unknown, UNKNOWN,
    InternalConsistencyError, SolverNotCompletedError
)

from .services import GameSession, SolutionService

__version__ = "1.0.0"
