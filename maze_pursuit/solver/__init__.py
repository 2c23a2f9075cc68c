from .base_solver import BaseSolver, SolverResult, WinDistance, Known, Unknown, UNKNOWN
from .bfs_solver import BFSSolver, SearchNode, InternalConsistencyError, SolverNotCompletedError
