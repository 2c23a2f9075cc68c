"""
Solution service: runs the solver for a level and turns its answers into
hints, full move sequences and tables for analysis.
"""
from typing import List, Optional
import networkx as nx
import pandas as pd

from ..core.board import GameLevel
from ..core.game import Game
from ..core.state import Direction, GameState
from ..display_utils import SolverDisplay, VerbosityLevel
from ..solver.base_solver import SolverResult, as_optional
from ..solver.bfs_solver import BFSSolver


class SolutionService:
    """Centralized service for solving one level and reading the solution"""

    def __init__(self, level: GameLevel, verbosity: int = VerbosityLevel.SILENT,
                 show_progress: bool = False):
        self.level = level
        self.game = Game.from_level(level)
        self.start_state = level.initial_state()
        self.display = SolverDisplay(verbosity)
        self.solver = BFSSolver(self.game, self.start_state,
                                verbosity=verbosity, show_progress=show_progress)
        self.result: Optional[SolverResult] = None

    @property
    def completed(self) -> bool:
        return self.solver.completed

    def solve(self) -> SolverResult:
        self.result = self.solver.solve()
        return self.result

    def _ensure_solved(self):
        if not self.solver.completed:
            self.solve()

    def solution_path(self, state: GameState = None) -> List[Direction]:
        """
        Complete list of moves from ``state`` (default: the start) to the exit.

        Returns an empty list when the state is already won or when no
        forced win exists.
        """
        self._ensure_solved()
        if state is None:
            state = self.start_state
        directions = []

        while not self.game.is_game_over(state):
            move = self.solver.winning_move(state)
            if move is None:
                return []
            directions.append(move)
            state = self.game.resolve_turn(state, move).final_state

        return directions

    def describe_solution(self, state: GameState = None, step_count: int = 3) -> str:
        """Hint text for the player, showing at most ``step_count`` upcoming moves"""
        self._ensure_solved()
        if state is None:
            state = self.start_state

        if self.game.is_win(state):
            return "You've won."
        if self.game.is_loss(state):
            return "You've lost."

        move = self.solver.winning_move(state)
        if move is None:
            return "There is no escape."

        lines = [f"Winning moves up to {step_count} steps:", move.label]
        state = self.game.resolve_turn(state, move).final_state
        for _ in range(1, step_count):
            if self.game.is_win(state):
                lines.append("Win!")
                break
            move = self.solver.winning_move(state)
            lines.append(move.label)
            state = self.game.resolve_turn(state, move).final_state

        return "\n".join(lines)

    def exit_reachable(self) -> bool:
        """Whether any open path joins the seeker's start to the exit, ignoring the pursuer"""
        graph = self.game.board.to_graph()
        return nx.has_path(graph, self.start_state.seeker, self.game.board.exit)

    def state_table(self) -> pd.DataFrame:
        """One row per explored state with its classification"""
        self._ensure_solved()
        rows = []
        for state, node in self.solver.iter_nodes():
            move = None
            if node.win_distance.is_known and not self.game.is_win(state):
                move = self.solver.winning_move(state).name
            rows.append({
                'seeker_x': state.seeker.x,
                'seeker_y': state.seeker.y,
                'pursuer_x': state.pursuer.x,
                'pursuer_y': state.pursuer.y,
                'win_distance': as_optional(node.win_distance),
                'is_loss': node.is_loss,
                'num_children': len(node.children),
                'num_parents': len(node.parents),
                'winning_move': move,
            })

        table = pd.DataFrame(rows)
        table['win_distance'] = table['win_distance'].astype('Int64')
        return table
