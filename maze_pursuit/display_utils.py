"""
Console output for solver runs and solution hints.
Everything is plain print() gated by a verbosity level.
"""
from typing import List, Optional

from .core.state import Direction, GameState


class VerbosityLevel:
    """Verbosity level constants"""
    SILENT = 0     # Nothing but errors
    BASIC = 1      # Solve summary
    DETAILED = 2   # + Classification of the start state and solution steps
    DEBUG = 3      # + Every expanded state


class SolverDisplay:
    """Handles solver output formatting with configurable verbosity"""

    def __init__(self, verbosity: int = VerbosityLevel.SILENT):
        self.verbosity = verbosity

    def print_separator(self, char='=', length=60):
        if self.verbosity >= VerbosityLevel.BASIC:
            print(char * length)

    def print_title(self, title: str):
        if self.verbosity >= VerbosityLevel.BASIC:
            self.print_separator()
            print(f"  {title.upper()}")
            self.print_separator()

    def print_expansion(self, state: GameState, children: List[GameState]):
        if self.verbosity >= VerbosityLevel.DEBUG:
            print(f"   expand {state} -> {len(children)} children")

    def print_search_summary(self, states_explored: int, elapsed: float):
        if self.verbosity >= VerbosityLevel.BASIC:
            print(f"🔍 Search done: {states_explored} states explored in {elapsed:.2f}s")

    def print_state_summary(self, state: GameState, win_distance: Optional[int], is_loss: bool,
                            move: Optional[Direction]):
        if self.verbosity < VerbosityLevel.DETAILED:
            return
        print(f"   State {state}")
        if win_distance == 0:
            print("   ✓ Already on the exit")
        elif win_distance is not None:
            print(f"   ✓ Forced win in {win_distance} turns, next move: {move.label}")
        elif is_loss:
            print("   ✗ Lost whatever the seeker does")
        else:
            print("   ~ No forced win, but no forced loss either")

    def print_solution(self, directions: List[Direction]):
        if self.verbosity >= VerbosityLevel.DETAILED:
            steps = ", ".join(direction.label for direction in directions)
            print(f"   Solution ({len(directions)} turns): {steps}")
