"""
Interactive play on top of the stateless transition rules.
Keeps the list of visited states so moves can be undone and redone.
"""
from typing import List, Tuple, Union

from ..core.exceptions import InvalidMoveError
from ..core.game import Game, MoveOutcome
from ..core.state import Direction, GameState


class GameSession:
    """Game history with undo/redo. A session cannot switch levels; build a new one instead."""

    def __init__(self, game: Game, start_state: GameState):
        self.game = game
        self.game_history: List[GameState] = [start_state]
        self._current_index = 0

    @property
    def current_state(self) -> GameState:
        return self.game_history[self._current_index]

    @property
    def turn_count(self) -> int:
        return self._current_index

    def is_win(self) -> bool:
        return self.game.is_win(self.current_state)

    def is_loss(self) -> bool:
        return self.game.is_loss(self.current_state)

    def is_game_over(self) -> bool:
        return self.game.is_game_over(self.current_state)

    def make_move(self, move: Union[Direction, Tuple[int, int]]) -> MoveOutcome:
        """Play a turn from the current state. Any redo history is discarded."""
        outcome = self.game.resolve_turn(self.current_state, move)

        self._current_index += 1
        del self.game_history[self._current_index:]
        self.game_history.append(outcome.final_state)
        return outcome

    def can_undo(self) -> bool:
        return self._current_index > 0

    def can_redo(self) -> bool:
        return self._current_index < len(self.game_history) - 1

    def undo(self) -> GameState:
        if not self.can_undo():
            raise InvalidMoveError("Nothing to undo")
        self._current_index -= 1
        return self.current_state

    def redo(self) -> GameState:
        if not self.can_redo():
            raise InvalidMoveError("Nothing to redo")
        self._current_index += 1
        return self.current_state

    def load_state(self, state: GameState):
        """Jump to a state, discarding all history"""
        self.game_history = [state]
        self._current_index = 0

    def reset(self):
        """Go back to the first state of the history"""
        self.load_state(self.game_history[0])

    def get_state_representation(self) -> dict:
        state = self.current_state
        return {
            'seeker_position': tuple(state.seeker),
            'pursuer_position': tuple(state.pursuer),
            'turn_count': self.turn_count,
            'game_over': self.is_game_over(),
            'winner': 'seeker' if self.is_win() else ('pursuer' if self.is_loss() else None),
        }
