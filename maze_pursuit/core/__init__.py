from .exceptions import InvalidMoveError, MalformedLevelError
from .state import Direction, Position, GameState
from .board import Board, GameLevel, Wall, WallSide
from .game import Game, MoveOutcome
