from .game_session import GameSession
from .solution_service import SolutionService
