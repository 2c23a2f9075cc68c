"""Example level configurations and demonstrations"""

from typing import Callable, Dict

from ..core.board import GameLevel, Wall, WallSide
from ..display_utils import SolverDisplay, VerbosityLevel
from ..services.solution_service import SolutionService

NORTH = WallSide.NORTH.value
EAST = WallSide.EAST.value


def create_walled_corridor_level() -> GameLevel:
    """3x3 level where the only escape is a detour the pursuer cannot follow"""
    return GameLevel(
        width=3, height=3,
        seeker_start=(1, 2), pursuer_start=(1, 0),
        exit_position=(3, 1),
        walls=[Wall(1, 0, NORTH), Wall(1, 1, NORTH), Wall(1, 1, EAST)],
        name="Walled corridor",
        comment="Going east first gets the seeker caught; west, then around the walls, escapes.",
    )


def create_adjacent_capture_level() -> GameLevel:
    """Pursuer right next to the seeker in a one-cell-wide shaft"""
    return GameLevel(
        width=1, height=2,
        seeker_start=(0, 1), pursuer_start=(0, 0),
        exit_position=(0, -1),
        name="Adjacent capture",
    )


def create_dead_end_level() -> GameLevel:
    """Seeker at the closed end of a corridor, pursuer between it and the exit"""
    return GameLevel(
        width=3, height=1,
        seeker_start=(0, 0), pursuer_start=(2, 0),
        exit_position=(3, 0),
        name="Dead end",
    )


def create_sealed_cell_level() -> GameLevel:
    """Seeker walled into a single cell; neither agent can ever move"""
    return GameLevel(
        width=2, height=1,
        seeker_start=(0, 0), pursuer_start=(1, 0),
        exit_position=(1, 1),
        walls=[Wall(0, 0, EAST)],
        name="Sealed cell",
    )


def create_exit_race_level() -> GameLevel:
    """Seeker one step from the exit with the pursuer right behind; both end the winning turn on the exit"""
    return GameLevel(
        width=3, height=1,
        seeker_start=(2, 0), pursuer_start=(1, 0),
        exit_position=(3, 0),
        name="Exit race",
    )


def create_open_room_level(width: int = 5, height: int = 5) -> GameLevel:
    """Empty room, seeker in the top-left corner, pursuer in the bottom-right, exit in the east wall"""
    return GameLevel(
        width=width, height=height,
        seeker_start=(0, height - 1), pursuer_start=(width - 1, 0),
        exit_position=(width, height // 2),
        name=f"Open room {width}x{height}",
    )


def create_pillar_room_level() -> GameLevel:
    """4x4 room with a walled pillar in the middle that the pursuer gets stuck behind"""
    return GameLevel(
        width=4, height=4,
        seeker_start=(0, 0), pursuer_start=(3, 3),
        exit_position=(-1, 3),
        walls=[
            Wall(1, 1, NORTH), Wall(1, 1, EAST),
            Wall(1, 0, NORTH), Wall(0, 1, EAST),
        ],
        name="Pillar room",
    )


EXAMPLE_LEVELS: Dict[str, Callable[[], GameLevel]] = {
    'walled_corridor': create_walled_corridor_level,
    'adjacent_capture': create_adjacent_capture_level,
    'dead_end': create_dead_end_level,
    'sealed_cell': create_sealed_cell_level,
    'exit_race': create_exit_race_level,
    'open_room': create_open_room_level,
    'pillar_room': create_pillar_room_level,
}


def demo_level(level: GameLevel, step_count: int = 3,
               verbosity: int = VerbosityLevel.DETAILED):
    """Solve a level and print the hint the player would see"""
    display = SolverDisplay(verbosity)
    display.print_title(level.name or "Level")

    service = SolutionService(level, verbosity=verbosity)
    result = service.solve()

    print(f"Seeker can win: {result.seeker_can_win}")
    if result.win_distance.is_known:
        print(f"Win distance: {result.win_distance.distance}")
    print(service.describe_solution(step_count=step_count))
    return result


def demo_all_levels():
    for create_level in EXAMPLE_LEVELS.values():
        demo_level(create_level())


if __name__ == "__main__":
    demo_all_levels()
