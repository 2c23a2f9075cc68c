#!/usr/bin/env python3
"""
Solve an example maze pursuit level from the terminal.

Usage:
    python solve_level.py                          # Solve the walled corridor level
    python solve_level.py --level open_room --progress
    python solve_level.py --level pillar_room --table
"""
import argparse
import sys

from maze_pursuit.core.exceptions import InvalidMoveError, MalformedLevelError
from maze_pursuit.display_utils import SolverDisplay, VerbosityLevel
from maze_pursuit.examples.example_levels import EXAMPLE_LEVELS
from maze_pursuit.services.solution_service import SolutionService


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(description='Solve a maze pursuit level')
    parser.add_argument('--level', choices=sorted(EXAMPLE_LEVELS), default='walled_corridor',
                        help='Example level to solve')
    parser.add_argument('--steps', type=int, default=3,
                        help='Number of upcoming moves shown in the hint')
    parser.add_argument('--verbosity', type=int, default=VerbosityLevel.BASIC, choices=[0, 1, 2, 3],
                        help='0 silent, 1 summary, 2 detailed, 3 every expanded state')
    parser.add_argument('--progress', action='store_true',
                        help='Show a progress bar while exploring states')
    parser.add_argument('--table', action='store_true',
                        help='Print the table of all explored states')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_arguments(argv)

    try:
        level = EXAMPLE_LEVELS[args.level]()
        display = SolverDisplay(args.verbosity)
        display.print_title(level.name)

        service = SolutionService(level, verbosity=args.verbosity, show_progress=args.progress)
        if not service.exit_reachable():
            print("⚠️ The exit is walled off from the seeker's start")

        result = service.solve()
        print(service.describe_solution(step_count=args.steps))

        if result.seeker_can_win:
            display.print_solution(service.solution_path())

        if args.table:
            print(service.state_table().to_string(index=False))

    except (MalformedLevelError, InvalidMoveError) as e:
        print(f"❌ {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
