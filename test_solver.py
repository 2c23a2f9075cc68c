#!/usr/bin/env python3
"""
Tests for the exhaustive BFS solver: classification invariants over every
reachable state, monotonic updates, repeatability and the winning-move query.
"""

import pytest

from maze_pursuit.core.exceptions import InvalidMoveError
from maze_pursuit.core.game import Game
from maze_pursuit.core.state import Direction, GameState
from maze_pursuit.examples.example_levels import (
    EXAMPLE_LEVELS,
    create_adjacent_capture_level,
    create_dead_end_level,
    create_exit_race_level,
    create_open_room_level,
    create_sealed_cell_level,
    create_walled_corridor_level,
)
from maze_pursuit.solver.base_solver import Known, UNKNOWN
from maze_pursuit.solver.bfs_solver import BFSSolver, InternalConsistencyError, SolverNotCompletedError


def build_solver(level):
    game = Game.from_level(level)
    return BFSSolver(game, level.initial_state())


def solved(level):
    solver = build_solver(level)
    solver.run_search()
    return solver


def snapshot(solver):
    return {state: (node.win_distance, node.is_loss) for state, node in solver.iter_nodes()}


def check_invariants(solver):
    """Loss and win-distance rules hold for every explored state"""
    game = solver.game
    for state, node in solver.iter_nodes():
        assert node.children is not None, f"{state} was never expanded"
        child_nodes = [solver.get_node(child) for child in node.children]

        if game.is_win(state):
            assert node.children == []
            assert node.win_distance == Known(0)
            assert not node.is_loss
            continue

        if game.is_loss(state):
            assert node.children == []
            assert node.is_loss
            assert node.win_distance == UNKNOWN
            continue

        assert node.is_loss == all(child.is_loss for child in child_nodes), f"loss rule broken at {state}"

        known = [child.win_distance.distance for child in child_nodes if child.win_distance.is_known]
        if known:
            assert node.win_distance == Known(min(known) + 1), f"distance rule broken at {state}"
        else:
            assert node.win_distance == UNKNOWN

        assert not (node.is_loss and node.win_distance.is_known)

        for child in node.children:
            assert state in solver.get_node(child).parents


@pytest.mark.parametrize("level_name", sorted(EXAMPLE_LEVELS))
def test_invariants_on_example_levels(level_name):
    print(f"🧪 Checking invariants on {level_name}")
    solver = solved(EXAMPLE_LEVELS[level_name]())
    check_invariants(solver)


def test_invariants_on_larger_room():
    solver = solved(create_open_room_level(6, 5))
    assert solver.states_explored == 37
    check_invariants(solver)


def test_walled_corridor_solution():
    print("🧪 Testing walled corridor")
    level = create_walled_corridor_level()
    solver = build_solver(level)
    result = solver.solve()

    assert result.seeker_can_win
    assert result.win_distance == Known(5)
    assert result.first_move == Direction.WEST
    assert not result.is_loss
    assert result.states_explored == solver.states_explored

    expected = {
        GameState.of((1, 2), (1, 0)): 5,
        GameState.of((0, 2), (0, 1)): 4,
        GameState.of((1, 2), (1, 1)): 3,
        GameState.of((2, 2), (1, 1)): 2,
        GameState.of((2, 1), (1, 1)): 1,
        GameState.of((3, 1), (1, 1)): 0,
    }
    for state, distance in expected.items():
        assert solver.get_win_distance(state) == Known(distance)

    # Going east first gets the seeker cornered
    cornered = GameState.of((2, 2), (2, 1))
    assert solver.is_loss(cornered)
    assert solver.get_win_distance(cornered) == UNKNOWN
    assert solver.winning_move(cornered) is None
    print(f"   ✓ Win in {result.win_distance.distance} turns, first move {result.first_move.label}")


def test_replaying_winning_moves_reaches_exit():
    level = create_walled_corridor_level()
    solver = solved(level)
    game = solver.game

    state = level.initial_state()
    distance = solver.get_win_distance(state).distance
    turns = 0
    while not game.is_win(state):
        move = solver.winning_move(state)
        assert move is not None
        state = game.resolve_turn(state, move).final_state
        turns += 1
        assert turns <= distance
        assert solver.get_win_distance(state) == Known(distance - turns)

    assert turns == distance


def test_winning_moves_on_every_winnable_state():
    solver = solved(create_open_room_level(4, 4))
    game = solver.game
    for state, node in solver.iter_nodes():
        if not node.win_distance.is_known or game.is_win(state):
            continue
        move = solver.winning_move(state)
        child = game.resolve_turn(state, move).final_state
        assert solver.get_win_distance(child) == Known(node.win_distance.distance - 1)


def test_winning_move_ties_follow_enumeration_order():
    level = create_walled_corridor_level()
    solver = solved(level)
    game = solver.game
    for state, node in solver.iter_nodes():
        if not node.win_distance.is_known or game.is_win(state):
            continue
        target = node.win_distance.distance - 1
        first_best = next(direction for direction, child in game.get_moves(state)
                          if solver.get_win_distance(child) == Known(target))
        assert solver.winning_move(state) == first_best


def test_adjacent_capture_is_loss():
    solver = build_solver(create_adjacent_capture_level())
    result = solver.solve()

    assert result.is_loss
    assert not result.seeker_can_win
    assert result.first_move is None
    assert solver.winning_move(solver.start_state) is None


def test_dead_end_is_loss():
    solver = solved(create_dead_end_level())
    start = solver.start_state
    node = solver.get_node(start)

    assert node.children == [GameState.of((0, 0), (0, 0)), GameState.of((1, 0), (1, 0))]
    assert all(solver.is_loss(child) for child in node.children)
    assert solver.is_loss(start)
    assert not solver.can_win(start)


def test_sealed_cell_has_no_children_and_is_loss():
    solver = solved(create_sealed_cell_level())
    node = solver.get_node(solver.start_state)

    assert node.children == []
    assert node.is_loss
    assert solver.states_explored == 1


def test_start_on_exit():
    level = create_walled_corridor_level()
    game = Game.from_level(level)
    solver = BFSSolver(game, GameState.of((3, 1), (0, 0)))
    result = solver.solve()

    assert result.seeker_can_win
    assert result.win_distance == Known(0)
    assert result.first_move is None
    with pytest.raises(InvalidMoveError):
        solver.winning_move(solver.start_state)


def test_shared_exit_is_a_win():
    solver = solved(create_exit_race_level())
    start = solver.start_state
    on_exit = GameState.of((3, 0), (3, 0))

    assert solver.get_win_distance(on_exit) == Known(0)
    assert not solver.is_loss(on_exit)
    assert solver.get_win_distance(start) == Known(1)
    assert solver.winning_move(start) == Direction.EAST

    # Same rule when a search starts on that state
    game = Game.from_level(create_walled_corridor_level())
    result = BFSSolver(game, GameState.of((3, 1), (3, 1))).solve()
    assert result.win_distance == Known(0)
    assert not result.is_loss


def test_monotonic_updates():
    """Win distances only decrease and losses are never undone, step by step"""
    print("🧪 Testing monotonicity")
    solver = build_solver(create_open_room_level(4, 4))
    solver.start_search()

    previous = {}
    previous_children = {}
    while solver.step():
        for state, node in solver._nodes.items():
            if state in previous:
                old_distance, old_loss = previous[state]
                if old_loss:
                    assert node.is_loss
                if old_distance.is_known:
                    assert node.win_distance.is_known
                    assert node.win_distance.distance <= old_distance.distance
            if state in previous_children:
                assert node.children == previous_children[state]

        previous = {state: (node.win_distance, node.is_loss) for state, node in solver._nodes.items()}
        previous_children = {state: list(node.children) for state, node in solver._nodes.items()
                             if node.children is not None}

    assert solver.completed
    print("   ✓ No reverted classification")


def test_solving_twice_is_idempotent():
    level = create_walled_corridor_level()

    solver = build_solver(level)
    solver.run_search()
    first = snapshot(solver)
    solver.run_search()
    assert snapshot(solver) == first

    other = solved(level)
    assert snapshot(other) == first


def test_queries_before_completion():
    solver = build_solver(create_walled_corridor_level())
    with pytest.raises(SolverNotCompletedError):
        solver.winning_move(solver.start_state)

    solver.start_search()
    solver.step()
    with pytest.raises(SolverNotCompletedError):
        solver.is_loss(solver.start_state)


def test_unreachable_state_query():
    solver = solved(create_walled_corridor_level())
    with pytest.raises(KeyError):
        solver.get_node(GameState.of((0, 0), (2, 2)))


def test_inconsistent_node_is_reported():
    solver = solved(create_dead_end_level())
    # Claim a win that no child supports
    solver._nodes[solver.start_state].win_distance = Known(1)
    with pytest.raises(InternalConsistencyError):
        solver.winning_move(solver.start_state)


def test_state_graph_export():
    solver = solved(create_walled_corridor_level())
    graph = solver.state_graph()

    assert graph.number_of_nodes() == solver.states_explored
    start = solver.start_state
    assert list(graph.successors(start)) == solver.get_node(start).children
    assert graph.nodes[start]['win_distance'] == 5
    assert graph.nodes[GameState.of((2, 2), (2, 1))]['is_loss']
    assert graph.nodes[GameState.of((2, 2), (2, 1))]['win_distance'] is None


def test_resolved_states_can_be_queried():
    """States from resolve_turn are the same keys the solver uses"""
    level = create_walled_corridor_level()
    solver = solved(level)
    outcome = solver.game.resolve_turn(level.initial_state(), (-1, 0))
    assert solver.get_win_distance(outcome.final_state) == Known(4)


if __name__ == "__main__":
    test_walled_corridor_solution()
    test_monotonic_updates()
    print("\n🎉 Solver tests passed")
