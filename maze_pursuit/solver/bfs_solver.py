import time
from collections import deque
from typing import Dict, Iterator, List, Optional, Set, Tuple
import networkx as nx
from tqdm import tqdm

from .base_solver import BaseSolver, SolverResult, Known, WinDistance, UNKNOWN, as_optional
from ..core.game import Game, GameState
from ..core.exceptions import InvalidMoveError
from ..core.state import Direction
from ..display_utils import SolverDisplay, VerbosityLevel


class InternalConsistencyError(AssertionError):
    """A node's win distance is not backed by any of its children"""
    pass


class SolverNotCompletedError(RuntimeError):
    """Raised when the solver is queried before the search has finished"""
    pass


class SearchNode:
    """
    Solver bookkeeping for one game state.

    A node is *discovered* once some parent has produced its state, and
    *expanded* once its children are known. ``children`` stays None until
    expansion and never changes afterwards; terminal states get an empty list.
    ``parents`` only ever grows. ``win_distance`` only ever decreases and
    ``is_loss`` never goes back to False.

    A state is winning if any child is winning, and losing if all of its
    children are losing.
    """

    __slots__ = ('parents', 'children', 'win_distance', 'is_loss')

    def __init__(self, parents: Set[GameState] = None):
        self.parents: Set[GameState] = parents or set()
        self.children: Optional[List[GameState]] = None
        self.win_distance: WinDistance = UNKNOWN
        self.is_loss = False

    @property
    def expanded(self) -> bool:
        return self.children is not None


class BFSSolver(BaseSolver):
    """
    Exhaustive breadth-first solver.

    Explores every state reachable from the start state exactly once,
    records all parents of each state, and propagates wins (minimum
    distance) and losses (all children lost) back up the graph. One
    instance solves one start state on one board; build a new solver for
    anything else.

    Queries are only answered once ``run_search`` has finished and raise
    SolverNotCompletedError before that. The search itself is synchronous;
    a caller running it on a worker thread must not touch the solver until
    the call returns.
    """

    def __init__(self, game: Game, start_state: GameState,
                 verbosity: int = VerbosityLevel.SILENT, show_progress: bool = False):
        super().__init__(game, start_state)
        self.display = SolverDisplay(verbosity)
        self.show_progress = show_progress

        self._nodes: Dict[GameState, SearchNode] = {}
        self._explore_queue: deque = deque()
        self.completed = False

    # Breadth first search

    def start_search(self):
        """Reset the node table and queue the start state"""
        self._nodes.clear()
        self._explore_queue.clear()
        self.completed = False

        self._nodes[self.start_state] = SearchNode()
        self._explore_queue.append(self.start_state)

    def step(self) -> bool:
        """Process one queued state. Returns False once the queue is exhausted."""
        if not self._explore_queue:
            self.completed = True
            return False

        current_state = self._explore_queue.popleft()
        current_node = self._nodes[current_state]

        if current_node.expanded:
            return True

        if self.game.is_win(current_state):
            # Win is checked first: a pursuer stepping onto the exit after the seeker does not undo it
            current_node.children = []
            self._propagate_win(current_state, 0)
        elif self.game.is_loss(current_state):
            current_node.children = []
            self._propagate_loss(current_state)
        else:
            self._expand(current_state, current_node)
        return True

    def run_search(self):
        start_time = time.time()
        self.start_search()

        with tqdm(desc="Exploring states", unit="state", disable=not self.show_progress) as progress:
            while self.step():
                progress.update(1)

        self.display.print_search_summary(len(self._nodes), time.time() - start_time)

    def _expand(self, current_state: GameState, current_node: SearchNode):
        children = self.game.get_children(current_state)
        current_node.children = children
        self.display.print_expansion(current_state, children)

        # Children explored earlier may already tell us the outcome
        best_child_distance = None
        all_children_lost = True
        for child in children:
            child_node = self._nodes.get(child)
            if child_node is not None:
                child_node.parents.add(current_state)

                if child_node.win_distance.is_known:
                    distance = child_node.win_distance.distance
                    if best_child_distance is None or distance < best_child_distance:
                        best_child_distance = distance
                if not child_node.is_loss:
                    all_children_lost = False
            else:
                self._nodes[child] = SearchNode({current_state})
                self._explore_queue.append(child)
                all_children_lost = False

        # Ancestors expanded before this node saw it as undecided, so push the result up
        if best_child_distance is not None:
            self._propagate_win(current_state, best_child_distance + 1)
        if all_children_lost:
            self._propagate_loss(current_state)

    def _propagate_win(self, win_state: GameState, win_distance: int):
        """Relax win distances upward; stops wherever nothing improves"""
        worklist = [(win_state, win_distance)]
        while worklist:
            state, distance = worklist.pop()
            node = self._nodes[state]
            candidate = Known(distance)
            if not candidate.improves_on(node.win_distance):
                continue

            node.win_distance = candidate
            for parent_state in node.parents:
                worklist.append((parent_state, distance + 1))

    def _propagate_loss(self, loss_state: GameState):
        """Mark a loss and walk up to every parent whose children are now all lost"""
        worklist = [loss_state]
        while worklist:
            state = worklist.pop()
            node = self._nodes[state]
            if node.is_loss:
                continue
            node.is_loss = True

            for parent_state in node.parents:
                parent_node = self._nodes[parent_state]
                if parent_node.is_loss:
                    continue
                if all(self._nodes[child].is_loss for child in parent_node.children):
                    worklist.append(parent_state)

    # Query

    def _require_completed(self):
        if not self.completed:
            raise SolverNotCompletedError("Search has not completed; call run_search() first")

    def get_node(self, state: GameState) -> SearchNode:
        self._require_completed()
        try:
            return self._nodes[state]
        except KeyError:
            raise KeyError(f"State {state} is not reachable from {self.start_state}") from None

    def get_win_distance(self, state: GameState) -> WinDistance:
        return self.get_node(state).win_distance

    def is_loss(self, state: GameState) -> bool:
        return self.get_node(state).is_loss

    def can_win(self, state: GameState) -> bool:
        return self.get_node(state).win_distance.is_known

    def winning_move(self, state: GameState) -> Optional[Direction]:
        """
        The move that reaches a win fastest, or None if there is no forced win.

        Among children with the same distance the first one in enumeration
        order (wait, north, south, east, west) is chosen. Asking for a move
        from a state that is already won raises InvalidMoveError.
        """
        node = self.get_node(state)
        if not node.win_distance.is_known:
            return None
        if self.game.is_win(state):
            raise InvalidMoveError(f"The game is already won in state {state}")

        best_distance = None
        best_move = None
        for child in node.children:
            child_distance = self._nodes[child].win_distance
            if child_distance.is_known and (best_distance is None or child_distance.distance < best_distance):
                best_distance = child_distance.distance
                best_move = Direction.from_delta(*state.seeker.delta_to(child.seeker))

        if best_move is None:
            raise InternalConsistencyError(f"Failed to find winning move in win state {state}")
        return best_move

    def iter_nodes(self) -> Iterator[Tuple[GameState, SearchNode]]:
        self._require_completed()
        return iter(self._nodes.items())

    @property
    def states_explored(self) -> int:
        return len(self._nodes)

    def state_graph(self) -> nx.DiGraph:
        """Explored state graph with ``win_distance`` and ``is_loss`` node attributes"""
        self._require_completed()
        graph = nx.DiGraph()
        for state, node in self._nodes.items():
            graph.add_node(state, win_distance=as_optional(node.win_distance), is_loss=node.is_loss)
        for state, node in self._nodes.items():
            for child in node.children:
                graph.add_edge(state, child)
        return graph

    # BaseSolver

    def solve(self) -> SolverResult:
        self.display.print_title("Solving")
        self.run_search()

        start_distance = self.get_win_distance(self.start_state)
        is_loss = self.is_loss(self.start_state)
        first_move = None
        if start_distance.is_known and start_distance.distance > 0:
            first_move = self.winning_move(self.start_state)

        self.display.print_state_summary(self.start_state, as_optional(start_distance), is_loss, first_move)

        return SolverResult(
            seeker_can_win=start_distance.is_known,
            win_distance=start_distance,
            first_move=first_move,
            is_loss=is_loss,
            states_explored=self.states_explored,
            winning_states=sum(1 for node in self._nodes.values() if node.win_distance.is_known),
            loss_states=sum(1 for node in self._nodes.values() if node.is_loss),
        )

    def can_seeker_win(self) -> bool:
        """Quick check if the seeker can force a win"""
        return self.solve().seeker_can_win
