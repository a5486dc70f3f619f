"""
Depth-first search solver shared by Queens and Tango

Strategy:
1. LIFO frontier seeded with the start board
2. Expand the popped board: every legal move, minus already-seen states
3. Order candidates by heuristic score (best popped next)
4. Collapse each candidate to a fixpoint before pushing it
5. Stop at the first winning board or when the iteration budget runs out

The frontier and the visited set belong to one solve() call, so separate
solves never share state.
"""

import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Set, Tuple

from .puzzle import Board, Move
from .rules import PuzzleRules, rules_for


MAX_SOLVER_ITERATIONS = 100000
PROGRESS_EVERY = 1000

SOLVED = "solved"
EXHAUSTED = "exhausted"
CANCELLED = "cancelled"

StepCallback = Callable[[Board, int], Optional[bool]]


@dataclass
class SolveResult:
    status: str
    board: Optional[Board]
    iterations: int
    frontier_size: int
    stats: Dict[str, int] = field(default_factory=dict)
    message: str = ""

    @property
    def solved(self) -> bool:
        return self.status == SOLVED


class SearchSolver:
    def __init__(self, board: Board, rules: Optional[PuzzleRules] = None,
                 max_iterations: int = MAX_SOLVER_ITERATIONS, verbose: bool = True,
                 use_heuristics: bool = True, on_step: Optional[StepCallback] = None):
        self.board = board
        self.rules = rules or rules_for(board)
        self.max_iterations = max_iterations
        self.verbose = verbose
        self.use_heuristics = use_heuristics  # False: fixed score, legal-move order
        self.on_step = on_step  # sees each popped board; returning False cancels
        self.stats = {
            'iterations': 0,
            'expanded': 0,
            'candidates': 0,
            'duplicates': 0,
            'dead_ends': 0,
            'pushed': 0,
            'max_frontier': 1,
        }

    # -------------------------------------------------------------------------
    # Main solving driver
    # -------------------------------------------------------------------------
    def solve(self) -> SolveResult:
        start_time = time.time()
        rules = self.rules

        if self.verbose:
            print(f"Starting {rules.family} solver on a {self.board.width}x{self.board.height} board")
            print(f"Iteration cap: {self.max_iterations} | Heuristics: {'ON' if self.use_heuristics else 'OFF'}\n")

        frontier: List[Board] = [self.board]
        visited: Set[str] = {rules.canonical_key(self.board)}
        iterations = 0

        while frontier and iterations < self.max_iterations:
            iterations += 1
            self.stats['iterations'] = iterations
            state = frontier.pop()

            if self.on_step is not None and self.on_step(state, iterations) is False:
                return self._finish(CANCELLED, None, iterations, frontier, start_time,
                                    "Search cancelled by caller.")

            if rules.is_terminal(state):
                return self._finish(SOLVED, state, iterations, frontier, start_time,
                                    f"Solved in {iterations} iterations.")

            self._expand(state, frontier, visited)

            if self.verbose and iterations % PROGRESS_EVERY == 0:
                print(f"  Progress: iterations {iterations} | frontier {len(frontier)} | "
                      f"visited {len(visited)} | dead ends {self.stats['dead_ends']}")

        message = ("Search space exhausted." if not frontier
                   else f"Iteration cap of {self.max_iterations} reached.")
        return self._finish(EXHAUSTED, None, iterations, frontier, start_time, message)

    def _expand(self, state: Board, frontier: List[Board], visited: Set[str]) -> None:
        """Push the collapsed successors of state, best candidate last."""
        rules = self.rules
        self.stats['expanded'] += 1

        candidates: List[Tuple[float, Move, Board]] = []
        for move in rules.legal_moves(state):
            child = rules.apply_move(state, move)
            self.stats['candidates'] += 1
            if rules.canonical_key(child) in visited:
                self.stats['duplicates'] += 1
                continue
            score = rules.score(child, move) if self.use_heuristics else 0.0
            candidates.append((score, move, child))

        # Ascending: the highest-scoring candidate ends on top of the stack
        candidates.sort(key=lambda c: c[0])

        for _, move, child in candidates:
            collapsed = rules.propagate(child)
            key = rules.canonical_key(collapsed)
            if key in visited:
                self.stats['duplicates'] += 1
                continue
            visited.add(key)
            if rules.is_dead_end(collapsed):
                self.stats['dead_ends'] += 1
                continue
            frontier.append(collapsed)
            self.stats['pushed'] += 1

        self.stats['max_frontier'] = max(self.stats['max_frontier'], len(frontier))

    def _finish(self, status: str, board: Optional[Board], iterations: int,
                frontier: List[Board], start_time: float, message: str) -> SolveResult:
        self.stats['duration_ms'] = int((time.time() - start_time) * 1000)
        if self.verbose:
            print("\n✓ Puzzle solved!" if status == SOLVED else f"\n✗ {message}")
            self._print_stats()
        return SolveResult(
            status=status,
            board=board,
            iterations=iterations,
            frontier_size=len(frontier),
            stats=dict(self.stats),
            message=message,
        )

    # -------------------------------------------------------------------------
    # Stats
    # -------------------------------------------------------------------------
    def _print_stats(self) -> None:
        """Print solving statistics."""
        print("\nSolving Statistics:")
        print(f"  Iterations: {self.stats['iterations']}")
        print(f"  Expanded states: {self.stats['expanded']}")
        print(f"  Candidates generated: {self.stats['candidates']}")
        print(f"  Duplicates skipped: {self.stats['duplicates']}")
        print(f"  Dead ends pruned: {self.stats['dead_ends']}")
        print(f"  States pushed: {self.stats['pushed']}")
        print(f"  Largest frontier: {self.stats['max_frontier']}")
        print(f"  Time: {self.stats['duration_ms']} ms")


def solve(board: Board, max_iterations: int = MAX_SOLVER_ITERATIONS, verbose: bool = False,
          use_heuristics: bool = True, on_step: Optional[StepCallback] = None) -> SolveResult:
    """Solve a board with a fresh frontier and visited set."""
    solver = SearchSolver(board, max_iterations=max_iterations, verbose=verbose,
                          use_heuristics=use_heuristics, on_step=on_step)
    return solver.solve()
