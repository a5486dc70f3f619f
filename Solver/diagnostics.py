"""
Diagnostics: understand WHY a solve stopped without a solution

Classifies unsolved results so a puzzle that is genuinely unsolvable can be
told apart from one the iteration cap cut short.
"""

from typing import Dict, Optional

from .constraints import QueensChecker, TangoChecker
from .puzzle import Board, QueensBoard
from .solver import CANCELLED, SOLVED, SolveResult


UNSOLVABLE = "UNSOLVABLE"
CAP_REACHED = "CAP_REACHED"
THRASHING = "THRASHING"
CANCELLED_BY_CALLER = "CANCELLED"

THRASHING_DEAD_END_RATIO = 0.9


def _has_immediate_violation(board: Board) -> bool:
    if isinstance(board, QueensBoard):
        return bool(QueensChecker.find_violations(board))
    return bool(TangoChecker.find_violations(board))


class SolverDiagnostics:

    @staticmethod
    def classify(result: SolveResult) -> Optional[str]:
        """Failure type for an unsolved result, None when solved."""
        if result.status == SOLVED:
            return None
        if result.status == CANCELLED:
            return CANCELLED_BY_CALLER
        if result.frontier_size == 0:
            return UNSOLVABLE

        pushed = result.stats.get('pushed', 0)
        dead_ends = result.stats.get('dead_ends', 0)
        if dead_ends and dead_ends / max(pushed + dead_ends, 1) >= THRASHING_DEAD_END_RATIO:
            return THRASHING
        return CAP_REACHED

    @staticmethod
    def analyze_failure(result: SolveResult, board: Board) -> Dict:
        """Collect the facts that explain an unsolved result."""
        return {
            'status': result.status,
            'type': SolverDiagnostics.classify(result),
            'iterations': result.iterations,
            'frontier_size': result.frontier_size,
            'starting_board_violates_rules': _has_immediate_violation(board),
            'stats': dict(result.stats),
        }

    @staticmethod
    def print_summary(result: SolveResult, board: Board):
        print(f"\n{'='*60}")
        print("SOLVER DIAGNOSTICS")
        print(f"{'='*60}")
        print(f"Family: {board.family} | Board: {board.width}x{board.height}")
        print(f"Status: {result.status} after {result.iterations} iterations")

        if result.solved:
            print("✓ Solution found")
            print(f"{'='*60}\n")
            return

        report = SolverDiagnostics.analyze_failure(result, board)
        print(f"Frontier when stopped: {report['frontier_size']}")
        print(f"Dead ends pruned: {report['stats'].get('dead_ends', 0)}")
        print(f"Duplicates skipped: {report['stats'].get('duplicates', 0)}")

        failure = report['type']
        if report['starting_board_violates_rules']:
            print("\n⚠️  STARTING BOARD ALREADY BREAKS A RULE")
            print("   Suggestion: Check the givens and constraints in the puzzle file")
        if failure == UNSOLVABLE:
            print("\n⚠️  SEARCH EXHAUSTED - Every reachable state was explored")
            print("   The puzzle has no solution from this starting board")
        elif failure == THRASHING:
            print("\n⚠️  THRASHING - Nearly every candidate was a dead end")
            print("   Suggestion: Raise the iteration cap or turn heuristics on")
        elif failure == CAP_REACHED:
            print("\n⚠️  ITERATION CAP REACHED - Search space not exhausted")
            print("   Suggestion: Raise the iteration cap")
        elif failure == CANCELLED_BY_CALLER:
            print("\n⚠️  CANCELLED - The step callback stopped the search")
        print(f"{'='*60}\n")


__all__ = [
    'SolverDiagnostics',
    'UNSOLVABLE',
    'CAP_REACHED',
    'THRASHING',
    'CANCELLED_BY_CALLER',
]
