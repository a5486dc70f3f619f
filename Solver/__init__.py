"""
Grid Logic Puzzle Solver Package

Depth-first search with heuristic move ordering and constraint propagation
for Queens and Tango puzzles.
"""

from .puzzle import (
    Board,
    Constraint,
    InvalidSpecification,
    Move,
    QueensBoard,
    QueensCell,
    TangoBoard,
    load_puzzle,
    save_puzzle,
)
from .constraints import QueensChecker, TangoChecker
from .propagation import collapse_queens, collapse_tango
from .heuristics import HeuristicScorer
from .rules import PuzzleRules, QueensRules, TangoRules, rules_for
from .solver import SearchSolver, SolveResult, solve
from .output import SolutionFormatter

__version__ = "1.0.0"
__all__ = [
    'Board',
    'Constraint',
    'InvalidSpecification',
    'Move',
    'QueensBoard',
    'QueensCell',
    'TangoBoard',
    'load_puzzle',
    'save_puzzle',
    'QueensChecker',
    'TangoChecker',
    'collapse_queens',
    'collapse_tango',
    'HeuristicScorer',
    'PuzzleRules',
    'QueensRules',
    'TangoRules',
    'rules_for',
    'SearchSolver',
    'SolveResult',
    'solve',
    'SolutionFormatter'
]
