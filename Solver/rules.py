"""
Puzzle capability interface shared by the search engine

The solver only talks to a PuzzleRules object, so both families run through
the same search loop.
"""

from abc import ABC, abstractmethod
from typing import List

from .constraints import QueensChecker, TangoChecker
from .heuristics import HeuristicScorer
from .propagation import collapse_queens, collapse_tango
from .puzzle import Board, Move, QueensBoard, TangoBoard


class PuzzleRules(ABC):
    """Moves, win/dead-end tests, propagation and ordering for one puzzle family."""

    family: str = ""

    @abstractmethod
    def legal_moves(self, board: Board) -> List[Move]:
        ...

    @abstractmethod
    def apply_move(self, board: Board, move: Move) -> Board:
        ...

    @abstractmethod
    def is_terminal(self, board: Board) -> bool:
        ...

    @abstractmethod
    def is_dead_end(self, board: Board) -> bool:
        ...

    @abstractmethod
    def propagate(self, board: Board) -> Board:
        ...

    @abstractmethod
    def score(self, board: Board, move: Move) -> float:
        ...

    def canonical_key(self, board: Board) -> str:
        return board.canonical_key()


class QueensRules(PuzzleRules):
    family = QueensBoard.family

    def legal_moves(self, board: QueensBoard) -> List[Move]:
        return QueensChecker.legal_moves(board)

    def apply_move(self, board: QueensBoard, move: Move) -> QueensBoard:
        return board.place_queen(move.pos)

    def is_terminal(self, board: QueensBoard) -> bool:
        return QueensChecker.is_terminal(board)

    def is_dead_end(self, board: QueensBoard) -> bool:
        return QueensChecker.is_dead_end(board)

    def propagate(self, board: QueensBoard) -> QueensBoard:
        return collapse_queens(board)

    def score(self, board: QueensBoard, move: Move) -> float:
        return HeuristicScorer.score_queens(board, move)


class TangoRules(PuzzleRules):
    family = TangoBoard.family

    def legal_moves(self, board: TangoBoard) -> List[Move]:
        return TangoChecker.legal_moves(board)

    def apply_move(self, board: TangoBoard, move: Move) -> TangoBoard:
        return board.set_value(move.pos, move.value)

    def is_terminal(self, board: TangoBoard) -> bool:
        return TangoChecker.is_terminal(board)

    def is_dead_end(self, board: TangoBoard) -> bool:
        return TangoChecker.is_dead_end(board)

    def propagate(self, board: TangoBoard) -> TangoBoard:
        return collapse_tango(board)

    def score(self, board: TangoBoard, move: Move) -> float:
        return HeuristicScorer.score_tango(board, move)


def rules_for(board: Board) -> PuzzleRules:
    """Pick the rules implementation matching the board's family"""
    if isinstance(board, QueensBoard):
        return QueensRules()
    if isinstance(board, TangoBoard):
        return TangoRules()
    raise TypeError(f"No rules for board type {type(board).__name__}")
