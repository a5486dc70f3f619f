"""
Heuristic scores used to order candidate expansions

Scores only bias the order in which the search tries candidates; they never
remove one. Higher is tried first.
"""

from .constraints import QueensChecker, TangoChecker
from .puzzle import EQUAL, Move, QueensBoard, TangoBoard, opposite


CONSTRAINED_SCALE = 100.0      # most-constrained-first
REGION_SCALE = 100.0           # smaller regions first (Queens)
CONSTRAINT_TOUCH_BONUS = 100   # move lands on a constrained cell (Tango)
CONSTRAINT_COMPLETE_BONUS = 10000
EQUAL_RUN_BONUS = 10000
LINE_FILL_SCALE = 20.0
HALF_COUNT_BONUS = 500


class HeuristicScorer:
    """Scores a board state reached by a move."""

    @staticmethod
    def score_queens(board: QueensBoard, move: Move) -> float:
        score = CONSTRAINED_SCALE / max(len(QueensChecker.legal_moves(board)), 1)
        score += REGION_SCALE / board.region_size(board.region_of(move.pos))
        return score

    @staticmethod
    def _equal_run_bonus(board: TangoBoard, constraint, symbol: str) -> int:
        """
        An equality pair next to a cell holding the other symbol is almost
        certainly the move's symbol: the pair plus that neighbour would
        otherwise make a run of three.
        """
        (ar, ac), (br, bc) = constraint.a, constraint.b
        if ar == br:
            ends = [(ar, min(ac, bc) - 1), (ar, max(ac, bc) + 1)]
        else:
            ends = [(min(ar, br) - 1, ac), (max(ar, br) + 1, ac)]

        bonus = 0
        for pos in ends:
            if board.in_bounds(pos):
                neighbour = board.value_at(pos)
                if neighbour is not None and neighbour != symbol:
                    bonus += EQUAL_RUN_BONUS
        return bonus

    @staticmethod
    def score_tango(board: TangoBoard, move: Move) -> float:
        score = CONSTRAINED_SCALE / max(len(TangoChecker.legal_moves(board)), 1)

        # Make moves in constrained positions first
        for constraint in board.constraints_at(move.pos):
            score += CONSTRAINT_TOUCH_BONUS
            if board.value_at(constraint.other(move.pos)) is not None:
                score += CONSTRAINT_COMPLETE_BONUS
            if constraint.kind == EQUAL:
                score += HeuristicScorer._equal_run_bonus(board, constraint, move.value)

        # Almost-filled rows and columns are more valuable
        r, c = move.pos
        row, column = board.get_row(r), board.get_column(c)
        score += LINE_FILL_SCALE * (board.width - row.count(None)) / board.width
        score += LINE_FILL_SCALE * (board.height - column.count(None)) / board.height

        # Lines close to their half-count for this symbol, or capped for the other
        half_width, half_height = board.width // 2, board.height // 2
        other = opposite(move.value)
        if row.count(move.value) >= half_width - 1:
            score += HALF_COUNT_BONUS
        if column.count(move.value) >= half_height - 1:
            score += HALF_COUNT_BONUS
        if row.count(other) == half_width:
            score += HALF_COUNT_BONUS
        if column.count(other) == half_height:
            score += HALF_COUNT_BONUS

        return score
