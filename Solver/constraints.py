"""
Constraint checking for Queens and Tango boards

Key points:
 - Every predicate is pure: boards are never mutated, repeated calls agree
 - Pruning marks are hints; they never make a Queens move illegal
 - Tango constraints are optimistic about endpoints that are still empty
 - Dead-end checks only report states no completion can repair
"""

from collections import Counter
from typing import List, Optional, Set

from .puzzle import (
    Move,
    Position,
    QueensBoard,
    SYMBOLS,
    TangoBoard,
    longest_run,
)


# -----------------------------------------------------------------------------
# Queens
# -----------------------------------------------------------------------------
class QueensChecker:
    """Validates queen placements: one per row, column, region, none touching."""

    @staticmethod
    def _counts(board: QueensBoard):
        rows: Counter = Counter()
        cols: Counter = Counter()
        regions: Counter = Counter()
        for r, c in board.queens():
            rows[r] += 1
            cols[c] += 1
            regions[board.region_of((r, c))] += 1
        return rows, cols, regions

    @staticmethod
    def is_valid_move(board: QueensBoard, pos: Position) -> bool:
        """A queen may go at pos if nothing in its row, column, region or surroundings holds one."""
        if board.cell(pos).marked:
            return False
        rows, cols, regions = QueensChecker._counts(board)
        return QueensChecker._placeable(board, pos, rows, cols, regions, set(board.queens()))

    @staticmethod
    def _placeable(board: QueensBoard, pos: Position, rows: Counter, cols: Counter,
                   regions: Counter, queens: Set[Position]) -> bool:
        r, c = pos
        if pos in queens or rows[r] or cols[c] or regions[board.region_of(pos)]:
            return False
        return not any(n in queens for n in board.moore_neighbourhood(pos))

    @staticmethod
    def legal_moves(board: QueensBoard) -> List[Move]:
        """Every queen placement that breaks no rule on its own, row-major."""
        rows, cols, regions = QueensChecker._counts(board)
        queens = set(board.queens())
        return [
            Move(pos)
            for pos in board.positions()
            if QueensChecker._placeable(board, pos, rows, cols, regions, queens)
        ]

    @staticmethod
    def _touching_queens(board: QueensBoard) -> bool:
        queens = set(board.queens())
        return any(n in queens for q in queens for n in board.moore_neighbourhood(q))

    @staticmethod
    def is_terminal(board: QueensBoard) -> bool:
        rows, cols, regions = QueensChecker._counts(board)
        if any(rows[r] != 1 for r in range(board.height)):
            return False
        if any(cols[c] != 1 for c in range(board.width)):
            return False
        if any(regions[region] != 1 for region in board.regions()):
            return False
        return not QueensChecker._touching_queens(board)

    @staticmethod
    def is_dead_end(board: QueensBoard) -> bool:
        """
        True when no sequence of further placements can reach a win:
          - a queen sits on a pruned cell
          - a row, column or region holds two queens, or two queens touch
          - an empty row, column or region has nowhere left for its queen
        """
        if any(cell.marked and cell.pruned for cell in board.cells):
            return True
        rows, cols, regions = QueensChecker._counts(board)
        if any(n > 1 for n in rows.values()) or any(n > 1 for n in cols.values()):
            return True
        if any(n > 1 for n in regions.values()):
            return True
        if QueensChecker._touching_queens(board):
            return True

        legal = [m.pos for m in QueensChecker.legal_moves(board)]
        open_rows = {r for r, _ in legal}
        open_cols = {c for _, c in legal}
        open_regions = {board.region_of(p) for p in legal}
        if any(not rows[r] and r not in open_rows for r in range(board.height)):
            return True
        if any(not cols[c] and c not in open_cols for c in range(board.width)):
            return True
        return any(not regions[region] and region not in open_regions for region in board.regions())

    @staticmethod
    def find_violations(board: QueensBoard) -> List[str]:
        """Human-readable list of broken rules on the current board."""
        violations = []
        rows, cols, regions = QueensChecker._counts(board)
        for r in range(board.height):
            if rows[r] > 1:
                violations.append(f"row {r} has {rows[r]} queens")
        for c in range(board.width):
            if cols[c] > 1:
                violations.append(f"column {c} has {cols[c]} queens")
        for region in sorted(board.regions()):
            if regions[region] > 1:
                violations.append(f"region {region} has {regions[region]} queens")
        queens = board.queens()
        for i, q in enumerate(queens):
            for other in queens[i + 1:]:
                if other in board.moore_neighbourhood(q):
                    violations.append(f"queens at {q} and {other} touch")
        return violations


# -----------------------------------------------------------------------------
# Tango
# -----------------------------------------------------------------------------
class _TangoLines:
    """Row/column contents and symbol counts of one board, built once per query."""

    def __init__(self, board: TangoBoard):
        self.rows = [board.get_row(r) for r in range(board.height)]
        self.cols = [board.get_column(c) for c in range(board.width)]
        self.row_counts = [Counter(row) for row in self.rows]
        self.col_counts = [Counter(col) for col in self.cols]
        # A constraint already broken between two filled cells blocks every move
        self.broken = any(
            not c.satisfied(board.value_at(c.a), board.value_at(c.b))
            for c in board.constraints
            if board.value_at(c.a) is not None and board.value_at(c.b) is not None
        )


class TangoChecker:
    """Validates sun/moon placements against balance, run and pair constraints."""

    @staticmethod
    def _run_through(line: List[Optional[str]], i: int, symbol: str) -> int:
        """Length of the run of symbol that placing it at line[i] would create."""
        length = 1
        j = i - 1
        while j >= 0 and line[j] == symbol:
            length += 1
            j -= 1
        j = i + 1
        while j < len(line) and line[j] == symbol:
            length += 1
            j += 1
        return length

    @staticmethod
    def _valid(board: TangoBoard, lines: _TangoLines, pos: Position, symbol: str) -> bool:
        r, c = pos
        if lines.broken or lines.rows[r][c] is not None:
            return False

        # No more than 2 identical symbols horizontally or vertically adjacent
        if TangoChecker._run_through(lines.rows[r], c, symbol) > 2:
            return False
        if TangoChecker._run_through(lines.cols[c], r, symbol) > 2:
            return False

        # Already width / 2 (height / 2) of this symbol in the row (column)
        if lines.row_counts[r][symbol] >= board.width // 2:
            return False
        if lines.col_counts[c][symbol] >= board.height // 2:
            return False

        # Constraints on this cell must hold against known partners
        for constraint in board.constraints_at(pos):
            partner = board.value_at(constraint.other(pos))
            if partner is not None and not constraint.satisfied(symbol, partner):
                return False
        return True

    @staticmethod
    def is_valid_move(board: TangoBoard, pos: Position, symbol: str) -> bool:
        """
        Placing symbol at the empty cell pos creates no run of three, keeps its
        row and column within the half-count, and agrees with every constraint
        whose other endpoint is already known. Empty partners are optimistic.
        No move is valid while any constraint on the board is already broken.
        """
        return TangoChecker._valid(board, _TangoLines(board), pos, symbol)

    @staticmethod
    def legal_values(board: TangoBoard, pos: Position) -> List[str]:
        lines = _TangoLines(board)
        return [s for s in SYMBOLS if TangoChecker._valid(board, lines, pos, s)]

    @staticmethod
    def legal_moves(board: TangoBoard) -> List[Move]:
        lines = _TangoLines(board)
        return [
            Move(pos, symbol)
            for pos in board.empties()
            for symbol in SYMBOLS
            if TangoChecker._valid(board, lines, pos, symbol)
        ]

    @staticmethod
    def _lines(board: TangoBoard):
        for r in range(board.height):
            yield f"row {r}", board.get_row(r), board.width // 2
        for c in range(board.width):
            yield f"column {c}", board.get_column(c), board.height // 2

    @staticmethod
    def is_terminal(board: TangoBoard) -> bool:
        if not board.is_complete():
            return False
        for _, line, half in TangoChecker._lines(board):
            if any(line.count(s) != half for s in SYMBOLS):
                return False
            if longest_run(line) > 2:
                return False
        return all(
            c.satisfied(board.value_at(c.a), board.value_at(c.b)) for c in board.constraints
        )

    @staticmethod
    def is_dead_end(board: TangoBoard) -> bool:
        """A filled cell already breaks a rule, or an empty cell has no legal symbol left."""
        if TangoChecker.find_violations(board):
            return True
        open_cells = {m.pos for m in TangoChecker.legal_moves(board)}
        return any(pos not in open_cells for pos in board.empties())

    @staticmethod
    def find_violations(board: TangoBoard) -> List[str]:
        violations = []
        for name, line, half in TangoChecker._lines(board):
            if longest_run(line) > 2:
                violations.append(f"{name} has a run of {longest_run(line)}")
            for s in SYMBOLS:
                if line.count(s) > half:
                    violations.append(f"{name} has {line.count(s)} of {s} (max {half})")
        for constraint in board.constraints:
            a, b = board.value_at(constraint.a), board.value_at(constraint.b)
            if a is not None and b is not None and not constraint.satisfied(a, b):
                violations.append(f"{constraint.kind} constraint {constraint.a}-{constraint.b} is broken")
        return violations
