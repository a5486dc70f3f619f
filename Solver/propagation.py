"""
Constraint propagation ("collapse") to a fixpoint

Each pass only adds information (queens, pruning marks, symbols), so the
loop terminates after at most one pass per cell. Contradictions are not
reported here; the returned board is simply left for the checkers to reject.
"""

from collections import defaultdict
from typing import Dict, List, Set

from .constraints import QueensChecker, TangoChecker
from .puzzle import Position, QueensBoard, TangoBoard


# -----------------------------------------------------------------------------
# Queens
# -----------------------------------------------------------------------------
def _single_placements(board: QueensBoard) -> Set[Position]:
    """Placements that are the only legal option in some row, column or region."""
    by_row: Dict[int, List[Position]] = defaultdict(list)
    by_col: Dict[int, List[Position]] = defaultdict(list)
    by_region: Dict[int, List[Position]] = defaultdict(list)
    for move in QueensChecker.legal_moves(board):
        r, c = move.pos
        by_row[r].append(move.pos)
        by_col[c].append(move.pos)
        by_region[board.region_of(move.pos)].append(move.pos)

    forced: Set[Position] = set()
    for groups in (by_row, by_col, by_region):
        for positions in groups.values():
            if len(positions) == 1:
                forced.add(positions[0])
    return forced


def find_prunable_positions(board: QueensBoard) -> List[Position]:
    """
    Cells that cannot hold a queen, by elimination:
      - if the open cells of an unoccupied region share one row (column),
        the rest of that row (column) belongs to that region's queen
      - if the open cells of an unoccupied row (column) share one region,
        the rest of that region must stay empty
    "Open" means legal and not already pruned.
    """
    open_cells = [m.pos for m in QueensChecker.legal_moves(board) if not board.cell(m.pos).pruned]
    occupied_rows = {r for r, _ in board.queens()}
    occupied_cols = {c for _, c in board.queens()}
    occupied_regions = {board.region_of(q) for q in board.queens()}

    prunable: Set[Position] = set()

    by_region: Dict[int, List[Position]] = defaultdict(list)
    for pos in open_cells:
        by_region[board.region_of(pos)].append(pos)
    for region, cells in by_region.items():
        if region in occupied_regions:
            continue
        keep = set(cells)
        rows = {r for r, _ in cells}
        cols = {c for _, c in cells}
        if len(rows) == 1:
            prunable.update(p for p in board.row_positions(rows.pop()) if p not in keep)
        if len(cols) == 1:
            prunable.update(p for p in board.column_positions(cols.pop()) if p not in keep)

    by_row: Dict[int, Set[int]] = defaultdict(set)
    by_col: Dict[int, Set[int]] = defaultdict(set)
    for pos in open_cells:
        by_row[pos[0]].add(board.region_of(pos))
        by_col[pos[1]].add(board.region_of(pos))
    for row, regions in by_row.items():
        if row not in occupied_rows and len(regions) == 1:
            (region,) = regions
            prunable.update(p for p in board.regions()[region] if p[0] != row)
    for col, regions in by_col.items():
        if col not in occupied_cols and len(regions) == 1:
            (region,) = regions
            prunable.update(p for p in board.regions()[region] if p[1] != col)

    return sorted(p for p in prunable if not board.cell(p).pruned)


def collapse_queens(board: QueensBoard) -> QueensBoard:
    """Commit forced queens and add pruning marks until nothing changes."""
    current = board
    while True:
        changed = False

        forced = _single_placements(current)
        if forced:
            current = current.place_queens(sorted(forced))
            changed = True

        prunable = find_prunable_positions(current)
        if prunable:
            current = current.prune(prunable)
            changed = True

        if not changed:
            return current


# -----------------------------------------------------------------------------
# Tango
# -----------------------------------------------------------------------------
def forced_values(board: TangoBoard) -> Dict[Position, str]:
    """Empty cells with exactly one legal symbol, mapped to that symbol."""
    options: Dict[Position, List[str]] = defaultdict(list)
    for move in TangoChecker.legal_moves(board):
        options[move.pos].append(move.value)
    return {pos: values[0] for pos, values in options.items() if len(values) == 1}


def collapse_tango(board: TangoBoard) -> TangoBoard:
    """Fill every cell whose value is forced until nothing changes."""
    current = board
    while True:
        forced = forced_values(current)
        if not forced:
            return current
        updated = current.set_values(forced)
        if updated is current:
            return current
        current = updated
