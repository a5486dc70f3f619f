from Solver.propagation import (
    collapse_queens,
    collapse_tango,
    find_prunable_positions,
    forced_values,
)
from Solver.puzzle import MOON, SUN, QueensBoard

from conftest import tango_rows


ROW_CONFINED_REGIONS = [
    0, 0, 1, 1,
    1, 1, 1, 1,
    2, 2, 2, 2,
    3, 3, 3, 3,
]


def test_prunes_rest_of_row_when_region_confined_to_it():
    board = QueensBoard.from_regions(4, 4, ROW_CONFINED_REGIONS)
    assert find_prunable_positions(board) == [(0, 2), (0, 3)]

    pruned = board.prune(find_prunable_positions(board))
    assert find_prunable_positions(pruned) == []


def test_single_cell_region_gets_its_queen():
    regions = [
        0, 1, 1, 1,
        1, 1, 2, 2,
        3, 3, 2, 2,
        3, 3, 3, 3,
    ]
    board = QueensBoard.from_regions(4, 4, regions)
    collapsed = collapse_queens(board)
    assert collapsed.cell((0, 0)).marked
    assert board.queens() == []


def test_collapse_queens_is_a_fixpoint(board_1):
    once = collapse_queens(board_1)
    assert collapse_queens(once) == once

    placed = collapse_queens(board_1.place_queen((0, 0)))
    assert collapse_queens(placed) == placed


def test_collapse_queens_only_adds_information(board_1):
    collapsed = collapse_queens(board_1)
    for before, after in zip(board_1.cells, collapsed.cells):
        assert after.region == before.region
        assert after.marked or not before.marked
        assert after.pruned or not before.pruned


def test_tango_forced_by_half_count():
    # Three suns already: every other cell of the row must be a moon
    board = tango_rows(
        "S.S.S.",
        "......",
        "......",
        "......",
        "......",
        "......",
    )
    collapsed = collapse_tango(board)
    assert collapsed.get_row(0) == [SUN, MOON, SUN, MOON, SUN, MOON]
    for r in range(1, 6):
        assert collapsed.get_row(r) == [None] * 6


def test_tango_forced_by_run_length():
    board = tango_rows(
        "SS....",
        "......",
        "......",
        "......",
        "......",
        "......",
    )
    assert forced_values(board) == {(0, 2): MOON}
    collapsed = collapse_tango(board)
    assert collapsed.get_row(0) == [SUN, SUN, MOON, None, None, None]


def test_collapse_tango_is_a_fixpoint():
    board = tango_rows(
        "S.S.S.",
        "M.....",
        "......",
        "......",
        "......",
        "......",
    )
    once = collapse_tango(board)
    assert collapse_tango(once) == once
    assert forced_values(once) == {}


def test_collapse_tango_leaves_free_board_alone(empty_tango):
    assert collapse_tango(empty_tango) is empty_tango
