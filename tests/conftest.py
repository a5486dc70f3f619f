import pytest

from Solver.puzzle import QueensBoard, TangoBoard


# 8x8 board with a unique solution
BOARD_1_REGIONS = [
    0, 0, 0, 0, 0, 0, 0, 0,
    0, 1, 1, 2, 0, 0, 0, 0,
    1, 1, 2, 2, 3, 4, 4, 0,
    5, 5, 2, 3, 3, 4, 0, 0,
    5, 5, 5, 5, 3, 6, 6, 0,
    5, 5, 5, 5, 5, 5, 6, 0,
    5, 5, 5, 5, 5, 5, 7, 7,
    5, 5, 5, 5, 5, 5, 5, 7,
]

# One region per column
COLUMN_REGIONS_4 = [0, 1, 2, 3] * 4

S, M = "S", "M"

# Complete, balanced, run-free 4x4 Tango grid
TANGO_SOLVED_4 = [
    S, M, S, M,
    M, S, M, S,
    S, M, S, M,
    M, S, M, S,
]


@pytest.fixture
def board_1():
    return QueensBoard.from_regions(8, 8, BOARD_1_REGIONS)


@pytest.fixture
def column_board():
    return QueensBoard.from_regions(4, 4, COLUMN_REGIONS_4)


@pytest.fixture
def empty_tango():
    return TangoBoard.empty(6)


def tango_rows(*rows):
    """Build a TangoBoard from row lists; '.' marks an empty cell."""
    cells = [None if v == "." else v for row in rows for v in row]
    return TangoBoard.from_grid(len(rows[0]), len(rows), cells)
