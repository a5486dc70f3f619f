import json

import numpy as np
import pytest

from Solver.puzzle import (
    EQUAL,
    MOON,
    OPPOSITE,
    SUN,
    Constraint,
    InvalidSpecification,
    QueensBoard,
    TangoBoard,
    load_puzzle,
    longest_run,
    puzzle_from_dict,
    puzzle_to_dict,
    run_lengths,
    save_puzzle,
)

from conftest import BOARD_1_REGIONS, COLUMN_REGIONS_4, TANGO_SOLVED_4


# ---------- helpers ----------

def test_run_lengths_skip_empty_cells():
    assert run_lengths(["S", "S", None, "S", "M"]) == [("S", 2), ("S", 1), ("M", 1)]
    assert longest_run(["S", "S", None, "S", "M"]) == 2
    assert longest_run([None, None]) == 0


def test_board_neighbourhoods():
    board = QueensBoard.from_regions(4, 4, COLUMN_REGIONS_4)
    assert sorted(board.moore_neighbourhood((0, 0))) == [(0, 1), (1, 0), (1, 1)]
    assert len(board.moore_neighbourhood((1, 1))) == 8
    assert sorted(board.von_neumann_neighbourhood((0, 0))) == [(0, 1), (1, 0)]


# ---------- Queens ----------

def test_queens_regions_grouped(board_1):
    regions = board_1.regions()
    assert sorted(regions) == list(range(8))
    assert sum(len(cells) for cells in regions.values()) == 64
    assert board_1.region_of((7, 7)) == 7
    assert board_1.region_size(7) == 3
    assert board_1.region_grid().shape == (8, 8)
    assert np.array_equal(board_1.region_grid().flatten(), np.array(BOARD_1_REGIONS))


def test_queens_rejects_non_square():
    with pytest.raises(InvalidSpecification):
        QueensBoard.from_regions(2, 4, [0, 1] * 4)


def test_queens_rejects_wrong_region_count():
    with pytest.raises(InvalidSpecification):
        QueensBoard.from_regions(4, 4, [0, 1, 2, 2] * 4)


def test_queens_rejects_bad_cell_count_and_ids():
    with pytest.raises(InvalidSpecification):
        QueensBoard.from_regions(4, 4, COLUMN_REGIONS_4[:-1])
    with pytest.raises(InvalidSpecification):
        QueensBoard.from_regions(2, 2, [0, -1, 0, -1])
    with pytest.raises(InvalidSpecification):
        QueensBoard.from_regions(0, 0, [])


def test_queens_rejects_queen_off_board():
    with pytest.raises(InvalidSpecification):
        QueensBoard.from_regions(4, 4, COLUMN_REGIONS_4, queens=[(4, 0)])


def test_queens_edits_return_new_boards(column_board):
    placed = column_board.place_queen((1, 2))
    assert placed is not column_board
    assert column_board.queens() == []
    assert placed.queens() == [(1, 2)]

    pruned = placed.prune([(0, 0), (3, 3)])
    assert pruned.cell((0, 0)).pruned
    assert not placed.cell((0, 0)).pruned

    cleared = pruned.clear((1, 2))
    assert cleared.queens() == []
    assert cleared.cell((3, 3)).pruned

    reset = pruned.reset()
    assert reset.queens() == []
    assert not any(c.pruned for c in reset.cells)
    assert reset == column_board


def test_put_queen_overrides_pruning_mark(column_board):
    pruned = column_board.prune([(1, 2)])
    placed = pruned.put_queen((1, 2))
    assert placed.cell((1, 2)).marked
    assert not placed.cell((1, 2)).pruned
    assert pruned.place_queen((1, 2)).cell((1, 2)).pruned


def test_queens_canonical_key(column_board):
    board = column_board.place_queen((0, 1)).prune([(0, 0)])
    assert board.canonical_key() == "xQ.." + "." * 12


# ---------- Tango ----------

def test_tango_rejects_odd_dimensions():
    with pytest.raises(InvalidSpecification):
        TangoBoard.from_grid(3, 3, [None] * 9)


def test_tango_rejects_unknown_symbol():
    with pytest.raises(InvalidSpecification):
        TangoBoard.from_grid(2, 2, ["S", "X", None, None])


def test_tango_rejects_bad_constraints():
    with pytest.raises(InvalidSpecification):
        TangoBoard.from_grid(4, 4, [None] * 16, [Constraint(EQUAL, (0, 0), (1, 1))])
    with pytest.raises(InvalidSpecification):
        TangoBoard.from_grid(4, 4, [None] * 16, [Constraint(EQUAL, (0, 3), (0, 4))])
    with pytest.raises(InvalidSpecification):
        TangoBoard.from_grid(4, 4, [None] * 16, [Constraint("maybe", (0, 0), (0, 1))])


def test_tango_rejects_empty_given():
    with pytest.raises(InvalidSpecification):
        TangoBoard.from_grid(2, 2, ["S", None, None, None], given=[1])


def test_tango_filled_cells_default_to_given():
    board = TangoBoard.from_grid(2, 2, ["S", None, None, "M"])
    assert board.given == frozenset({0, 3})
    assert board.is_given((0, 0))
    assert not board.is_given((0, 1))


def test_tango_edits_skip_given_cells():
    board = TangoBoard.from_grid(2, 2, ["S", None, None, None])
    assert board.set_value((0, 0), MOON) is board
    assert board.clear((0, 0)) is board

    updated = board.set_value((0, 1), MOON)
    assert updated.value_at((0, 1)) == MOON
    assert board.value_at((0, 1)) is None
    assert updated.reset() == board


def test_tango_set_value_rejects_unknown_symbol():
    board = TangoBoard.empty(2)
    with pytest.raises(ValueError):
        board.set_value((0, 0), "X")


def test_tango_lines_and_empties():
    board = TangoBoard.from_grid(4, 4, TANGO_SOLVED_4)
    assert board.get_row(1) == [MOON, SUN, MOON, SUN]
    assert board.get_column(0) == [SUN, MOON, SUN, MOON]
    assert board.is_complete()
    assert board.empties() == []


def test_constraint_helpers():
    c = Constraint(OPPOSITE, (0, 0), (0, 1))
    assert c.satisfied(SUN, MOON)
    assert not c.satisfied(SUN, SUN)
    assert c.touches((0, 1)) and not c.touches((1, 1))
    assert c.other((0, 0)) == (0, 1)


# ---------- JSON ----------

def test_puzzle_dict_round_trip():
    board = TangoBoard.from_grid(
        4, 4, ["S"] + [None] * 15, [Constraint(EQUAL, (0, 0), (0, 1))])
    assert puzzle_from_dict(puzzle_to_dict(board)) == board

    queens = QueensBoard.from_regions(8, 8, BOARD_1_REGIONS, queens=[(0, 0)])
    assert puzzle_from_dict(puzzle_to_dict(queens)) == queens


def test_puzzle_from_dict_errors():
    with pytest.raises(InvalidSpecification):
        puzzle_from_dict({"family": "sudoku", "width": 4, "height": 4})
    with pytest.raises(InvalidSpecification):
        puzzle_from_dict({"family": "queens", "width": 4})
    with pytest.raises(InvalidSpecification):
        puzzle_from_dict({"family": "tango", "width": 2, "height": 2, "cells": [None] * 4,
                          "constraints": [{"type": "equal", "a": [0, 0]}]})
    with pytest.raises(InvalidSpecification):
        puzzle_from_dict(["queens"])


def test_puzzle_from_dict_rejects_malformed_fields():
    with pytest.raises(InvalidSpecification):
        puzzle_from_dict({"family": "queens", "width": 2, "height": 2, "regions": 5})
    with pytest.raises(InvalidSpecification):
        puzzle_from_dict({"family": "queens", "width": 4, "height": 4,
                          "regions": COLUMN_REGIONS_4, "queens": [5]})
    with pytest.raises(InvalidSpecification):
        puzzle_from_dict({"family": "tango", "width": 2, "height": 2, "cells": None})
    with pytest.raises(InvalidSpecification):
        puzzle_from_dict({"family": "tango", "width": 2, "height": 2, "cells": "SMMS"})
    with pytest.raises(InvalidSpecification):
        puzzle_from_dict({"family": "tango", "width": 2, "height": 2,
                          "cells": ["S", None, None, None], "given": ["x"]})


def test_save_and_load_puzzle(tmp_path, board_1):
    path = tmp_path / "board.json"
    save_puzzle(board_1, str(path))
    assert json.loads(path.read_text())["family"] == "queens"
    assert load_puzzle(str(path)) == board_1
