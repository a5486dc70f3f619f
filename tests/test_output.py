import json

from Solver.diagnostics import CANCELLED_BY_CALLER, CAP_REACHED, THRASHING, UNSOLVABLE, SolverDiagnostics
from Solver.main import solve_all_puzzles, solve_puzzle
from Solver.output import SolutionFormatter
from Solver.puzzle import EQUAL, MOON, SUN, Constraint, TangoBoard, save_puzzle
from Solver.solver import solve


def test_queens_grid_visualization(column_board):
    board = column_board.place_queen((0, 1)).prune([(0, 0)])
    text = SolutionFormatter.format_grid_visualization(board)
    assert "GRID VISUALIZATION:" in text
    assert "  x Q c d" in text
    assert "  a b c d" in text


def test_tango_grid_visualization():
    board = TangoBoard.from_grid(2, 2, [SUN, None, None, MOON], [Constraint(EQUAL, (0, 0), (0, 1))])
    lines = SolutionFormatter.format_grid_visualization(board).splitlines()
    assert "  S=·" in lines
    assert "  · M" in lines


def test_human_readable_solution(board_1):
    result = solve(board_1)
    text = SolutionFormatter.format_solution_human_readable(result.board, result)
    assert "QUEENS PUZZLE SOLUTION" in text
    assert "Queens placed: 8" in text
    assert "✓ No rule violations" in text
    assert "Status: solved" in text


def test_human_readable_lists_violations(column_board):
    board = column_board.place_queens([(0, 0), (0, 2)])
    text = SolutionFormatter.format_solution_human_readable(board)
    assert "✗ row 0 has 2 queens" in text


def test_solution_json(board_1, tmp_path):
    result = solve(board_1)
    data = SolutionFormatter.format_solution_json(result.board, result)
    assert data['puzzle_info']['solved'] is True
    assert data['puzzle_info']['family'] == "queens"
    assert len(data['board']['queens']) == 8
    assert data['status'] == "solved"
    assert data['violations'] == []

    path = tmp_path / "solution.json"
    SolutionFormatter.save_solution(result.board, result, str(path))
    assert json.loads(path.read_text())['iterations'] == result.iterations


def test_diagnostics_classify(board_1):
    assert SolverDiagnostics.classify(solve(board_1)) is None
    assert SolverDiagnostics.classify(solve(board_1, on_step=lambda b, i: False)) == CANCELLED_BY_CALLER
    assert SolverDiagnostics.classify(solve(board_1, max_iterations=1)) in (CAP_REACHED, THRASHING)

    stuck = TangoBoard.from_grid(2, 2, [SUN, MOON, MOON, SUN], [Constraint(EQUAL, (0, 0), (0, 1))])
    report = SolverDiagnostics.analyze_failure(solve(stuck), stuck)
    assert report['type'] == UNSOLVABLE
    assert report['starting_board_violates_rules']


def test_solve_puzzle_writes_outputs(board_1, tmp_path):
    puzzle_path = tmp_path / "board_1.json"
    save_puzzle(board_1, str(puzzle_path))

    out = tmp_path / "out"
    result, board = solve_puzzle(str(puzzle_path), output_dir=str(out), verbose=False)
    assert result.solved
    assert board == board_1
    assert (out / "solution.json").exists()
    assert (out / "solution.txt").exists()


def test_solve_puzzle_reports_bad_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text('{"family": "queens", "width": 3, "height": 3, "regions": [0, 0, 0, 0, 0, 0, 0, 0, 0]}')
    assert solve_puzzle(str(path), output_dir=str(tmp_path), verbose=False) == (None, None)

    path.write_text("not json")
    assert solve_puzzle(str(path), output_dir=str(tmp_path), verbose=False) == (None, None)


def test_solve_all_puzzles_skips_malformed_files(board_1, tmp_path):
    data_dir = tmp_path / "json"
    data_dir.mkdir()
    save_puzzle(board_1, str(data_dir / "a_board_1.json"))
    (data_dir / "b_broken.json").write_text('{"family": "tango", "width": 2, "height": 2, "cells": null}')

    results = solve_all_puzzles(str(data_dir), output_dir=str(tmp_path / "out"))
    assert [r['solved'] for r in results] == [True, False]
    assert results[1]['failure'] == 'UNREADABLE'
