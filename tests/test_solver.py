from collections import Counter

from Solver.constraints import QueensChecker, TangoChecker
from Solver.puzzle import EQUAL, MOON, SUN, Constraint, QueensBoard, TangoBoard
from Solver.rules import QueensRules, TangoRules, rules_for
from Solver.solver import CANCELLED, EXHAUSTED, SOLVED, SearchSolver, solve


def assert_valid_queens_solution(board):
    queens = board.queens()
    assert len(queens) == board.width
    assert Counter(r for r, _ in queens) == Counter(range(board.height))
    assert Counter(c for _, c in queens) == Counter(range(board.width))
    assert sorted(board.region_of(q) for q in queens) == sorted(board.regions())
    for q in queens:
        assert not any(n in queens for n in board.moore_neighbourhood(q))


def test_rules_for_picks_family(board_1, empty_tango):
    assert isinstance(rules_for(board_1), QueensRules)
    assert isinstance(rules_for(empty_tango), TangoRules)


def test_solves_board_1(board_1):
    result = solve(board_1)
    assert result.status == SOLVED
    assert result.solved
    assert_valid_queens_solution(result.board)
    assert QueensChecker.is_terminal(result.board)
    # Regions are untouched by solving
    assert result.board.region_grid().tolist() == board_1.region_grid().tolist()


def test_solves_board_1_without_heuristics(board_1):
    result = solve(board_1, use_heuristics=False)
    assert result.solved
    assert_valid_queens_solution(result.board)


def test_solves_empty_tango(empty_tango):
    result = solve(empty_tango)
    assert result.solved
    assert TangoChecker.is_terminal(result.board)


def test_solution_keeps_givens_and_constraints():
    cells = [SUN, None, None, None] + [None] * 12
    board = TangoBoard.from_grid(4, 4, cells, [Constraint(EQUAL, (0, 0), (1, 0))])
    result = solve(board)
    assert result.solved
    assert result.board.value_at((0, 0)) == SUN
    assert result.board.value_at((1, 0)) == SUN
    assert result.board.constraints == board.constraints


def test_already_solved_board_returns_immediately(column_board):
    solved = column_board.place_queens([(0, 1), (1, 3), (2, 0), (3, 2)])
    result = solve(solved)
    assert result.solved
    assert result.iterations == 1
    assert result.board is solved


def test_unsolvable_board_exhausts_frontier():
    board = TangoBoard.from_grid(2, 2, [SUN, MOON, MOON, SUN], [Constraint(EQUAL, (0, 0), (0, 1))])
    result = solve(board)
    assert result.status == EXHAUSTED
    assert result.board is None
    assert result.frontier_size == 0


def test_unsolvable_queens_board():
    # Any two queens on a 2x2 board touch
    board = QueensBoard.from_regions(2, 2, [0, 0, 1, 1])
    result = solve(board)
    assert result.status == EXHAUSTED
    assert result.frontier_size == 0


def test_iteration_cap(board_1):
    result = solve(board_1, max_iterations=1)
    assert result.status == EXHAUSTED
    assert result.board is None
    assert result.iterations == 1
    assert "cap" in result.message


def test_cancel_from_step_callback(board_1):
    result = solve(board_1, on_step=lambda board, i: False)
    assert result.status == CANCELLED
    assert result.iterations == 1
    assert result.board is None


def test_step_callback_sees_each_state_once(board_1):
    seen = []

    def on_step(board, iteration):
        seen.append(board.canonical_key())
        assert iteration == len(seen)

    result = solve(board_1, on_step=on_step)
    assert result.solved
    assert len(seen) == result.iterations
    assert len(seen) == len(set(seen))


def test_repeated_solves_do_not_share_state(board_1):
    first = solve(board_1)
    second = solve(board_1)
    assert first.board == second.board
    assert first.iterations == second.iterations


def test_stats_are_reported(board_1, capsys):
    solver = SearchSolver(board_1, verbose=True)
    result = solver.solve()
    for key in ('iterations', 'expanded', 'candidates', 'duplicates', 'dead_ends',
                'pushed', 'max_frontier', 'duration_ms'):
        assert key in result.stats
    assert result.stats['iterations'] == result.iterations
    assert "Solving Statistics:" in capsys.readouterr().out


def test_quiet_by_default(board_1, capsys):
    solve(board_1)
    assert capsys.readouterr().out == ""
