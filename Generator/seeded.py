# Generator/seeded.py
# Build Tango puzzles from a few random seed cells plus =/x constraints
# The solver is run silently on the seed to obtain a completion; constraints
# are read off that completion so the published puzzle is solvable by construction

from __future__ import annotations
import numpy as np
from typing import List, Optional, Tuple

from Solver.constraints import TangoChecker
from Solver.puzzle import EQUAL, OPPOSITE, SYMBOLS, Constraint, Position, TangoBoard
from Solver.solver import solve
from Generator.options import (
    EXHAUSTED,
    GENERATED,
    INVALID,
    GenerationResult,
    SeededOptions,
)


def _seed_board(size: int, options: SeededOptions, rng: np.random.Generator) -> TangoBoard:
    """Place a random number of random symbols, keeping only legal placements."""
    board = TangoBoard.empty(size)
    low = options.min_initial_cells
    high = max(options.max_initial_cells, low + 1)
    remaining = int(rng.integers(low, high))

    for i in rng.permutation(size * size):
        if remaining <= 0:
            break
        pos = board.position(int(i))
        symbol = SYMBOLS[rng.integers(len(SYMBOLS))]
        if TangoChecker.is_valid_move(board, pos, symbol):
            board = board.set_value(pos, symbol)
            remaining -= 1

    return board.with_givens()


def adjacent_pairs(size: int) -> List[Tuple[Position, Position]]:
    """Every unordered pair of orthogonally adjacent cells on a size x size board."""
    pairs = []
    for r in range(size):
        for c in range(size):
            if c + 1 < size:
                pairs.append(((r, c), (r, c + 1)))
            if r + 1 < size:
                pairs.append(((r, c), (r + 1, c)))
    return pairs


def _pick_constraints(seeded: TangoBoard, solution: TangoBoard, options: SeededOptions,
                      rng: np.random.Generator) -> List[Constraint]:
    size = seeded.width
    pairs = []
    for a, b in adjacent_pairs(size):
        given_a, given_b = seeded.is_given(a), seeded.is_given(b)
        if options.allow_constraints_on_initial_cells:
            # A constraint between two givens tells the player nothing
            if given_a and given_b:
                continue
        elif given_a or given_b:
            continue
        pairs.append((a, b))

    low = options.min_constraints
    high = max(options.max_constraints, low + 1)
    count = min(int(rng.integers(low, high)), len(pairs))

    constraints = []
    for k in rng.permutation(len(pairs))[:count]:
        a, b = pairs[int(k)]
        kind = EQUAL if solution.value_at(a) == solution.value_at(b) else OPPOSITE
        constraints.append(Constraint(kind, a, b))
    return constraints


def generate_tango(size: int, options: Optional[SeededOptions] = None) -> GenerationResult:
    """
    Generate a Tango puzzle of the given (even) size.

    Returns:
        GenerationResult whose board holds only the seeded cells (as givens)
        and the constraint list; `solution` is the completion the constraints
        were read from.
    """
    options = options or SeededOptions()
    if not isinstance(size, int) or size < 2 or size % 2:
        return GenerationResult(status=INVALID, message=f"Size must be a positive even integer, got {size!r}")

    rng = np.random.default_rng(options.seed)

    for attempt in range(1, options.max_attempts + 1):
        seeded = _seed_board(size, options, rng)
        result = solve(seeded, max_iterations=options.solver_iterations, verbose=False)
        if not result.solved:
            continue

        constraints = _pick_constraints(seeded, result.board, options, rng)
        board = seeded.with_constraints(constraints)
        given_cells = sorted(board.position(i) for i in board.given)
        return GenerationResult(
            status=GENERATED,
            board=board,
            constraints=constraints,
            given_cells=given_cells,
            solution=result.board.with_constraints(constraints),
            attempts=attempt,
            message=f"Generated {size}x{size} Tango puzzle",
        )

    return GenerationResult(
        status=EXHAUSTED, attempts=options.max_attempts,
        message=f"No solvable seed found in {options.max_attempts} attempts")
