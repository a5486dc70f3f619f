# Generator/regions.py
# Build Queens puzzles by growing one region around each seeded queen
# Regions expand cell by cell into orthogonal neighbours, weighted by growth rate

from __future__ import annotations
import numpy as np
from typing import List, Optional, Tuple

from Solver.puzzle import QueensBoard
from Generator.options import (
    EXHAUSTED,
    GENERATED,
    INVALID,
    GenerationResult,
    RegionGrowthOptions,
)

UNASSIGNED = -1
ORTHOGONAL = [(-1, 0), (1, 0), (0, -1), (0, 1)]


def _has_adjacent_queens(columns: np.ndarray) -> bool:
    """
    Queens sit at (row, columns[row]). Rows and columns are already unique,
    so only queens on consecutive rows can touch.
    """
    return bool(np.any(np.abs(np.diff(columns)) <= 1))


def _draw_queen_columns(size: int, rng: np.random.Generator,
                        max_attempts: int) -> Tuple[Optional[np.ndarray], int]:
    """Redraw column permutations until no two queens touch."""
    for attempt in range(1, max_attempts + 1):
        columns = rng.permutation(size)
        if not _has_adjacent_queens(columns):
            return columns, attempt
    return None, max_attempts


def _frontier(regions: np.ndarray) -> List[Tuple[int, int]]:
    """Unassigned cells with at least one assigned orthogonal neighbour."""
    size = regions.shape[0]
    out = []
    for r, c in zip(*np.nonzero(regions == UNASSIGNED)):
        for dr, dc in ORTHOGONAL:
            nr, nc = r + dr, c + dc
            if 0 <= nr < size and 0 <= nc < size and regions[nr, nc] != UNASSIGNED:
                out.append((int(r), int(c)))
                break
    return out


def _pick_region(regions: np.ndarray, growth_rates: np.ndarray, cell: Tuple[int, int],
                 rng: np.random.Generator) -> int:
    """Choose among the cell's assigned neighbours, weighted by their region's growth rate."""
    size = regions.shape[0]
    r, c = cell
    neighbours = []
    for dr, dc in ORTHOGONAL:
        nr, nc = r + dr, c + dc
        if 0 <= nr < size and 0 <= nc < size and regions[nr, nc] != UNASSIGNED:
            neighbours.append(int(regions[nr, nc]))

    weights = growth_rates[neighbours]
    total = weights.sum()
    if total <= 0:
        return neighbours[rng.integers(len(neighbours))]
    return neighbours[rng.choice(len(neighbours), p=weights / total)]


def grow_regions(columns: np.ndarray, rng: np.random.Generator) -> Optional[np.ndarray]:
    """
    Grow one region per queen until every cell belongs to a region.

    Args:
        columns: queen column per row; region i is seeded at (i, columns[i])
        rng: random generator

    Returns:
        (size, size) region-id array, or None if growth stalls before covering the board
    """
    size = len(columns)
    regions = np.full((size, size), UNASSIGNED, dtype=int)
    for row, col in enumerate(columns):
        regions[row, col] = row
    growth_rates = rng.random(size)

    # Each step assigns exactly one cell
    for _ in range(size * size - size):
        frontier = _frontier(regions)
        if not frontier:
            return None
        cell = frontier[rng.integers(len(frontier))]
        regions[cell] = _pick_region(regions, growth_rates, cell, rng)

    if np.any(regions == UNASSIGNED):
        return None
    return regions


def generate_queens(size: int, options: Optional[RegionGrowthOptions] = None) -> GenerationResult:
    """
    Generate a Queens puzzle of the given size.

    The seeded queens satisfy every rule by construction, so the puzzle always
    has at least that solution; it is returned as `solution`.
    """
    options = options or RegionGrowthOptions()
    if not isinstance(size, int) or size < 1:
        return GenerationResult(status=INVALID, message=f"Size must be a positive integer, got {size!r}")

    rng = np.random.default_rng(options.seed)
    columns, attempts = _draw_queen_columns(size, rng, options.max_attempts)
    if columns is None:
        return GenerationResult(
            status=EXHAUSTED, attempts=attempts,
            message=f"No non-touching queen layout found in {attempts} attempts")

    regions = grow_regions(columns, rng)
    if regions is None:
        return GenerationResult(status=EXHAUSTED, attempts=attempts,
                                message="Region growth stalled before covering the board")

    queens = [(row, int(col)) for row, col in enumerate(columns)]
    board = QueensBoard.from_regions(size, size, regions.flatten().tolist())
    return GenerationResult(
        status=GENERATED,
        board=board,
        solution=board.place_queens(queens),
        attempts=attempts,
        message=f"Generated {size}x{size} Queens puzzle",
    )
