# main.py
# Driver: generate puzzle(s) → save JSON → solve from scratch → print + save solution
# Usage: python main.py [queens|tango] [size] [count]

# ==================================================================
# CONFIGURATION: Easy Toggle
# ==================================================================
FAMILY = "queens"        # "queens" or "tango"
SIZE = 8                 # board side length (Tango needs an even size)
COUNT = 1                # how many puzzles to generate in one run
SEED = None              # set an int for reproducible boards
OUTPUT_DIR = "data/json"
SOLUTION_DIR = "data/debug"
# ==================================================================

import os, sys

from Generator import RegionGrowthOptions, SeededOptions, generate
from Solver.output import SolutionFormatter
from Solver.puzzle import save_puzzle
from Solver.solver import solve


def ensure_dir(p):
    os.makedirs(p, exist_ok=True)


def generator_options(family: str, seed):
    if family == "queens":
        return RegionGrowthOptions(seed=seed)
    return SeededOptions(seed=seed)


def process_puzzle(family: str, size: int, index: int, seed=None,
                   output_dir: str = OUTPUT_DIR, solution_dir: str = SOLUTION_DIR):
    """
    Generate one puzzle, write it to disk, then solve it from scratch.

    Returns:
        (GenerationResult, SolveResult or None)
    """
    name = f"{family}_{size}_{index}"

    print(f"\n{'='*70}")
    print(f"Generating {family} puzzle {index} ({size}x{size})")
    print(f"{'='*70}")

    generated = generate(family, size, generator_options(family, seed))
    if not generated.ok:
        print(f"✗ Generation {generated.status}: {generated.message}")
        return generated, None

    print(f"✓ {generated.message} after {generated.attempts} attempt(s)")
    if family == "tango":
        print(f"  Given cells: {len(generated.given_cells)} | Constraints: {len(generated.constraints)}")
    print(SolutionFormatter.format_grid_visualization(generated.board))

    ensure_dir(output_dir)
    puzzle_path = os.path.join(output_dir, f"{name}.json")
    save_puzzle(generated.board, puzzle_path)
    print(f"[output] Puzzle JSON: {puzzle_path}")

    print(f"\n{'='*70}")
    print("Solving")
    print(f"{'='*70}")
    result = solve(generated.board, verbose=True)

    if result.solved:
        print(SolutionFormatter.format_grid_visualization(result.board))
        board_dir = os.path.join(solution_dir, name)
        ensure_dir(board_dir)
        SolutionFormatter.save_solution(result.board, result, os.path.join(board_dir, "solution.json"))
        SolutionFormatter.save_human_readable(result.board, result, os.path.join(board_dir, "solution.txt"))
    else:
        print(f"✗ {result.message}")

    return generated, result


def main():
    family = sys.argv[1] if len(sys.argv) > 1 else FAMILY
    size = int(sys.argv[2]) if len(sys.argv) > 2 else SIZE
    count = int(sys.argv[3]) if len(sys.argv) > 3 else COUNT

    if family not in ("queens", "tango"):
        print(f"Error: unknown family {family!r} (expected queens or tango)")
        sys.exit(1)

    solved = 0
    for i in range(1, count + 1):
        seed = None if SEED is None else SEED + i - 1
        _, result = process_puzzle(family, size, i, seed=seed)
        if result is not None and result.solved:
            solved += 1

    print(f"\n{'='*70}")
    print(f"Done: {solved}/{count} generated puzzle(s) solved")
    print(f"{'='*70}")


if __name__ == "__main__":
    main()
