#!/usr/bin/env python3
"""
Grid Puzzle Solver - Main Entry Point

Usage:
    python -m Solver.main data/json/puzzle.json
    python -m Solver.main --compare data/json/puzzle.json
    python -m Solver.main  # Solves all puzzles in data/json/
"""

import sys
import os
import json
from pathlib import Path

from .puzzle import InvalidSpecification, load_puzzle
from .solver import MAX_SOLVER_ITERATIONS, SearchSolver
from .output import SolutionFormatter
from .diagnostics import SolverDiagnostics

# ============================================================================
# CONFIGURATION
# ============================================================================
PUZZLE_PATH = "data/json/queens_8.json"   # Puzzle to solve by default
OUTPUT_DIR = "data/debug"                  # Base output directory
SOLVE_ALL = True                          # Set True to solve all JSON puzzles

# --- Solver Strategy Configuration ---

USE_HEURISTICS = True
# Order candidate moves by heuristic score before pushing them
# - True: most promising candidate is explored first
# - False: candidates are explored in reverse legal-move order
# RECOMMENDED: True

MAX_ITERATIONS = MAX_SOLVER_ITERATIONS
# Maximum number of boards popped from the frontier for a single puzzle
# ============================================================================


def solve_puzzle(input_path: str, output_dir: str = None, verbose: bool = True,
                 use_heuristics: bool = USE_HEURISTICS,
                 max_iterations: int = MAX_ITERATIONS):
    """
    Solve a single puzzle and save results.

    Args:
        input_path: Path to input JSON file
        output_dir: Directory for output files (default: data/debug/<puzzle_name>/)
        verbose: Print detailed solving progress
        use_heuristics: Enable heuristic move ordering
        max_iterations: Iteration cap for the search

    Returns:
        (result, board) where either may be None if the file could not be loaded
    """
    puzzle_name = Path(input_path).stem

    if output_dir is None:
        project_root = Path(__file__).parent.parent
        output_dir = project_root / OUTPUT_DIR / puzzle_name

    output_dir = Path(output_dir)

    print(f"\n{'='*60}")
    print(f"Loading puzzle: {input_path}")
    print(f"Output directory: {output_dir}")
    print(f"{'='*60}")

    try:
        board = load_puzzle(str(input_path))
    except (InvalidSpecification, OSError, json.JSONDecodeError) as e:
        print(f"\nError while loading {input_path}: {e}")
        return None, None

    # ---------------------------
    # Configure and run solver
    # ---------------------------
    solver = SearchSolver(
        board,
        max_iterations=max_iterations,
        verbose=verbose,
        use_heuristics=use_heuristics
    )

    if verbose:
        print("\nSolver Configuration:")
        print(f"  Family: {board.family}")
        print(f"  Heuristic ordering: {'ON' if use_heuristics else 'OFF'}")
        print(f"  Iteration cap: {max_iterations}")
        print(SolutionFormatter.format_grid_visualization(board))

    result = solver.solve()

    # ---------------------------
    # Post-solve output
    # ---------------------------
    if result.solved:
        print(f"\n{'='*60}")
        print("SUCCESS! Puzzle solved ✓")
        print(f"{'='*60}")

        output_dir.mkdir(parents=True, exist_ok=True)
        json_output = output_dir / "solution.json"
        text_output = output_dir / "solution.txt"

        SolutionFormatter.save_solution(result.board, result, str(json_output))
        SolutionFormatter.save_human_readable(result.board, result, str(text_output))

        if verbose:
            print("\n" + SolutionFormatter.format_solution_human_readable(result.board, result))
            print(SolutionFormatter.format_grid_visualization(result.board))
    else:
        print(f"\n{'='*60}")
        print("FAILED: Could not solve puzzle ✗")
        print(f"{'='*60}")
        if verbose:
            SolverDiagnostics.print_summary(result, board)

    return result, board


def solve_all_puzzles(data_dir: str = None, output_dir: str = None,
                      use_heuristics: bool = USE_HEURISTICS,
                      max_iterations: int = MAX_ITERATIONS):
    """
    Solve all puzzles in data/json/ (or a specified directory)
    """
    if data_dir is None:
        project_root = Path(__file__).parent.parent
        data_dir = project_root / "data" / "json"

    data_path = Path(data_dir)
    if not data_path.exists():
        print(f"Error: Directory not found: {data_dir}")
        return []

    json_files = sorted(data_path.glob("*.json"))
    if not json_files:
        print(f"No JSON puzzles found in {data_dir}")
        return []

    print(f"\nFound {len(json_files)} puzzle(s) to solve")
    print("\nSolver Configuration:")
    print(f"  Heuristic ordering: {'ON' if use_heuristics else 'OFF'}")
    print(f"  Iteration cap per puzzle: {max_iterations}\n")

    results = []

    for i, json_file in enumerate(json_files, 1):
        print(f"\n[{i}/{len(json_files)}] Solving {json_file.name}...")

        puzzle_output = Path(output_dir) / json_file.stem if output_dir else None
        result, board = solve_puzzle(
            str(json_file),
            output_dir=puzzle_output,
            verbose=False,
            use_heuristics=use_heuristics,
            max_iterations=max_iterations
        )

        results.append({
            'file': json_file.name,
            'family': board.family if board else None,
            'solved': bool(result and result.solved),
            'iterations': result.iterations if result else None,
            'dead_ends': result.stats.get('dead_ends') if result else None,
            'failure': SolverDiagnostics.classify(result) if result else 'UNREADABLE'
        })

        status = "✓ SOLVED" if results[-1]['solved'] else "✗ FAILED"
        print(f"  {status}")

    # ---------------------------
    # Print summary
    # ---------------------------
    print(f"\n{'='*60}")
    print("SUMMARY")
    print(f"{'='*60}")
    solved_count = sum(1 for r in results if r['solved'])
    total_count = len(results)
    solve_rate = (solved_count / total_count * 100) if total_count > 0 else 0

    print(f"Solved: {solved_count}/{total_count} puzzles ({solve_rate:.1f}%)")
    print(f"{'='*60}\n")

    for r in results:
        status = "✓" if r['solved'] else "✗"
        print(f"{status} {r['file']:30s}", end="")
        if r['solved']:
            print(f" - {r['family']}, {r['iterations']} iterations, {r['dead_ends']} dead ends")
        else:
            print(f" - Failed ({r['failure']})")

    print(f"\n{'='*60}")
    print(f"Final Solve Rate: {solve_rate:.1f}% ({solved_count}/{total_count})")
    print(f"{'='*60}")

    return results


def run_comparison_test(input_path: str, max_iterations: int = MAX_ITERATIONS):
    """
    Solve the same puzzle with and without heuristic ordering to compare performance.
    """
    puzzle_name = Path(input_path).stem

    configs = [
        {'name': 'Heuristic ordering (Recommended)', 'use_heuristics': True},
        {'name': 'Legal-move order', 'use_heuristics': False},
    ]

    print(f"\n{'='*60}")
    print(f"COMPARISON TEST: {puzzle_name}")
    print(f"Testing {len(configs)} different solver configurations")
    print(f"{'='*60}\n")

    try:
        board = load_puzzle(str(input_path))
    except (InvalidSpecification, OSError, json.JSONDecodeError) as e:
        print(f"Error while loading {input_path}: {e}")
        return []

    results = []

    for config in configs:
        print(f"\n--- Testing: {config['name']} ---")

        solver = SearchSolver(board, max_iterations=max_iterations, verbose=False,
                              use_heuristics=config['use_heuristics'])
        result = solver.solve()

        results.append({
            'config': config['name'],
            'solved': result.solved,
            'iterations': result.iterations,
            'dead_ends': result.stats['dead_ends'],
            'duration_ms': result.stats['duration_ms']
        })

        status = "✓ SOLVED" if result.solved else "✗ FAILED"
        print(f"{status} - {result.iterations} iterations, {result.stats['dead_ends']} dead ends")

    print(f"\n{'='*60}")
    print("COMPARISON SUMMARY")
    print(f"{'='*60}")
    print(f"{'Configuration':<34} {'Result':<8} {'Iter.':<8} {'Dead':<8} {'ms':<8}")
    print(f"{'-'*34} {'-'*8} {'-'*8} {'-'*8} {'-'*8}")

    for r in results:
        status = "SOLVED" if r['solved'] else "FAILED"
        print(f"{r['config']:<34} {status:<8} {r['iterations']:<8} {r['dead_ends']:<8} {r['duration_ms']:<8}")

    print(f"\n{'='*60}")
    return results


def _resolve(path: str) -> str:
    if not os.path.isabs(path):
        project_root = Path(__file__).parent.parent
        path = project_root / path
    if not os.path.exists(path):
        print(f"Error: File not found: {path}")
        sys.exit(1)
    return str(path)


def main():
    """Main entry point"""

    if len(sys.argv) > 1:
        command = sys.argv[1]

        # Comparison test mode
        if command == "--compare" or command == "-c":
            if len(sys.argv) < 3:
                print("Usage: python -m Solver.main --compare <puzzle.json>")
                sys.exit(1)
            run_comparison_test(_resolve(sys.argv[2]))
            return

        # Solve specific puzzle
        result, _ = solve_puzzle(_resolve(command), verbose=True)
        if result is None or not result.solved:
            sys.exit(1)

    elif SOLVE_ALL:
        print("SOLVE_ALL mode enabled - solving all puzzles in data/json/")
        solve_all_puzzles()

    else:
        print(f"Using configured PUZZLE_PATH: {PUZZLE_PATH}")
        solve_puzzle(_resolve(PUZZLE_PATH), verbose=True)


if __name__ == "__main__":
    main()
