import json
from typing import Dict, List, Optional
from datetime import datetime

from .constraints import QueensChecker, TangoChecker
from .puzzle import EQUAL, Board, QueensBoard, TangoBoard, puzzle_to_dict
from .solver import SolveResult


class SolutionFormatter:
    """Formats boards and solve results for output"""

    @staticmethod
    def _violations(board: Board) -> List[str]:
        if isinstance(board, QueensBoard):
            return QueensChecker.find_violations(board)
        return TangoChecker.find_violations(board)

    @staticmethod
    def _is_solved(board: Board) -> bool:
        if isinstance(board, QueensBoard):
            return QueensChecker.is_terminal(board)
        return TangoChecker.is_terminal(board)

    @staticmethod
    def format_solution_json(board: Board, result: Optional[SolveResult] = None) -> Dict:
        """
        Format a board (and the solve that produced it) as JSON
        """
        solution = {
            'puzzle_info': {
                'family': board.family,
                'width': board.width,
                'height': board.height,
                'solved': SolutionFormatter._is_solved(board),
                'timestamp': datetime.now().isoformat()
            },
            'board': puzzle_to_dict(board),
            'violations': SolutionFormatter._violations(board),
        }
        if result is not None:
            solution['solving_stats'] = dict(result.stats)
            solution['status'] = result.status
            solution['iterations'] = result.iterations
            solution['frontier_size'] = result.frontier_size
            solution['message'] = result.message
        return solution

    @staticmethod
    def _queens_grid(board: QueensBoard) -> List[str]:
        lines = []
        for r in range(board.height):
            row = []
            for cell in board.get_row(r):
                if cell.marked:
                    row.append('Q')
                elif cell.pruned:
                    row.append('x')
                else:
                    row.append(chr(ord('a') + cell.region % 26))
            lines.append("  " + " ".join(row))
        return lines

    @staticmethod
    def _tango_grid(board: TangoBoard) -> List[str]:
        # Cells sit on even columns/rows of the text grid; constraint markers between them
        between = {}
        for constraint in board.constraints:
            (ar, ac), (br, bc) = sorted([constraint.a, constraint.b])
            between[(ar + br, ac + bc)] = '=' if constraint.kind == EQUAL else 'x'

        lines = []
        for tr in range(2 * board.height - 1):
            row = []
            for tc in range(2 * board.width - 1):
                if tr % 2 == 0 and tc % 2 == 0:
                    value = board.value_at((tr // 2, tc // 2))
                    row.append(value if value is not None else '·')
                else:
                    row.append(between.get((tr, tc), ' '))
            lines.append("  " + "".join(row).rstrip())
        return lines

    @staticmethod
    def format_grid_visualization(board: Board) -> str:
        """
        Create a text-based grid visualization.
        Queens: Q queen, x pruned, letters for regions.
        Tango: S/M symbols, · empty, =/x constraints between cells.
        """
        lines = ["\nGRID VISUALIZATION:"]
        lines.append("-" * (board.width * 2 + 3))
        if isinstance(board, QueensBoard):
            lines.extend(SolutionFormatter._queens_grid(board))
        else:
            lines.extend(SolutionFormatter._tango_grid(board))
        lines.append("-" * (board.width * 2 + 3))
        return "\n".join(lines)

    @staticmethod
    def format_solution_human_readable(board: Board, result: Optional[SolveResult] = None) -> str:
        """
        Format a board and solve outcome as human-readable text
        """
        lines = []
        lines.append("=" * 60)
        lines.append(f"{board.family.upper()} PUZZLE SOLUTION")
        lines.append("=" * 60)
        lines.append(f"\nBoard: {board.width}x{board.height}")

        if isinstance(board, QueensBoard):
            lines.append(f"Regions: {len(board.regions())}")
            lines.append(f"Queens placed: {len(board.queens())}")
            for q in board.queens():
                lines.append(f"  Queen at ({q[0]},{q[1]}) in region {board.region_of(q)}")
        else:
            lines.append(f"Constraints: {len(board.constraints)}")
            lines.append(f"Given cells: {len(board.given)}")
            lines.append(f"Filled cells: {board.size - len(board.empties())}/{board.size}")

        if result is not None:
            lines.append(f"\nStatus: {result.status} ({result.message})")
            lines.append(f"Iterations: {result.iterations} | Frontier at end: {result.frontier_size}")

        lines.append("\n" + "=" * 60)
        lines.append("RULE VALIDATION:")
        lines.append("-" * 60)
        violations = SolutionFormatter._violations(board)
        if violations:
            for v in violations:
                lines.append(f"✗ {v}")
        else:
            lines.append("✓ No rule violations")
        lines.append("=" * 60)

        return "\n".join(lines)

    @staticmethod
    def save_solution(board: Board, result: Optional[SolveResult], output_path: str):
        """
        Save solution to JSON file
        """
        solution = SolutionFormatter.format_solution_json(board, result)

        with open(output_path, 'w') as f:
            json.dump(solution, f, indent=2)

        print(f"\n✓ Solution saved to: {output_path}")

    @staticmethod
    def save_human_readable(board: Board, result: Optional[SolveResult], output_path: str):
        """
        Save human-readable solution to text file
        """
        text = SolutionFormatter.format_solution_human_readable(board, result)
        text += "\n\n" + SolutionFormatter.format_grid_visualization(board)

        with open(output_path, 'w') as f:
            f.write(text)

        print(f"✓ Human-readable solution saved to: {output_path}")
