"""
Core data structures for Queens and Tango puzzle boards

Boards are immutable snapshots: every edit returns a new board, so a state
pushed onto the search frontier never changes underneath the solver.
"""
import json
from dataclasses import dataclass, field, replace
from functools import cached_property
from typing import Dict, FrozenSet, Iterable, List, Mapping, NamedTuple, Optional, Sequence, Tuple

import numpy as np


Position = Tuple[int, int]  # (row, col)

QUEEN = "Q"
SUN = "S"
MOON = "M"
SYMBOLS = (SUN, MOON)

EQUAL = "equal"
OPPOSITE = "opposite"
CONSTRAINT_KINDS = (EQUAL, OPPOSITE)


class InvalidSpecification(ValueError):
    """Raised when a puzzle description cannot form a valid board"""


def opposite(symbol: str) -> str:
    """Return the other Tango symbol"""
    return MOON if symbol == SUN else SUN


def run_lengths(values: Sequence[Optional[str]]) -> List[Tuple[str, int]]:
    """
    Run-length encode a line of cells.
    Empty cells break runs and are not reported.
    """
    runs: List[Tuple[str, int]] = []
    previous = None
    for value in values:
        if value is not None and value == previous:
            symbol, length = runs[-1]
            runs[-1] = (symbol, length + 1)
        elif value is not None:
            runs.append((value, 1))
        previous = value
    return runs


def longest_run(values: Sequence[Optional[str]]) -> int:
    """Length of the longest run of identical symbols (0 for an empty line)"""
    return max((length for _, length in run_lengths(values)), default=0)


class Move(NamedTuple):
    """A single placement: a queen, or a Tango symbol, at a position"""
    pos: Position
    value: str = QUEEN


@dataclass(frozen=True)
class Constraint:
    """Explicit relation between two orthogonally adjacent Tango cells"""
    kind: str
    a: Position
    b: Position

    def satisfied(self, value_a: Optional[str], value_b: Optional[str]) -> bool:
        if self.kind == EQUAL:
            return value_a == value_b
        return value_a != value_b

    def touches(self, pos: Position) -> bool:
        return pos == self.a or pos == self.b

    def other(self, pos: Position) -> Position:
        return self.b if pos == self.a else self.a

    def __repr__(self):
        symbol = "=" if self.kind == EQUAL else "x"
        return f"Constraint({self.a}{symbol}{self.b})"


@dataclass(frozen=True)
class QueensCell:
    """Cell of a Queens board"""
    region: int
    marked: bool = False  # holds a queen
    pruned: bool = False  # eliminated, cannot hold the region's queen


@dataclass(frozen=True)
class Board:
    """Grid geometry shared by both puzzle families"""
    width: int
    height: int

    @property
    def size(self) -> int:
        return self.width * self.height

    def index(self, pos: Position) -> int:
        return pos[0] * self.width + pos[1]

    def position(self, i: int) -> Position:
        return (i // self.width, i % self.width)

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos[0] < self.height and 0 <= pos[1] < self.width

    def positions(self) -> List[Position]:
        return [self.position(i) for i in range(self.size)]

    def row_positions(self, row: int) -> List[Position]:
        return [(row, col) for col in range(self.width)]

    def column_positions(self, col: int) -> List[Position]:
        return [(row, col) for row in range(self.height)]

    def moore_neighbourhood(self, pos: Position) -> List[Position]:
        """The up-to-8 cells touching pos, diagonals included"""
        r, c = pos
        out = []
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if (dr or dc) and self.in_bounds((r + dr, c + dc)):
                    out.append((r + dr, c + dc))
        return out

    def von_neumann_neighbourhood(self, pos: Position) -> List[Position]:
        """The up-to-4 cells sharing an edge with pos"""
        r, c = pos
        candidates = [(r - 1, c), (r, c - 1), (r, c + 1), (r + 1, c)]
        return [p for p in candidates if self.in_bounds(p)]


def _as_cell_list(values, what: str) -> list:
    if isinstance(values, (str, bytes)):
        raise InvalidSpecification(f"{what} must be a list, got a string")
    try:
        return list(values)
    except TypeError:
        raise InvalidSpecification(f"{what} must be a list, got {type(values).__name__}")


def _check_dimensions(width: int, height: int, count: int) -> None:
    if not isinstance(width, int) or not isinstance(height, int) or width <= 0 or height <= 0:
        raise InvalidSpecification(f"Board dimensions must be positive integers, got {width}x{height}")
    if count != width * height:
        raise InvalidSpecification(f"Expected {width * height} cells for a {width}x{height} board, got {count}")


# -----------------------------------------------------------------------------
# Queens
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class QueensBoard(Board):
    """One queen per row, column and region; queens may not touch"""
    cells: Tuple[QueensCell, ...]

    family = "queens"

    @classmethod
    def from_regions(cls, width: int, height: int, regions: Sequence[int],
                     queens: Iterable[Position] = ()) -> "QueensBoard":
        """Build a board from a row-major region-id grid and optional known queens"""
        regions = _as_cell_list(regions, "Regions")
        _check_dimensions(width, height, len(regions))
        if width != height:
            raise InvalidSpecification(f"Queens boards must be square, got {width}x{height}")
        for region in regions:
            if isinstance(region, bool) or not isinstance(region, (int, np.integer)) or region < 0:
                raise InvalidSpecification(f"Region ids must be non-negative integers, got {region!r}")
        distinct = len(set(regions))
        if distinct != width:
            raise InvalidSpecification(f"A {width}x{height} board needs {width} regions, got {distinct}")

        board = cls(width=width, height=height,
                    cells=tuple(QueensCell(region=int(r)) for r in regions))
        queens = [_parse_position(q) for q in queens]
        for q in queens:
            if not board.in_bounds(q):
                raise InvalidSpecification(f"Queen position {q} is outside the board")
        return board.place_queens(queens)

    # ---------- accessors ----------

    def cell(self, pos: Position) -> QueensCell:
        return self.cells[self.index(pos)]

    def get_row(self, row: int) -> List[QueensCell]:
        return [self.cell(p) for p in self.row_positions(row)]

    def get_column(self, col: int) -> List[QueensCell]:
        return [self.cell(p) for p in self.column_positions(col)]

    @cached_property
    def _regions(self) -> Dict[int, List[Position]]:
        grouped: Dict[int, List[Position]] = {}
        for i, cell in enumerate(self.cells):
            grouped.setdefault(cell.region, []).append(self.position(i))
        return grouped

    def regions(self) -> Dict[int, List[Position]]:
        """Region id -> positions in that region (row-major)"""
        return self._regions

    def region_of(self, pos: Position) -> int:
        return self.cell(pos).region

    def region_size(self, region: int) -> int:
        return len(self._regions.get(region, []))

    def queens(self) -> List[Position]:
        return [self.position(i) for i, cell in enumerate(self.cells) if cell.marked]

    def region_grid(self) -> np.ndarray:
        return np.array([c.region for c in self.cells], dtype=int).reshape(self.height, self.width)

    # ---------- edit primitives ----------

    def _with_cells(self, updates: Mapping[int, QueensCell]) -> "QueensBoard":
        if not updates:
            return self
        cells = list(self.cells)
        for i, cell in updates.items():
            cells[i] = cell
        return replace(self, cells=tuple(cells))

    def place_queen(self, pos: Position) -> "QueensBoard":
        return self.place_queens([pos])

    def place_queens(self, positions: Iterable[Position]) -> "QueensBoard":
        updates = {}
        for pos in positions:
            i = self.index(pos)
            if not self.cells[i].marked:
                updates[i] = replace(self.cells[i], marked=True)
        return self._with_cells(updates)

    def put_queen(self, pos: Position) -> "QueensBoard":
        """Place a queen by hand, overriding any pruning mark on the cell"""
        i = self.index(pos)
        return self._with_cells({i: replace(self.cells[i], marked=True, pruned=False)})

    def clear(self, pos: Position) -> "QueensBoard":
        """Remove the queen and the pruning mark at pos"""
        i = self.index(pos)
        return self._with_cells({i: replace(self.cells[i], marked=False, pruned=False)})

    def prune(self, positions: Iterable[Position]) -> "QueensBoard":
        updates = {}
        for pos in positions:
            i = self.index(pos)
            if not self.cells[i].pruned:
                updates[i] = replace(self.cells[i], pruned=True)
        return self._with_cells(updates)

    def reset(self) -> "QueensBoard":
        """Drop every queen and pruning mark, keeping the regions"""
        return replace(self, cells=tuple(QueensCell(region=c.region) for c in self.cells))

    def canonical_key(self) -> str:
        # Regions are fixed for the lifetime of a puzzle, so only marks matter
        return "".join("Q" if c.marked else ("x" if c.pruned else ".") for c in self.cells)


# -----------------------------------------------------------------------------
# Tango
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class TangoBoard(Board):
    """Balanced suns and moons, no run of three, explicit =/x constraints"""
    cells: Tuple[Optional[str], ...]
    constraints: Tuple[Constraint, ...] = ()
    given: FrozenSet[int] = field(default_factory=frozenset)

    family = "tango"

    @classmethod
    def from_grid(cls, width: int, height: int, cells: Sequence[Optional[str]],
                  constraints: Iterable[Constraint] = (),
                  given: Optional[Iterable[int]] = None) -> "TangoBoard":
        """
        Build a board from a row-major value grid.
        If `given` is omitted every filled cell is treated as a given.
        """
        cells = _as_cell_list(cells, "Cells")
        _check_dimensions(width, height, len(cells))
        if width % 2 or height % 2:
            raise InvalidSpecification(f"Tango boards need even dimensions, got {width}x{height}")
        for value in cells:
            if value is not None and value not in SYMBOLS:
                raise InvalidSpecification(f"Unknown symbol {value!r}, expected one of {SYMBOLS}")

        board = cls(width=width, height=height, cells=tuple(cells))
        constraints = tuple(constraints)
        for constraint in constraints:
            board._validate_constraint(constraint)

        if given is None:
            given_set = frozenset(i for i, v in enumerate(cells) if v is not None)
        else:
            try:
                given_set = frozenset(int(i) for i in given)
            except (TypeError, ValueError):
                raise InvalidSpecification(f"Given cells must be a list of cell indices, got {given!r}")
            for i in given_set:
                if not 0 <= i < board.size:
                    raise InvalidSpecification(f"Given cell index {i} is outside the board")
                if cells[i] is None:
                    raise InvalidSpecification(f"Given cell {board.position(i)} has no value")

        return replace(board, constraints=constraints, given=given_set)

    @classmethod
    def empty(cls, size: int) -> "TangoBoard":
        return cls.from_grid(size, size, [None] * (size * size))

    def _validate_constraint(self, constraint: Constraint) -> None:
        if constraint.kind not in CONSTRAINT_KINDS:
            raise InvalidSpecification(f"Unknown constraint type {constraint.kind!r}")
        for p in (constraint.a, constraint.b):
            if not self.in_bounds(p):
                raise InvalidSpecification(f"Constraint endpoint {p} is outside the board")
        if constraint.b not in self.von_neumann_neighbourhood(constraint.a):
            raise InvalidSpecification(
                f"Constraint endpoints {constraint.a} and {constraint.b} must be orthogonally adjacent")

    # ---------- accessors ----------

    def value_at(self, pos: Position) -> Optional[str]:
        return self.cells[self.index(pos)]

    def get_row(self, row: int) -> List[Optional[str]]:
        start = row * self.width
        return list(self.cells[start:start + self.width])

    def get_column(self, col: int) -> List[Optional[str]]:
        return list(self.cells[col::self.width])

    def empties(self) -> List[Position]:
        return [self.position(i) for i, v in enumerate(self.cells) if v is None]

    def is_complete(self) -> bool:
        return None not in self.cells

    def is_given(self, pos: Position) -> bool:
        return self.index(pos) in self.given

    def constraints_at(self, pos: Position) -> List[Constraint]:
        return [c for c in self.constraints if c.touches(pos)]

    # ---------- edit primitives ----------

    def set_values(self, values: Mapping[Position, Optional[str]]) -> "TangoBoard":
        """Assign several cells at once; given cells are left untouched"""
        cells = list(self.cells)
        changed = False
        for pos, value in values.items():
            if value is not None and value not in SYMBOLS:
                raise ValueError(f"Unknown symbol {value!r}")
            i = self.index(pos)
            if i in self.given or cells[i] == value:
                continue
            cells[i] = value
            changed = True
        return replace(self, cells=tuple(cells)) if changed else self

    def set_value(self, pos: Position, value: Optional[str]) -> "TangoBoard":
        return self.set_values({pos: value})

    def clear(self, pos: Position) -> "TangoBoard":
        return self.set_values({pos: None})

    def reset(self) -> "TangoBoard":
        """Clear every cell that is not a given"""
        cells = tuple(v if i in self.given else None for i, v in enumerate(self.cells))
        return replace(self, cells=cells)

    def with_givens(self) -> "TangoBoard":
        """Freeze the currently filled cells as givens"""
        return replace(self, given=frozenset(i for i, v in enumerate(self.cells) if v is not None))

    def with_constraints(self, constraints: Iterable[Constraint]) -> "TangoBoard":
        constraints = tuple(constraints)
        for constraint in constraints:
            self._validate_constraint(constraint)
        return replace(self, constraints=constraints)

    def canonical_key(self) -> str:
        # Constraints and givens are fixed for one puzzle; values decide identity
        return "".join(v or "." for v in self.cells)


# -----------------------------------------------------------------------------
# JSON persistence
# -----------------------------------------------------------------------------
def _parse_position(raw) -> Position:
    try:
        row, col = raw
        return (int(row), int(col))
    except (TypeError, ValueError):
        raise InvalidSpecification(f"Invalid position {raw!r}, expected [row, col]")


def puzzle_from_dict(data: Dict) -> Board:
    """Build a board from a puzzle description dict"""
    try:
        family = data["family"]
        width, height = data["width"], data["height"]
    except KeyError as e:
        raise InvalidSpecification(f"Puzzle description is missing {e}")
    except TypeError:
        raise InvalidSpecification(f"Puzzle description must be an object, got {type(data).__name__}")

    if family == QueensBoard.family:
        if "regions" not in data:
            raise InvalidSpecification("Queens puzzle is missing 'regions'")
        queens = [_parse_position(q) for q in data.get("queens", [])]
        return QueensBoard.from_regions(width, height, data["regions"], queens)

    if family == TangoBoard.family:
        if "cells" not in data:
            raise InvalidSpecification("Tango puzzle is missing 'cells'")
        constraints = []
        for raw in data.get("constraints", []):
            try:
                kind = raw["type"]
                a, b = raw["a"], raw["b"]
            except (KeyError, TypeError):
                raise InvalidSpecification(f"Invalid constraint {raw!r}")
            constraints.append(Constraint(kind, _parse_position(a), _parse_position(b)))
        return TangoBoard.from_grid(width, height, data["cells"], constraints, data.get("given"))

    raise InvalidSpecification(f"Unknown puzzle family {family!r}")


def puzzle_to_dict(board: Board) -> Dict:
    """Inverse of puzzle_from_dict"""
    data = {"family": board.family, "width": board.width, "height": board.height}
    if isinstance(board, QueensBoard):
        data["regions"] = [c.region for c in board.cells]
        data["queens"] = [list(q) for q in board.queens()]
    else:
        data["cells"] = list(board.cells)
        data["constraints"] = [
            {"type": c.kind, "a": list(c.a), "b": list(c.b)} for c in board.constraints
        ]
        data["given"] = sorted(board.given)
    return data


def load_puzzle(json_path: str) -> Board:
    """Load a puzzle from a JSON file"""
    with open(json_path, 'r') as f:
        data = json.load(f)
    return puzzle_from_dict(data)


def save_puzzle(board: Board, json_path: str) -> None:
    with open(json_path, 'w') as f:
        json.dump(puzzle_to_dict(board), f, indent=2)
