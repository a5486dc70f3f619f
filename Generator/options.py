"""
Generator configuration and results
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from Solver.puzzle import Board, Constraint


GENERATED = "generated"
EXHAUSTED = "exhausted"
INVALID = "invalid"


@dataclass
class RegionGrowthOptions:
    """Queens generation"""
    max_attempts: int = 1000  # column permutations drawn before giving up
    seed: Optional[int] = None


@dataclass
class SeededOptions:
    """Tango generation"""
    max_attempts: int = 50          # seeded boards tried before giving up
    min_initial_cells: int = 2      # seeded cell count is drawn from [min, max)
    max_initial_cells: int = 10
    min_constraints: int = 4        # constraint count is drawn from [min, max)
    max_constraints: int = 16
    allow_constraints_on_initial_cells: bool = True  # pairs with one given end allowed
    solver_iterations: int = 100    # cap for the silent solvability check
    seed: Optional[int] = None


@dataclass
class GenerationResult:
    status: str
    board: Optional[Board] = None
    constraints: List[Constraint] = field(default_factory=list)
    given_cells: List[Tuple[int, int]] = field(default_factory=list)
    solution: Optional[Board] = None
    attempts: int = 0
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status == GENERATED
