"""
Puzzle generators

Queens boards are grown region by region around a random queen layout;
Tango boards are seeded, solved, and annotated with =/x constraints.
"""

from .options import INVALID, GenerationResult, RegionGrowthOptions, SeededOptions
from .regions import generate_queens
from .seeded import generate_tango


def generate(family: str, size: int, options=None) -> GenerationResult:
    """Generate a puzzle of the named family ("queens" or "tango")"""
    if family == "queens":
        return generate_queens(size, options)
    if family == "tango":
        return generate_tango(size, options)
    return GenerationResult(status=INVALID, message=f"Unknown puzzle family {family!r}")


__all__ = [
    'GenerationResult',
    'RegionGrowthOptions',
    'SeededOptions',
    'generate',
    'generate_queens',
    'generate_tango',
]
