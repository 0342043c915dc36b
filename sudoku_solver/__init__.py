"""Sudoku solver combining constraint propagation with backtracking search."""

from .engine import (
    NonCompliantGridError,
    SearchSession,
    SearchTrace,
    SolveResult,
    UnsolvableGridError,
    solve,
    solve_grid,
    solve_puzzle,
)
from .input_manager import GridFormatError, parse_grid, read_grid
from .validation import Violation, find_violation, is_compliant, is_solution

__all__ = [
    "GridFormatError",
    "NonCompliantGridError",
    "SearchSession",
    "SearchTrace",
    "SolveResult",
    "UnsolvableGridError",
    "Violation",
    "find_violation",
    "is_compliant",
    "is_solution",
    "parse_grid",
    "read_grid",
    "solve",
    "solve_grid",
    "solve_puzzle",
]
