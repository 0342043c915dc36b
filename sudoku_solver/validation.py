"""Rule checks on fixed cells: compliance and complete solutions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .grid import BLOCK_OF, SIZE, Grid, block_cells, digit_of, is_fixed


@dataclass(frozen=True)
class Violation:
    """First fixed cell whose digit is repeated in its row, column or block."""

    row: int
    col: int
    digit: int


def describe_violation(violation: Violation) -> str:
    return (
        f"The initial values are not compliant: check cell "
        f"[{violation.row}, {violation.col}] = {violation.digit}"
    )


def _collides(grid: Grid, row: int, col: int) -> bool:
    cell = grid[row][col]
    if any(r != row and grid[r][col] == cell for r in range(SIZE)):
        return True
    if any(c != col and grid[row][c] == cell for c in range(SIZE)):
        return True
    return any(
        (r, c) != (row, col) and grid[r][c] == cell for r, c in block_cells(row, col)
    )


def group_masks(grid: Grid) -> Tuple[List[int], List[int], List[int], bool]:
    """Union of the fixed cells of every row, column and block.

    The last item is False when a fixed digit repeats in some group.
    """
    rows = [0] * SIZE
    cols = [0] * SIZE
    blocks = [0] * SIZE
    compliant = True
    for r, line in enumerate(grid):
        block_row = BLOCK_OF[r]
        for c, cell in enumerate(line):
            if not is_fixed(cell):
                continue
            b = block_row[c]
            if cell & (rows[r] | cols[c] | blocks[b]):
                compliant = False
            rows[r] |= cell
            cols[c] |= cell
            blocks[b] |= cell
    return rows, cols, blocks, compliant


def find_violation(grid: Grid) -> Optional[Violation]:
    """Scan fixed cells in row-major order and return the first collision.

    Only fixed-vs-fixed repeats count; ambiguous and empty cells are never
    compared with each other.
    """
    if is_compliant(grid):
        return None
    for row in range(SIZE):
        for col in range(SIZE):
            cell = grid[row][col]
            if is_fixed(cell) and _collides(grid, row, col):
                return Violation(row=row, col=col, digit=digit_of(cell) or 0)
    return None


def is_compliant(grid: Grid) -> bool:
    return group_masks(grid)[3]


def is_solution(grid: Grid) -> bool:
    """True when every cell is fixed and no digit repeats."""
    if not all(is_fixed(cell) for row in grid for cell in row):
        return False
    return is_compliant(grid)


__all__ = ["Violation", "describe_violation", "find_violation", "group_masks", "is_compliant", "is_solution"]
