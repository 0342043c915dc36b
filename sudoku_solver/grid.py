"""Grid model: a 9x9 board of 9-bit candidate masks.

Bit ``k`` of a cell stands for digit ``k + 1``. A cell with one bit set is
fixed, a cell with several bits is still ambiguous and a zero cell is either
unset (input grids) or a contradiction (option grids).
"""

from __future__ import annotations

from typing import List, Optional

SIZE = 9
BLOCK = 3
ALL_DIGITS = 0o777
UNSET = 0

Cell = int
Grid = List[List[Cell]]


def digit_mask(digit: int) -> Cell:
    """Return the single-candidate cell for ``digit`` (1..9)."""
    if not 1 <= digit <= SIZE:
        raise ValueError(f"Digit out of range: {digit}")
    return 1 << (digit - 1)


def candidate_count(cell: Cell) -> int:
    return (cell & ALL_DIGITS).bit_count()


def is_fixed(cell: Cell) -> bool:
    cell &= ALL_DIGITS
    return cell != 0 and cell & (cell - 1) == 0


def is_empty(cell: Cell) -> bool:
    return cell & ALL_DIGITS == 0


def candidates(cell: Cell) -> List[int]:
    """Digits still possible in ``cell``, ascending."""
    return [d for d in range(1, SIZE + 1) if cell & (1 << (d - 1))]


def digit_of(cell: Cell) -> Optional[int]:
    """The digit of a fixed cell, ``None`` otherwise."""
    if not is_fixed(cell):
        return None
    return cell.bit_length()


def block_index(row: int, col: int) -> int:
    return (row // BLOCK) * BLOCK + (col // BLOCK)


# Block number of every (row, col), indexed BLOCK_OF[row][col].
BLOCK_OF = [[block_index(r, c) for c in range(SIZE)] for r in range(SIZE)]


def block_cells(row: int, col: int) -> List[tuple[int, int]]:
    """Coordinates of the 3x3 block containing (row, col)."""
    top = (row // BLOCK) * BLOCK
    left = (col // BLOCK) * BLOCK
    return [(r, c) for r in range(top, top + BLOCK) for c in range(left, left + BLOCK)]


def empty_grid() -> Grid:
    return [[UNSET] * SIZE for _ in range(SIZE)]


def copy_grid(grid: Grid) -> Grid:
    return [row[:] for row in grid]


def format_cell(cell: Cell, options: bool = False) -> str:
    """Render a cell as its digit (or '.') or, for options, as nine positions."""
    if options:
        return "".join(str(d) if cell & (1 << (d - 1)) else "." for d in range(1, SIZE + 1))
    digit = digit_of(cell)
    return str(digit) if digit else "."


def render_row(row: List[Cell], options: bool = False) -> str:
    chunks = []
    for col, cell in enumerate(row):
        separator = "|" if col % BLOCK == BLOCK - 1 else ":"
        chunks.append(format_cell(cell, options) + separator)
    return "".join(chunks)


def render_grid(grid: Grid, options: bool = False) -> List[str]:
    """Nine printable lines, ':' between cells and '|' at block borders."""
    return [render_row(row, options) for row in grid]


def serialize_grid(grid: Grid) -> str:
    """Return the grid as one 81-character string for easy comparison."""
    return "".join(format_cell(cell) for row in grid for cell in row)


__all__ = [
    "ALL_DIGITS",
    "BLOCK",
    "BLOCK_OF",
    "Cell",
    "Grid",
    "SIZE",
    "UNSET",
    "block_cells",
    "block_index",
    "candidate_count",
    "candidates",
    "copy_grid",
    "digit_mask",
    "digit_of",
    "empty_grid",
    "format_cell",
    "is_empty",
    "is_fixed",
    "render_grid",
    "render_row",
    "serialize_grid",
]
