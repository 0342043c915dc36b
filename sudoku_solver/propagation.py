"""Constraint propagation and consolidation of forced cells."""

from __future__ import annotations

from typing import Tuple

from .grid import ALL_DIGITS, BLOCK_OF, SIZE, Grid, empty_grid, is_fixed
from .validation import group_masks, is_compliant

# Minimum reported by set_options when the input has no open cell left.
NO_OPEN_CELLS = SIZE + 1


def set_options(grid: Grid) -> Tuple[Grid, int]:
    """Derive the candidates of every open cell from the fixed ones.

    Fixed cells are copied as they are. Any other cell gets every digit not
    already fixed in its row, column or block. Only what is fixed in ``grid``
    at the start of the call is used, so cells resolved here do not narrow
    their peers until the next call.

    Returns the options grid and the smallest candidate count among the
    cells that were open in ``grid`` (``NO_OPEN_CELLS`` when there were none).
    """
    rows, cols, blocks, _ = group_masks(grid)

    options = empty_grid()
    min_options = NO_OPEN_CELLS
    for r in range(SIZE):
        for c in range(SIZE):
            cell = grid[r][c]
            if is_fixed(cell):
                options[r][c] = cell
                continue
            derived = ALL_DIGITS & ~(rows[r] | cols[c] | blocks[BLOCK_OF[r][c]])
            options[r][c] = derived
            count = derived.bit_count()
            if count < min_options:
                min_options = count
    return options, min_options


def consolidate_options(options: Grid, solution: Grid) -> int:
    """Copy single-candidate cells of ``options`` into open cells of ``solution``.

    Nothing is copied when ``options`` breaks the rules. Returns the number
    of newly fixed cells.
    """
    if not is_compliant(options):
        return 0
    consolidated = 0
    for r in range(SIZE):
        for c in range(SIZE):
            if not is_fixed(solution[r][c]) and is_fixed(options[r][c]):
                solution[r][c] = options[r][c]
                consolidated += 1
    return consolidated


def stabilize(grid: Grid) -> Tuple[Grid, int]:
    """Alternate propagation and consolidation on ``grid`` until it settles.

    ``grid`` is updated in place. Stops as soon as the minimum option count
    is anything but 1, or when a pass fixes no new cell.
    """
    while True:
        options, min_options = set_options(grid)
        if min_options != 1:
            return options, min_options
        if not consolidate_options(options, grid):
            return options, min_options


__all__ = ["NO_OPEN_CELLS", "consolidate_options", "set_options", "stabilize"]
