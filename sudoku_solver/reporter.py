"""Print grids, solutions and the verbose search trace on the terminal."""

from __future__ import annotations

from typing import Optional

import typer

from .engine import SearchTrace
from .grid import Cell, Grid, format_cell, render_grid
from .validation import Violation, describe_violation


def depth_marker(depth: Optional[int]) -> str:
    return "" if depth is None else f"{{{depth}}}"


def print_pass(title: str, grid: Grid, depth: Optional[int] = None, options: bool = False) -> None:
    """Print a titled grid, every line prefixed with the depth marker if given."""
    marker = depth_marker(depth)
    typer.echo(f"{marker}{title}")
    for line in render_grid(grid, options=options):
        typer.echo(f"{marker}{line}")


def print_violation(violation: Violation) -> None:
    typer.echo(describe_violation(violation))


class EchoTrace(SearchTrace):
    """Search trace written with ``typer.echo``.

    Solutions are always printed; options grids, trials and dead ends only
    when ``verbose`` is set.
    """

    def __init__(self, verbose: bool = False) -> None:
        self.verbose = verbose

    def options(self, depth: int, grid: Grid) -> None:
        if self.verbose:
            print_pass("Options:", grid, depth, options=True)

    def trial(self, depth: int, row: int, col: int, cell: Cell) -> None:
        if self.verbose:
            typer.echo(
                f"{depth_marker(depth)}Checking alternative in cell [{row}, {col}]:"
                f"{format_cell(cell, options=True)}:"
            )

    def dead_end(self, depth: int, row: int, col: int) -> None:
        if self.verbose:
            typer.echo(f"{depth_marker(depth)}Option w/o solution (lin={row}, col={col})")

    def solution(self, index: int, attempts: int, depth: int, grid: Grid) -> None:
        print_pass(
            f"Solution {index} in {attempts} attempts:",
            grid,
            depth if self.verbose else None,
        )
