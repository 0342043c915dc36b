"""Backtracking search on top of propagation.

Every call of :func:`solve_grid` works on its own copy of the grid, so a
trial digit never leaks into sibling branches. The only shared state is the
:class:`SearchSession` passed down the recursion.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Tuple

from .grid import SIZE, Cell, Grid, candidate_count, candidates, copy_grid, digit_mask, is_empty, is_fixed
from .input_manager import parse_grid
from .propagation import NO_OPEN_CELLS, stabilize
from .validation import Violation, describe_violation, find_violation, is_solution

log = logging.getLogger(__name__)


class NonCompliantGridError(ValueError):
    """The initial grid repeats a digit in a row, column or block."""

    def __init__(self, violation: Violation) -> None:
        super().__init__(describe_violation(violation))
        self.violation = violation


class UnsolvableGridError(ValueError):
    """The search space was exhausted without a solution."""


class SearchTrace:
    """Receives search events. The default implementation ignores them."""

    def options(self, depth: int, grid: Grid) -> None:
        pass

    def trial(self, depth: int, row: int, col: int, cell: Cell) -> None:
        pass

    def dead_end(self, depth: int, row: int, col: int) -> None:
        pass

    def solution(self, index: int, attempts: int, depth: int, grid: Grid) -> None:
        pass


@dataclass
class SearchSession:
    """Counters and hooks of one solving run."""

    requested: int = 1
    attempts: int = 0
    found: int = 0
    depth: int = 0
    solutions: List[Grid] = field(default_factory=list)
    trace: SearchTrace = field(default_factory=SearchTrace)
    cancel: Optional[Callable[[], bool]] = None
    deadline: Optional[float] = None
    cancelled: bool = False

    @property
    def satisfied(self) -> bool:
        return self.found >= self.requested

    def should_stop(self) -> bool:
        """Poll the cancellation hook and the deadline; latches once fired."""
        if self.cancelled:
            return True
        if self.cancel is not None and self.cancel():
            self.cancelled = True
        elif self.deadline is not None and time.monotonic() >= self.deadline:
            self.cancelled = True
        if self.cancelled:
            log.info("Search cancelled after %d attempts", self.attempts)
        return self.cancelled


@dataclass
class SolveResult:
    solutions: List[Grid] = field(default_factory=list)
    attempts: int = 0
    violation: Optional[Violation] = None
    cancelled: bool = False

    @property
    def solved(self) -> bool:
        return bool(self.solutions)


def _first_ambiguous(options: Grid) -> Tuple[int, int]:
    for r in range(SIZE):
        for c in range(SIZE):
            if candidate_count(options[r][c]) >= 2:
                return r, c
    raise LookupError("No ambiguous cell left")


def _dead_end_cell(options: Grid, working: Grid) -> Tuple[int, int]:
    violation = find_violation(options)
    if violation is not None:
        return violation.row, violation.col
    cells = [(r, c) for r in range(SIZE) for c in range(SIZE)]
    for r, c in cells:
        if is_empty(options[r][c]):
            return r, c
    for r, c in cells:
        if not is_fixed(working[r][c]):
            return r, c
    return 0, 0


def _emit(working: Grid, session: SearchSession) -> None:
    session.found += 1
    session.solutions.append(copy_grid(working))
    log.debug("Solution %d found after %d attempts", session.found, session.attempts)
    session.trace.solution(session.found, session.attempts, session.depth, working)


def _explore(grid: Grid, session: SearchSession) -> bool:
    working = copy_grid(grid)
    options, min_options = stabilize(working)
    session.trace.options(session.depth, options)

    if min_options in (0, 1, NO_OPEN_CELLS):
        if is_solution(working):
            _emit(working, session)
            return True
        row, col = _dead_end_cell(options, working)
        session.trace.dead_end(session.depth, row, col)
        return False

    row, col = _first_ambiguous(options)
    found = False
    for digit in candidates(options[row][col]):
        if session.satisfied or session.cancelled:
            break
        working[row][col] = digit_mask(digit)
        session.trace.trial(session.depth, row, col, working[row][col])
        if solve_grid(working, session):
            found = True
    return found


def solve_grid(grid: Grid, session: SearchSession) -> bool:
    """Solve ``grid`` recursively, recording solutions in ``session``.

    Dead branches simply return False. The caller's grid is never modified.
    """
    if session.should_stop():
        return False
    session.depth += 1
    session.attempts += 1
    try:
        return _explore(grid, session)
    finally:
        session.depth -= 1


def solve(
    grid: Grid,
    max_solutions: int = 1,
    trace: Optional[SearchTrace] = None,
    timeout: Optional[float] = None,
    cancel: Optional[Callable[[], bool]] = None,
) -> SolveResult:
    """Check the initial grid, then search for up to ``max_solutions`` completions."""
    if max_solutions < 1:
        raise ValueError(f"max_solutions must be at least 1, got {max_solutions}")

    violation = find_violation(grid)
    if violation is not None:
        log.info("Initial grid rejected at [%d, %d]", violation.row, violation.col)
        return SolveResult(violation=violation)

    session = SearchSession(
        requested=max_solutions,
        trace=trace or SearchTrace(),
        cancel=cancel,
        deadline=time.monotonic() + timeout if timeout is not None else None,
    )
    solve_grid(grid, session)
    log.debug(
        "Search finished: %d solution(s), %d attempts", session.found, session.attempts
    )
    return SolveResult(
        solutions=session.solutions,
        attempts=session.attempts,
        cancelled=session.cancelled,
    )


def solve_puzzle(lines: Iterable[str], max_solutions: int = 1, strict: bool = False) -> Grid:
    """Parse ``lines`` and return the first solution found."""
    result = solve(parse_grid(lines, strict=strict), max_solutions=max_solutions)
    if result.violation is not None:
        raise NonCompliantGridError(result.violation)
    if not result.solutions:
        raise UnsolvableGridError(f"Sudoku puzzle cannot be solved ({result.attempts} attempts)")
    return result.solutions[0]


__all__ = [
    "NonCompliantGridError",
    "SearchSession",
    "SearchTrace",
    "SolveResult",
    "UnsolvableGridError",
    "solve",
    "solve_grid",
    "solve_puzzle",
]
