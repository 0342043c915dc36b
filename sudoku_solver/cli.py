"""Command line entry point: solve puzzles from text or serve the web UI."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

import typer
from aiohttp import web

from .engine import solve as solve_sudoku
from .input_manager import GridFormatError, read_grid
from .reporter import EchoTrace, print_pass, print_violation
from .web import create_app

app = typer.Typer(help="Solve 9x9 Sudoku puzzles by constraint propagation and backtracking.")


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@app.callback()
def main(
    log_level: LogLevel = typer.Option(
        LogLevel.WARNING, "--log-level", envvar="SUDOKU_LOG_LEVEL", case_sensitive=False, help="Logging level."
    ),
) -> None:
    logging.basicConfig(
        level=log_level.value,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def solve(
    source: typer.FileText = typer.Argument("-", help="Puzzle file, '-' reads standard input."),
    solutions: int = typer.Option(
        1, "--solutions", "-s", min=1, envvar="SUDOKU_SOLUTIONS", help="Number of solutions to find."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", envvar="SUDOKU_VERBOSE", help="Print every pass of the search."
    ),
    strict: bool = typer.Option(False, "--strict", help="Reject short lines and unknown characters."),
    timeout: Optional[float] = typer.Option(None, "--timeout", min=0.0, help="Stop searching after this many seconds."),
) -> None:
    typer.echo(f"Solutions to find: {solutions}")
    try:
        grid = read_grid(source, strict=strict)
    except GridFormatError as exc:
        typer.echo(f"Invalid puzzle: {exc}", err=True)
        raise typer.Exit(code=2)

    print_pass("Initial Sudoku:", grid, 0 if verbose else None)
    result = solve_sudoku(grid, max_solutions=solutions, trace=EchoTrace(verbose), timeout=timeout)
    if result.violation is not None:
        print_violation(result.violation)
        raise typer.Exit(code=1)
    if result.cancelled:
        typer.echo(f"Search stopped after {result.attempts} attempts (timeout).")
    elif not result.solved:
        typer.echo(f"No solution found after {result.attempts} attempts.")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", envvar="SUDOKU_HOST", help="Host interface for the UI."),
    port: int = typer.Option(8080, "--port", "-p", envvar="SUDOKU_PORT", help="Port for the UI."),
) -> None:
    typer.echo(f"Open http://{host}:{port} in a browser to use the solver.")
    web.run_app(create_app(), host=host, port=port)


if __name__ == "__main__":
    app()
