"""Small web UI and JSON endpoint for the solver."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional

from aiohttp import web
from jinja2 import Environment, FileSystemLoader, select_autoescape

from .engine import solve
from .grid import Grid, format_cell
from .input_manager import GridFormatError, parse_grid

log = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
TEMPLATE_ENV = Environment(
    loader=FileSystemLoader(str(BASE_DIR)),
    autoescape=select_autoescape(),
)

MAX_WEB_SOLUTIONS = 50
WEB_TIMEOUT = 60.0


def grid_rows(grid: Grid) -> List[str]:
    return ["".join(format_cell(cell) for cell in row) for row in grid]


def parse_count(raw: object) -> int:
    """Requested solution count, clamped to 1..MAX_WEB_SOLUTIONS."""
    if isinstance(raw, str) and raw.strip().isdigit():
        count = int(raw)
    elif isinstance(raw, int) and not isinstance(raw, bool):
        count = raw
    else:
        raise ValueError(f"solutions must be an integer, got {raw!r}")
    if count < 1:
        raise ValueError("solutions must be at least 1")
    return min(count, MAX_WEB_SOLUTIONS)


async def run_solver(lines: List[str], count: int) -> Dict[str, object]:
    """Solve in a worker thread and describe the outcome as plain data."""
    try:
        grid = parse_grid(lines, strict=True)
    except GridFormatError as exc:
        return {
            "status": "invalid",
            "error": str(exc),
            "attempts": 0,
            "cancelled": False,
            "solutions": [],
            "violation": None,
        }

    result = await asyncio.to_thread(solve, grid, count, None, WEB_TIMEOUT)
    if result.violation is not None:
        status = "non_compliant"
    elif result.solutions:
        status = "solved"
    elif result.cancelled:
        status = "timeout"
    else:
        status = "unsolvable"
    log.info("Web solve: %s after %d attempts", status, result.attempts)
    return {
        "status": status,
        "attempts": result.attempts,
        "cancelled": result.cancelled,
        "solutions": [grid_rows(solution) for solution in result.solutions],
        "violation": asdict(result.violation) if result.violation else None,
    }


def render_page(
    puzzle: str = "",
    count: int = 1,
    outcome: Optional[Dict[str, object]] = None,
    message: Optional[str] = None,
) -> web.Response:
    template = TEMPLATE_ENV.get_template("ui_template.html")
    return web.Response(
        text=template.render(
            puzzle=puzzle,
            count=count,
            outcome=outcome,
            message=message,
            max_solutions=MAX_WEB_SOLUTIONS,
        ),
        content_type="text/html",
    )


async def handle_index(_: web.Request) -> web.Response:
    return render_page()


async def handle_form(request: web.Request) -> web.Response:
    form = await request.post()
    puzzle = str(form.get("puzzle", ""))
    try:
        count = parse_count(form.get("solutions", "1") or "1")
    except (TypeError, ValueError):
        return render_page(puzzle, 1, message="Number of solutions must be a positive integer.")

    outcome = await run_solver(puzzle.splitlines(), count)
    return render_page(puzzle, count, outcome=outcome)


async def handle_api(request: web.Request) -> web.Response:
    try:
        body = await request.json()
    except ValueError:
        return web.json_response({"error": "Request body must be JSON."}, status=400)
    if not isinstance(body, dict):
        return web.json_response({"error": "Request body must be a JSON object."}, status=400)

    puzzle = body.get("puzzle")
    if isinstance(puzzle, str):
        lines = puzzle.splitlines()
    elif isinstance(puzzle, list) and all(isinstance(line, str) for line in puzzle):
        lines = puzzle
    else:
        return web.json_response({"error": "puzzle must be a string or a list of strings."}, status=400)

    try:
        count = parse_count(body.get("solutions", 1))
    except (TypeError, ValueError):
        return web.json_response({"error": "solutions must be a positive integer."}, status=400)

    outcome = await run_solver(lines, count)
    return web.json_response(outcome)


def create_app() -> web.Application:
    app = web.Application()
    app.router.add_get("/", handle_index)
    app.router.add_post("/solve", handle_form)
    app.router.add_post("/api/solve", handle_api)
    return app


__all__ = ["MAX_WEB_SOLUTIONS", "create_app", "parse_count", "run_solver"]
