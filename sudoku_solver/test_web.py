"""Tests for the aiohttp UI and JSON endpoint."""

import asyncio

import aiohttp
from aiohttp import test_utils

from . import web

PUZZLE = "530070000600195000098000060800060003400803001700020006060000280000419005000080079"
SOLUTION = "534678912672195348198342567859761423426853791713924856961537284287419635345286179"


def _rows(flat):
    return [flat[i : i + 9] for i in range(0, 81, 9)]


async def _request(method, path, **kwargs):
    async with test_utils.TestClient(test_utils.TestServer(web.create_app())) as client:
        response = await client.request(method, path, **kwargs)
        if response.content_type == "application/json":
            return response.status, await response.json()
        return response.status, await response.text()


def test_index_renders_form():
    status, body = asyncio.run(_request("GET", "/"))
    assert status == 200
    assert "<form" in body
    assert 'name="puzzle"' in body


def test_api_solves_puzzle_lines():
    status, body = asyncio.run(_request("POST", "/api/solve", json={"puzzle": _rows(PUZZLE)}))
    assert status == 200
    assert body["status"] == "solved"
    assert body["solutions"] == [_rows(SOLUTION)]
    assert body["violation"] is None
    assert body["cancelled"] is False


def test_api_accepts_text_and_reports_violation():
    puzzle = "\n".join(["55......."] + ["........."] * 8)
    status, body = asyncio.run(_request("POST", "/api/solve", json={"puzzle": puzzle, "solutions": 3}))
    assert status == 200
    assert body["status"] == "non_compliant"
    assert body["violation"] == {"row": 0, "col": 0, "digit": 5}
    assert body["attempts"] == 0


def test_api_reports_invalid_text():
    status, body = asyncio.run(_request("POST", "/api/solve", json={"puzzle": "123"}))
    assert status == 200
    assert body["status"] == "invalid"
    assert "expected 9" in body["error"]
    assert body["cancelled"] is False
    assert body["solutions"] == []


def test_api_rejects_bad_requests():
    status, _ = asyncio.run(_request("POST", "/api/solve", data="not json"))
    assert status == 400
    status, _ = asyncio.run(_request("POST", "/api/solve", json={"puzzle": 12}))
    assert status == 400
    status, _ = asyncio.run(_request("POST", "/api/solve", json={"puzzle": PUZZLE, "solutions": 0}))
    assert status == 400


def test_form_submit_renders_solution_table():
    status, body = asyncio.run(
        _request("POST", "/solve", data={"puzzle": "\n".join(_rows(PUZZLE)), "solutions": "1"})
    )
    assert status == 200
    assert "Solution 1" in body
    assert "1 solution(s)" in body


def test_parse_count_is_clamped():
    assert web.parse_count("3") == 3
    assert web.parse_count(10_000) == web.MAX_WEB_SOLUTIONS
    for bad in ("0", True, "x", 2.9, "2.9", None):
        try:
            web.parse_count(bad)
        except ValueError:
            continue
        raise AssertionError(f"{bad!r} should be rejected")


def test_api_rejects_fractional_count():
    status, _ = asyncio.run(_request("POST", "/api/solve", json={"puzzle": _rows(PUZZLE), "solutions": 2.9}))
    assert status == 400


def test_form_with_file_as_count_reports_message():
    form = aiohttp.FormData()
    form.add_field("puzzle", "\n".join(_rows(PUZZLE)))
    form.add_field("solutions", b"3", filename="count.txt", content_type="text/plain")
    status, body = asyncio.run(_request("POST", "/solve", data=form))
    assert status == 200
    assert "Number of solutions must be a positive integer." in body
