"""Read the textual puzzle into a grid."""

from __future__ import annotations

from typing import Iterable, List, TextIO

from .grid import SIZE, UNSET, Grid, digit_mask, empty_grid

DIGITS = "123456789"
BLANKS = ". 0"


class GridFormatError(ValueError):
    """Raised in strict mode when the puzzle text is malformed."""


def normalize_line(raw: str) -> str:
    return raw.rstrip("\r\n")


def _check_line(index: int, line: str) -> None:
    if len(line) < SIZE:
        raise GridFormatError(f"Line {index + 1} has {len(line)} characters, expected {SIZE}")
    for col, ch in enumerate(line[:SIZE]):
        if ch not in DIGITS and ch not in BLANKS:
            raise GridFormatError(f"Line {index + 1}, column {col + 1}: unexpected character {ch!r}")


def parse_row(line: str) -> List[int]:
    """Digits fix a cell; anything else, or a missing character, leaves it unset."""
    row = [UNSET] * SIZE
    for col, ch in enumerate(line[:SIZE]):
        if ch in DIGITS:
            row[col] = digit_mask(int(ch))
    return row


def parse_grid(lines: Iterable[str], strict: bool = False) -> Grid:
    """Build a grid from the first nine lines of ``lines``.

    Lenient by default: short lines and missing lines are treated as unset
    cells and unknown characters as blanks. With ``strict`` any of those
    raises :class:`GridFormatError`.
    """
    grid = empty_grid()
    count = 0
    for raw in lines:
        if count == SIZE:
            break
        line = normalize_line(raw)
        if strict:
            _check_line(count, line)
        grid[count] = parse_row(line)
        count += 1
    if strict and count < SIZE:
        raise GridFormatError(f"Puzzle has {count} lines, expected {SIZE}")
    return grid


def read_grid(stream: TextIO, strict: bool = False) -> Grid:
    return parse_grid(stream, strict=strict)


__all__ = ["GridFormatError", "normalize_line", "parse_grid", "parse_row", "read_grid"]
