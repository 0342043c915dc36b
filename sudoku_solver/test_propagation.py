"""Tests for propagation and consolidation passes."""

from . import propagation
from .grid import ALL_DIGITS, SIZE, candidate_count, copy_grid, digit_mask, empty_grid, is_fixed
from .input_manager import parse_grid
from .validation import is_compliant, is_solution

PUZZLE = "530070000600195000098000060800060003400803001700020006060000280000419005000080079"
SOLUTION = "534678912672195348198342567859761423426853791713924856961537284287419635345286179"


def _rows(flat):
    return [flat[i : i + 9] for i in range(0, 81, 9)]


def test_empty_grid_allows_every_digit():
    options, min_options = propagation.set_options(empty_grid())
    assert min_options == 9
    assert all(cell == ALL_DIGITS for row in options for cell in row)


def test_full_grid_reports_no_open_cells():
    board = parse_grid(_rows(SOLUTION))
    options, min_options = propagation.set_options(board)
    assert min_options == propagation.NO_OPEN_CELLS
    assert options == board


def test_candidate_counts_stay_in_range():
    options, min_options = propagation.set_options(parse_grid(_rows(PUZZLE)))
    assert 0 <= min_options <= SIZE
    assert all(0 <= candidate_count(cell) <= SIZE for row in options for cell in row)


def test_fixed_cells_are_copied_and_peers_excluded():
    board = parse_grid(["12345678."])
    options, min_options = propagation.set_options(board)
    assert options[0][:8] == board[0][:8]
    assert options[0][8] == digit_mask(9)
    assert min_options == 1


def test_contradiction_gives_zero_minimum():
    board = parse_grid(["12345678.", "........9"])
    options, min_options = propagation.set_options(board)
    assert options[0][8] == 0
    assert min_options == 0


def test_propagation_uses_only_input_fixed_cells():
    # (0,8) is forced to 9 in this pass, yet (1,8) still keeps 9 as a candidate.
    board = parse_grid(["12345678."])
    options, _ = propagation.set_options(board)
    assert options[1][8] & digit_mask(9)


def test_consolidate_is_idempotent_at_fixed_point():
    board = parse_grid(_rows(PUZZLE))
    options, _ = propagation.set_options(board)
    first = propagation.consolidate_options(options, board)
    assert first > 0
    assert propagation.consolidate_options(options, board) == 0
    assert is_compliant(board)


def test_consolidate_refuses_non_compliant_options():
    options = empty_grid()
    options[0][0] = options[0][5] = digit_mask(5)
    solution = empty_grid()
    assert propagation.consolidate_options(options, solution) == 0
    assert solution == empty_grid()


def test_stabilize_fills_a_single_hole():
    board = parse_grid(_rows("." + SOLUTION[1:]))
    options, min_options = propagation.stabilize(board)
    assert min_options == propagation.NO_OPEN_CELLS
    assert is_solution(board)
    assert options == board


def test_stabilize_keeps_clues_and_stays_compliant():
    board = parse_grid(_rows(PUZZLE))
    clues = copy_grid(board)
    propagation.stabilize(board)
    for r in range(SIZE):
        for c in range(SIZE):
            if is_fixed(clues[r][c]):
                assert board[r][c] == clues[r][c]
    assert is_compliant(board)
