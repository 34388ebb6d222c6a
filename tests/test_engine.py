# tests/test_engine.py
from itertools import islice

from conftest import with_blanks
from sudoku_brute.engine import (
    boxes_valid,
    build,
    choices,
    cols_valid,
    consistent,
    cp,
    expand,
    rows_valid,
    search_space,
    solve,
    solve_pruned,
    valid,
)
from sudoku_brute.models import DIGITS, TEST_PUZZLE, TEST_SOLUTION, blank_grid

FIRST_EXPANSION = [
    "613719458",
    "718624931",
    "491813276",
    "569178342",
    "837542169",
    "141936587",
    "314287195",
    "975361814",
    "286491713",
]


def givens_kept(puzzle, grid):
    return all(p == "0" or p == g for prow, grow in zip(puzzle, grid) for p, g in zip(prow, grow))


# -----------------------------
# choices / build
# -----------------------------

def test_choices_first_row():
    assert choices(TEST_PUZZLE)[0] == ["6", DIGITS, "3", "7", "1", "9", "4", "5", "8"]


def test_choices_shape():
    cg = choices(blank_grid())
    assert len(cg) == 9
    assert all(len(row) == 9 for row in cg)
    assert all(cs == "123456789" for row in cg for cs in row)


def test_build_on_complete_grid_is_all_singletons():
    cg = build(TEST_SOLUTION)
    assert cg == [list(row) for row in TEST_SOLUTION]


def test_search_space():
    assert search_space(choices(TEST_SOLUTION)) == 1
    assert search_space(choices(TEST_PUZZLE)) == 9 ** 7
    assert search_space(choices(blank_grid())) == 9 ** 81


# -----------------------------
# cp / expand
# -----------------------------

def test_cp_later_positions_vary_fastest():
    assert list(cp([[1, 2], [4, 5]])) == [(1, 4), (1, 5), (2, 4), (2, 5)]
    assert list(cp([[1], [2, 3], [4]])) == [(1, 2, 4), (1, 3, 4)]
    assert list(cp([])) == [()]


def test_expand_singletons_gives_the_grid():
    assert list(expand(choices(TEST_SOLUTION))) == [TEST_SOLUTION]


def test_expand_order_starts_with_lowest_digits():
    seq = expand(choices(TEST_PUZZLE))
    first, second = next(seq), next(seq)
    assert first == FIRST_EXPANSION
    # last blank (r9c5) moves first
    assert second[:8] == FIRST_EXPANSION[:8]
    assert second[8] == "286492713"


def test_expand_is_lazy_and_restartable():
    cg = choices(blank_grid())
    a = list(islice(expand(cg), 20))
    b = list(islice(expand(cg), 20))
    assert a == b
    assert a[0] == ["111111111"] * 9
    assert a[1] == ["111111111"] * 8 + ["111111112"]


def test_expand_length_matches_search_space(few_blanks):
    cg = choices(few_blanks)
    assert sum(1 for _ in expand(cg)) == search_space(cg) == 729


# -----------------------------
# valid
# -----------------------------

def test_valid_solution():
    assert rows_valid(TEST_SOLUTION)
    assert cols_valid(TEST_SOLUTION)
    assert boxes_valid(TEST_SOLUTION)
    assert valid(TEST_SOLUTION)


def test_first_expansion_is_invalid():
    assert not valid(FIRST_EXPANSION)
    assert not rows_valid(FIRST_EXPANSION)


def test_example_puzzle_is_not_valid_as_given():
    # each row has a single blank, but column 2 holds two of them
    assert rows_valid(TEST_PUZZLE)
    assert not cols_valid(TEST_PUZZLE)
    assert valid(TEST_PUZZLE) is False


def test_column_conflict_only():
    # swap two cells inside a row: rows stay permutations, columns break
    g = list(TEST_SOLUTION)
    g[0] = "263719458"
    assert rows_valid(g)
    assert not cols_valid(g)
    assert not valid(g)


def test_row_moves_inside_a_band():
    # reordering rows within a band keeps every unit a permutation
    g = TEST_SOLUTION[1:3] + TEST_SOLUTION[0:1] + TEST_SOLUTION[3:]
    assert valid(g)
    # rotating one row keeps it a permutation but breaks its columns
    shifted = [row[1:] + row[0] for row in TEST_SOLUTION[:1]] + TEST_SOLUTION[1:]
    assert rows_valid(shifted)
    assert not valid(shifted)


# -----------------------------
# consistent (partial grids)
# -----------------------------

def test_consistent_ignores_blanks():
    assert consistent(TEST_PUZZLE) == (True, "OK")
    assert consistent(blank_grid()) == (True, "OK")


def test_consistent_reports_position():
    g = list(TEST_PUZZLE)
    g[0] = "663719458"
    ok, msg = consistent(g)
    assert not ok
    assert "value 6" in msg
    assert "(cell 1,2)" in msg


# -----------------------------
# solve
# -----------------------------

def test_solve_complete_valid_grid_yields_itself():
    out = list(solve(TEST_SOLUTION))
    assert out == [TEST_SOLUTION]


def test_solve_complete_invalid_grid_is_empty():
    g = list(TEST_SOLUTION)
    g[0] = "263719458"
    assert list(solve(g)) == []


def test_solve_single_blank_places_missing_digit():
    puzzle = with_blanks(TEST_SOLUTION, [(0, 5)])  # the 9 in row 1
    assert puzzle[0] == "623710458"
    out = list(solve(puzzle))
    assert out == [TEST_SOLUTION]
    assert out[0][0][5] == "9"


def test_solve_few_blanks(few_blanks):
    assert list(solve(few_blanks)) == [TEST_SOLUTION]


def test_solve_all_solutions_in_expansion_order(two_solutions):
    out = list(solve(two_solutions))
    assert len(out) == 2
    assert out[0] == TEST_SOLUTION
    assert out[1][0] == "723619458"
    assert out[1][1] == "658724931"
    assert all(valid(g) and givens_kept(two_solutions, g) for g in out)


def test_solve_conflicting_givens_is_empty():
    g = with_blanks(TEST_SOLUTION, [(8, 7), (8, 8)])
    g[0] = "663719458"
    assert list(solve(g)) == []


def test_solve_is_lazy():
    seq = solve(blank_grid())
    assert iter(seq) is seq


def test_solve_first_element_only(two_solutions):
    assert next(solve(two_solutions)) == TEST_SOLUTION


# -----------------------------
# solve_pruned
# -----------------------------

def test_pruned_matches_brute(few_blanks, two_solutions):
    for puzzle in (few_blanks, two_solutions, TEST_SOLUTION):
        assert list(solve_pruned(puzzle)) == list(solve(puzzle))


def test_pruned_matches_brute_when_unsolvable():
    g = with_blanks(TEST_SOLUTION, [(8, 7), (8, 8)])
    g[0] = "663719458"
    assert list(solve_pruned(g)) == list(solve(g)) == []


def test_pruned_example_puzzle():
    assert list(solve_pruned(TEST_PUZZLE)) == [TEST_SOLUTION]


def test_blank_grid_first_solution():
    # the first valid grid in expansion order of 81 blanks
    first = next(solve_pruned(blank_grid()))
    assert valid(first)
    assert all("0" not in row for row in first)
    assert first[:4] == ["123456789", "456789123", "789123456", "214365897"]


def test_pruned_is_restartable():
    a = list(islice(solve_pruned(blank_grid()), 3))
    b = list(islice(solve_pruned(blank_grid()), 3))
    assert a == b
    assert len({tuple(g) for g in a}) == 3
    assert all(valid(g) for g in a)
