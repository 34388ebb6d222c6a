from __future__ import annotations

import math
from itertools import product
from typing import Dict, Iterator, List, Sequence, Tuple

from .models import BLANK, DIGITS, SIZE, CandidateGrid, Grid, T, is_blank
from .units import box_index, boxes, cols, group, nodups, rows, ungroup

_BITS: Dict[str, int] = {d: 1 << i for i, d in enumerate(DIGITS)}  # digit -> bitmask


# -----------------------------
# Candidates
# -----------------------------

def choices(grid: Grid) -> CandidateGrid:
    """
    Blank cell -> every digit, filled cell -> singleton.
    No peer elimination happens here; conflicts are left for `valid`.
    choices(TEST_PUZZLE)[0] == ["6", "123456789", "3", "7", "1", "9", "4", "5", "8"]
    """
    return [[DIGITS if is_blank(cell) else cell for cell in row] for row in grid]


build = choices


def search_space(cg: CandidateGrid) -> int:
    """Number of grids `expand(cg)` will produce."""
    return math.prod(len(cs) for cs in ungroup(cg))


# -----------------------------
# Expansion
# -----------------------------

def cp(lists: Sequence[Sequence[T]]) -> Iterator[Tuple[T, ...]]:
    """Cartesian product, later positions varying fastest: cp([[1,2],[4,5]]) -> (1,4) (1,5) (2,4) (2,5)."""
    return product(*lists)


def expand(cg: CandidateGrid) -> Iterator[Grid]:
    """
    Every grid obtainable by picking one digit per cell, in row-major order with
    the last cell varying fastest. Lazy; a fresh call restarts from the beginning.
    """
    for combo in cp(ungroup(cg)):
        yield group(SIZE, "".join(combo))


# -----------------------------
# Validation
# -----------------------------

def rows_valid(grid: Grid) -> bool:
    return all(nodups(r) for r in rows(grid))


def cols_valid(grid: Grid) -> bool:
    return all(nodups(c) for c in cols(grid))


def boxes_valid(grid: Grid) -> bool:
    return all(nodups(b) for b in boxes(grid))


def valid(grid: Grid) -> bool:
    """
    True when no row, column or box repeats a digit. Expects a complete grid:
    blanks are compared like any other symbol.
    """
    return rows_valid(grid) and cols_valid(grid) and boxes_valid(grid)


def consistent(grid: Grid) -> Tuple[bool, str]:
    """
    Partial-grid check, ignoring blanks:
      - no filled value repeats in any row/col/box
    Returns (ok, message) with a 1-based position on failure.
    """
    row_used = [0] * SIZE
    col_used = [0] * SIZE
    box_used = [0] * SIZE

    for r, row in enumerate(grid):
        for c, v in enumerate(row):
            if v == BLANK:
                continue
            bit = _BITS[v]
            b = box_index(r, c)
            if (row_used[r] & bit) or (col_used[c] & bit) or (box_used[b] & bit):
                return False, f"Conflict: value {v} appears twice in a row/column/box (cell {r+1},{c+1})."
            row_used[r] |= bit
            col_used[c] |= bit
            box_used[b] |= bit

    return True, "OK"


# -----------------------------
# Solving
# -----------------------------

def solve(grid: Grid) -> Iterator[Grid]:
    """
    Brute force: filter valid . expand . choices

    The expansion is 9 ** blanks long, so anything beyond a handful of blanks
    will not finish in practice. Take the first element for "a" solution.
    """
    return filter(valid, expand(choices(grid)))


def solve_pruned(grid: Grid) -> Iterator[Grid]:
    """
    Same sequence as `solve`, same order, but a branch is dropped the moment a
    placed digit repeats in its row, column or box.
    """
    cg = choices(grid)
    work: List[List[str]] = [list(row) for row in grid]
    row_used = [0] * SIZE
    col_used = [0] * SIZE
    box_used = [0] * SIZE

    def walk(i: int) -> Iterator[Grid]:
        if i == SIZE * SIZE:
            yield ["".join(row) for row in work]
            return

        r, c = divmod(i, SIZE)
        b = box_index(r, c)
        used = row_used[r] | col_used[c] | box_used[b]

        for d in cg[r][c]:
            bit = _BITS[d]
            if used & bit:
                continue
            # place
            work[r][c] = d
            row_used[r] |= bit
            col_used[c] |= bit
            box_used[b] |= bit

            yield from walk(i + 1)

            # undo
            row_used[r] ^= bit
            col_used[c] ^= bit
            box_used[b] ^= bit

    return walk(0)
