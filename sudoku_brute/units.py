from __future__ import annotations

from typing import Hashable, List, Sequence

from .models import BOX, SIZE, Grid, T


def group(n: int, xs: Sequence[T]) -> List[Sequence[T]]:
    """Split xs into consecutive chunks of n: group(3, "603719458") == ["603", "719", "458"]."""
    return [xs[i:i + n] for i in range(0, len(xs), n)]


def ungroup(groups: Sequence[Sequence[T]]) -> List[T]:
    return [x for g in groups for x in g]


def box_index(r: int, c: int, base: int = BOX) -> int:
    return (r // base) * base + (c // base)


# -----------------------------
# Units (rows, columns, boxes)
# -----------------------------

def rows(grid: Grid) -> List[str]:
    return list(grid)


def cols(grid: Grid) -> List[str]:
    """Column c is the digit at index c of every row, top to bottom."""
    return ["".join(row[c] for row in grid) for c in range(SIZE)]


def boxes(grid: Grid) -> List[str]:
    """
    The nine 3x3 boxes, left-to-right then top-to-bottom, each read row-major.
    boxes(TEST_PUZZLE)[0] == "603708491"
    """
    out: List[str] = []
    for br in range(0, SIZE, BOX):
        for bc in range(0, SIZE, BOX):
            out.append("".join(grid[r][bc:bc + BOX] for r in range(br, br + BOX)))
    return out


def nodups(xs: Sequence[Hashable]) -> bool:
    return len(set(xs)) == len(xs)
