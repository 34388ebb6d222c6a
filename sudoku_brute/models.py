from __future__ import annotations

from dataclasses import dataclass
from typing import List, TypeVar

T = TypeVar("T")

Digit = str                      # one character, '0' = blank, '1'..'9' = values
Grid = List[str]                 # 9 rows of 9 digit characters
CandidateSet = str               # ordered, duplicate-free digits, e.g. "123456789" or "7"
CandidateGrid = List[List[CandidateSet]]


@dataclass(frozen=True)
class GridSpec:
    size: int = 9           # board size: N x N
    box: int = 3            # subgrid size: box x box
    blank: Digit = "0"
    digits: str = "123456789"

    @property
    def alphabet(self) -> str:
        return self.blank + self.digits


CLASSIC = GridSpec()

BLANK = CLASSIC.blank
DIGITS = CLASSIC.digits
SIZE = CLASSIC.size
BOX = CLASSIC.box


def is_blank(cell: Digit) -> bool:
    return cell == BLANK


def blank_grid() -> Grid:
    return [BLANK * SIZE for _ in range(SIZE)]


def count_blanks(grid: Grid) -> int:
    return sum(row.count(BLANK) for row in grid)


# -----------------------------
# Example puzzles
# -----------------------------

TEST_PUZZLE: Grid = [
    "603719458",
    "708624931",
    "491803276",
    "569178342",
    "837542169",
    "140936587",
    "314287095",
    "975361804",
    "286490713",
]

TEST_SOLUTION: Grid = [
    "623719458",
    "758624931",
    "491853276",
    "569178342",
    "837542169",
    "142936587",
    "314287695",
    "975361824",
    "286495713",
]
