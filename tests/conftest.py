# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "sudoku_brute" can be imported without installing
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sudoku_brute.models import TEST_SOLUTION  # noqa: E402


def with_blanks(grid, cells):
    rows = [list(row) for row in grid]
    for r, c in cells:
        rows[r][c] = "0"
    return ["".join(row) for row in rows]


@pytest.fixture
def solution():
    return list(TEST_SOLUTION)


@pytest.fixture
def few_blanks():
    # three of the example puzzle's blanks; 9**3 expansions
    return with_blanks(TEST_SOLUTION, [(0, 1), (1, 1), (2, 4)])


@pytest.fixture
def two_solutions():
    # 6/7 rectangle over r1c1, r1c4, r2c1, r2c4 can be filled either way
    return with_blanks(TEST_SOLUTION, [(0, 0), (0, 3), (1, 0), (1, 3)])


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("SUDOKU_TIME_LIMIT", "SUDOKU_MAX_SOLUTIONS", "SUDOKU_METHOD"):
        monkeypatch.delenv(name, raising=False)
