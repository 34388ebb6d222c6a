from __future__ import annotations

import os
from typing import Optional

METHODS = ("brute", "pruned")

DEFAULT_TIME_LIMIT = 30.0
DEFAULT_MAX_SOLUTIONS = 10
DEFAULT_METHOD = "brute"


def _env(name: str) -> str:
    return os.environ.get(name, "").strip()


def resolve_time_limit() -> Optional[float]:
    """Seconds from SUDOKU_TIME_LIMIT; 0 means no limit."""
    raw = _env("SUDOKU_TIME_LIMIT")
    if raw == "":
        return DEFAULT_TIME_LIMIT
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"SUDOKU_TIME_LIMIT must be a number of seconds, got '{raw}'") from None
    if value < 0:
        raise ValueError(f"SUDOKU_TIME_LIMIT must not be negative, got {value}")
    return value or None


def resolve_max_solutions() -> Optional[int]:
    """Result cap for 'all' mode from SUDOKU_MAX_SOLUTIONS; 0 means no cap."""
    raw = _env("SUDOKU_MAX_SOLUTIONS")
    if raw == "":
        return DEFAULT_MAX_SOLUTIONS
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"SUDOKU_MAX_SOLUTIONS must be an integer, got '{raw}'") from None
    if value < 0:
        raise ValueError(f"SUDOKU_MAX_SOLUTIONS must not be negative, got {value}")
    return value or None


def resolve_method() -> str:
    raw = _env("SUDOKU_METHOD").lower() or DEFAULT_METHOD
    if raw not in METHODS:
        raise ValueError(f"SUDOKU_METHOD must be one of {', '.join(METHODS)}, got '{raw}'")
    return raw
