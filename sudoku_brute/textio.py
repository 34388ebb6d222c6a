from __future__ import annotations

import logging
from typing import List, Optional

from .models import BLANK, BOX, CLASSIC, SIZE, Grid
from .units import group

log = logging.getLogger(__name__)

BLANK_ALIASES = {".": BLANK}


class GridFormatError(ValueError):
    """Raised when text can not be read as a 9x9 grid."""

    def __init__(self, errors: List[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = errors


def parse_grid(text: str) -> Grid:
    """
    One row per line, nine characters per row, '0' or '.' for blank.
    Blank lines and '#' comment lines are skipped.
    Collects every problem before raising GridFormatError.
    """
    errors: List[str] = []
    grid: Grid = []

    lines = [ln.strip() for ln in text.splitlines()]
    lines = [ln for ln in lines if ln and not ln.startswith("#")]

    if len(lines) != SIZE:
        errors.append(f"Expected {SIZE} rows, found {len(lines)}.")

    for r, line in enumerate(lines[:SIZE]):
        row = "".join(BLANK_ALIASES.get(ch, ch) for ch in line)
        if len(row) != SIZE:
            errors.append(f"Row {r+1} has {len(row)} characters (expected {SIZE}): '{line}'")
            continue
        bad = sorted({ch for ch in row if ch not in CLASSIC.alphabet})
        if bad:
            errors.append(f"Row {r+1} contains illegal symbol(s) {', '.join(bad)} (allowed: {CLASSIC.alphabet} or '.').")
            continue
        grid.append(row)

    if errors:
        raise GridFormatError(errors)
    return grid


def load_grid(path: str) -> Grid:
    log.debug("Reading grid from %s", path)
    with open(path, "r", encoding="utf-8") as f:
        return parse_grid(f.read())


def format_grid(grid: Grid, pretty: bool = False) -> str:
    if not pretty:
        return "\n".join(grid)

    rule = "-+-".join(["-" * (2 * BOX - 1)] * (SIZE // BOX))
    out: List[str] = []
    for r, row in enumerate(grid):
        if r and r % BOX == 0:
            out.append(rule)
        shown = row.replace(BLANK, ".")
        out.append(" | ".join(" ".join(chunk) for chunk in group(BOX, shown)))
    return "\n".join(out)


def grid_to_csv(grid: Grid, blank: Optional[str] = None) -> bytes:
    lines = [",".join((blank if blank is not None and ch == BLANK else ch) for ch in row) for row in grid]
    return ("\n".join(lines) + "\n").encode("utf-8")
