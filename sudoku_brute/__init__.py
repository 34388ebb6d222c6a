from .engine import build, choices, consistent, cp, expand, search_space, solve, solve_pruned, valid
from .models import BLANK, CLASSIC, DIGITS, Grid, GridSpec
from .textio import GridFormatError, format_grid, parse_grid

__all__ = [
    "BLANK",
    "CLASSIC",
    "DIGITS",
    "Grid",
    "GridFormatError",
    "GridSpec",
    "build",
    "choices",
    "consistent",
    "cp",
    "expand",
    "format_grid",
    "parse_grid",
    "search_space",
    "solve",
    "solve_pruned",
    "valid",
]
