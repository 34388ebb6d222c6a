"""
Command-line driver.

Usage:
  sudoku-brute solve puzzle.txt
  sudoku-brute solve - --all --limit 5 < puzzle.txt
  sudoku-brute --verbose demo --method pruned --pretty
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .driver import run
from .engine import consistent
from .models import TEST_PUZZLE, Grid, count_blanks
from .settings import METHODS, resolve_max_solutions, resolve_method, resolve_time_limit
from .textio import GridFormatError, format_grid, load_grid, parse_grid

log = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_NO_SOLUTION = 1
EXIT_BAD_INPUT = 2
EXIT_TIMEOUT = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sudoku-brute",
        description="Solve 9x9 Sudoku by expanding every candidate grid and keeping the valid ones.",
    )
    parser.add_argument("--verbose", action="store_true", help="Be verbose")
    subparsers = parser.add_subparsers(dest="command", help="Append --help for more help")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--all", action="store_true", help="Print every solution (up to --limit)")
    common.add_argument("--count", action="store_true", help="Only report how many solutions were found")
    common.add_argument("--limit", type=int, default=None,
                        help="Result cap for --all/--count (0 = none; default from SUDOKU_MAX_SOLUTIONS)")
    common.add_argument("--time-limit", type=float, default=None,
                        help="Seconds before giving up (0 = none; default from SUDOKU_TIME_LIMIT)")
    common.add_argument("--method", choices=METHODS, default=None,
                        help="brute = full expansion, pruned = same order with early rejection")
    common.add_argument("--pretty", action="store_true", help="Draw box separators")

    parser_solve = subparsers.add_parser("solve", parents=[common], help="Solve a grid read from a file")
    parser_solve.add_argument("filename", help="Nine lines of nine digits, 0 or . for blank; '-' for stdin")

    subparsers.add_parser("demo", parents=[common], help="Solve the built-in example puzzle")
    return parser


def _read_grid(filename: str) -> Grid:
    if filename == "-":
        log.debug("Reading grid from stdin")
        return parse_grid(sys.stdin.read())
    return load_grid(filename)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return EXIT_BAD_INPUT

    try:
        grid = TEST_PUZZLE if args.command == "demo" else _read_grid(args.filename)
        if args.time_limit is not None and args.time_limit < 0:
            raise ValueError(f"--time-limit must not be negative, got {args.time_limit}")
        if args.limit is not None and args.limit < 0:
            raise ValueError(f"--limit must not be negative, got {args.limit}")
        time_limit = resolve_time_limit() if args.time_limit is None else (args.time_limit or None)
        limit = resolve_max_solutions() if args.limit is None else (args.limit or None)
        method = args.method or resolve_method()
    except GridFormatError as e:
        for msg in e.errors:
            log.error(msg)
        return EXIT_BAD_INPUT
    except (ValueError, OSError) as e:
        log.error(str(e))
        return EXIT_BAD_INPUT

    mode = "count" if args.count else ("all" if args.all else "first")

    log.info("Solving (%d blank cells):\n%s", count_blanks(grid), format_grid(grid, pretty=True))
    ok, msg = consistent(grid)
    if not ok:
        log.info("Givens already conflict: %s", msg)

    report = run(grid, mode=mode, limit=limit, time_limit=time_limit, method=method)

    if mode == "count":
        print(report.found)
    else:
        print("\n\n".join(format_grid(g, pretty=args.pretty) for g in report.solutions))

    if report.solved:
        return EXIT_SUCCESS
    if report.timed_out:
        return EXIT_TIMEOUT
    log.error("No solution.")
    return EXIT_NO_SOLUTION
