from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .engine import choices, expand, search_space, solve_pruned, valid
from .models import Grid
from .settings import METHODS

log = logging.getLogger(__name__)

MODES = ("first", "all", "count")

CHECK_EVERY = 4096          # candidates examined between deadline checks
WARN_SEARCH_SPACE = 9 ** 6  # brute expansions past this rarely finish


@dataclass
class SolveReport:
    method: str
    mode: str
    solutions: List[Grid] = field(default_factory=list)
    search_space: int = 0
    examined: int = 0           # candidate grids tested (brute only)
    elapsed: float = 0.0
    timed_out: bool = False
    truncated: bool = False     # stopped at the result cap

    @property
    def found(self) -> int:
        return len(self.solutions)

    @property
    def solved(self) -> bool:
        return bool(self.solutions)

    def summary(self) -> str:
        if self.timed_out:
            tail = f"timed out after {self.elapsed:.2f}s"
        elif self.truncated:
            tail = f"stopped at {self.found} (cap) in {self.elapsed:.2f}s"
        else:
            tail = f"finished in {self.elapsed:.2f}s"
        if not self.solved and not self.timed_out:
            return f"No solution ({self.method}, {tail})."
        return f"{self.found} solution(s) ({self.method}, {tail})."


def _brute(grid: Grid, report: SolveReport, deadline: Optional[float]) -> Iterator[Grid]:
    """Same sequence as engine.solve, with a deadline check every CHECK_EVERY candidates."""
    for g in expand(choices(grid)):
        report.examined += 1
        if deadline is not None and report.examined % CHECK_EVERY == 0 and time.monotonic() > deadline:
            report.timed_out = True
            return
        if valid(g):
            yield g


def run(
    grid: Grid,
    mode: str = "first",
    limit: Optional[int] = None,
    time_limit: Optional[float] = None,
    method: str = "brute",
) -> SolveReport:
    """
    Drive one solve:
    - mode 'first' keeps one solution, 'all'/'count' keep up to `limit` (None = every one)
    - time_limit in seconds (None = unbounded); hitting it is reported, not raised
    """
    if mode not in MODES:
        raise ValueError(f"mode must be one of {', '.join(MODES)}")
    if method not in METHODS:
        raise ValueError(f"method must be one of {', '.join(METHODS)}")
    if limit is not None and limit < 1:
        raise ValueError("limit must be a positive integer or None")

    cap = 1 if mode == "first" else limit
    report = SolveReport(method=method, mode=mode, search_space=search_space(choices(grid)))

    if method == "brute" and report.search_space > WARN_SEARCH_SPACE:
        log.warning("Brute force will examine up to %d grids; this may not finish.", report.search_space)
    else:
        log.debug("Search space: %d grids", report.search_space)

    start = time.monotonic()
    deadline = start + time_limit if time_limit else None

    if method == "brute":
        seq = _brute(grid, report, deadline)
    else:
        seq = solve_pruned(grid)

    for g in seq:
        report.solutions.append(g)
        if cap is not None and len(report.solutions) >= cap:
            # capped only if a further solution exists
            report.truncated = mode != "first" and next(seq, None) is not None
            break
        if deadline is not None and time.monotonic() > deadline:
            report.timed_out = True
            break

    report.elapsed = time.monotonic() - start
    if report.timed_out:
        log.warning("Time limit of %.1fs reached with %d solution(s).", time_limit, report.found)
    log.info(report.summary())
    return report
