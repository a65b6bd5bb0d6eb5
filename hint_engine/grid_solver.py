"""Solver driver: apply the first hint found in priority order until solved or stuck."""

# grid_solver.py
# The loop stops when the grid is solved, when no technique finds a hint,
# when max_hints hints have been applied, or when should_stop() returns true
# between two iterations. Every applied hint either places a value or removes
# at least one candidate, so the loop always terminates.
#
# The solver works on the grid it is given. Callers that solve in the
# background should hand it grid.copy() and leave the original alone.

from __future__ import annotations

import logging
import time
from collections import Counter
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Callable, Iterable, Optional

from hint_engine.catalog import SolvingTechnique, default_techniques, find_first_hint
from hint_engine.grid import Grid
from hint_engine.hints import Hint

log = logging.getLogger(__name__)


class StopReason(str, Enum):
    SOLVED = "solved"
    EXHAUSTED = "exhausted"
    MAX_HINTS = "max_hints"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class SolveResult:
    grid: Grid
    hints_applied: tuple[Hint, ...]
    duration: timedelta
    stop_reason: StopReason

    @property
    def solved(self) -> bool:
        return self.stop_reason is StopReason.SOLVED

    @property
    def number_of_techniques_used(self) -> int:
        return len({h.technique for h in self.hints_applied})

    def technique_counts(self) -> dict[str, int]:
        """Applied hints per technique key, in order of first use."""
        return dict(Counter(h.technique.key for h in self.hints_applied))


class GridSolver:
    def __init__(
        self,
        grid: Grid,
        techniques: Optional[Iterable[SolvingTechnique]] = None,
        max_hints: Optional[int] = None,
        should_stop: Optional[Callable[[], bool]] = None,
    ):
        if max_hints is not None and max_hints < 0:
            raise ValueError(f"max_hints must be >= 0, got {max_hints}")
        self.grid = grid
        self.techniques = default_techniques() if techniques is None else tuple(techniques)
        self.max_hints = max_hints
        self.should_stop = should_stop

    def next_hint(self) -> Optional[Hint]:
        """The first hint for the current state, not applied. Populates missing candidates first."""
        self.grid.show_remaining_candidates()
        return find_first_hint(self.grid, self.techniques)

    def solve(self) -> SolveResult:
        t0 = time.perf_counter()
        self.grid.show_remaining_candidates()
        applied: list[Hint] = []
        while True:
            if self.grid.is_solved():
                reason = StopReason.SOLVED
                break
            if self.max_hints is not None and len(applied) >= self.max_hints:
                reason = StopReason.MAX_HINTS
                break
            if self.should_stop is not None and self.should_stop():
                reason = StopReason.CANCELLED
                break
            hint = find_first_hint(self.grid, self.techniques)
            if hint is None:
                log.info("No technique applies; giving up with %d hints applied", len(applied))
                reason = StopReason.EXHAUSTED
                break
            hint.apply(self.grid)
            applied.append(hint)
            log.debug("[%d] %s: %s", len(applied), hint.technique.display_name, hint.describe())
        duration = timedelta(seconds=time.perf_counter() - t0)
        result = SolveResult(self.grid, tuple(applied), duration, reason)
        log.info(
            "Solver stopped (%s) after %d hints, %d techniques, %.1f ms",
            reason.value, len(applied), result.number_of_techniques_used, duration.total_seconds() * 1000,
        )
        return result
