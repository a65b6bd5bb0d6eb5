"""Wing patterns: XY-Wing (also known as Y-Wing) and XYZ-Wing."""

# wings.py
# XY-Wing: bi-value pivot {a,b}, wings {a,z} and {b,z} seen by the pivot.
#   z can go from every cell that sees both wings.
# XYZ-Wing: tri-value pivot {a,b,z}, bi-value wings inside it sharing only z.
#   z can go from every cell that sees the pivot and both wings.

from __future__ import annotations

import logging
from itertools import combinations
from typing import Optional

from hint_engine.geometry import Position
from hint_engine.grid import Grid
from hint_engine.hints import XyWing, XyzWing
from hint_engine.pencil_marks import popcount, values_of
from hint_engine.techniques.common import positions_with_count

log = logging.getLogger(__name__)


def _in_one_line(*positions: Position) -> bool:
    return len({p.row for p in positions}) == 1 or len({p.column for p in positions}) == 1


def find_xy_wing(grid: Grid) -> Optional[XyWing]:
    bivalue = positions_with_count(grid, 2)
    for pivot in bivalue:
        pivot_mask = grid.candidates_at(pivot)
        wings = [
            w for w in bivalue
            if pivot.sees(w) and popcount(grid.candidates_at(w) & pivot_mask) == 1
        ]
        for w1, w2 in combinations(wings, 2):
            m1 = grid.candidates_at(w1)
            z = m1 & ~pivot_mask
            if grid.candidates_at(w2) != z | (pivot_mask & ~m1):
                continue
            if _in_one_line(pivot, w1, w2):
                continue
            targets = [
                p for p in Position.seen_by_all(w1, w2)
                if p != pivot and grid.candidates_at(p) & z
            ]
            if targets:
                value = values_of(z)[0]
                log.debug("xy-wing %s: pivot %s, wings %s and %s", value, pivot, w1, w2)
                return XyWing(pivot, (w1, w2), value, targets)
    return None


def find_xyz_wing(grid: Grid) -> Optional[XyzWing]:
    for pivot in positions_with_count(grid, 3):
        pivot_mask = grid.candidates_at(pivot)
        wings = [
            w for w in pivot.seen_by()
            if popcount(grid.candidates_at(w)) == 2 and grid.candidates_at(w) & ~pivot_mask == 0
        ]
        for w1, w2 in combinations(wings, 2):
            shared = grid.candidates_at(w1) & grid.candidates_at(w2)
            if popcount(shared) != 1:
                continue
            targets = [
                p for p in Position.seen_by_all(pivot, w1, w2)
                if grid.candidates_at(p) & shared
            ]
            if targets:
                value = values_of(shared)[0]
                log.debug("xyz-wing %s: pivot %s, wings %s and %s", value, pivot, w1, w2)
                return XyzWing(pivot, (w1, w2), value, targets)
    return None
