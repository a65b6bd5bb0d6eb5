"""Locked candidates: pointing pairs (box -> line) and box-line reductions (line -> box)."""

# intersections.py
# Pointing pair: scan box by box, then each row segment and each column
# segment of the box, then values ascending.
# Box-line reduction: scan rows, then columns, then values ascending.

from __future__ import annotations

import logging
from typing import Optional

from hint_engine.geometry import House, HouseType
from hint_engine.grid import Grid
from hint_engine.hints import BoxLineReduction, PointingPair
from hint_engine.techniques.common import candidate_positions

log = logging.getLogger(__name__)


def _lines_through_box(box: House) -> list[House]:
    ps = box.positions()
    rows = sorted({p.row for p in ps})
    cols = sorted({p.column for p in ps})
    return [House.row(r) for r in rows] + [House.column(c) for c in cols]


def find_pointing_pair(grid: Grid) -> Optional[PointingPair]:
    """In a box, a value confined to one row or column is eliminated from the rest of that line."""
    for n in range(1, 10):
        box = House.box(n)
        remaining = box.remaining_values(grid)
        for line in _lines_through_box(box):
            for value in remaining:
                positions = candidate_positions(grid, box, value)
                if len(positions) < 2 or not all(line.contains(p) for p in positions):
                    continue
                targets = [p for p in candidate_positions(grid, line, value) if not box.contains(p)]
                if targets:
                    log.debug("pointing pair %s in %s along %s", value, box, line)
                    return PointingPair(value, positions, targets)
    return None


def find_box_line_reduction(grid: Grid) -> Optional[BoxLineReduction]:
    """In a row or column, a value confined to one box is eliminated from the rest of that box."""
    for house_type in (HouseType.ROW, HouseType.COLUMN):
        for n in range(1, 10):
            line = house_type.create_house(n)
            for value in line.remaining_values(grid):
                positions = candidate_positions(grid, line, value)
                if len(positions) < 2:
                    continue
                box = House.in_box(positions)
                if box is None:
                    continue
                targets = [p for p in candidate_positions(grid, box, value) if not line.contains(p)]
                if targets:
                    log.debug("box-line reduction %s in %s within %s", value, line, box)
                    return BoxLineReduction(value, positions, targets)
    return None
