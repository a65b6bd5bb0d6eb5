"""Naked and hidden singles (placements)."""

# singles.py
# Naked single: a cell with one candidate left, or whose peers already hold
# the other eight digits. Hidden single: a digit with one possible cell in a house.

from __future__ import annotations

import logging
from typing import Optional

from hint_engine.geometry import ALL_HOUSES, House, Position
from hint_engine.grid import Grid
from hint_engine.hints import Single
from hint_engine.pencil_marks import FULL_MASK, mask_of, popcount, values_of
from hint_engine.techniques.common import all_cells_have_candidates, candidate_positions

log = logging.getLogger(__name__)


def find_naked_single(grid: Grid) -> Optional[Single]:
    for p in Position.all():
        cell = grid.cell_at(p)
        if cell.has_value:
            continue
        if popcount(cell.candidates) == 1:
            value = values_of(cell.candidates)[0]
        else:
            seen = mask_of(grid.cell_at(q).value for q in p.seen_by() if grid.cell_at(q).has_value)
            if popcount(seen) != 8:
                continue
            value = values_of(FULL_MASK & ~seen)[0]
        log.debug("naked single %s at %s", value, p)
        return Single(value, House.row(p.row), p, naked=True)
    return None


def find_hidden_single(grid: Grid) -> Optional[Single]:
    for house in ALL_HOUSES:
        remaining = house.remaining_values(grid)
        if len(remaining) < 2 or not all_cells_have_candidates(grid, house):
            continue
        for value in remaining:
            positions = candidate_positions(grid, house, value)
            if len(positions) == 1:
                log.debug("hidden single %s at %s in %s", value, positions[0], house)
                return Single(value, house, positions[0], naked=False)
    return None


def find_single(grid: Grid) -> Optional[Single]:
    """Any naked single first, then a hidden single."""
    return find_naked_single(grid) or find_hidden_single(grid)
