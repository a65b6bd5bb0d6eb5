"""Candidate queries shared by the technique detectors."""

# common.py
# Read-only helpers over a Grid. Positions come back in house order
# (or row-major for grid-wide scans) so every detector is deterministic.

from __future__ import annotations

from typing import Iterable

from hint_engine.geometry import House, Position, Value
from hint_engine.grid import Grid
from hint_engine.pencil_marks import bit, popcount


def candidate_positions(grid: Grid, house: House, value: Value) -> list[Position]:
    """Positions of `house` that carry `value` as a center mark."""
    b = bit(value)
    return [p for p in house.positions() if grid.candidates_at(p) & b]


def cells_with_candidates(grid: Grid, house: House) -> list[Position]:
    return [p for p in house.positions() if grid.candidates_at(p)]


def all_cells_have_candidates(grid: Grid, house: House) -> bool:
    """Every valueless cell of the house has at least one center mark."""
    return grid.all_cells_have_value_or_candidates(house.positions())


def union_mask(grid: Grid, positions: Iterable[Position]) -> int:
    m = 0
    for p in positions:
        m |= grid.candidates_at(p)
    return m


def positions_with_count(grid: Grid, count: int) -> list[Position]:
    """Valueless positions, row-major, holding exactly `count` candidates."""
    return [p for p in Position.all() if popcount(grid.candidates_at(p)) == count]
