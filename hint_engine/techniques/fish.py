"""Fish patterns: X-Wing (two houses) and Swordfish (three houses)."""

# fish.py
# Houses are scanned by orientation. For a row the cross coordinate of a
# position is its column, for a column it is its row; a fish is a value whose
# candidates in 2 or 3 parallel houses sit on the same 2 or 3 cross coordinates.

from __future__ import annotations

import logging
from typing import Optional

from hint_engine.geometry import ALL_VALUES, House, HouseType, Position, Value
from hint_engine.grid import Grid
from hint_engine.hints import Swordfish, XWing
from hint_engine.techniques.common import all_cells_have_candidates, candidate_positions

log = logging.getLogger(__name__)


def _cross_coordinate(house: House, p: Position) -> int:
    return p.column if house.type is HouseType.ROW else p.row


def _cross_targets(grid: Grid, house_type: HouseType, coordinates, value: Value, exclude) -> list[Position]:
    """Candidates for `value` on the cross houses at `coordinates`, minus `exclude`."""
    cross = house_type.cross()
    targets = []
    for c in sorted(coordinates):
        targets.extend(
            p for p in candidate_positions(grid, cross.create_house(c), value) if p not in exclude
        )
    return targets


def _scannable(grid: Grid, house: House) -> bool:
    return all_cells_have_candidates(grid, house) and len(house.remaining_values(grid)) >= 2


def find_x_wing(grid: Grid) -> Optional[XWing]:
    """Columns first, then rows."""
    for house_type in (HouseType.COLUMN, HouseType.ROW):
        hint = _find_x_wing(grid, house_type)
        if hint is not None:
            return hint
    return None


def _find_x_wing(grid: Grid, house_type: HouseType) -> Optional[XWing]:
    for n1 in range(1, 9):
        first = house_type.create_house(n1)
        if not _scannable(grid, first):
            continue
        for value in first.remaining_values(grid):
            ps1 = candidate_positions(grid, first, value)
            if len(ps1) != 2:
                continue
            coordinates = {_cross_coordinate(first, p) for p in ps1}
            for n2 in range(n1 + 1, 10):
                second = house_type.create_house(n2)
                if not all_cells_have_candidates(grid, second):
                    continue
                ps2 = candidate_positions(grid, second, value)
                if len(ps2) != 2 or {_cross_coordinate(second, p) for p in ps2} != coordinates:
                    continue
                corners = ps1 + ps2
                targets = _cross_targets(grid, house_type, coordinates, value, corners)
                if targets:
                    log.debug("x-wing %s in %s and %s", value, first, second)
                    return XWing(value, corners, targets)
    return None


def find_swordfish(grid: Grid) -> Optional[Swordfish]:
    """Rows first, then columns."""
    for house_type in (HouseType.ROW, HouseType.COLUMN):
        for value in ALL_VALUES:
            hint = _find_swordfish(grid, house_type, value)
            if hint is not None:
                return hint
    return None


def _qualifies(grid: Grid, house: House, candidates: list[Position]) -> bool:
    """Three candidates, or two plus a filled cell that can complete a virtual triple."""
    if len(candidates) == 3:
        return True
    return len(candidates) == 2 and any(grid.cell_at(p).has_value for p in house.positions())


def _triples(grid: Grid, house: House, candidates: list[Position]) -> list[frozenset]:
    coords = [_cross_coordinate(house, p) for p in candidates]
    if len(coords) == 3:
        return [frozenset(coords)]
    return [
        frozenset(coords + [_cross_coordinate(house, p)])
        for p in house.positions()
        if grid.cell_at(p).has_value
    ]


def _matches(grid: Grid, house: House, candidates: list[Position], triple: frozenset) -> bool:
    """Every candidate lies on the triple, and every triple cell is a candidate or filled."""
    if not all(_cross_coordinate(house, p) in triple for p in candidates):
        return False
    cells = [p for p in house.positions() if _cross_coordinate(house, p) in triple]
    return all(p in candidates or grid.cell_at(p).has_value for p in cells)


def _find_swordfish(grid: Grid, house_type: HouseType, value: Value) -> Optional[Swordfish]:
    qualifying = []
    for n in range(1, 10):
        house = house_type.create_house(n)
        candidates = candidate_positions(grid, house, value)
        if _qualifies(grid, house, candidates):
            qualifying.append((house, candidates))
    if len(qualifying) != 3:
        return None
    (h0, c0), (h1, c1), (h2, c2) = qualifying
    for triple in _triples(grid, h0, c0):
        if not (_matches(grid, h1, c1, triple) and _matches(grid, h2, c2, triple)):
            continue
        matched = {
            p for h, _ in qualifying for p in h.positions() if _cross_coordinate(h, p) in triple
        }
        targets = _cross_targets(grid, house_type, triple, value, matched)
        if targets:
            log.debug("swordfish %s in %s, %s, %s", value, h0, h1, h2)
            return Swordfish(value, (h0, h1, h2), c0 + c1 + c2, targets)
    return None
