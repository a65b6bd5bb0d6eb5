"""Naked and hidden pairs, triples and quadruples.

Both searches brute-force k-subsets with itertools.combinations: at most
C(9,4) = 126 subsets per house, so there is no need for anything smarter.
"""

# subsets.py
# A house is skipped when it has no more than k remaining values or no more
# than k cells with candidates; such a house cannot yield an elimination.

from __future__ import annotations

import logging
from itertools import combinations
from typing import Optional

from hint_engine.geometry import ALL_HOUSES, House
from hint_engine.grid import Grid
from hint_engine.hints import HiddenMultiple, NakedMultiple
from hint_engine.pencil_marks import FULL_MASK, mask_of, popcount, values_of
from hint_engine.techniques.common import cells_with_candidates, union_mask

log = logging.getLogger(__name__)

SIZES = (2, 3, 4)


def _check_size(k: int) -> None:
    if k not in SIZES:
        raise ValueError(f"Subset size must be 2, 3 or 4, got {k}")


def _search_space(grid: Grid, house: House, k: int):
    remaining = house.remaining_values(grid)
    cells = cells_with_candidates(grid, house)
    if len(remaining) <= k or len(cells) <= k:
        return None
    return remaining, cells


def find_naked_multiple(grid: Grid, k: int) -> Optional[NakedMultiple]:
    _check_size(k)
    for house in ALL_HOUSES:
        space = _search_space(grid, house, k)
        if space is None:
            continue
        _, cells = space
        for combo in combinations(cells, k):
            union = union_mask(grid, combo)
            if popcount(union) != k:
                continue
            targets = [p for p in cells if p not in combo and grid.candidates_at(p) & union]
            if targets:
                log.debug("naked %d-tuple %s in %s", k, values_of(union), house)
                return NakedMultiple(house, combo, values_of(union), targets)
    return None


def find_hidden_multiple(grid: Grid, k: int) -> Optional[HiddenMultiple]:
    _check_size(k)
    for house in ALL_HOUSES:
        space = _search_space(grid, house, k)
        if space is None:
            continue
        remaining, cells = space
        for combo in combinations(remaining, k):
            hidden = mask_of(combo)
            matching = [p for p in cells if grid.candidates_at(p) & hidden]
            if len(matching) != k:
                continue
            if union_mask(grid, matching) & hidden != hidden:
                # one of the values has nowhere to go; not a pattern
                continue
            if union_mask(grid, matching) == hidden:
                # a naked multiple, reported by the naked search
                continue
            eliminations = {
                p: values_of(grid.candidates_at(p) & ~hidden & FULL_MASK)
                for p in matching
                if grid.candidates_at(p) & ~hidden
            }
            log.debug("hidden %d-tuple %s in %s", k, combo, house)
            return HiddenMultiple(house, matching, combo, eliminations)
    return None


def find_naked_pair(grid: Grid) -> Optional[NakedMultiple]:
    return find_naked_multiple(grid, 2)


def find_naked_triple(grid: Grid) -> Optional[NakedMultiple]:
    return find_naked_multiple(grid, 3)


def find_naked_quadruple(grid: Grid) -> Optional[NakedMultiple]:
    return find_naked_multiple(grid, 4)


def find_hidden_pair(grid: Grid) -> Optional[HiddenMultiple]:
    return find_hidden_multiple(grid, 2)


def find_hidden_triple(grid: Grid) -> Optional[HiddenMultiple]:
    return find_hidden_multiple(grid, 3)


def find_hidden_quadruple(grid: Grid) -> Optional[HiddenMultiple]:
    return find_hidden_multiple(grid, 4)
