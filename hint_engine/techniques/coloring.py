"""Simple coloring (single chains) over conjugate pairs of one value.

A conjugate pair is the only two cells of a house that carry a value as a
candidate. Chaining such pairs and coloring the cells alternately blue and
orange means either every blue cell or every orange cell holds the value.
Two outcomes are reported:

* too crowded house: two cells of one color share a house, so that color is
  false everywhere. The value is eliminated from it and placed in every cell
  of the other color.
* sees both colors: an uncolored cell seeing a blue and an orange cell
  cannot hold the value.

Each result covers one connected chain; crowding is checked before sight.
"""

# coloring.py

from __future__ import annotations

import logging
from typing import Optional

from hint_engine.geometry import ALL_HOUSES, ALL_VALUES, Position, Value
from hint_engine.grid import Grid
from hint_engine.hints import Color, SimpleColoring, TooCrowdedHouse
from hint_engine.techniques.common import candidate_positions

log = logging.getLogger(__name__)

ConjugatePair = tuple[Position, Position]


def find_simple_coloring(grid: Grid) -> Optional[SimpleColoring]:
    if not grid.all_cells_have_value_or_candidates():
        return None
    pairs = _conjugate_pairs(grid)
    for value in ALL_VALUES:
        if pairs[value]:
            hint = _search_value(grid, value, pairs[value])
            if hint is not None:
                return hint
    return None


def _conjugate_pairs(grid: Grid) -> dict[Value, list[ConjugatePair]]:
    pairs: dict[Value, list[ConjugatePair]] = {v: [] for v in ALL_VALUES}
    for house in ALL_HOUSES:
        remaining = house.remaining_values(grid)
        if len(remaining) < 2:
            continue
        for value in remaining:
            positions = candidate_positions(grid, house, value)
            if len(positions) == 2:
                pairs[value].append((positions[0], positions[1]))
    return pairs


def _search_value(grid: Grid, value: Value, pairs: list[ConjugatePair]) -> Optional[SimpleColoring]:
    links: dict[Position, list[Position]] = {}
    for first, second in pairs:
        links.setdefault(first, []).append(second)
        links.setdefault(second, []).append(first)
    visited: set[Position] = set()
    for start in links:
        if start in visited:
            continue
        colors = _color_chain(start, links)
        hint = _too_crowded(value, colors) or _sees_both_colors(grid, value, colors)
        if hint is not None:
            log.debug("simple coloring %s from %s", value, start)
            return hint
        visited.update(colors)
    return None


def _color_chain(start: Position, links: dict[Position, list[Position]]) -> dict[Position, Color]:
    """Depth-first walk from `start`, alternating colors; insertion order is visit order."""
    colors: dict[Position, Color] = {}

    def visit(p: Position, color: Color) -> None:
        colors[p] = color
        for q in links[p]:
            if q not in colors and p.sees(q):
                visit(q, color.next())

    visit(start, Color.BLUE)
    return colors


def _cells_of(colors: dict[Position, Color], color: Color) -> list[Position]:
    return [p for p, c in colors.items() if c is color]


def _build(value: Value, colors: dict[Position, Color], eliminated, crowded=None) -> SimpleColoring:
    return SimpleColoring(
        value,
        _cells_of(colors, Color.BLUE),
        _cells_of(colors, Color.ORANGE),
        eliminated,
        crowded,
    )


def _too_crowded(value: Value, colors: dict[Position, Color]) -> Optional[SimpleColoring]:
    for color in Color:
        houses = set()
        for p in _cells_of(colors, color):
            for house in p.member_of():
                if house in houses:
                    return _build(value, colors, _cells_of(colors, color), TooCrowdedHouse(house, color))
                houses.add(house)
    return None


def _sees_both_colors(grid: Grid, value: Value, colors: dict[Position, Color]) -> Optional[SimpleColoring]:
    blue = _cells_of(colors, Color.BLUE)
    orange = _cells_of(colors, Color.ORANGE)
    if not blue or not orange:
        return None
    targets = [
        p for p in Position.all()
        if p not in colors
        and grid.is_candidate(p, value)
        and any(p.sees(b) for b in blue)
        and any(p.sees(o) for o in orange)
    ]
    if not targets:
        return None
    return _build(value, colors, targets)
