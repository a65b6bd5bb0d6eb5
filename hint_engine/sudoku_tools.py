"""Tool-friendly interface over plain 9x9 lists: sanity checks, candidates, next hint, full solve.

Inputs and outputs are JSON-ready (lists, dicts, ints, 'r1c2' keys) so the CLI
and the FastAPI wrapper can pass them straight through.
"""

# sudoku_tools.py
# All functions raise ValueError for malformed grids, candidate maps or moves.

from __future__ import annotations

from typing import Any, Dict, Optional

from hint_engine.catalog import find_first_hint
from hint_engine.config import configured_techniques, load_solver_config
from hint_engine.geometry import ALL_HOUSES, Position, Value
from hint_engine.grid import Grid
from hint_engine.grid_solver import GridSolver
from hint_engine.hints import house_key
from hint_engine.types_sudoku import Candidates, Move, Rows, SolvePayload


def _grid(rows: Rows, candidates: Optional[Candidates] = None) -> Grid:
    grid = Grid.from_rows(rows)
    if candidates:
        for key, digits in candidates.items():
            grid.cell_at(Position.from_string(key)).pencil_marks.set_values(Value.of(d) for d in digits)
    grid.show_remaining_candidates()
    return grid


def sanity_check(original: Rows, current: Rows) -> Dict:
    before = Grid.from_rows(original).to_rows()
    after = Grid.from_rows(current).to_rows()
    issues = []
    for p in Position.all():
        given, found = before[p.row - 1][p.column - 1], after[p.row - 1][p.column - 1]
        if given != 0 and found not in (0, given):
            issues.append({"type": "given_overwritten", "cell": str(p), "given": given, "found": found})
    for house in ALL_HOUSES:
        seen, dups = set(), set()
        for p in house.positions():
            v = after[p.row - 1][p.column - 1]
            if v == 0:
                continue
            if v in seen:
                dups.add(v)
            seen.add(v)
        if dups:
            cells = [str(p) for p in house.positions() if after[p.row - 1][p.column - 1] in dups]
            issues.append({"type": "duplicate", "unit": house_key(house), "digits": sorted(dups), "cells": cells})
    return {"ok": len(issues) == 0, "issues": issues}


def compute_candidates_tool(current: Rows) -> Dict:
    """Compute candidate digits for each empty cell in the current grid. Returns a dict like {'r1c2':[1,2,5], ...}."""
    return {"candidates": _grid(current).candidates_map()}


def next_hint(current: Rows, candidates: Optional[Candidates] = None,
              config: Optional[Dict[str, Any]] = None) -> Dict:
    """The first hint, in priority order, for `current`; None when no technique applies.

    `candidates` overrides the computed center marks of the cells it names.
    """
    cfg = load_solver_config(**(config or {}))
    grid = _grid(current, candidates)
    hint = find_first_hint(grid, configured_techniques(cfg))
    return {"hint": hint.to_payload() if hint is not None else None, "candidates": grid.candidates_map()}


def solve_tool(current: Rows, config: Optional[Dict[str, Any]] = None) -> SolvePayload:
    cfg = load_solver_config(**(config or {}))
    solver = GridSolver(_grid(current), techniques=configured_techniques(cfg), max_hints=cfg.max_hints)
    result = solver.solve()
    moves: list[Move] = []
    for i, hint in enumerate(result.hints_applied, start=1):
        move = hint.to_payload()
        move["index"] = i
        moves.append(move)
    return {
        "solved": result.solved,
        "stop_reason": result.stop_reason.value,
        "moves": moves,
        "current": result.grid.to_rows(),
        "candidates": result.grid.candidates_map(),
        "duration_ms": result.duration.total_seconds() * 1000,
        "technique_counts": result.technique_counts(),
    }


def apply_hint_tool(current: Rows, candidates: Optional[Candidates], move: Move) -> Dict:
    """Apply a hint payload (as produced by next_hint) and return the new grid and candidates."""
    grid = _grid(current, candidates)
    digit = move.get("digit")
    eliminations = move.get("eliminations")
    if eliminations is None and digit is not None:
        eliminations = {key: [digit] for key in move.get("eliminate", [])}
    for key, digits in (eliminations or {}).items():
        marks = grid.cell_at(Position.from_string(key)).pencil_marks
        for d in digits:
            marks.remove(Value.of(d))
    placements = list(move.get("place", []))
    if move.get("type") == "placement" and "cell" in move:
        placements.append(move["cell"])
    if placements and digit is None:
        raise ValueError("A placement move needs a digit")
    for key in placements:
        p = Position.from_string(key)
        value = Value.of(digit)
        grid.cell_at(p).set_value(value)
        for q in p.seen_by():
            if not grid.cell_at(q).has_value:
                grid.cell_at(q).pencil_marks.remove(value)
    return {"current": grid.to_rows(), "candidates": grid.candidates_map()}
