# types_sudoku.py
from __future__ import annotations

from typing import Any, TypedDict

Rows = list[list[int]]
"""A 9x9 Sudoku grid as rows of integers (0 = empty)."""

Candidates = dict[str, list[int]]
"""Map from cell key (e.g., 'r1c1') to a list of candidate digits (1..9)."""


class Explanation(TypedDict, total=False):
    why: str  # one-sentence justification
    units: dict[str, str]  # houses involved, e.g. {'row': 'r1', 'box': 'b3'}


class Move(TypedDict, total=False):
    """A single hint, as consumed by the CLI, the API and the tool functions."""

    index: int  # 1-based order in a solve sequence
    technique: str  # e.g. 'naked_single', 'pointing_pair', 'x_wing'
    name: str  # display name, e.g. 'X-Wing'
    type: str  # 'placement' or 'elimination'
    digit: int  # the digit being placed or eliminated (single-digit hints)
    digits: list[int]  # the digits involved (multi-digit hints)
    cell: str  # for placements, target cell (e.g., 'r4c7')
    place: list[str]  # cells that receive `digit` as a value besides eliminations
    eliminate: list[str]  # for eliminations, list of cells affected
    eliminations: dict[str, list[int]]  # per affected cell, the digits removed
    highlights: dict[str, Any]  # forcing cells and houses for overlay rendering
    explanation: Explanation


class SolvePayload(TypedDict):
    solved: bool
    stop_reason: str
    moves: list[Move]
    current: Rows
    candidates: Candidates
    duration_ms: float
    technique_counts: dict[str, int]
